"""Configuration parity: run each config variant and compare with its golden file.

Layout of a parity tree::

    <root>/configs/<plugin>/<name>.ts     one variant per file
    <root>/__generated__/...              Generator output (see output_path_for)
    <root>/golden/...                     reference output, same relative paths
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from gqlbench.console import console
from gqlbench.domain.models import ParityCase, ParityOutcome, ParityResult
from gqlbench.parity.normalize import diff_lines, normalize
from gqlbench.runner.process import run_process

logger = logging.getLogger(__name__)

CONFIGS_DIR = "configs"
GENERATED_DIR = "__generated__"
GOLDEN_DIR = "golden"

SCHEMA_AST_PLUGIN = "schema-ast"
# Plugins whose target is a directory; the Generator writes a fixed file into it
DIRECTORY_PLUGINS = {"fragment-masking": "fragment-masking.ts"}

CONFIG_ERROR_MARKERS = ("parse", "config", "invalid")


def _relative_output(plugin: str, name: str) -> Path:
    if plugin in DIRECTORY_PLUGINS:
        return Path(plugin) / DIRECTORY_PLUGINS[plugin]
    if plugin == SCHEMA_AST_PLUGIN:
        return Path(plugin) / f"{name}.graphql"
    return Path(plugin) / f"{name}.ts"


def output_path_for(root: Path, plugin: str, name: str) -> Path:
    """Where the Generator writes the output of ``configs/<plugin>/<name>.ts``."""
    return root / GENERATED_DIR / _relative_output(plugin, name)


def golden_path_for(root: Path, plugin: str, name: str) -> Path:
    if plugin in DIRECTORY_PLUGINS:
        return root / GOLDEN_DIR / plugin / f"{name}.ts"
    return root / GOLDEN_DIR / _relative_output(plugin, name)


def discover(root: Path) -> list[ParityCase]:
    """Every ``configs/<plugin>/*.ts`` under *root*, sorted by (plugin, name)."""
    configs = root / CONFIGS_DIR
    if not configs.is_dir():
        logger.warning("No parity configs under %s", configs)
        return []
    cases = [
        ParityCase(
            plugin=plugin_dir.name,
            name=config.stem,
            config_path=config,
            expected_output_path=output_path_for(root, plugin_dir.name, config.stem),
            golden_path=golden_path_for(root, plugin_dir.name, config.stem),
        )
        for plugin_dir in configs.iterdir()
        if plugin_dir.is_dir()
        for config in plugin_dir.glob("*.ts")
        if config.is_file()
    ]
    return sorted(cases, key=lambda c: (c.plugin, c.name))


class ParityDriver:
    """Runs the Generator for each parity case and classifies the outcome."""

    def __init__(
        self,
        root: Path,
        generator: Path,
        *,
        cancel: asyncio.Event | None = None,
        verbose: bool = True,
    ) -> None:
        self.root = root
        self.generator = generator
        self.cancel = cancel
        self.verbose = verbose

    def discover(self) -> list[ParityCase]:
        return discover(self.root)

    def _config_arg(self, case: ParityCase) -> str:
        try:
            return str(case.config_path.relative_to(self.root))
        except ValueError:
            return str(case.config_path)

    async def run_case(self, case: ParityCase) -> ParityResult:
        output = case.expected_output_path
        output_dir = output.parent
        output_dir.mkdir(parents=True, exist_ok=True)
        # A leftover file from an earlier run must not pass for fresh output
        output.unlink(missing_ok=True)

        argv = [str(self.generator), "generate", "-c", self._config_arg(case)]
        logger.info("Running %s", " ".join(argv))
        try:
            proc = await run_process(argv, cwd=self.root, cancel=self.cancel, merge_stderr=False)
        except OSError as exc:
            return ParityResult(
                case, ParityOutcome.FAILED, f"failed to run {self.generator}: {exc}"
            )

        if proc.cancelled:
            return ParityResult(case, ParityOutcome.FAILED, "cancelled")
        if proc.exit_code != 0:
            return ParityResult(
                case,
                ParityOutcome.FAILED,
                f"exit status {proc.exit_code}",
                stdout=proc.output,
                stderr=proc.stderr,
            )
        if not output.is_file():
            return ParityResult(
                case,
                ParityOutcome.NO_OUTPUT,
                f"expected output {output} was not created (may need additional flags)",
                stdout=proc.output,
                stderr=proc.stderr,
            )

        generated = normalize(output.read_text(encoding="utf-8"))
        if not case.golden_path.is_file():
            return ParityResult(
                case,
                ParityOutcome.GENERATED_ONLY,
                f"generated {output.stat().st_size} bytes, no golden file",
            )

        expected = normalize(case.golden_path.read_text(encoding="utf-8"))
        if generated == expected:
            return ParityResult(case, ParityOutcome.MATCH, "generated output matches golden")
        return ParityResult(
            case,
            ParityOutcome.MISMATCH,
            "generated output does not match golden",
            diff=diff_lines(expected, generated),
        )

    async def run_all(self, cases: list[ParityCase] | None = None) -> list[ParityResult]:
        cases = self.discover() if cases is None else cases
        results: list[ParityResult] = []
        for i, case in enumerate(cases, start=1):
            if self.cancel is not None and self.cancel.is_set():
                break
            if self.verbose:
                console.step(i, len(cases), case.label)
            result = await self.run_case(case)
            logger.info("%s: %s %s", case.label, result.outcome.value, result.message)
            results.append(result)
        return results

    async def check_config(self, case: ParityCase) -> tuple[bool, str]:
        """Whether the Generator accepts the config file at all.

        Only failures whose stderr mentions parsing, config or invalid input
        count; anything else (missing documents, output errors) is tolerated.
        """
        argv = [str(self.generator), "generate", "-c", self._config_arg(case), "-q"]
        try:
            proc = await run_process(argv, cwd=self.root, cancel=self.cancel, merge_stderr=False)
        except OSError as exc:
            return False, f"failed to run {self.generator}: {exc}"
        if proc.exit_code == 0:
            return True, ""
        stderr = proc.stderr.lower()
        if any(marker in stderr for marker in CONFIG_ERROR_MARKERS):
            return False, f"failed to parse {case.config_path.name}: {proc.stderr.strip()}"
        logger.debug("%s: tolerated exit %s: %s", case.label, proc.exit_code, proc.stderr)
        return True, f"exit status {proc.exit_code} (not a config error)"
