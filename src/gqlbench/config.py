"""
gqlbench/config.py: Path constants, settings file and root resolution.

All path constants and harness settings live here. Relative paths are
resolved against the repository root, which comes from ``--root``, then the
``GQLBENCH_ROOT`` environment variable, then the current directory.
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from gqlbench.errors import ConfigError

# ---------------------------------------------------------------------------
# Generator contract
# ---------------------------------------------------------------------------

GENERATOR_BINARY = "graphql-go-gen"
GENERATOR_CONFIG_FILE = "graphql-go-gen.yaml"
GENERATED_OUTPUT = Path("src") / "generated" / "graphql.ts"
DEFAULT_BUILD_COMMAND = ("go", "build", "-o", GENERATOR_BINARY, "./cmd/graphql-go-gen")

# ---------------------------------------------------------------------------
# Harness settings
# ---------------------------------------------------------------------------

DEFAULT_SEED = 42
DEFAULT_OUTPUT_DIR = "benchmark-output"
SETTINGS_FILE = "gqlbench.yaml"
ROOT_ENV_VAR = "GQLBENCH_ROOT"
LOG_DIR = ".gqlbench"
LOG_FILE = "gqlbench.log"
PARITY_DIR = "parity"

# Grace period between terminate() and kill() for a cancelled child
TERMINATE_GRACE_SECONDS = 5.0

BUNDLED_SCHEMA = Path(__file__).parent / "workloads" / "testdata" / "schema.graphql"


def resolve_root(explicit: str | Path | None = None) -> Path:
    """Return the repository root used for relative path resolution."""
    if explicit:
        return Path(explicit).expanduser().resolve()
    env_root = os.environ.get(ROOT_ENV_VAR)
    if env_root:
        return Path(env_root).expanduser().resolve()
    return Path.cwd().resolve()


def locate_generator(root: Path, binary: str, explicit: str | Path | None = None) -> Path | None:
    """Find the Generator binary, or None when it is nowhere to be found.

    Order: *explicit*, then ``<root>/<binary>``, then ``<cwd>/<binary>``, then PATH.
    """
    if explicit:
        return Path(explicit).expanduser().absolute()
    for candidate in (root / binary, Path.cwd() / binary):
        if candidate.is_file():
            return candidate.absolute()
    found = shutil.which(binary)
    return Path(found).absolute() if found else None


def logs_dir(root: Path) -> Path:
    """Return the log directory path for a repository root."""
    return root / LOG_DIR


def settings_file(root: Path) -> Path:
    """Return the gqlbench.yaml path."""
    return root / SETTINGS_FILE


@dataclass(frozen=True)
class Settings:
    """Harness settings, optionally overridden by gqlbench.yaml."""

    root: Path
    generator: Path | None = None
    binary_name: str = GENERATOR_BINARY
    build_command: tuple[str, ...] = DEFAULT_BUILD_COMMAND
    schema: Path = BUNDLED_SCHEMA
    parity_root: Path | None = None
    timeout: float | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def parity_dir(self) -> Path:
        return self.parity_root or self.root / PARITY_DIR


def _resolve(root: Path, value: Any, key: str) -> Path:
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{key} must be a non-empty string")
    path = Path(value).expanduser()
    return path if path.is_absolute() else root / path


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    raw = data.get(key) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{key} must be a mapping")
    return raw


def load_settings(root: Path) -> Settings:
    """Load settings from <root>/gqlbench.yaml, falling back to defaults."""
    sf = settings_file(root)
    if not sf.exists():
        return Settings(root=root)

    try:
        data = yaml.safe_load(sf.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot read {sf}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{sf} must contain a mapping")

    kwargs: dict[str, Any] = {"root": root}
    gen = _section(data, "generator")
    if "binary" in gen:
        binary = str(gen["binary"])
        if os.sep in binary or "/" in binary:
            kwargs["generator"] = _resolve(root, binary, "generator.binary")
        else:
            kwargs["binary_name"] = binary
    if "build_command" in gen:
        cmd = gen["build_command"]
        if not isinstance(cmd, list) or not cmd or not all(isinstance(c, str) for c in cmd):
            raise ConfigError("generator.build_command must be a list of strings")
        kwargs["build_command"] = tuple(cmd)

    if "schema" in data:
        kwargs["schema"] = _resolve(root, data["schema"], "schema")
    if "parity_root" in data:
        kwargs["parity_root"] = _resolve(root, data["parity_root"], "parity_root")
    if data.get("timeout") is not None:
        timeout = data["timeout"]
        if not isinstance(timeout, int | float) or timeout <= 0:
            raise ConfigError("timeout must be a positive number of seconds")
        kwargs["timeout"] = float(timeout)

    known = {"generator", "schema", "parity_root", "timeout"}
    kwargs["extra"] = {k: v for k, v in data.items() if k not in known}
    return Settings(**kwargs)
