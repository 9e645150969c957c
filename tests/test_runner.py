"""Tests for the benchmark runner against a fake Generator."""

import asyncio
import sys
from collections.abc import Callable
from functools import partial
from pathlib import Path

import pytest
from conftest import GENERATED_TEXT, GeneratorFactory

from gqlbench.config import GENERATED_OUTPUT, GENERATOR_BINARY, Settings
from gqlbench.domain.models import ProcessResult, Scenario
from gqlbench.errors import BuildError, GeneratorNotFoundError
from gqlbench.runner.core import Runner, process_errors
from gqlbench.workloads.scenarios import select_scenarios
from gqlbench.workloads.tiny import TinyWorkload

PY = sys.executable
SettingsFactory = Callable[..., Settings]


@pytest.fixture
def tiny() -> Scenario:
    return select_scenarios("tiny")[0]


def _runner(settings: Settings, **kwargs: object) -> Runner:
    return Runner("out", verbose=False, settings=settings, **kwargs)  # type: ignore[arg-type]


class TestProcessErrors:
    def test_success(self) -> None:
        assert process_errors(ProcessResult(("g",), 0, ""), None) == []

    def test_failure_with_output(self) -> None:
        proc = ProcessResult(("g",), 1, "bad schema\n")
        assert process_errors(proc, None) == [
            "generation failed: exit status 1\nOutput: bad schema"
        ]

    def test_failure_without_output(self) -> None:
        proc = ProcessResult(("g",), 4, "")
        assert process_errors(proc, None) == ["generation failed: exit status 4"]

    def test_cancelled(self) -> None:
        proc = ProcessResult(("g",), None, "", cancelled=True)
        assert process_errors(proc, None) == ["generation cancelled"]

    def test_timed_out(self) -> None:
        proc = ProcessResult(("g",), -15, "", timed_out=True)
        assert process_errors(proc, 2.5) == ["generation timed out after 2.5s"]


class TestRun:
    async def test_success(
        self,
        tmp_path: Path,
        make_generator: GeneratorFactory,
        make_settings: SettingsFactory,
        tiny: Scenario,
    ) -> None:
        runner = _runner(make_settings(generator=make_generator()))
        result = await runner.run(tiny.name, tiny.factory())
        assert result.ok, result.errors
        assert result.name == "tiny-ts"
        assert result.stats.file_count == 53
        assert result.stats.tag_count == 66
        assert result.output_size == len(GENERATED_TEXT)
        assert result.generation_duration > 0
        assert result.setup_duration > 0
        assert result.memory_delta >= 0
        assert runner.output_dir == tmp_path / "out"
        assert not (tmp_path / "out" / "tiny-ts").exists()

    async def test_keep_files(
        self,
        tmp_path: Path,
        make_generator: GeneratorFactory,
        make_settings: SettingsFactory,
        tiny: Scenario,
    ) -> None:
        runner = _runner(make_settings(generator=make_generator()), keep_files=True)
        first = await runner.run(tiny.name, tiny.factory())
        scenario_dir = tmp_path / "out" / "tiny-ts"
        assert (scenario_dir / GENERATED_OUTPUT).is_file()
        files = sorted(p.relative_to(scenario_dir) for p in scenario_dir.rglob("*"))

        second = await runner.run(tiny.name, tiny.factory())
        assert second.stats == first.stats
        assert sorted(p.relative_to(scenario_dir) for p in scenario_dir.rglob("*")) == files

    async def test_generator_failure_is_recorded(
        self,
        tmp_path: Path,
        make_generator: GeneratorFactory,
        make_settings: SettingsFactory,
        tiny: Scenario,
    ) -> None:
        runner = _runner(make_settings(generator=make_generator("fail")))
        result = await runner.run(tiny.name, tiny.factory())
        assert not result.ok
        assert result.errors[0].startswith("generation failed: exit status 2\nOutput: ")
        assert "boom" in result.errors[0]
        assert result.errors[1].startswith("output file not created: ")
        assert result.stats.file_count == 53
        assert not (tmp_path / "out" / "tiny-ts").exists()

    async def test_missing_output(
        self,
        tmp_path: Path,
        make_generator: GeneratorFactory,
        make_settings: SettingsFactory,
        tiny: Scenario,
    ) -> None:
        runner = _runner(make_settings(generator=make_generator("no-output")))
        result = await runner.run(tiny.name, tiny.factory())
        expected = tmp_path / "out" / "tiny-ts" / GENERATED_OUTPUT
        assert result.errors == (f"output file not created: {expected}",)
        assert result.output_size == 0

    async def test_not_executable(
        self, tmp_path: Path, make_settings: SettingsFactory, tiny: Scenario
    ) -> None:
        generator = tmp_path / "graphql-go-gen"
        generator.write_text("not a program")
        runner = _runner(make_settings(generator=generator))
        result = await runner.run(tiny.name, tiny.factory())
        assert result.errors[0] == f"generator not executable: {generator}"
        assert result.generation_duration == 0

    async def test_cancel_mid_generation(
        self,
        tmp_path: Path,
        make_generator: GeneratorFactory,
        make_settings: SettingsFactory,
        tiny: Scenario,
    ) -> None:
        runner = _runner(make_settings(generator=make_generator("sleep")))
        cancel = asyncio.Event()
        asyncio.get_running_loop().call_later(0.5, cancel.set)
        result = await runner.run(tiny.name, tiny.factory(), cancel)
        assert "generation cancelled" in result.errors
        assert not (tmp_path / "out" / "tiny-ts").exists()

    async def test_timeout(
        self,
        make_generator: GeneratorFactory,
        make_settings: SettingsFactory,
        tiny: Scenario,
    ) -> None:
        runner = _runner(make_settings(generator=make_generator("sleep")), timeout=0.5)
        result = await runner.run(tiny.name, tiny.factory())
        assert "generation timed out after 0.5s" in result.errors

    async def test_timeout_from_settings(
        self, make_generator: GeneratorFactory, make_settings: SettingsFactory
    ) -> None:
        runner = _runner(make_settings(generator=make_generator(), timeout=12.0))
        assert runner.timeout == 12.0


class TestRunAll:
    async def test_continues_after_setup_error(
        self,
        tmp_path: Path,
        make_generator: GeneratorFactory,
        make_settings: SettingsFactory,
        tiny: Scenario,
    ) -> None:
        broken = Scenario("broken", partial(TinyWorkload, tmp_path / "missing.graphql"))
        runner = _runner(make_settings(generator=make_generator()))
        results = await runner.run_all(scenarios=[broken, tiny])
        assert [r.name for r in results] == ["broken", "tiny-ts"]
        assert "schema file not found" in results[0].errors[0]
        assert results[1].ok

    async def test_stops_after_cancel(
        self,
        make_generator: GeneratorFactory,
        make_settings: SettingsFactory,
        tiny: Scenario,
    ) -> None:
        runner = _runner(make_settings(generator=make_generator("sleep")))
        cancel = asyncio.Event()
        asyncio.get_running_loop().call_later(0.5, cancel.set)
        results = await runner.run_all(cancel, [tiny, tiny])
        assert len(results) == 1
        assert "generation cancelled" in results[0].errors

    async def test_no_scenarios(
        self, make_generator: GeneratorFactory, make_settings: SettingsFactory
    ) -> None:
        runner = _runner(make_settings(generator=make_generator()))
        assert await runner.run_all(scenarios=[]) == []

    async def test_missing_generator(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        make_settings: SettingsFactory,
    ) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("PATH", str(tmp_path / "empty"))
        runner = _runner(make_settings())
        assert runner.generator is None
        with pytest.raises(GeneratorNotFoundError, match=GENERATOR_BINARY):
            await runner.run_all()


class TestGeneratorDiscovery:
    def test_found_in_root(self, tmp_path: Path, make_settings: SettingsFactory) -> None:
        binary = tmp_path / GENERATOR_BINARY
        binary.write_text("")
        assert _runner(make_settings()).generator == binary

    def test_binary_name_from_settings(
        self, tmp_path: Path, make_settings: SettingsFactory
    ) -> None:
        binary = tmp_path / "codegen"
        binary.write_text("")
        assert _runner(make_settings(binary_name="codegen")).generator == binary

    def test_found_on_path(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        make_settings: SettingsFactory,
    ) -> None:
        bin_dir = tmp_path / "path-bin"
        bin_dir.mkdir()
        binary = bin_dir / GENERATOR_BINARY
        binary.write_text("#!/bin/sh\n")
        binary.chmod(0o755)
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("PATH", str(bin_dir))
        settings = make_settings(root=tmp_path / "elsewhere")
        assert _runner(settings).generator == binary


class TestBuildGenerator:
    async def test_build(self, tmp_path: Path, make_settings: SettingsFactory) -> None:
        command = (PY, "-c", f"open({GENERATOR_BINARY!r}, 'w').close()")
        runner = _runner(make_settings(build_command=command))
        built = await runner.build_generator()
        assert built == tmp_path / GENERATOR_BINARY
        assert built.is_file()
        assert runner.generator == built

    async def test_build_failure(self, make_settings: SettingsFactory) -> None:
        command = (PY, "-c", "import sys; print('compile error'); sys.exit(3)")
        runner = _runner(make_settings(build_command=command))
        with pytest.raises(BuildError, match="exit status 3") as exc_info:
            await runner.build_generator()
        assert "compile error" in str(exc_info.value)

    async def test_build_missing_toolchain(
        self, tmp_path: Path, make_settings: SettingsFactory
    ) -> None:
        runner = _runner(make_settings(build_command=(str(tmp_path / "no-go"), "build")))
        with pytest.raises(BuildError):
            await runner.build_generator()

    async def test_build_cancelled(self, make_settings: SettingsFactory) -> None:
        cancel = asyncio.Event()
        cancel.set()
        runner = _runner(make_settings(build_command=(PY, "-c", "pass")))
        with pytest.raises(BuildError, match="build cancelled"):
            await runner.build_generator(cancel)
