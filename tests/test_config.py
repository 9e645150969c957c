"""Tests for root resolution and gqlbench.yaml loading."""

from pathlib import Path

import pytest

from gqlbench.config import (
    BUNDLED_SCHEMA,
    DEFAULT_BUILD_COMMAND,
    GENERATOR_BINARY,
    ROOT_ENV_VAR,
    Settings,
    load_settings,
    locate_generator,
    resolve_root,
)
from gqlbench.errors import ConfigError


class TestResolveRoot:
    def test_explicit(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ROOT_ENV_VAR, "/somewhere/else")
        assert resolve_root(tmp_path) == tmp_path.resolve()

    def test_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ROOT_ENV_VAR, str(tmp_path))
        assert resolve_root() == tmp_path.resolve()

    def test_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(ROOT_ENV_VAR, raising=False)
        monkeypatch.chdir(tmp_path)
        assert resolve_root() == tmp_path.resolve()


class TestLoadSettings:
    def _load(self, root: Path, text: str) -> Settings:
        (root / "gqlbench.yaml").write_text(text)
        return load_settings(root)

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path)
        assert settings.root == tmp_path
        assert settings.generator is None
        assert settings.binary_name == GENERATOR_BINARY
        assert settings.build_command == DEFAULT_BUILD_COMMAND
        assert settings.schema == BUNDLED_SCHEMA
        assert settings.timeout is None
        assert settings.parity_dir == tmp_path / "parity"

    def test_bundled_schema_exists(self) -> None:
        assert BUNDLED_SCHEMA.is_file()

    def test_empty_file(self, tmp_path: Path) -> None:
        assert self._load(tmp_path, "") == Settings(root=tmp_path)

    def test_full(self, tmp_path: Path) -> None:
        settings = self._load(
            tmp_path,
            "generator:\n"
            "  binary: ./bin/graphql-go-gen\n"
            "  build_command: [make, build]\n"
            "schema: testdata/schema.graphql\n"
            "parity_root: /opt/parity\n"
            "timeout: 30\n"
            "notes: kept for later\n",
        )
        assert settings.generator == tmp_path / "bin" / "graphql-go-gen"
        assert settings.build_command == ("make", "build")
        assert settings.schema == tmp_path / "testdata" / "schema.graphql"
        assert settings.parity_dir == Path("/opt/parity")
        assert settings.timeout == 30.0
        assert settings.extra == {"notes": "kept for later"}

    def test_binary_name(self, tmp_path: Path) -> None:
        settings = self._load(tmp_path, "generator:\n  binary: codegen\n")
        assert settings.generator is None
        assert settings.binary_name == "codegen"

    @pytest.mark.parametrize(
        "text",
        [
            "- just\n- a list\n",
            "generator: codegen\n",
            "generator:\n  build_command: make build\n",
            "generator:\n  build_command: []\n",
            "timeout: 0\n",
            "timeout: soon\n",
            "schema: 42\n",
            "schema: [unclosed\n",
        ],
    )
    def test_invalid(self, tmp_path: Path, text: str) -> None:
        with pytest.raises(ConfigError):
            self._load(tmp_path, text)


class TestLocateGenerator:
    def _binary(self, directory: Path) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        binary = directory / GENERATOR_BINARY
        binary.write_text("#!/bin/sh\n")
        binary.chmod(0o755)
        return binary

    @pytest.fixture(autouse=True)
    def _empty_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PATH", str(tmp_path / "empty"))
        monkeypatch.chdir(tmp_path)

    def test_explicit_wins(self, tmp_path: Path) -> None:
        self._binary(tmp_path / "root")
        found = locate_generator(tmp_path / "root", GENERATOR_BINARY, "bin/custom")
        assert found == tmp_path / "bin" / "custom"

    def test_root_before_cwd(self, tmp_path: Path) -> None:
        in_root = self._binary(tmp_path / "root")
        self._binary(tmp_path)
        assert locate_generator(tmp_path / "root", GENERATOR_BINARY) == in_root

    def test_cwd(self, tmp_path: Path) -> None:
        in_cwd = self._binary(tmp_path)
        assert locate_generator(tmp_path / "root", GENERATOR_BINARY) == in_cwd

    def test_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        on_path = self._binary(tmp_path / "path-bin")
        monkeypatch.setenv("PATH", str(on_path.parent))
        assert locate_generator(tmp_path / "root", GENERATOR_BINARY) == on_path

    def test_missing(self, tmp_path: Path) -> None:
        assert locate_generator(tmp_path / "root", GENERATOR_BINARY) is None
