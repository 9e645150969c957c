"""Common workload lifecycle: schema copy, sources, generator config."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from gqlbench.config import BUNDLED_SCHEMA, DEFAULT_SEED, GENERATOR_CONFIG_FILE
from gqlbench.errors import SetupError
from gqlbench.fixtures.primitives import FixtureSource
from gqlbench.workloads.templates import TEST_EXCLUDE, config_file

logger = logging.getLogger(__name__)

SCHEMA_FILE = "schema.graphql"


class Workload(FixtureSource):
    """A synthetic project tree. Subclasses implement ``write_sources``.

    Each instance owns its own PRNG; build a new instance for every run.
    """

    name = "workload"
    exclude: tuple[str, ...] = (TEST_EXCLUDE,)

    def __init__(self, schema: Path | None = None, seed: int = DEFAULT_SEED) -> None:
        super().__init__(seed)
        self.schema = schema or BUNDLED_SCHEMA

    def generate(self, directory: Path) -> None:
        """Write schema, sources and the generator config into *directory*."""
        logger.info("Generating %s workload into %s", self.name, directory)
        self.copy_schema(directory)
        self.write_sources(directory / "src")
        self.write_file(directory / GENERATOR_CONFIG_FILE, config_file(self.exclude))
        stats = self.stats
        logger.info(
            "%s: %d files, %d tags, %d lines",
            self.name,
            stats.file_count,
            stats.tag_count,
            stats.total_loc,
        )

    def write_sources(self, src: Path) -> None:
        raise NotImplementedError

    def copy_schema(self, directory: Path) -> None:
        """Copy the schema into the tree. Not counted in the stats."""
        if not self.schema.is_file():
            raise SetupError(f"schema file not found: {self.schema}")
        try:
            directory.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(self.schema, directory / SCHEMA_FILE)
        except OSError as exc:
            raise SetupError(f"failed to copy schema {self.schema}: {exc}") from exc
