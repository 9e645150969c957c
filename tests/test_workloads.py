"""Tests for the workload tiers and scenario selection."""

from pathlib import Path

import pytest

from gqlbench.config import GENERATOR_CONFIG_FILE
from gqlbench.domain.models import WorkloadStats
from gqlbench.errors import SetupError, UnknownTestSetError
from gqlbench.fixtures.primitives import count_lines, count_tags
from gqlbench.workloads.base import SCHEMA_FILE
from gqlbench.workloads.large import LargeWorkload
from gqlbench.workloads.mid import MidWorkload
from gqlbench.workloads.scenarios import (
    DEFAULT_SCENARIOS,
    LARGE,
    MID,
    TINY,
    select_scenarios,
)
from gqlbench.workloads.tiny import TinyWorkload


def _tree(directory: Path) -> dict[str, str]:
    return {
        str(p.relative_to(directory)): p.read_text(encoding="utf-8")
        for p in sorted(directory.rglob("*"))
        if p.is_file()
    }


def _disk_stats(directory: Path) -> WorkloadStats:
    """Aggregate of every written file except the uncounted schema copy."""
    stats = WorkloadStats()
    for rel, text in _tree(directory).items():
        if rel != SCHEMA_FILE:
            stats = stats.added(count_tags(text), count_lines(text))
    return stats


class TestTinyWorkload:
    def test_layout(self, tmp_path: Path) -> None:
        TinyWorkload().generate(tmp_path)
        assert (tmp_path / SCHEMA_FILE).is_file()
        assert (tmp_path / GENERATOR_CONFIG_FILE).is_file()
        assert (tmp_path / "src" / "App.tsx").is_file()
        assert (tmp_path / "src" / "components" / "Component30.tsx").is_file()
        assert (tmp_path / "src" / "components" / "index.ts").is_file()
        assert len(list((tmp_path / "src" / "queries").iterdir())) == 10
        assert len(list((tmp_path / "src" / "mutations").iterdir())) == 10

    def test_stats(self, tmp_path: Path) -> None:
        workload = TinyWorkload()
        workload.generate(tmp_path)
        stats = workload.stats
        # 30 components, 10 query files, 10 mutation files, index, App, config
        assert stats.file_count == 53
        # 15 component queries + 10 component mutations + 20 + 20 + App
        assert stats.tag_count == 66
        assert stats == _disk_stats(tmp_path)

    def test_deterministic(self, tmp_path: Path) -> None:
        TinyWorkload().generate(tmp_path / "a")
        TinyWorkload().generate(tmp_path / "b")
        assert _tree(tmp_path / "a") == _tree(tmp_path / "b")

    def test_seed_changes_tree(self, tmp_path: Path) -> None:
        TinyWorkload(seed=42).generate(tmp_path / "a")
        TinyWorkload(seed=7).generate(tmp_path / "b")
        assert _tree(tmp_path / "a") != _tree(tmp_path / "b")

    def test_config_file(self, tmp_path: Path) -> None:
        TinyWorkload().generate(tmp_path)
        config = (tmp_path / GENERATOR_CONFIG_FILE).read_text()
        assert "  - path: ./schema.graphql" in config
        assert "./src/generated/graphql.ts:" in config
        assert '- "./src/**/*.test.{ts,tsx}"' in config
        assert "spec" not in config
        for plugin in ("typescript", "typescript-operations", "typed-document-node"):
            assert f"      - {plugin}\n" in config

    def test_custom_schema_is_copied(self, tmp_path: Path) -> None:
        schema = tmp_path / "custom.graphql"
        schema.write_text("type Query { ok: Boolean }\n")
        TinyWorkload(schema).generate(tmp_path / "out")
        assert (tmp_path / "out" / SCHEMA_FILE).read_text() == schema.read_text()

    def test_missing_schema(self, tmp_path: Path) -> None:
        with pytest.raises(SetupError, match="schema file not found"):
            TinyWorkload(tmp_path / "missing.graphql").generate(tmp_path / "out")


class TestMidWorkload:
    def test_stats_match_tree(self, tmp_path: Path) -> None:
        workload = MidWorkload()
        workload.generate(tmp_path)
        stats = workload.stats
        # 10 modules x (150 + 20 + 15 + 10 + index) + 50 + 30 + 40 + 30 + App + config
        assert stats.file_count == 2112
        assert stats == _disk_stats(tmp_path)

    def test_module_layout(self, tmp_path: Path) -> None:
        MidWorkload().generate(tmp_path)
        auth = tmp_path / "src" / "modules" / "auth"
        assert len(list((auth / "components").iterdir())) == 150
        assert len(list((auth / "services").iterdir())) == 20
        assert len(list((auth / "hooks").iterdir())) == 15
        assert len(list((auth / "utils").iterdir())) == 10
        assert (auth / "index.ts").is_file()
        assert not (tmp_path / "src" / "graphql" / "subscriptions").exists()

    def test_config_excludes_specs(self, tmp_path: Path) -> None:
        MidWorkload().generate(tmp_path)
        config = (tmp_path / GENERATOR_CONFIG_FILE).read_text()
        assert '- "./src/**/*.spec.{ts,tsx}"' in config
        assert "stories" not in config

    def test_deterministic(self, tmp_path: Path) -> None:
        first, second = MidWorkload(), MidWorkload()
        first.generate(tmp_path / "a")
        second.generate(tmp_path / "b")
        assert first.stats == second.stats
        assert _tree(tmp_path / "a") == _tree(tmp_path / "b")


@pytest.mark.slow
class TestLargeWorkload:
    def test_stats_match_tree(self, tmp_path: Path) -> None:
        workload = LargeWorkload()
        workload.generate(tmp_path)
        stats = workload.stats
        assert stats.file_count == 20656
        assert stats == _disk_stats(tmp_path)
        for entry in ("Admin", "Customer", "Vendor", "Public"):
            assert (tmp_path / "src" / f"{entry}App.tsx").is_file()
        assert len(list((tmp_path / "src" / "graphql" / "subscriptions").iterdir())) == 50
        config = (tmp_path / GENERATOR_CONFIG_FILE).read_text()
        assert '- "./src/**/*.stories.{ts,tsx}"' in config

        service = tmp_path / "src" / "modules" / "auth" / "services" / "AuthService1.ts"
        assert "stats { postCount" in service.read_text()
        app = (tmp_path / "src" / "App.tsx").read_text()
        assert '<a href="/migrations" className="sidebar-link">Migrations</a>' in app


class TestEnterpriseFiles:
    def test_service_uses_detailed_query(self) -> None:
        large = LargeWorkload().module_service("AuthService1", "auth")
        mid = MidWorkload().module_service("AuthService1", "auth")
        assert "stats { postCount" in large
        assert "stats { postCount" not in mid
        assert "this.clearCache();" in large

    def test_hook_consumes_no_draw(self) -> None:
        workload = LargeWorkload()
        state = workload.rng.getstate()
        hook = workload.module_hook("useAuth1", "auth")
        assert workload.rng.getstate() == state
        assert "stats { postCount" in hook
        assert "): useAuth1Result {" in hook

    def test_mid_hook_draws_complexity(self) -> None:
        workload = MidWorkload()
        state = workload.rng.getstate()
        workload.module_hook("useAuth1", "auth")
        assert workload.rng.getstate() != state

    def test_shared_component_and_fragments(self) -> None:
        workload = LargeWorkload()
        shared = workload.shared_component("SharedButton1")
        assert "extends HTMLAttributes<HTMLDivElement>" in shared
        assert count_tags(shared) == 1
        fragments = workload.fragment_file("Fragment1")
        assert "parentComment {" in fragments
        assert count_tags(fragments) == 4

    def test_app_links_every_module(self) -> None:
        app = LargeWorkload().app_file()
        modules = LargeWorkload.modules
        assert app.count('className="sidebar-link"') == len(modules)
        assert app.count('className="module-card"') == 12
        assert f"{len(modules)} modules loaded" in app


class TestScenarios:
    def test_default_scenarios(self) -> None:
        assert [s.name for s in DEFAULT_SCENARIOS] == [TINY, MID]

    @pytest.mark.parametrize(
        ("test_set", "expected"),
        [
            ("tiny", [TINY]),
            ("tiny-ts", [TINY]),
            ("MID", [MID]),
            ("mid-ts", [MID]),
            ("large", [LARGE]),
            ("all", [TINY, MID]),
            ("All", [TINY, MID]),
        ],
    )
    def test_select(self, test_set: str, expected: list[str]) -> None:
        assert [s.name for s in select_scenarios(test_set)] == expected

    def test_unknown(self) -> None:
        with pytest.raises(UnknownTestSetError) as exc_info:
            select_scenarios("bogus")
        assert str(exc_info.value) == "unknown test set: bogus (use tiny, mid, large, or all)"
        assert isinstance(exc_info.value, ValueError)

    def test_factory_builds_fresh_workloads(self, tmp_path: Path) -> None:
        schema = tmp_path / "schema.graphql"
        schema.write_text("type Query { ok: Boolean }\n")
        (scenario,) = select_scenarios("tiny", schema)
        first, second = scenario.factory(), scenario.factory()
        assert first is not second
        assert isinstance(first, TinyWorkload)
        assert first.schema == schema
