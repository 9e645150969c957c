"""Named benchmark scenarios and ``--test-set`` resolution."""

from __future__ import annotations

from functools import partial
from pathlib import Path

from gqlbench.domain.models import Scenario
from gqlbench.errors import UnknownTestSetError
from gqlbench.workloads.large import LargeWorkload
from gqlbench.workloads.mid import MidWorkload
from gqlbench.workloads.tiny import TinyWorkload

TINY = "tiny-ts"
MID = "mid-ts"
LARGE = "large-ts"

_ALIASES = {
    "tiny": TINY,
    TINY: TINY,
    "mid": MID,
    MID: MID,
    "large": LARGE,
    LARGE: LARGE,
}


def build_scenarios(schema: Path | None = None) -> dict[str, Scenario]:
    """All known scenarios, keyed by name, in declared order."""
    return {
        TINY: Scenario(TINY, partial(TinyWorkload, schema)),
        MID: Scenario(MID, partial(MidWorkload, schema)),
        LARGE: Scenario(LARGE, partial(LargeWorkload, schema)),
    }


DEFAULT_SCENARIOS: tuple[Scenario, ...] = tuple(
    s for name, s in build_scenarios().items() if name in (TINY, MID)
)


def select_scenarios(test_set: str, schema: Path | None = None) -> list[Scenario]:
    """Resolve a ``--test-set`` value (case-insensitive) to scenarios.

    ``all`` means tiny plus mid; the large tier is only run when named.
    """
    key = test_set.strip().lower()
    scenarios = build_scenarios(schema)
    if key == "all":
        return [scenarios[TINY], scenarios[MID]]
    try:
        return [scenarios[_ALIASES[key]]]
    except KeyError:
        raise UnknownTestSetError(test_set) from None
