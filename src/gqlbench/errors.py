"""Exception types raised by the harness.

Subprocess failures of the Generator are not exceptions: they are recorded
on the scenario result. Only failures that abort a scenario (or the whole
run) are raised.
"""

from __future__ import annotations


class HarnessError(RuntimeError):
    """Base class for all harness failures."""


class ConfigError(HarnessError):
    """Raised when gqlbench.yaml cannot be read or has the wrong shape."""


class SetupError(HarnessError):
    """Raised when a scenario directory or its schema cannot be prepared."""


class WorkloadError(HarnessError):
    """Raised when a workload generator fails to write its tree."""


class BuildError(HarnessError):
    """Raised when compiling the Generator fails."""


class GeneratorNotFoundError(HarnessError):
    """Raised when no Generator binary is available."""


class UnknownTestSetError(HarnessError, ValueError):
    """Raised for an unrecognised --test-set value."""

    def __init__(self, test_set: str) -> None:
        super().__init__(f"unknown test set: {test_set} (use tiny, mid, large, or all)")
        self.test_set = test_set
