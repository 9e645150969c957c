"""Number formatting shared by the table and JSON reports."""

from __future__ import annotations

_UNIT = 1024
_PREFIXES = "KMGTPE"


def format_bytes(n: int) -> str:
    """Human-readable size with a 1024 base: ``512 B``, ``1.5 KB``, ``2.0 MB``."""
    if n < _UNIT:
        return f"{n} B"
    div, exp = _UNIT, 0
    value = n // _UNIT
    while value >= _UNIT and exp < len(_PREFIXES) - 1:
        div *= _UNIT
        exp += 1
        value //= _UNIT
    return f"{n / div:.1f} {_PREFIXES[exp]}B"


def format_duration(seconds: float) -> str:
    """``"<n>ms"`` below one second, ``"<s.sss>s"`` otherwise."""
    if seconds < 1:
        return f"{round(seconds * 1000)}ms"
    return f"{seconds:.3f}s"


def to_ms(seconds: float) -> int:
    return round(seconds * 1000)


def per_second(count: int, seconds: float) -> float:
    """Throughput, zero when nothing was timed."""
    if seconds <= 0:
        return 0.0
    return count / seconds


def per_second_ms(count: int, ms: int) -> float:
    """Throughput from an integer millisecond duration, rounded to 2 decimals."""
    if ms <= 0:
        return 0.0
    return round(count / (ms / 1000), 2)
