"""Whitespace normalization and line diffs for golden-file comparison."""

from __future__ import annotations

import json

from gqlbench.domain.models import DiffReport, LineDiff

DIFF_LIMIT = 10


def normalize(text: str) -> str:
    """Strip trailing blanks per line and end with exactly one newline.

    ``normalize(normalize(x)) == normalize(x)`` for every input.
    """
    lines = [line.rstrip(" \t\r") for line in text.split("\n")]
    return "\n".join(lines).rstrip("\n") + "\n"


def diff_lines(expected: str, actual: str, limit: int = DIFF_LIMIT) -> DiffReport:
    """First *limit* differing lines. Missing lines compare as empty strings."""
    expected_lines = expected.split("\n")
    actual_lines = actual.split("\n")
    differences: list[LineDiff] = []
    truncated = False

    for i in range(max(len(expected_lines), len(actual_lines))):
        exp = expected_lines[i] if i < len(expected_lines) else ""
        act = actual_lines[i] if i < len(actual_lines) else ""
        if exp == act:
            continue
        if len(differences) >= limit:
            truncated = True
            break
        differences.append(LineDiff(line=i + 1, expected=exp, actual=act))

    return DiffReport(
        differences=tuple(differences),
        expected_lines=len(expected_lines),
        actual_lines=len(actual_lines),
        truncated=truncated,
    )


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def format_diff(report: DiffReport, limit: int = DIFF_LIMIT) -> str:
    lines: list[str] = []
    for diff in report.differences:
        lines += [
            f"Line {diff.line} differs:",
            f"  Expected: {_quote(diff.expected)}",
            f"  Actual:   {_quote(diff.actual)}",
        ]
    if report.truncated:
        lines.append(f"... and more differences (showing first {limit})")
    lines.append(f"Expected {report.expected_lines} lines, got {report.actual_lines} lines")
    return "\n".join(lines)
