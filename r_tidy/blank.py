"""Record and restore the blank lines at the edges of a source file."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BlankRuns:
    leading: int = 0
    trailing: int = 0


def record_blank_runs(text: str) -> BlankRuns:
    """Count the newlines at the very start and the very end of `text`."""
    if not text.strip("\n"):
        return BlankRuns(leading=len(text), trailing=0)
    return BlankRuns(
        leading=len(text) - len(text.lstrip("\n")),
        trailing=len(text) - len(text.rstrip("\n")),
    )


def restore_blank_runs(lines: list[str], runs: BlankRuns) -> list[str]:
    return [""] * runs.leading + lines + [""] * runs.trailing


__all__ = ["BlankRuns", "record_blank_runs", "restore_blank_runs"]
