"""Per-file and per-run outcome models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class Outcome(str, Enum):
    FORMATTED = "formatted"  # formatter changed the content
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class FileResult:
    """What happened to one staged file."""

    path: str
    outcome: Outcome
    message: str = ""
    diagnostics: str = ""  # formatter stderr
    working_tree_conflict: bool = False
    written: bool = False  # index entry was replaced


@dataclass
class RunResult:
    """Complete result of a formatting run."""

    files: List[FileResult] = field(default_factory=list)
    duration_ms: float = 0.0

    def _with(self, outcome: Outcome) -> List[FileResult]:
        return [f for f in self.files if f.outcome == outcome]

    @property
    def formatted(self) -> List[FileResult]:
        return self._with(Outcome.FORMATTED)

    @property
    def unchanged(self) -> List[FileResult]:
        return self._with(Outcome.UNCHANGED)

    @property
    def skipped(self) -> List[FileResult]:
        return self._with(Outcome.SKIPPED)

    @property
    def failures(self) -> List[FileResult]:
        return self._with(Outcome.FAILED)

    @property
    def conflicts(self) -> List[FileResult]:
        return [f for f in self.files if f.working_tree_conflict]

    @property
    def failed(self) -> bool:
        """True if any file failed; drives the exit code."""
        return any(f.outcome == Outcome.FAILED for f in self.files)
