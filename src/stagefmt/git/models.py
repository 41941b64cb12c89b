"""Data models for raw diff-index records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

SYMLINK_MODE = "120000"
ZERO_MODE = "000000"
ZERO_HASH = "0" * 40


class DiffStatus(str, Enum):
    ADDED = "A"
    COPIED = "C"
    DELETED = "D"
    MODIFIED = "M"
    RENAMED = "R"
    TYPE_CHANGED = "T"
    UNMERGED = "U"
    UNKNOWN = "X"
    BROKEN = "B"  # pairing broken


@dataclass(frozen=True)
class DiffRecord:
    """One line of ``git diff-index`` raw output.

    Fields hold exactly what git printed; the all-zero mode and hash values
    mean "absent" (new file, deleted file, or not yet hashed).
    """

    src_mode: str
    dst_mode: str
    src_hash: str
    dst_hash: str
    status: DiffStatus
    score: Optional[int]
    src_path: str
    dst_path: str = ""  # set on renames and copies

    @property
    def path(self) -> str:
        """Path the staged content lives at."""
        return self.dst_path or self.src_path

    @property
    def is_symlink(self) -> bool:
        return self.dst_mode == SYMLINK_MODE

    @property
    def has_content(self) -> bool:
        """True when there is a staged blob to format."""
        return (
            self.status in (DiffStatus.ADDED, DiffStatus.MODIFIED)
            and self.dst_hash != ZERO_HASH
            and self.dst_mode != ZERO_MODE
        )
