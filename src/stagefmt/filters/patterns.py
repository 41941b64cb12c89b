"""Signed glob patterns with last-match-wins semantics.

Patterns are shell globs (``*``, ``?``, ``[...]``) matched with
:func:`fnmatch.fnmatchcase` against the full path string, so ``*`` also
crosses directory separators. A leading ``!`` turns a pattern into an
exclusion. Patterns are checked left to right and the last one that matches
decides; a path that matches nothing is excluded.
"""

from __future__ import annotations

import glob
import logging
import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, List, Optional, Union

logger = logging.getLogger(__name__)


class PatternError(Exception):
    """Raised for a syntactically invalid pattern."""


@dataclass(frozen=True)
class SignedPattern:
    is_include: bool
    pattern: str

    def matches(self, path_str: str) -> bool:
        return fnmatchcase(path_str, self.pattern)

    def __str__(self) -> str:
        return self.pattern if self.is_include else f"!{self.pattern}"


def _check_syntax(raw: str, glob_text: str) -> None:
    if not glob_text:
        raise PatternError(f"Empty pattern: {raw!r}")

    idx = 0
    while idx < len(glob_text):
        if glob_text[idx] == "[":
            end = idx + 1
            if end < len(glob_text) and glob_text[end] == "!":
                end += 1
            if end < len(glob_text) and glob_text[end] == "]":
                end += 1  # leading ']' is a class member
            end = glob_text.find("]", end)
            if end == -1:
                raise PatternError(
                    f"Unterminated character class in pattern {raw!r} at offset {idx}"
                )
            idx = end
        idx += 1


def parse_pattern(text: str, base: Optional[Path] = None) -> SignedPattern:
    """Parse one user pattern.

    With *base*, relative globs are anchored to that directory and
    normalised, so they line up with absolute candidate paths.
    """
    is_include = not text.startswith("!")
    glob_text = text if is_include else text[1:]
    _check_syntax(text, glob_text)

    if base is not None:
        glob_text = os.path.normpath(os.path.join(glob.escape(str(base)), glob_text))
    return SignedPattern(is_include=is_include, pattern=glob_text)


def rebase_pattern(text: str, from_dir: Path, to_dir: Path) -> str:
    """Rewrite a pattern written relative to *from_dir* so it selects the
    same paths when read relative to *to_dir*. The sign is kept.
    """
    is_include = not text.startswith("!")
    glob_text = text if is_include else text[1:]
    _check_syntax(text, glob_text)

    rel_dir = os.path.relpath(from_dir, to_dir)
    if rel_dir != "." and not os.path.isabs(glob_text):
        glob_text = os.path.normpath(os.path.join(glob.escape(rel_dir), glob_text))
    return glob_text if is_include else f"!{glob_text}"


def parse_patterns(texts: Iterable[str], base: Optional[Path] = None) -> List[SignedPattern]:
    return [parse_pattern(t, base) for t in texts]


def matches_some_path(patterns: List[SignedPattern], path: Union[str, Path]) -> bool:
    """Return True if the last pattern matching *path* is an include."""
    path_str = str(path)
    try:
        path_str.encode("utf-8")
    except UnicodeEncodeError:
        logger.warning("Path is not valid text, skipping: %r", path_str)
        return False

    is_match = False
    for signed in patterns:
        if signed.matches(path_str):
            is_match = signed.is_include
    return is_match
