"""Path selection — normalisation and signed glob patterns."""

from stagefmt.filters.paths import normalize_path
from stagefmt.filters.patterns import (
    PatternError,
    SignedPattern,
    matches_some_path,
    parse_pattern,
    parse_patterns,
    rebase_pattern,
)

__all__ = [
    "PatternError",
    "SignedPattern",
    "matches_some_path",
    "normalize_path",
    "parse_pattern",
    "parse_patterns",
    "rebase_pattern",
]
