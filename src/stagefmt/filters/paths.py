"""Resolve repository-relative paths from diff records."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


def normalize_path(relative_path: str, repo_root: Optional[Path] = None) -> Path:
    """Join *relative_path* onto *repo_root*; use it as-is without a root.

    Purely lexical: nothing is resolved or checked on disk.
    """
    if repo_root is None:
        return Path(relative_path)
    return Path(repo_root) / relative_path
