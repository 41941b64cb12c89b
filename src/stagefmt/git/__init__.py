"""Git interface layer — adapter, diff-index parsing, models."""

from stagefmt.git.adapter import (
    GitError,
    PatchConflict,
    apply_patch,
    diff_blobs,
    get_hooks_dir,
    get_repo_root,
    get_staged_records_text,
    read_blob,
    update_index,
    write_blob,
)
from stagefmt.git.diff_parser import ParseError, parse_diff_index, parse_diff_line
from stagefmt.git.models import DiffRecord, DiffStatus
from stagefmt.git.quoting import quote_path, unquote_path

__all__ = [
    "DiffRecord",
    "DiffStatus",
    "GitError",
    "ParseError",
    "PatchConflict",
    "apply_patch",
    "diff_blobs",
    "get_hooks_dir",
    "get_repo_root",
    "get_staged_records_text",
    "parse_diff_index",
    "parse_diff_line",
    "quote_path",
    "read_blob",
    "unquote_path",
    "update_index",
    "write_blob",
]
