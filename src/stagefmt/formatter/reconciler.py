"""Format one staged file and reconcile the index and working tree.

The staged blob is piped through the formatter. When the output differs,
it is stored as a new blob and the index entry is pointed at it with the
original mode. The working-tree file is never overwritten wholesale: the
delta between the staged blob and the formatted blob is applied to it as a
patch, so edits that were never staged survive. A patch that does not fit
leaves the working-tree file alone and is reported as a conflict; the index
update stands.
"""

from __future__ import annotations

import contextlib
import logging
import threading
from pathlib import Path
from typing import Optional

from stagefmt.config.schema import FormatConfig
from stagefmt.formatter.runner import FormatterError, run_formatter
from stagefmt.git.adapter import (
    PatchConflict,
    apply_patch,
    diff_blobs,
    read_blob,
    update_index,
    write_blob,
)
from stagefmt.git.models import DiffRecord
from stagefmt.results.models import FileResult, Outcome

logger = logging.getLogger(__name__)


def reconcile(
    record: DiffRecord,
    repo_root: Path,
    cfg: FormatConfig,
    *,
    index_lock: Optional[threading.Lock] = None,
) -> FileResult:
    """Run the formatter over the staged content of *record*.

    *index_lock* serialises index and working-tree writes when several
    files are processed at once. GitError from the object database or the
    index propagates; everything else is reported in the FileResult.
    """
    path = record.path
    guard = index_lock if index_lock is not None else contextlib.nullcontext()

    if record.is_symlink:
        return FileResult(path=path, outcome=Outcome.SKIPPED, message="symlink")
    if not record.has_content:
        return FileResult(
            path=path,
            outcome=Outcome.SKIPPED,
            message=f"no staged content (status {record.status.value})",
        )

    original = read_blob(repo_root, record.dst_hash)

    try:
        output = run_formatter(
            cfg.formatter, path, original, cwd=repo_root, timeout=cfg.timeout
        )
    except FormatterError as exc:
        logger.debug("%s: %s", path, exc)
        return FileResult(
            path=path,
            outcome=Outcome.FAILED,
            message=str(exc),
            diagnostics=exc.diagnostics,
        )

    changed = output.stdout != original
    outcome = Outcome.FORMATTED if changed else Outcome.UNCHANGED

    if not cfg.write:
        return FileResult(
            path=path,
            outcome=outcome,
            message="would reformat" if changed else "",
            diagnostics=output.diagnostics,
        )
    if not changed:
        return FileResult(path=path, outcome=outcome, diagnostics=output.diagnostics)

    new_hash = write_blob(repo_root, output.stdout)
    with guard:
        update_index(repo_root, record.dst_mode, new_hash, path)
    logger.info("Reformatted %s with %s", path, cfg.formatter)

    result = FileResult(
        path=path,
        outcome=outcome,
        diagnostics=output.diagnostics,
        written=True,
    )
    if not cfg.update_working_tree:
        return result

    patch = diff_blobs(repo_root, record.dst_hash, new_hash, path)
    with guard:
        try:
            apply_patch(repo_root, patch)
        except PatchConflict as exc:
            logger.warning(
                "Could not apply formatting changes to working tree file %s: %s",
                path,
                exc,
            )
            result.working_tree_conflict = True
            result.message = "index updated; working tree needs manual attention"
    return result
