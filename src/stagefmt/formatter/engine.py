"""Batch driver — list staged files, select them, reconcile each one.

A failure in one file never stops the run: every selected file is
attempted once and the outcomes are collected in a RunResult. Git errors
(no repository, broken object database) and malformed diff-index output
abort the whole run.
"""

from __future__ import annotations

import logging
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List

from stagefmt.config.schema import FormatConfig
from stagefmt.filters.paths import normalize_path
from stagefmt.filters.patterns import SignedPattern, matches_some_path
from stagefmt.formatter.reconciler import reconcile
from stagefmt.git.adapter import get_staged_records_text
from stagefmt.git.diff_parser import parse_diff_index
from stagefmt.git.models import DiffRecord
from stagefmt.results.models import FileResult, Outcome, RunResult

logger = logging.getLogger(__name__)


def resolve_worker_count(jobs: int, item_count: int) -> int:
    if item_count <= 1:
        return 1
    if jobs > 0:
        return min(jobs, item_count)
    return max(1, min(os.cpu_count() or 1, item_count))


def select_records(
    records: List[DiffRecord],
    patterns: List[SignedPattern],
    repo_root: Path,
) -> tuple[List[DiffRecord], List[FileResult]]:
    """Split *records* into format candidates and skipped symlinks.

    Records that no pattern selects are dropped silently.
    """
    candidates: List[DiffRecord] = []
    skipped: List[FileResult] = []
    for record in records:
        entry_path = normalize_path(record.path, repo_root)
        if record.is_symlink:
            logger.debug("Skipping symlink: %s", entry_path)
            skipped.append(FileResult(path=record.path, outcome=Outcome.SKIPPED, message="symlink"))
            continue
        if not matches_some_path(patterns, entry_path):
            continue
        candidates.append(record)
    return candidates, skipped


def format_staged_files(
    patterns: List[SignedPattern],
    cfg: FormatConfig,
    repo_root: Path,
) -> RunResult:
    """Format every staged addition or modification selected by *patterns*."""
    start = time.perf_counter()

    records = list(parse_diff_index(get_staged_records_text(repo_root)))
    candidates, skipped = select_records(records, patterns, repo_root)
    logger.debug(
        "%d staged file(s), %d selected for formatting", len(records), len(candidates)
    )

    index_lock = threading.Lock()
    workers = resolve_worker_count(cfg.jobs, len(candidates))

    def _one(record: DiffRecord) -> FileResult:
        logger.debug("Formatting %s", record.path)
        return reconcile(record, repo_root, cfg, index_lock=index_lock)

    if workers == 1:
        processed = [_one(r) for r in candidates]
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            processed = list(pool.map(_one, candidates))

    result = RunResult(files=skipped + processed)
    result.duration_ms = (time.perf_counter() - start) * 1000
    return result
