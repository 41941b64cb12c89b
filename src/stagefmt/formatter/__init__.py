"""Formatter pipeline — subprocess runner, per-file reconciler, batch driver."""

from stagefmt.formatter.engine import format_staged_files
from stagefmt.formatter.reconciler import reconcile
from stagefmt.formatter.runner import FormatterError, FormatterOutput, run_formatter

__all__ = [
    "FormatterError",
    "FormatterOutput",
    "format_staged_files",
    "reconcile",
    "run_formatter",
]
