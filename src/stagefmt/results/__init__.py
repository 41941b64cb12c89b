"""Outcome models for formatting runs."""

from stagefmt.results.models import FileResult, Outcome, RunResult

__all__ = ["FileResult", "Outcome", "RunResult"]
