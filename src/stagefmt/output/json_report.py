"""JSON reporter for scripts and CI pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from stagefmt.results.models import RunResult


def to_dict(result: RunResult) -> Dict[str, Any]:
    """Convert RunResult to a JSON-serialisable dict."""
    files: List[Dict[str, Any]] = []
    for f in result.files:
        files.append({
            "path": f.path,
            "outcome": f.outcome.value,
            "written": f.written,
            "working_tree_conflict": f.working_tree_conflict,
            **({"message": f.message} if f.message else {}),
            **({"diagnostics": f.diagnostics} if f.diagnostics else {}),
        })

    return {
        "version": "1.0",
        "failed": result.failed,
        "formatted": len(result.formatted),
        "unchanged": len(result.unchanged),
        "skipped": len(result.skipped),
        "failures": len(result.failures),
        "conflicts": len(result.conflicts),
        "files": files,
        "duration_ms": round(result.duration_ms, 1),
    }


def render(result: RunResult) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result), indent=2)
