"""Formatter subprocess — content on stdin, formatted content on stdout."""

from __future__ import annotations

import logging
import os
import signal
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

PLACEHOLDER = "{}"


class FormatterError(Exception):
    """Raised when the formatter cannot be run, exits non-zero, or times out."""

    def __init__(self, message: str, diagnostics: str = "") -> None:
        super().__init__(message)
        self.diagnostics = diagnostics


@dataclass(frozen=True)
class FormatterOutput:
    returncode: int
    stdout: bytes
    stderr: bytes

    @property
    def diagnostics(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")


def render_command(template: str, file_path: str) -> str:
    """Substitute every ``{}`` in *template* with *file_path*."""
    return template.replace(PLACEHOLDER, file_path)


def _kill_process_group(proc: subprocess.Popen) -> None:
    """Kill the shell and every process it started (pipelines, subshells)."""
    if not hasattr(os, "killpg"):
        proc.kill()  # Windows
        return
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass


def run_formatter(
    template: str,
    file_path: str,
    content: bytes,
    *,
    cwd: Optional[Path] = None,
    timeout: Optional[float] = None,
) -> FormatterOutput:
    """Pipe *content* through the formatter and return its output.

    The command runs through the shell in its own session. Raises
    FormatterError when the process cannot start, exceeds *timeout* (the
    whole process group is killed), or exits with a non-zero status.
    """
    command = render_command(template, file_path)
    logger.debug("Running formatter: %s", command)
    try:
        proc = subprocess.Popen(
            command,
            shell=True,
            cwd=cwd,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            start_new_session=True,
        )
    except OSError as exc:
        raise FormatterError(f"failed to run formatter {command!r}: {exc}") from exc

    with proc:
        try:
            stdout, stderr = proc.communicate(content, timeout=timeout or None)
        except subprocess.TimeoutExpired as exc:
            _kill_process_group(proc)
            _, stderr = proc.communicate()
            raise FormatterError(
                f"formatter timed out after {timeout}s: {command}",
                diagnostics=stderr.decode("utf-8", errors="replace"),
            ) from exc

    output = FormatterOutput(proc.returncode, stdout, stderr)
    if output.returncode != 0:
        raise FormatterError(
            f"formatter exited with status {output.returncode}: {command}",
            diagnostics=output.diagnostics,
        )
    return output
