"""Pre-commit hook installer — stagefmt install / uninstall."""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import List, Optional, Tuple

from stagefmt.git.adapter import GitError, get_hooks_dir

_HOOK_MARKER = "# stagefmt-hook"
_HOOK_TEMPLATE = """\
#!/bin/sh
{marker}
# Installed by stagefmt. To uninstall: stagefmt uninstall

exec {command}
"""


def build_hook_command(formatter: Optional[str] = None, patterns: Optional[List[str]] = None) -> str:
    """Return the ``stagefmt format`` invocation the hook runs.

    Without a formatter, the hook relies on .stagefmt.toml. Git runs the
    hook from the top of the working tree, so *patterns* must already be
    relative to the repository root.
    """
    argv = ["stagefmt", "format"]
    if formatter:
        argv += ["--formatter", formatter]
    argv += list(patterns or [])
    return " ".join(shlex.quote(a) for a in argv)


def install_hook(
    repo_root: Path,
    *,
    force: bool = False,
    formatter: Optional[str] = None,
    patterns: Optional[List[str]] = None,
) -> Tuple[bool, str]:
    """Install stagefmt as a pre-commit hook.

    Returns (success, message).
    """
    try:
        hooks_dir = get_hooks_dir(repo_root)
    except GitError as exc:
        return False, f"Not a git repository: {repo_root} ({exc})"

    hooks_dir.mkdir(parents=True, exist_ok=True)
    hook_path = hooks_dir / "pre-commit"

    if hook_path.exists() and not force:
        content = hook_path.read_text(encoding="utf-8", errors="replace")
        if _HOOK_MARKER in content:
            return True, "stagefmt hook is already installed."
        return (
            False,
            f"A pre-commit hook already exists at {hook_path}. "
            "Use --force to overwrite, or add 'stagefmt format' to it manually.",
        )

    script = _HOOK_TEMPLATE.format(
        marker=_HOOK_MARKER,
        command=build_hook_command(formatter, patterns),
    )
    hook_path.write_text(script, encoding="utf-8")
    try:
        hook_path.chmod(0o755)
    except OSError:
        pass  # Windows

    return True, f"Installed stagefmt pre-commit hook at {hook_path}"


def uninstall_hook(repo_root: Path) -> Tuple[bool, str]:
    """Remove the stagefmt pre-commit hook.

    Returns (success, message).
    """
    try:
        hook_path = get_hooks_dir(repo_root) / "pre-commit"
    except GitError as exc:
        return False, f"Not a git repository: {repo_root} ({exc})"

    if not hook_path.exists():
        return True, "No pre-commit hook found, nothing to remove."

    content = hook_path.read_text(encoding="utf-8", errors="replace")
    if _HOOK_MARKER not in content:
        return False, "Pre-commit hook exists but was not installed by stagefmt."

    hook_path.unlink()
    return True, f"Removed stagefmt pre-commit hook from {hook_path}"
