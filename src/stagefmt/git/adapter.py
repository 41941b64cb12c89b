"""Git subprocess wrapper — staged records, blob I/O, index writes, patches."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional

from stagefmt.git.quoting import quote_path

logger = logging.getLogger(__name__)

# Non-ASCII paths come back unescaped; paths with quotes, backslashes or
# control characters are still C-quoted (see quoting.unquote_path).
# Undecodable bytes survive as surrogates.
_GIT = ["git", "-c", "core.quotePath=false"]


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


class PatchConflict(Exception):
    """Raised when a patch does not apply cleanly to the working tree."""


def _run(
    args: list[str],
    cwd: Path,
    *,
    input_bytes: Optional[bytes] = None,
    timeout: int = 30,
) -> subprocess.CompletedProcess[bytes]:
    """Run git and return the completed process without checking its status."""
    logger.debug("git %s", " ".join(args))
    try:
        return subprocess.run(
            [*_GIT, *args],
            cwd=cwd,
            input=input_bytes,
            capture_output=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")


def _run_git(
    args: list[str],
    cwd: Path,
    *,
    input_bytes: Optional[bytes] = None,
    timeout: int = 30,
) -> bytes:
    """Run a git command and return raw stdout. Raises GitError on failure."""
    result = _run(args, cwd, input_bytes=input_bytes, timeout=timeout)
    if result.returncode != 0:
        stderr = _decode(result.stderr).strip()
        raise GitError(f"git error: {stderr or 'git ' + ' '.join(args) + ' failed'}")
    return result.stdout


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="surrogateescape")


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the root of the current git repository."""
    cwd = cwd or Path.cwd()
    out = _decode(_run_git(["rev-parse", "--show-toplevel"], cwd=cwd))
    return Path(out.strip())


def get_hooks_dir(repo_root: Path) -> Path:
    """Return the hooks directory, honouring worktrees and ``core.hooksPath``."""
    out = _decode(_run_git(["rev-parse", "--git-path", "hooks"], cwd=repo_root)).strip()
    return repo_root / out


def _empty_tree(repo_root: Path) -> str:
    """Object id of the empty tree in this repository's hash format."""
    out = _run_git(["hash-object", "-t", "tree", "--stdin"], cwd=repo_root, input_bytes=b"")
    return _decode(out).strip()


def get_base_tree(repo_root: Path) -> str:
    """Return ``HEAD``, or the empty tree when the branch has no commits yet."""
    result = _run(["rev-parse", "--verify", "--quiet", "HEAD"], cwd=repo_root)
    if result.returncode == 0:
        return "HEAD"
    return _empty_tree(repo_root)


def get_staged_records_text(repo_root: Path) -> str:
    """Return raw diff-index lines for staged additions and modifications."""
    base = get_base_tree(repo_root)
    out = _run_git(
        ["diff-index", "--cached", "--diff-filter=AM", "--no-renames", base],
        cwd=repo_root,
    )
    return _decode(out)


def read_blob(repo_root: Path, object_id: str) -> bytes:
    """Return the raw content of blob *object_id*."""
    return _run_git(["cat-file", "blob", object_id], cwd=repo_root)


def write_blob(repo_root: Path, content: bytes) -> str:
    """Store *content* in the object database and return its id."""
    out = _run_git(["hash-object", "-w", "--stdin"], cwd=repo_root, input_bytes=content)
    return _decode(out).strip()


def update_index(repo_root: Path, mode: str, object_id: str, path: str) -> None:
    """Point the index entry for *path* at *object_id*, keeping *mode*."""
    _run_git(
        ["update-index", "--cacheinfo", f"{mode},{object_id},{path}"],
        cwd=repo_root,
    )


def diff_blobs(repo_root: Path, old_id: str, new_id: str, path: str) -> bytes:
    """Return a patch turning blob *old_id* into *new_id*, addressed to *path*.

    ``git diff`` names blob-to-blob patches after the object ids; those are
    swapped for *path* so the patch can be applied to the working tree. The
    a/ and b/ prefixes are forced so ``diff.noprefix`` and
    ``diff.mnemonicPrefix`` cannot change what ``git apply`` strips.
    """
    patch = _run_git(
        [
            "diff", "--no-ext-diff", "--no-color", "--binary",
            "--src-prefix=a/", "--dst-prefix=b/", old_id, new_id,
        ],
        cwd=repo_root,
    )
    path_bytes = path.encode("utf-8", errors="surrogateescape")
    old_name, new_name = b"a/" + old_id.encode(), b"b/" + new_id.encode()
    lines = patch.splitlines(keepends=True)
    for idx, line in enumerate(lines):
        if line.startswith(b"@@") or line.startswith(b"GIT binary patch"):
            break
        if line.startswith((b"diff --git ", b"--- ", b"+++ ")):
            lines[idx] = line.replace(old_name, quote_path(b"a/" + path_bytes)).replace(
                new_name, quote_path(b"b/" + path_bytes)
            )
    return b"".join(lines)


def apply_patch(repo_root: Path, patch: bytes) -> None:
    """Apply *patch* to working-tree files. Raises PatchConflict if it does not fit."""
    result = _run(["apply", "-"], cwd=repo_root, input_bytes=patch)
    if result.returncode != 0:
        raise PatchConflict(_decode(result.stderr).strip() or "patch does not apply")
