"""Shared test fixtures — sample diff-index lines, temp git repos, git helpers."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from stagefmt.config.schema import FormatConfig
from stagefmt.git.adapter import get_repo_root

SRC_HASH = "e69de29bb2d1d6434b8b29ae775ad8c2e48c5391"
DST_HASH = "3b18e512dba79e4c8300dd08aeb37f8e728b8dad"
ZERO = "0" * 40


def git(repo: Path, *args: str, input_bytes: bytes | None = None) -> bytes:
    """Run git in *repo* and return stdout; fail the test on error."""
    result = subprocess.run(
        ["git", *args], cwd=repo, input=input_bytes, capture_output=True, check=True,
    )
    return result.stdout


def stage(repo: Path, rel_path: str, content: str) -> None:
    """Write *content* to *rel_path* and stage it."""
    target = repo / rel_path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content)
    git(repo, "add", "--", rel_path)


def staged_content(repo: Path, rel_path: str) -> str:
    """Return the index version of *rel_path*."""
    return git(repo, "show", f":{rel_path}").decode()


def make_config(formatter: str, **kwargs) -> FormatConfig:
    return FormatConfig(formatter=formatter, **kwargs)


@pytest.fixture
def sample_modified_line() -> str:
    """A modified file as printed by git diff-index."""
    return f":100644 100644 {SRC_HASH} {DST_HASH} M\tsrc/app.js"


@pytest.fixture
def sample_added_line() -> str:
    """A new file: absent source mode and hash."""
    return f":000000 100644 {ZERO} {DST_HASH} A\tdocs/new file.md"


@pytest.fixture
def sample_rename_line() -> str:
    """A rename with similarity score and two paths."""
    return f":100644 100644 {SRC_HASH} {DST_HASH} R086\told name.py\tnew name.py"


@pytest.fixture
def sample_symlink_line() -> str:
    """A staged symbolic link."""
    return f":000000 120000 {ZERO} {DST_HASH} A\tlink-to-config"


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with one commit."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    subprocess.run(
        ["git", "config", "user.email", "test@test.com"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Test"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    subprocess.run(
        ["git", "config", "core.autocrlf", "false"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    # Initial commit
    readme = tmp_path / "README.md"
    readme.write_text("# Test\n")
    subprocess.run(["git", "add", "."], cwd=tmp_path, capture_output=True, check=True)
    subprocess.run(
        ["git", "commit", "-m", "init"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    return tmp_path


@pytest.fixture
def repo_root(tmp_git_repo: Path) -> Path:
    """The repository root exactly as git reports it."""
    return get_repo_root(tmp_git_repo)
