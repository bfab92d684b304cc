"""
Thin wrappers around the git executable.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import structlog

from file_codeowners.core.errors import GitError

logger = structlog.get_logger(__name__)


def _git_bin() -> str:
    git = shutil.which("git")
    if git is None:
        raise GitError("`git` is required. Install git and ensure it is on PATH.")
    return git


def _run_git(cwd: str | Path, *args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(  # noqa: S603
        [_git_bin(), *args],
        cwd=cwd,
        text=True,
        encoding="utf-8",
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        check=False,
    )


def git_toplevel(path: str | Path = ".") -> Path | None:
    """
    Get the root of the git work tree containing a path.

    Args:
        path: Any directory inside the work tree

    Returns:
        The work tree root, or None if the path is not inside a git repository
    """
    try:
        p = _run_git(path, "rev-parse", "--show-toplevel")
    except (GitError, OSError) as e:
        logger.debug("git_toplevel_unavailable", path=str(path), error=str(e))
        return None

    if p.returncode != 0:
        return None

    toplevel = p.stdout.strip()
    return Path(toplevel) if toplevel else None


def git_ls_files(path: str | Path = ".") -> list[str]:
    """
    List the files tracked by git.

    Args:
        path: Work tree root to list from

    Returns:
        Paths relative to ``path``, with forward slashes

    Raises:
        GitError: If git is missing or the command fails
    """
    p = _run_git(path, "ls-files", "-z")
    if p.returncode != 0:
        stderr = (p.stderr or "").strip()
        raise GitError(stderr or f"`git ls-files` failed (exit={p.returncode})")

    files = [f for f in p.stdout.split("\0") if f]
    logger.debug("git_files_listed", path=str(path), count=len(files))
    return files
