"""Thin git client for resolving the revision a snapshot belongs to.

All interaction with the ``git`` binary is done through :func:`subprocess.run`
with explicit timeouts and structured error handling so that callers receive
:class:`GitClientError` exceptions with descriptive messages rather than raw
subprocess failures.
"""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

_SUBPROCESS_TIMEOUT = 30  # seconds

# ---------------------------------------------------------------------------
# Git ref validation
# ---------------------------------------------------------------------------

# Matches hex SHAs (4-40 chars) and common ref patterns like branch names,
# tags, HEAD, HEAD~2, origin/main, etc.
_GIT_SHA_RE = re.compile(r"^[0-9a-fA-F]{4,40}$")
_GIT_REF_RE = re.compile(r"^[a-zA-Z0-9_./@~^{}\-]+$")


def _validate_git_ref(ref: str) -> None:
    """Validate a git ref or SHA to prevent option or command injection.

    Raises
    ------
    ValueError
        If *ref* is empty, starts with ``-``, or contains characters outside
        the safe ref alphabet.
    """
    if not ref:
        raise ValueError("Git ref cannot be empty")
    if ref.startswith("-"):
        raise ValueError(f"Invalid git ref: {ref!r}")
    if not (_GIT_SHA_RE.match(ref) or _GIT_REF_RE.match(ref)):
        raise ValueError(f"Invalid git ref: {ref!r}")


class GitClientError(Exception):
    """Raised when a git operation fails or the repository is invalid."""


def _run_git(
    cmd: list[str],
    repo_path: Path,
) -> subprocess.CompletedProcess[str]:
    """Execute a git command and return the completed process.

    Raises
    ------
    GitClientError
        On non-zero exit, timeout, or if the process cannot be started.
    """
    try:
        return subprocess.run(
            cmd,
            cwd=repo_path,
            capture_output=True,
            text=True,
            check=True,
            timeout=_SUBPROCESS_TIMEOUT,
        )
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        raise GitClientError(f"git command failed: {' '.join(cmd)}\n" f"Exit code {exc.returncode}: {stderr}") from exc
    except subprocess.TimeoutExpired as exc:
        raise GitClientError(f"git command timed out after {_SUBPROCESS_TIMEOUT}s: {' '.join(cmd)}") from exc
    except FileNotFoundError as exc:
        raise GitClientError("git executable not found. Ensure git is installed and on PATH.") from exc


def validate_repo(repo_path: Path) -> None:
    """Verify that *repo_path* is the root of a git repository.

    Raises
    ------
    GitClientError
        If the path is not a directory or has no ``.git`` entry.
    """
    if not repo_path.is_dir():
        raise GitClientError(f"Repository path does not exist: {repo_path}")
    if not (repo_path / ".git").exists():
        raise GitClientError(f"Not a git repository (no .git directory): {repo_path}")


def resolve_commit(repo_path: Path, ref: str) -> str:
    """Return the full commit SHA that *ref* points to.

    Raises
    ------
    GitClientError
        If *ref* is not a valid ref or does not name a commit.
    """
    try:
        _validate_git_ref(ref)
    except ValueError as exc:
        raise GitClientError(str(exc)) from exc

    result = _run_git(
        ["git", "rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"],
        repo_path,
    )
    sha = result.stdout.strip()
    logger.debug("Resolved %s to %s", ref, sha)
    return sha


def get_current_sha(repo_path: Path) -> str:
    """Return the full SHA of the current HEAD commit.

    Raises
    ------
    GitClientError
        If the repository has no commits or git fails.
    """
    result = _run_git(
        ["git", "rev-parse", "HEAD"],
        repo_path,
    )
    return result.stdout.strip()
