"""Git integration for resolving snapshot revisions."""

from __future__ import annotations

from hash_engine.git.git_client import (
    GitClientError,
    get_current_sha,
    resolve_commit,
    validate_repo,
)

__all__ = [
    "GitClientError",
    "get_current_sha",
    "resolve_commit",
    "validate_repo",
]
