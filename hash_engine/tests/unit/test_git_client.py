"""Unit tests for hash_engine.git.git_client.

``subprocess.run`` is patched so no real repository is needed.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from hash_engine.git.git_client import (
    GitClientError,
    _validate_git_ref,
    get_current_sha,
    resolve_commit,
    validate_repo,
)

_SHA = "3f2a9c1e0b7d4a6f8e5c2b1a0d9f8e7c6b5a4d3e"


def _completed(stdout: str) -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(args=[], returncode=0, stdout=stdout, stderr="")


class TestValidateGitRef:
    @pytest.mark.parametrize("ref", ["HEAD", "main", "origin/main", "HEAD~2", "v1.2.3", _SHA[:7]])
    def test_valid(self, ref: str):
        _validate_git_ref(ref)

    @pytest.mark.parametrize("ref", ["", "main; rm -rf /", "--upload-pack=evil", "a b", "$(whoami)"])
    def test_invalid(self, ref: str):
        with pytest.raises(ValueError):
            _validate_git_ref(ref)


class TestValidateRepo:
    def test_missing_path(self, tmp_path: Path):
        with pytest.raises(GitClientError, match="does not exist"):
            validate_repo(tmp_path / "missing")

    def test_not_a_repo(self, tmp_path: Path):
        with pytest.raises(GitClientError, match="Not a git repository"):
            validate_repo(tmp_path)

    def test_repo(self, tmp_path: Path):
        (tmp_path / ".git").mkdir()
        validate_repo(tmp_path)


class TestResolveCommit:
    @patch("hash_engine.git.git_client.subprocess.run")
    def test_resolves(self, mock_run: MagicMock, tmp_path: Path):
        mock_run.return_value = _completed(_SHA + "\n")
        assert resolve_commit(tmp_path, "main") == _SHA
        cmd = mock_run.call_args.args[0]
        assert cmd == ["git", "rev-parse", "--verify", "--quiet", "main^{commit}"]
        assert mock_run.call_args.kwargs["cwd"] == tmp_path

    def test_rejects_unsafe_ref(self, tmp_path: Path):
        with pytest.raises(GitClientError):
            resolve_commit(tmp_path, "main; echo pwned")

    @patch("hash_engine.git.git_client.subprocess.run")
    def test_unknown_ref(self, mock_run: MagicMock, tmp_path: Path):
        mock_run.side_effect = subprocess.CalledProcessError(1, ["git"], stderr="")
        with pytest.raises(GitClientError, match="Exit code 1"):
            resolve_commit(tmp_path, "does-not-exist")

    @patch("hash_engine.git.git_client.subprocess.run")
    def test_timeout(self, mock_run: MagicMock, tmp_path: Path):
        mock_run.side_effect = subprocess.TimeoutExpired(["git"], 30)
        with pytest.raises(GitClientError, match="timed out"):
            resolve_commit(tmp_path, "main")

    @patch("hash_engine.git.git_client.subprocess.run")
    def test_git_missing(self, mock_run: MagicMock, tmp_path: Path):
        mock_run.side_effect = FileNotFoundError("git")
        with pytest.raises(GitClientError, match="not found"):
            resolve_commit(tmp_path, "main")


class TestGetCurrentSha:
    @patch("hash_engine.git.git_client.subprocess.run")
    def test_head(self, mock_run: MagicMock, tmp_path: Path):
        mock_run.return_value = _completed(_SHA + "\n")
        assert get_current_sha(tmp_path) == _SHA
        assert mock_run.call_args.args[0] == ["git", "rev-parse", "HEAD"]
