"""
Unit tests for GitAnalyzer with subprocess replaced.

Run with:
    pytest tests/test_git.py -v
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from aicommit.git import GitAnalyzer, GitError


def _completed(stdout="", returncode=0):
    return MagicMock(stdout=stdout, returncode=returncode)


@pytest.fixture
def git():
    with patch("subprocess.run", return_value=_completed()):
        return GitAnalyzer()


class TestGitAnalyzer:

    def test_not_installed(self):
        with patch("subprocess.run", side_effect=FileNotFoundError):
            with pytest.raises(GitError, match="Git is not installed"):
                GitAnalyzer()

    def test_outside_repository(self):
        def run(cmd, **kwargs):
            if cmd[1] == "rev-parse":
                raise subprocess.CalledProcessError(128, cmd, stderr="fatal: not a git repository")
            return _completed("git version 2.45.0")

        with patch("subprocess.run", side_effect=run):
            with pytest.raises(GitError, match="Not inside a git repository"):
                GitAnalyzer()

    def test_staged_diff(self, git):
        with patch("subprocess.run", return_value=_completed("diff --git a/x b/x\n")) as run:
            assert git.get_staged_diff() == "diff --git a/x b/x\n"
        assert run.call_args[0][0] == ["git", "diff", "--staged"]

    def test_commit_passes_message_and_returns_status(self, git):
        with patch("subprocess.run", return_value=_completed(returncode=1)) as run:
            assert git.run_commit("feat: add \"quoted\" text") == 1
        run.assert_called_once_with(["git", "commit", "-m", "feat: add \"quoted\" text"], check=False)

    def test_commit_launch_failure(self, git):
        with patch("subprocess.run", side_effect=OSError("exec failed")):
            with pytest.raises(GitError, match="Failed to run git commit"):
                git.run_commit("feat: x")
