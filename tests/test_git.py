"""Tests for the git adapter."""

import subprocess
from pathlib import Path

import pytest

from branchguard.git.adapter import (
    GitError,
    get_current_branch,
    get_default_branch,
    get_repo_root,
    get_user_email,
)


class TestGitAdapter:
    def test_repo_root(self, tmp_git_repo: Path):
        sub = tmp_git_repo / "sub"
        sub.mkdir()
        assert get_repo_root(sub).resolve() == tmp_git_repo.resolve()

    def test_not_a_repo(self, tmp_path: Path):
        outside = tmp_path / "plain"
        outside.mkdir()
        with pytest.raises(GitError):
            get_repo_root(outside)

    def test_current_branch(self, tmp_git_repo: Path):
        assert get_current_branch(tmp_git_repo) == "main"

    def test_detached_head(self, tmp_git_repo: Path):
        subprocess.run(
            ["git", "checkout", "--detach"],
            cwd=tmp_git_repo, capture_output=True, check=True,
        )
        assert get_current_branch(tmp_git_repo) is None

    def test_user_email(self, tmp_git_repo: Path):
        assert get_user_email(tmp_git_repo) == "dev@example.com"

    def test_default_branch_without_remote(self, tmp_git_repo: Path):
        assert get_default_branch(tmp_git_repo) is None
