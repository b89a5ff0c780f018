"""Git subprocess wrapper — repo root, current branch, configured identity."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


def _run_git(args: list[str], cwd: Path, timeout: int = 30) -> str:
    """Run a git command and return stdout. Raises GitError on failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError as exc:
        raise GitError("git is not installed or not on PATH") from exc
    except subprocess.TimeoutExpired as exc:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}") from exc

    if result.returncode != 0:
        stderr = result.stderr.strip()
        # unset config keys exit 1 without output
        if not stderr or "fatal" not in stderr.lower():
            return result.stdout
        raise GitError(f"git error: {stderr}")
    return result.stdout


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the root of the current git repository."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    return Path(out.strip())


def get_current_branch(repo_root: Path) -> Optional[str]:
    """Return the checked-out branch name, or None on a detached HEAD."""
    out = _run_git(["symbolic-ref", "--quiet", "--short", "HEAD"], cwd=repo_root)
    return out.strip() or None


def get_default_branch(repo_root: Path, remote: str = "origin") -> Optional[str]:
    """Return the remote's default branch from ``refs/remotes/<remote>/HEAD``."""
    try:
        out = _run_git(
            ["symbolic-ref", "--quiet", "--short", f"refs/remotes/{remote}/HEAD"],
            cwd=repo_root,
        )
    except GitError:
        return None
    ref = out.strip()
    if not ref:
        return None
    return ref.removeprefix(f"{remote}/")


def get_user_email(repo_root: Path) -> Optional[str]:
    """Return ``user.email`` from git config, or None if unset."""
    out = _run_git(["config", "--get", "user.email"], cwd=repo_root)
    return out.strip() or None
