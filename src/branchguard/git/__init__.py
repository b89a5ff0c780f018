"""Git interface layer."""

from branchguard.git.adapter import (
    GitError,
    get_current_branch,
    get_default_branch,
    get_repo_root,
    get_user_email,
)

__all__ = [
    "GitError",
    "get_current_branch",
    "get_default_branch",
    "get_repo_root",
    "get_user_email",
]
