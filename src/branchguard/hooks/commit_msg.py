"""The commit-msg hook.

git runs ``commit-msg`` with the path of the message file as ``$1``; the hook
script hands that path to ``branchguard check --message-file``. The same
module owns the reverse direction: turning the file git wrote back into the
message git will record.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Tuple

HOOK_NAME = "commit-msg"
MESSAGE_FILE_OPTION = "--message-file"

_MARKER = "# managed-by: branchguard"

# Written by `git commit -v` / `--cleanup=scissors`; everything below it is dropped.
_SCISSORS = re.compile(r"^# -{24} >8 -{24}$")


def hook_script() -> str:
    lines = [
        "#!/bin/sh",
        _MARKER,
        "# Remove with: branchguard uninstall",
        "",
        f'exec branchguard check {MESSAGE_FILE_OPTION} "$1"',
    ]
    return "\n".join(lines) + "\n"


def clean_message(text: str) -> str:
    """Return the commit message git would record from an editor buffer.

    Cuts at the scissors line, drops ``#`` comment lines, and trims
    surrounding blank lines.
    """
    kept: List[str] = []
    for line in text.splitlines():
        if _SCISSORS.match(line):
            break
        if line.startswith("#"):
            continue
        kept.append(line)
    return "\n".join(kept).strip()


def read_message_file(path: Path) -> str:
    """Read and clean a commit message file. Raises OSError if unreadable."""
    return clean_message(path.read_text(encoding="utf-8", errors="replace"))


def hook_path(repo_root: Path) -> Path:
    return repo_root / ".git" / "hooks" / HOOK_NAME


def _is_ours(path: Path) -> bool:
    return _MARKER in path.read_text(encoding="utf-8", errors="replace")


def install_hook(repo_root: Path, *, force: bool = False) -> Tuple[bool, str]:
    """Write the commit-msg hook. Returns (success, message).

    A foreign hook is only replaced with *force*.
    """
    if not (repo_root / ".git").is_dir():
        return False, f"Not a git repository: {repo_root}"

    path = hook_path(repo_root)
    if path.exists():
        if _is_ours(path):
            return True, "branchguard hook is already installed."
        if not force:
            return False, (
                f"{path} belongs to another tool. Re-run with --force to replace it, "
                f"or call 'branchguard check {MESSAGE_FILE_OPTION} \"$1\"' from it."
            )

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(hook_script(), encoding="utf-8")
    path.chmod(path.stat().st_mode | 0o111)
    return True, f"Installed {HOOK_NAME} hook at {path}"


def uninstall_hook(repo_root: Path) -> Tuple[bool, str]:
    """Delete the commit-msg hook if branchguard wrote it. Returns (success, message)."""
    path = hook_path(repo_root)
    if not path.exists():
        return True, f"No {HOOK_NAME} hook installed."
    if not _is_ours(path):
        return False, f"{path} was not written by branchguard; leaving it in place."
    path.unlink()
    return True, f"Removed {HOOK_NAME} hook from {path}"
