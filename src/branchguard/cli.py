"""branchguard CLI — Typer application with check, rulesets, install, and init commands."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from branchguard import __version__
from branchguard.hooks.commit_msg import MESSAGE_FILE_OPTION

app = typer.Typer(
    name="branchguard",
    help="Check branches and commit metadata against repository rulesets.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)

logger = logging.getLogger("branchguard")


def _configure_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=console, show_path=debug, markup=False))
    logger.setLevel(level)
    logger.propagate = False


def _resolve_repo_root(*, required: bool = True) -> Optional[Path]:
    """Find the git repo root; exit 2 if *required* and not in a repo."""
    from branchguard.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        if not required:
            logger.debug("Not in a git repository: %s", exc)
            return None
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _read_message_file(path: str) -> str:
    """Read the message file handed over by the commit-msg hook."""
    from branchguard.hooks.commit_msg import read_message_file

    try:
        return read_message_file(Path(path))
    except OSError as exc:
        console.print(f"[bold red]Error:[/bold red] cannot read message file: {exc}")
        raise typer.Exit(code=2) from exc


def _load_inputs(repo_root: Path, config: Optional[str], rules_file: Optional[str]):
    """Load config and the rules document, exiting 2 on errors."""
    from branchguard.config.loader import ConfigError, load_config
    from branchguard.rules.loader import RulesLoadError, load_rules_document

    try:
        cfg = load_config(repo_root, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    path = Path(rules_file or cfg.rules.file)
    if not path.is_absolute():
        path = repo_root / path
    try:
        document = load_rules_document(path)
    except RulesLoadError as exc:
        console.print(f"[bold red]Rules error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    logger.info("Loaded %d rulesets and %d rules from %s",
                len(document.rulesets), len(document.rules), path)
    return cfg, document


def _resolve_branch(branch: Optional[str], repo_root: Optional[Path]) -> str:
    from branchguard.git.adapter import GitError, get_current_branch

    if branch:
        return branch
    if repo_root is not None:
        try:
            current = get_current_branch(repo_root)
        except GitError as exc:
            console.print(f"[bold red]Git error:[/bold red] {exc}")
            raise typer.Exit(code=2) from exc
        if current:
            return current
    console.print("[bold red]Error:[/bold red] no branch given and HEAD is not on a branch")
    raise typer.Exit(code=2)


def _resolve_default_branch(cfg, document, repo_root: Optional[Path]) -> Optional[str]:
    from branchguard.git.adapter import get_default_branch

    if cfg.rules.default_branch:
        return cfg.rules.default_branch
    if document.default_branch:
        return document.default_branch
    if repo_root is not None:
        return get_default_branch(repo_root)
    return None


def _identity_email(env_var: str, repo_root: Optional[Path]) -> Optional[str]:
    from branchguard.git.adapter import GitError, get_user_email

    if val := os.environ.get(env_var):
        return val
    if repo_root is None:
        return None
    try:
        return get_user_email(repo_root)
    except GitError:
        return None


# ── check ─────────────────────────────────────────────────────────────────────


@app.command()
def check(
    branch: Optional[str] = typer.Option(None, "--branch", "-b", help="Branch to check (default: current branch)"),
    message: Optional[str] = typer.Option(None, "--message", "-m", help="Commit message to check"),
    message_file: Optional[str] = typer.Option(None, MESSAGE_FILE_OPTION, help="Read the commit message from a file"),
    author_email: Optional[str] = typer.Option(None, "--author-email", help="Commit author email"),
    committer_email: Optional[str] = typer.Option(None, "--committer-email", help="Committer email"),
    rules: Optional[str] = typer.Option(None, "--rules", "-r", help="Rules file (YAML or JSON)"),
    default_branch: Optional[str] = typer.Option(None, "--default-branch", help="Repository default branch"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .branchguard.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    fail_on: Optional[str] = typer.Option(None, "--fail-on", help="Block threshold: enforced | bypass"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging"),
) -> None:
    """Check a branch and commit metadata against the rulesets that target it."""
    from branchguard.config.schema import FAIL_ON_LEVELS, OUTPUT_FORMATS
    from branchguard.engine import EvaluationError, evaluate
    from branchguard.output import json_report, terminal

    _configure_logging(verbose, debug)

    if message is not None and message_file is not None:
        console.print("[bold red]Error:[/bold red] use either --message or --message-file")
        raise typer.Exit(code=2)

    repo_root = _resolve_repo_root(required=False)
    cfg, document = _load_inputs(repo_root or Path.cwd(), config, rules)

    # --- CLI overrides ---
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if fail_on:
        if fail_on not in FAIL_ON_LEVELS:
            console.print(f"[bold red]Invalid fail-on level:[/bold red] {fail_on}")
            raise typer.Exit(code=2)
        cfg.check.fail_on = fail_on  # type: ignore[assignment]
    if default_branch:
        cfg.rules.default_branch = default_branch

    branch_name = _resolve_branch(branch, repo_root)
    if message_file is not None:
        message = _read_message_file(message_file)
    author_email = author_email or _identity_email("GIT_AUTHOR_EMAIL", repo_root)
    committer_email = committer_email or _identity_email("GIT_COMMITTER_EMAIL", repo_root)

    try:
        result = evaluate(
            document,
            branch_name,
            commit_message=message,
            author_email=author_email,
            committer_email=committer_email,
            default_branch=_resolve_default_branch(cfg, document, repo_root),
            fail_on=cfg.check.fail_on,
        )
    except EvaluationError as exc:
        console.print(f"[bold red]Evaluation error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if cfg.output.format == "json":
        print(json_report.render(result))
    else:
        terminal.render(result, show_summary=cfg.output.show_summary)

    raise typer.Exit(code=1 if result.blocked else 0)


# ── rulesets ──────────────────────────────────────────────────────────────────


@app.command()
def rulesets(
    branch: Optional[str] = typer.Option(None, "--branch", "-b", help="Branch (default: current branch)"),
    rules: Optional[str] = typer.Option(None, "--rules", "-r", help="Rules file (YAML or JSON)"),
    default_branch: Optional[str] = typer.Option(None, "--default-branch", help="Repository default branch"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .branchguard.toml"),
) -> None:
    """List the rulesets that target a branch."""
    from branchguard.output import terminal
    from branchguard.resolution.selector import select_rulesets

    _configure_logging(False, False)

    repo_root = _resolve_repo_root(required=False)
    cfg, document = _load_inputs(repo_root or Path.cwd(), config, rules)
    if default_branch:
        cfg.rules.default_branch = default_branch

    branch_name = _resolve_branch(branch, repo_root)
    applicable = select_rulesets(
        branch_name,
        document.rulesets,
        _resolve_default_branch(cfg, document, repo_root),
    )
    terminal.render_rulesets(branch_name, applicable, console)


# ── install / uninstall ───────────────────────────────────────────────────────


@app.command()
def install(
    force: bool = typer.Option(False, "--force", help="Overwrite existing commit-msg hook"),
) -> None:
    """Install branchguard as a git commit-msg hook."""
    from branchguard.hooks.commit_msg import install_hook

    repo_root = _resolve_repo_root()
    success, msg = install_hook(repo_root, force=force)
    if success:
        console.print(f"[green]✓[/green] {msg}")
    else:
        console.print(f"[red]✗[/red] {msg}")
        raise typer.Exit(code=1)


@app.command()
def uninstall() -> None:
    """Remove the branchguard commit-msg hook."""
    from branchguard.hooks.commit_msg import uninstall_hook

    repo_root = _resolve_repo_root()
    success, msg = uninstall_hook(repo_root)
    if success:
        console.print(f"[green]✓[/green] {msg}")
    else:
        console.print(f"[red]✗[/red] {msg}")
        raise typer.Exit(code=1)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .branchguard.toml in the repo root."""
    from branchguard.config.defaults import DEFAULT_TOML
    from branchguard.config.loader import CONFIG_FILENAME

    repo_root = _resolve_repo_root()
    config_path = repo_root / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"branchguard {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """branchguard — check branches and commit metadata against repository rulesets."""
