"""Rich terminal reporter — rule summary, check results, verdict."""

from __future__ import annotations

from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from branchguard.engine import EvaluationResult, MetadataCheck
from branchguard.resolution.models import Enforcement, RepoRulesInfo
from branchguard.rules.models import Ruleset

_STATUS_STYLE = {
    "fail": "bold white on red",
    "bypass": "bold black on yellow",
    "pass": "bold white on green",
}

_ENFORCEMENT_STYLE = {
    Enforcement.ENFORCED: "bold red",
    Enforcement.BYPASS: "yellow",
    Enforcement.NOT_PRESENT: "dim",
}

_FIELD_LABEL = {
    "commit_message": "Commit message",
    "author_email": "Author email",
    "committer_email": "Committer email",
    "branch_name": "Branch name",
}


def _status_pill(status: str) -> Text:
    return Text(f" {status.upper()} ", style=_STATUS_STYLE.get(status, ""))


def _enforcement_text(level: Enforcement) -> Text:
    return Text(level.label, style=_ENFORCEMENT_STYLE[level])


def render_rulesets(
    branch: str, rulesets: List[Ruleset], console: Optional[Console] = None
) -> None:
    """Print the rulesets that apply to *branch*."""
    console = console or Console(stderr=True)
    if not rulesets:
        console.print(f"[dim]No rulesets apply to[/dim] [cyan]{branch}[/cyan]")
        return

    table = Table(title=f"Rulesets for {branch}", title_style="bold", border_style="dim")
    table.add_column("ID", justify="right", style="green")
    table.add_column("Name", style="cyan")
    table.add_column("Bypass")
    table.add_column("Include")
    table.add_column("Exclude")
    for rs in rulesets:
        table.add_row(
            str(rs.id),
            rs.name,
            str(getattr(rs.current_user_can_bypass, "value", rs.current_user_can_bypass)),
            ", ".join(rs.include) or "-",
            ", ".join(rs.exclude) or "-",
        )
    console.print(table)


def _print_rules_summary(console: Console, info: RepoRulesInfo) -> None:
    console.print()
    console.print(Text.assemble("Pull request required: ", _enforcement_text(info.pull_request_required)))
    console.print(Text.assemble("Creation restricted:   ", _enforcement_text(info.creation_restricted)))
    console.print(Text.assemble("Update restricted:     ", _enforcement_text(info.update_restricted)))
    console.print(Text.assemble("Commit requirements:   ", _enforcement_text(info.basic_commit_warning)))


def _add_check_rows(table: Table, check: MetadataCheck) -> None:
    label = _FIELD_LABEL.get(check.name, check.name)
    if check.status == "pass":
        table.add_row(_status_pill("pass"), label, check.value, f"{check.rule_count} rule(s) satisfied", "-")
        return
    for failure in check.failures.failed:
        table.add_row(
            _status_pill("fail"), label, check.value,
            failure.description or "unsupported rule", str(failure.ruleset_id),
        )
    for failure in check.failures.bypassed:
        table.add_row(
            _status_pill("bypass"), label, check.value,
            failure.description or "unsupported rule", str(failure.ruleset_id),
        )


def render(result: EvaluationResult, *, show_summary: bool = True) -> None:
    """Print evaluation results to the terminal using Rich."""
    console = Console(stderr=True)

    if not result.applicable_rulesets:
        console.print()
        console.print(f"[bold green]✅ No rulesets apply to {result.branch}.[/bold green]")
        return

    if result.checks:
        console.print()
        table = Table(
            title=f"Rule checks for {result.branch}",
            show_lines=True,
            title_style="bold",
            border_style="dim",
        )
        table.add_column("Status", justify="center", width=10)
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="magenta")
        table.add_column("Rule")
        table.add_column("Ruleset", justify="right", style="green")
        for check in result.checks:
            _add_check_rows(table, check)
        console.print(table)

    if show_summary:
        _print_rules_summary(console, result.info)
        console.print(f"[dim]Rulesets applied:[/dim] {len(result.applicable_rulesets)}")
        console.print(f"[dim]Duration:[/dim]         {result.duration_ms:.0f}ms")

    console.print()
    if result.blocked:
        console.print("[bold red]❌ BLOCKED — metadata violates repository rules.[/bold red]")
    elif result.failed_checks:
        console.print(
            "[bold yellow]⚠️  Rules failed but you can bypass them. Push allowed.[/bold yellow]"
        )
    else:
        console.print("[bold green]✅ All repository rules satisfied.[/bold green]")
