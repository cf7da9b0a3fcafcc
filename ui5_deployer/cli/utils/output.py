# ui5_deployer/cli/utils/output.py
"""Output formatting utilities"""

from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...constants import CrudAction, EMOJI_ERROR, EMOJI_SUCCESS, EMOJI_WARNING, ResourceKind
from ...models import CrudPlan, DeployResult, SyncReport
from ...utils.formatting import count_of, format_elapsed, format_plan_counts

console = Console()

_ACTION_STYLES = {
    CrudAction.CREATE: "green",
    CrudAction.UPDATE: "yellow",
    CrudAction.DELETE: "red",
}


def format_plan(plan: CrudPlan, show_paths: bool = False) -> None:
    """Display the CRUD plan as a table"""
    table = Table(title="Deploy Plan", box=box.SIMPLE)
    table.add_column("Kind", style="cyan")
    table.add_column("Action")
    table.add_column("Count", justify="right")
    if show_paths:
        table.add_column("Paths", overflow="fold")

    for kind in (ResourceKind.FOLDER, ResourceKind.FILE):
        operations = plan.for_kind(kind)
        for action in (CrudAction.CREATE, CrudAction.UPDATE, CrudAction.DELETE):
            paths = operations.get(action)
            row = [
                kind.value,
                f"[{_ACTION_STYLES[action]}]{action.value}[/{_ACTION_STYLES[action]}]",
                str(len(paths)),
            ]
            if show_paths:
                row.append("\n".join(paths))
            table.add_row(*row)

    console.print(table)

    for remote_path, matches in plan.ambiguous.items():
        console.print(
            f"[yellow]{EMOJI_WARNING} {remote_path} matches several local resources: "
            f"{', '.join(matches)}[/yellow]"
        )


def format_sync_report(report: SyncReport) -> None:
    """Display progress of an interrupted sync"""
    lines = [
        f"[bold]Completed:[/bold] {len(report.completed)} of {report.total}",
        f"[bold]Not attempted:[/bold] {report.pending}",
    ]
    if report.skipped:
        lines.append(f"[bold]Skipped:[/bold] {len(report.skipped)}")
    if report.failed:
        lines.append(f"[bold]Failed step:[/bold] {report.failed.step.describe()}")
    console.print(Panel("\n".join(lines), title="Sync Progress", border_style="yellow"))


def format_deploy_result(result: DeployResult, show_paths: bool = False) -> None:
    """Format and display deploy operation result"""
    if result.plan is not None:
        format_plan(result.plan, show_paths=show_paths)

    headline = "Dry run completed" if result.dry_run else "Deploy completed successfully!"
    lines = [
        f"[green]{EMOJI_SUCCESS}[/green] {headline}",
        "",
        f"[bold]Project:[/bold] {result.project_name}",
        f"[bold]Target:[/bold] {result.target_type}",
    ]
    for key, value in result.metadata.items():
        if value and key != "message":
            lines.append(f"[bold]{key.replace('_', ' ').title()}:[/bold] {value}")
    if result.plan is not None:
        lines.append(f"[bold]Plan:[/bold] {format_plan_counts(result.plan)}")
    if result.artifact:
        lines.append(f"[bold]Artifact:[/bold] {result.artifact}")
    if result.report is not None:
        lines.append(f"[bold]Changes:[/bold] {count_of(len(result.report.completed), 'operation')}")
        if result.report.skipped:
            lines.append(f"[bold]Skipped:[/bold] {len(result.report.skipped)}")
    lines.append(f"[bold]Duration:[/bold] {format_elapsed(result.duration)}")

    console.print(Panel("\n".join(lines), title="Deploy Result", border_style="green"))


def format_error(error: Exception, elapsed: Optional[float] = None) -> None:
    """Display a deploy failure"""
    lines = [f"[red]{EMOJI_ERROR} Deploy failed:[/red] {error}"]
    code = getattr(error, "error_code", None)
    if code:
        lines.append(f"[dim]Error code: {code}[/dim]")
    if elapsed is not None:
        lines.append(f"[dim]Failed after {format_elapsed(elapsed)}[/dim]")
    console.print(Panel("\n".join(lines), title="Deploy Error", border_style="red"))
