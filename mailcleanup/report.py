"""
Console rendering of profile counts, analysis snapshots and manual-action
records using rich.
"""

from typing import Optional, Union

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .action_log import ManualActionRecord
from .categories import RiskLevel
from .reducers import RiskTally, reduce_results
from .snapshot import AnalysisSnapshot, format_space_mb

_RISK_STYLES = {
    RiskLevel.LOW: "green",
    RiskLevel.MEDIUM: "yellow",
    RiskLevel.HIGH: "red",
}


def format_total(total: Optional[Union[int, str]]) -> str:
    """Profile total as display text: '12,480', a placeholder, or a fallback"""
    if total is None or total == "":
        return "Unable to load email count"
    if isinstance(total, int):
        return f"Total emails in account: {total:,}"
    return f"Total emails in account: {total}"


def render_profile(console: Console, total: Optional[Union[int, str]]) -> None:
    console.print(Text(format_total(total), style="bold"))


def render_snapshot(console: Console, snapshot: AnalysisSnapshot) -> None:
    if snapshot.is_error:
        console.print(Panel(snapshot.error, title="Analysis Error", border_style="red"))
        return

    summary = Table(box=box.SIMPLE, show_header=False)
    summary.add_column("Value", justify="right", style="bold blue")
    summary.add_column("Label")
    summary.add_row(f"{snapshot.total_estimated_count:,}", "Emails found to delete")
    summary.add_row(f"{format_space_mb(snapshot.estimated_space_reclaimed_mb)} MB", "Space to recover")
    summary.add_row(str(snapshot.categories_analyzed), "Categories selected")
    for risk, count in reduce_results(RiskTally(), snapshot.queries).items():
        summary.add_row(f"{count:,}", Text(f"{risk.value} risk", style=_RISK_STYLES[risk]))

    table = Table(title="Gmail Search Results", header_style="bold cyan")
    table.add_column("Category")
    table.add_column("Query")
    table.add_column("Risk", justify="center")
    table.add_column("Emails", justify="right")
    for result in snapshot.queries:
        count = "n/a" if result.failed else f"{result.estimated_count:,}"
        table.add_row(
            result.category_name,
            result.full_query,
            Text(result.risk.value, style=_RISK_STYLES[result.risk]),
            count,
        )

    title = f"Gmail Analysis Complete! ({snapshot.completed_at.strftime('%H:%M:%S')})"
    console.print(Panel(summary, title=title, border_style="blue"))
    console.print(table)
    if snapshot.failed_queries:
        console.print(f"[yellow]{len(snapshot.failed_queries)} queries could not be estimated and count as 0[/yellow]")


def render_action_record(console: Console, record: ManualActionRecord) -> None:
    lines = Text()
    lines.append(f"Found {record.count_found:,} emails to delete\n", style="dim")
    for i, step in enumerate(record.instructions, 1):
        lines.append(f"{i}. {step}\n")
    console.print(Panel(lines, title=record.category_name, border_style="green"))
