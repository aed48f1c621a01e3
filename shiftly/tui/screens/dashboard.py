"""
Dashboard pane: KPI cards, qualification score chart, recent conversations.
"""
from __future__ import annotations
from textual.app import ComposeResult
from textual.containers import ScrollableContainer
from textual.widgets import Static
from shiftly.formatting import format_score, score_bar, score_color, status_color
from shiftly.tui.screens.base import ShiftlyPane, esc, status_line


class DashboardPane(ShiftlyPane):
    """Headline metrics for the dealership."""

    def compose(self) -> ComposeResult:
        yield Static("", id="dashboard-status", markup=True)
        with ScrollableContainer(id="dashboard-scroll"):
            yield Static(id="dashboard-body", markup=True)

    def render_state(self) -> None:
        c = self.controller
        self.query_one("#dashboard-status", Static).update(status_line(c))
        body = self.query_one("#dashboard-body", Static)
        m = c.metrics
        if m is None:
            if not c.is_loading:
                body.update("[dim]No data. Press r to refresh or check your connection.[/dim]")
            return

        lines = [
            "[bold]◈ Shiftly Manager[/bold]",
            "",
            f"  Total conversations  [bold]{m.total_conversations}[/bold]",
            f"  Active now           [bold green]{m.active_conversations}[/bold green]",
            f"  Avg score            [bold dark_orange]{format_score(m.average_qualification_score)}[/bold dark_orange]",
            f"  Completion           [bold magenta]{format_score(c.completion_rate)}[/bold magenta]",
        ]

        scored = c.scored_conversations()
        lines += ["", "[bold blue]── Qualification Scores ──[/bold blue]"]
        if not scored:
            lines.append("  [dim]No scored conversations yet[/dim]")
        for conv in scored:
            color = score_color(conv.qualification_score)
            lines.append(
                f"  {esc(conv.display_name[:18]):<18} "
                f"[{color}]{score_bar(conv.qualification_score, 20)}[/{color}] "
                f"{format_score(conv.qualification_score)}"
            )

        recent = c.recent_conversations()
        if recent:
            lines += ["", "[bold blue]── Recent Conversations ──[/bold blue]"]
        for conv in recent:
            dot = status_color(conv.status)
            score = ""
            if conv.qualification_score is not None:
                sc = score_color(conv.qualification_score)
                score = f"  [{sc}]{format_score(conv.qualification_score)}[/{sc}]"
            lines.append(
                f"  [{dot}]●[/{dot}] {esc(conv.display_name)}  "
                f"[dim]{esc(conv.status.capitalize())}[/dim]{score}"
            )
        body.update("\n".join(lines))
