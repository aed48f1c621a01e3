"""
Escalations pane: conversations waiting for a human.
Polls every 30s while the tab is visible. c = claim, v = resolve the highlighted row.
"""
from __future__ import annotations
from typing import ClassVar
from textual.app import ComposeResult
from textual.binding import Binding
from textual.widgets import DataTable, Static
from shiftly.formatting import format_score, relative_time, score_color
from shiftly.tui.screens.base import ShiftlyPane, esc, status_line

_STATUS_STYLE = {
    "pending": "bold red",
    "claimed": "dark_orange",
    "resolved": "green",
}


class EscalationsPane(ShiftlyPane):
    """Live escalation queue with claim/resolve actions."""

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("c", "claim", "Claim", show=True),
        Binding("v", "resolve", "Resolve", show=True),
    ]

    def compose(self) -> ComposeResult:
        yield Static("", id="escalations-status", markup=True)
        yield DataTable(id="escalations-table", cursor_type="row")

    def on_mount(self) -> None:
        table = self.query_one("#escalations-table", DataTable)
        table.add_columns("Phone", "Score", "Reason", "Status", "Assigned", "When")

    def _selected_id(self) -> str | None:
        table = self.query_one("#escalations-table", DataTable)
        if table.row_count == 0:
            return None
        row_key = table.coordinate_to_cell_key(table.cursor_coordinate).row_key
        return row_key.value

    def action_claim(self) -> None:
        escalation_id = self._selected_id()
        if escalation_id:
            self.run_worker(self.controller.claim(escalation_id), group="escalation-action")

    def action_resolve(self) -> None:
        escalation_id = self._selected_id()
        if escalation_id:
            self.run_worker(self.controller.resolve(escalation_id), group="escalation-action")

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        for esc_item in self.controller.escalations:
            if esc_item.id == event.row_key.value:
                self.app.open_conversation(esc_item.customer_phone)
                return

    def render_state(self) -> None:
        c = self.controller
        stats = c.stats
        summary = f"[bold]{c.active_count}[/bold] active"
        if stats is not None:
            summary += (
                f"  │  avg resolve {stats.avg_resolve_time_min:.0f}m"
                f"  │  rate today {stats.escalation_rate_today:.0%}"
            )
        self.query_one("#escalations-status", Static).update(
            status_line(c, f"[dim]{summary}  │  c = claim  v = resolve[/dim]")
        )
        table = self.query_one("#escalations-table", DataTable)
        table.clear()
        for e in c.escalations:
            style = _STATUS_STYLE.get(e.status.lower(), "")
            sc = score_color(e.qualification_score)
            table.add_row(
                esc(e.customer_phone),
                f"[{sc}]{format_score(e.qualification_score)}[/{sc}]",
                esc(e.escalation_reason),
                f"[{style}]{esc(e.status)}[/{style}]" if style else esc(e.status),
                esc(e.assigned_to or "—"),
                relative_time(e.escalated_at),
                key=e.id,
            )
