"""
Conversations pane: searchable, filterable list of every conversation.
Select a row to open the live conversation screen.
"""
from __future__ import annotations
from typing import ClassVar
from textual.app import ComposeResult
from textual.binding import Binding
from textual.widgets import DataTable, Input, Static
from shiftly.formatting import format_score, relative_time, score_color, status_color
from shiftly.tui.screens.base import ShiftlyPane, esc, status_line

# Status filter cycle: None = all
_FILTERS: list[str | None] = [None, "active", "completed"]


class ConversationsPane(ShiftlyPane):
    """All conversations with search and status filter."""

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("f", "cycle_filter", "Filter", show=True),
    ]

    def compose(self) -> ComposeResult:
        yield Static("", id="conversations-status", markup=True)
        yield Input(placeholder="Search conversations", id="conversations-search")
        yield DataTable(id="conversations-table", cursor_type="row")

    def on_mount(self) -> None:
        table = self.query_one("#conversations-table", DataTable)
        table.add_columns("Name", "Status", "Msgs", "Score", "Last")

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "conversations-search":
            self.controller.set_search_text(event.value)

    def action_cycle_filter(self) -> None:
        idx = _FILTERS.index(self.controller.status_filter)
        self.controller.set_status_filter(_FILTERS[(idx + 1) % len(_FILTERS)])

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        phone = event.row_key.value
        if phone:
            self.app.open_conversation(phone)

    def render_state(self) -> None:
        c = self.controller
        rows = c.filtered()
        label = c.status_filter or "all"
        self.query_one("#conversations-status", Static).update(
            status_line(c, f"[dim]{len(rows)} conversations  │  filter: {label}  │  f = cycle filter[/dim]")
        )
        table = self.query_one("#conversations-table", DataTable)
        table.clear()
        seen: set[str] = set()
        for conv in rows:
            if conv.phone in seen:
                continue
            seen.add(conv.phone)
            dot = status_color(conv.status)
            score = "—"
            if conv.qualification_score is not None:
                sc = score_color(conv.qualification_score)
                score = f"[{sc}]{format_score(conv.qualification_score)}[/{sc}]"
            table.add_row(
                esc(conv.display_name),
                f"[{dot}]{esc(conv.status)}[/{dot}]",
                str(conv.message_count) if conv.message_count is not None else "",
                score,
                relative_time(conv.last_message_at),
                key=conv.phone,
            )
