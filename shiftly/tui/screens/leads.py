"""
Leads pane: scored conversations ranked for follow-up.
"""
from __future__ import annotations
from typing import ClassVar
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import ScrollableContainer
from textual.widgets import Static
from shiftly.controllers.leads import LeadFilter
from shiftly.formatting import format_score, relative_time, score_bar, score_color
from shiftly.tui.screens.base import ShiftlyPane, esc, status_line

_FILTER_CYCLE = [LeadFilter.HOT, LeadFilter.WARM, LeadFilter.ALL]


class LeadsPane(ShiftlyPane):
    """Ranked leads with hot/warm/all filter."""

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("f", "cycle_filter", "Filter", show=True),
    ]

    def __init__(self, controller, **kwargs):
        super().__init__(controller, **kwargs)
        self.lead_filter = LeadFilter.ALL

    def compose(self) -> ComposeResult:
        yield Static("", id="leads-status", markup=True)
        with ScrollableContainer(id="leads-scroll"):
            yield Static(id="leads-body", markup=True)

    def action_cycle_filter(self) -> None:
        idx = _FILTER_CYCLE.index(self.lead_filter)
        self.lead_filter = _FILTER_CYCLE[(idx + 1) % len(_FILTER_CYCLE)]
        self.render_state()

    def render_state(self) -> None:
        c = self.controller
        leads = c.filtered(self.lead_filter)
        self.query_one("#leads-status", Static).update(
            status_line(c, f"[dim]{self.lead_filter.label}  │  {len(leads)} leads  │  f = cycle filter[/dim]")
        )
        if not leads:
            self.query_one("#leads-body", Static).update("[dim]No leads in this band.[/dim]")
            return
        lines = []
        for lead in leads:
            sc = score_color(lead.qualification_score)
            lines.append(
                f"  [{sc}]#{c.rank(lead):<3}[/{sc}] {esc(lead.display_name[:24]):<24} "
                f"[{sc}]{score_bar(lead.qualification_score)}[/{sc}] "
                f"{format_score(lead.qualification_score):>4}  "
                f"[dim]{relative_time(lead.last_message_at)}[/dim]"
            )
        self.query_one("#leads-body", Static).update("\n".join(lines))
