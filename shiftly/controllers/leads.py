"""
Leads screen: scored conversations ranked for follow-up.
"""

from __future__ import annotations

from enum import Enum

from shiftly.controllers.base import ScreenController
from shiftly.models import ConversationSummary

HOT_THRESHOLD = 0.7
WARM_THRESHOLD = 0.4


class LeadFilter(str, Enum):
    HOT = "hot"
    WARM = "warm"
    ALL = "all"

    @property
    def label(self) -> str:
        return {"hot": "Hot (70+)", "warm": "Warm (40-69)", "all": "All"}[self.value]


def rank_leads(conversations) -> list[ConversationSummary]:
    """Drop unscored entries and sort by score, highest first. Ties keep input order."""
    scored = [c for c in conversations if c.qualification_score is not None]
    return sorted(scored, key=lambda c: c.qualification_score, reverse=True)


def filter_leads(leads: list[ConversationSummary], lead_filter: LeadFilter) -> list[ConversationSummary]:
    if lead_filter is LeadFilter.HOT:
        return [c for c in leads if (c.qualification_score or 0.0) >= HOT_THRESHOLD]
    if lead_filter is LeadFilter.WARM:
        return [c for c in leads if WARM_THRESHOLD <= (c.qualification_score or 0.0) < HOT_THRESHOLD]
    return list(leads)


class LeadsController(ScreenController[list[ConversationSummary]]):
    name = "leads"

    def __init__(self, client, notifier=None):
        super().__init__(client)
        self.notifier = notifier
        self.alerts_enabled = False
        self.alert_threshold = 0.7
        self._alerted: set[str] = set()

    async def fetch(self) -> list[ConversationSummary]:
        metrics = await self.client.fetch_dashboard_metrics()
        return rank_leads(metrics.conversations)

    @property
    def leads(self) -> list[ConversationSummary]:
        return self.data or []

    def filtered(self, lead_filter: LeadFilter = LeadFilter.ALL) -> list[ConversationSummary]:
        return filter_leads(self.leads, lead_filter)

    def rank(self, lead: ConversationSummary) -> int:
        """1-based position in the ranked list; 0 means not present."""
        for i, candidate in enumerate(self.leads):
            if candidate.id == lead.id:
                return i + 1
        return 0

    async def on_loaded(self, data: list[ConversationSummary]) -> None:
        if self.notifier is None or not self.alerts_enabled:
            return
        for lead in data:
            if lead.qualification_score >= self.alert_threshold and lead.id not in self._alerted:
                self._alerted.add(lead.id)
                await self.notifier.lead_alert(lead)
