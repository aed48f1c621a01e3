"""
Dashboard screen: KPI totals, score chart and recent conversations.
"""

from __future__ import annotations

from shiftly.controllers.base import ScreenController
from shiftly.models import ConversationSummary, DashboardMetrics


class DashboardController(ScreenController[DashboardMetrics]):
    name = "dashboard"

    async def fetch(self) -> DashboardMetrics:
        return await self.client.fetch_dashboard_metrics()

    @property
    def metrics(self) -> DashboardMetrics | None:
        return self.data

    @property
    def completion_rate(self) -> float:
        """Share of all conversations whose status is completed."""
        m = self.data
        if m is None or m.total_conversations <= 0:
            return 0.0
        completed = sum(1 for c in m.conversations if c.status.lower() == "completed")
        return completed / m.total_conversations

    def recent_conversations(self, limit: int = 5) -> list[ConversationSummary]:
        if self.data is None:
            return []
        return list(self.data.conversations[:limit])

    def scored_conversations(self, limit: int = 10) -> list[ConversationSummary]:
        """First `limit` scored conversations, reversed for left-to-right charting."""
        if self.data is None:
            return []
        scored = [c for c in self.data.conversations if c.qualification_score is not None]
        return list(reversed(scored[:limit]))
