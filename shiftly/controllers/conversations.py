"""
Conversations list screen with status filter and free-text search.
"""

from __future__ import annotations

from shiftly.controllers.base import ScreenController
from shiftly.models import ConversationSummary


class ConversationsListController(ScreenController[list[ConversationSummary]]):
    name = "conversations"

    def __init__(self, client):
        super().__init__(client)
        self.search_text = ""
        self.status_filter: str | None = None

    async def fetch(self) -> list[ConversationSummary]:
        metrics = await self.client.fetch_dashboard_metrics()
        return list(metrics.conversations)

    @property
    def conversations(self) -> list[ConversationSummary]:
        return self.data or []

    def set_status_filter(self, status: str | None) -> None:
        self.status_filter = status.lower() if status else None
        self._changed()

    def set_search_text(self, text: str) -> None:
        self.search_text = text
        self._changed()

    def filtered(self) -> list[ConversationSummary]:
        result = self.conversations
        if self.status_filter:
            result = [c for c in result if c.status.lower() == self.status_filter]
        needle = self.search_text.strip()
        if needle:
            folded = needle.casefold()
            result = [
                c for c in result
                if folded in c.display_name.casefold() or needle in c.phone
            ]
        return result
