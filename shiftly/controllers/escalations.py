"""
Escalations screen: conversations waiting for a human.

Status (pending -> claimed -> resolved) belongs to the server. The controller
never advances it locally; claim/resolve are followed by a refresh whether or
not the mutation reported success.
"""

from __future__ import annotations

import logging

from shiftly.api.errors import APIError
from shiftly.controllers.base import ScreenController
from shiftly.models import Escalation, EscalationsSnapshot, EscalationStats
from shiftly.polling import Poller

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 30.0


class EscalationsController(ScreenController[EscalationsSnapshot]):
    name = "escalations"

    def __init__(self, client, notifier=None, poll_interval: float = DEFAULT_POLL_INTERVAL):
        super().__init__(client)
        self.notifier = notifier
        self.alerts_enabled = True
        self._alerted: set[str] = set()
        self.poller = Poller(poll_interval, self.refresh, name="escalations")

    async def fetch(self) -> EscalationsSnapshot:
        return await self.client.fetch_escalations()

    @property
    def escalations(self) -> list[Escalation]:
        return list(self.data.escalations) if self.data else []

    @property
    def stats(self) -> EscalationStats | None:
        return self.data.stats if self.data else None

    @property
    def active_count(self) -> int:
        """Server aggregate when available, else count of unresolved escalations."""
        if self.stats is not None:
            return self.stats.active_count
        return sum(1 for e in self.escalations if not e.is_resolved)

    async def on_loaded(self, data: EscalationsSnapshot) -> None:
        if self.notifier is None or not self.alerts_enabled:
            return
        for escalation in data.escalations:
            if escalation.is_pending and escalation.id not in self._alerted:
                self._alerted.add(escalation.id)
                await self.notifier.escalation_alert(escalation)

    # ── Actions ──────────────────────────────────────────────────────────────

    async def _mutate_then_refresh(self, action: str, escalation_id: str, call) -> bool:
        self.mutation_error = None
        ok = True
        try:
            await call(escalation_id)
        except APIError as e:
            self._surface(e)
            ok = False
        else:
            logger.info("Escalation %s %s", escalation_id, action)
        await self.refresh()
        return ok

    async def claim(self, escalation_id: str) -> bool:
        return await self._mutate_then_refresh("claimed", escalation_id, self.client.claim_escalation)

    async def resolve(self, escalation_id: str) -> bool:
        return await self._mutate_then_refresh("resolved", escalation_id, self.client.resolve_escalation)

    # ── Polling ──────────────────────────────────────────────────────────────

    def start_auto_refresh(self) -> None:
        self.poller.start()

    def stop_auto_refresh(self) -> None:
        self.poller.stop()
