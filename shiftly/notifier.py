"""
Local alert notifier: escalation and hot-lead alerts for the manager.

Every alert is logged. If a webhook URL is configured, the alert is also
POSTed as JSON so it can reach a phone push bridge, Slack relay, or just

    nc -lk 9999

Delivery is best effort: a dead endpoint is logged and skipped, never raised.
"""

from __future__ import annotations

import logging
from collections import deque
from datetime import datetime, timezone

import httpx

from shiftly.formatting import format_score
from shiftly.models import ConversationSummary, Escalation

logger = logging.getLogger(__name__)


class AlertNotifier:
    """Sends manager alerts to the log and an optional webhook."""

    def __init__(self, webhook_url: str = "", timeout: float = 2.0):
        self.webhook_url = webhook_url.rstrip("/")
        self.timeout = timeout
        self.enabled = bool(webhook_url)
        self.sent: deque[dict] = deque(maxlen=100)
        if self.enabled:
            logger.info("AlertNotifier webhook enabled: %s", self.webhook_url)

    async def notify(self, title: str, body: str, kind: str = "info") -> None:
        payload = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "kind": kind,
            "title": title,
            "body": body,
        }
        self.sent.append(payload)
        logger.info("ALERT %s: %s", title, body)
        if not self.enabled:
            return
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                await client.post(self.webhook_url, json=payload)
        except httpx.HTTPError as e:
            logger.debug("Alert webhook failed (non-fatal): %s", e)

    async def escalation_alert(self, escalation: Escalation) -> None:
        await self.notify(
            "🚨 Escalation",
            f"{escalation.customer_phone} needs attention: {escalation.escalation_reason}",
            kind="escalation",
        )

    async def lead_alert(self, lead: ConversationSummary) -> None:
        await self.notify(
            "🔥 Hot lead",
            f"{lead.display_name} scored {format_score(lead.qualification_score)}",
            kind="lead",
        )
