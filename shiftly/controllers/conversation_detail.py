"""
Conversation detail screen: transcript, live polling and manager actions.

start() loads the transcript and, while the conversation is active, polls
every few seconds so new customer and agent messages show up. The view must
call stop() when it goes away.

Mutations (reply, escalate, complete) only report HTTP success. Each one is
followed by a refresh to pull the server's view of the result.
"""

from __future__ import annotations

import logging

from shiftly.api.errors import APIError
from shiftly.controllers.base import ScreenController
from shiftly.models import Conversation
from shiftly.polling import Poller

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 5.0


class NoConversationError(APIError):
    """An action was requested before any conversation was loaded."""

    def __init__(self):
        super().__init__("Conversation not loaded yet")


class ConversationDetailController(ScreenController[Conversation]):
    name = "conversation"

    def __init__(self, client, phone: str, poll_interval: float = DEFAULT_POLL_INTERVAL):
        super().__init__(client)
        self.phone = phone
        self.is_sending = False
        self._stopped = False
        self.poller = Poller(poll_interval, self.refresh, name=f"conversation:{phone}")

    async def fetch(self) -> Conversation:
        return await self.client.fetch_conversation(self.phone)

    @property
    def conversation(self) -> Conversation | None:
        return self.data

    # ── Lifecycle ────────────────────────────────────────────────────────────

    async def start(self) -> None:
        """Initial load, then poll while the conversation is active."""
        self._stopped = False
        await self.refresh()
        # stop() during the initial load wins
        if self._stopped:
            return
        if self.data is None or self.data.is_active:
            self.poller.start()

    def stop(self) -> None:
        self._stopped = True
        self.poller.stop()

    @property
    def is_polling(self) -> bool:
        return self.poller.running

    # ── Actions ──────────────────────────────────────────────────────────────

    def _conversation_id(self) -> str | None:
        if self.data is None:
            self._surface(NoConversationError())
            return None
        return self.data.id

    async def send_message(self, text: str) -> bool:
        """Send a manager reply. Refreshes only when the send succeeded."""
        text = text.strip()
        if not text or self.is_sending:
            return False
        conversation_id = self._conversation_id()
        if conversation_id is None:
            return False

        self.mutation_error = None
        self.is_sending = True
        self._changed()
        try:
            await self.client.send_manager_message(conversation_id, text)
        except APIError as e:
            self._surface(e)
            return False
        finally:
            self.is_sending = False
            self._changed()

        logger.info("Manager reply sent to %s", self.phone)
        await self.refresh()
        return True

    async def _mutate_then_refresh(self, action: str, call) -> bool:
        self.mutation_error = None
        ok = True
        try:
            await call
        except APIError as e:
            self._surface(e)
            ok = False
        else:
            logger.info("%s applied to %s", action, self.phone)
        await self.refresh()
        return ok

    async def escalate(self, reason: str) -> bool:
        conversation_id = self._conversation_id()
        if conversation_id is None:
            return False
        return await self._mutate_then_refresh(
            "escalate", self.client.escalate_conversation(conversation_id, reason)
        )

    async def set_status(self, status: str) -> bool:
        conversation_id = self._conversation_id()
        if conversation_id is None:
            return False
        return await self._mutate_then_refresh(
            f"status={status}", self.client.update_conversation_status(conversation_id, status)
        )

    async def complete(self) -> bool:
        return await self.set_status("completed")
