"""
Settings screen: dealership info, agent tuning and local alert preferences.

Loading the config is best effort. If the fetch fails the defaults below stay
in place and nothing is shown to the manager; the health probe still runs.
"""

from __future__ import annotations

import logging

from shiftly.api.errors import APIError
from shiftly.controllers.base import LoadState, ScreenController
from shiftly.models import DealershipConfig

logger = logging.getLogger(__name__)

PLACEHOLDER = "—"
DEFAULT_THRESHOLD = 70
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 200


class SettingsController(ScreenController[DealershipConfig]):
    name = "settings"

    def __init__(self, client):
        super().__init__(client)
        # Dealership info (read-only)
        self.dealership_name = PLACEHOLDER
        self.phone = PLACEHOLDER
        self.timezone = PLACEHOLDER
        self.sms_provider = PLACEHOLDER
        # Agent config
        self.qualification_threshold = DEFAULT_THRESHOLD
        self.temperature = DEFAULT_TEMPERATURE
        self.max_tokens = DEFAULT_MAX_TOKENS
        # Local notification preferences
        self.escalation_alerts = True
        self.high_score_alerts = True
        self.alert_threshold = DEFAULT_THRESHOLD
        # Status
        self.api_healthy = False
        self.show_save_success = False

    async def fetch(self) -> DealershipConfig:
        return await self.client.fetch_dealership_config()

    def _apply(self, config: DealershipConfig) -> None:
        self.dealership_name = config.dealership_name or PLACEHOLDER
        self.phone = config.phone or PLACEHOLDER
        self.timezone = config.timezone or PLACEHOLDER
        self.sms_provider = config.sms_provider or PLACEHOLDER
        self.qualification_threshold = (
            config.qualification_threshold
            if config.qualification_threshold is not None else DEFAULT_THRESHOLD
        )
        self.temperature = (
            config.model_temperature if config.model_temperature is not None else DEFAULT_TEMPERATURE
        )
        self.max_tokens = config.max_tokens if config.max_tokens is not None else DEFAULT_MAX_TOKENS

    async def refresh(self) -> bool:
        """Load config (failures swallowed) and probe health."""
        self.state = LoadState.LOADING
        self._changed()
        try:
            config = await self.fetch()
        except APIError as e:
            logger.warning("Failed to load dealership config, using defaults: %s", e)
        else:
            self.data = config
            self._apply(config)

        self.api_healthy = await self.client.check_health()
        self.state = LoadState.LOADED
        self._changed()
        return True

    async def save_config(self) -> bool:
        self.mutation_error = None
        try:
            await self.client.update_dealership_config(
                qualification_threshold=int(self.qualification_threshold),
                temperature=float(self.temperature),
                max_tokens=int(self.max_tokens),
            )
        except APIError as e:
            self._surface(e)
            return False
        logger.info(
            "Dealership config saved (threshold=%s temperature=%s max_tokens=%s)",
            self.qualification_threshold, self.temperature, self.max_tokens,
        )
        self.show_save_success = True
        self._changed()
        return True

    def consume_save_success(self) -> bool:
        """Read and clear the one-shot save confirmation."""
        shown = self.show_save_success
        self.show_save_success = False
        return shown

    def apply_notification_preferences(self, escalations=None, leads=None) -> None:
        """Push alert toggles into the controllers that raise alerts."""
        if escalations is not None:
            escalations.alerts_enabled = self.escalation_alerts
        if leads is not None:
            leads.alerts_enabled = self.high_score_alerts
            leads.alert_threshold = self.alert_threshold / 100.0
