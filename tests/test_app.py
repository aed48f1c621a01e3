"""
Tests for the Textual console wiring: tab-driven polling and alert preferences.
Run with: pytest tests/test_app.py
"""

import copy

import pytest

from conftest import escalation, escalations, metrics, summary
from shiftly.config import DEFAULTS
from shiftly.tui.app import ShiftlyApp


@pytest.fixture
def app(client, dealership_config):
    client.script("fetch_dashboard_metrics", metrics(summary("a", 0.8)))
    client.script("fetch_escalations", escalations(escalation("e1")))
    client.script("fetch_dealership_config", dealership_config)
    return ShiftlyApp(cfg=copy.deepcopy(DEFAULTS), client=client)


def test_alert_preferences_applied_at_startup(app):
    """Settings defaults (both alert kinds on, threshold 70) reach the controllers."""
    assert app.escalations.alerts_enabled is True
    assert app.leads.alerts_enabled is True
    assert app.leads.alert_threshold == pytest.approx(0.7)


@pytest.mark.asyncio
async def test_escalations_poll_only_while_tab_visible(app):
    async with app.run_test() as pilot:
        await pilot.pause()
        assert not app.escalations.poller.running

        app.action_switch_tab("escalations")
        await pilot.pause()
        assert app.escalations.poller.running

        app.action_switch_tab("dashboard")
        await pilot.pause()
        assert not app.escalations.poller.running
