"""
Tests for the escalations controller.
Run with: pytest tests/test_escalations.py
"""

import asyncio

import pytest

from conftest import escalation, escalations, stats
from shiftly.api.errors import HttpStatusError, TransportError
from shiftly.controllers import EscalationsController, LoadState


# ---------------------------------------------------------------------------
# active_count
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_active_count_prefers_stats(client):
    client.script("fetch_escalations", escalations(escalation("e1"), stats=stats(active=7)))
    c = EscalationsController(client)
    await c.refresh()
    assert c.active_count == 7


@pytest.mark.asyncio
async def test_active_count_fallback_counts_unresolved(client):
    """Without stats, active = escalations whose status is not resolved."""
    client.script("fetch_escalations", escalations(
        escalation("e1", "pending"),
        escalation("e2", "claimed"),
        escalation("e3", "resolved"),
        escalation("e4", "Resolved"),
    ))
    c = EscalationsController(client)
    await c.refresh()
    assert c.stats is None
    assert c.active_count == 2


def test_active_count_before_load(client):
    assert EscalationsController(client).active_count == 0


# ---------------------------------------------------------------------------
# claim / resolve
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_claim_404_still_refreshes(client):
    """claim('e1') -> 404 surfaces HttpStatusError(404) and refresh still runs."""
    client.script("fetch_escalations", escalations(escalation("e1")))
    client.script("claim_escalation", HttpStatusError(404))
    c = EscalationsController(client)

    assert await c.claim("e1") is False
    assert isinstance(c.mutation_error, HttpStatusError)
    assert c.mutation_error.status_code == 404
    assert c.show_error
    assert c.error_message == "Server error (HTTP 404)"
    assert client.count("fetch_escalations") == 1
    assert c.state is LoadState.LOADED


@pytest.mark.asyncio
async def test_claim_success_reconciles(client):
    client.script(
        "fetch_escalations",
        escalations(escalation("e1", "claimed")),
    )
    c = EscalationsController(client)
    assert await c.claim("e1") is True
    assert client.calls[0] == ("claim_escalation", "e1")
    assert c.escalations[0].is_claimed
    assert not c.show_error


@pytest.mark.asyncio
async def test_resolve_success(client):
    client.script("fetch_escalations", escalations(escalation("e1", "resolved")))
    c = EscalationsController(client)
    assert await c.resolve("e1") is True
    assert ("resolve_escalation", "e1") in client.calls
    assert c.active_count == 0


@pytest.mark.asyncio
async def test_status_never_advanced_locally(client):
    """After a successful claim the status shown is whatever the server says."""
    client.script("fetch_escalations", escalations(escalation("e1", "pending")))
    c = EscalationsController(client)
    await c.claim("e1")
    assert c.escalations[0].is_pending


# ---------------------------------------------------------------------------
# Alerts
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_pending_escalations_alert_once(client, notifier):
    client.script("fetch_escalations", escalations(
        escalation("e1", "pending"),
        escalation("e2", "claimed"),
        escalation("e3", "pending"),
    ))
    c = EscalationsController(client, notifier)
    await c.refresh()
    await c.refresh()
    assert notifier.escalations == ["e1", "e3"]


@pytest.mark.asyncio
async def test_alerts_disabled(client, notifier):
    client.script("fetch_escalations", escalations(escalation("e1", "pending")))
    c = EscalationsController(client, notifier)
    c.alerts_enabled = False
    await c.refresh()
    assert notifier.escalations == []


@pytest.mark.asyncio
async def test_no_alerts_on_failed_refresh(client, notifier):
    client.script("fetch_escalations", HttpStatusError(500))
    c = EscalationsController(client, notifier)
    await c.refresh()
    assert notifier.escalations == []


# ---------------------------------------------------------------------------
# Auto refresh
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_auto_refresh_start_stop(client):
    client.script("fetch_escalations", escalations())
    c = EscalationsController(client, poll_interval=0.01)
    c.start_auto_refresh()
    await asyncio.sleep(0.06)
    c.stop_auto_refresh()
    polled = client.count("fetch_escalations")
    assert polled >= 2
    await asyncio.sleep(0.03)
    assert client.count("fetch_escalations") == polled


@pytest.mark.asyncio
async def test_mutation_error_message_survives_failed_poll(client):
    """A poll failure between mutation and recovery does not replace the action's error text."""
    client.script(
        "fetch_escalations",
        escalations(escalation("e1")),
        TransportError("timed out"),
        escalations(escalation("e1")),
    )
    client.script("claim_escalation", HttpStatusError(404))
    c = EscalationsController(client)

    await c.claim("e1")
    await c.refresh()
    assert c.error_message == "Network error: timed out"

    await c.refresh()
    assert c.state is LoadState.LOADED
    assert c.show_error
    assert c.error_message == "Server error (HTTP 404)"
