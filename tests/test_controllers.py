"""
Tests for the shared controller state machine and the dashboard/list screens.
Run with: pytest tests/test_controllers.py
"""

import asyncio

import pytest

from conftest import metrics, summary
from shiftly.api.errors import HttpStatusError, TransportError
from shiftly.controllers import (
    ConversationsListController,
    DashboardController,
    LoadState,
)


def track(controller):
    """Record (state, is_loading, has_stale_data) at every transition."""
    seen = []
    controller.subscribe(lambda c: seen.append((c.state, c.is_loading, c.has_stale_data)))
    return seen


# ---------------------------------------------------------------------------
# Refresh state machine
# ---------------------------------------------------------------------------

def test_starts_idle(client):
    c = DashboardController(client)
    assert c.state is LoadState.IDLE
    assert c.data is None
    assert not c.is_loading
    assert not c.show_error


@pytest.mark.asyncio
async def test_dashboard_loaded_scenario(client):
    """A successful fetch lands in loaded with exact numbers and no flags set."""
    client.script("fetch_dashboard_metrics", metrics(summary("c1", 0.9)))
    c = DashboardController(client)

    assert await c.refresh() is True
    assert c.state is LoadState.LOADED
    assert c.metrics.total_conversations == 10
    assert c.metrics.active_conversations == 3
    assert c.metrics.average_qualification_score == 0.55
    assert not c.is_loading
    assert not c.show_error


@pytest.mark.asyncio
async def test_first_load_is_pure_loading(client):
    client.script("fetch_dashboard_metrics", metrics())
    c = DashboardController(client)
    seen = track(c)
    await c.refresh()
    assert seen[0] == (LoadState.LOADING, True, False)
    assert seen[-1] == (LoadState.LOADED, False, False)


@pytest.mark.asyncio
async def test_refresh_keeps_stale_data_visible(client):
    """Second refresh keeps the old snapshot on screen while loading."""
    first, second = metrics(total=1), metrics(total=2)
    client.script("fetch_dashboard_metrics", first, second)
    c = DashboardController(client)
    await c.refresh()

    seen = track(c)
    observed = []
    c.subscribe(lambda ctl: observed.append(ctl.data))
    await c.refresh()

    assert seen[0] == (LoadState.LOADING, False, True)
    assert observed[0] is first
    assert c.data is second


@pytest.mark.asyncio
async def test_error_keeps_last_good_data(client):
    good = metrics()
    client.script("fetch_dashboard_metrics", good, HttpStatusError(500))
    c = DashboardController(client)
    await c.refresh()

    assert await c.refresh() is False
    assert c.state is LoadState.ERROR
    assert c.data is good
    assert c.show_error
    assert c.error_message == "Server error (HTTP 500)"
    assert isinstance(c.last_error, HttpStatusError)


@pytest.mark.asyncio
async def test_error_on_first_load(client):
    client.script("fetch_dashboard_metrics", TransportError("offline"))
    c = DashboardController(client)
    await c.refresh()
    assert c.state is LoadState.ERROR
    assert c.data is None
    assert c.error_message.startswith("Network error")


@pytest.mark.asyncio
async def test_retry_clears_error(client):
    client.script("fetch_dashboard_metrics", TransportError("offline"), metrics())
    c = DashboardController(client)
    await c.refresh()
    assert c.show_error

    assert await c.retry() is True
    assert c.state is LoadState.LOADED
    assert not c.show_error
    assert c.error_message == ""


@pytest.mark.asyncio
async def test_dismiss_error(client):
    client.script("fetch_dashboard_metrics", TransportError("offline"))
    c = DashboardController(client)
    await c.refresh()
    c.dismiss_error()
    assert not c.show_error
    assert c.state is LoadState.ERROR


@pytest.mark.asyncio
async def test_refresh_twice_is_idempotent(client):
    client.script("fetch_dashboard_metrics", metrics(summary("c1", 0.5)))
    c = DashboardController(client)
    await c.refresh()
    first = c.data
    await c.refresh()
    assert c.state is LoadState.LOADED
    assert c.data == first
    assert client.count("fetch_dashboard_metrics") == 2


@pytest.mark.asyncio
async def test_overlapping_refreshes_last_resolved_wins():
    """Results apply in completion order: a slow first fetch overwrites a fast second."""
    slow_gate = asyncio.Event()
    old, new = metrics(total=1), metrics(total=2)

    class RacingClient:
        def __init__(self):
            self.n = 0

        async def fetch_dashboard_metrics(self):
            self.n += 1
            if self.n == 1:
                await slow_gate.wait()
                return old
            return new

    c = DashboardController(RacingClient())
    slow = asyncio.create_task(c.refresh())
    await asyncio.sleep(0)
    await c.refresh()
    assert c.data is new

    slow_gate.set()
    await slow
    assert c.data is old


def test_unsubscribe(client):
    c = DashboardController(client)
    seen = []
    unsubscribe = c.subscribe(seen.append)
    c.dismiss_error()
    unsubscribe()
    c.dismiss_error()
    assert len(seen) == 1


# ---------------------------------------------------------------------------
# Dashboard derived values
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_dashboard_derived_values(client):
    convs = [summary(str(i), score=0.1 * i if i % 2 else None,
                     status="completed" if i < 3 else "active") for i in range(8)]
    client.script("fetch_dashboard_metrics", metrics(*convs, total=6))
    c = DashboardController(client)
    await c.refresh()

    assert c.completion_rate == pytest.approx(3 / 6)
    assert [s.id for s in c.recent_conversations()] == ["0", "1", "2", "3", "4"]
    # scored = 1, 3, 5, 7; charted oldest-first
    assert [s.id for s in c.scored_conversations(limit=3)] == ["5", "3", "1"]


def test_dashboard_derived_values_without_data(client):
    c = DashboardController(client)
    assert c.completion_rate == 0.0
    assert c.recent_conversations() == []
    assert c.scored_conversations() == []


@pytest.mark.asyncio
async def test_completion_rate_zero_total(client):
    client.script("fetch_dashboard_metrics", metrics(summary("1", status="completed"), total=0))
    c = DashboardController(client)
    await c.refresh()
    assert c.completion_rate == 0.0


# ---------------------------------------------------------------------------
# Conversations list
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_conversations_filter_and_search(client):
    client.script("fetch_dashboard_metrics", metrics(
        summary("1", status="active", name="John Doe", phone="+15551230000"),
        summary("2", status="Completed", name="Ana Ruiz", phone="+15559870000"),
        summary("3", status="active", phone="+15554440000"),
    ))
    c = ConversationsListController(client)
    await c.refresh()
    assert len(c.filtered()) == 3

    c.set_status_filter("completed")
    assert [s.id for s in c.filtered()] == ["2"]

    c.set_status_filter(None)
    c.set_search_text("john")
    assert [s.id for s in c.filtered()] == ["1"]

    c.set_search_text("444")
    assert [s.id for s in c.filtered()] == ["3"]


def test_conversations_empty_before_load(client):
    c = ConversationsListController(client)
    assert c.conversations == []
    assert c.filtered() == []
