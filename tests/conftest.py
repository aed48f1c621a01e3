"""
Shared fixtures: a scriptable stand-in for ShiftlyClient and sample payloads.
"""

import pytest

from shiftly.models import (
    Conversation,
    ConversationSummary,
    DashboardMetrics,
    DealershipConfig,
    Escalation,
    EscalationsSnapshot,
    EscalationStats,
    Message,
)


class FakeClient:
    """
    Records every call and answers from per-method scripts.

    script(name, *values): each call pops the next value; the last one repeats.
    An Exception value is raised instead of returned.
    """

    def __init__(self):
        self.calls: list[tuple] = []
        self._scripts: dict[str, list] = {}
        self.healthy = True

    def script(self, name, *values):
        self._scripts[name] = list(values)
        return self

    def count(self, name) -> int:
        return sum(1 for c in self.calls if c[0] == name)

    def _answer(self, name, *args):
        self.calls.append((name, *args))
        values = self._scripts.get(name, [None])
        value = values.pop(0) if len(values) > 1 else values[0]
        if isinstance(value, Exception):
            raise value
        return value

    async def fetch_dashboard_metrics(self):
        return self._answer("fetch_dashboard_metrics")

    async def fetch_conversation(self, phone):
        return self._answer("fetch_conversation", phone)

    async def fetch_escalations(self):
        return self._answer("fetch_escalations")

    async def claim_escalation(self, escalation_id):
        return self._answer("claim_escalation", escalation_id)

    async def resolve_escalation(self, escalation_id):
        return self._answer("resolve_escalation", escalation_id)

    async def send_manager_message(self, conversation_id, text):
        return self._answer("send_manager_message", conversation_id, text)

    async def escalate_conversation(self, conversation_id, reason):
        return self._answer("escalate_conversation", conversation_id, reason)

    async def update_conversation_status(self, conversation_id, status):
        return self._answer("update_conversation_status", conversation_id, status)

    async def fetch_dealership_config(self):
        return self._answer("fetch_dealership_config")

    async def update_dealership_config(self, qualification_threshold, temperature, max_tokens):
        return self._answer("update_dealership_config", qualification_threshold, temperature, max_tokens)

    async def check_health(self):
        self.calls.append(("check_health",))
        return self.healthy

    async def aclose(self):
        self.calls.append(("aclose",))


class RecordingNotifier:
    def __init__(self):
        self.escalations: list[str] = []
        self.leads: list[str] = []

    async def escalation_alert(self, escalation):
        self.escalations.append(escalation.id)

    async def lead_alert(self, lead):
        self.leads.append(lead.id)


def summary(id, score=None, status="active", name=None, phone=None):
    return ConversationSummary(
        id=id,
        phone=phone or f"+1555000{id}",
        status=status,
        customer_name=name,
        qualification_score=score,
    )


def metrics(*conversations, total=10, active=3, avg=0.55):
    return DashboardMetrics(
        total_conversations=total,
        active_conversations=active,
        average_qualification_score=avg,
        conversations=tuple(conversations),
    )


def conversation(id="c1", status="active", messages=2, phone="+15551234567"):
    return Conversation(
        id=id,
        phone=phone,
        status=status,
        customer_name="John Doe",
        qualification_score=0.8,
        messages=tuple(
            Message(id=f"m{i}", role="customer" if i % 2 == 0 else "agent", content=f"hello {i}")
            for i in range(messages)
        ),
    )


def escalation(id, status="pending", score=0.85):
    return Escalation(
        id=id,
        customer_phone=f"+1555111{id}",
        qualification_score=score,
        escalation_reason="Wants a test drive",
        escalated_at="2026-10-19T10:00:00Z",
        status=status,
    )


def escalations(*items, stats=None):
    return EscalationsSnapshot(escalations=tuple(items), stats=stats)


def stats(active=2):
    return EscalationStats(active_count=active, avg_resolve_time_min=12.5, escalation_rate_today=0.1)


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def dealership_config():
    return DealershipConfig(
        dealership_name="Sunrise Motors",
        phone="+15550001111",
        timezone="America/Chicago",
        sms_provider="twilio",
        qualification_threshold=65,
        model_temperature=0.4,
        max_tokens=300,
    )
