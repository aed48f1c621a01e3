"""
Value snapshots mirroring the Shiftly API's JSON.

Every entity is a frozen dataclass decoded with from_dict() and re-encoded
with to_dict(). Keys are snake_case on the wire and in Python.
A fetch produces a fresh snapshot; nothing is merged field-by-field.

Escalation scores arrive as 0-100 integers. Everything in memory uses the
0-1 fraction, and Escalation.from_dict/to_dict is the only place that converts.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass


def _score(value) -> float | None:
    """Validate an optional 0-1 qualification score."""
    if value is None:
        return None
    score = float(value)
    if not 0.0 <= score <= 1.0:
        raise ValueError(f"qualification_score out of range: {score}")
    return score


def _opt_int(value) -> int | None:
    return None if value is None else int(value)


def _opt_float(value) -> float | None:
    return None if value is None else float(value)


# ---------------------------------------------------------------------------
# Conversations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Message:
    id: str
    role: str
    content: str
    conversation_id: str | None = None
    created_at: str | None = None

    @property
    def is_customer(self) -> bool:
        return self.role.lower() in ("customer", "user")

    @property
    def is_agent(self) -> bool:
        return self.role.lower() in ("agent", "assistant")

    @property
    def is_manager(self) -> bool:
        return self.role.lower() == "manager"

    @classmethod
    def from_dict(cls, data: dict) -> Message:
        return cls(
            id=str(data["id"]),
            role=str(data["role"]),
            content=str(data["content"]),
            conversation_id=data.get("conversation_id"),
            created_at=data.get("created_at"),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Conversation:
    """Full conversation record, fetched by phone number."""
    id: str
    phone: str
    status: str
    dealership_id: str | None = None
    customer_name: str | None = None
    qualification_score: float | None = None
    created_at: str | None = None
    updated_at: str | None = None
    messages: tuple[Message, ...] = ()

    @property
    def display_name(self) -> str:
        return self.customer_name or self.phone

    @property
    def is_active(self) -> bool:
        return self.status.lower() == "active"

    @classmethod
    def from_dict(cls, data: dict) -> Conversation:
        return cls(
            id=str(data["id"]),
            phone=str(data["phone"]),
            status=str(data["status"]),
            dealership_id=data.get("dealership_id"),
            customer_name=data.get("customer_name"),
            qualification_score=_score(data.get("qualification_score")),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            messages=tuple(Message.from_dict(m) for m in data.get("messages") or []),
        )

    def to_dict(self) -> dict:
        out = asdict(self)
        out["messages"] = [m.to_dict() for m in self.messages]
        return out


@dataclass(frozen=True)
class ConversationSummary:
    """Lightweight projection used by the list, dashboard and leads screens."""
    id: str
    phone: str
    status: str
    customer_name: str | None = None
    qualification_score: float | None = None
    last_message_at: str | None = None
    message_count: int | None = None

    @property
    def display_name(self) -> str:
        return self.customer_name or self.phone

    @classmethod
    def from_dict(cls, data: dict) -> ConversationSummary:
        return cls(
            id=str(data["id"]),
            phone=str(data["phone"]),
            status=str(data["status"]),
            customer_name=data.get("customer_name"),
            qualification_score=_score(data.get("qualification_score")),
            last_message_at=data.get("last_message_at"),
            message_count=_opt_int(data.get("message_count")),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DashboardMetrics:
    total_conversations: int
    active_conversations: int
    average_qualification_score: float
    conversations: tuple[ConversationSummary, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> DashboardMetrics:
        return cls(
            total_conversations=int(data["total_conversations"]),
            active_conversations=int(data["active_conversations"]),
            average_qualification_score=float(data["average_qualification_score"]),
            conversations=tuple(
                ConversationSummary.from_dict(c) for c in data.get("conversations") or []
            ),
        )

    def to_dict(self) -> dict:
        return {
            "total_conversations": self.total_conversations,
            "active_conversations": self.active_conversations,
            "average_qualification_score": self.average_qualification_score,
            "conversations": [c.to_dict() for c in self.conversations],
        }


# ---------------------------------------------------------------------------
# Escalations
# ---------------------------------------------------------------------------

ESCALATION_STATUSES = ("pending", "claimed", "resolved")


@dataclass(frozen=True)
class Escalation:
    """
    A conversation flagged for human takeover.

    Lifecycle is pending -> claimed -> resolved, owned by the server.
    qualification_score is stored as a 0-1 fraction.
    """
    id: str
    customer_phone: str
    qualification_score: float
    escalation_reason: str
    escalated_at: str
    status: str
    vehicle_interest: str | None = None
    assigned_to: str | None = None

    @property
    def is_pending(self) -> bool:
        return self.status.lower() == "pending"

    @property
    def is_claimed(self) -> bool:
        return self.status.lower() == "claimed"

    @property
    def is_resolved(self) -> bool:
        return self.status.lower() == "resolved"

    @classmethod
    def from_dict(cls, data: dict) -> Escalation:
        ident = data.get("conversation_id") or data.get("id")
        if ident is None:
            raise KeyError("conversation_id")
        raw_score = int(data["qualification_score"])
        if not 0 <= raw_score <= 100:
            raise ValueError(f"escalation qualification_score out of range: {raw_score}")
        return cls(
            id=str(ident),
            customer_phone=str(data["customer_phone"]),
            qualification_score=raw_score / 100.0,
            escalation_reason=str(data["escalation_reason"]),
            escalated_at=str(data["escalated_at"]),
            status=str(data["status"]),
            vehicle_interest=data.get("vehicle_interest"),
            assigned_to=data.get("assigned_to"),
        )

    def to_dict(self) -> dict:
        return {
            "conversation_id": self.id,
            "customer_phone": self.customer_phone,
            "qualification_score": round(self.qualification_score * 100),
            "escalation_reason": self.escalation_reason,
            "escalated_at": self.escalated_at,
            "status": self.status,
            "vehicle_interest": self.vehicle_interest,
            "assigned_to": self.assigned_to,
        }


@dataclass(frozen=True)
class EscalationStats:
    active_count: int
    avg_resolve_time_min: float
    escalation_rate_today: float

    @classmethod
    def from_dict(cls, data: dict) -> EscalationStats:
        return cls(
            active_count=int(data["active_count"]),
            avg_resolve_time_min=float(data["avg_resolve_time_min"]),
            escalation_rate_today=float(data["escalation_rate_today"]),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class EscalationsSnapshot:
    escalations: tuple[Escalation, ...] = ()
    stats: EscalationStats | None = None

    @classmethod
    def from_dict(cls, data: dict) -> EscalationsSnapshot:
        stats = data.get("stats")
        return cls(
            escalations=tuple(Escalation.from_dict(e) for e in data.get("escalations") or []),
            stats=EscalationStats.from_dict(stats) if stats else None,
        )

    def to_dict(self) -> dict:
        return {
            "escalations": [e.to_dict() for e in self.escalations],
            "stats": self.stats.to_dict() if self.stats else None,
        }


# ---------------------------------------------------------------------------
# Dealership config
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DealershipConfig:
    """Agent configuration. qualification_threshold is a 0-100 integer."""
    dealership_name: str | None = None
    phone: str | None = None
    timezone: str | None = None
    sms_provider: str | None = None
    qualification_threshold: int | None = None
    model_temperature: float | None = None
    max_tokens: int | None = None

    @classmethod
    def from_dict(cls, data: dict) -> DealershipConfig:
        return cls(
            dealership_name=data.get("dealership_name"),
            phone=data.get("phone"),
            timezone=data.get("timezone"),
            sms_provider=data.get("sms_provider"),
            qualification_threshold=_opt_int(data.get("qualification_threshold")),
            model_temperature=_opt_float(data.get("model_temperature")),
            max_tokens=_opt_int(data.get("max_tokens")),
        )

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ManagerMessageRequest:
    conversation_id: str
    message: str
    source: str = "manager"
    bypass_ai: bool = True


@dataclass(frozen=True)
class EscalateRequest:
    conversation_id: str
    reason: str
    priority: str = "high"


@dataclass(frozen=True)
class StatusUpdateRequest:
    status: str


@dataclass(frozen=True)
class ConfigUpdateRequest:
    qualification_threshold: int
    model_temperature: float
    max_tokens: int


def encode_request(payload) -> dict:
    """Serialize a request dataclass into its JSON body."""
    return asdict(payload)
