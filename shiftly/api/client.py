"""
API gateway client for the Shiftly agent backend.

One ShiftlyClient wraps one httpx.AsyncClient (connection pool + timeouts).
It is built once, handed to every controller, and never mutated afterwards,
so sharing it across screens needs no locking.

Every request carries the X-API-Key header, Accept: application/json and the
dealership_id query parameter. Write calls only check the status code; the
caller re-fetches to see the effect.
"""

from __future__ import annotations

import logging
import time
from urllib.parse import quote

import httpx

from shiftly.api.errors import (
    DecodeError,
    HttpStatusError,
    InvalidRequestError,
    NoResponseError,
    TransportError,
)
from shiftly.models import (
    ConfigUpdateRequest,
    Conversation,
    DashboardMetrics,
    DealershipConfig,
    EscalateRequest,
    EscalationsSnapshot,
    ManagerMessageRequest,
    StatusUpdateRequest,
    encode_request,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def _segment(value: str) -> str:
    """Percent-encode a single path segment (phone numbers, ids)."""
    return quote(str(value), safe="")


class ShiftlyClient:
    """Async client for the dealership agent API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        dealership_id: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.dealership_id = dealership_id
        self.timeout = timeout
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"X-API-Key": api_key, "Accept": "application/json"},
            params={"dealership_id": dealership_id},
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    @classmethod
    def from_config(cls, cfg: dict, transport: httpx.AsyncBaseTransport | None = None) -> ShiftlyClient:
        api = cfg.get("api", {})
        return cls(
            base_url=api["base_url"],
            api_key=api.get("api_key", ""),
            dealership_id=api["dealership_id"],
            timeout=float(api.get("timeout", DEFAULT_TIMEOUT)),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> ShiftlyClient:
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    # ── Plumbing ─────────────────────────────────────────────────────────────

    async def _request(self, method: str, path: str, payload=None) -> httpx.Response:
        """Send one request and map every failure onto the APIError taxonomy."""
        body = encode_request(payload) if payload is not None else None
        t0 = time.monotonic()
        try:
            resp = await self._http.request(method, path, json=body)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            raise InvalidRequestError(str(e)) from e
        except httpx.RemoteProtocolError as e:
            logger.warning("%s %s: connection closed without response: %s", method, path, e)
            raise NoResponseError(str(e)) from e
        except httpx.TransportError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise TransportError(e) from e

        latency = (time.monotonic() - t0) * 1000
        logger.debug("%s %s -> %d (%.0fms)", method, path, resp.status_code, latency)

        if not resp.is_success:
            logger.warning("%s %s returned HTTP %d", method, path, resp.status_code)
            raise HttpStatusError(resp.status_code, resp.text[:200])
        return resp

    async def _get_json(self, path: str) -> dict:
        resp = await self._request("GET", path)
        try:
            data = resp.json()
        except ValueError as e:
            raise DecodeError(e) from e
        if not isinstance(data, dict):
            raise DecodeError(f"expected a JSON object, got {type(data).__name__}")
        return data

    @staticmethod
    def _decode(model, data: dict):
        try:
            return model.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Could not decode %s: %r", model.__name__, e)
            raise DecodeError(e) from e

    # ── Dashboard & conversations ────────────────────────────────────────────

    async def fetch_dashboard_metrics(self) -> DashboardMetrics:
        return self._decode(DashboardMetrics, await self._get_json("/admin/dashboard"))

    async def fetch_conversation(self, phone: str) -> Conversation:
        data = await self._get_json(f"/agent/conversation/{_segment(phone)}")
        return self._decode(Conversation, data)

    async def send_manager_message(self, conversation_id: str, text: str) -> None:
        """Post a manager-authored message that skips the AI agent."""
        await self._request(
            "POST", "/agent/handle-message",
            ManagerMessageRequest(conversation_id=conversation_id, message=text),
        )

    async def escalate_conversation(self, conversation_id: str, reason: str) -> None:
        await self._request(
            "POST", "/agent/escalate",
            EscalateRequest(conversation_id=conversation_id, reason=reason),
        )

    async def update_conversation_status(self, conversation_id: str, status: str) -> None:
        await self._request(
            "PUT", f"/admin/conversations/{_segment(conversation_id)}/status",
            StatusUpdateRequest(status=status),
        )

    # ── Escalations ──────────────────────────────────────────────────────────

    async def fetch_escalations(self) -> EscalationsSnapshot:
        return self._decode(EscalationsSnapshot, await self._get_json("/admin/escalations"))

    async def claim_escalation(self, escalation_id: str) -> None:
        await self._request("POST", f"/admin/escalations/{_segment(escalation_id)}/claim")

    async def resolve_escalation(self, escalation_id: str) -> None:
        await self._request("POST", f"/admin/escalations/{_segment(escalation_id)}/resolve")

    # ── Settings ─────────────────────────────────────────────────────────────

    async def fetch_dealership_config(self) -> DealershipConfig:
        return self._decode(DealershipConfig, await self._get_json("/admin/config"))

    async def update_dealership_config(
        self, qualification_threshold: int, temperature: float, max_tokens: int
    ) -> None:
        await self._request(
            "PUT", "/admin/config",
            ConfigUpdateRequest(
                qualification_threshold=int(qualification_threshold),
                model_temperature=float(temperature),
                max_tokens=int(max_tokens),
            ),
        )

    async def check_health(self) -> bool:
        """True when /health answers 2xx. Never raises."""
        try:
            resp = await self._http.get("/health")
            return resp.is_success
        except Exception as e:
            logger.debug("Health check failed: %s", e)
            return False

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} url={self.base_url!r} dealership={self.dealership_id!r}>"
