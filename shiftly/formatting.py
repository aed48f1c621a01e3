"""
Pure display helpers shared by the console screens and the CLI.
"""

from __future__ import annotations

from datetime import datetime, timezone

# (lower bound, bucket), checked highest first; a boundary belongs to the higher bucket
_SCORE_BUCKETS = [
    (0.7, "high"),
    (0.4, "mid"),
]

_STATUS_COLORS = {
    "active": "green",
    "completed": "blue",
    "abandoned": "grey50",
}

_BUCKET_COLORS = {
    "high": "green",
    "mid": "dark_orange",
    "low": "red",
}


def score_bucket(score: float) -> str:
    """Map a 0-1 qualification score to low / mid / high."""
    for threshold, bucket in _SCORE_BUCKETS:
        if score >= threshold:
            return bucket
    return "low"


def score_color(score: float | None) -> str:
    if score is None:
        return "grey50"
    return _BUCKET_COLORS[score_bucket(score)]


def format_score(score: float | None) -> str:
    if score is None:
        return "N/A"
    return f"{score * 100:.0f}%"


def status_color(status: str) -> str:
    return _STATUS_COLORS.get(status.lower(), "dark_orange")


def score_bar(score: float, width: int = 10) -> str:
    filled = round(max(0.0, min(score, 1.0)) * width)
    return "█" * filled + "░" * (width - filled)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp with or without fractional seconds."""
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def relative_time(value: str | None, now: datetime | None = None) -> str:
    """Abbreviated relative time ("5m ago"). Empty string if unparseable."""
    dt = parse_timestamp(value)
    if dt is None:
        return ""
    now = now or datetime.now(timezone.utc)
    seconds = int((now - dt).total_seconds())
    if seconds < 0:
        return "just now"
    if seconds < 60:
        return f"{seconds}s ago"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"


def clock_time(value: str | None) -> str:
    dt = parse_timestamp(value)
    return dt.astimezone().strftime("%H:%M") if dt else ""


def initials(name: str) -> str:
    parts = name.split()
    if len(parts) >= 2:
        return (parts[0][:1] + parts[1][:1]).upper()
    return name[:2].upper()
