"""RFC 3339 helpers shared by rendering, validation and storage."""

import re
from datetime import datetime, timezone

# date "T" time with seconds, optional fraction, mandatory Z or +HH:MM offset
_RFC3339_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})",
    re.ASCII,
)


def to_rfc3339(value: datetime) -> str:
    """
    Render value as RFC 3339 with second precision.

    UTC renders with a trailing "Z", other offsets as +HH:MM. Naive
    datetimes are treated as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.replace(microsecond=0).isoformat()
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def parse_rfc3339(text: str) -> datetime:
    """
    Parse an RFC 3339 timestamp. Seconds and the offset are mandatory.

    Other ISO 8601 spellings (space separator, missing seconds, basic
    format) are rejected.

    Raises:
        ValueError: text is not an RFC 3339 timestamp
    """
    if not _RFC3339_RE.fullmatch(text):
        raise ValueError(f"not an RFC 3339 timestamp: {text!r}")
    return datetime.fromisoformat(text.upper())


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
