from datetime import datetime, timezone
from typing import Optional


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2025-01-31T09:15:00.000Z"""
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_timestamp(value: str) -> str:
    """
    Parse an ISO-8601 timestamp and re-emit it in canonical UTC form.

    Naive values are taken as UTC. Raises ValueError when unparseable.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        raise ValueError("must be an ISO-8601 timestamp") from None
    return utc_timestamp(moment)
