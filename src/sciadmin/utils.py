"""Utility functions for sciadmin"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .errors import InvalidFieldValue

logger = logging.getLogger(__name__)


def canonicalify(p: Path | str) -> Path:
    return Path(p).expanduser().resolve()


def ensure_path(p: Path | str) -> Path:
    path = canonicalify(p)
    path.mkdir(parents=True, exist_ok=True)
    return path


def string_to_date(value: str) -> datetime:
    """Parse an ISO 8601 date or datetime string submitted by a form.

    Date-only strings and strings without an offset are taken as UTC, the
    way browsers parse ``<input type="date">`` values.

    Args:
        value: String such as ``2024-01-01`` or ``2024-01-01T10:30:00Z``

    Returns:
        Timezone-aware datetime

    Raises:
        InvalidFieldValue: If the string is not an ISO 8601 date

    Examples:
        >>> string_to_date("2024-01-01")
        datetime.datetime(2024, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise InvalidFieldValue(f"Invalid date value: {value!r}") from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def date_to_json(dt: datetime) -> str:
    """Format datetime the way ``Date.prototype.toJSON`` does.

    Examples:
        >>> date_to_json(datetime(2024, 1, 1, tzinfo=timezone.utc))
        '2024-01-01T00:00:00.000Z'
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    utc = dt.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def json_default(value: Any) -> Any:
    """``default`` hook for json.dumps covering submission values."""
    if isinstance(value, datetime):
        return date_to_json(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
