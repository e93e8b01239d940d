"""Parse-or-default helpers for upstream numeric fields.

Upstream providers send numbers as JSON numbers, numeric strings, empty
strings or not at all. Every numeric field goes through one of these helpers
so that "unknown" stays ``None`` and only the caller decides when a missing
value may be read as zero (liquidity for pair ranking is the one such case).
"""

import math
from datetime import UTC, datetime
from decimal import Decimal
from typing import Annotated, Any

from pydantic import BeforeValidator


def parse_float(value: Any, default: float | None = None) -> float | None:
    """Parse int/float/Decimal/numeric string to a finite float.

    Booleans, empty strings, garbage and NaN/inf return ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float, Decimal)):
        result = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return default
        try:
            result = float(text)
        except ValueError:
            return default
    else:
        return default
    return result if math.isfinite(result) else default


def parse_int(value: Any, default: int | None = None) -> int | None:
    """Parse an integral value; floats are truncated, non-numbers return ``default``."""
    parsed = parse_float(value)
    if parsed is None:
        return default
    return int(parsed)


def _lenient_float(value: Any) -> float | None:
    return parse_float(value)


def _lenient_int(value: Any) -> int | None:
    return parse_int(value)


# Pydantic field types that never fail validation on bad numbers
LenientFloat = Annotated[float | None, BeforeValidator(_lenient_float)]
LenientInt = Annotated[int | None, BeforeValidator(_lenient_int)]


def to_iso(dt: datetime) -> str:
    """UTC ISO-8601 instant with millisecond precision and a ``Z`` suffix.

    Naive datetimes are taken to be UTC already.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def iso_from_unix(seconds: int | float | None) -> str | None:
    if not seconds:
        return None
    return to_iso(datetime.fromtimestamp(seconds, tz=UTC))


def iso_from_millis(millis: int | float | None) -> str | None:
    if not millis:
        return None
    return to_iso(datetime.fromtimestamp(millis / 1000, tz=UTC))


def dig(data: Any, *keys: str) -> Any:
    """Walk nested dicts, returning None as soon as a level is missing or not a dict."""
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data
