# src/sqlbridge/backend/timezone.py
"""Time zone resolution and offset formatting helpers."""
import datetime
import re
from typing import Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import TimezoneResolutionError

_OFFSET_PATTERN = re.compile(r'^([+-])(\d{2}):?(\d{2})$')

TimezoneSpec = Union[str, datetime.tzinfo]


def resolve_timezone(spec: TimezoneSpec) -> datetime.tzinfo:
    """Resolve a time zone specification to a ``tzinfo``.

    Accepts an existing ``tzinfo``, ``"UTC"``/``"Z"``, fixed offsets such as
    ``"+02:00"`` or ``"-0530"``, and IANA zone names such as ``"Europe/Berlin"``.

    Raises:
        TimezoneResolutionError: If the specification is empty or names no known zone
    """
    if isinstance(spec, datetime.tzinfo):
        return spec
    if not isinstance(spec, str) or not spec.strip():
        raise TimezoneResolutionError(f"Cannot resolve time zone from {spec!r}")

    name = spec.strip()
    if name.upper() in ("UTC", "Z"):
        return datetime.timezone.utc

    match = _OFFSET_PATTERN.match(name)
    if match:
        sign, hours, minutes = match.groups()
        hours, minutes = int(hours), int(minutes)
        if hours > 18 or minutes > 59:
            raise TimezoneResolutionError(f"Time zone offset out of range: {name}")
        delta = datetime.timedelta(hours=hours, minutes=minutes)
        if sign == '-':
            delta = -delta
        return datetime.timezone(delta) if delta else datetime.timezone.utc

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise TimezoneResolutionError(f"Unknown time zone '{name}': {e}") from e


def format_offset(offset: datetime.timedelta) -> str:
    """Format a UTC offset as ``+HH:MM``; a zero offset is ``Z``."""
    if not offset:
        return "Z"
    sign = '-' if offset < datetime.timedelta(0) else '+'
    total_minutes = abs(int(offset.total_seconds())) // 60
    hours, minutes = divmod(total_minutes, 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def zone_name(tz: datetime.tzinfo) -> str:
    """Best-effort IANA name of a named zone, empty for fixed offsets."""
    return getattr(tz, 'key', None) or getattr(tz, 'zone', None) or ""
