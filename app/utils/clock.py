# app/utils/clock.py
"""
Lot-local time helpers.
Timestamps are stored naive, in the lot's timezone (settings.TIMEZONE),
because fares depend on local calendar days and wall-clock thresholds.
"""

from datetime import datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from app.config import settings


def lot_timezone() -> tzinfo:
    return ZoneInfo(settings.TIMEZONE)


def to_local(ts: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Naive lot-local view of ts. Naive input is assumed to be local already."""
    if ts.tzinfo is None:
        return ts
    return ts.astimezone(tz or lot_timezone()).replace(tzinfo=None)


def local_now() -> datetime:
    return datetime.now(lot_timezone()).replace(tzinfo=None)
