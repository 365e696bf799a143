# app/services/fare_engine.py
"""
Fare calculation and withdrawal finalization.

Pure functions only: no DB, no clock. Callers pass the exit time in,
which is what lets a quote shown to the attendant be confirmed later
with exactly the same figures.

Rules (all times are local to the lot):
  Same calendar day:
    < 1h            → 0
    1h .. < 5h      → day rate − 1 (never below 0)
    ≥ 5h            → day rate
  Different calendar days, sum of:
    Entry day       ≥ 15:30 → 0 | after 12:30 → half day | otherwise full day
    Nights          one night rate per midnight crossed,
                    plus one day rate per night beyond the first
    Exit day        < 10:30 → 0 | < 15:30 → day rate − 1 | otherwise full day
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from app.utils.clock import to_local

ENTRY_HALF_DAY_AFTER = 12 * 60 + 30    # 750
LATE_CUTOFF = 15 * 60 + 30             # 930
EXIT_CHARGE_FROM = 10 * 60 + 30        # 630

ONE_HOUR = timedelta(hours=1)
FIVE_HOURS = timedelta(hours=5)


@dataclass(frozen=True)
class FareQuote:
    session_id: int
    plate_number: str
    exit_time: datetime
    total_fare: float
    advance_payment: float
    amount_due: float


@dataclass(frozen=True)
class Withdrawal:
    session_id: int          # active session the caller must now delete
    plate_number: str
    tariff_key: str
    tariff_label: str
    day_rate: float
    night_rate: float
    entry_time: datetime
    exit_time: datetime
    advance_payment: float
    total_fare: float
    amount_due: float


def round2(value: float) -> float:
    """Round half-up to two decimals."""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _minute_of_day(ts: datetime) -> int:
    return ts.hour * 60 + ts.minute


def _entry_day_charge(entry: datetime, day_rate: float) -> float:
    minute = _minute_of_day(entry)
    if minute >= LATE_CUTOFF:
        return 0
    if minute > ENTRY_HALF_DAY_AFTER:
        return day_rate / 2
    return day_rate


def _exit_day_charge(exit_: datetime, day_rate: float) -> float:
    minute = _minute_of_day(exit_)
    if minute < EXIT_CHARGE_FROM:
        return 0
    if minute < LATE_CUTOFF:
        return max(0, day_rate - 1)
    return day_rate


def compute_fare(entry_time: datetime, exit_time: datetime,
                 day_rate: float, night_rate: float,
                 tz: Optional[tzinfo] = None) -> float:
    """
    Fare for a stay from entry_time to exit_time.
    Naive datetimes are taken as lot-local; aware ones are converted to tz
    (default: settings.TIMEZONE). Returns 0 for an empty or inverted interval.
    """
    entry = to_local(entry_time, tz)
    exit_ = to_local(exit_time, tz)

    if entry_time.tzinfo is not None and exit_time.tzinfo is not None:
        elapsed = exit_time - entry_time
    else:
        elapsed = exit_ - entry

    if elapsed <= timedelta(0):
        return 0.0

    if entry.date() == exit_.date():
        if elapsed < ONE_HOUR:
            return 0.0
        if elapsed < FIVE_HOURS:
            return round2(max(0, day_rate - 1))
        return round2(day_rate)

    midnights = max(0, (exit_.date() - entry.date()).days)
    total = _entry_day_charge(entry, day_rate)
    total += midnights * night_rate
    total += max(0, midnights - 1) * day_rate
    total += _exit_day_charge(exit_, day_rate)
    return round2(total)


def _amount_due(total_fare: float, advance_payment: float) -> float:
    return max(0.0, round2(total_fare - advance_payment))


def quote(session, exit_time: datetime) -> FareQuote:
    """Preview the charge for an active session without closing it."""
    advance = session.advance_payment or 0
    total = compute_fare(session.entry_time, exit_time, session.day_rate, session.night_rate)
    return FareQuote(
        session_id=session.id,
        plate_number=session.plate_number,
        exit_time=exit_time,
        total_fare=total,
        advance_payment=advance,
        amount_due=_amount_due(total, advance),
    )


def finalize(session, exit_time: datetime) -> Withdrawal:
    """
    Close a session at exit_time. The session itself is left untouched;
    deleting it from the active set is the caller's job (see session_id).
    """
    advance = session.advance_payment or 0
    total = compute_fare(session.entry_time, exit_time, session.day_rate, session.night_rate)
    return Withdrawal(
        session_id=session.id,
        plate_number=session.plate_number,
        tariff_key=session.tariff_key,
        tariff_label=session.tariff_label,
        day_rate=session.day_rate,
        night_rate=session.night_rate,
        entry_time=session.entry_time,
        exit_time=exit_time,
        advance_payment=advance,
        total_fare=total,
        amount_due=_amount_due(total, advance),
    )
