# app/services/parking_service.py
"""
Vehicle entry and active-session lookup.
Rates are snapshotted from the tariff catalog when the session is created.
"""

import math
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from app.models.parking_session import ParkingSession
from app.services import rate_catalog
from app.config import settings
from app.utils.clock import local_now, to_local
from app.utils.logger import get_logger

logger = get_logger(__name__)


def normalize_plate(raw: Optional[str]) -> str:
    return raw.strip().upper() if raw else ""


def coerce_amount(raw) -> float:
    """Blank, non-numeric, non-finite or negative input becomes 0."""
    if raw is None or raw == "":
        return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def register_entry(db: Session, plate_number: str, tariff_key: Optional[str] = None,
                   advance_payment=None, now: Optional[datetime] = None) -> ParkingSession:
    """Create an active session. Raises ValueError if the plate is empty."""
    plate = normalize_plate(plate_number)
    if not plate:
        raise ValueError("Plate number is required")

    tariff = rate_catalog.lookup(tariff_key or settings.DEFAULT_TARIFF)
    session = ParkingSession(
        plate_number=plate,
        tariff_key=tariff.key,
        tariff_label=tariff.label,
        day_rate=tariff.day_rate,
        night_rate=tariff.night_rate,
        entry_time=to_local(now) if now else local_now(),
        advance_payment=coerce_amount(advance_payment),
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    logger.info(f"[ENTRY] Plate={plate} | Tariff={tariff.key} | Advance={session.advance_payment:.2f}")
    return session


def list_active(db: Session, plate_query: Optional[str] = None) -> list[ParkingSession]:
    """Active sessions, newest entry first. plate_query filters by substring."""
    q = db.query(ParkingSession)
    needle = normalize_plate(plate_query)
    if needle:
        q = q.filter(ParkingSession.plate_number.contains(needle, autoescape=True))
    return q.order_by(ParkingSession.entry_time.desc()).all()


def get_session(db: Session, session_id: int) -> Optional[ParkingSession]:
    return db.query(ParkingSession).filter(ParkingSession.id == session_id).first()
