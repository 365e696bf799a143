# app/services/withdrawal_service.py
"""
Withdrawal: turns an active parking session into a withdrawal record.

  - preview_withdrawal → fare quote, nothing written
  - confirm_withdrawal → delete session + insert withdrawal, one commit

A missing session is a no-op (returns None). The delete must match exactly
one row before the withdrawal is written, so overlapping confirmations of
the same session charge once. If the commit fails the session stays active.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.models.parking_session import ParkingSession
from app.models.withdrawal import WithdrawalRecord
from app.services.fare_engine import FareQuote, finalize, quote
from app.services.parking_service import get_session
from app.utils.clock import local_now, to_local
from app.utils.logger import get_logger

logger = get_logger(__name__)


def preview_withdrawal(db: Session, session_id: int,
                       exit_time: Optional[datetime] = None) -> Optional[FareQuote]:
    session = get_session(db, session_id)
    if not session:
        logger.warning(f"[QUOTE] Session {session_id} not found")
        return None
    return quote(session, to_local(exit_time) if exit_time else local_now())


def confirm_withdrawal(db: Session, session_id: int,
                       exit_time: Optional[datetime] = None) -> Optional[WithdrawalRecord]:
    session = get_session(db, session_id)
    if not session:
        logger.warning(f"[WITHDRAW] Session {session_id} not found (already withdrawn?)")
        return None

    withdrawal = finalize(session, to_local(exit_time) if exit_time else local_now())
    record = WithdrawalRecord(
        session_id=withdrawal.session_id,
        plate_number=withdrawal.plate_number,
        tariff_key=withdrawal.tariff_key,
        tariff_label=withdrawal.tariff_label,
        day_rate=withdrawal.day_rate,
        night_rate=withdrawal.night_rate,
        entry_time=withdrawal.entry_time,
        exit_time=withdrawal.exit_time,
        advance_payment=withdrawal.advance_payment,
        total_fare=withdrawal.total_fare,
        amount_due=withdrawal.amount_due,
        created_at=datetime.utcnow(),
    )

    try:
        # Another confirmation may have closed the session since it was loaded
        deleted = (
            db.query(ParkingSession)
            .filter(ParkingSession.id == session_id)
            .delete(synchronize_session=False)
        )
        if deleted != 1:
            db.rollback()
            logger.warning(f"[WITHDRAW] Session {session_id} already closed by another request")
            return None
        db.add(record)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error(f"[WITHDRAW] Failed to close session {session_id}", exc_info=True)
        raise

    logger.info(f"[WITHDRAW] Plate={record.plate_number} | Total={record.total_fare:.2f} "
                f"| Advance={record.advance_payment:.2f} | Due={record.amount_due:.2f}")
    return record


def list_withdrawals(db: Session) -> list[WithdrawalRecord]:
    """Withdrawals waiting for export, most recent exit first."""
    return db.query(WithdrawalRecord).order_by(WithdrawalRecord.exit_time.desc()).all()
