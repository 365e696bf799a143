"""Active parking sessions: entry, live search, fare preview and withdrawal."""

from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.parking_session import SessionCreate, SessionOut, FareQuoteOut
from app.schemas.withdrawal import WithdrawalConfirm, WithdrawalOut
from app.services import parking_service, withdrawal_service

router = APIRouter()


@router.post("/sessions", response_model=SessionOut, status_code=201, summary="Register a vehicle entry")
def create_session(body: SessionCreate, db: Session = Depends(get_db)):
    try:
        return parking_service.register_entry(
            db, body.plate_number, body.tariff_key, body.advance_payment,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/sessions", response_model=list[SessionOut], summary="List vehicles currently parked")
def list_sessions(plate: Optional[str] = None, db: Session = Depends(get_db)):
    """Newest entry first. `plate` filters by partial plate number."""
    return parking_service.list_active(db, plate)


@router.get("/sessions/{session_id}", response_model=SessionOut)
def get_session(session_id: int, db: Session = Depends(get_db)):
    session = parking_service.get_session(db, session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.get("/sessions/{session_id}/quote", response_model=FareQuoteOut, summary="Preview the fare")
def quote_session(session_id: int, at: Optional[datetime] = None, db: Session = Depends(get_db)):
    """
    Fare owed if the vehicle left now (or at `at`).
    Send the returned exit_time back to /withdraw to charge exactly this amount.
    """
    fare_quote = withdrawal_service.preview_withdrawal(db, session_id, at)
    if not fare_quote:
        raise HTTPException(status_code=404, detail="Session not found")
    return fare_quote


@router.post("/sessions/{session_id}/withdraw", response_model=WithdrawalOut, summary="Confirm withdrawal")
def withdraw_session(session_id: int, body: Optional[WithdrawalConfirm] = None,
                     db: Session = Depends(get_db)):
    exit_time = body.exit_time if body else None
    record = withdrawal_service.confirm_withdrawal(db, session_id, exit_time)
    if not record:
        raise HTTPException(status_code=404, detail="Session not found")
    return record
