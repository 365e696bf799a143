# app/models/parking_session.py
"""
Active parking sessions, one row per vehicle currently in the lot.
Rates are copied from the tariff catalog at entry time so later catalog
changes never reprice an open session. Rows are deleted on withdrawal.
"""

from sqlalchemy import Column, Integer, String, DateTime, Float
from app.database import Base


class ParkingSession(Base):
    __tablename__ = "parking_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    plate_number = Column(String(50), nullable=False, index=True)   # not unique: re-entry allowed
    tariff_key = Column(String(50), nullable=False)
    tariff_label = Column(String(100), nullable=False)
    day_rate = Column(Float, nullable=False, default=0)
    night_rate = Column(Float, nullable=False, default=0)
    entry_time = Column(DateTime, nullable=False, index=True)       # local time of the lot
    advance_payment = Column(Float, nullable=False, default=0)

    def __repr__(self):
        return f"<ParkingSession {self.id} plate={self.plate_number} tariff={self.tariff_key}>"
