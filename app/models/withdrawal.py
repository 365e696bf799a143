# app/models/withdrawal.py
"""
Withdrawal history: closed sessions with their final charge.
Append-only; rows are purged once exported to CSV.
"""

from sqlalchemy import Column, Integer, String, DateTime, Float
from app.database import Base


class WithdrawalRecord(Base):
    __tablename__ = "withdrawals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(Integer, nullable=False)       # id of the deleted parking session
    plate_number = Column(String(50), nullable=False, index=True)
    tariff_key = Column(String(50), nullable=False)
    tariff_label = Column(String(100), nullable=False)
    day_rate = Column(Float, nullable=False, default=0)
    night_rate = Column(Float, nullable=False, default=0)
    entry_time = Column(DateTime, nullable=False)
    exit_time = Column(DateTime, nullable=False, index=True)
    advance_payment = Column(Float, nullable=False, default=0)
    total_fare = Column(Float, nullable=False)
    amount_due = Column(Float, nullable=False)
    created_at = Column(DateTime)

    def __repr__(self):
        return f"<WithdrawalRecord {self.id} plate={self.plate_number} total={self.total_fare}>"
