from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class WithdrawalConfirm(BaseModel):
    exit_time: Optional[datetime] = None   # pass the quote's exit_time to charge what was shown


class WithdrawalOut(BaseModel):
    id: int
    session_id: int
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

    class Config:
        from_attributes = True
