from pydantic import BaseModel
from datetime import datetime
from typing import Optional, Union


class SessionCreate(BaseModel):
    plate_number: str
    tariff_key: Optional[str] = None                        # defaults to settings.DEFAULT_TARIFF
    advance_payment: Optional[Union[float, str]] = None     # blank/invalid → 0


class SessionOut(BaseModel):
    id: int
    plate_number: str
    tariff_key: str
    tariff_label: str
    day_rate: float
    night_rate: float
    entry_time: datetime
    advance_payment: float

    class Config:
        from_attributes = True


class FareQuoteOut(BaseModel):
    session_id: int
    plate_number: str
    exit_time: datetime
    total_fare: float
    advance_payment: float
    amount_due: float

    class Config:
        from_attributes = True
