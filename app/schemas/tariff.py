from pydantic import BaseModel


class TariffOut(BaseModel):
    key: str
    label: str
    day_rate: float
    night_rate: float

    class Config:
        from_attributes = True
