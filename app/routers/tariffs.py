"""Tariff catalog endpoint. Feeds the quick-select buttons on the entry form."""

from fastapi import APIRouter
from app.schemas.tariff import TariffOut
from app.services.rate_catalog import list_tariffs, lookup

router = APIRouter()


@router.get("/tariffs", response_model=list[TariffOut], summary="List vehicle classes and rates")
def get_tariffs():
    return list_tariffs()


@router.get("/tariffs/{key}", response_model=TariffOut, summary="Look up one vehicle class")
def get_tariff(key: str):
    """Unknown keys are not an error: they come back with zero rates."""
    return lookup(key)
