# app/services/rate_catalog.py
"""
Tariff catalog: vehicle class → (label, day rate, night rate).
Fixed at startup. Sessions copy the rates they need at entry time,
so nothing here is ever read again once a vehicle is in the lot.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TariffClass:
    key: str
    label: str
    day_rate: float
    night_rate: float


_CATALOG = (
    TariffClass("auto_viejo", "Auto viejo", 5, 7),
    TariffClass("auto_nuevo", "Auto nuevo", 6, 8),
    TariffClass("mototaxi", "Mototaxi", 2, 4),
    TariffClass("moto_lineal", "Moto lineal", 2, 3),
    TariffClass("triciclo", "Triciclo", 1, 4),
    TariffClass("afilador", "Afilador", 1, 2),
    TariffClass("camion", "Camión", 7, 12),
    TariffClass("bicicleta", "Bicicleta", 1, 2),
)

TARIFFS = {t.key: t for t in _CATALOG}


def lookup(key: str) -> TariffClass:
    """Return the tariff for key. Unknown keys get zero rates and the raw key as label."""
    tariff = TARIFFS.get(key)
    if tariff is None:
        return TariffClass(key=key, label=key, day_rate=0, night_rate=0)
    return tariff


def list_tariffs() -> list[TariffClass]:
    return list(_CATALOG)
