"""Unit tests for vehicle entry and active-session lookup."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import datetime
from unittest.mock import MagicMock, patch
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.database import create_tables
from app.services.parking_service import (
    coerce_amount, get_session, list_active, normalize_plate, register_entry,
)
from app.services.fare_engine import quote
from app.services.rate_catalog import TariffClass


@pytest.fixture
def db():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    create_tables(bind=engine)
    session = sessionmaker(bind=engine, autoflush=False)()
    yield session
    session.close()
    engine.dispose()


class TestNormalization:
    def test_plate_trimmed_and_uppercased(self):
        assert normalize_plate("  abc-123 ") == "ABC-123"

    def test_empty_plate(self):
        assert normalize_plate(None) == ""
        assert normalize_plate("   ") == ""

    @pytest.mark.parametrize("raw,expected", [
        (None, 0.0), ("", 0.0), ("abc", 0.0), ("-3", 0.0), ("nan", 0.0),
        ("inf", 0.0), ("Infinity", 0.0), (float("inf"), 0.0),
        ("12.5", 12.5), (10, 10.0),
    ])
    def test_coerce_amount(self, raw, expected):
        assert coerce_amount(raw) == expected


class TestRegisterEntry:
    def test_empty_plate_rejected(self):
        db = MagicMock()
        with pytest.raises(ValueError):
            register_entry(db, "   ", "auto_viejo")
        db.add.assert_not_called()

    def test_rates_snapshotted_from_catalog(self, db):
        s = register_entry(db, " xyz-1 ", "camion", "15", now=datetime(2024, 1, 1, 9, 0))
        assert s.id is not None
        assert s.plate_number == "XYZ-1"
        assert (s.tariff_key, s.tariff_label) == ("camion", "Camión")
        assert (s.day_rate, s.night_rate) == (7, 12)
        assert s.entry_time == datetime(2024, 1, 1, 9, 0)
        assert s.advance_payment == 15

    def test_later_catalog_change_does_not_reprice(self, db):
        s = register_entry(db, "XYZ-1", "auto_viejo")
        with patch("app.services.rate_catalog.TARIFFS",
                   {"auto_viejo": TariffClass("auto_viejo", "Auto viejo", 50, 70)}):
            db.expire_all()
            stored = get_session(db, s.id)
        assert (stored.day_rate, stored.night_rate) == (5, 7)

    def test_unknown_tariff_is_zero_rated(self, db):
        s = register_entry(db, "XYZ-1", "tractor")
        assert (s.tariff_label, s.day_rate, s.night_rate) == ("tractor", 0, 0)

    def test_default_tariff(self, db):
        s = register_entry(db, "XYZ-1")
        assert s.tariff_key == "auto_viejo"

    def test_invalid_advance_becomes_zero(self, db):
        s = register_entry(db, "XYZ-1", "auto_viejo", "ten soles")
        assert s.advance_payment == 0

    def test_infinite_advance_still_quotes(self, db):
        s = register_entry(db, "XYZ-1", "auto_viejo", "Infinity", now=datetime(2024, 1, 1, 9, 0))
        q = quote(s, datetime(2024, 1, 3, 16, 0))
        assert s.advance_payment == 0
        assert (q.total_fare, q.amount_due) == (29, 29)

    def test_duplicate_plates_allowed(self, db):
        register_entry(db, "XYZ-1", "auto_viejo")
        register_entry(db, "xyz-1", "auto_nuevo")
        assert len(list_active(db, "XYZ-1")) == 2


class TestListActive:
    def test_newest_first_and_filtered(self, db):
        register_entry(db, "AAA-111", now=datetime(2024, 1, 1, 8, 0))
        register_entry(db, "BBB-222", now=datetime(2024, 1, 1, 9, 0))
        register_entry(db, "AAB-333", now=datetime(2024, 1, 1, 10, 0))

        assert [s.plate_number for s in list_active(db)] == ["AAB-333", "BBB-222", "AAA-111"]
        assert [s.plate_number for s in list_active(db, "aa")] == ["AAB-333", "AAA-111"]
        assert list_active(db, "zzz") == []

    def test_get_missing_session(self, db):
        assert get_session(db, 999) is None
