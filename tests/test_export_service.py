"""Unit tests for the CSV export."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import csv
import io
import pytest
from datetime import datetime
from types import SimpleNamespace
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.database import create_tables
from app.models.withdrawal import WithdrawalRecord
from app.services.export_service import COLUMNS, export_and_purge, render_csv
from app.services.parking_service import register_entry
from app.services.withdrawal_service import confirm_withdrawal


@pytest.fixture
def db():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    create_tables(bind=engine)
    session = sessionmaker(bind=engine, autoflush=False)()
    yield session
    session.close()
    engine.dispose()


def make_record(**overrides):
    fields = dict(
        plate_number="ABC-123", entry_time=datetime(2024, 1, 1, 9, 0),
        exit_time=datetime(2024, 1, 3, 16, 0), tariff_key="camion", tariff_label="Camión",
        day_rate=7, night_rate=12, advance_payment=10, total_fare=29, amount_due=19,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


class TestRenderCsv:
    def test_header_and_row(self):
        text = render_csv([make_record()])
        rows = list(csv.reader(io.StringIO(text)))
        assert rows[0] == COLUMNS
        assert rows[1] == [
            "ABC-123", "2024-01-01T09:00:00", "2024-01-03T16:00:00", "camion", "Camión",
            "7.00", "12.00", "10.00", "29.00", "19.00",
        ]

    def test_every_field_quoted(self):
        line = render_csv([make_record()]).splitlines()[1]
        assert line.startswith('"ABC-123","2024-01-01T09:00:00"')

    def test_quotes_in_values_are_escaped(self):
        text = render_csv([make_record(tariff_label='Auto "clásico"')])
        assert list(csv.reader(io.StringIO(text)))[1][4] == 'Auto "clásico"'

    def test_money_always_two_decimals(self):
        row = list(csv.reader(io.StringIO(render_csv([make_record(total_fare=2.5, amount_due=0)]))))[1]
        assert row[8:] == ["2.50", "0.00"]


class TestExportAndPurge:
    def test_nothing_to_export(self, db):
        assert export_and_purge(db) == ("", 0)

    def test_exported_rows_are_purged(self, db):
        for plate in ("AAA-1", "BBB-2"):
            s = register_entry(db, plate, "auto_viejo", now=datetime(2024, 1, 1, 9, 0))
            confirm_withdrawal(db, s.id, datetime(2024, 1, 3, 16, 0))

        text, count = export_and_purge(db)

        assert count == 2
        assert len(text.splitlines()) == 3
        assert db.query(WithdrawalRecord).count() == 0
        assert export_and_purge(db) == ("", 0)
