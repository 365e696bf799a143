# app/services/export_service.py
"""
CSV export of the withdrawal history.
Exported rows are purged in the same transaction that read them.
"""

import csv
import io
from typing import Iterable
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.models.withdrawal import WithdrawalRecord
from app.services.withdrawal_service import list_withdrawals
from app.utils.logger import get_logger

logger = get_logger(__name__)

COLUMNS = [
    "plate_number", "entry_time", "exit_time", "tariff_key", "tariff_label",
    "day_rate", "night_rate", "advance_payment", "total_fare", "amount_due",
]
MONEY_COLUMNS = {"day_rate", "night_rate", "advance_payment", "total_fare", "amount_due"}


def _cell(record: WithdrawalRecord, column: str) -> str:
    value = getattr(record, column)
    if column in MONEY_COLUMNS:
        return f"{(value or 0):.2f}"
    if value is None:
        return ""
    if hasattr(value, "isoformat"):
        return value.isoformat(timespec="seconds")
    return str(value)


def render_csv(records: Iterable[WithdrawalRecord]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(COLUMNS)
    for r in records:
        writer.writerow([_cell(r, c) for c in COLUMNS])
    return buf.getvalue()


def export_and_purge(db: Session) -> tuple[str, int]:
    """Render pending withdrawals as CSV and delete them. ("", 0) when empty."""
    records = list_withdrawals(db)
    if not records:
        logger.info("[EXPORT] No withdrawals to export")
        return "", 0

    text = render_csv(records)
    ids = [r.id for r in records]
    try:
        db.query(WithdrawalRecord).filter(WithdrawalRecord.id.in_(ids)).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error("[EXPORT] Failed to purge exported withdrawals", exc_info=True)
        raise

    logger.info(f"[EXPORT] {len(ids)} withdrawals exported and purged")
    return text, len(ids)
