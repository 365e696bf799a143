"""Withdrawal history and CSV export."""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from app.config import settings
from app.database import get_db
from app.schemas.withdrawal import WithdrawalOut
from app.services import export_service, withdrawal_service

router = APIRouter()


@router.get("/withdrawals", response_model=list[WithdrawalOut], summary="Withdrawals pending export")
def get_withdrawals(db: Session = Depends(get_db)):
    return withdrawal_service.list_withdrawals(db)


@router.get("/withdrawals/export", summary="Download withdrawals as CSV and clear them")
def export_withdrawals(db: Session = Depends(get_db)):
    """Returns 204 when there is nothing to export."""
    text, count = export_service.export_and_purge(db)
    if not count:
        return Response(status_code=204)
    return Response(
        content=text.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{settings.EXPORT_FILENAME}"',
            "X-Exported-Count": str(count),
        },
    )
