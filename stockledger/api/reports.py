from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stockledger.database import get_db
from stockledger.services import report_service

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/inventory")
def inventory_report(db: Session = Depends(get_db)):
    return report_service.inventory_summary(db)


@router.get("/inventory-movement")
def inventory_movement_report(
    product_id: str | None = None,
    branch_id: str | None = None,
    limit: int = 50,
    db: Session = Depends(get_db),
):
    return report_service.inventory_movement(db, product_id=product_id, branch_id=branch_id, limit=limit)
