from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stockledger.config import settings
from stockledger.database import get_db
from stockledger.models.status import RecordStatus
from stockledger.schemas.entry import EntryCreate, EntryDeleted, EntryOut, EntryPage, EntryUpdate
from stockledger.schemas.stock import ReconcileReport, ReconcileRequest
from stockledger.services import stock_ledger

router = APIRouter(prefix="/inventory", tags=["Inventory"])


@router.get("", response_model=EntryPage)
def list_entries(
    page: int = 1,
    limit: int = settings.DEFAULT_PAGE_LIMIT,
    search: str = "",
    low_stock: bool = False,
    status: RecordStatus = RecordStatus.ACTIVE,
    db: Session = Depends(get_db),
):
    return stock_ledger.list_entries(db, page=page, limit=limit, search=search, low_stock=low_stock, status=status)


@router.post("", response_model=EntryOut, status_code=201)
def create_entry(data: EntryCreate, db: Session = Depends(get_db)):
    return stock_ledger.create_entry(db, data)


# Must be declared before /{entry_id}
@router.get("/drift", response_model=ReconcileReport)
def stock_drift(product_id: str | None = None, branch_id: str | None = None, db: Session = Depends(get_db)):
    """Compare every stock row with the sum of its entries without changing anything."""
    return stock_ledger.reconcile_stock(db, product_id=product_id, branch_id=branch_id, dry_run=True)


@router.post("/reconcile", response_model=ReconcileReport)
def reconcile_stock(data: ReconcileRequest | None = None, db: Session = Depends(get_db)):
    data = data or ReconcileRequest()
    return stock_ledger.reconcile_stock(db, product_id=data.product_id, branch_id=data.branch_id)


@router.get("/{entry_id}", response_model=EntryOut)
def get_entry(entry_id: str, db: Session = Depends(get_db)):
    return stock_ledger.get_entry(db, entry_id)


@router.put("/{entry_id}", response_model=EntryOut)
def update_entry(entry_id: str, data: EntryUpdate, db: Session = Depends(get_db)):
    return stock_ledger.update_entry(db, entry_id, data)


@router.delete("/{entry_id}", response_model=EntryDeleted)
def delete_entry(entry_id: str, db: Session = Depends(get_db)):
    return stock_ledger.delete_entry(db, entry_id)
