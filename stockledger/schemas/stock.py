from datetime import datetime

from pydantic import BaseModel

from stockledger.schemas.branch import BranchSummary
from stockledger.schemas.common import Identifier
from stockledger.schemas.product import ProductSummary


class StockOut(BaseModel):
    id: str
    product_id: str
    branch_id: str
    quantity: int
    unit: str
    memo: str
    product: ProductSummary
    branch: BranchSummary
    updated_at: datetime

    model_config = {"from_attributes": True}


class StockMovementOut(BaseModel):
    id: str
    stock_id: str
    product_id: str
    branch_id: str
    entry_id: str
    change: int
    reason: str
    balance_after: int
    note: str
    created_at: datetime

    model_config = {"from_attributes": True}


# --- Reconciliation ---

class ReconcileRequest(BaseModel):
    product_id: Identifier | None = None
    branch_id: Identifier | None = None


class StockDrift(BaseModel):
    product_id: str
    branch_id: str
    stock_id: str | None  # None when the pair had no stock row
    recorded: int
    expected: int


class ReconcileReport(BaseModel):
    dry_run: bool
    pairs_checked: int
    drifts: list[StockDrift]
