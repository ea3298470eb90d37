from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from stockledger.models.status import RecordStatus
from stockledger.schemas.branch import BranchCreate, BranchSummary
from stockledger.schemas.common import Identifier, Pagination
from stockledger.schemas.product import ProductSummary
from stockledger.schemas.supplier import SupplierSummary


# --- Branch reference on entry creation ---

@dataclass(frozen=True)
class ExistingBranch:
    branch_id: str


@dataclass(frozen=True)
class NewBranch:
    fields: BranchCreate


BranchRef = ExistingBranch | NewBranch


class BranchConnect(BaseModel):
    branch_id: Identifier


class BranchInput(BaseModel):
    """Either create a branch inline or connect to an existing one."""

    create: BranchCreate | None = None
    connect: BranchConnect | None = None

    @model_validator(mode="after")
    def exactly_one(self):
        if (self.create is None) == (self.connect is None):
            raise ValueError("branch_input needs exactly one of 'create' or 'connect'")
        return self


# --- Entry schemas ---

class EntryCreate(BaseModel):
    product_id: Identifier
    supplier_id: Identifier
    branch_id: Identifier | None = None
    branch_input: BranchInput | None = None
    quantity: int = Field(gt=0)
    entry_price: float = Field(ge=0)
    entry_date: datetime | None = None
    invoice: str | None = None
    memo: str | None = None
    status: RecordStatus = RecordStatus.ACTIVE

    @model_validator(mode="after")
    def one_branch_reference(self):
        if (self.branch_id is None) == (self.branch_input is None):
            raise ValueError("Provide exactly one of branch_id or branch_input")
        return self

    def branch_ref(self) -> BranchRef:
        if self.branch_id is not None:
            return ExistingBranch(self.branch_id)
        if self.branch_input.connect is not None:
            return ExistingBranch(self.branch_input.connect.branch_id)
        return NewBranch(self.branch_input.create)


class EntryUpdate(BaseModel):
    product_id: Identifier | None = None
    supplier_id: Identifier | None = None
    branch_id: Identifier | None = None
    quantity: int | None = Field(default=None, gt=0)
    entry_price: float | None = Field(default=None, ge=0)
    entry_date: datetime | None = None
    invoice: str | None = None
    memo: str | None = None
    status: RecordStatus | None = None


class EntryOut(BaseModel):
    id: str
    product_id: str
    supplier_id: str
    branch_id: str
    quantity: int
    entry_price: float
    entry_date: datetime
    invoice: str | None
    memo: str | None
    status: RecordStatus
    product: ProductSummary
    branch: BranchSummary
    supplier: SupplierSummary
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class EntryPage(BaseModel):
    stock_entries: list[EntryOut]
    pagination: Pagination

    model_config = {"from_attributes": True}


class EntryDeleted(BaseModel):
    entry_id: str
