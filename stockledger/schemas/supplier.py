from datetime import datetime

from pydantic import BaseModel, Field

from stockledger.models.status import RecordStatus


class SupplierCreate(BaseModel):
    supplier_name: str = Field(min_length=1)
    company_name: str = ""
    tel: str = ""
    email: str = ""
    memo: str = ""


class SupplierSummary(BaseModel):
    id: str
    supplier_name: str
    company_name: str

    model_config = {"from_attributes": True}


class SupplierOut(SupplierSummary):
    tel: str
    email: str
    memo: str
    status: RecordStatus
    created_at: datetime
    updated_at: datetime
