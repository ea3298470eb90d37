from datetime import datetime

from pydantic import BaseModel, Field

from stockledger.models.status import RecordStatus


class BranchCreate(BaseModel):
    branch_name: str = Field(min_length=1)
    branch_code: str | None = None
    tel: str = ""
    memo: str = ""


class BranchSummary(BaseModel):
    id: str
    branch_name: str
    branch_code: str | None

    model_config = {"from_attributes": True}


class BranchOut(BranchSummary):
    tel: str
    memo: str
    status: RecordStatus
    created_at: datetime
    updated_at: datetime
