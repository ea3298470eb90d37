from datetime import datetime

from pydantic import BaseModel, Field

from stockledger.models.status import RecordStatus


class ProductCreate(BaseModel):
    product_code: str = Field(min_length=1)
    product_name: str = Field(min_length=1)
    category: str = ""
    unit: str = "unit"
    cost_price: float = Field(default=0.0, ge=0)
    sell_price: float = Field(default=0.0, ge=0)
    status: RecordStatus = RecordStatus.ACTIVE


class ProductSummary(BaseModel):
    id: str
    product_name: str
    product_code: str
    unit: str

    model_config = {"from_attributes": True}


class ProductOut(ProductSummary):
    category: str
    cost_price: float
    sell_price: float
    status: RecordStatus
    created_at: datetime
    updated_at: datetime
