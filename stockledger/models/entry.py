import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stockledger.database import Base
from stockledger.models.branch import Branch
from stockledger.models.product import Product
from stockledger.models.status import RecordStatus, status_column_type
from stockledger.models.supplier import Supplier


class Entry(Base):
    """Goods received from a supplier at a branch. Drives the matching Stock row."""

    __tablename__ = "entries"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    product_id: Mapped[str] = mapped_column(String, ForeignKey("products.id"), nullable=False, index=True)
    supplier_id: Mapped[str] = mapped_column(String, ForeignKey("suppliers.id"), nullable=False)
    branch_id: Mapped[str] = mapped_column(String, ForeignKey("branches.id"), nullable=False, index=True)

    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    entry_price: Mapped[float] = mapped_column(Float, default=0.0)  # per unit
    entry_date: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)
    invoice: Mapped[str | None] = mapped_column(String, nullable=True)
    memo: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(status_column_type(), default=RecordStatus.ACTIVE)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)  # list order relies on microsecond precision
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    product: Mapped["Product"] = relationship("Product")
    branch: Mapped["Branch"] = relationship("Branch")
    supplier: Mapped["Supplier"] = relationship("Supplier")
