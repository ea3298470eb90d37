import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stockledger.database import Base
from stockledger.models.branch import Branch
from stockledger.models.product import Product


class Stock(Base):
    """On-hand quantity of one product at one branch."""

    __tablename__ = "stocks"
    __table_args__ = (
        UniqueConstraint("product_id", "branch_id", name="uq_stocks_product_branch"),
        CheckConstraint("quantity >= 0", name="ck_stocks_quantity_non_negative"),
    )

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    product_id: Mapped[str] = mapped_column(String, ForeignKey("products.id"), nullable=False)
    branch_id: Mapped[str] = mapped_column(String, ForeignKey("branches.id"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, default=0)
    unit: Mapped[str] = mapped_column(String, default="unit")
    memo: Mapped[str] = mapped_column(Text, default="")

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    product: Mapped["Product"] = relationship("Product")
    branch: Mapped["Branch"] = relationship("Branch")
