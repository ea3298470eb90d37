import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from stockledger.database import Base
from stockledger.models.status import RecordStatus, status_column_type


class Branch(Base):
    """A location that holds inventory."""

    __tablename__ = "branches"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    branch_name: Mapped[str] = mapped_column(String, nullable=False)
    branch_code: Mapped[str | None] = mapped_column(String, unique=True, nullable=True)
    tel: Mapped[str] = mapped_column(String, default="")
    memo: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[str] = mapped_column(status_column_type(), default=RecordStatus.ACTIVE)

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())
