from enum import Enum as PyEnum

from sqlalchemy import Enum


class RecordStatus(str, PyEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"


def status_column_type() -> Enum:
    return Enum(RecordStatus, values_callable=lambda x: [e.value for e in x])
