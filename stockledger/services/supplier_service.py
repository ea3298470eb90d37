from sqlalchemy.orm import Session

from stockledger.models.supplier import Supplier
from stockledger.schemas.supplier import SupplierCreate


def create_supplier(db: Session, data: SupplierCreate) -> Supplier:
    supplier = Supplier(
        supplier_name=data.supplier_name,
        company_name=data.company_name,
        tel=data.tel,
        email=data.email,
        memo=data.memo,
    )
    db.add(supplier)
    db.commit()
    db.refresh(supplier)
    return supplier


def get_supplier(db: Session, supplier_id: str) -> Supplier | None:
    return db.query(Supplier).filter(Supplier.id == supplier_id).first()


def list_suppliers(db: Session, skip: int = 0, limit: int = 100) -> list[Supplier]:
    return db.query(Supplier).order_by(Supplier.supplier_name).offset(skip).limit(limit).all()
