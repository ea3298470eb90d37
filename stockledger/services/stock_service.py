from sqlalchemy.orm import Session, joinedload

from stockledger.models.stock import Stock
from stockledger.models.stock_movement import StockMovement
from stockledger.services.stock_ledger import LOW_STOCK_THRESHOLD


def get_stock(db: Session, stock_id: str) -> Stock | None:
    return db.query(Stock).filter(Stock.id == stock_id).first()


def list_stocks(
    db: Session,
    product_id: str | None = None,
    branch_id: str | None = None,
    low_stock: bool = False,
    skip: int = 0,
    limit: int = 100,
) -> list[Stock]:
    q = db.query(Stock).options(joinedload(Stock.product), joinedload(Stock.branch))
    if product_id:
        q = q.filter(Stock.product_id == product_id)
    if branch_id:
        q = q.filter(Stock.branch_id == branch_id)
    if low_stock:
        q = q.filter(Stock.quantity < LOW_STOCK_THRESHOLD)
    return q.order_by(Stock.updated_at.desc(), Stock.id).offset(skip).limit(limit).all()


def get_stock_movements(db: Session, stock_id: str) -> list[StockMovement]:
    return (
        db.query(StockMovement)
        .filter(StockMovement.stock_id == stock_id)
        .order_by(StockMovement.created_at.desc())
        .all()
    )
