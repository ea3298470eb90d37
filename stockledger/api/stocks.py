from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from stockledger.database import get_db
from stockledger.schemas.stock import StockMovementOut, StockOut
from stockledger.services import stock_service

router = APIRouter(prefix="/stocks", tags=["Stocks"])


@router.get("", response_model=list[StockOut])
def list_stocks(
    product_id: str | None = None,
    branch_id: str | None = None,
    low_stock: bool = False,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    return stock_service.list_stocks(
        db, product_id=product_id, branch_id=branch_id, low_stock=low_stock, skip=skip, limit=limit
    )


@router.get("/{stock_id}", response_model=StockOut)
def get_stock(stock_id: str, db: Session = Depends(get_db)):
    stock = stock_service.get_stock(db, stock_id)
    if not stock:
        raise HTTPException(404, "Stock not found")
    return stock


@router.get("/{stock_id}/movements", response_model=list[StockMovementOut])
def get_stock_movements(stock_id: str, db: Session = Depends(get_db)):
    if not stock_service.get_stock(db, stock_id):
        raise HTTPException(404, "Stock not found")
    return stock_service.get_stock_movements(db, stock_id)
