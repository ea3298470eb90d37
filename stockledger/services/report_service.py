from sqlalchemy.orm import Session, joinedload

from stockledger.models.entry import Entry
from stockledger.models.stock import Stock
from stockledger.models.stock_movement import StockMovement
from stockledger.services.stock_ledger import LOW_STOCK_THRESHOLD


def _stock_row(s: Stock) -> dict:
    return {
        "stock_id": s.id,
        "product_id": s.product_id,
        "product_code": s.product.product_code,
        "product_name": s.product.product_name,
        "branch_id": s.branch_id,
        "branch_name": s.branch.branch_name,
        "quantity": s.quantity,
        "unit": s.unit,
    }


def inventory_summary(db: Session, recent_limit: int = 20) -> dict:
    stocks = (
        db.query(Stock)
        .options(joinedload(Stock.product), joinedload(Stock.branch))
        .order_by(Stock.quantity.asc(), Stock.id)
        .all()
    )
    low_stock = [s for s in stocks if s.quantity < LOW_STOCK_THRESHOLD]
    out_of_stock = [s for s in stocks if s.quantity == 0]

    total_cost = sum(s.quantity * (s.product.cost_price or 0) for s in stocks)
    total_sell = sum(s.quantity * (s.product.sell_price or 0) for s in stocks)

    recent_entries = (
        db.query(Entry)
        .options(joinedload(Entry.product), joinedload(Entry.supplier))
        .order_by(Entry.entry_date.desc(), Entry.id)
        .limit(recent_limit)
        .all()
    )

    return {
        "stock_levels": [_stock_row(s) for s in stocks],
        "low_stock_items": [_stock_row(s) for s in low_stock],
        "out_of_stock_items": [_stock_row(s) for s in out_of_stock],
        "recent_entries": [
            {
                "entry_id": e.id,
                "product_name": e.product.product_name,
                "supplier_name": e.supplier.supplier_name,
                "quantity": e.quantity,
                "entry_price": e.entry_price,
                "entry_date": e.entry_date.isoformat() if e.entry_date else None,
            }
            for e in recent_entries
        ],
        "by_branch": _group_by_branch(stocks),
        "summary": {
            "total_stock_rows": len(stocks),
            "total_units_in_stock": sum(s.quantity for s in stocks),
            "low_stock_count": len(low_stock),
            "out_of_stock_count": len(out_of_stock),
            "total_cost_value": round(total_cost, 2),
            "total_sell_value": round(total_sell, 2),
            "potential_profit": round(total_sell - total_cost, 2),
        },
    }


def _group_by_branch(stocks: list[Stock]) -> list[dict]:
    branches: dict[str, dict] = {}
    for s in stocks:
        if s.branch_id not in branches:
            branches[s.branch_id] = {
                "branch_id": s.branch_id,
                "branch_name": s.branch.branch_name,
                "product_count": 0,
                "total_units": 0,
                "total_cost_value": 0.0,
            }
        b = branches[s.branch_id]
        b["product_count"] += 1
        b["total_units"] += s.quantity
        b["total_cost_value"] += s.quantity * (s.product.cost_price or 0)
    for b in branches.values():
        b["total_cost_value"] = round(b["total_cost_value"], 2)
    return list(branches.values())


def inventory_movement(
    db: Session,
    product_id: str | None = None,
    branch_id: str | None = None,
    limit: int = 50,
) -> list[dict]:
    q = db.query(StockMovement)
    if product_id:
        q = q.filter(StockMovement.product_id == product_id)
    if branch_id:
        q = q.filter(StockMovement.branch_id == branch_id)
    movements = q.order_by(StockMovement.created_at.desc()).limit(limit).all()

    return [
        {
            "id": m.id,
            "stock_id": m.stock_id,
            "product_id": m.product_id,
            "branch_id": m.branch_id,
            "entry_id": m.entry_id,
            "change": m.change,
            "reason": m.reason,
            "balance_after": m.balance_after,
            "note": m.note,
            "created_at": m.created_at.isoformat() if m.created_at else None,
        }
        for m in movements
    ]
