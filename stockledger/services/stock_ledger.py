"""Inbound stock entries and the per-(product, branch) stock they drive.

Every write runs as one transaction: the entry row and the stock row change
together or not at all. A stock quantity is never allowed below zero.
"""

import logging
import math

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, contains_eager, joinedload

from stockledger.database import transaction
from stockledger.models.branch import Branch
from stockledger.models.entry import Entry
from stockledger.models.product import Product
from stockledger.models.status import RecordStatus
from stockledger.models.stock import Stock
from stockledger.models.stock_movement import StockMovement
from stockledger.models.supplier import Supplier
from stockledger.schemas.entry import EntryCreate, EntryUpdate, NewBranch
from stockledger.services import branch_service
from stockledger.services.errors import InvariantViolationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

LOW_STOCK_THRESHOLD = 50

# Fields an update may explicitly clear with null
NULLABLE_FIELDS = {"invoice", "memo"}


def _find_stock(db: Session, product_id: str, branch_id: str) -> Stock | None:
    return db.query(Stock).filter(Stock.product_id == product_id, Stock.branch_id == branch_id).first()


def _record_movement(db: Session, stock: Stock, change: int, reason: str, entry_id: str = "", note: str = "") -> None:
    db.add(
        StockMovement(
            stock_id=stock.id,
            product_id=stock.product_id,
            branch_id=stock.branch_id,
            entry_id=entry_id,
            change=change,
            reason=reason,
            balance_after=stock.quantity,
            note=note,
        )
    )


def _new_stock(db: Session, product_id: str, branch_id: str, quantity: int, memo: str | None = None) -> Stock:
    product = db.get(Product, product_id)
    stock = Stock(
        product_id=product_id,
        branch_id=branch_id,
        quantity=quantity,
        unit=(product.unit if product and product.unit else "unit"),
        memo=memo or "",
    )
    db.add(stock)
    db.flush()
    return stock


def _adjust_stock(
    db: Session,
    product_id: str,
    branch_id: str,
    delta: int,
    reason: str,
    entry_id: str = "",
    memo: str | None = None,
) -> Stock | None:
    """Apply delta to the pair's stock row, creating the row for a positive delta if missing."""
    stock = _find_stock(db, product_id, branch_id)

    if stock is None:
        if delta <= 0:
            # Nothing to take the quantity from; reconcile_stock repairs the drift
            logger.warning(
                "No stock row for product %s at branch %s; change of %d from entry %s not applied",
                product_id, branch_id, delta, entry_id,
            )
            return None
        stock = _new_stock(db, product_id, branch_id, delta, memo)
        _record_movement(db, stock, delta, reason, entry_id, note="Stock row created")
        return stock

    new_qty = stock.quantity + delta
    if new_qty < 0:
        raise InvariantViolationError(
            "Cannot reduce stock below zero",
            details={"stock_id": stock.id, "quantity": stock.quantity, "change": delta},
        )
    stock.quantity = new_qty
    db.flush()
    _record_movement(db, stock, delta, reason, entry_id)
    return stock


def _check_references(
    db: Session,
    product_id: str | None = None,
    branch_id: str | None = None,
    supplier_id: str | None = None,
) -> None:
    missing = []
    for field, model, ref_id in (
        ("product_id", Product, product_id),
        ("branch_id", Branch, branch_id),
        ("supplier_id", Supplier, supplier_id),
    ):
        if ref_id is not None and db.get(model, ref_id) is None:
            missing.append(field)
    if missing:
        raise ValidationError("Invalid product, branch, or supplier ID", details={"missing": missing})


def get_entry(db: Session, entry_id: str) -> Entry:
    entry = (
        db.query(Entry)
        .options(joinedload(Entry.product), joinedload(Entry.branch), joinedload(Entry.supplier))
        .filter(Entry.id == entry_id)
        .first()
    )
    if not entry:
        raise NotFoundError("Stock entry not found")
    return entry


def create_entry(db: Session, data: EntryCreate) -> Entry:
    with transaction(db):
        branch_ref = data.branch_ref()
        if isinstance(branch_ref, NewBranch):
            branch_id = branch_service.build_branch(db, branch_ref.fields).id
        else:
            branch_id = branch_ref.branch_id

        _check_references(db, product_id=data.product_id, branch_id=branch_id, supplier_id=data.supplier_id)

        entry = Entry(
            product_id=data.product_id,
            supplier_id=data.supplier_id,
            branch_id=branch_id,
            quantity=data.quantity,
            entry_price=data.entry_price,
            invoice=data.invoice,
            memo=data.memo,
            status=data.status,
        )
        if data.entry_date is not None:
            entry.entry_date = data.entry_date
        db.add(entry)
        db.flush()

        _adjust_stock(db, entry.product_id, entry.branch_id, entry.quantity, "entry_created", entry.id, entry.memo)

    logger.info("Entry %s created: +%d of product %s at branch %s", entry.id, entry.quantity, entry.product_id, branch_id)
    db.refresh(entry)
    return entry


def update_entry(db: Session, entry_id: str, data: EntryUpdate) -> Entry:
    with transaction(db):
        entry = db.get(Entry, entry_id)
        if not entry:
            raise NotFoundError("Stock entry not found")

        update_data = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }
        _check_references(
            db,
            product_id=update_data.get("product_id"),
            branch_id=update_data.get("branch_id"),
            supplier_id=update_data.get("supplier_id"),
        )

        old_pair = (entry.product_id, entry.branch_id)
        old_qty = entry.quantity
        for field, value in update_data.items():
            setattr(entry, field, value)
        db.flush()
        new_pair = (entry.product_id, entry.branch_id)

        if new_pair == old_pair:
            quantity_diff = entry.quantity - old_qty
            if quantity_diff != 0:
                _adjust_stock(db, *new_pair, quantity_diff, "entry_updated", entry.id, update_data.get("memo"))
        else:
            # Entry moved to another product/branch: take it out of the old pair, add to the new one
            _adjust_stock(db, *old_pair, -old_qty, "entry_updated", entry.id)
            _adjust_stock(db, *new_pair, entry.quantity, "entry_updated", entry.id, update_data.get("memo"))

    logger.info("Entry %s updated: %s", entry_id, ", ".join(sorted(update_data)) or "no changes")
    db.refresh(entry)
    return entry


def delete_entry(db: Session, entry_id: str) -> dict:
    with transaction(db):
        entry = db.get(Entry, entry_id)
        if not entry:
            raise NotFoundError("Stock entry not found")

        product_id, branch_id, quantity = entry.product_id, entry.branch_id, entry.quantity
        db.delete(entry)
        db.flush()

        _adjust_stock(db, product_id, branch_id, -quantity, "entry_deleted", entry_id)

    logger.info("Entry %s deleted: -%d of product %s at branch %s", entry_id, quantity, product_id, branch_id)
    return {"entry_id": entry_id}


def list_entries(
    db: Session,
    page: int = 1,
    limit: int = 10,
    search: str = "",
    low_stock: bool = False,
    status: RecordStatus | None = RecordStatus.ACTIVE,
) -> dict:
    if page < 1 or limit < 1:
        raise ValidationError("Invalid pagination parameters", details={"page": page, "limit": limit})

    q = db.query(Entry).join(Entry.product)
    if status is not None:
        q = q.filter(Entry.status == status)
    if search:
        q = q.filter(
            or_(
                Product.product_name.icontains(search, autoescape=True),
                Product.product_code.icontains(search, autoescape=True),
                Entry.invoice.icontains(search, autoescape=True),
                Entry.memo.icontains(search, autoescape=True),
            )
        )
    if low_stock:
        q = q.filter(Entry.quantity < LOW_STOCK_THRESHOLD)

    total = q.count()
    offset = (page - 1) * limit
    entries = []
    # Past the last row there is nothing to fetch; offsets this large may not even bind
    if offset < total:
        entries = (
            q.options(contains_eager(Entry.product), joinedload(Entry.branch), joinedload(Entry.supplier))
            .order_by(Entry.created_at.desc(), Entry.id)
            .offset(offset)
            .limit(min(limit, total - offset))
            .all()
        )

    return {
        "stock_entries": entries,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit),
        },
    }


def reconcile_stock(
    db: Session,
    product_id: str | None = None,
    branch_id: str | None = None,
    dry_run: bool = False,
) -> dict:
    """Recompute stock quantities from the entry sum and repair any drift.

    With dry_run the drift is only reported.
    """
    sums_q = db.query(Entry.product_id, Entry.branch_id, func.sum(Entry.quantity)).group_by(
        Entry.product_id, Entry.branch_id
    )
    stocks_q = db.query(Stock)
    if product_id:
        sums_q = sums_q.filter(Entry.product_id == product_id)
        stocks_q = stocks_q.filter(Stock.product_id == product_id)
    if branch_id:
        sums_q = sums_q.filter(Entry.branch_id == branch_id)
        stocks_q = stocks_q.filter(Stock.branch_id == branch_id)

    expected = {(p, b): int(total or 0) for p, b, total in sums_q.all()}
    stocks = {(s.product_id, s.branch_id): s for s in stocks_q.all()}
    pairs = sorted(set(expected) | set(stocks))

    drifts = []
    for pair in pairs:
        stock = stocks.get(pair)
        recorded = stock.quantity if stock else 0
        want = expected.get(pair, 0)
        if recorded == want and stock is not None:
            continue
        drifts.append({
            "product_id": pair[0],
            "branch_id": pair[1],
            "stock_id": stock.id if stock else None,
            "recorded": recorded,
            "expected": want,
        })

    if drifts and not dry_run:
        with transaction(db):
            for drift in drifts:
                pair = (drift["product_id"], drift["branch_id"])
                stock = stocks.get(pair)
                if stock is None:
                    stock = _new_stock(db, *pair, drift["expected"])
                else:
                    stock.quantity = drift["expected"]
                    db.flush()
                _record_movement(
                    db, stock, drift["expected"] - drift["recorded"], "reconciliation",
                    note=f"Recomputed from entry sum (was {drift['recorded']})",
                )
                logger.warning(
                    "Reconciled stock for product %s at branch %s: %d -> %d",
                    pair[0], pair[1], drift["recorded"], drift["expected"],
                )

    return {"dry_run": dry_run, "pairs_checked": len(pairs), "drifts": drifts}
