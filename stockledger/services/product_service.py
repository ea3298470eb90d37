from sqlalchemy.orm import Session

from stockledger.models.product import Product
from stockledger.schemas.product import ProductCreate


def create_product(db: Session, data: ProductCreate) -> Product:
    product = Product(
        product_code=data.product_code,
        product_name=data.product_name,
        category=data.category,
        unit=data.unit or "unit",
        cost_price=data.cost_price,
        sell_price=data.sell_price,
        status=data.status,
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def get_product(db: Session, product_id: str) -> Product | None:
    return db.query(Product).filter(Product.id == product_id).first()


def get_product_by_code(db: Session, product_code: str) -> Product | None:
    return db.query(Product).filter(Product.product_code == product_code).first()


def list_products(db: Session, skip: int = 0, limit: int = 100, category: str | None = None) -> list[Product]:
    q = db.query(Product)
    if category:
        q = q.filter(Product.category == category)
    return q.order_by(Product.product_name).offset(skip).limit(limit).all()
