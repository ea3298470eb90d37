import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from stockledger.config import settings

logger = logging.getLogger(__name__)

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args, echo=settings.SQL_ECHO)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Run a block as one unit of work: commit on success, roll back on any error."""
    try:
        yield db
        db.commit()
    except Exception as e:
        db.rollback()
        logger.info("Transaction rolled back: %s", e)
        raise


def init_db():
    # Import all models so Base.metadata knows about them
    import stockledger.models.branch  # noqa: F401
    import stockledger.models.entry  # noqa: F401
    import stockledger.models.product  # noqa: F401
    import stockledger.models.stock  # noqa: F401
    import stockledger.models.stock_movement  # noqa: F401
    import stockledger.models.supplier  # noqa: F401

    Base.metadata.create_all(bind=engine)
