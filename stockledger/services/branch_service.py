from sqlalchemy.orm import Session

from stockledger.models.branch import Branch
from stockledger.schemas.branch import BranchCreate
from stockledger.services.errors import ValidationError


def build_branch(db: Session, data: BranchCreate) -> Branch:
    """Add a branch to the session without committing, so callers can use it inside a transaction."""
    if data.branch_code and get_branch_by_code(db, data.branch_code):
        raise ValidationError(f"Branch with code {data.branch_code} already exists")
    branch = Branch(
        branch_name=data.branch_name,
        branch_code=data.branch_code or None,
        tel=data.tel,
        memo=data.memo,
    )
    db.add(branch)
    db.flush()
    return branch


def create_branch(db: Session, data: BranchCreate) -> Branch:
    branch = build_branch(db, data)
    db.commit()
    db.refresh(branch)
    return branch


def get_branch(db: Session, branch_id: str) -> Branch | None:
    return db.query(Branch).filter(Branch.id == branch_id).first()


def get_branch_by_code(db: Session, branch_code: str) -> Branch | None:
    return db.query(Branch).filter(Branch.branch_code == branch_code).first()


def list_branches(db: Session, skip: int = 0, limit: int = 100) -> list[Branch]:
    return db.query(Branch).order_by(Branch.branch_name).offset(skip).limit(limit).all()
