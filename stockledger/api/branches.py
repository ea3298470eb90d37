from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from stockledger.database import get_db
from stockledger.schemas.branch import BranchCreate, BranchOut
from stockledger.services import branch_service

router = APIRouter(prefix="/branches", tags=["Branches"])


@router.post("", response_model=BranchOut, status_code=201)
def create_branch(data: BranchCreate, db: Session = Depends(get_db)):
    return branch_service.create_branch(db, data)


@router.get("", response_model=list[BranchOut])
def list_branches(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return branch_service.list_branches(db, skip=skip, limit=limit)


@router.get("/{branch_id}", response_model=BranchOut)
def get_branch(branch_id: str, db: Session = Depends(get_db)):
    branch = branch_service.get_branch(db, branch_id)
    if not branch:
        raise HTTPException(404, "Branch not found")
    return branch
