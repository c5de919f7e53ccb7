from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin
from shared.core.database import get_asset_db as get_db
from ..crud import server_accounts_crud as crud
from ..schemas.server_account_schemas import (
    ServerAccountCreate, ServerAccountOut, ServerAccountUpdate
)

router = APIRouter(
    prefix="/api/servers",
    tags=["servers"],
    dependencies=[Depends(allow_admin)]
)


@router.get("", response_model=List[ServerAccountOut])
def get_server_accounts(db: Session = Depends(get_db)):
    return crud.get_server_accounts(db)


@router.get("/{account_id}", response_model=ServerAccountOut)
def get_server_account(account_id: UUID, db: Session = Depends(get_db)):
    return crud.to_out(crud.get_server_account_by_id(db, account_id))


@router.post("", response_model=ServerAccountOut, status_code=status.HTTP_201_CREATED)
def create_server_account(account: ServerAccountCreate, db: Session = Depends(get_db)):
    return crud.create_server_account(db, account)


@router.put("/{account_id}", response_model=ServerAccountOut)
def update_server_account(
        account_id: UUID,
        account: ServerAccountUpdate,
        db: Session = Depends(get_db)):
    return crud.update_server_account(db, account_id, account)


@router.delete("/{account_id}", response_model=ServerAccountOut)
def delete_server_account(account_id: UUID, db: Session = Depends(get_db)):
    return crud.delete_server_account(db, account_id)
