from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, allow_any_user
from shared.core.database import get_asset_db as get_db
from ..crud import categories_crud as crud
from ..schemas.category_schemas import CategoryCreate, CategoryOut, CategoryUpdate

router = APIRouter(
    prefix="/api/categories",
    tags=["categories"],
    dependencies=[Depends(allow_any_user)]
)


@router.get("", response_model=List[CategoryOut])
def get_categories(db: Session = Depends(get_db)):
    return crud.get_categories(db)


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: UUID, db: Session = Depends(get_db)):
    return crud.get_category_by_id(db, category_id)


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(category: CategoryCreate, db: Session = Depends(get_db)):
    return crud.create_category(db, category)


@router.put("/{category_id}", response_model=CategoryOut)
def update_category(category_id: UUID, category: CategoryUpdate, db: Session = Depends(get_db)):
    return crud.update_category(db, category_id, category)


@router.delete("/{category_id}", response_model=CategoryOut, dependencies=[Depends(allow_admin)])
def delete_category(category_id: UUID, db: Session = Depends(get_db)):
    return crud.delete_category(db, category_id)
