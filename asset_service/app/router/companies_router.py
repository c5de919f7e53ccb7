from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, allow_any_user
from shared.core.database import get_asset_db as get_db
from ..crud import companies_crud as crud
from ..schemas.company_schemas import CompanyCreate, CompanyOut, CompanyUpdate

router = APIRouter(
    prefix="/api/companies",
    tags=["companies"],
    dependencies=[Depends(allow_any_user)]
)


@router.get("", response_model=List[CompanyOut])
def get_companies(db: Session = Depends(get_db)):
    return crud.get_companies(db)


@router.get("/{company_id}", response_model=CompanyOut)
def get_company(company_id: UUID, db: Session = Depends(get_db)):
    return crud.get_company_by_id(db, company_id)


@router.post("", response_model=CompanyOut, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(allow_admin)])
def create_company(company: CompanyCreate, db: Session = Depends(get_db)):
    return crud.create_company(db, company)


@router.put("/{company_id}", response_model=CompanyOut, dependencies=[Depends(allow_admin)])
def update_company(company_id: UUID, company: CompanyUpdate, db: Session = Depends(get_db)):
    return crud.update_company(db, company_id, company)


@router.delete("/{company_id}", response_model=CompanyOut, dependencies=[Depends(allow_admin)])
def delete_company(company_id: UUID, db: Session = Depends(get_db)):
    return crud.delete_company(db, company_id)
