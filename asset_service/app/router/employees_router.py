from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, allow_any_user
from shared.core.database import get_asset_db as get_db
from ..crud import employees_crud as crud
from ..schemas.employee_schemas import (
    EmployeeCreate, EmployeeOut, EmployeePage, EmployeeRequest, EmployeeUpdate
)

router = APIRouter(
    prefix="/api/employees",
    tags=["employees"],
    dependencies=[Depends(allow_any_user)]
)


@router.get("", response_model=EmployeePage)
def get_employees(params: EmployeeRequest = Depends(), db: Session = Depends(get_db)):
    return crud.get_employees(db, params)


@router.get("/{employee_id}", response_model=EmployeeOut)
def get_employee(employee_id: UUID, db: Session = Depends(get_db)):
    return crud.get_employee_by_id(db, employee_id)


@router.post("", response_model=EmployeeOut, status_code=status.HTTP_201_CREATED)
def create_employee(employee: EmployeeCreate, db: Session = Depends(get_db)):
    return crud.create_employee(db, employee)


@router.put("/{employee_id}", response_model=EmployeeOut)
def update_employee(employee_id: UUID, employee: EmployeeUpdate, db: Session = Depends(get_db)):
    return crud.update_employee(db, employee_id, employee)


@router.delete("/{employee_id}", response_model=EmployeeOut, dependencies=[Depends(allow_admin)])
def delete_employee(employee_id: UUID, db: Session = Depends(get_db)):
    return crud.delete_employee(db, employee_id)
