import math
from datetime import datetime, timezone
from uuid import UUID
from sqlalchemy import or_
from sqlalchemy.orm import Session

from shared.core.exceptions import NotFoundError
from ..models.employees import Employee
from ..schemas.employee_schemas import EmployeeCreate, EmployeeRequest, EmployeeUpdate


def get_employees(db: Session, params: EmployeeRequest):
    query = db.query(Employee).filter(Employee.is_deleted == False)

    if params.q:
        search_term = f"%{params.q}%"
        query = query.filter(or_(
            Employee.name.ilike(search_term),
            Employee.department.ilike(search_term)
        ))

    total = query.count()
    employees = (
        query.order_by(Employee.name.asc())
        .offset((params.page - 1) * params.per_page)
        .limit(params.per_page)
        .all()
    )

    return {
        "data": employees,
        "total": total,
        "page": params.page,
        "per_page": params.per_page,
        "last_page": max(1, math.ceil(total / params.per_page)),
    }


def get_employee_by_id(db: Session, employee_id: UUID, include_deleted: bool = True):
    query = db.query(Employee).filter(Employee.id == employee_id)
    if not include_deleted:
        query = query.filter(Employee.is_deleted == False)
    employee = query.first()
    if not employee:
        raise NotFoundError("Employee not found")
    return employee


def create_employee(db: Session, employee: EmployeeCreate):
    db_employee = Employee(**employee.model_dump())
    db.add(db_employee)
    db.commit()
    db.refresh(db_employee)
    return db_employee


def update_employee(db: Session, employee_id: UUID, employee: EmployeeUpdate):
    db_employee = get_employee_by_id(db, employee_id, include_deleted=False)
    for key, value in employee.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(db_employee, key, value)
    db.commit()
    db.refresh(db_employee)
    return db_employee


def delete_employee(db: Session, employee_id: UUID):
    db_employee = get_employee_by_id(db, employee_id, include_deleted=False)
    db_employee.is_deleted = True
    db_employee.deleted_at = datetime.now(timezone.utc)
    db.commit()
    return db_employee
