from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, Field

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class EmployeeCreate(EmptyStringModel):
    name: str = Field(..., max_length=255)
    department: str = Field(..., max_length=255)
    is_active: bool = True


class EmployeeUpdate(EmptyStringModel):
    name: Optional[str] = Field(None, max_length=255)
    department: Optional[str] = Field(None, max_length=255)
    is_active: Optional[bool] = None


class EmployeeRequest(EmptyStringModel):
    q: Optional[str] = None
    page: int = Field(1, ge=1)
    per_page: int = Field(10, ge=1, le=100)


class EmployeeOut(BaseModel):
    id: UUID
    name: str
    department: str
    is_active: bool
    created_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class EmployeePage(BaseModel):
    data: List[EmployeeOut]
    total: int
    page: int
    per_page: int
    last_page: int
