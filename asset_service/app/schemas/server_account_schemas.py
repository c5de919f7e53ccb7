from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class ServerAccountCreate(EmptyStringModel):
    name: str = Field(..., max_length=255)
    department: str = Field(..., max_length=255)
    server_user: str = Field(..., max_length=255)
    server_password: Optional[str] = None
    status: str = Field(..., max_length=50)
    remarks: Optional[str] = None
    company_id: Optional[UUID] = None


class ServerAccountUpdate(EmptyStringModel):
    name: Optional[str] = Field(None, max_length=255)
    department: Optional[str] = Field(None, max_length=255)
    server_user: Optional[str] = Field(None, max_length=255)
    # empty keeps the stored password
    server_password: Optional[str] = None
    status: Optional[str] = Field(None, max_length=50)
    remarks: Optional[str] = None
    company_id: Optional[UUID] = None


class ServerAccountOut(BaseModel):
    id: UUID
    name: str
    department: str
    server_user: str
    server_password: Optional[str] = None
    status: str
    remarks: Optional[str] = None
    company_id: Optional[UUID] = None
    company_name: Optional[str] = None
    created_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
