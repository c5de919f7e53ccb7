from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class CompanyCreate(EmptyStringModel):
    name: str = Field(..., max_length=200)
    code: str = Field(..., max_length=20)
    logo: Optional[str] = Field(None, max_length=255)


class CompanyUpdate(EmptyStringModel):
    name: Optional[str] = Field(None, max_length=200)
    code: Optional[str] = Field(None, max_length=20)
    logo: Optional[str] = Field(None, max_length=255)


class CompanyOut(BaseModel):
    id: UUID
    name: str
    code: str
    logo: Optional[str] = None
    created_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CompanyLookup(BaseModel):
    id: UUID
    name: str
    code: str

    model_config = {"from_attributes": True}
