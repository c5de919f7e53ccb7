from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class CategoryCreate(EmptyStringModel):
    name: str = Field(..., max_length=128)
    slug: Optional[str] = Field(None, max_length=150)


class CategoryUpdate(EmptyStringModel):
    name: Optional[str] = Field(None, max_length=128)
    slug: Optional[str] = Field(None, max_length=150)


class CategoryOut(BaseModel):
    id: UUID
    name: str
    slug: str
    created_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CategoryLookup(BaseModel):
    id: UUID
    name: str
    slug: str

    model_config = {"from_attributes": True}
