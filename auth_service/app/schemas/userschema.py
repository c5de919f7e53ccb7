from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import List, Optional
from uuid import UUID
from datetime import datetime

from shared.core.schemas import CommonQueryParams
from shared.utils.enums import UserRole
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class UserOut(BaseModel):
    id: UUID
    name: str = Field(validation_alias="full_name")
    username: str
    email: Optional[str] = None
    role: UserRole
    status: str
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True,
        "populate_by_name": True
    }


class UserSummaryOut(BaseModel):
    id: UUID
    name: str = Field(validation_alias="full_name")
    username: str
    role: UserRole

    model_config = {
        "from_attributes": True,
        "populate_by_name": True
    }


class UserRequest(CommonQueryParams):
    role: Optional[UserRole] = None


class UserListResponse(BaseModel):
    users: List[UserSummaryOut]
    total: int


class UserCreate(EmptyStringModel):
    name: str = Field(min_length=1, max_length=200)
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=6, max_length=72)
    email: Optional[EmailStr] = None
    role: UserRole = UserRole.STAFF


class UserUpdate(EmptyStringModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6, max_length=72)
    password_confirmation: Optional[str] = None

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password is not None and self.password != self.password_confirmation:
            raise ValueError("The password confirmation does not match")
        return self


class RoleUpdate(BaseModel):
    role: UserRole
