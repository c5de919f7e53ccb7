from pydantic import BaseModel
from typing import Generic, Optional, TypeVar
from uuid import UUID

from shared.utils.enums import UserRole
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel

# Shared properties
T = TypeVar("T")


class UserToken(BaseModel):
    """Claims carried by an access token."""
    user_id: str
    session_id: str
    role: UserRole
    name: Optional[str] = None
    exp: Optional[int] = None


class RequestContext(BaseModel):
    """Resolved once per request by the access gate and passed to handlers."""
    user_id: UUID
    session_id: UUID
    role: UserRole
    name: Optional[str] = None
    request_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class CommonQueryParams(EmptyStringModel):
    search: Optional[str] = None
    skip: Optional[int] = 0
    limit: Optional[int] = 100


class JsonOutResult(BaseModel, Generic[T]):
    data: Optional[T] = None
    status: str
    status_code: str
    message: str
