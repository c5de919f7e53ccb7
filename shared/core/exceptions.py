from typing import Any, Optional
from fastapi import HTTPException, status

from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode


class AppError(HTTPException):
    """Base for the error taxonomy. The detail is always a JsonOutResult payload."""

    http_status: int = status.HTTP_400_BAD_REQUEST
    app_status_code: str = AppStatusCode.OPERATION_FAILED
    default_message: str = "Operation failed"

    def __init__(
            self,
            message: Optional[str] = None,
            status_code: Optional[str] = None,
            data: Any = None,
            headers: Optional[dict] = None):
        self.message = message or self.default_message
        self.app_status_code = status_code or self.app_status_code
        self.data = data
        super().__init__(
            status_code=self.http_status,
            detail=JsonOutResult(
                data=data,
                status="Failure",
                status_code=self.app_status_code,
                message=self.message
            ).model_dump(),
            headers=headers
        )


class ValidationError(AppError):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    app_status_code = AppStatusCode.INVALID_INPUT
    default_message = "Invalid input"


class NotFoundError(AppError):
    http_status = status.HTTP_404_NOT_FOUND
    app_status_code = AppStatusCode.RECORD_NOT_FOUND
    default_message = "Record not found"


class ConflictError(AppError):
    http_status = status.HTTP_409_CONFLICT
    app_status_code = AppStatusCode.DUPLICATE_ADD_ERROR
    default_message = "Record already exists"


class AuthenticationError(AppError):
    http_status = status.HTTP_401_UNAUTHORIZED
    app_status_code = AppStatusCode.AUTHENTICATION_TOKEN_INVALID
    default_message = "Unauthenticated"

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("headers", {"WWW-Authenticate": "Bearer"})
        super().__init__(*args, **kwargs)


class AuthorizationError(AppError):
    http_status = status.HTTP_403_FORBIDDEN
    app_status_code = AppStatusCode.ROLE_NOT_ALLOWED
    default_message = "Forbidden"


class SelfRoleChangeError(AuthorizationError):
    app_status_code = AppStatusCode.SELF_ROLE_CHANGE_FORBIDDEN
    default_message = "Cannot change your own role"


class StorageError(AppError):
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    app_status_code = AppStatusCode.STORAGE_ERROR
    default_message = "Unexpected storage failure"
