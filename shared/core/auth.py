import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.database import get_auth_db as get_db
from shared.core.exceptions import AuthenticationError, AuthorizationError
from shared.core.schemas import RequestContext, UserToken
from shared.models.user_login_session import UserLoginSession
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_minutes: Optional[int] = None):
    payload = data.copy()

    expires = datetime.now(timezone.utc) + \
        timedelta(minutes=expires_minutes or settings.JWT_EXPIRE_MINUTES)
    payload['exp'] = expires

    token = jwt.encode(payload, settings.JWT_SECRET,
                       algorithm=settings.JWT_ALGORITHM)
    return token


def issue_token(user: Users, session: UserLoginSession) -> str:
    return create_access_token({
        "user_id": str(user.id),
        "session_id": str(session.id),
        "role": user.role.value,
        "name": user.full_name,
    })


def verify_token(db: Session, token: str) -> UserToken:
    """Verify and decode a JWT token, then check its session is still open."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET,
                             algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        raise AuthenticationError(
            message="Token invalid or expired",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_EXPIRED,
            data={"error": str(e)}
        )

    try:
        user_token = UserToken(**payload)
    except PydanticValidationError:
        raise AuthenticationError(
            message="Invalid token structure",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_INVALID
        )

    session = db.query(UserLoginSession).filter(
        UserLoginSession.id == _as_uuid(user_token.session_id),
        UserLoginSession.user_id == _as_uuid(user_token.user_id)
    ).first()

    if not session or not session.is_active:
        raise AuthenticationError(
            message="Session has been logged out or is inactive",
            status_code=AppStatusCode.AUTHENTICATION_SESSION_TIMEOUT
        )

    return user_token


def validate_current_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> RequestContext:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError(
            message="Token missing",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_MISSING
        )

    user_token = verify_token(db, credentials.credentials)

    # Fetch the user from the database, the role in the token may be stale
    user = db.query(Users).filter(Users.id == _as_uuid(user_token.user_id)).first()

    if not user or user.is_deleted:
        raise AuthenticationError(
            message="User not found",
            status_code=AppStatusCode.AUTHENTICATION_USER_INVALID
        )

    if not user.is_active:
        raise AuthenticationError(
            message="User is not active. Access denied",
            status_code=AppStatusCode.AUTHENTICATION_USER_INACTIVE
        )

    return RequestContext(
        user_id=user.id,
        session_id=_as_uuid(user_token.session_id),
        role=user.role,
        name=user.full_name,
        request_id=getattr(request.state, "request_id", None)
    )


def require_roles(*roles: UserRole):
    """Build a dependency that admits only the given roles (none = any authenticated user)."""
    allowed = frozenset(roles)

    def role_gate(current_user: RequestContext = Depends(validate_current_token)) -> RequestContext:
        if allowed and current_user.role not in allowed:
            logger.warning(
                "Role %s denied (allowed: %s) for user %s",
                current_user.role.value, sorted(r.value for r in allowed), current_user.user_id
            )
            raise AuthorizationError(
                message="Forbidden",
                data={
                    "your_role": current_user.role.value,
                    "allowed_roles": sorted(r.value for r in allowed),
                }
            )
        return current_user

    return role_gate


allow_admin = require_roles(UserRole.ADMIN)
allow_any_user = require_roles()


def _as_uuid(value):
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise AuthenticationError(
            message="Invalid token structure",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_INVALID
        )
