import logging
from datetime import datetime, timezone
from fastapi import Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from shared.core.schemas import RequestContext
from shared.models.user_login_session import UserLoginSession
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole, UserStatus
from ..schemas.authschema import AuthenticationResponse, RegisterRequest
from ..schemas.userschema import UserOut

logger = logging.getLogger(__name__)


def open_session(request: Request, db: Session, user: Users) -> UserLoginSession:
    user_agent = request.headers.get("user-agent")
    session = UserLoginSession(
        user_id=user.id,
        ip_address=request.client.host if request.client else None,
        user_agent=user_agent[:255] if user_agent else None,
        is_active=True
    )
    db.add(session)
    db.flush()
    return session


def get_user_token(request: Request, db: Session, user: Users) -> AuthenticationResponse:
    session = open_session(request, db, user)
    db.commit()
    db.refresh(user)

    return AuthenticationResponse(
        token=auth.issue_token(user, session),
        user=UserOut.model_validate(user)
    )


def register(request: Request, db: Session, payload: RegisterRequest) -> AuthenticationResponse:
    user = Users(
        full_name=payload.name,
        username=payload.username,
        email=payload.email,
        role=UserRole.STAFF,
        status=UserStatus.ACTIVE.value
    )
    user.set_password(payload.password)
    db.add(user)

    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise ConflictError(
            message=f"Username '{payload.username}' is already taken.",
            status_code=AppStatusCode.USER_USERNAME_IS_UNIQUE
        )

    logger.info("Registered user %s", payload.username)
    return get_user_token(request, db, user)


def login(request: Request, db: Session, username: str, password: str) -> AuthenticationResponse:
    user = db.query(Users).filter(
        Users.username == username,
        Users.is_deleted == False
    ).first()

    if not user or not user.verify_password(password):
        logger.warning("Failed login for %s", username)
        raise AuthenticationError(
            message="Invalid credentials",
            status_code=AppStatusCode.AUTHENTICATION_CREDENTIALS_INVALID
        )

    if not user.is_active:
        raise AuthenticationError(
            message="User is not active. Access denied",
            status_code=AppStatusCode.AUTHENTICATION_USER_INACTIVE
        )

    return get_user_token(request, db, user)


def current_user(db: Session, context: RequestContext) -> Users:
    user = db.query(Users).filter(Users.id == context.user_id).first()
    if not user:
        raise NotFoundError(message="User not found")
    return user


def logout_user(db: Session, context: RequestContext):
    session = db.query(UserLoginSession).filter(
        UserLoginSession.id == context.session_id,
        UserLoginSession.user_id == context.user_id,
        UserLoginSession.is_active == True
    ).first()

    if not session:
        raise AuthenticationError(
            message="Active session not found.",
            status_code=AppStatusCode.AUTHENTICATION_SESSION_TIMEOUT
        )

    session.is_active = False
    session.logged_out_at = datetime.now(timezone.utc)
    db.commit()

    logger.info("User %s logged out of session %s", context.user_id, context.session_id)
    return {"message": "Logged out"}
