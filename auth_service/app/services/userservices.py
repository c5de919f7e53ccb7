import logging
from datetime import datetime, timezone
from uuid import UUID
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shared.core.exceptions import ConflictError, NotFoundError, SelfRoleChangeError
from shared.core.schemas import RequestContext
from shared.models.user_login_session import UserLoginSession
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole, UserStatus
from ..schemas.userschema import (
    UserCreate, UserListResponse, UserRequest, UserSummaryOut, UserUpdate
)

logger = logging.getLogger(__name__)


def get_users(db: Session, params: UserRequest) -> UserListResponse:
    user_query = db.query(Users).filter(Users.is_deleted == False)

    if params.role:
        user_query = user_query.filter(Users.role == params.role)

    if params.search:
        search_term = f"%{params.search}%"
        user_query = user_query.filter(
            or_(
                Users.full_name.ilike(search_term),
                Users.username.ilike(search_term)
            )
        )

    total = user_query.with_entities(func.count(Users.id)).scalar()
    users = (
        user_query
        .order_by(Users.full_name.asc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    return UserListResponse(
        users=[UserSummaryOut.model_validate(u) for u in users],
        total=total
    )


def get_user_by_id(db: Session, user_id: UUID) -> Users:
    user = db.query(Users).filter(
        Users.id == user_id,
        Users.is_deleted == False
    ).first()
    if not user:
        raise NotFoundError(message="User not found")
    return user


def create_user(db: Session, user: UserCreate) -> Users:
    user_instance = Users(
        full_name=user.name,
        username=user.username,
        email=user.email,
        role=user.role,
        status=UserStatus.ACTIVE.value
    )
    user_instance.set_password(user.password)
    db.add(user_instance)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(
            message=f"Username '{user.username}' is already taken.",
            status_code=AppStatusCode.USER_USERNAME_IS_UNIQUE
        )

    db.refresh(user_instance)
    return user_instance


def update_user(db: Session, user_id: UUID, user: UserUpdate) -> Users:
    db_user = get_user_by_id(db, user_id)
    update_data = user.model_dump(exclude_unset=True)

    if "name" in update_data and user.name:
        db_user.full_name = user.name
    if "email" in update_data:
        db_user.email = user.email
    if user.password:
        db_user.set_password(user.password)

    db.commit()
    db.refresh(db_user)
    return db_user


def deactivate_user(db: Session, user_id: UUID, current_user: RequestContext) -> Users:
    if user_id == current_user.user_id:
        raise SelfRoleChangeError(message="Cannot deactivate your own account")

    db_user = get_user_by_id(db, user_id)
    db_user.status = UserStatus.INACTIVE.value

    # close every open session so issued tokens stop working
    now = datetime.now(timezone.utc)
    db.query(UserLoginSession).filter(
        UserLoginSession.user_id == db_user.id,
        UserLoginSession.is_active == True
    ).update({"is_active": False, "logged_out_at": now}, synchronize_session=False)

    db.commit()
    db.refresh(db_user)
    logger.info("User %s deactivated by %s", db_user.id, current_user.user_id)
    return db_user


def update_role(db: Session, user_id: UUID, role: UserRole, current_user: RequestContext) -> Users:
    if user_id == current_user.user_id:
        raise SelfRoleChangeError()

    # lock the row so concurrent role changes serialize
    db_user = (
        db.query(Users)
        .filter(Users.id == user_id, Users.is_deleted == False)
        .with_for_update()
        .first()
    )
    if not db_user:
        raise NotFoundError(message="User not found")

    previous = db_user.role
    db_user.role = role
    db.commit()
    db.refresh(db_user)

    logger.info("Role of user %s changed %s -> %s by %s",
                db_user.id, previous.value, role.value, current_user.user_id)
    return db_user
