from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin
from shared.core.database import get_auth_db as get_db
from shared.core.schemas import RequestContext
from ..schemas.userschema import (
    RoleUpdate, UserCreate, UserListResponse, UserOut, UserRequest, UserUpdate
)
from ..services import userservices

router = APIRouter(prefix="/api/users", tags=["User Management"],
                   dependencies=[Depends(allow_admin)])


@router.get("", response_model=UserListResponse)
def get_all_users(
        params: UserRequest = Depends(),
        db: Session = Depends(get_db)):
    return userservices.get_users(db, params)


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
        user: UserCreate,
        db: Session = Depends(get_db)):
    return userservices.create_user(db, user)


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: UUID, db: Session = Depends(get_db)):
    return userservices.get_user_by_id(db, user_id)


@router.patch("/{user_id}", response_model=UserOut)
def update_user(
        user_id: UUID,
        user: UserUpdate,
        db: Session = Depends(get_db)):
    return userservices.update_user(db, user_id, user)


@router.patch("/{user_id}/role", response_model=UserOut)
def update_role(
        user_id: UUID,
        payload: RoleUpdate,
        db: Session = Depends(get_db),
        current_user: RequestContext = Depends(allow_admin)):
    return userservices.update_role(db, user_id, payload.role, current_user)


@router.delete("/{user_id}", response_model=UserOut)
def deactivate_user(
        user_id: UUID,
        db: Session = Depends(get_db),
        current_user: RequestContext = Depends(allow_admin)):
    return userservices.deactivate_user(db, user_id, current_user)
