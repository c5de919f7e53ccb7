from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from shared.core.auth import allow_any_user
from shared.core.database import get_auth_db as get_db
from shared.core.schemas import RequestContext
from ..schemas import authschema
from ..schemas.userschema import UserOut
from ..services import authservices

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post("/register", response_model=authschema.AuthenticationResponse,
             status_code=status.HTTP_201_CREATED)
def register(
        payload: authschema.RegisterRequest,
        request: Request,
        db: Session = Depends(get_db)):
    return authservices.register(request, db, payload)


@router.post("/login", response_model=authschema.AuthenticationResponse)
def login(
        payload: authschema.LoginRequest,
        request: Request,
        db: Session = Depends(get_db)):
    return authservices.login(request, db, payload.username, payload.password)


@router.get("/user", response_model=UserOut)
def me(
        db: Session = Depends(get_db),
        current_user: RequestContext = Depends(allow_any_user)):
    return authservices.current_user(db, current_user)


@router.post("/logout", response_model=authschema.LogoutResponse)
def logout(
        db: Session = Depends(get_db),
        current_user: RequestContext = Depends(allow_any_user)):
    return authservices.logout_user(db, current_user)
