import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from datetime import datetime, timezone

from app.db.session import get_db
from app.models.user import User
from app.schemas.auth import RegisterIn, LoginIn, AuthOut
from app.schemas.user import UserOut
from app.core.result import Result, ResultCode, ResultError
from app.core.security import hash_password, verify_password, create_access_token
from app.api.deps import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

def _auth_response(user: User) -> AuthOut:
    token = create_access_token(user.id)
    return AuthOut(token=token, user=UserOut.model_validate(user))

@router.post("/register", response_model=Result)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    existing = db.query(User).filter(User.email == payload.email).first()
    if existing:
        raise ResultError(ResultCode.DATA_CONFLICT, "Email already registered")

    now = datetime.now(timezone.utc)
    user = User(
        email=payload.email,
        password_hash=hash_password(payload.password),
        full_name=payload.full_name,
        is_active=True,
        created_at=now,
        updated_at=now,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("user %s registered", user.id)
    return Result.ok(_auth_response(user))

@router.post("/login", response_model=Result)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == payload.email).first()
    if not user or not user.password_hash:
        raise ResultError(ResultCode.UNAUTHORIZED, "Invalid credentials")
    if not user.is_active:
        raise ResultError(ResultCode.UNAUTHORIZED, "Inactive user")
    if not verify_password(payload.password, user.password_hash):
        raise ResultError(ResultCode.UNAUTHORIZED, "Invalid credentials")

    user.last_login_at = datetime.now(timezone.utc)
    db.commit()
    return Result.ok(_auth_response(user))

@router.get("/me", response_model=Result)
def me(current_user: User = Depends(get_current_user)):
    return Result.ok(UserOut.model_validate(current_user))
