import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from hydro.api.deps import get_db, get_current_user
from hydro.core.security import create_access_token, hash_password, verify_password
from hydro.models.corporation import Corporation
from hydro.models.user import User, UserRole
from hydro.schemas.user import RegisterRequest, Token, UserLogin, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _token_response(user: User, corporation: Corporation) -> dict:
    access_token = create_access_token(data={
        "user_id": user.id,
        "corporation_id": corporation.id,
        "role": user.role.value,
    })
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": user,
        "corporation": {
            "id": corporation.id,
            "name": corporation.name,
            "code": corporation.code,
        },
    }


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """
    Register a corporation and its first administrator

    PUBLIC ROUTE
    """
    if db.query(Corporation).filter(Corporation.name == data.corporation_name).first():
        raise HTTPException(status_code=400, detail="Corporation name already registered")
    if db.query(Corporation).filter(Corporation.code == data.corporation_code).first():
        raise HTTPException(status_code=400, detail="Corporation code already registered")
    if db.query(User).filter(User.email == data.admin_email).first():
        raise HTTPException(status_code=400, detail="Email already registered")

    corporation = Corporation(
        name=data.corporation_name,
        code=data.corporation_code,
        description=data.corporation_description,
        is_active=True,
    )
    db.add(corporation)
    db.flush()

    admin = User(
        corporation_id=corporation.id,
        full_name=data.admin_full_name,
        email=data.admin_email,
        password_hash=hash_password(data.admin_password),
        role=UserRole.ADMIN,
        is_active=True,
    )
    db.add(admin)
    db.commit()
    db.refresh(corporation)
    db.refresh(admin)

    logger.info("Registered corporation %s (%s)", corporation.code, corporation.id)
    return _token_response(admin, corporation)


@router.post("/login", response_model=Token)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """
    Authenticate and return a JWT

    PUBLIC ROUTE
    """
    user = db.query(User).filter(User.email == credentials.email).first()

    if not user or not verify_password(credentials.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Inactive user")

    corporation = db.get(Corporation, user.corporation_id)
    if not corporation or not corporation.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Inactive corporation")

    return _token_response(user, corporation)


@router.get("/me", response_model=UserResponse)
def read_me(user: User = Depends(get_current_user)):
    """Current user"""
    return user
