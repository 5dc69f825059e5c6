from fastapi import Depends, Request, HTTPException
from sqlalchemy.orm import Session
from hydro.database import get_db
from hydro.models.corporation import Corporation
from hydro.models.user import User, UserRole

__all__ = [
    "get_db",
    "get_current_corporation_id",
    "get_current_user_id",
    "get_current_corporation",
    "get_current_user",
    "require_master",
    "require_admin",
    "require_operator",
]


def get_current_corporation_id(request: Request) -> int:
    """
    Corporation id of the request (set by TenantMiddleware)
    """
    if getattr(request.state, 'corporation_id', None) is None:
        raise HTTPException(status_code=400, detail="Corporation not identified")
    return request.state.corporation_id


def get_current_user_id(request: Request) -> int:
    if getattr(request.state, 'user_id', None) is None:
        raise HTTPException(status_code=400, detail="User not identified")
    return request.state.user_id


def get_current_corporation(
    corporation_id: int = Depends(get_current_corporation_id),
    db: Session = Depends(get_db)
) -> Corporation:
    """
    Full Corporation of the request, must be active
    """
    corporation = db.query(Corporation).filter_by(id=corporation_id, is_active=True).first()
    if not corporation:
        raise HTTPException(status_code=404, detail="Corporation not found or inactive")
    return corporation


def get_current_user(
    user_id: int = Depends(get_current_user_id),
    corporation_id: int = Depends(get_current_corporation_id),
    db: Session = Depends(get_db)
) -> User:
    """
    Full User of the request
    Must belong to the token corporation and be active
    """
    user = db.query(User).filter_by(
        id=user_id,
        corporation_id=corporation_id,
        is_active=True
    ).first()

    if not user:
        raise HTTPException(status_code=404, detail="User not found or inactive")

    return user


def require_master(user: User = Depends(get_current_user)) -> User:
    """
    Platform super admin only (maintains shared reference data)
    """
    if user.role != UserRole.MASTER:
        raise HTTPException(status_code=403, detail="Access denied: master user only")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role not in [UserRole.ADMIN, UserRole.MASTER]:
        raise HTTPException(status_code=403, detail="Access denied: administrators only")
    return user


def require_operator(user: User = Depends(get_current_user)) -> User:
    """
    OPERATOR, ADMIN or MASTER (everyone but VIEWER)
    """
    if user.role not in [UserRole.OPERATOR, UserRole.ADMIN, UserRole.MASTER]:
        raise HTTPException(status_code=403, detail="Access denied: insufficient permission")
    return user
