from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from hydro.api.deps import get_db, get_current_corporation_id, require_admin
from hydro.api.utils import get_by_id, validate_unique
from hydro.core.security import hash_password
from hydro.models.user import User
from hydro.schemas.user import UserCreate, UserListResponse, UserResponse

router = APIRouter()


@router.get("/", response_model=UserListResponse)
def list_users(
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    """Users of the caller's corporation"""
    users = db.query(User).filter(User.corporation_id == corporation_id).order_by(User.full_name).all()
    return {"total": len(users), "items": users}


@router.post("/", response_model=UserResponse, status_code=201)
def create_user(
    data: UserCreate,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    _: User = Depends(require_admin)
):
    """Create a user in the caller's corporation (administrators only)"""
    # Emails are unique across corporations
    validate_unique(db, User, "email", data.email, None, display_name="Email")

    user = User(
        corporation_id=corporation_id,
        full_name=data.full_name,
        email=data.email,
        role=data.role,
        password_hash=hash_password(data.password),
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@router.post("/{user_id}/deactivate", response_model=UserResponse)
def deactivate_user(
    user_id: int,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    current_user: User = Depends(require_admin)
):
    if user_id == current_user.id:
        raise HTTPException(status_code=400, detail="You cannot deactivate yourself")

    user = get_by_id(db, User, user_id, corporation_id, error_message="User not found")
    user.is_active = False
    db.commit()
    db.refresh(user)
    return user
