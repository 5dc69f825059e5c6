from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from hydro.models.user import UserRole


def _check_password_strength(v: str) -> str:
    if len(v) < 8:
        raise ValueError('Password must be at least 8 characters long')
    if not any(c.isupper() for c in v):
        raise ValueError('Password must contain at least one upper case letter')
    if not any(c.islower() for c in v):
        raise ValueError('Password must contain at least one lower case letter')
    if not any(c.isdigit() for c in v):
        raise ValueError('Password must contain at least one digit')
    return v


class UserBase(BaseModel):
    full_name: str = Field(..., min_length=3, max_length=200)
    email: EmailStr
    role: UserRole = UserRole.VIEWER


class UserCreate(UserBase):
    """Schema to create a user inside the caller's corporation"""
    password: str = Field(..., min_length=8)

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        return _check_password_strength(v)

    @field_validator('role')
    @classmethod
    def validate_role(cls, v):
        if v == UserRole.MASTER:
            raise ValueError('MASTER users cannot be created through the API')
        return v


class UserResponse(UserBase):
    id: int
    corporation_id: int
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class UserListResponse(BaseModel):
    total: int
    items: list[UserResponse]


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class RegisterRequest(BaseModel):
    """Self registration: a new corporation and its first administrator"""
    corporation_name: str = Field(..., min_length=3, max_length=200)
    corporation_code: str = Field(..., min_length=2, max_length=50)
    corporation_description: Optional[str] = Field(None, max_length=500)
    admin_full_name: str = Field(..., min_length=3, max_length=200)
    admin_email: EmailStr
    admin_password: str = Field(..., min_length=8)

    @field_validator('admin_password')
    @classmethod
    def validate_password(cls, v):
        return _check_password_strength(v)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
    corporation: dict
