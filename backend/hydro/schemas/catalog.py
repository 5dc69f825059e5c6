from pydantic import BaseModel, Field
from typing import Optional


class EconomicActivityCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    code: str = Field(..., min_length=1, max_length=10, description="CIIU code")
    is_active: bool = True


class EconomicActivityUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    code: Optional[str] = Field(None, min_length=1, max_length=10)
    is_active: Optional[bool] = None


class EconomicActivityResponse(EconomicActivityCreate):
    id: int

    class Config:
        from_attributes = True


class AuthorizationTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    is_active: bool = True


class AuthorizationTypeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    is_active: Optional[bool] = None


class AuthorizationTypeResponse(AuthorizationTypeCreate):
    id: int

    class Config:
        from_attributes = True
