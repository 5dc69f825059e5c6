from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from decimal import Decimal
from datetime import datetime
from hydro.models.discharge_user import DocumentType


class DischargeUserBase(BaseModel):
    """Base schema for DischargeUser"""
    company_name: str = Field(..., min_length=1, max_length=200)
    code: str = Field(..., min_length=1, max_length=8, description="Internal code, unique per corporation")
    document_type: DocumentType = DocumentType.NIT
    document_number: str = Field(..., min_length=1, max_length=20)
    contact_person: Optional[str] = Field(None, max_length=150)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = Field(None, max_length=250)
    file_number: Optional[str] = Field(None, max_length=50)
    has_ptar: bool = False
    efficiency_percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    is_public_service_company: bool = False
    municipality_id: int
    economic_activity_id: Optional[int] = None
    authorization_type_id: Optional[int] = None
    is_active: bool = True


class DischargeUserCreate(DischargeUserBase):
    pass


class DischargeUserUpdate(BaseModel):
    """All fields optional"""
    company_name: Optional[str] = Field(None, min_length=1, max_length=200)
    code: Optional[str] = Field(None, min_length=1, max_length=8)
    document_type: Optional[DocumentType] = None
    document_number: Optional[str] = Field(None, min_length=1, max_length=20)
    contact_person: Optional[str] = Field(None, max_length=150)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = Field(None, max_length=250)
    file_number: Optional[str] = Field(None, max_length=50)
    has_ptar: Optional[bool] = None
    efficiency_percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    is_public_service_company: Optional[bool] = None
    municipality_id: Optional[int] = None
    economic_activity_id: Optional[int] = None
    authorization_type_id: Optional[int] = None
    is_active: Optional[bool] = None


class DischargeUserResponse(DischargeUserBase):
    id: int
    corporation_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class DischargeUserListResponse(BaseModel):
    total: int
    page: int
    page_size: int
    items: list[DischargeUserResponse]
