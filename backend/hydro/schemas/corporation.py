from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class CorporationUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=3, max_length=200)
    code: Optional[str] = Field(None, min_length=2, max_length=50)
    description: Optional[str] = Field(None, max_length=500)


class CorporationResponse(BaseModel):
    id: int
    name: str
    code: str
    description: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CorporationStats(BaseModel):
    users: int
    discharge_users: int
    discharges: int
    active_invoices: int
