from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal
from datetime import datetime


class MinimumTariffBase(BaseModel):
    year: int = Field(..., ge=2000, le=2100)
    dbo_value: Decimal = Field(..., ge=0, description="Minimum rate per kg of DBO")
    sst_value: Decimal = Field(..., ge=0, description="Minimum rate per kg of SST")
    ipc_value: Optional[Decimal] = Field(None, description="Consumer price index used for the update")
    is_active: bool = True


class MinimumTariffCreate(MinimumTariffBase):
    pass


class MinimumTariffUpdate(BaseModel):
    dbo_value: Optional[Decimal] = Field(None, ge=0)
    sst_value: Optional[Decimal] = Field(None, ge=0)
    ipc_value: Optional[Decimal] = None
    is_active: Optional[bool] = None


class MinimumTariffResponse(MinimumTariffBase):
    id: int
    corporation_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class ProjectProgressBase(BaseModel):
    discharge_user_id: int
    year: int = Field(..., ge=2000, le=2100)
    cci_percentage: Optional[Decimal] = Field(None, ge=0, le=100, description="Collectors and interceptors")
    cev_percentage: Optional[Decimal] = Field(None, ge=0, le=100, description="Sewage discharge elimination")
    cds_percentage: Optional[Decimal] = Field(None, ge=0, le=100, description="Sanitation works")
    ccs_percentage: Optional[Decimal] = Field(None, ge=0, le=100, description="Treatment systems")


class ProjectProgressCreate(ProjectProgressBase):
    pass


class ProjectProgressUpdate(BaseModel):
    cci_percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    cev_percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    cds_percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    ccs_percentage: Optional[Decimal] = Field(None, ge=0, le=100)


class ProjectProgressResponse(ProjectProgressBase):
    id: int
    corporation_id: int

    class Config:
        from_attributes = True
