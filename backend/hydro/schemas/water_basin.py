from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class BasinSectionBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    description: Optional[str] = None
    start_point: Optional[str] = Field(None, max_length=200)
    end_point: Optional[str] = Field(None, max_length=200)
    is_active: bool = True


class BasinSectionCreate(BasinSectionBase):
    pass


class BasinSectionUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    description: Optional[str] = None
    start_point: Optional[str] = Field(None, max_length=200)
    end_point: Optional[str] = Field(None, max_length=200)
    is_active: Optional[bool] = None


class BasinSectionResponse(BasinSectionBase):
    id: int
    water_basin_id: int

    class Config:
        from_attributes = True


class WaterBasinBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    description: Optional[str] = None
    is_active: bool = True


class WaterBasinCreate(WaterBasinBase):
    pass


class WaterBasinUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    description: Optional[str] = None
    is_active: Optional[bool] = None


class WaterBasinResponse(WaterBasinBase):
    id: int
    corporation_id: int
    sections: list[BasinSectionResponse] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class WaterBasinListResponse(BaseModel):
    total: int
    page: int
    page_size: int
    items: list[WaterBasinResponse]
