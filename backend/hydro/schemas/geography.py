from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal


class DepartmentBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    code: str = Field(..., min_length=1, max_length=2, description="DANE department code")


class DepartmentCreate(DepartmentBase):
    pass


class DepartmentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    code: Optional[str] = Field(None, min_length=1, max_length=2)


class DepartmentResponse(DepartmentBase):
    id: int

    class Config:
        from_attributes = True


class DepartmentListResponse(BaseModel):
    total: int
    items: list[DepartmentResponse]


class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    value: Decimal = Field(..., ge=0, description="Weight used in the socioeconomic variable")


class CategoryCreate(CategoryBase):
    pass


class CategoryResponse(CategoryBase):
    id: int

    class Config:
        from_attributes = True


class MunicipalityBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    code: str = Field(..., min_length=1, max_length=3, description="DANE municipality code")
    department_id: int
    category_id: int
    nbi: Optional[Decimal] = Field(None, ge=0, le=100, description="Unsatisfied basic needs index (%)")
    is_active: bool = True


class MunicipalityCreate(MunicipalityBase):
    pass


class MunicipalityUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    code: Optional[str] = Field(None, min_length=1, max_length=3)
    department_id: Optional[int] = None
    category_id: Optional[int] = None
    nbi: Optional[Decimal] = Field(None, ge=0, le=100)
    is_active: Optional[bool] = None


class MunicipalityResponse(MunicipalityBase):
    id: int
    department: Optional[DepartmentResponse] = None
    category: Optional[CategoryResponse] = None

    class Config:
        from_attributes = True


class MunicipalityListResponse(BaseModel):
    total: int
    page: int
    page_size: int
    items: list[MunicipalityResponse]
