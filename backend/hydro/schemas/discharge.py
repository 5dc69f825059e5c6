from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from decimal import Decimal
from datetime import datetime
from hydro.api.utils.sequencers import format_reference
from hydro.models.discharge import (
    DischargeType,
    WaterResourceType,
    ParameterOrigin,
    QualityClassification,
)
from hydro.models.sequence import SequenceType


# =============================================
# PARAMETERS
# =============================================

class DischargeParameterCreate(BaseModel):
    """Monthly values; loads are computed by the server"""
    month: int = Field(..., ge=1, le=12)
    origin: ParameterOrigin = ParameterOrigin.DISCHARGE
    caudal_volumen: Optional[Decimal] = Field(None, ge=0, description="Flow (l/s)")
    frequency: Optional[Decimal] = Field(None, ge=0, le=31, description="Days per month")
    duration: Optional[Decimal] = Field(None, ge=0, le=24, description="Hours per day")
    conc_dbo: Optional[Decimal] = Field(None, ge=0, description="DBO concentration (mg/l)")
    conc_sst: Optional[Decimal] = Field(None, ge=0, description="SST concentration (mg/l)")


class DischargeParameterResponse(DischargeParameterCreate):
    id: int
    cc_dbo: Optional[Decimal] = None
    cc_sst: Optional[Decimal] = None

    class Config:
        from_attributes = True


# =============================================
# MONITORINGS
# =============================================

class DischargeMonitoringCreate(BaseModel):
    """Raw lab values of a source sample; indices are computed by the server"""
    monitoring_station: Optional[str] = Field(None, max_length=150)
    sampled_at: Optional[datetime] = None
    latitude: Optional[Decimal] = Field(None, ge=-90, le=90)
    longitude: Optional[Decimal] = Field(None, ge=-180, le=180)
    od: Optional[Decimal] = Field(None, ge=0)
    sst: Optional[Decimal] = Field(None, ge=0)
    dqo: Optional[Decimal] = Field(None, ge=0)
    ce: Optional[Decimal] = Field(None, gt=0)
    ph: Optional[Decimal] = Field(None, ge=0, le=14)
    n: Optional[Decimal] = Field(None, ge=0)
    p: Optional[Decimal] = Field(None, ge=0)
    caudal_volumen: Optional[Decimal] = Field(None, ge=0)


class DischargeMonitoringResponse(DischargeMonitoringCreate):
    id: int
    iod: Optional[Decimal] = None
    isst: Optional[Decimal] = None
    idqo: Optional[Decimal] = None
    ice: Optional[Decimal] = None
    iph: Optional[Decimal] = None
    rnp: Optional[Decimal] = None
    irnp: Optional[Decimal] = None
    number_ica_variables: Optional[int] = None
    ica_coefficient: Optional[Decimal] = None
    quality_classification: Optional[QualityClassification] = None

    class Config:
        from_attributes = True


def _check_unique_months(parameters):
    if parameters:
        keys = [(p.month, p.origin) for p in parameters]
        if len(keys) != len(set(keys)):
            raise ValueError("Each month can only be declared once per origin")


# =============================================
# DISCHARGES
# =============================================

class DischargeBase(BaseModel):
    discharge_user_id: int
    basin_section_id: int
    municipality_id: int
    discharge_type: DischargeType
    year: int = Field(..., ge=2000, le=2100)
    name: str = Field(..., min_length=1, max_length=200)
    discharge_point: Optional[str] = Field(None, max_length=200)
    water_resource_type: Optional[WaterResourceType] = None
    latitude: Optional[Decimal] = Field(None, ge=-90, le=90)
    longitude: Optional[Decimal] = Field(None, ge=-180, le=180)
    is_basin_reuse: bool = False
    is_source_monitored: bool = False
    dqo: Optional[Decimal] = Field(None, ge=0, description="DQO of the receiving source")


class DischargeCreate(DischargeBase):
    """
    Number is optional: when missing it is taken from the DISCHARGE
    sequence of the corporation for the year
    """
    number: Optional[int] = Field(None, ge=1)
    parameters: List[DischargeParameterCreate] = []
    monitorings: List[DischargeMonitoringCreate] = []

    @model_validator(mode="after")
    def check_parameters(self):
        _check_unique_months(self.parameters)
        return self


class DischargeUpdate(BaseModel):
    """
    Optional fields; when parameters or monitorings are sent they
    replace the stored ones
    """
    discharge_user_id: Optional[int] = None
    basin_section_id: Optional[int] = None
    municipality_id: Optional[int] = None
    discharge_type: Optional[DischargeType] = None
    number: Optional[int] = Field(None, ge=1)
    year: Optional[int] = Field(None, ge=2000, le=2100)
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    discharge_point: Optional[str] = Field(None, max_length=200)
    water_resource_type: Optional[WaterResourceType] = None
    latitude: Optional[Decimal] = Field(None, ge=-90, le=90)
    longitude: Optional[Decimal] = Field(None, ge=-180, le=180)
    is_basin_reuse: Optional[bool] = None
    is_source_monitored: Optional[bool] = None
    dqo: Optional[Decimal] = Field(None, ge=0)
    parameters: Optional[List[DischargeParameterCreate]] = None
    monitorings: Optional[List[DischargeMonitoringCreate]] = None

    @model_validator(mode="after")
    def check_parameters(self):
        _check_unique_months(self.parameters)
        return self


class DischargeResponse(DischargeBase):
    id: int
    corporation_id: int
    number: int
    reference: Optional[str] = None
    cc_dbo_vert: Optional[Decimal] = None
    cc_sst_vert: Optional[Decimal] = None
    cc_dbo_cap: Optional[Decimal] = None
    cc_sst_cap: Optional[Decimal] = None
    cc_dbo_total: Optional[Decimal] = None
    cc_sst_total: Optional[Decimal] = None
    parameters: List[DischargeParameterResponse] = []
    monitorings: List[DischargeMonitoringResponse] = []
    created_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

    @model_validator(mode="after")
    def set_reference(self):
        self.reference = format_reference(SequenceType.DISCHARGE, self.year, self.number)
        return self


class DischargeSummary(BaseModel):
    """List item without the nested parameters and monitorings"""
    id: int
    number: int
    year: int
    reference: Optional[str] = None
    name: str
    discharge_user_id: int
    discharge_type: DischargeType
    cc_dbo_total: Optional[Decimal] = None
    cc_sst_total: Optional[Decimal] = None

    class Config:
        from_attributes = True

    @model_validator(mode="after")
    def set_reference(self):
        self.reference = format_reference(SequenceType.DISCHARGE, self.year, self.number)
        return self


class DischargeListResponse(BaseModel):
    total: int
    page: int
    page_size: int
    items: list[DischargeSummary]
