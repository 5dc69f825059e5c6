from pydantic import BaseModel, Field, model_validator
from typing import Optional
from decimal import Decimal
from datetime import date, datetime
from hydro.models.discharge import QualityClassification


# =============================================
# STATIONS
# =============================================

class MonitoringStationBase(BaseModel):
    basin_section_id: int
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=500)
    latitude: Optional[Decimal] = Field(None, ge=-90, le=90)
    longitude: Optional[Decimal] = Field(None, ge=-180, le=180)
    is_active: bool = True


class MonitoringStationCreate(MonitoringStationBase):
    pass


class MonitoringStationUpdate(BaseModel):
    basin_section_id: Optional[int] = None
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=500)
    latitude: Optional[Decimal] = Field(None, ge=-90, le=90)
    longitude: Optional[Decimal] = Field(None, ge=-180, le=180)
    is_active: Optional[bool] = None


class MonitoringStationResponse(MonitoringStationBase):
    id: int
    corporation_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MonitoringStationListResponse(BaseModel):
    total: int
    page: int
    page_size: int
    items: list[MonitoringStationResponse]


class LastMonitoring(BaseModel):
    """Raw values of the most recent campaign of a station"""
    id: int
    monitoring_date: date
    od: Decimal
    sst: Decimal
    dqo: Decimal
    ce: Decimal
    ph: Decimal
    n: Optional[Decimal] = None
    p: Optional[Decimal] = None
    caudal_volumen: Decimal

    class Config:
        from_attributes = True


class MonitoringStationWithLastMonitoring(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None
    last_monitoring: LastMonitoring


# =============================================
# MONITORINGS
# =============================================

class MonitoringBase(BaseModel):
    """Raw lab values of a campaign; indices are computed by the server"""
    monitoring_station_id: int
    monitoring_date: date
    weather_conditions: Optional[str] = Field(None, max_length=200)
    water_temperature: Optional[float] = None
    air_temperature: Optional[float] = None
    notes: Optional[str] = None
    performed_by: Optional[str] = Field(None, max_length=150)
    od: Decimal = Field(..., ge=0)
    sst: Decimal = Field(..., ge=0)
    dqo: Decimal = Field(..., ge=0)
    ce: Decimal = Field(..., gt=0)
    ph: Decimal = Field(..., ge=0, le=14)
    n: Optional[Decimal] = Field(None, ge=0)
    p: Optional[Decimal] = Field(None, ge=0)
    caudal_volumen: Decimal = Field(..., ge=0)


class MonitoringCreate(MonitoringBase):
    pass


class MonitoringUpdate(BaseModel):
    monitoring_station_id: Optional[int] = None
    monitoring_date: Optional[date] = None
    weather_conditions: Optional[str] = Field(None, max_length=200)
    water_temperature: Optional[float] = None
    air_temperature: Optional[float] = None
    notes: Optional[str] = None
    performed_by: Optional[str] = Field(None, max_length=150)
    od: Optional[Decimal] = Field(None, ge=0)
    sst: Optional[Decimal] = Field(None, ge=0)
    dqo: Optional[Decimal] = Field(None, ge=0)
    ce: Optional[Decimal] = Field(None, gt=0)
    ph: Optional[Decimal] = Field(None, ge=0, le=14)
    n: Optional[Decimal] = Field(None, ge=0)
    p: Optional[Decimal] = Field(None, ge=0)
    caudal_volumen: Optional[Decimal] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_required_measurements(self):
        # n and p may be cleared, the ICA measurements may not
        for field in ("monitoring_station_id", "monitoring_date", "od", "sst", "dqo", "ce", "ph", "caudal_volumen"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be empty")
        return self


class MonitoringResponse(MonitoringBase):
    id: int
    corporation_id: int
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
    created_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MonitoringListResponse(BaseModel):
    total: int
    page: int
    page_size: int
    items: list[MonitoringResponse]


class MonitoringStats(BaseModel):
    active_stations: int
    total_monitorings: int
    monitorings_this_year: int
    average_ica_coefficient: Optional[Decimal] = None
    by_quality: dict[str, int]
