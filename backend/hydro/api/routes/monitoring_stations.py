"""
Monitoring stations of the corporation
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from hydro.api.deps import (
    get_db,
    get_current_corporation_id,
    get_current_user_id,
    require_operator,
    require_admin,
)
from hydro.api.utils import (
    get_by_id,
    validate_fk,
    validate_unique,
    ensure_not_referenced,
    paginate_query,
    apply_search_filter,
    update_entity,
)
from hydro.models.monitoring import Monitoring, MonitoringStation
from hydro.models.user import User
from hydro.models.water_basin import BasinSection
from hydro.schemas.monitoring import (
    MonitoringStationCreate,
    MonitoringStationUpdate,
    MonitoringStationResponse,
    MonitoringStationListResponse,
    MonitoringStationWithLastMonitoring,
)
from hydro.services.monitoring_service import monitoring_service

router = APIRouter()


@router.post("/", response_model=MonitoringStationResponse, status_code=201)
def create_monitoring_station(
    data: MonitoringStationCreate,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    user_id: int = Depends(get_current_user_id),
    _: User = Depends(require_operator)
):
    validate_fk(db, BasinSection, data.basin_section_id, corporation_id, "Basin section")
    validate_unique(db, MonitoringStation, "name", data.name, corporation_id, display_name="Station name")

    station = MonitoringStation(
        **data.model_dump(),
        corporation_id=corporation_id,
        created_by=user_id,
        updated_by=user_id,
    )
    db.add(station)
    db.commit()
    db.refresh(station)
    return station


@router.get("/", response_model=MonitoringStationListResponse)
def list_monitoring_stations(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    search: Optional[str] = Query(None, description="Search by name"),
    basin_section_id: Optional[int] = Query(None),
    is_active: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    query = db.query(MonitoringStation).filter(MonitoringStation.corporation_id == corporation_id)

    if search:
        query = apply_search_filter(query, search, MonitoringStation.name)
    if basin_section_id is not None:
        query = query.filter(MonitoringStation.basin_section_id == basin_section_id)
    if is_active is not None:
        query = query.filter(MonitoringStation.is_active == is_active)

    items, total = paginate_query(query, page, page_size, MonitoringStation.name)
    return {"items": items, "total": total, "page": page, "page_size": page_size}


@router.get("/with-last-monitoring", response_model=list[MonitoringStationWithLastMonitoring])
def list_stations_with_last_monitoring(
    basin_section_id: int = Query(...),
    name: Optional[str] = Query(None, description="Part of the station name"),
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    """
    Active stations of a basin section with their most recent monitoring

    Stations that were never monitored are left out.
    """
    validate_fk(db, BasinSection, basin_section_id, corporation_id, "Basin section")
    return monitoring_service.stations_with_last_monitoring(db, corporation_id, basin_section_id, name)


@router.get("/{station_id}", response_model=MonitoringStationResponse)
def get_monitoring_station(
    station_id: int,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    return get_by_id(db, MonitoringStation, station_id, corporation_id, error_message="Monitoring station not found")


@router.put("/{station_id}", response_model=MonitoringStationResponse)
def update_monitoring_station(
    station_id: int,
    data: MonitoringStationUpdate,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    user_id: int = Depends(get_current_user_id),
    _: User = Depends(require_operator)
):
    station = get_by_id(db, MonitoringStation, station_id, corporation_id,
                        error_message="Monitoring station not found")
    if data.basin_section_id is not None:
        validate_fk(db, BasinSection, data.basin_section_id, corporation_id, "Basin section")
    validate_unique(db, MonitoringStation, "name", data.name, corporation_id, exclude_id=station.id,
                    display_name="Station name")

    station.updated_by = user_id
    return update_entity(db, station, data)


@router.delete("/{station_id}", status_code=204)
def delete_monitoring_station(
    station_id: int,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    _: User = Depends(require_admin)
):
    """Delete a station (not allowed while it has monitorings)"""
    station = get_by_id(db, MonitoringStation, station_id, corporation_id,
                        error_message="Monitoring station not found")
    ensure_not_referenced(db, Monitoring, Monitoring.monitoring_station_id, station.id,
                          "Monitoring station has monitorings")
    db.delete(station)
    db.commit()
    return None
