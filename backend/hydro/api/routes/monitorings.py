"""
Monitorings - sampling campaigns of the monitoring stations
"""
from datetime import date, datetime
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional

from hydro.api.deps import (
    get_db,
    get_current_corporation_id,
    get_current_user_id,
    require_operator,
    require_admin,
)
from hydro.api.utils import get_by_id, validate_fk, paginate_query
from hydro.models.monitoring import Monitoring, MonitoringStation
from hydro.models.user import User
from hydro.schemas.monitoring import (
    MonitoringCreate,
    MonitoringUpdate,
    MonitoringResponse,
    MonitoringListResponse,
    MonitoringStats,
)
from hydro.services.monitoring_service import monitoring_service

router = APIRouter()

NEWEST_FIRST = (Monitoring.monitoring_date.desc(), Monitoring.id.desc())


@router.post("/", response_model=MonitoringResponse, status_code=201)
def create_monitoring(
    data: MonitoringCreate,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    user_id: int = Depends(get_current_user_id),
    _: User = Depends(require_operator)
):
    """Register a campaign; the ICA indices and classification are computed"""
    validate_fk(db, MonitoringStation, data.monitoring_station_id, corporation_id, "Monitoring station")

    monitoring = monitoring_service.create(db, corporation_id, user_id, data)
    db.commit()
    db.refresh(monitoring)
    return monitoring


@router.get("/", response_model=MonitoringListResponse)
def list_monitorings(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    monitoring_station_id: Optional[int] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=400, detail="start_date must not be after end_date")

    query = db.query(Monitoring).filter(Monitoring.corporation_id == corporation_id)

    if monitoring_station_id is not None:
        query = query.filter(Monitoring.monitoring_station_id == monitoring_station_id)
    if start_date:
        query = query.filter(Monitoring.monitoring_date >= start_date)
    if end_date:
        query = query.filter(Monitoring.monitoring_date <= end_date)

    items, total = paginate_query(query, page, page_size, NEWEST_FIRST)
    return {"items": items, "total": total, "page": page, "page_size": page_size}


@router.get("/stats", response_model=MonitoringStats)
def get_monitoring_stats(
    year: Optional[int] = Query(None, description="Year of the campaigns to count (default: current)"),
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    return monitoring_service.get_stats(db, corporation_id, datetime.now().year if year is None else year)


@router.get("/by-station/{station_id}", response_model=MonitoringListResponse)
def list_monitorings_by_station(
    station_id: int,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    get_by_id(db, MonitoringStation, station_id, corporation_id, error_message="Monitoring station not found")

    query = db.query(Monitoring).filter(Monitoring.monitoring_station_id == station_id)
    items, total = paginate_query(query, page, page_size, NEWEST_FIRST)
    return {"items": items, "total": total, "page": page, "page_size": page_size}


@router.get("/by-station/{station_id}/latest", response_model=MonitoringResponse)
def get_latest_monitoring(
    station_id: int,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    get_by_id(db, MonitoringStation, station_id, corporation_id, error_message="Monitoring station not found")

    monitoring = monitoring_service.latest_by_station(db, station_id)
    if not monitoring:
        raise HTTPException(status_code=404, detail="The station has no monitorings")
    return monitoring


@router.get("/{monitoring_id}", response_model=MonitoringResponse)
def get_monitoring(
    monitoring_id: int,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    return get_by_id(db, Monitoring, monitoring_id, corporation_id, error_message="Monitoring not found")


@router.put("/{monitoring_id}", response_model=MonitoringResponse)
def update_monitoring(
    monitoring_id: int,
    data: MonitoringUpdate,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    user_id: int = Depends(get_current_user_id),
    _: User = Depends(require_operator)
):
    monitoring = get_by_id(db, Monitoring, monitoring_id, corporation_id, error_message="Monitoring not found")
    if data.monitoring_station_id is not None:
        validate_fk(db, MonitoringStation, data.monitoring_station_id, corporation_id, "Monitoring station")

    monitoring = monitoring_service.update(db, monitoring, user_id, data)
    db.commit()
    db.refresh(monitoring)
    return monitoring


@router.delete("/{monitoring_id}", status_code=204)
def delete_monitoring(
    monitoring_id: int,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    _: User = Depends(require_admin)
):
    monitoring = get_by_id(db, Monitoring, monitoring_id, corporation_id, error_message="Monitoring not found")
    db.delete(monitoring)
    db.commit()
    return None
