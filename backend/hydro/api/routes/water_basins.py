"""
Water basins and their sections
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session, selectinload
from typing import Optional

from hydro.api.deps import get_db, get_current_corporation_id, require_operator, require_admin
from hydro.api.utils import (
    get_by_id,
    validate_unique,
    ensure_not_referenced,
    paginate_query,
    apply_search_filter,
    update_entity,
)
from hydro.models.discharge import Discharge
from hydro.models.monitoring import MonitoringStation
from hydro.models.user import User
from hydro.models.water_basin import BasinSection, WaterBasin
from hydro.schemas.water_basin import (
    BasinSectionCreate,
    BasinSectionUpdate,
    BasinSectionResponse,
    WaterBasinCreate,
    WaterBasinUpdate,
    WaterBasinResponse,
    WaterBasinListResponse,
)

router = APIRouter()


@router.post("/", response_model=WaterBasinResponse, status_code=201)
def create_water_basin(
    data: WaterBasinCreate,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    _: User = Depends(require_operator)
):
    validate_unique(db, WaterBasin, "name", data.name, corporation_id, display_name="Water basin name")

    basin = WaterBasin(**data.model_dump(), corporation_id=corporation_id)
    db.add(basin)
    db.commit()
    db.refresh(basin)
    return basin


@router.get("/", response_model=WaterBasinListResponse)
def list_water_basins(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    search: Optional[str] = Query(None, description="Search by name"),
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    query = db.query(WaterBasin).options(selectinload(WaterBasin.sections)).filter(
        WaterBasin.corporation_id == corporation_id
    )
    if search:
        query = apply_search_filter(query, search, WaterBasin.name)

    items, total = paginate_query(query, page, page_size, WaterBasin.name)
    return {"items": items, "total": total, "page": page, "page_size": page_size}


@router.get("/{basin_id}", response_model=WaterBasinResponse)
def get_water_basin(
    basin_id: int,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    return get_by_id(db, WaterBasin, basin_id, corporation_id, error_message="Water basin not found")


@router.put("/{basin_id}", response_model=WaterBasinResponse)
def update_water_basin(
    basin_id: int,
    data: WaterBasinUpdate,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    _: User = Depends(require_operator)
):
    basin = get_by_id(db, WaterBasin, basin_id, corporation_id, error_message="Water basin not found")
    validate_unique(db, WaterBasin, "name", data.name, corporation_id, exclude_id=basin.id,
                    display_name="Water basin name")
    return update_entity(db, basin, data)


@router.delete("/{basin_id}", status_code=204)
def delete_water_basin(
    basin_id: int,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    _: User = Depends(require_admin)
):
    """Delete a basin (not allowed while it has sections)"""
    basin = get_by_id(db, WaterBasin, basin_id, corporation_id, error_message="Water basin not found")
    ensure_not_referenced(db, BasinSection, BasinSection.water_basin_id, basin.id, "Water basin has sections")
    db.delete(basin)
    db.commit()
    return None


# =============================================
# SECTIONS
# =============================================

def _get_section(db: Session, basin_id: int, section_id: int, corporation_id: int) -> BasinSection:
    section = get_by_id(db, BasinSection, section_id, corporation_id, error_message="Basin section not found")
    if section.water_basin_id != basin_id:
        raise HTTPException(status_code=404, detail="Basin section not found")
    return section


def _check_section_name(db: Session, basin_id: int, name: Optional[str], exclude_id: int = None):
    if name is None:
        return
    query = db.query(BasinSection).filter(
        BasinSection.water_basin_id == basin_id,
        BasinSection.name == name
    )
    if exclude_id:
        query = query.filter(BasinSection.id != exclude_id)
    if query.first():
        raise HTTPException(status_code=400, detail="Section name already registered in the basin")


@router.post("/{basin_id}/sections", response_model=BasinSectionResponse, status_code=201)
def create_basin_section(
    basin_id: int,
    data: BasinSectionCreate,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    _: User = Depends(require_operator)
):
    get_by_id(db, WaterBasin, basin_id, corporation_id, error_message="Water basin not found")
    _check_section_name(db, basin_id, data.name)

    section = BasinSection(**data.model_dump(), water_basin_id=basin_id, corporation_id=corporation_id)
    db.add(section)
    db.commit()
    db.refresh(section)
    return section


@router.put("/{basin_id}/sections/{section_id}", response_model=BasinSectionResponse)
def update_basin_section(
    basin_id: int,
    section_id: int,
    data: BasinSectionUpdate,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    _: User = Depends(require_operator)
):
    section = _get_section(db, basin_id, section_id, corporation_id)
    _check_section_name(db, basin_id, data.name, exclude_id=section.id)
    return update_entity(db, section, data)


@router.delete("/{basin_id}/sections/{section_id}", status_code=204)
def delete_basin_section(
    basin_id: int,
    section_id: int,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    _: User = Depends(require_admin)
):
    section = _get_section(db, basin_id, section_id, corporation_id)
    ensure_not_referenced(db, Discharge, Discharge.basin_section_id, section.id,
                          "Basin section is used by discharges")
    ensure_not_referenced(db, MonitoringStation, MonitoringStation.basin_section_id, section.id,
                          "Basin section has monitoring stations")
    db.delete(section)
    db.commit()
    return None
