"""
Discharges - yearly declarations with monthly parameters and source monitorings
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session, selectinload
from typing import Optional

from hydro.api.deps import (
    get_db,
    get_current_corporation_id,
    get_current_user_id,
    require_operator,
    require_admin,
)
from hydro.api.utils import get_by_id, validate_fk, paginate_query, apply_search_filter
from hydro.models.discharge import Discharge
from hydro.models.discharge_user import DischargeUser
from hydro.models.geography import Municipality
from hydro.models.invoice import Invoice
from hydro.models.user import User
from hydro.models.water_basin import BasinSection
from hydro.schemas.discharge import (
    DischargeCreate,
    DischargeUpdate,
    DischargeResponse,
    DischargeListResponse,
)
from hydro.services.discharge_service import discharge_service

router = APIRouter()

DETAIL_OPTIONS = [selectinload(Discharge.parameters), selectinload(Discharge.monitorings)]


def _validate_references(db: Session, data, corporation_id: int):
    if data.discharge_user_id is not None:
        validate_fk(db, DischargeUser, data.discharge_user_id, corporation_id, "Discharge user")
    if data.basin_section_id is not None:
        validate_fk(db, BasinSection, data.basin_section_id, corporation_id, "Basin section")
    if data.municipality_id is not None:
        validate_fk(db, Municipality, data.municipality_id, None, "Municipality")


@router.post("/", response_model=DischargeResponse, status_code=201)
def create_discharge(
    data: DischargeCreate,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    user_id: int = Depends(get_current_user_id),
    _: User = Depends(require_operator)
):
    """
    Register a discharge

    The number is taken from the DISCHARGE sequence of the year when it
    is not sent. Loads and water quality indices are computed.
    """
    _validate_references(db, data, corporation_id)

    discharge = discharge_service.create(db, corporation_id, user_id, data)
    db.commit()
    db.refresh(discharge)
    return discharge


@router.get("/", response_model=DischargeListResponse)
def list_discharges(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    search: Optional[str] = Query(None, description="Search by name or discharge point"),
    year: Optional[int] = Query(None),
    discharge_user_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    query = db.query(Discharge).filter(Discharge.corporation_id == corporation_id)

    if search:
        query = apply_search_filter(query, search, Discharge.name, Discharge.discharge_point)
    if year is not None:
        query = query.filter(Discharge.year == year)
    if discharge_user_id is not None:
        query = query.filter(Discharge.discharge_user_id == discharge_user_id)

    items, total = paginate_query(query, page, page_size, (Discharge.year.desc(), Discharge.number.desc()))
    return {"items": items, "total": total, "page": page, "page_size": page_size}


@router.get("/{discharge_id}", response_model=DischargeResponse)
def get_discharge(
    discharge_id: int,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    return get_by_id(db, Discharge, discharge_id, corporation_id,
                     error_message="Discharge not found", options=DETAIL_OPTIONS)


@router.put("/{discharge_id}", response_model=DischargeResponse)
def update_discharge(
    discharge_id: int,
    data: DischargeUpdate,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    user_id: int = Depends(get_current_user_id),
    _: User = Depends(require_operator)
):
    discharge = get_by_id(db, Discharge, discharge_id, corporation_id,
                          error_message="Discharge not found", options=DETAIL_OPTIONS)
    _validate_references(db, data, corporation_id)

    discharge = discharge_service.update(db, discharge, user_id, data)
    db.commit()
    db.refresh(discharge)
    return discharge


@router.delete("/{discharge_id}", status_code=204)
def delete_discharge(
    discharge_id: int,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    _: User = Depends(require_admin)
):
    """Delete a discharge (not allowed once invoiced). Its number is not reused."""
    discharge = get_by_id(db, Discharge, discharge_id, corporation_id, error_message="Discharge not found")

    if db.query(Invoice.id).filter(Invoice.discharge_id == discharge.id).first():
        raise HTTPException(status_code=409, detail="Discharge has invoices")

    db.delete(discharge)
    db.commit()
    return None
