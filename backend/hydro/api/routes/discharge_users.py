"""
Discharge users - companies paying the retributive rate
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from hydro.api.deps import get_db, get_current_corporation_id, require_operator, require_admin
from hydro.api.utils import (
    get_by_id,
    validate_fk,
    validate_unique,
    ensure_not_referenced,
    paginate_query,
    apply_search_filter,
    update_entity,
)
from hydro.models.catalog import AuthorizationType, EconomicActivity
from hydro.models.discharge import Discharge
from hydro.models.discharge_user import DischargeUser
from hydro.models.geography import Municipality
from hydro.models.user import User
from hydro.schemas.discharge_user import (
    DischargeUserCreate,
    DischargeUserUpdate,
    DischargeUserResponse,
    DischargeUserListResponse,
)

router = APIRouter()


def _validate_references(db: Session, data):
    if data.municipality_id is not None:
        validate_fk(db, Municipality, data.municipality_id, None, "Municipality")
    if data.economic_activity_id is not None:
        validate_fk(db, EconomicActivity, data.economic_activity_id, None, "Economic activity")
    if data.authorization_type_id is not None:
        validate_fk(db, AuthorizationType, data.authorization_type_id, None, "Authorization type")


@router.post("/", response_model=DischargeUserResponse, status_code=201)
def create_discharge_user(
    data: DischargeUserCreate,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    _: User = Depends(require_operator)
):
    _validate_references(db, data)
    validate_unique(db, DischargeUser, "code", data.code, corporation_id, display_name="Discharge user code")

    discharge_user = DischargeUser(**data.model_dump(), corporation_id=corporation_id)
    db.add(discharge_user)
    db.commit()
    db.refresh(discharge_user)
    return discharge_user


@router.get("/", response_model=DischargeUserListResponse)
def list_discharge_users(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    search: Optional[str] = Query(None, description="Search by company name, code or document"),
    municipality_id: Optional[int] = Query(None),
    active_only: bool = Query(False),
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    query = db.query(DischargeUser).filter(DischargeUser.corporation_id == corporation_id)

    if search:
        query = apply_search_filter(
            query, search,
            DischargeUser.company_name, DischargeUser.code, DischargeUser.document_number
        )
    if municipality_id is not None:
        query = query.filter(DischargeUser.municipality_id == municipality_id)
    if active_only:
        query = query.filter(DischargeUser.is_active.is_(True))

    items, total = paginate_query(query, page, page_size, DischargeUser.company_name)
    return {"items": items, "total": total, "page": page, "page_size": page_size}


@router.get("/{discharge_user_id}", response_model=DischargeUserResponse)
def get_discharge_user(
    discharge_user_id: int,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    return get_by_id(db, DischargeUser, discharge_user_id, corporation_id, error_message="Discharge user not found")


@router.put("/{discharge_user_id}", response_model=DischargeUserResponse)
def update_discharge_user(
    discharge_user_id: int,
    data: DischargeUserUpdate,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    _: User = Depends(require_operator)
):
    discharge_user = get_by_id(db, DischargeUser, discharge_user_id, corporation_id,
                               error_message="Discharge user not found")
    _validate_references(db, data)
    validate_unique(db, DischargeUser, "code", data.code, corporation_id, exclude_id=discharge_user.id,
                    display_name="Discharge user code")
    return update_entity(db, discharge_user, data)


@router.delete("/{discharge_user_id}", status_code=204)
def delete_discharge_user(
    discharge_user_id: int,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    _: User = Depends(require_admin)
):
    """Delete a discharge user (not allowed while it has discharges)"""
    discharge_user = get_by_id(db, DischargeUser, discharge_user_id, corporation_id,
                               error_message="Discharge user not found")
    ensure_not_referenced(db, Discharge, Discharge.discharge_user_id, discharge_user.id,
                          "Discharge user has discharges")
    db.delete(discharge_user)
    db.commit()
    return None
