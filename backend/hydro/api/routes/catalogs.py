"""
Catalogs: economic activities and authorization types
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from hydro.api.deps import get_db, get_current_user, require_master
from hydro.api.utils import get_by_id, validate_unique, apply_search_filter, update_entity
from hydro.models.catalog import AuthorizationType, EconomicActivity
from hydro.models.user import User
from hydro.schemas.catalog import (
    AuthorizationTypeCreate,
    AuthorizationTypeUpdate,
    AuthorizationTypeResponse,
    EconomicActivityCreate,
    EconomicActivityUpdate,
    EconomicActivityResponse,
)

router = APIRouter()


@router.get("/economic-activities", response_model=list[EconomicActivityResponse])
def list_economic_activities(
    search: Optional[str] = Query(None, description="Search by name or CIIU code"),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user)
):
    query = apply_search_filter(db.query(EconomicActivity), search, EconomicActivity.name, EconomicActivity.code)
    return query.order_by(EconomicActivity.code).all()


@router.post("/economic-activities", response_model=EconomicActivityResponse, status_code=201)
def create_economic_activity(
    data: EconomicActivityCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_master)
):
    validate_unique(db, EconomicActivity, "code", data.code, None, display_name="CIIU code")
    activity = EconomicActivity(**data.model_dump())
    db.add(activity)
    db.commit()
    db.refresh(activity)
    return activity


@router.put("/economic-activities/{activity_id}", response_model=EconomicActivityResponse)
def update_economic_activity(
    activity_id: int,
    data: EconomicActivityUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_master)
):
    activity = get_by_id(db, EconomicActivity, activity_id, None, error_message="Economic activity not found")
    validate_unique(db, EconomicActivity, "code", data.code, None, exclude_id=activity.id, display_name="CIIU code")
    return update_entity(db, activity, data)


@router.get("/authorization-types", response_model=list[AuthorizationTypeResponse])
def list_authorization_types(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user)
):
    return db.query(AuthorizationType).order_by(AuthorizationType.name).all()


@router.post("/authorization-types", response_model=AuthorizationTypeResponse, status_code=201)
def create_authorization_type(
    data: AuthorizationTypeCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_master)
):
    validate_unique(db, AuthorizationType, "name", data.name, None, display_name="Authorization type")
    authorization_type = AuthorizationType(**data.model_dump())
    db.add(authorization_type)
    db.commit()
    db.refresh(authorization_type)
    return authorization_type


@router.put("/authorization-types/{type_id}", response_model=AuthorizationTypeResponse)
def update_authorization_type(
    type_id: int,
    data: AuthorizationTypeUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_master)
):
    authorization_type = get_by_id(db, AuthorizationType, type_id, None, error_message="Authorization type not found")
    validate_unique(db, AuthorizationType, "name", data.name, None, exclude_id=type_id, display_name="Authorization type")
    return update_entity(db, authorization_type, data)
