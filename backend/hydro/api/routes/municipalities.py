"""
Municipalities and municipality categories - shared reference data
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session, joinedload
from typing import Optional

from hydro.api.deps import get_db, get_current_user, require_master
from hydro.api.utils import (
    get_by_id,
    validate_fk,
    validate_unique,
    ensure_not_referenced,
    paginate_query,
    apply_search_filter,
    update_entity,
)
from hydro.models.discharge_user import DischargeUser
from hydro.models.geography import Category, Department, Municipality
from hydro.models.user import User
from hydro.schemas.geography import (
    CategoryCreate,
    CategoryResponse,
    MunicipalityCreate,
    MunicipalityUpdate,
    MunicipalityResponse,
    MunicipalityListResponse,
)

router = APIRouter()


# =============================================
# CATEGORIES
# =============================================

@router.get("/categories", response_model=list[CategoryResponse])
def list_categories(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user)
):
    return db.query(Category).order_by(Category.name).all()


@router.post("/categories", response_model=CategoryResponse, status_code=201)
def create_category(
    data: CategoryCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_master)
):
    validate_unique(db, Category, "name", data.name, None, display_name="Category name")
    category = Category(**data.model_dump())
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@router.delete("/categories/{category_id}", status_code=204)
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_master)
):
    category = get_by_id(db, Category, category_id, None, error_message="Category not found")
    ensure_not_referenced(db, Municipality, Municipality.category_id, category.id,
                          "Category is assigned to municipalities")
    db.delete(category)
    db.commit()
    return None


# =============================================
# MUNICIPALITIES
# =============================================

def _check_code_free(db: Session, department_id: int, code: str, exclude_id: int = None):
    query = db.query(Municipality).filter(
        Municipality.department_id == department_id,
        Municipality.code == code
    )
    if exclude_id:
        query = query.filter(Municipality.id != exclude_id)
    if query.first():
        raise HTTPException(status_code=400, detail="Municipality code already registered in the department")


@router.get("/", response_model=MunicipalityListResponse)
def list_municipalities(
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    search: Optional[str] = Query(None, description="Search by name or code"),
    department_id: Optional[int] = Query(None),
    active_only: bool = Query(True),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user)
):
    query = db.query(Municipality).options(
        joinedload(Municipality.department),
        joinedload(Municipality.category)
    )

    if search:
        query = apply_search_filter(query, search, Municipality.name, Municipality.code)
    if department_id is not None:
        query = query.filter(Municipality.department_id == department_id)
    if active_only:
        query = query.filter(Municipality.is_active.is_(True))

    items, total = paginate_query(query, page, page_size, Municipality.name)
    return {"items": items, "total": total, "page": page, "page_size": page_size}


@router.get("/{municipality_id}", response_model=MunicipalityResponse)
def get_municipality(
    municipality_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user)
):
    return get_by_id(db, Municipality, municipality_id, None, error_message="Municipality not found")


@router.post("/", response_model=MunicipalityResponse, status_code=201)
def create_municipality(
    data: MunicipalityCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_master)
):
    validate_fk(db, Department, data.department_id, None, "Department")
    validate_fk(db, Category, data.category_id, None, "Category")
    _check_code_free(db, data.department_id, data.code)

    municipality = Municipality(**data.model_dump())
    db.add(municipality)
    db.commit()
    db.refresh(municipality)
    return municipality


@router.put("/{municipality_id}", response_model=MunicipalityResponse)
def update_municipality(
    municipality_id: int,
    data: MunicipalityUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_master)
):
    municipality = get_by_id(db, Municipality, municipality_id, None, error_message="Municipality not found")

    if data.department_id is not None:
        validate_fk(db, Department, data.department_id, None, "Department")
    if data.category_id is not None:
        validate_fk(db, Category, data.category_id, None, "Category")
    if data.department_id is not None or data.code is not None:
        _check_code_free(
            db,
            data.department_id or municipality.department_id,
            data.code or municipality.code,
            exclude_id=municipality.id
        )

    return update_entity(db, municipality, data)


@router.delete("/{municipality_id}", status_code=204)
def delete_municipality(
    municipality_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_master)
):
    municipality = get_by_id(db, Municipality, municipality_id, None, error_message="Municipality not found")
    ensure_not_referenced(db, DischargeUser, DischargeUser.municipality_id, municipality.id,
                          "Municipality is used by discharge users")
    db.delete(municipality)
    db.commit()
    return None
