"""
Departments - shared reference data, maintained by the master user
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hydro.api.deps import get_db, get_current_user, require_master
from hydro.api.utils import get_by_id, validate_unique, ensure_not_referenced, update_entity
from hydro.models.geography import Department, Municipality
from hydro.models.user import User
from hydro.schemas.geography import (
    DepartmentCreate,
    DepartmentUpdate,
    DepartmentResponse,
    DepartmentListResponse,
)

router = APIRouter()


@router.get("/", response_model=DepartmentListResponse)
def list_departments(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user)
):
    items = db.query(Department).order_by(Department.name).all()
    return {"total": len(items), "items": items}


@router.get("/{department_id}", response_model=DepartmentResponse)
def get_department(
    department_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user)
):
    return get_by_id(db, Department, department_id, None, error_message="Department not found")


@router.post("/", response_model=DepartmentResponse, status_code=201)
def create_department(
    data: DepartmentCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_master)
):
    validate_unique(db, Department, "name", data.name, None, display_name="Department name")
    validate_unique(db, Department, "code", data.code, None, display_name="Department code")

    department = Department(**data.model_dump())
    db.add(department)
    db.commit()
    db.refresh(department)
    return department


@router.put("/{department_id}", response_model=DepartmentResponse)
def update_department(
    department_id: int,
    data: DepartmentUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_master)
):
    department = get_by_id(db, Department, department_id, None, error_message="Department not found")
    validate_unique(db, Department, "name", data.name, None, exclude_id=department.id, display_name="Department name")
    validate_unique(db, Department, "code", data.code, None, exclude_id=department.id, display_name="Department code")
    return update_entity(db, department, data)


@router.delete("/{department_id}", status_code=204)
def delete_department(
    department_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_master)
):
    """Delete a department (not allowed while it has municipalities)"""
    department = get_by_id(db, Department, department_id, None, error_message="Department not found")
    ensure_not_referenced(db, Municipality, Municipality.department_id, department.id,
                          "Department has municipalities")
    db.delete(department)
    db.commit()
    return None
