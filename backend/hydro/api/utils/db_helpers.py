"""
Database helpers shared by every route
"""
from typing import Type, TypeVar, Optional, Any
from sqlalchemy.orm import Session
from fastapi import HTTPException
from hydro.core.exceptions import ResourceInUseError

T = TypeVar('T')


def get_by_id(
    db: Session,
    model: Type[T],
    entity_id: int,
    corporation_id: Optional[int],
    raise_not_found: bool = True,
    error_message: str = None,
    options: list = None
) -> Optional[T]:
    """
    Fetch an entity by id inside the caller's corporation.

    Args:
        db: database session
        model: SQLAlchemy model class
        entity_id: entity id
        corporation_id: tenant id, None for shared reference tables
        raise_not_found: raise 404 when missing
        error_message: custom error message
        options: loader options (joinedload, selectinload)

    Returns:
        The entity or None

    Raises:
        HTTPException 404 if raise_not_found and the entity does not exist

    Usage:
        discharge = get_by_id(db, Discharge, discharge_id, corporation_id)
        department = get_by_id(db, Department, department_id, None)
    """
    query = db.query(model).filter(model.id == entity_id)
    if corporation_id is not None:
        query = query.filter(model.corporation_id == corporation_id)

    if options:
        query = query.options(*options)

    entity = query.first()

    if not entity and raise_not_found:
        msg = error_message or f"{model.__name__} not found"
        raise HTTPException(status_code=404, detail=msg)

    return entity


def validate_fk(
    db: Session,
    model: Type[T],
    fk_id: int,
    corporation_id: Optional[int],
    field_name: str = None
) -> T:
    """
    Check that a referenced row exists (inside the corporation for tenant tables).

    Raises:
        HTTPException 404 if it does not exist

    Usage:
        section = validate_fk(db, BasinSection, data.basin_section_id, corporation_id, "Basin section")
        municipality = validate_fk(db, Municipality, data.municipality_id, None)
    """
    name = field_name or model.__name__
    return get_by_id(db, model, fk_id, corporation_id, error_message=f"{name} not found")


def validate_unique(
    db: Session,
    model: Type[T],
    field_name: str,
    field_value: Any,
    corporation_id: Optional[int],
    exclude_id: int = None,
    display_name: str = None
) -> None:
    """
    Check that a field value is not taken (inside the corporation for tenant tables).

    Raises:
        HTTPException 400 if the value already exists

    Usage:
        validate_unique(db, DischargeUser, "code", data.code, corporation_id)
        validate_unique(db, Department, "code", data.code, None, exclude_id=department.id)
    """
    if field_value is None:
        return

    query = db.query(model).filter(getattr(model, field_name) == field_value)
    if corporation_id is not None:
        query = query.filter(model.corporation_id == corporation_id)

    if exclude_id:
        query = query.filter(model.id != exclude_id)

    if query.first():
        name = display_name or field_name
        raise HTTPException(status_code=400, detail=f"{name} already registered")


def ensure_not_referenced(
    db: Session,
    model: Type[T],
    column,
    entity_id: int,
    message: str
) -> None:
    """
    Refuse to delete a row still referenced by another table.

    Raises:
        ResourceInUseError (409) when a referencing row exists

    Usage:
        ensure_not_referenced(db, Municipality, Municipality.department_id, department.id,
                              "Department has municipalities")
    """
    if db.query(model.id).filter(column == entity_id).first():
        raise ResourceInUseError(message, {"referenced_by": model.__tablename__, "id": entity_id})
