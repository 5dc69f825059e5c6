"""
Update helpers
"""
from typing import TypeVar, List, Union
from sqlalchemy.orm import Session
from pydantic import BaseModel

T = TypeVar('T')


def update_entity(
    db: Session,
    entity: T,
    update_data: Union[BaseModel, dict],
    exclude_fields: List[str] = None,
    commit: bool = True
) -> T:
    """
    Copy the fields sent by the client onto an entity.

    Args:
        db: database session
        entity: entity to update
        update_data: Pydantic schema (only set fields are used) or dict
        exclude_fields: fields to ignore
        commit: commit and refresh

    Usage:
        basin = update_entity(db, basin, basin_update)
        discharge = update_entity(db, discharge, data, exclude_fields=["parameters"], commit=False)
    """
    if isinstance(update_data, BaseModel):
        data = update_data.model_dump(exclude_unset=True)
    else:
        data = dict(update_data)

    if exclude_fields:
        data = {k: v for k, v in data.items() if k not in exclude_fields}

    for field, value in data.items():
        if hasattr(entity, field):
            setattr(entity, field, value)

    if commit:
        db.commit()
        db.refresh(entity)

    return entity
