from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional

from hydro.api.deps import get_db, get_current_corporation_id, require_operator, require_admin
from hydro.api.utils import get_by_id, validate_fk, update_entity
from hydro.models.discharge_user import DischargeUser
from hydro.models.tariff import ProjectProgress
from hydro.models.user import User
from hydro.schemas.tariff import ProjectProgressCreate, ProjectProgressUpdate, ProjectProgressResponse

router = APIRouter()


@router.get("/", response_model=list[ProjectProgressResponse])
def list_project_progress(
    discharge_user_id: Optional[int] = Query(None),
    year: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    query = db.query(ProjectProgress).filter(ProjectProgress.corporation_id == corporation_id)
    if discharge_user_id is not None:
        query = query.filter(ProjectProgress.discharge_user_id == discharge_user_id)
    if year is not None:
        query = query.filter(ProjectProgress.year == year)
    return query.order_by(ProjectProgress.year.desc(), ProjectProgress.discharge_user_id).all()


@router.post("/", response_model=ProjectProgressResponse, status_code=201)
def create_project_progress(
    data: ProjectProgressCreate,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    _: User = Depends(require_operator)
):
    discharge_user = validate_fk(db, DischargeUser, data.discharge_user_id, corporation_id, "Discharge user")
    if not discharge_user.is_public_service_company:
        raise HTTPException(status_code=400, detail="Project progress only applies to public service companies")

    exists = db.query(ProjectProgress).filter(
        ProjectProgress.corporation_id == corporation_id,
        ProjectProgress.discharge_user_id == data.discharge_user_id,
        ProjectProgress.year == data.year
    ).first()
    if exists:
        raise HTTPException(status_code=400, detail=f"Project progress for {data.year} already registered")

    progress = ProjectProgress(**data.model_dump(), corporation_id=corporation_id)
    db.add(progress)
    db.commit()
    db.refresh(progress)
    return progress


@router.put("/{progress_id}", response_model=ProjectProgressResponse)
def update_project_progress(
    progress_id: int,
    data: ProjectProgressUpdate,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    _: User = Depends(require_operator)
):
    progress = get_by_id(db, ProjectProgress, progress_id, corporation_id, error_message="Project progress not found")
    return update_entity(db, progress, data)


@router.delete("/{progress_id}", status_code=204)
def delete_project_progress(
    progress_id: int,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    _: User = Depends(require_admin)
):
    progress = get_by_id(db, ProjectProgress, progress_id, corporation_id, error_message="Project progress not found")
    db.delete(progress)
    db.commit()
    return None
