from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from hydro.api.deps import get_db, get_current_corporation, require_admin
from hydro.api.utils import update_entity
from hydro.models.corporation import Corporation
from hydro.models.discharge import Discharge
from hydro.models.discharge_user import DischargeUser
from hydro.models.invoice import Invoice
from hydro.models.user import User
from hydro.schemas.corporation import CorporationResponse, CorporationStats, CorporationUpdate

router = APIRouter()


@router.get("/me", response_model=CorporationResponse)
def read_my_corporation(corporation: Corporation = Depends(get_current_corporation)):
    return corporation


@router.put("/me", response_model=CorporationResponse)
def update_my_corporation(
    data: CorporationUpdate,
    corporation: Corporation = Depends(get_current_corporation),
    _: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Update the caller's corporation (administrators only)"""
    for field in ("name", "code"):
        value = getattr(data, field)
        if value is None:
            continue
        taken = db.query(Corporation).filter(
            getattr(Corporation, field) == value,
            Corporation.id != corporation.id
        ).first()
        if taken:
            raise HTTPException(status_code=400, detail=f"Corporation {field} already registered")

    return update_entity(db, corporation, data)


@router.get("/me/stats", response_model=CorporationStats)
def read_my_corporation_stats(
    corporation: Corporation = Depends(get_current_corporation),
    db: Session = Depends(get_db)
):
    """Record counts of the corporation"""
    def count(model, *criteria):
        return db.query(model).filter(model.corporation_id == corporation.id, *criteria).count()

    return {
        "users": count(User),
        "discharge_users": count(DischargeUser),
        "discharges": count(Discharge),
        "active_invoices": count(Invoice, Invoice.is_active.is_(True)),
    }
