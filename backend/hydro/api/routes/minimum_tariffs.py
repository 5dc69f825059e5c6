from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from hydro.api.deps import get_db, get_current_corporation_id, require_operator, require_admin
from hydro.api.utils import get_by_id, update_entity
from hydro.models.invoice import Invoice
from hydro.models.tariff import MinimumTariff
from hydro.models.user import User
from hydro.schemas.tariff import MinimumTariffCreate, MinimumTariffUpdate, MinimumTariffResponse

router = APIRouter()


@router.get("/", response_model=list[MinimumTariffResponse])
def list_minimum_tariffs(
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    return db.query(MinimumTariff).filter(
        MinimumTariff.corporation_id == corporation_id
    ).order_by(MinimumTariff.year.desc()).all()


@router.get("/year/{year}", response_model=MinimumTariffResponse)
def get_minimum_tariff_by_year(
    year: int,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    tariff = db.query(MinimumTariff).filter(
        MinimumTariff.corporation_id == corporation_id,
        MinimumTariff.year == year
    ).first()
    if not tariff:
        raise HTTPException(status_code=404, detail=f"No minimum tariff for {year}")
    return tariff


@router.post("/", response_model=MinimumTariffResponse, status_code=201)
def create_minimum_tariff(
    data: MinimumTariffCreate,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    _: User = Depends(require_operator)
):
    exists = db.query(MinimumTariff).filter(
        MinimumTariff.corporation_id == corporation_id,
        MinimumTariff.year == data.year
    ).first()
    if exists:
        raise HTTPException(status_code=400, detail=f"Minimum tariff for {data.year} already registered")

    tariff = MinimumTariff(**data.model_dump(), corporation_id=corporation_id)
    db.add(tariff)
    db.commit()
    db.refresh(tariff)
    return tariff


@router.put("/{tariff_id}", response_model=MinimumTariffResponse)
def update_minimum_tariff(
    tariff_id: int,
    data: MinimumTariffUpdate,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    _: User = Depends(require_operator)
):
    tariff = get_by_id(db, MinimumTariff, tariff_id, corporation_id, error_message="Minimum tariff not found")
    return update_entity(db, tariff, data)


@router.delete("/{tariff_id}", status_code=204)
def delete_minimum_tariff(
    tariff_id: int,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    _: User = Depends(require_admin)
):
    """Delete a tariff (not allowed once invoices were issued for its year)"""
    tariff = get_by_id(db, MinimumTariff, tariff_id, corporation_id, error_message="Minimum tariff not found")
    invoiced = db.query(Invoice.id).filter(
        Invoice.corporation_id == corporation_id,
        Invoice.year == tariff.year
    ).first()
    if invoiced:
        raise HTTPException(status_code=409, detail=f"Invoices were already issued for {tariff.year}")

    db.delete(tariff)
    db.commit()
    return None
