"""
Invoices - retributive rate charged for a discharge
"""
from datetime import datetime
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from typing import Optional

from hydro.api.deps import get_db, get_current_corporation_id, get_current_user_id, require_operator
from hydro.api.utils import get_by_id, paginate_query
from hydro.models.discharge import Discharge
from hydro.models.invoice import Invoice
from hydro.models.user import User
from hydro.schemas.invoice import InvoiceResponse, InvoiceListResponse, InvoiceStats
from hydro.services.invoice_service import invoice_service

router = APIRouter()


@router.post("/generate-from-discharge/{discharge_id}", response_model=InvoiceResponse)
def generate_invoice_from_discharge(
    discharge_id: int,
    response: Response,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id),
    user_id: int = Depends(get_current_user_id),
    _: User = Depends(require_operator)
):
    """
    Compute the invoice of a discharge

    201 when a new invoice is issued, 200 when the active invoice already
    had the same total and is returned as is.
    """
    invoice, created = invoice_service.generate_from_discharge(db, corporation_id, user_id, discharge_id)
    if created:
        db.commit()
        db.refresh(invoice)
        response.status_code = 201
    return invoice


@router.get("/stats", response_model=InvoiceStats)
def invoice_stats(
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    return invoice_service.get_stats(db, corporation_id)


@router.get("/", response_model=InvoiceListResponse)
def list_invoices(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    year: Optional[int] = Query(None, description="Default: current year"),
    discharge_user_id: Optional[int] = Query(None),
    include_inactive: bool = Query(False),
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    query = db.query(Invoice).filter(
        Invoice.corporation_id == corporation_id,
        Invoice.year == (year or datetime.now().year)
    )
    if not include_inactive:
        query = query.filter(Invoice.is_active.is_(True))
    if discharge_user_id is not None:
        query = query.join(Discharge, Invoice.discharge_id == Discharge.id).filter(
            Discharge.discharge_user_id == discharge_user_id
        )

    items, total = paginate_query(query, page, page_size, Invoice.number.desc())
    return {"items": items, "total": total, "page": page, "page_size": page_size}


@router.get("/by-discharge/{discharge_id}", response_model=list[InvoiceResponse])
def list_invoices_by_discharge(
    discharge_id: int,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    """Invoice history of a discharge, newest first"""
    get_by_id(db, Discharge, discharge_id, corporation_id, error_message="Discharge not found")
    return db.query(Invoice).filter(
        Invoice.corporation_id == corporation_id,
        Invoice.discharge_id == discharge_id
    ).order_by(Invoice.number.desc()).all()


@router.get("/{invoice_id}", response_model=InvoiceResponse)
def get_invoice(
    invoice_id: int,
    db: Session = Depends(get_db),
    corporation_id: int = Depends(get_current_corporation_id)
):
    return get_by_id(db, Invoice, invoice_id, corporation_id, error_message="Invoice not found")
