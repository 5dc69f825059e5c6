"""
Invoice generation from a discharge

Only one invoice per discharge is active. Regenerating with the same total
returns the active invoice untouched, a different total deactivates it and
consumes the next INVOICE number of the discharge year.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Tuple

from sqlalchemy import func, extract
from sqlalchemy.orm import Session, joinedload

from hydro.api.utils.sequencers import next_number
from hydro.core.exceptions import InvalidDataError, ResourceNotFoundError
from hydro.models.discharge import Discharge, ParameterOrigin
from hydro.models.discharge_user import DischargeUser
from hydro.models.geography import Municipality
from hydro.models.invoice import Invoice
from hydro.models.sequence import SequenceType
from hydro.models.tariff import MinimumTariff, ProjectProgress
from hydro.services.invoice_calculator import calculate_invoice_figures

logger = logging.getLogger(__name__)


class InvoiceService:

    def generate_from_discharge(
        self,
        db: Session,
        corporation_id: int,
        user_id: int,
        discharge_id: int,
    ) -> Tuple[Invoice, bool]:
        """
        Compute the invoice of a discharge and persist it when the amount changed.

        The session is flushed, not committed.

        Returns:
            (invoice, created) - created is False when the active invoice
            already had the same total

        Raises:
            ResourceNotFoundError: discharge or minimum tariff missing
            InvalidDataError: monitoring, NBI, category or divisors missing
        """
        discharge = db.query(Discharge).options(
            joinedload(Discharge.discharge_user)
            .joinedload(DischargeUser.municipality)
            .joinedload(Municipality.category),
        ).filter(
            Discharge.id == discharge_id,
            Discharge.corporation_id == corporation_id,
        ).first()
        if not discharge:
            raise ResourceNotFoundError("Discharge", discharge_id)

        tariff = db.query(MinimumTariff).filter(
            MinimumTariff.corporation_id == corporation_id,
            MinimumTariff.year == discharge.year,
        ).first()
        if not tariff:
            raise ResourceNotFoundError("Minimum tariff for year", discharge.year)

        progress = None
        if discharge.discharge_user.is_public_service_company:
            progress = db.query(ProjectProgress).filter(
                ProjectProgress.corporation_id == corporation_id,
                ProjectProgress.discharge_user_id == discharge.discharge_user_id,
                ProjectProgress.year == discharge.year,
            ).first()

        if not discharge.monitorings:
            raise InvalidDataError("The discharge must have at least one monitoring")
        monitoring = discharge.monitorings[0]
        if monitoring.quality_classification is None or monitoring.caudal_volumen is None:
            raise InvalidDataError("The monitoring must have a quality classification and a caudal/volume")

        # NBI and category belong to the municipality of the discharge user, not of the discharge point
        municipality = discharge.discharge_user.municipality
        vert_parameters = [p for p in discharge.parameters if p.origin == ParameterOrigin.DISCHARGE]

        try:
            figures = calculate_invoice_figures(
                nbi=municipality.nbi,
                category_value=municipality.category.value,
                quality=monitoring.quality_classification,
                monitoring_caudal=monitoring.caudal_volumen,
                parameter_caudals=[p.caudal_volumen for p in vert_parameters],
                parameter_dbo_concentrations=[p.conc_dbo for p in vert_parameters],
                dqo=discharge.dqo,
                dbo_tariff=tariff.dbo_value,
                sst_tariff=tariff.sst_value,
                cc_dbo_total=discharge.cc_dbo_total,
                cc_sst_total=discharge.cc_sst_total,
                cci_percentage=progress.cci_percentage if progress else None,
                cev_percentage=progress.cev_percentage if progress else None,
                cds_percentage=progress.cds_percentage if progress else None,
                ccs_percentage=progress.ccs_percentage if progress else None,
            )
        except ValueError as e:
            raise InvalidDataError(str(e)) from e

        active = db.query(Invoice).filter(
            Invoice.corporation_id == corporation_id,
            Invoice.discharge_id == discharge.id,
            Invoice.is_active.is_(True),
        ).first()

        if active and Decimal(str(active.total_amount_to_pay)) == figures["total_amount_to_pay"]:
            logger.info("Invoice %s-%s unchanged for discharge %s", active.year, active.number, discharge.id)
            return active, False

        if active:
            active.is_active = False
            active.updated_by = user_id

        invoice = Invoice(
            **figures,
            discharge_id=discharge.id,
            year=discharge.year,
            number=next_number(db, SequenceType.INVOICE, corporation_id, discharge.year),
            number_ica_variables=monitoring.number_ica_variables,
            is_active=True,
            corporation_id=corporation_id,
            created_by=user_id,
            updated_by=user_id,
        )
        db.add(invoice)
        db.flush()

        logger.info(
            "Generated invoice %s-%s for discharge %s, total %s%s",
            invoice.year, invoice.number, discharge.id, invoice.total_amount_to_pay,
            f" (replaces {active.year}-{active.number})" if active else "",
        )
        return invoice, True

    def get_stats(self, db: Session, corporation_id: int) -> dict:
        """Aggregates of the active invoices of the corporation"""
        base = db.query(Invoice).filter(
            Invoice.corporation_id == corporation_id,
            Invoice.is_active.is_(True),
        )
        total, amount, minimum, maximum = base.with_entities(
            func.count(Invoice.id),
            func.sum(Invoice.total_amount_to_pay),
            func.min(Invoice.total_amount_to_pay),
            func.max(Invoice.total_amount_to_pay),
        ).one()

        now = datetime.utcnow()
        this_year = base.filter(extract("year", Invoice.created_at) == now.year)
        this_month = this_year.filter(extract("month", Invoice.created_at) == now.month)

        amount = Decimal(str(amount or 0))
        return {
            "total_invoices": total,
            "total_amount": amount,
            "average_amount": (amount / total).quantize(Decimal("0.01")) if total else Decimal("0"),
            "min_amount": Decimal(str(minimum or 0)),
            "max_amount": Decimal(str(maximum or 0)),
            "invoices_this_year": this_year.count(),
            "invoices_this_month": this_month.count(),
        }


invoice_service = InvoiceService()
