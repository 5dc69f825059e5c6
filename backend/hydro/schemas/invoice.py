from pydantic import BaseModel, model_validator
from typing import Optional
from decimal import Decimal
from datetime import datetime
from hydro.api.utils.sequencers import format_reference
from hydro.models.sequence import SequenceType


class InvoiceResponse(BaseModel):
    id: int
    corporation_id: int
    discharge_id: int
    number: int
    year: int
    reference: Optional[str] = None

    environmental_variable: Decimal
    socioeconomic_variable: Decimal
    economic_variable: Decimal
    regional_factor: Decimal

    cc_dbo: Decimal
    cc_sst: Decimal
    minimum_tariff_dbo: Decimal
    minimum_tariff_sst: Decimal
    amount_to_pay_dbo: Decimal
    amount_to_pay_sst: Decimal
    total_amount_to_pay: Decimal

    number_ica_variables: Optional[int] = None
    ica_coefficient: Optional[Decimal] = None
    r_coefficient: Optional[Decimal] = None
    b_coefficient: Optional[Decimal] = None

    is_active: bool
    created_by: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True

    @model_validator(mode="after")
    def set_reference(self):
        self.reference = format_reference(SequenceType.INVOICE, self.year, self.number)
        return self


class InvoiceListResponse(BaseModel):
    total: int
    page: int
    page_size: int
    items: list[InvoiceResponse]


class InvoiceStats(BaseModel):
    total_invoices: int
    total_amount: Decimal
    average_amount: Decimal
    min_amount: Decimal
    max_amount: Decimal
    invoices_this_year: int
    invoices_this_month: int
