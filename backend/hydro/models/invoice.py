from sqlalchemy import Column, Integer, Boolean, Numeric, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from hydro.models.base import Base, CorporationMixin, TimestampMixin, AuditMixin


class Invoice(Base, CorporationMixin, TimestampMixin, AuditMixin):
    """
    Retributive rate invoice of a discharge

    Only one invoice per discharge is active at a time, regenerating a
    different amount deactivates the previous one.
    """
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, index=True)
    discharge_id = Column(Integer, ForeignKey("discharges.id"), nullable=False, index=True)

    number = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False, index=True)

    # Regional factor
    environmental_variable = Column(Numeric(20, 10), nullable=False)
    socioeconomic_variable = Column(Numeric(20, 10), nullable=False)
    economic_variable = Column(Numeric(20, 10), nullable=False)
    regional_factor = Column(Numeric(20, 10), nullable=False)

    # Loads and tariffs
    cc_dbo = Column(Numeric(20, 6), nullable=False)
    cc_sst = Column(Numeric(20, 6), nullable=False)
    minimum_tariff_dbo = Column(Numeric(15, 4), nullable=False)
    minimum_tariff_sst = Column(Numeric(15, 4), nullable=False)

    amount_to_pay_dbo = Column(Numeric(20, 2), nullable=False)
    amount_to_pay_sst = Column(Numeric(20, 2), nullable=False)
    total_amount_to_pay = Column(Numeric(20, 2), nullable=False)

    # Coefficients
    number_ica_variables = Column(Integer, nullable=True)
    ica_coefficient = Column(Numeric(6, 3), nullable=True)
    r_coefficient = Column(Numeric(6, 2), nullable=True)
    b_coefficient = Column(Numeric(6, 2), nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)

    discharge = relationship("Discharge")

    __table_args__ = (
        UniqueConstraint('corporation_id', 'year', 'number', name='uq_invoice_corporation_year_number'),
    )

    def __repr__(self):
        return f"<Invoice {self.year}-{self.number} {self.total_amount_to_pay}>"
