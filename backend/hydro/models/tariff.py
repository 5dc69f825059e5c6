from sqlalchemy import Column, Integer, Boolean, Numeric, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from hydro.models.base import Base, CorporationMixin, TimestampMixin


class MinimumTariff(Base, CorporationMixin, TimestampMixin):
    """Minimum rate per kg of DBO and SST fixed for a year"""
    __tablename__ = "minimum_tariffs"

    id = Column(Integer, primary_key=True, index=True)
    year = Column(Integer, nullable=False)
    dbo_value = Column(Numeric(15, 4), nullable=False)
    sst_value = Column(Numeric(15, 4), nullable=False)
    ipc_value = Column(Numeric(8, 4), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (
        UniqueConstraint('corporation_id', 'year', name='uq_minimum_tariff_corporation_year'),
    )


class ProjectProgress(Base, CorporationMixin, TimestampMixin):
    """
    Yearly progress of the sanitation plan of a public service company

    Percentages of: cci (collectors and interceptors), cev (sewage
    elimination), cds (sanitation works), ccs (treatment systems).
    """
    __tablename__ = "project_progress"

    id = Column(Integer, primary_key=True, index=True)
    discharge_user_id = Column(Integer, ForeignKey("discharge_users.id"), nullable=False, index=True)
    year = Column(Integer, nullable=False)
    cci_percentage = Column(Numeric(5, 2), nullable=True)
    cev_percentage = Column(Numeric(5, 2), nullable=True)
    cds_percentage = Column(Numeric(5, 2), nullable=True)
    ccs_percentage = Column(Numeric(5, 2), nullable=True)

    discharge_user = relationship("DischargeUser")

    __table_args__ = (
        UniqueConstraint('corporation_id', 'discharge_user_id', 'year', name='uq_project_progress_user_year'),
    )
