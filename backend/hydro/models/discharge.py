from sqlalchemy import (
    Column, Integer, String, Boolean, Numeric, DateTime, ForeignKey,
    UniqueConstraint, CheckConstraint, Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
import enum
from hydro.models.base import Base, CorporationMixin, TimestampMixin, AuditMixin


class DischargeType(str, enum.Enum):
    DOMESTIC = "DOMESTIC"
    NON_DOMESTIC = "NON_DOMESTIC"


class WaterResourceType(str, enum.Enum):
    RIVER = "RIVER"
    CREEK = "CREEK"
    LAKE = "LAKE"
    WETLAND = "WETLAND"
    OTHER = "OTHER"


class ParameterOrigin(str, enum.Enum):
    """DISCHARGE is what is poured into the source, INTAKE what was captured from it"""
    DISCHARGE = "DISCHARGE"
    INTAKE = "INTAKE"


class QualityClassification(str, enum.Enum):
    GOOD = "GOOD"
    ACCEPTABLE = "ACCEPTABLE"
    REGULAR = "REGULAR"
    POOR = "POOR"
    VERY_POOR = "VERY_POOR"


class Discharge(Base, CorporationMixin, TimestampMixin, AuditMixin):
    """
    Yearly discharge declaration of a discharge user

    Numbered per corporation and year by the DISCHARGE sequence.
    The cc_* columns are the contaminant loads (kg/year) computed from
    the monthly parameters.
    """
    __tablename__ = "discharges"

    id = Column(Integer, primary_key=True, index=True)

    discharge_user_id = Column(Integer, ForeignKey("discharge_users.id"), nullable=False, index=True)
    basin_section_id = Column(Integer, ForeignKey("basin_sections.id"), nullable=False, index=True)
    municipality_id = Column(Integer, ForeignKey("municipalities.id"), nullable=False)

    discharge_type = Column(SQLEnum(DischargeType), nullable=False)
    number = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False, index=True)
    name = Column(String(200), nullable=False)
    discharge_point = Column(String(200), nullable=True)
    water_resource_type = Column(SQLEnum(WaterResourceType), nullable=True)
    latitude = Column(Numeric(10, 7), nullable=True)
    longitude = Column(Numeric(10, 7), nullable=True)
    is_basin_reuse = Column(Boolean, default=False, nullable=False)
    is_source_monitored = Column(Boolean, default=False, nullable=False)

    # Chemical oxygen demand of the receiving source
    dqo = Column(Numeric(15, 4), nullable=True)

    # Contaminant loads
    cc_dbo_vert = Column(Numeric(20, 6), nullable=True)
    cc_sst_vert = Column(Numeric(20, 6), nullable=True)
    cc_dbo_cap = Column(Numeric(20, 6), nullable=True)
    cc_sst_cap = Column(Numeric(20, 6), nullable=True)
    cc_dbo_total = Column(Numeric(20, 6), nullable=True)
    cc_sst_total = Column(Numeric(20, 6), nullable=True)

    discharge_user = relationship("DischargeUser")
    basin_section = relationship("BasinSection")
    municipality = relationship("Municipality")
    parameters = relationship(
        "DischargeParameter",
        back_populates="discharge",
        cascade="all, delete-orphan",
        order_by="DischargeParameter.month",
    )
    monitorings = relationship(
        "DischargeMonitoring",
        back_populates="discharge",
        cascade="all, delete-orphan",
        order_by="DischargeMonitoring.id",
    )

    __table_args__ = (
        UniqueConstraint('corporation_id', 'year', 'number', name='uq_discharge_corporation_year_number'),
    )

    def __repr__(self):
        return f"<Discharge {self.year}-{self.number}>"


class DischargeParameter(Base, TimestampMixin):
    """Monthly flow and concentration values of a discharge"""
    __tablename__ = "discharge_parameters"

    id = Column(Integer, primary_key=True, index=True)
    discharge_id = Column(Integer, ForeignKey("discharges.id", ondelete="CASCADE"), nullable=False, index=True)

    month = Column(Integer, nullable=False)
    origin = Column(SQLEnum(ParameterOrigin), nullable=False)
    caudal_volumen = Column(Numeric(15, 4), nullable=True)   # l/s
    frequency = Column(Numeric(10, 4), nullable=True)        # days per month
    duration = Column(Numeric(10, 4), nullable=True)         # hours per day
    conc_dbo = Column(Numeric(15, 4), nullable=True)         # mg/l
    conc_sst = Column(Numeric(15, 4), nullable=True)         # mg/l
    cc_dbo = Column(Numeric(20, 6), nullable=True)
    cc_sst = Column(Numeric(20, 6), nullable=True)

    discharge = relationship("Discharge", back_populates="parameters")

    __table_args__ = (
        UniqueConstraint('discharge_id', 'month', 'origin', name='uq_discharge_parameter_month_origin'),
        CheckConstraint('month BETWEEN 1 AND 12', name='ck_discharge_parameter_month'),
    )


class DischargeMonitoring(Base, TimestampMixin):
    """
    Field sample of the receiving source

    Raw measurements come from the lab, the indices and the ICA
    coefficient are computed by services.water_quality.
    """
    __tablename__ = "discharge_monitorings"

    id = Column(Integer, primary_key=True, index=True)
    discharge_id = Column(Integer, ForeignKey("discharges.id", ondelete="CASCADE"), nullable=False, index=True)

    monitoring_station = Column(String(150), nullable=True)
    sampled_at = Column(DateTime, nullable=True)
    latitude = Column(Numeric(10, 7), nullable=True)
    longitude = Column(Numeric(10, 7), nullable=True)

    # Raw measurements
    od = Column(Numeric(15, 4), nullable=True)
    sst = Column(Numeric(15, 4), nullable=True)
    dqo = Column(Numeric(15, 4), nullable=True)
    ce = Column(Numeric(15, 4), nullable=True)
    ph = Column(Numeric(6, 3), nullable=True)
    n = Column(Numeric(15, 4), nullable=True)
    p = Column(Numeric(15, 4), nullable=True)
    caudal_volumen = Column(Numeric(15, 4), nullable=True)

    # Computed indices
    iod = Column(Numeric(20, 10), nullable=True)
    isst = Column(Numeric(20, 10), nullable=True)
    idqo = Column(Numeric(20, 10), nullable=True)
    ice = Column(Numeric(20, 10), nullable=True)
    iph = Column(Numeric(20, 10), nullable=True)
    rnp = Column(Numeric(20, 10), nullable=True)
    irnp = Column(Numeric(20, 10), nullable=True)
    number_ica_variables = Column(Integer, nullable=True)
    ica_coefficient = Column(Numeric(6, 3), nullable=True)
    quality_classification = Column(SQLEnum(QualityClassification), nullable=True)

    discharge = relationship("Discharge", back_populates="monitorings")
