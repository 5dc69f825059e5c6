from sqlalchemy import (
    Column, Integer, String, Boolean, Numeric, Float, Date, Text, ForeignKey,
    UniqueConstraint, Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
from hydro.models.base import Base, CorporationMixin, TimestampMixin, AuditMixin
from hydro.models.discharge import QualityClassification


class MonitoringStation(Base, CorporationMixin, TimestampMixin, AuditMixin):
    """Fixed sampling point on a basin section"""
    __tablename__ = "monitoring_stations"

    id = Column(Integer, primary_key=True, index=True)
    basin_section_id = Column(Integer, ForeignKey("basin_sections.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(String(500), nullable=True)
    latitude = Column(Numeric(10, 8), nullable=True)
    longitude = Column(Numeric(11, 8), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    basin_section = relationship("BasinSection")
    monitorings = relationship("Monitoring", back_populates="monitoring_station")

    __table_args__ = (
        UniqueConstraint('corporation_id', 'name', name='uq_monitoring_station_corporation_name'),
    )

    def __repr__(self):
        return f"<MonitoringStation {self.name}>"


class Monitoring(Base, CorporationMixin, TimestampMixin, AuditMixin):
    """
    Sampling campaign of a station on a given date

    One per station and date. Same measurements and indices as a
    DischargeMonitoring, plus the field conditions of the campaign.
    """
    __tablename__ = "monitorings"

    id = Column(Integer, primary_key=True, index=True)
    monitoring_station_id = Column(Integer, ForeignKey("monitoring_stations.id"), nullable=False, index=True)
    monitoring_date = Column(Date, nullable=False, index=True)

    weather_conditions = Column(String(200), nullable=True)
    water_temperature = Column(Float, nullable=True)
    air_temperature = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)
    performed_by = Column(String(150), nullable=True)

    # Raw measurements
    od = Column(Numeric(15, 4), nullable=False)
    sst = Column(Numeric(15, 4), nullable=False)
    dqo = Column(Numeric(15, 4), nullable=False)
    ce = Column(Numeric(15, 4), nullable=False)
    ph = Column(Numeric(6, 3), nullable=False)
    n = Column(Numeric(15, 4), nullable=True)
    p = Column(Numeric(15, 4), nullable=True)
    caudal_volumen = Column(Numeric(15, 4), nullable=False)

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

    monitoring_station = relationship("MonitoringStation", back_populates="monitorings")

    __table_args__ = (
        UniqueConstraint('monitoring_station_id', 'monitoring_date', name='uq_monitoring_station_date'),
    )

    def __repr__(self):
        return f"<Monitoring {self.monitoring_station_id} {self.monitoring_date}>"
