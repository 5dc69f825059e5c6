from sqlalchemy import Column, Integer, String, Boolean, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from hydro.models.base import Base, CorporationMixin, TimestampMixin


class WaterBasin(Base, CorporationMixin, TimestampMixin):
    __tablename__ = "water_basins"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    sections = relationship("BasinSection", back_populates="water_basin", order_by="BasinSection.name")

    __table_args__ = (
        UniqueConstraint('corporation_id', 'name', name='uq_water_basin_corporation_name'),
    )


class BasinSection(Base, CorporationMixin, TimestampMixin):
    """A stretch of a basin between two reference points"""
    __tablename__ = "basin_sections"

    id = Column(Integer, primary_key=True, index=True)
    water_basin_id = Column(Integer, ForeignKey("water_basins.id"), nullable=False, index=True)
    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=True)
    start_point = Column(String(200), nullable=True)
    end_point = Column(String(200), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    water_basin = relationship("WaterBasin", back_populates="sections")

    __table_args__ = (
        UniqueConstraint('water_basin_id', 'name', name='uq_basin_section_basin_name'),
    )
