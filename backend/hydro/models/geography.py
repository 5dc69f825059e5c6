"""
Reference geography shared by every corporation
"""
from sqlalchemy import Column, Integer, String, Boolean, Numeric, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from hydro.models.base import Base, TimestampMixin


class Department(Base, TimestampMixin):
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    code = Column(String(2), unique=True, nullable=False)

    municipalities = relationship("Municipality", back_populates="department")


class Category(Base, TimestampMixin):
    """
    Municipality category (special, 1st ... 6th)

    Its value feeds the socioeconomic variable of the regional factor.
    """
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, nullable=False)
    value = Column(Numeric(5, 2), nullable=False)


class Municipality(Base, TimestampMixin):
    __tablename__ = "municipalities"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False, index=True)
    code = Column(String(3), nullable=False)

    department_id = Column(Integer, ForeignKey("departments.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)

    # Unsatisfied basic needs index (percentage)
    nbi = Column(Numeric(6, 2), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    department = relationship("Department", back_populates="municipalities")
    category = relationship("Category")

    __table_args__ = (
        UniqueConstraint('department_id', 'code', name='uq_municipality_department_code'),
    )
