from sqlalchemy import Column, Integer, String, Boolean
from hydro.models.base import Base, TimestampMixin


class EconomicActivity(Base, TimestampMixin):
    """CIIU economic activity of a discharge user"""
    __tablename__ = "economic_activities"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    code = Column(String(10), unique=True, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)


class AuthorizationType(Base, TimestampMixin):
    """Kind of permit under which a discharge user operates"""
    __tablename__ = "authorization_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
