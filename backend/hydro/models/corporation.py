from sqlalchemy import Column, Integer, String, Boolean
from hydro.models.base import Base, TimestampMixin


class Corporation(Base, TimestampMixin):
    """
    An environmental authority using the platform (tenant)

    Each corporation owns its users, discharge users, discharges,
    tariffs, invoices and number sequences. Reference geography and
    catalogs are shared.
    """
    __tablename__ = "corporations"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(200), unique=True, nullable=False)
    code = Column(String(50), unique=True, nullable=False, index=True)
    description = Column(String(500), nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<Corporation {self.code}>"
