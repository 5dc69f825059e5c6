from sqlalchemy import Column, Integer, String, Boolean, Enum as SQLEnum
import enum
from hydro.models.base import Base, CorporationMixin, TimestampMixin


class UserRole(str, enum.Enum):
    MASTER = "MASTER"          # Platform super admin
    ADMIN = "ADMIN"            # Corporation administrator
    OPERATOR = "OPERATOR"      # Registers discharges and generates invoices
    VIEWER = "VIEWER"          # Read only


class User(Base, CorporationMixin, TimestampMixin):
    """
    A person working for one corporation

    A user belongs to exactly ONE corporation.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    full_name = Column(String(200), nullable=False)
    email = Column(String(200), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    role = Column(SQLEnum(UserRole), default=UserRole.VIEWER, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<User {self.full_name} ({self.email})>"
