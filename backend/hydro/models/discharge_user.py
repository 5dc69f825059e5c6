from sqlalchemy import Column, Integer, String, Boolean, Numeric, ForeignKey, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship
import enum
from hydro.models.base import Base, CorporationMixin, TimestampMixin


class DocumentType(str, enum.Enum):
    NIT = "NIT"
    CC = "CC"
    CE = "CE"
    PASSPORT = "PASSPORT"


class DischargeUser(Base, CorporationMixin, TimestampMixin):
    """
    Company or person that discharges into a water body and pays the
    retributive rate
    """
    __tablename__ = "discharge_users"

    id = Column(Integer, primary_key=True, index=True)

    company_name = Column(String(200), nullable=False, index=True)
    code = Column(String(8), nullable=False)
    document_type = Column(SQLEnum(DocumentType), default=DocumentType.NIT, nullable=False)
    document_number = Column(String(20), nullable=False)

    # Contact
    contact_person = Column(String(150), nullable=True)
    email = Column(String(200), nullable=True)
    phone = Column(String(20), nullable=True)
    address = Column(String(250), nullable=True)

    file_number = Column(String(50), nullable=True)
    has_ptar = Column(Boolean, default=False, nullable=False)  # owns a treatment plant
    efficiency_percentage = Column(Numeric(5, 2), nullable=True)
    is_public_service_company = Column(Boolean, default=False, nullable=False)

    municipality_id = Column(Integer, ForeignKey("municipalities.id"), nullable=False, index=True)
    economic_activity_id = Column(Integer, ForeignKey("economic_activities.id"), nullable=True)
    authorization_type_id = Column(Integer, ForeignKey("authorization_types.id"), nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)

    municipality = relationship("Municipality")
    economic_activity = relationship("EconomicActivity")
    authorization_type = relationship("AuthorizationType")

    __table_args__ = (
        UniqueConstraint('corporation_id', 'code', name='uq_discharge_user_corporation_code'),
    )

    def __repr__(self):
        return f"<DischargeUser {self.code} {self.company_name}>"
