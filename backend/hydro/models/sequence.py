"""
Consecutive number counters
Guarantees numbers never restart, even when numbered records are deleted
"""
from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint, CheckConstraint, Enum as SQLEnum
import enum
from hydro.models.base import Base, TimestampMixin


class SequenceType(str, enum.Enum):
    DISCHARGE = "DISCHARGE"
    INVOICE = "INVOICE"


class ConsecutiveSequence(Base, TimestampMixin):
    """
    Next number to hand out for each (corporation, year, sequence type)

    This table is NEVER cleaned. Rows are created lazily by
    services.sequence_service and only ever incremented.
    """
    __tablename__ = "consecutive_sequences"

    id = Column(Integer, primary_key=True, index=True)
    corporation_id = Column(Integer, ForeignKey('corporations.id'), nullable=False, index=True)
    year = Column(Integer, nullable=False)
    sequence_type = Column(SQLEnum(SequenceType), nullable=False)
    next_value = Column(Integer, nullable=False, default=1)

    __table_args__ = (
        UniqueConstraint('corporation_id', 'year', 'sequence_type', name='uq_consecutive_sequence_corporation_year_type'),
        CheckConstraint('next_value >= 1', name='ck_consecutive_sequence_next_value'),
    )

    def __repr__(self):
        return f"<ConsecutiveSequence {self.corporation_id}/{self.year}/{self.sequence_type} next={self.next_value}>"
