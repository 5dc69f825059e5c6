"""
Sequencers - consecutive numbers and their human readable references

IMPORTANT: numbers come from the 'consecutive_sequences' table, so they
NEVER restart, even if numbered records are deleted.
"""
from datetime import datetime
from sqlalchemy.orm import Session

from hydro.models.sequence import SequenceType
from hydro.services.sequence_service import consecutive_sequence_service


class Prefixes:
    DISCHARGE = "DES"
    INVOICE = "FAC"

    @classmethod
    def for_type(cls, sequence_type: SequenceType) -> str:
        return getattr(cls, SequenceType(sequence_type).value)


def next_number(
    db: Session,
    sequence_type: SequenceType,
    corporation_id: int,
    year: int = None
) -> int:
    """
    Next consecutive number of the corporation for the year (default: current year)

    Usage:
        number = next_number(db, SequenceType.INVOICE, corporation_id, discharge.year)
    """
    return consecutive_sequence_service.next_value(
        db, corporation_id, datetime.now().year if year is None else year, sequence_type
    )


def format_reference(sequence_type: SequenceType, year: int, number: int, digits: int = 5) -> str:
    """
    Format: PREFIX-YYYY-NNNNN

    Usage:
        format_reference(SequenceType.DISCHARGE, 2025, 7)
        # Returns: "DES-2025-00007"
    """
    return f"{Prefixes.for_type(sequence_type)}-{year}-{number:0{digits}d}"
