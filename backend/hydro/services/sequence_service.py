"""
Consecutive number service

Hands out strictly increasing numbers per (corporation, year, sequence type).
Correctness relies on the database only: the increment is a single UPDATE
that takes the row lock (or the SQLite write lock) and the lazy creation is
guarded by the unique constraint on the triple. No in-process lock or cache.
"""
import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hydro.core.exceptions import ConcurrencyConflictError, ReferenceNotFoundError
from hydro.models.corporation import Corporation
from hydro.models.sequence import ConsecutiveSequence, SequenceType

logger = logging.getLogger(__name__)


class ConsecutiveSequenceService:
    """
    Allocates consecutive numbers inside the caller's transaction.

    The service flushes but never commits. The lock taken by the increment
    is held until the caller commits or rolls back, so a rolled back
    allocation is returned to the pool and committed values are gapless.
    """

    def next_value(
        self,
        db: Session,
        corporation_id: int,
        year: int,
        sequence_type: SequenceType,
    ) -> int:
        """
        Return the next number of the sequence and advance it.

        The first call for a new triple returns 1 and stores 2.

        Raises:
            ReferenceNotFoundError: the corporation does not exist
            ConcurrencyConflictError: the row was created by a concurrent
                caller but still could not be incremented after one retry
        """
        value = self._increment_existing(db, corporation_id, year, sequence_type)
        if value is not None:
            logger.debug(
                "Allocated %s #%s for corporation %s year %s",
                sequence_type.value, value, corporation_id, year,
            )
            return value

        if db.get(Corporation, corporation_id) is None:
            raise ReferenceNotFoundError("Corporation", corporation_id)

        try:
            with db.begin_nested():
                db.add(ConsecutiveSequence(
                    corporation_id=corporation_id,
                    year=year,
                    sequence_type=sequence_type,
                    next_value=2,
                ))
            logger.info(
                "Started %s sequence for corporation %s year %s",
                sequence_type.value, corporation_id, year,
            )
            return 1
        except IntegrityError:
            # Another transaction created the same triple first
            logger.info(
                "%s sequence for corporation %s year %s created concurrently, retrying increment",
                sequence_type.value, corporation_id, year,
            )

        value = self._increment_existing(db, corporation_id, year, sequence_type)
        if value is None:
            logger.warning(
                "Could not allocate %s number for corporation %s year %s after retry",
                sequence_type.value, corporation_id, year,
            )
            raise ConcurrencyConflictError(
                f"Could not allocate a {sequence_type.value} number for year {year}, try again",
                {"corporation_id": corporation_id, "year": year, "sequence_type": sequence_type.value},
            )
        return value

    def _increment_existing(
        self,
        db: Session,
        corporation_id: int,
        year: int,
        sequence_type: SequenceType,
    ) -> Optional[int]:
        """Atomically advance an existing counter, None when the row does not exist"""
        triple = (
            ConsecutiveSequence.corporation_id == corporation_id,
            ConsecutiveSequence.year == year,
            ConsecutiveSequence.sequence_type == sequence_type,
        )
        result = db.execute(
            update(ConsecutiveSequence)
            .where(*triple)
            .values(next_value=ConsecutiveSequence.next_value + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None

        # Same transaction, the lock taken by the UPDATE is still held
        stored = db.execute(select(ConsecutiveSequence.next_value).where(*triple)).scalar_one()
        return stored - 1


consecutive_sequence_service = ConsecutiveSequenceService()
