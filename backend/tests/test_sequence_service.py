import logging
import threading

import pytest

from hydro.api.utils.sequencers import format_reference, next_number
from hydro.core.exceptions import ConcurrencyConflictError, ReferenceNotFoundError
from hydro.models import ConsecutiveSequence, Corporation, SequenceType
from hydro.services.sequence_service import ConsecutiveSequenceService, consecutive_sequence_service


def _allocate(SessionLocal, corporation_id, year=2025, sequence_type=SequenceType.DISCHARGE):
    session = SessionLocal()
    try:
        value = consecutive_sequence_service.next_value(session, corporation_id, year, sequence_type)
        session.commit()
        return value
    finally:
        session.close()


def _stored_next_value(db_session, corporation_id, year, sequence_type):
    db_session.expire_all()
    return db_session.query(ConsecutiveSequence.next_value).filter_by(
        corporation_id=corporation_id, year=year, sequence_type=sequence_type
    ).scalar()


def test_first_value_is_one_and_row_is_created(db_session, corporation):
    value = consecutive_sequence_service.next_value(db_session, corporation.id, 2025, SequenceType.DISCHARGE)
    db_session.commit()

    assert value == 1
    assert _stored_next_value(db_session, corporation.id, 2025, SequenceType.DISCHARGE) == 2


def test_values_increase_by_one(SessionLocal, corporation):
    values = [_allocate(SessionLocal, corporation.id) for _ in range(5)]

    assert values == [1, 2, 3, 4, 5]


def test_sequences_are_independent(SessionLocal, corporation, other_corporation):
    assert _allocate(SessionLocal, corporation.id, 2025, SequenceType.DISCHARGE) == 1
    assert _allocate(SessionLocal, corporation.id, 2025, SequenceType.DISCHARGE) == 2
    assert _allocate(SessionLocal, corporation.id, 2025, SequenceType.INVOICE) == 1
    assert _allocate(SessionLocal, corporation.id, 2026, SequenceType.DISCHARGE) == 1
    assert _allocate(SessionLocal, other_corporation.id, 2025, SequenceType.DISCHARGE) == 1


def test_rolled_back_value_is_handed_out_again(SessionLocal, corporation):
    assert _allocate(SessionLocal, corporation.id) == 1

    session = SessionLocal()
    try:
        assert consecutive_sequence_service.next_value(session, corporation.id, 2025, SequenceType.DISCHARGE) == 2
        session.rollback()
    finally:
        session.close()

    assert _allocate(SessionLocal, corporation.id) == 2


def test_concurrent_allocations_are_unique_and_gapless(SessionLocal, corporation):
    corporation_id = corporation.id
    workers, per_worker = 4, 5
    results = []
    errors = []
    lock = threading.Lock()

    def worker():
        try:
            for _ in range(per_worker):
                value = _allocate(SessionLocal, corporation_id)
                with lock:
                    results.append(value)
        except Exception as e:  # surfaced by the assertion below
            with lock:
                errors.append(e)

    threads = [threading.Thread(target=worker) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert sorted(results) == list(range(1, workers * per_worker + 1))


def test_unknown_corporation_raises_and_creates_nothing(db_session):
    with pytest.raises(ReferenceNotFoundError):
        consecutive_sequence_service.next_value(db_session, 9999, 2025, SequenceType.DISCHARGE)
    db_session.rollback()

    assert db_session.query(ConsecutiveSequence).count() == 0


def test_row_created_concurrently_is_incremented(db_session, corporation, monkeypatch):
    # Another transaction created the row between the failed increment and the insert
    db_session.add(ConsecutiveSequence(
        corporation_id=corporation.id, year=2025, sequence_type=SequenceType.INVOICE, next_value=5
    ))
    db_session.commit()

    service = ConsecutiveSequenceService()
    original = service._increment_existing
    calls = []

    def racing_increment(*args):
        calls.append(args)
        if len(calls) == 1:
            return None
        return original(*args)

    monkeypatch.setattr(service, "_increment_existing", racing_increment)

    value = service.next_value(db_session, corporation.id, 2025, SequenceType.INVOICE)
    db_session.commit()

    assert value == 5
    assert len(calls) == 2
    assert _stored_next_value(db_session, corporation.id, 2025, SequenceType.INVOICE) == 6


def test_insert_losing_the_creation_race_retries(SessionLocal, corporation, monkeypatch, caplog):
    corporation_id = corporation.id
    service = ConsecutiveSequenceService()
    original = service._increment_existing
    calls = []

    def increment_after_other_writer(*args):
        calls.append(args)
        if len(calls) == 1:
            # A second transaction creates and commits the row before our insert
            assert _allocate(SessionLocal, corporation_id, 2025, SequenceType.INVOICE) == 1
            return None
        return original(*args)

    monkeypatch.setattr(service, "_increment_existing", increment_after_other_writer)

    session = SessionLocal()
    try:
        with caplog.at_level(logging.INFO, logger="hydro.services.sequence_service"):
            value = service.next_value(session, corporation_id, 2025, SequenceType.INVOICE)
        session.commit()
    finally:
        session.close()

    assert value == 2
    assert "created concurrently" in caplog.text
    assert _allocate(SessionLocal, corporation_id, 2025, SequenceType.INVOICE) == 3


def test_conflict_when_retry_still_fails(db_session, corporation, monkeypatch):
    db_session.add(ConsecutiveSequence(
        corporation_id=corporation.id, year=2025, sequence_type=SequenceType.INVOICE, next_value=3
    ))
    db_session.commit()

    service = ConsecutiveSequenceService()
    monkeypatch.setattr(service, "_increment_existing", lambda *args: None)

    with pytest.raises(ConcurrencyConflictError) as exc_info:
        service.next_value(db_session, corporation.id, 2025, SequenceType.INVOICE)
    db_session.rollback()

    assert exc_info.value.status_code == 409
    assert _stored_next_value(db_session, corporation.id, 2025, SequenceType.INVOICE) == 3


def test_next_number_defaults_to_current_year(db_session, corporation):
    from datetime import datetime

    assert next_number(db_session, SequenceType.INVOICE, corporation.id) == 1
    db_session.commit()

    assert _stored_next_value(db_session, corporation.id, datetime.now().year, SequenceType.INVOICE) == 2


def test_next_number_keeps_an_explicit_zero_year(db_session, corporation):
    from datetime import datetime

    assert next_number(db_session, SequenceType.INVOICE, corporation.id, 0) == 1
    db_session.commit()

    assert _stored_next_value(db_session, corporation.id, 0, SequenceType.INVOICE) == 2
    assert _stored_next_value(db_session, corporation.id, datetime.now().year, SequenceType.INVOICE) is None


@pytest.mark.parametrize(
    "sequence_type, year, number, expected",
    [
        (SequenceType.DISCHARGE, 2025, 7, "DES-2025-00007"),
        (SequenceType.INVOICE, 2024, 12345, "FAC-2024-12345"),
        (SequenceType.INVOICE, 2026, 123456, "FAC-2026-123456"),
    ],
)
def test_format_reference(sequence_type, year, number, expected):
    assert format_reference(sequence_type, year, number) == expected


def test_corporation_lookup_skipped_when_row_exists(db_session, corporation, monkeypatch):
    assert consecutive_sequence_service.next_value(db_session, corporation.id, 2025, SequenceType.DISCHARGE) == 1
    db_session.commit()

    lookups = []
    original_get = db_session.get

    def tracking_get(entity, ident, **kwargs):
        if entity is Corporation:
            lookups.append(ident)
        return original_get(entity, ident, **kwargs)

    monkeypatch.setattr(db_session, "get", tracking_get)

    assert consecutive_sequence_service.next_value(db_session, corporation.id, 2025, SequenceType.DISCHARGE) == 2
    assert lookups == []


def test_concurrent_pair_after_three_invoices(SessionLocal, corporation):
    assert [_allocate(SessionLocal, corporation.id, 2025, SequenceType.INVOICE) for _ in range(3)] == [1, 2, 3]

    corporation_id = corporation.id
    results = []
    threads = [
        threading.Thread(target=lambda: results.append(_allocate(SessionLocal, corporation_id, 2025, SequenceType.INVOICE)))
        for _ in range(2)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(results) == [4, 5]
    assert _allocate(SessionLocal, corporation.id, 2025, SequenceType.DISCHARGE) == 1
