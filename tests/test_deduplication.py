"""Tests for fingerprints and duplicate detection."""

from datetime import date
from decimal import Decimal

from conftest import OTHER_USER_ID, USER_ID
from tripledger.domain.deduplication import (
    DuplicateService,
    find_duplicates,
    fingerprint,
    fingerprint_of,
)
from tripledger.domain.entities import Direction, TransactionCandidate


def _candidate(description, txn_date, amount, direction=Direction.EXPENSE):
    return TransactionCandidate(
        date=txn_date, description=description, amount=Decimal(amount), direction=direction
    )


def test_fingerprint_format():
    assert fingerprint("TESCO NAVAN", date(2025, 1, 16), Decimal("45.2")) == "tesco navan|2025-01-16|45.20"


def test_fingerprint_ignores_case_whitespace_and_sign():
    assert fingerprint("  Tesco Navan ", date(2025, 1, 16), Decimal("-45.20")) == fingerprint(
        "TESCO NAVAN", date(2025, 1, 16), Decimal("45.20")
    )


def test_fingerprint_distinguishes_date_and_amount():
    base = fingerprint("TESCO", date(2025, 1, 16), Decimal("45.20"))
    assert fingerprint("TESCO", date(2025, 1, 17), Decimal("45.20")) != base
    assert fingerprint("TESCO", date(2025, 1, 16), Decimal("45.21")) != base


def test_find_duplicates_keeps_order():
    candidates = [
        _candidate("A", date(2025, 1, 1), "1.00"),
        _candidate("B", date(2025, 1, 2), "2.00"),
        _candidate("A", date(2025, 1, 1), "1.00"),
    ]
    existing = {fingerprint_of(candidates[0])}

    assert find_duplicates(candidates, existing) == [True, False, True]


def test_flag_duplicates_against_store(temp_db, store_transactions):
    store_transactions([(date(2025, 1, 16), "TESCO NAVAN", "45.20")])
    service = DuplicateService(temp_db)

    flags = service.flag_duplicates(
        USER_ID,
        [
            _candidate("tesco navan", date(2025, 1, 16), "45.20"),
            _candidate("TESCO NAVAN", date(2025, 1, 17), "45.20"),
        ],
    )

    assert flags == [True, False]


def test_flag_duplicates_is_per_user(temp_db, store_transactions):
    store_transactions([(date(2025, 1, 16), "TESCO NAVAN", "45.20")], user_id=OTHER_USER_ID)
    service = DuplicateService(temp_db)

    flags = service.flag_duplicates(USER_ID, [_candidate("TESCO NAVAN", date(2025, 1, 16), "45.20")])

    assert flags == [False]


def test_identical_candidates_in_one_file_are_not_duplicates(temp_db):
    service = DuplicateService(temp_db)
    candidate = _candidate("COFFEE", date(2025, 1, 16), "3.10")

    assert service.flag_duplicates(USER_ID, [candidate, candidate]) == [False, False]


def test_no_candidates(temp_db):
    assert DuplicateService(temp_db).flag_duplicates(USER_ID, []) == []
