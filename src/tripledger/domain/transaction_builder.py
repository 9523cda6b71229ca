"""Turn tokenized statement rows into transaction candidates."""

from decimal import Decimal
import logging
from typing import Optional, Sequence

from tripledger.domain.entities import (
    BuildResult,
    ColumnMapping,
    Direction,
    TransactionCandidate,
)
from tripledger.domain.errors import ValidationError, unknown_columns
from tripledger.utils.amount_parser import parse_amount, round_money
from tripledger.utils.date_parser import parse_statement_date

logger = logging.getLogger(__name__)

UNKNOWN_DESCRIPTION = "Unknown"

ZERO = Decimal("0")


def _index(headers: Sequence[str], column: Optional[str]) -> int:
    return headers.index(column) if column else -1


def _cell(row: Sequence[str], idx: int) -> str:
    if idx < 0 or idx >= len(row):
        return ""
    return (row[idx] or "").strip()


def resolve_amount(
    row: Sequence[str], amount_idx: int, credit_idx: int, debit_idx: int
) -> tuple[Decimal, Direction]:
    """Work out magnitude and direction of one row.

    Credit and debit columns together are netted against each other; a lone
    credit column is always income, a lone debit column always expense, and a
    single amount column takes its direction from the sign.

    Returns:
        Tuple of (non-negative amount, direction)
    """
    if credit_idx >= 0 and debit_idx >= 0:
        credit_raw = _cell(row, credit_idx)
        debit_raw = _cell(row, debit_idx)
        credit = parse_amount(credit_raw or "0")
        debit = parse_amount(debit_raw or "0")

        if credit > 0 and debit > 0:
            direction = Direction.INCOME if credit >= debit else Direction.EXPENSE
            return abs(credit - debit), direction
        if credit > 0:
            return credit, Direction.INCOME
        if abs(debit) > 0:
            return abs(debit), Direction.EXPENSE
        if credit_raw and not debit_raw:
            return ZERO, Direction.INCOME
        return ZERO, Direction.EXPENSE

    if credit_idx >= 0:
        return abs(parse_amount(_cell(row, credit_idx) or "0")), Direction.INCOME

    if debit_idx >= 0:
        return abs(parse_amount(_cell(row, debit_idx) or "0")), Direction.EXPENSE

    value = parse_amount(_cell(row, amount_idx))
    direction = Direction.INCOME if value >= 0 else Direction.EXPENSE
    return abs(value), direction


def build_candidates(
    rows: Sequence[Sequence[str]],
    headers: Sequence[str],
    mapping: ColumnMapping,
) -> BuildResult:
    """Apply a column mapping to data rows.

    Rows too short to hold every mapped column, rows whose date cannot be
    read, and zero-amount rows without a description are dropped and counted.
    A zero-amount row that has a real description is kept.

    Args:
        rows: Data rows (header excluded)
        headers: Cleaned headers the mapping refers to
        mapping: Column mapping for this statement

    Returns:
        BuildResult with the candidates and drop counts. No candidates are
        built when the mapping lacks a required field.

    Raises:
        ValidationError: If the mapping names a column the file does not have
    """
    missing = [c for c in mapping.referenced_columns if c not in headers]
    if missing:
        raise ValidationError(unknown_columns(missing))

    non_empty = [row for row in rows if any(cell.strip() for cell in row)]

    if not mapping.is_complete:
        logger.debug("Mapping incomplete, missing %s", mapping.missing_fields)
        return BuildResult(candidates=(), total_rows=len(non_empty))

    date_idx = _index(headers, mapping.date)
    description_idx = _index(headers, mapping.description)
    amount_idx = _index(headers, mapping.amount)
    credit_idx = _index(headers, mapping.credit)
    debit_idx = _index(headers, mapping.debit)
    reference_idx = _index(headers, mapping.reference)
    needed_idx = max(date_idx, description_idx, amount_idx, credit_idx, debit_idx)

    candidates: list[TransactionCandidate] = []
    short_rows = 0
    zero_amount_rows = 0
    unparsed_date_rows = 0

    for row_num, row in enumerate(non_empty, start=1):
        if len(row) <= needed_idx:
            short_rows += 1
            logger.debug(
                "Row %d too short: %d cells, need %d", row_num, len(row), needed_idx + 1
            )
            continue

        txn_date = parse_statement_date(_cell(row, date_idx))
        if txn_date is None:
            unparsed_date_rows += 1
            logger.debug("Row %d has unreadable date %r", row_num, _cell(row, date_idx))
            continue

        amount, direction = resolve_amount(row, amount_idx, credit_idx, debit_idx)
        description = _cell(row, description_idx) or UNKNOWN_DESCRIPTION

        if amount == 0 and description == UNKNOWN_DESCRIPTION:
            zero_amount_rows += 1
            logger.debug("Row %d dropped: zero amount and no description", row_num)
            continue
        if amount == 0:
            logger.debug("Keeping zero-amount row %r on %s", description, txn_date)

        candidates.append(
            TransactionCandidate(
                date=txn_date,
                description=description,
                amount=round_money(amount),
                direction=direction,
                reference=_cell(row, reference_idx) or None,
            )
        )

    result = BuildResult(
        candidates=tuple(candidates),
        total_rows=len(non_empty),
        short_rows=short_rows,
        zero_amount_rows=zero_amount_rows,
        unparsed_date_rows=unparsed_date_rows,
    )
    logger.debug("Parse summary: %s", result.summary())
    return result
