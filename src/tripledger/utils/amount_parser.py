"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENT = Decimal("0.01")

_PARENTHESES = re.compile(r"\((.+)\)")
_DEBIT_MARKER = re.compile(r"\bDR\b", re.IGNORECASE)
_CREDIT_MARKER = re.compile(r"\bCR\b", re.IGNORECASE)
_MARKERS = re.compile(r"\b(DR|CR)\b", re.IGNORECASE)
_NON_NUMERIC = re.compile(r"[^0-9.,-]")
_EUROPEAN = re.compile(r"^-?\d{1,3}(\.\d{3})*(,\d{1,2})?$")


def parse_amount(amount_str: str | None) -> Decimal:
    """Parse a bank statement amount string into a signed Decimal.

    Handles various formats:
    - "123.45", "-123.45", "1,234.56"
    - "€1,234.56" (currency symbols and spaces are dropped)
    - "(123.45)" (negative in parentheses)
    - "1.234,56" (European thousands/decimal separators)
    - "100 DR" / "100 CR" (debit/credit markers override the sign)

    Unlike strict parsers, anything that is not a number yields zero so a
    single bad cell never aborts a statement import.

    Args:
        amount_str: Raw cell value

    Returns:
        Signed Decimal amount (zero for empty or non-numeric input)
    """
    if not amount_str:
        return Decimal("0")
    cleaned = amount_str.strip()
    if not cleaned:
        return Decimal("0")

    # (50.00) -> -50.00
    cleaned = _PARENTHESES.sub(r"-\1", cleaned, count=1)

    is_debit = bool(_DEBIT_MARKER.search(cleaned))
    is_credit = bool(_CREDIT_MARKER.search(cleaned))
    cleaned = _MARKERS.sub("", cleaned)

    cleaned = _NON_NUMERIC.sub("", cleaned)

    if _EUROPEAN.match(cleaned):
        cleaned = cleaned.replace(".", "").replace(",", ".", 1)
    cleaned = cleaned.replace(",", "")

    amount = _to_decimal(cleaned)

    # Markers win over whatever sign the number carried
    if is_debit and amount > 0:
        amount = -amount
    if is_credit and amount < 0:
        amount = -amount
    return amount


def _to_decimal(value: str) -> Decimal:
    """Read the leading numeric part of value, or zero if there is none."""
    match = re.match(r"-?(\d+\.?\d*|\.\d+)", value)
    if match is None:
        return Decimal("0")
    try:
        return Decimal(match.group(0))
    except InvalidOperation:
        return Decimal("0")


def round_money(amount: Decimal) -> Decimal:
    """Round a currency amount to cents, half away from zero."""
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
