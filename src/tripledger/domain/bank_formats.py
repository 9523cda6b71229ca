"""Bank statement format detection.

Known banks are described by ordered signatures. Each signature has a
predicate over the lower-cased headers and a builder that resolves concrete
column names. Detection walks the list and stops at the first signature that
both matches and resolves every required field; a signature that matches but
cannot resolve falls through to the next one. The generic signature always
matches, so it acts as the fallback.
"""

from dataclasses import dataclass
import logging
from typing import Callable, Optional, Sequence

from tripledger.domain.entities import ColumnMapping, DetectedFormat

logger = logging.getLogger(__name__)


class _Headers:
    """Header names paired with their lower-cased form for matching."""

    def __init__(self, headers: Sequence[str]):
        self.original = list(headers)
        self.lower = [h.lower() for h in headers]

    def any(self, predicate: Callable[[str], bool]) -> bool:
        return any(predicate(h) for h in self.lower)

    def find(self, predicate: Callable[[str], bool]) -> Optional[str]:
        """Return the first original header whose lower-cased name matches."""
        for name, lowered in zip(self.original, self.lower):
            if predicate(lowered):
                return name
        return None


@dataclass(frozen=True)
class BankSignature:
    """A named bank template.

    Attributes:
        name: Display name of the bank, or None for the generic fallback
        matches: Predicate deciding whether the headers look like this bank
        build_mapping: Resolves columns; returns None if a required field is missing
    """

    name: Optional[str]
    matches: Callable[[_Headers], bool]
    build_mapping: Callable[[_Headers], Optional[ColumnMapping]]


def _complete(mapping: ColumnMapping) -> Optional[ColumnMapping]:
    return mapping if mapping.is_complete else None


# AIB


def _is_aib(headers: _Headers) -> bool:
    return headers.any(lambda h: "posted transactions date" in h or "posted account" in h)


def _aib_mapping(headers: _Headers) -> Optional[ColumnMapping]:
    return _complete(
        ColumnMapping(
            date=headers.find(lambda h: "posted transactions date" in h or "transaction date" in h),
            description=headers.find(lambda h: h == "description1" or "description" in h),
            credit=headers.find(lambda h: "credit" in h),
            debit=headers.find(lambda h: "debit" in h),
        )
    )


# Revolut


def _is_revolut(headers: _Headers) -> bool:
    return headers.any(
        lambda h: ("completed" in h and "date" in h) or ("started" in h and "date" in h)
    )


def _revolut_mapping(headers: _Headers) -> Optional[ColumnMapping]:
    # Completed date is preferred over started date
    date_col = headers.find(lambda h: "completed" in h and "date" in h) or headers.find(
        lambda h: "started" in h and "date" in h
    )
    description_col = headers.find(lambda h: h == "description")
    amount_col = headers.find(lambda h: h == "amount")
    if not amount_col:
        return None
    return _complete(ColumnMapping(date=date_col, description=description_col, amount=amount_col))


# Bank of Ireland and generic exports


def _is_boi(headers: _Headers) -> bool:
    return headers.any(lambda h: "posting date" in h and "narrative" in h)


def _generic_mapping(headers: _Headers) -> Optional[ColumnMapping]:
    return _complete(
        ColumnMapping(
            date=headers.find(lambda h: "date" in h and "balance" not in h),
            description=headers.find(
                lambda h: "description" in h or "narrative" in h or "details" in h
            ),
            amount=headers.find(lambda h: h == "amount"),
            credit=headers.find(lambda h: "credit" in h and "card" not in h),
            debit=headers.find(lambda h: "debit" in h),
        )
    )


BANK_SIGNATURES: tuple[BankSignature, ...] = (
    BankSignature(name="AIB", matches=_is_aib, build_mapping=_aib_mapping),
    BankSignature(name="Revolut", matches=_is_revolut, build_mapping=_revolut_mapping),
    BankSignature(name="Bank of Ireland", matches=_is_boi, build_mapping=_generic_mapping),
    BankSignature(name=None, matches=lambda headers: True, build_mapping=_generic_mapping),
)


def detect_bank_format(
    headers: Sequence[str],
    signatures: Sequence[BankSignature] = BANK_SIGNATURES,
) -> Optional[DetectedFormat]:
    """Pick a column mapping for a statement from its headers.

    Args:
        headers: Cleaned header names as they appear in the file
        signatures: Signatures to try, highest precedence first

    Returns:
        Detected bank and mapping, or None if no signature resolves all
        required fields and the user must map columns manually
    """
    wrapped = _Headers(headers)
    for signature in signatures:
        if not signature.matches(wrapped):
            continue
        mapping = signature.build_mapping(wrapped)
        if mapping is None:
            logger.debug("Signature %s matched but could not resolve columns", signature.name)
            continue
        logger.info("Detected %s statement format: %s", signature.name or "generic", mapping)
        return DetectedFormat(bank_name=signature.name, mapping=mapping)

    logger.info("No statement format detected for headers %s", list(headers))
    return None
