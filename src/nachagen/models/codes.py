"""Closed NACHA code sets: service class, transaction code, standard entry class."""

from __future__ import annotations

from enum import Enum, IntEnum, StrEnum
from typing import Any, TypeVar

from nachagen.core.exceptions import FieldValidationError

E = TypeVar("E", bound=Enum)


def _translate(enum_cls: type[E], value: Any, record: str, field: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        if issubclass(enum_cls, IntEnum):
            return enum_cls(int(str(value).strip()))
        return enum_cls(str(value).strip())
    except (TypeError, ValueError) as exc:
        allowed = ", ".join(str(member.value) for member in enum_cls)
        raise FieldValidationError(
            record, field, "enum", f"unknown code {value!r}; expected one of {allowed}",
        ) from exc


class ServiceClass(IntEnum):
    """Batch service class code."""

    CREDIT_DEBIT = 200
    CREDIT = 220
    DEBIT = 225

    @classmethod
    def from_code(cls, value: Any) -> ServiceClass:
        return _translate(cls, value, "Batch", "service_class")


class TransactionCode(IntEnum):
    """Entry detail transaction code."""

    CHECKING_CREDIT = 22
    CHECKING_DEBIT = 27
    SAVINGS_CREDIT = 32
    SAVINGS_DEBIT = 37

    @classmethod
    def from_code(cls, value: Any) -> TransactionCode:
        return _translate(cls, value, "Entry", "transaction_code")

    @property
    def is_credit(self) -> bool:
        return self in CREDIT_CODES

    @property
    def is_debit(self) -> bool:
        return self in DEBIT_CODES


CREDIT_CODES = frozenset({TransactionCode.CHECKING_CREDIT, TransactionCode.SAVINGS_CREDIT})
DEBIT_CODES = frozenset({TransactionCode.CHECKING_DEBIT, TransactionCode.SAVINGS_DEBIT})


class StandardEntryClass(StrEnum):
    """Standard entry class (SEC) code carried on the batch header."""

    ARC = "ARC"  # Accounts receivable entry
    BOC = "BOC"  # Back office conversion
    CCD = "CCD"  # Corporate credit or debit
    CIE = "CIE"  # Customer initiated entry
    CTX = "CTX"  # Corporate trade exchange
    IAT = "IAT"  # International ACH transaction
    POP = "POP"  # Point of purchase
    POS = "POS"  # Point of sale
    PPD = "PPD"  # Prearranged payment and deposit
    RCK = "RCK"  # Re-presented check
    TEL = "TEL"  # Telephone initiated
    WEB = "WEB"  # Internet initiated

    @classmethod
    def from_code(cls, value: Any) -> StandardEntryClass:
        return _translate(cls, value, "Batch", "standard_entry_class")
