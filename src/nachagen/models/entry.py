"""Entry detail record (type 6) and its optional addenda."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, NamedTuple, Optional

from pydantic import Field, PrivateAttr, field_validator

from nachagen.models.addenda import Addenda
from nachagen.models.base import RecordModel
from nachagen.models.codes import TransactionCode
from nachagen.models.fields import (
    ENTRY_DETAIL,
    NUMERIC_PATTERN,
    layout_field,
    quantize_amount,
    render_record,
    to_cents,
)
from nachagen.models.routing import is_valid_routing_number

ZERO = Decimal("0.00")
MAX_AMOUNT = Decimal("99999999.99")  # 10-digit cents field


class Classification(NamedTuple):
    """Credit and debit contribution of one entry; at most one is non-zero."""

    credit: Decimal
    debit: Decimal


class Entry(RecordModel):
    """A single credit or debit to a receiver's account."""

    transaction_code: TransactionCode
    destination_routing_number: str = layout_field(
        ENTRY_DETAIL["receiving_dfi_identification"], width=9, exact=True,
    )
    destination_account_number: str = layout_field(ENTRY_DETAIL["dfi_account_number"])
    amount: Decimal = Field(gt=0, le=MAX_AMOUNT)
    transaction_id: str = layout_field(
        ENTRY_DETAIL["individual_identification_number"], "", pattern=NUMERIC_PATTERN,
    )
    destination_name: str = layout_field(ENTRY_DETAIL["individual_name"])
    discretionary_data: str = layout_field(ENTRY_DETAIL["discretionary_data"], "")

    _addenda: Optional[Addenda] = PrivateAttr(default=None)

    @field_validator("transaction_code", mode="before")
    @classmethod
    def _translate_transaction_code(cls, value: Any) -> TransactionCode:
        return TransactionCode.from_code(value)

    @field_validator("amount", mode="before")
    @classmethod
    def _round_to_cents(cls, value: Any) -> Any:
        if isinstance(value, (Decimal, int, float, str)):
            try:
                return quantize_amount(value)
            except InvalidOperation as exc:
                raise ValueError(f"amount {value!r} is not a finite decimal") from exc
        return value

    # --- addenda ---

    @property
    def addenda(self) -> Optional[Addenda]:
        return self._addenda

    def has_addenda(self) -> bool:
        return self._addenda is not None

    def set_addenda(self, addenda: Addenda) -> None:
        """Attach (or replace) this entry's single addenda record."""
        self._addenda = addenda

    # --- derived values ---

    @property
    def cents(self) -> int:
        return to_cents(self.amount)

    @property
    def is_credit(self) -> bool:
        return self.transaction_code.is_credit

    @property
    def is_debit(self) -> bool:
        return self.transaction_code.is_debit

    def classify(self) -> Classification:
        if self.is_credit:
            return Classification(credit=self.amount, debit=ZERO)
        return Classification(credit=ZERO, debit=self.amount)

    @property
    def credit_cents(self) -> int:
        return self.cents if self.is_credit else 0

    @property
    def debit_cents(self) -> int:
        return self.cents if self.is_debit else 0

    def dfi_identifier(self) -> int:
        """First 8 digits of the routing number, the entry's entry-hash contribution."""
        return int(self.destination_routing_number[:8])

    @property
    def has_valid_check_digit(self) -> bool:
        return is_valid_routing_number(self.destination_routing_number)

    # --- rendering ---

    def render(self, origin_dfi: str, sequence_number: int) -> str:
        """Entry detail line; the trace number is ``origin_dfi`` + 7-digit sequence."""
        return render_record(ENTRY_DETAIL, {
            "transaction_code": self.transaction_code.value,
            "receiving_dfi_identification": self.destination_routing_number[:8],
            "check_digit": self.destination_routing_number[8],
            "dfi_account_number": self.destination_account_number,
            "amount": self.cents,
            "individual_identification_number": self.transaction_id,
            "individual_name": self.destination_name,
            "discretionary_data": self.discretionary_data,
            "addenda_record_indicator": "1" if self.has_addenda() else "0",
            "trace_number": f"{origin_dfi}{sequence_number:07d}",
        })

    def render_all(self, origin_dfi: str, sequence_number: int) -> list[str]:
        lines = [self.render(origin_dfi, sequence_number)]
        if self._addenda is not None:
            lines.append(self._addenda.render(f"{sequence_number:07d}"))
        return lines
