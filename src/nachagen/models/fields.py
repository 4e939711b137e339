"""NACHA record layouts and fixed-width field formatting.

Each record kind has one static layout: an ordered mapping from field
identifier to a frozen ``FieldSpec``. Layouts serve two purposes:

* model fields derive their pydantic constraints from them (``layout_field``),
  so widths and content classes are declared exactly once;
* ``render_record`` walks a layout to produce the 94-character line.

Numeric fields are zero-filled on the left, alphanumeric fields are
space-filled on the right, and the file header's immediate destination and
origin are space-filled on the left (``bTTTTAAAAC``).
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Optional

from pydantic import BaseModel, Field

from nachagen.core.exceptions import FieldValidationError

RECORD_LENGTH = 94
BLOCKING_FACTOR = 10
FILLER_RECORD = "9" * RECORD_LENGTH
HASH_MODULUS = 10 ** 10

CENT = Decimal("0.01")

ALPHANUMERIC_PATTERN = r"^[ -~]*$"  # printable ASCII
NUMERIC_PATTERN = r"^[0-9]*$"


class FieldKind(StrEnum):
    NUMERIC = "numeric"
    ALPHANUMERIC = "alphanumeric"
    ROUTING = "routing"


class FieldSpec(BaseModel):
    """Static metadata for one fixed-width field."""

    model_config = {"frozen": True}

    key: str
    name: str
    width: int
    kind: FieldKind = FieldKind.ALPHANUMERIC
    required: bool = False
    constant: Optional[str] = None
    position: int = 0  # 1-based start column, assigned by _layout

    @property
    def end(self) -> int:
        return self.position + self.width - 1

    def format(self, value: Any) -> str:
        text = "" if value is None else str(value)
        if self.kind is FieldKind.NUMERIC:
            return text.rjust(self.width, "0")
        if self.kind is FieldKind.ROUTING:
            return text.rjust(self.width)
        return text.ljust(self.width)


Layout = Mapping[str, FieldSpec]


def _layout(*specs: FieldSpec) -> Layout:
    fields: dict[str, FieldSpec] = {}
    position = 1
    for spec in specs:
        fields[spec.key] = spec.model_copy(update={"position": position})
        position += spec.width
    if position - 1 != RECORD_LENGTH:
        raise ValueError(f"layout is {position - 1} characters wide, expected {RECORD_LENGTH}")
    return MappingProxyType(fields)


_N = FieldKind.NUMERIC

FILE_HEADER: Layout = _layout(
    FieldSpec(key="record_type_code", name="Record Type Code", width=1, kind=_N, required=True, constant="1"),
    FieldSpec(key="priority_code", name="Priority Code", width=2, kind=_N, required=True, constant="01"),
    FieldSpec(key="immediate_destination", name="Immediate Destination", width=10,
              kind=FieldKind.ROUTING, required=True),
    FieldSpec(key="immediate_origin", name="Immediate Origin", width=10,
              kind=FieldKind.ROUTING, required=True),
    FieldSpec(key="file_creation_date", name="File Creation Date", width=6, kind=_N, required=True),
    FieldSpec(key="file_creation_time", name="File Creation Time", width=4, kind=_N),
    FieldSpec(key="file_id_modifier", name="File ID Modifier", width=1, required=True),
    FieldSpec(key="record_size", name="Record Size", width=3, kind=_N, required=True,
              constant=f"{RECORD_LENGTH:03d}"),
    FieldSpec(key="blocking_factor", name="Blocking Factor", width=2, kind=_N, required=True,
              constant=str(BLOCKING_FACTOR)),
    FieldSpec(key="format_code", name="Format Code", width=1, kind=_N, required=True, constant="1"),
    FieldSpec(key="immediate_destination_name", name="Immediate Destination Name", width=23),
    FieldSpec(key="immediate_origin_name", name="Immediate Origin Name", width=23),
    FieldSpec(key="reference_code", name="Reference Code", width=8),
)

BATCH_HEADER: Layout = _layout(
    FieldSpec(key="record_type_code", name="Record Type Code", width=1, kind=_N, required=True, constant="5"),
    FieldSpec(key="service_class_code", name="Service Class Code", width=3, kind=_N, required=True),
    FieldSpec(key="company_name", name="Company Name", width=16, required=True),
    FieldSpec(key="company_discretionary_data", name="Company Discretionary Data", width=20),
    FieldSpec(key="company_identification", name="Company Identification", width=10, required=True),
    FieldSpec(key="standard_entry_class_code", name="Standard Entry Class Code", width=3, required=True),
    FieldSpec(key="company_entry_description", name="Company Entry Description", width=10, required=True),
    FieldSpec(key="company_descriptive_date", name="Company Descriptive Date", width=6),
    FieldSpec(key="effective_entry_date", name="Effective Entry Date", width=6, kind=_N, required=True),
    FieldSpec(key="settlement_date", name="Settlement Date (Julian)", width=3, constant=""),
    FieldSpec(key="originator_status_code", name="Originator Status Code", width=1, required=True),
    FieldSpec(key="originating_dfi_identification", name="Originating DFI Identification", width=8,
              kind=_N, required=True),
    FieldSpec(key="batch_number", name="Batch Number", width=7, kind=_N, required=True),
)

ENTRY_DETAIL: Layout = _layout(
    FieldSpec(key="record_type_code", name="Record Type Code", width=1, kind=_N, required=True, constant="6"),
    FieldSpec(key="transaction_code", name="Transaction Code", width=2, kind=_N, required=True),
    FieldSpec(key="receiving_dfi_identification", name="Receiving DFI Identification", width=8,
              kind=_N, required=True),
    FieldSpec(key="check_digit", name="Check Digit", width=1, kind=_N, required=True),
    FieldSpec(key="dfi_account_number", name="DFI Account Number", width=17, required=True),
    FieldSpec(key="amount", name="Amount", width=10, kind=_N, required=True),
    FieldSpec(key="individual_identification_number", name="Individual Identification Number", width=15),
    FieldSpec(key="individual_name", name="Individual Name", width=22, required=True),
    FieldSpec(key="discretionary_data", name="Discretionary Data", width=2),
    FieldSpec(key="addenda_record_indicator", name="Addenda Record Indicator", width=1, kind=_N,
              required=True),
    FieldSpec(key="trace_number", name="Trace Number", width=15, kind=_N, required=True),
)

ADDENDA: Layout = _layout(
    FieldSpec(key="record_type_code", name="Record Type Code", width=1, kind=_N, required=True, constant="7"),
    FieldSpec(key="addenda_type_code", name="Addenda Type Code", width=2, kind=_N, required=True,
              constant="05"),
    FieldSpec(key="payment_related_information", name="Payment Related Information", width=80),
    FieldSpec(key="addenda_sequence_number", name="Addenda Sequence Number", width=4, kind=_N,
              required=True),
    FieldSpec(key="entry_detail_sequence_number", name="Entry Detail Sequence Number", width=7,
              required=True),
)

BATCH_CONTROL: Layout = _layout(
    FieldSpec(key="record_type_code", name="Record Type Code", width=1, kind=_N, required=True, constant="8"),
    FieldSpec(key="service_class_code", name="Service Class Code", width=3, kind=_N, required=True),
    FieldSpec(key="entry_addenda_count", name="Entry/Addenda Count", width=6, kind=_N, required=True),
    FieldSpec(key="entry_hash", name="Entry Hash", width=10, kind=_N, required=True),
    FieldSpec(key="total_debit_amount", name="Total Debit Entry Dollar Amount", width=12, kind=_N,
              required=True),
    FieldSpec(key="total_credit_amount", name="Total Credit Entry Dollar Amount", width=12, kind=_N,
              required=True),
    FieldSpec(key="company_identification", name="Company Identification", width=10, required=True),
    FieldSpec(key="message_authentication_code", name="Message Authentication Code", width=19),
    FieldSpec(key="reserved", name="Reserved", width=6, constant=""),
    FieldSpec(key="originating_dfi_identification", name="Originating DFI Identification", width=8,
              kind=_N, required=True),
    FieldSpec(key="batch_number", name="Batch Number", width=7, kind=_N, required=True),
)

FILE_CONTROL: Layout = _layout(
    FieldSpec(key="record_type_code", name="Record Type Code", width=1, kind=_N, required=True, constant="9"),
    FieldSpec(key="batch_count", name="Batch Count", width=6, kind=_N, required=True),
    FieldSpec(key="block_count", name="Block Count", width=6, kind=_N, required=True),
    FieldSpec(key="entry_addenda_count", name="Entry/Addenda Count", width=8, kind=_N, required=True),
    FieldSpec(key="entry_hash", name="Entry Hash", width=10, kind=_N, required=True),
    FieldSpec(key="total_debit_amount", name="Total Debit Entry Dollar Amount in File", width=12,
              kind=_N, required=True),
    FieldSpec(key="total_credit_amount", name="Total Credit Entry Dollar Amount in File", width=12,
              kind=_N, required=True),
    FieldSpec(key="reserved", name="Reserved", width=39, constant=""),
)


def layout_field(
    spec: FieldSpec,
    default: Any = ...,
    *,
    width: int | None = None,
    exact: bool = False,
    **kwargs: Any,
) -> Any:
    """Pydantic ``Field`` whose constraints come from ``spec``.

    ``width`` narrows the field below the record width (a 9-digit routing
    number in a 10-character slot). ``exact`` requires the full width. A
    required field without a default must also be non-empty.
    """
    width = width or spec.width
    if exact:
        min_length: int | None = width
    elif spec.required and default is ...:
        min_length = 1
    else:
        min_length = None
    kwargs.setdefault(
        "pattern", ALPHANUMERIC_PATTERN if spec.kind is FieldKind.ALPHANUMERIC else NUMERIC_PATTERN,
    )
    return Field(default, min_length=min_length, max_length=width, description=spec.name, **kwargs)


def quantize_amount(value: Decimal | int | float | str) -> Decimal:
    """Round a currency amount half-up to whole cents."""
    if isinstance(value, float):
        value = str(value)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_cents(amount: Decimal) -> int:
    return int(quantize_amount(amount) * 100)


def truncate_hash(total: int) -> int:
    """Keep the 10 least-significant digits of an entry hash."""
    return total % HASH_MODULUS


def ensure_fits(layout: Layout, key: str, value: int, record: str) -> None:
    """Raise if ``value`` needs more digits than the numeric field ``key`` holds."""
    spec = layout[key]
    if value >= 10 ** spec.width:
        raise FieldValidationError(
            record, key, "overflow", f"{spec.name} {value} exceeds {spec.width} digits",
        )


def render_record(layout: Layout, values: Mapping[str, Any]) -> str:
    """Concatenate ``values`` into one fixed-width record following ``layout``."""
    return "".join(
        spec.format(spec.constant if spec.constant is not None else values.get(key))
        for key, spec in layout.items()
    )
