"""Batch: header record (type 5), entries, and control record (type 8)."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import Field, PrivateAttr, field_validator

from nachagen.core.exceptions import FieldValidationError
from nachagen.models.base import RecordModel
from nachagen.models.codes import ServiceClass, StandardEntryClass
from nachagen.models.entry import Entry
from nachagen.models.fields import (
    ADDENDA,
    BATCH_CONTROL,
    BATCH_HEADER,
    ensure_fits,
    layout_field,
    render_record,
    truncate_hash,
)

DATE_FORMAT = "%y%m%d"


class Batch(RecordModel):
    """An ordered group of entries sharing one originator and settlement date."""

    service_class: ServiceClass
    origin_company_name: str = layout_field(BATCH_HEADER["company_name"])
    origin_discretionary_data: str = layout_field(BATCH_HEADER["company_discretionary_data"], "")
    origin_identification: str = layout_field(BATCH_HEADER["company_identification"])
    standard_entry_class: StandardEntryClass
    description: str = layout_field(BATCH_HEADER["company_entry_description"])
    descriptive_date: Optional[date] = None
    effective_entry_date: date = Field(default_factory=date.today)
    origin_dfi: str = layout_field(BATCH_HEADER["originating_dfi_identification"], exact=True)
    origin_status_code: str = layout_field(BATCH_HEADER["originator_status_code"], "1", exact=True)
    message_authentication_code: str = layout_field(
        BATCH_CONTROL["message_authentication_code"], "", pattern=r"^([ -~]{19})?$",
    )

    _entries: list[Entry] = PrivateAttr(default_factory=list)

    @field_validator("service_class", mode="before")
    @classmethod
    def _translate_service_class(cls, value: object) -> ServiceClass:
        return ServiceClass.from_code(value)

    @field_validator("standard_entry_class", mode="before")
    @classmethod
    def _translate_standard_entry_class(cls, value: object) -> StandardEntryClass:
        return StandardEntryClass.from_code(value)

    # --- entries ---

    def add_entry(self, entry: Entry) -> None:
        """Append ``entry``; rejected if the control record could no longer hold the totals."""
        self._entries.append(entry)
        try:
            self.check_capacity()
        except FieldValidationError:
            self._entries.pop()
            raise

    @property
    def entries(self) -> tuple[Entry, ...]:
        return tuple(self._entries)

    # --- aggregates, recomputed on every call ---

    def entry_count(self) -> int:
        return len(self._entries)

    def addenda_count(self) -> int:
        """Number of entries carrying an addenda record."""
        return sum(1 for entry in self._entries if entry.has_addenda())

    def entry_addenda_count(self) -> int:
        return self.entry_count() + self.addenda_count()

    def entries_hash(self) -> int:
        """Sum of the entries' DFI identifiers, truncated to 10 digits."""
        return truncate_hash(sum(entry.dfi_identifier() for entry in self._entries))

    def total_debit_cents(self) -> int:
        return sum(entry.debit_cents for entry in self._entries)

    def total_credit_cents(self) -> int:
        return sum(entry.credit_cents for entry in self._entries)

    def check_capacity(self) -> None:
        """Raise ``FieldValidationError`` if a count, total or sequence outgrows its field."""
        ensure_fits(ADDENDA, "entry_detail_sequence_number", self.entry_count(), "Batch")
        ensure_fits(BATCH_CONTROL, "entry_addenda_count", self.entry_addenda_count(), "Batch")
        ensure_fits(BATCH_CONTROL, "total_debit_amount", self.total_debit_cents(), "Batch")
        ensure_fits(BATCH_CONTROL, "total_credit_amount", self.total_credit_cents(), "Batch")

    # --- rendering ---

    def header(self, batch_number: int) -> str:
        return render_record(BATCH_HEADER, {
            "service_class_code": self.service_class.value,
            "company_name": self.origin_company_name,
            "company_discretionary_data": self.origin_discretionary_data,
            "company_identification": self.origin_identification,
            "standard_entry_class_code": self.standard_entry_class.value,
            "company_entry_description": self.description.upper(),
            "company_descriptive_date": (
                self.descriptive_date.strftime(DATE_FORMAT) if self.descriptive_date else ""
            ),
            "effective_entry_date": self.effective_entry_date.strftime(DATE_FORMAT),
            "originator_status_code": self.origin_status_code,
            "originating_dfi_identification": self.origin_dfi,
            "batch_number": batch_number,
        })

    def trailer(self, batch_number: int) -> str:
        return render_record(BATCH_CONTROL, {
            "service_class_code": self.service_class.value,
            "entry_addenda_count": self.entry_addenda_count(),
            "entry_hash": self.entries_hash(),
            "total_debit_amount": self.total_debit_cents(),
            "total_credit_amount": self.total_credit_cents(),
            "company_identification": self.origin_identification,
            "message_authentication_code": self.message_authentication_code,
            "originating_dfi_identification": self.origin_dfi,
            "batch_number": batch_number,
        })

    def render(self, batch_number: int) -> list[str]:
        """Header, each entry (sequence restarts at 1 per batch), then the control record."""
        self.check_capacity()
        lines = [self.header(batch_number)]
        for sequence_number, entry in enumerate(self._entries, start=1):
            lines.extend(entry.render_all(self.origin_dfi, sequence_number))
        lines.append(self.trailer(batch_number))
        return lines
