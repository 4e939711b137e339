"""Request/response bodies for the ACH endpoints.

These mirror the construction interface loosely typed: codes arrive as plain
ints/strings and are translated into the closed enums by ``to_domain``, and
field widths are enforced by the record models themselves.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from nachagen.models import (
    Addenda,
    Batch,
    Entry,
    NachaFile,
    ServiceClass,
    StandardEntryClass,
    TransactionCode,
)


class EntryIn(BaseModel):
    transaction_code: int | str
    destination_routing_number: str
    destination_account_number: str
    amount: Decimal
    transaction_id: str = ""
    destination_name: str
    discretionary_data: str = ""
    addenda_info: Optional[str] = None

    def to_domain(self) -> Entry:
        entry = Entry(
            transaction_code=TransactionCode.from_code(self.transaction_code),
            destination_routing_number=self.destination_routing_number,
            destination_account_number=self.destination_account_number,
            amount=self.amount,
            transaction_id=self.transaction_id,
            destination_name=self.destination_name,
            discretionary_data=self.discretionary_data,
        )
        if self.addenda_info is not None:
            entry.set_addenda(Addenda(info=self.addenda_info))
        return entry


class BatchIn(BaseModel):
    service_class_code: int | str
    standard_entry_class_code: str
    origin_company_name: str
    origin_discretionary_data: str = ""
    origin_identification: str
    description: str
    descriptive_date: Optional[date] = None
    effective_entry_date: Optional[date] = None
    origin_dfi: str
    origin_status_code: str = "1"
    message_authentication_code: str = ""
    entries: list[EntryIn] = Field(default_factory=list)

    def to_domain(self) -> Batch:
        fields = {
            "service_class": ServiceClass.from_code(self.service_class_code),
            "standard_entry_class": StandardEntryClass.from_code(self.standard_entry_class_code),
            "origin_company_name": self.origin_company_name,
            "origin_discretionary_data": self.origin_discretionary_data,
            "origin_identification": self.origin_identification,
            "description": self.description,
            "descriptive_date": self.descriptive_date,
            "origin_dfi": self.origin_dfi,
            "origin_status_code": self.origin_status_code,
            "message_authentication_code": self.message_authentication_code,
        }
        if self.effective_entry_date is not None:
            fields["effective_entry_date"] = self.effective_entry_date
        batch = Batch(**fields)
        for entry in self.entries:
            batch.add_entry(entry.to_domain())
        return batch


class NachaFileIn(BaseModel):
    origin_routing_number: str
    destination_routing_number: str
    origin_name: str = ""
    destination_name: str = ""
    file_creation_date: Optional[datetime] = None
    file_id_modifier: str = "A"
    reference_code: str = ""
    batches: list[BatchIn] = Field(default_factory=list)

    def to_domain(self) -> NachaFile:
        fields = self.model_dump(exclude={"batches", "file_creation_date"})
        if self.file_creation_date is not None:
            fields["file_creation_date"] = self.file_creation_date
        nacha_file = NachaFile(**fields)
        for batch in self.batches:
            nacha_file.add_batch(batch.to_domain())
        return nacha_file


class PublishRequest(BaseModel):
    file: NachaFileIn
    filename: Optional[str] = Field(default=None, pattern=r"^[A-Za-z0-9._-]+$")
    overwrite: bool = False


class PublishResponse(BaseModel):
    path: str
    line_count: int
    block_count: int
