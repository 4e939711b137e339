"""Top-level ACH file: header (type 1), batches, control (type 9) and block filler."""

from __future__ import annotations

import math
from datetime import datetime

from pydantic import Field, PrivateAttr

from nachagen.core.exceptions import FieldValidationError
from nachagen.core.logging import get_logger
from nachagen.models.base import RecordModel
from nachagen.models.batch import Batch
from nachagen.models.fields import (
    BLOCKING_FACTOR,
    FILE_CONTROL,
    FILE_HEADER,
    FILLER_RECORD,
    ensure_fits,
    layout_field,
    render_record,
    truncate_hash,
)

logger = get_logger(__name__)


class NachaFile(RecordModel):
    """Builder for one NACHA file.

    Batches are appended with ``add_batch``; ``render`` is a pure function of
    the current object graph and may be called any number of times. The
    creation timestamp is captured at construction, never at render.
    """

    origin_routing_number: str = layout_field(FILE_HEADER["immediate_origin"], width=9, exact=True)
    destination_routing_number: str = layout_field(
        FILE_HEADER["immediate_destination"], width=9, exact=True,
    )
    origin_name: str = layout_field(FILE_HEADER["immediate_origin_name"], "")
    destination_name: str = layout_field(FILE_HEADER["immediate_destination_name"], "")
    file_creation_date: datetime = Field(default_factory=datetime.now)
    file_id_modifier: str = layout_field(FILE_HEADER["file_id_modifier"], "A", pattern=r"^[A-Z0-9]$")
    reference_code: str = layout_field(FILE_HEADER["reference_code"], "")

    _batches: list[Batch] = PrivateAttr(default_factory=list)

    def add_batch(self, batch: Batch) -> None:
        """Append ``batch``; rejected if the file control record could no longer hold the totals."""
        self._batches.append(batch)
        try:
            self.check_capacity()
        except FieldValidationError:
            self._batches.pop()
            raise

    @property
    def batches(self) -> tuple[Batch, ...]:
        return tuple(self._batches)

    # --- aggregates ---

    def entry_addenda_count(self) -> int:
        return sum(batch.entry_addenda_count() for batch in self._batches)

    def entries_hash(self) -> int:
        return truncate_hash(sum(batch.entries_hash() for batch in self._batches))

    def total_debit_cents(self) -> int:
        return sum(batch.total_debit_cents() for batch in self._batches)

    def total_credit_cents(self) -> int:
        return sum(batch.total_credit_cents() for batch in self._batches)

    def line_count(self) -> int:
        """Records before block filler: header, batch headers and controls, entries, addenda, trailer."""
        return 2 + 2 * len(self._batches) + self.entry_addenda_count()

    def check_capacity(self) -> None:
        """Re-check every batch, then the file control counts and totals.

        Entries appended to a batch after it joined the file are only caught
        here, so rendering runs this check too.
        """
        for batch in self._batches:
            batch.check_capacity()
        ensure_fits(FILE_CONTROL, "batch_count", len(self._batches), "NachaFile")
        ensure_fits(
            FILE_CONTROL, "block_count", math.ceil(self.line_count() / BLOCKING_FACTOR), "NachaFile",
        )
        ensure_fits(FILE_CONTROL, "entry_addenda_count", self.entry_addenda_count(), "NachaFile")
        ensure_fits(FILE_CONTROL, "total_debit_amount", self.total_debit_cents(), "NachaFile")
        ensure_fits(FILE_CONTROL, "total_credit_amount", self.total_credit_cents(), "NachaFile")

    # --- rendering ---

    def header(self) -> str:
        return render_record(FILE_HEADER, {
            "immediate_destination": self.destination_routing_number,
            "immediate_origin": self.origin_routing_number,
            "file_creation_date": self.file_creation_date.strftime("%y%m%d"),
            "file_creation_time": self.file_creation_date.strftime("%H%M"),
            "file_id_modifier": self.file_id_modifier,
            "immediate_destination_name": self.destination_name,
            "immediate_origin_name": self.origin_name,
            "reference_code": self.reference_code,
        })

    def trailer(self, total_lines: int) -> str:
        """File control record; ``total_lines`` counts every record including this one."""
        return render_record(FILE_CONTROL, {
            "batch_count": len(self._batches),
            "block_count": math.ceil(total_lines / BLOCKING_FACTOR),
            "entry_addenda_count": self.entry_addenda_count(),
            "entry_hash": self.entries_hash(),
            "total_debit_amount": self.total_debit_cents(),
            "total_credit_amount": self.total_credit_cents(),
        })

    def render_lines(self) -> list[str]:
        self.check_capacity()
        lines = [self.header()]
        for batch_number, batch in enumerate(self._batches, start=1):
            lines.extend(batch.render(batch_number))
        lines.append(self.trailer(len(lines) + 1))

        remainder = len(lines) % BLOCKING_FACTOR
        if remainder:
            lines.extend([FILLER_RECORD] * (BLOCKING_FACTOR - remainder))

        logger.debug(
            "Rendered ACH file",
            extra={
                "batch_count": len(self._batches),
                "line_count": len(lines),
                "block_count": len(lines) // BLOCKING_FACTOR,
            },
        )
        return lines

    def render(self) -> str:
        """The complete file: LF-joined 94-character lines, no trailing newline."""
        return "\n".join(self.render_lines())
