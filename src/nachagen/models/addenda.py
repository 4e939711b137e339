"""Entry addenda record (type 7, addenda type 05)."""

from __future__ import annotations

from nachagen.models.base import RecordModel
from nachagen.models.fields import ADDENDA, layout_field, render_record


class Addenda(RecordModel):
    """Free-text payment related information linked to one entry detail record.

    Only a single addenda per entry is modelled, so the addenda sequence
    number is always 1.
    """

    info: str = layout_field(ADDENDA["payment_related_information"], "")

    @property
    def sequence_number(self) -> int:
        return 1

    def render(self, trace_suffix: str) -> str:
        """Render the addenda line; ``trace_suffix`` is the entry's 7-digit sequence number."""
        return render_record(ADDENDA, {
            "payment_related_information": self.info,
            "addenda_sequence_number": self.sequence_number,
            "entry_detail_sequence_number": trace_suffix,
        })
