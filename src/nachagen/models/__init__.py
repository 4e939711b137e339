"""NACHA record models: files, batches, entries and addenda."""

from __future__ import annotations

from nachagen.models.addenda import Addenda
from nachagen.models.batch import Batch
from nachagen.models.codes import ServiceClass, StandardEntryClass, TransactionCode
from nachagen.models.entry import Classification, Entry
from nachagen.models.nacha_file import NachaFile

__all__ = [
    "Addenda",
    "Batch",
    "Classification",
    "Entry",
    "NachaFile",
    "ServiceClass",
    "StandardEntryClass",
    "TransactionCode",
]
