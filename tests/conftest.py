"""Shared fixtures: the documented two-batch example file."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

import pytest

from nachagen.models import Addenda, Batch, NachaFile, ServiceClass, TransactionCode
from tests.fakes.builders import make_batch, make_entry, make_file


@pytest.fixture
def credit_batch() -> Batch:
    batch = make_batch()
    batch.add_entry(make_entry(amount=Decimal("3521.00"), transaction_id="000001309"))
    special = make_entry(amount=Decimal("50.50"), transaction_id="000001313")
    special.set_addenda(Addenda(info="Im a special boy"))
    batch.add_entry(special)
    return batch


@pytest.fixture
def debit_batch() -> Batch:
    batch = make_batch(
        service_class=ServiceClass.DEBIT,
        origin_identification="Foobar",
        description="You Know",
        descriptive_date=date(2024, 4, 1),
        effective_entry_date=date(2024, 4, 1),
    )
    batch.add_entry(make_entry(
        transaction_code=TransactionCode.CHECKING_DEBIT,
        amount=Decimal("3.50"),
        transaction_id="5051309",
        destination_name="Richard Branson",
    ))
    return batch


@pytest.fixture
def example_file(credit_batch, debit_batch) -> NachaFile:
    nacha_file = make_file()
    nacha_file.add_batch(credit_batch)
    nacha_file.add_batch(debit_batch)
    return nacha_file


@pytest.fixture(autouse=True)
def restore_nachagen_logger():
    """setup_logger() mutates the shared ``nachagen`` logger; undo it after each test."""
    logger = logging.getLogger("nachagen")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
