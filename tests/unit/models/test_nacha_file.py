"""Tests for NachaFile assembly against the documented two-batch example."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from nachagen.core.exceptions import FieldValidationError
from nachagen.models.entry import MAX_AMOUNT
from nachagen.models.fields import FILLER_RECORD
from nachagen.models.nacha_file import NachaFile
from tests.fakes.builders import make_batch, make_entry, make_file

EXPECTED_LINES = [
    "101 091000019 0114015332301010000A094101"
    + "Your Bank" + " " * 14 + "Some Bank" + " " * 14 + "12" + " " * 6,
    "5220Your Company IncA1" + " " * 18 + "RAj2392   CCDPAYROLL   230101230101   1011401530000001",
    "622091000019" + "1234567897" + " " * 7 + "0000352100" + "000001309" + " " * 6
    + "Leroy Jenkins" + " " * 9 + "  " + "0" + "011401530000001",
    "622091000019" + "1234567897" + " " * 7 + "0000005050" + "000001313" + " " * 6
    + "Leroy Jenkins" + " " * 9 + "  " + "1" + "011401530000002",
    "705Im a special boy" + " " * 64 + "0001" + "0000002",
    "8" + "220" + "000003" + "0018200002" + "000000000000" + "000000357150"
    + "RAj2392   " + " " * 19 + " " * 6 + "01140153" + "0000001",
    "5225Your Company IncA1" + " " * 18 + "Foobar    CCDYOU KNOW  240401240401   1011401530000002",
    "627091000019" + "1234567897" + " " * 7 + "0000000350" + "5051309" + " " * 8
    + "Richard Branson" + " " * 7 + "  " + "0" + "011401530000001",
    "8" + "225" + "000001" + "0009100001" + "000000000350" + "000000000000"
    + "Foobar    " + " " * 19 + " " * 6 + "01140153" + "0000002",
    "9" + "000002" + "000001" + "00000004" + "0027300003" + "000000000350" + "000000357150"
    + " " * 39,
]


class TestExampleFile:
    def test_matches_expected_records(self, example_file):
        assert example_file.render().split("\n") == EXPECTED_LINES

    def test_exactly_one_block_without_filler(self, example_file):
        lines = example_file.render().split("\n")
        assert len(lines) == 10
        assert FILLER_RECORD not in lines

    def test_every_line_is_94_characters(self, example_file):
        assert all(len(line) == 94 for line in example_file.render().split("\n"))

    def test_batch_trailer_totals(self, example_file):
        lines = example_file.render().split("\n")
        credit_trailer, debit_trailer = lines[5], lines[8]
        assert credit_trailer[20:32] == "000000000000"
        assert credit_trailer[32:44] == "000000357150"
        assert debit_trailer[20:32] == "000000000350"
        assert debit_trailer[32:44] == "000000000000"

    def test_no_trailing_newline(self, example_file):
        assert not example_file.render().endswith("\n")

    def test_render_is_idempotent(self, example_file):
        assert example_file.render() == example_file.render()


class TestHeader:
    def test_routing_numbers_are_space_padded_left(self):
        header = make_file().header()
        assert header[3:13] == " 091000019"
        assert header[13:23] == " 011401533"

    def test_creation_timestamp(self):
        header = make_file(file_creation_date=datetime(2024, 12, 31, 17, 5)).header()
        assert header[23:29] == "241231"
        assert header[29:33] == "1705"

    def test_optional_names_render_blank(self):
        header = make_file(origin_name="", destination_name="", reference_code="").header()
        assert header[40:94] == " " * 54

    def test_defaults(self):
        nacha_file = NachaFile(origin_routing_number="011401533", destination_routing_number="091000019")
        assert nacha_file.file_id_modifier == "A"
        assert nacha_file.header()[33] == "A"
        assert nacha_file.header()[40:94] == " " * 54

    def test_creation_timestamp_is_fixed_at_construction(self):
        nacha_file = NachaFile(origin_routing_number="011401533", destination_routing_number="091000019")
        assert nacha_file.header() == nacha_file.header()


class TestTrailerAndFiller:
    def test_empty_file_pads_to_ten_lines(self):
        lines = make_file().render().split("\n")
        assert len(lines) == 10
        assert lines[1] == "9000000000001" + "0" * 8 + "0" * 10 + "0" * 24 + " " * 39
        assert lines[2:] == [FILLER_RECORD] * 8

    def test_filler_added_until_multiple_of_ten(self):
        nacha_file = make_file()
        batch = make_batch()
        batch.add_entry(make_entry())
        nacha_file.add_batch(batch)
        lines = nacha_file.render().split("\n")
        # header, batch header, entry, batch trailer, file trailer
        assert lines[4].startswith("9000001000001")
        assert lines[5:] == [FILLER_RECORD] * 5

    def test_block_count_includes_trailer(self):
        nacha_file = make_file()
        batch = make_batch()
        for _ in range(6):
            batch.add_entry(make_entry())
        nacha_file.add_batch(batch)
        # 1 + 1 + 6 + 1 + 1 trailer = 10 lines, one block
        assert nacha_file.trailer(10)[7:13] == "000001"
        assert nacha_file.trailer(11)[7:13] == "000002"
        assert len(nacha_file.render().split("\n")) == 10

    def test_line_count_is_multiple_of_ten(self):
        for entry_count in range(1, 25):
            nacha_file = make_file()
            batch = make_batch()
            for _ in range(entry_count):
                batch.add_entry(make_entry())
            nacha_file.add_batch(batch)
            assert len(nacha_file.render().split("\n")) % 10 == 0

    def test_file_hash_is_truncated(self):
        nacha_file = make_file()
        for _ in range(2):
            batch = make_batch()
            for _ in range(60):
                batch.add_entry(make_entry(destination_routing_number="999999991"))
            nacha_file.add_batch(batch)
        expected = (120 * 99_999_999) % 10 ** 10
        assert nacha_file.entries_hash() == expected
        assert nacha_file.trailer(130)[21:31] == f"{expected:010d}"

    def test_file_totals(self, example_file):
        assert example_file.entry_addenda_count() == 4
        assert example_file.total_debit_cents() == 350
        assert example_file.total_credit_cents() == 357150

    def test_batches_are_numbered_in_append_order(self, example_file):
        lines = example_file.render().split("\n")
        assert lines[1].endswith("0000001")
        assert lines[6].endswith("0000002")


class TestCapacity:
    @staticmethod
    def _full_batch():
        batch = make_batch()
        for _ in range(100):
            batch.add_entry(make_entry(amount=MAX_AMOUNT))
        return batch

    def test_batch_pushing_file_total_past_twelve_digits_is_rejected(self):
        nacha_file = make_file()
        nacha_file.add_batch(self._full_batch())
        with pytest.raises(FieldValidationError) as excinfo:
            nacha_file.add_batch(self._full_batch())
        assert excinfo.value.record == "NachaFile"
        assert excinfo.value.field == "total_credit_amount"
        assert excinfo.value.constraint == "overflow"
        assert len(nacha_file.batches) == 1
        assert {len(line) for line in nacha_file.render().split("\n")} == {94}

    def test_entries_added_after_batch_joined_are_checked_at_render(self):
        nacha_file = make_file()
        nacha_file.add_batch(self._full_batch())
        late = make_batch()
        nacha_file.add_batch(late)
        late.add_entry(make_entry(amount=MAX_AMOUNT))
        with pytest.raises(FieldValidationError) as excinfo:
            nacha_file.render()
        assert excinfo.value.field == "total_credit_amount"


class TestMutation:
    def test_appending_after_render_changes_output(self, example_file):
        before = example_file.render()
        batch = make_batch()
        batch.add_entry(make_entry(amount=Decimal("1.00")))
        example_file.add_batch(batch)
        after = example_file.render()
        assert before != after
        assert after.split("\n")[0] == before.split("\n")[0]

    def test_header_fields_are_frozen(self):
        nacha_file = make_file()
        with pytest.raises(FieldValidationError) as excinfo:
            nacha_file.reference_code = "OTHER"
        assert excinfo.value.field == "reference_code"
        assert excinfo.value.constraint == "frozen_instance"


class TestValidation:
    @pytest.mark.parametrize("field,value", [
        ("origin_routing_number", "01140153"),
        ("origin_routing_number", "0114015333"),
        ("destination_routing_number", "09100001X"),
        ("origin_name", "N" * 24),
        ("destination_name", "N" * 24),
        ("file_id_modifier", "a"),
        ("file_id_modifier", "AB"),
        ("reference_code", "123456789"),
    ])
    def test_rejects_invalid_header_fields(self, field, value):
        with pytest.raises(FieldValidationError) as excinfo:
            make_file(**{field: value})
        assert excinfo.value.record == "NachaFile"
        assert excinfo.value.field == field

    def test_numeric_file_id_modifier_accepted(self):
        assert make_file(file_id_modifier="7").header()[33] == "7"
