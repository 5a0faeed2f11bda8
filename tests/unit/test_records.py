from __future__ import annotations

import dataclasses

import pytest

from core.records import COLUMNS, Record, validate_column


def test_as_row_uses_column_labels_in_order() -> None:
    record = Record(id="1", name="Ann", email="ann@example.com", age="33", city="Oslo")
    row = record.as_row()
    assert list(row) == list(COLUMNS)
    assert row["Email"] == "ann@example.com"


def test_from_row_fills_missing_and_none_with_empty_string() -> None:
    record = Record.from_row({"ID": 5, "Name": None, "Extra": "ignored"})
    assert record == Record(id="5")


def test_records_are_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        Record().name = "x"  # type: ignore[misc]


def test_get_unknown_column() -> None:
    with pytest.raises(KeyError):
        Record().get("Phone")
    with pytest.raises(ValueError):
        validate_column("Phone")
