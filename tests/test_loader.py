import logging

import pytest

from dsn_dictionary.config import LoaderSettings
from dsn_dictionary.domain.models import DataTypeRecord, FieldRecord
from dsn_dictionary.etl.loader import load_models, load_table, records_from_grid
from dsn_dictionary.etl.sources import InMemoryTableSource
from dsn_dictionary.exceptions import MissingTableError


def test_records_from_grid_maps_headers():
    grid = [
        ["Id", "Name"],
        ["S10", "Envoi"],
        ["S20", "Déclaration"],
    ]
    records = records_from_grid(grid)
    assert records == [{"Id": "S10", "Name": "Envoi"}, {"Id": "S20", "Name": "Déclaration"}]


def test_records_from_grid_ragged_and_blank_rows():
    grid = [
        ["Id", "Name", "Comment"],
        ["S10", None],
        [None, "  ", ""],
        ["  S20 ", "Déclaration", "x"],
    ]
    records = records_from_grid(grid)
    # Blank row skipped, missing cells default to "", strings stripped
    assert records == [
        {"Id": "S10", "Name": "", "Comment": ""},
        {"Id": "S20", "Name": "Déclaration", "Comment": "x"},
    ]


def test_records_from_grid_empty_grid():
    assert records_from_grid([]) == []
    assert records_from_grid([["Id", "Name"]]) == []


def test_records_from_grid_ignores_unnamed_columns():
    grid = [["Id", None, "Name"], ["S10", "stray", "Envoi"]]
    assert records_from_grid(grid) == [{"Id": "S10", "Name": "Envoi"}]


@pytest.mark.parametrize("policy,expected", [
    ("last", "second"),
    ("first", "first"),
])
def test_duplicate_headers_policy(policy, expected, caplog):
    grid = [["Id", "Name", "Name"], ["S10", "first", "second"]]
    with caplog.at_level(logging.WARNING):
        records = records_from_grid(grid, LoaderSettings(duplicate_headers=policy))
    assert records[0]["Name"] == expected
    assert "Duplicate header 'Name'" in caplog.text


def test_strip_values_can_be_disabled():
    grid = [["Id"], [" S10 "]]
    records = records_from_grid(grid, LoaderSettings(strip_values=False))
    assert records[0]["Id"] == " S10 "


def test_load_table_missing_raises():
    source = InMemoryTableSource({"Fields": [["Id"]]})
    with pytest.raises(MissingTableError, match="Missing table: 'Blocks'") as excinfo:
        load_table(source, "Blocks")
    assert excinfo.value.table_name == "Blocks"
    assert excinfo.value.available == ["Fields"]


def test_load_models_skips_invalid_rows(caplog):
    source = InMemoryTableSource({
        "Data Types": [
            ["Id", "Name", "Nature", "Lg Min", "Lg Max", "Values"],
            ["T1", "", "N", 1.0, 5.0, None],
            ["", "Sans identifiant", "X", 1, 2, ""],
        ]
    })
    with caplog.at_level(logging.WARNING):
        types = load_models(source, "Data Types", DataTypeRecord)
    assert [t.id for t in types] == ["T1"]
    assert types[0].name == "T1"  # name defaults to id
    assert types[0].length_range == "1-5"
    assert "Skipping invalid row 2" in caplog.text


def test_load_models_keeps_fields_without_id():
    source = InMemoryTableSource({
        "Fields": [
            ["Block Id", "Id", "DataType Id", "Name"],
            ["S21.G00.40", "", "T1", "Sans id"],
        ]
    })
    fields = load_models(source, "Fields", FieldRecord)
    assert len(fields) == 1
    assert fields[0].field_key == "S21.G00.40."
    assert fields[0].description == ""
