import pandas as pd
import pytest

from dsn_dictionary.etl.sources import InMemoryTableSource, WorkbookTableSource
from dsn_dictionary.exceptions import DataSourceError, MissingTableError


def test_in_memory_source_returns_copies():
    source = InMemoryTableSource({"Blocks": [["Id", "Name"], ["S10", "Envoi"]]})
    grid = source.get_table("Blocks")
    grid[1][1] = "changed"
    assert source.get_table("Blocks")[1][1] == "Envoi"
    assert source.table_names() == ["Blocks"]


def test_from_records_builds_union_header():
    source = InMemoryTableSource.from_records({
        "Blocks": [{"Id": "S10", "Name": "Envoi"}, {"Id": "S20", "Comment": "x"}],
    })
    assert source.get_table("Blocks") == [
        ["Id", "Name", "Comment"],
        ["S10", "Envoi", None],
        ["S20", None, "x"],
    ]


def test_from_frames_turns_nan_into_none():
    df = pd.DataFrame({"Id": ["T1", "T2"], "Lg Max": [5, None]})
    grid = InMemoryTableSource.from_frames({"Data Types": df}).get_table("Data Types")
    assert grid[0] == ["Id", "Lg Max"]
    assert grid[1][0] == "T1"
    assert grid[2][1] is None


def test_in_memory_source_missing_table():
    source = InMemoryTableSource({})
    with pytest.raises(MissingTableError):
        source.get_table("Usage")


def test_workbook_source_reads_sheets(write_workbook):
    path = write_workbook({
        "Blocks": [["Id", "Name"], ["S10", "Envoi"], [None, None]],
        "Usage": [["x"]],
    })
    with WorkbookTableSource(path) as source:
        assert source.table_names() == ["Blocks", "Usage"]
        # Trailing blank rows are trimmed
        assert source.get_table("Blocks") == [["Id", "Name"], ["S10", "Envoi"]]


def test_workbook_source_missing_sheet(write_workbook):
    path = write_workbook({"Blocks": [["Id", "Name"]]})
    with WorkbookTableSource(path) as source:
        with pytest.raises(MissingTableError, match="Fields"):
            source.get_table("Fields")


def test_workbook_source_missing_file(tmp_path):
    with pytest.raises(DataSourceError, match="Workbook not found"):
        WorkbookTableSource(tmp_path / "absent.xlsx")
