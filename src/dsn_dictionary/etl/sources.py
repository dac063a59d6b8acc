"""
Named table sources.

A source maps table names to raw grids (row 0 = header, rows 1..N = data).
The build pipeline receives its source explicitly; nothing here is global.
"""
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Protocol

import pandas as pd
from openpyxl import load_workbook

from dsn_dictionary.exceptions import DataSourceError, MissingTableError

logger = logging.getLogger(__name__)

Grid = List[List[Any]]


class TableSource(Protocol):
    def table_names(self) -> List[str]: ...

    def get_table(self, name: str) -> Grid: ...


def is_blank_row(row: Iterable[Any]) -> bool:
    return all(cell is None or str(cell).strip() == "" for cell in row)


def _trim_trailing_blank_rows(grid: Grid) -> Grid:
    end = len(grid)
    while end > 0 and is_blank_row(grid[end - 1]):
        end -= 1
    return grid[:end]


class InMemoryTableSource:
    """Tables already materialized as grids."""

    def __init__(self, tables: Mapping[str, Grid]):
        self._tables: Dict[str, Grid] = {name: [list(row) for row in grid] for name, grid in tables.items()}

    @classmethod
    def from_records(cls, tables: Mapping[str, List[Mapping[str, Any]]]) -> "InMemoryTableSource":
        grids: Dict[str, Grid] = {}
        for name, records in tables.items():
            header: List[str] = []
            for record in records:
                for key in record:
                    if key not in header:
                        header.append(key)
            grids[name] = [header] + [[record.get(h) for h in header] for record in records]
        return cls(grids)

    @classmethod
    def from_frames(cls, frames: Mapping[str, pd.DataFrame]) -> "InMemoryTableSource":
        grids: Dict[str, Grid] = {}
        for name, df in frames.items():
            body = df.astype(object).where(df.notna(), None).values.tolist()
            grids[name] = [[str(c) for c in df.columns]] + body
        return cls(grids)

    def table_names(self) -> List[str]:
        return list(self._tables)

    def get_table(self, name: str) -> Grid:
        if name not in self._tables:
            raise MissingTableError(name, self._tables)
        return [list(row) for row in self._tables[name]]


class WorkbookTableSource:
    """
    Reads tables from the sheets of an .xlsx workbook (one table per sheet).
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        if not self.path.exists():
            logger.error(f"Workbook not found: {self.path}")
            raise DataSourceError(f"Workbook not found: {self.path}")
        try:
            self._wb = load_workbook(self.path, data_only=True, read_only=True)
        except Exception as e:
            raise DataSourceError(f"Failed to read workbook {self.path}: {e}") from e

    def __enter__(self) -> "WorkbookTableSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._wb.close()

    def table_names(self) -> List[str]:
        return list(self._wb.sheetnames)

    def get_table(self, name: str) -> Grid:
        if name not in self._wb.sheetnames:
            raise MissingTableError(name, self._wb.sheetnames)
        ws = self._wb[name]
        grid = [list(row) for row in ws.iter_rows(values_only=True)]
        return _trim_trailing_blank_rows(grid)
