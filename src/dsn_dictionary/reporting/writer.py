from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd
from openpyxl import Workbook, load_workbook

from dsn_dictionary.config import OutputSettings, settings
from dsn_dictionary.data.dto import BuildResult


def to_frames(result: BuildResult) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Dictionary and nomenclature tables as DataFrames (column headers from the result)."""
    dictionary = pd.DataFrame(
        [row.as_row() for row in result.dictionary], columns=result.dictionary_columns, dtype=object
    )
    nomenclatures = pd.DataFrame(
        [row.as_row() for row in result.nomenclatures], columns=result.nomenclature_columns, dtype=object
    )
    return dictionary, nomenclatures


class WorkbookWriter:
    """
    Writes the two output tables into a workbook, replacing any previous
    output sheets. Values only; styling belongs to whoever opens the file.
    """

    def __init__(self, output: Optional[OutputSettings] = None):
        self.output = output or settings.output

    def write(self, result: BuildResult, path: Path) -> Path:
        path = Path(path)
        if path.exists():
            wb = load_workbook(path)
        else:
            wb = Workbook()
            # Remove default sheet
            wb.remove(wb.active)

        self._replace_sheet(wb, self.output.dictionary_table, result.dictionary_table())
        self._replace_sheet(wb, self.output.nomenclature_table, result.nomenclature_table())

        path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(path)
        return path

    @staticmethod
    def _replace_sheet(wb: Workbook, title: str, table: List[List[str]]) -> None:
        index = None
        if title in wb.sheetnames:
            index = wb.sheetnames.index(title)
            wb.remove(wb[title])
        ws = wb.create_sheet(title, index)
        for row in table:
            ws.append(row)
        ws.freeze_panes = "A2"
