from pathlib import Path

import pytest

from dsn_dictionary.etl.sources import InMemoryTableSource


def _usage_grid(rows, declaration_types=("Mensuelle", "Fin de contrat", "Arrêt de travail")):
    """
    Usage matrix in the sheet layout: title row, declaration types on row 1
    from column 4, a sub-header row, then one row per rubrique (key in column 2).
    """
    grid = [
        ["Matrice des usages", None, None, None, None],
        ["Bloc", "Libellé", "Rubrique", "Nom", *declaration_types],
        [None, None, None, None, *["Nature"] * len(declaration_types)],
    ]
    for key, codes in rows:
        grid.append([key.split(".")[0] if key else "", "", key, "", *codes])
    return grid


@pytest.fixture
def fields_grid():
    return [
        ["Block Id", "Id", "DataType Id", "Name", "Description", "Comment"],
        ["S21.G00.06", "001", "T_SIREN", "SIREN", "Numéro SIREN de l'entreprise", ""],
        ["S21.G00.40", "007", "T_NATURE", "Nature du contrat", "", "Voir nomenclature"],
        ["S21.G00.51", "013", "T_MONTANT", "Montant", "Montant de la rémunération", ""],
        ["S21.G00.99", "001", "T_UNKNOWN", "Rubrique orpheline", "", ""],
    ]


@pytest.fixture
def data_types_grid():
    return [
        ["Id", "Name", "Nature", "Lg Min", "Lg Max", "Values"],
        ["T_SIREN", "Siren", "N", 9, 9, None],
        ["T_NATURE", "Nature de contrat", "X", 2, 2, "01=CDI;02=CDD;03=Intérim"],
        ["T_MONTANT", "", "D", 4.0, None, "02"],
    ]


@pytest.fixture
def blocks_grid():
    return [
        ["Id", "Name"],
        ["S21.G00.06", "Entreprise"],
        ["S21.G00.40", "Contrat"],
        ["S21.G00.51", "Rémunération"],
    ]


@pytest.fixture
def usage_table():
    return _usage_grid(
        [
            ("S21.G00.06.001", ["O", "O", "O"]),
            ("", ["", "", ""]),
            ("S21.G00.40.007", ["C", "", "C"]),
            ("S21.G00.51.013", ["O", "", "C"]),
        ]
    )


@pytest.fixture
def source(fields_grid, data_types_grid, blocks_grid, usage_table):
    return InMemoryTableSource(
        {
            "Fields": fields_grid,
            "Data Types": data_types_grid,
            "Blocks": blocks_grid,
            "Usage": usage_table,
        }
    )


@pytest.fixture
def write_workbook(tmp_path):
    from openpyxl import Workbook

    def _write(tables, name="reference.xlsx") -> Path:
        wb = Workbook()
        wb.remove(wb.active)
        for title, grid in tables.items():
            ws = wb.create_sheet(title)
            for row in grid:
                ws.append(list(row))
        path = tmp_path / name
        wb.save(path)
        return path

    return _write


@pytest.fixture
def make_usage_grid():
    return _usage_grid
