from dsn_dictionary.data.dto import BuildResult, DictionaryRow, NomenclatureRow
from dsn_dictionary.domain.models import (
    BlockRecord,
    CodeValue,
    DataTypeRecord,
    FieldRecord,
    Nomenclature,
    UsageEntry,
)
from dsn_dictionary.etl.sources import InMemoryTableSource, TableSource, WorkbookTableSource
from dsn_dictionary.exceptions import ConfigError, DataSourceError, DsnDictionaryError, MissingTableError
from dsn_dictionary.services.builder import DictionaryBuildService

__version__ = "1.0.0"

__all__ = [
    "BlockRecord",
    "BuildResult",
    "CodeValue",
    "ConfigError",
    "DataSourceError",
    "DataTypeRecord",
    "DictionaryBuildService",
    "DictionaryRow",
    "DsnDictionaryError",
    "FieldRecord",
    "InMemoryTableSource",
    "MissingTableError",
    "Nomenclature",
    "NomenclatureRow",
    "TableSource",
    "UsageEntry",
    "WorkbookTableSource",
]
