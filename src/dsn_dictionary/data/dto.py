from dataclasses import dataclass, field, fields
from typing import Dict, List

from dsn_dictionary.domain.models import Nomenclature, UsageEntry


@dataclass(frozen=True)
class DictionaryRow:
    """One flattened dictionary line per field, in output column order."""
    block: str
    field_key: str
    name: str
    nature: str
    length: str
    obligation: str
    nomenclature: str
    description: str
    comment: str

    def as_row(self) -> List[str]:
        return [getattr(self, f.name) for f in fields(self)]


@dataclass(frozen=True)
class NomenclatureRow:
    nomenclature: str
    code: str
    label: str
    comment: str

    def as_row(self) -> List[str]:
        return [self.nomenclature, self.code, self.label, self.comment]


@dataclass
class BuildResult:
    """Output of a dictionary build, handed to the presentation layer."""
    dictionary: List[DictionaryRow]
    nomenclatures: List[NomenclatureRow]
    dictionary_columns: List[str]
    nomenclature_columns: List[str]
    usage: Dict[str, UsageEntry] = field(default_factory=dict)
    nomenclature_map: Dict[str, Nomenclature] = field(default_factory=dict)
    stats: Dict[str, int] = field(default_factory=dict)

    def dictionary_table(self) -> List[List[str]]:
        return [list(self.dictionary_columns)] + [row.as_row() for row in self.dictionary]

    def nomenclature_table(self) -> List[List[str]]:
        return [list(self.nomenclature_columns)] + [row.as_row() for row in self.nomenclatures]
