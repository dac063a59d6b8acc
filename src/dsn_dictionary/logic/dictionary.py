import logging
from typing import Dict, Iterable, List, Optional, TypeVar

from dsn_dictionary.config import ObligationSettings
from dsn_dictionary.data.dto import DictionaryRow
from dsn_dictionary.domain.models import BlockRecord, DataTypeRecord, FieldRecord, Nomenclature, UsageEntry
from dsn_dictionary.logic.usage import obligation_label, usage_for

logger = logging.getLogger(__name__)

T = TypeVar("T", DataTypeRecord, BlockRecord)


def index_by_id(records: Iterable[T], kind: str) -> Dict[str, T]:
    """First record wins for a repeated id."""
    index: Dict[str, T] = {}
    for record in records:
        if record.id in index:
            logger.warning(f"Duplicate {kind} id '{record.id}'; keeping the first one")
            continue
        index[record.id] = record
    return index


class DictionaryBuilder:
    """
    Joins fields with their data type, block, usage entry and nomenclature.
    Emits exactly one row per field, in field order. Unresolved references
    leave the corresponding columns blank.
    """

    def __init__(
        self,
        data_types: Iterable[DataTypeRecord],
        blocks: Iterable[BlockRecord],
        usage: Dict[str, UsageEntry],
        nomenclatures: Dict[str, Nomenclature],
        obligation: Optional[ObligationSettings] = None,
    ):
        self.data_types = index_by_id(data_types, "data type")
        self.blocks = index_by_id(blocks, "block")
        self.usage = usage
        self.nomenclatures = nomenclatures
        self.obligation = obligation
        self.unresolved_types = 0
        self.unresolved_blocks = 0

    def build(self, fields: Iterable[FieldRecord]) -> List[DictionaryRow]:
        self.unresolved_types = 0
        self.unresolved_blocks = 0
        rows = [self.build_row(f) for f in fields]
        if self.unresolved_types or self.unresolved_blocks:
            logger.warning(
                f"{self.unresolved_types} field(s) with unknown data type, "
                f"{self.unresolved_blocks} field(s) with unknown block"
            )
        return rows

    def build_row(self, field: FieldRecord) -> DictionaryRow:
        data_type = self.data_types.get(field.data_type_id)
        block = self.blocks.get(field.block_id)
        if data_type is None:
            self.unresolved_types += 1
            logger.debug(f"Field {field.field_key}: data type '{field.data_type_id}' not found")
        if block is None:
            self.unresolved_blocks += 1
            logger.debug(f"Field {field.field_key}: block '{field.block_id}' not found")

        entry = usage_for(self.usage, field.field_key)
        has_nomenclature = data_type is not None and data_type.id in self.nomenclatures

        return DictionaryRow(
            block=f"{field.block_id} - {block.name if block else ''}",
            field_key=field.field_key,
            name=field.name,
            nature=data_type.nature if data_type else "",
            length=data_type.length_range if data_type else "",
            obligation=obligation_label(entry, self.obligation),
            nomenclature=data_type.id if has_nomenclature else "",
            description=field.description,
            comment=field.comment,
        )
