import logging
from typing import Dict, Iterable, List

from dsn_dictionary.data.dto import NomenclatureRow
from dsn_dictionary.domain.models import CodeValue, DataTypeRecord, Nomenclature

logger = logging.getLogger(__name__)

SEGMENT_SEP = ";"
CODE_SEP = "="


def has_code_list(values: str) -> bool:
    return bool(values) and CODE_SEP in values


def parse_code_list(values: str, type_id: str = "") -> List[CodeValue]:
    """
    Parses "01=Monthly;02=Quarterly" into ordered CodeValues.
    Every ";" segment gives one CodeValue, split on the first "="; a segment
    without one keeps an empty label.
    """
    codes: List[CodeValue] = []
    for segment in values.split(SEGMENT_SEP):
        code, sep, label = segment.partition(CODE_SEP)
        if not sep and segment:
            logger.warning(f"Segment '{segment}' of type '{type_id}' has no '{CODE_SEP}'; label left empty")
        codes.append(CodeValue(code=code, label=label))
    return codes


def extract_nomenclatures(data_types: Iterable[DataTypeRecord]) -> Dict[str, Nomenclature]:
    """Builds one Nomenclature per data type whose Values hold a code list."""
    nomenclatures: Dict[str, Nomenclature] = {}
    for data_type in data_types:
        if not has_code_list(data_type.values):
            continue
        if data_type.id in nomenclatures:
            logger.warning(f"Duplicate data type '{data_type.id}'; keeping the first code list")
            continue
        nomenclatures[data_type.id] = Nomenclature(
            id=data_type.id,
            name=data_type.name,
            values=parse_code_list(data_type.values, data_type.id),
        )
    logger.debug(f"Extracted {len(nomenclatures)} nomenclatures")
    return nomenclatures


def flatten_nomenclatures(nomenclatures: Dict[str, Nomenclature]) -> List[NomenclatureRow]:
    return [
        NomenclatureRow(nomenclature=nomenclature.id, code=value.code, label=value.label, comment=value.comment)
        for nomenclature in nomenclatures.values()
        for value in nomenclature.values
    ]
