import logging
from typing import Optional

from dsn_dictionary.config import Settings, settings as default_settings
from dsn_dictionary.data.dto import BuildResult
from dsn_dictionary.domain.models import BlockRecord, DataTypeRecord, FieldRecord
from dsn_dictionary.etl.loader import load_grid, load_models
from dsn_dictionary.etl.sources import TableSource
from dsn_dictionary.logic.dictionary import DictionaryBuilder
from dsn_dictionary.logic.nomenclatures import extract_nomenclatures, flatten_nomenclatures
from dsn_dictionary.logic.usage import build_usage_map

logger = logging.getLogger(__name__)


class DictionaryBuildService:
    """
    Batch pipeline: load the four source tables, extract nomenclatures and
    the usage map, then join everything into the two output tables.
    All tables are read before any extraction, so a missing table aborts
    the build (MissingTableError) before anything is produced.
    """

    def __init__(self, source: TableSource, config: Optional[Settings] = None):
        self.source = source
        self.config = config or default_settings

    def build(self) -> BuildResult:
        tables = self.config.tables
        options = self.config.loader

        fields = load_models(self.source, tables.fields, FieldRecord, options)
        data_types = load_models(self.source, tables.data_types, DataTypeRecord, options)
        blocks = load_models(self.source, tables.blocks, BlockRecord, options)
        usage_grid = load_grid(self.source, tables.usage)

        nomenclatures = extract_nomenclatures(data_types)
        usage = build_usage_map(usage_grid, self.config.usage_layout, self.config.obligation)

        builder = DictionaryBuilder(data_types, blocks, usage, nomenclatures, self.config.obligation)
        dictionary = builder.build(fields)
        nomenclature_rows = flatten_nomenclatures(nomenclatures)

        stats = {
            "fields": len(fields),
            "data_types": len(data_types),
            "blocks": len(blocks),
            "usage_entries": len(usage),
            "nomenclatures": len(nomenclatures),
            "unresolved_types": builder.unresolved_types,
            "unresolved_blocks": builder.unresolved_blocks,
        }
        logger.info(
            f"Dictionary built: {len(dictionary)} rows, {len(nomenclature_rows)} nomenclature rows",
            extra={"stats": stats},
        )
        return BuildResult(
            dictionary=dictionary,
            nomenclatures=nomenclature_rows,
            dictionary_columns=list(self.config.output.dictionary_columns),
            nomenclature_columns=list(self.config.output.nomenclature_columns),
            usage=usage,
            nomenclature_map=nomenclatures,
            stats=stats,
        )
