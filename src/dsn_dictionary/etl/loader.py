import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import ValidationError

from dsn_dictionary.config import LoaderSettings, settings
from dsn_dictionary.domain.models import SourceRecord, cell_text
from dsn_dictionary.etl.sources import Grid, TableSource, is_blank_row
from dsn_dictionary.exceptions import MissingTableError

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=SourceRecord)


def records_from_grid(grid: Grid, options: Optional[LoaderSettings] = None) -> List[Dict[str, Any]]:
    """
    Turns a header + data grid into one dict per data row, keyed by header name.
    Blank rows are skipped; missing cells become "".
    Duplicate headers follow `options.duplicate_headers` (last wins by default).
    """
    options = options or settings.loader
    if not grid:
        return []

    headers = [cell_text(h).strip() for h in grid[0]]
    columns: Dict[str, int] = {}
    for idx, header in enumerate(headers):
        if not header:
            continue
        if header in columns:
            logger.warning(
                f"Duplicate header '{header}' at column {idx}; keeping the {options.duplicate_headers} one",
                extra={"header": header, "policy": options.duplicate_headers},
            )
            if options.duplicate_headers == "first":
                continue
        columns[header] = idx

    records: List[Dict[str, Any]] = []
    for row in grid[1:]:
        if is_blank_row(row):
            continue
        record: Dict[str, Any] = {}
        for header, idx in columns.items():
            value = row[idx] if idx < len(row) else None
            if value is None:
                value = ""
            elif options.strip_values and isinstance(value, str):
                value = value.strip()
            record[header] = value
        records.append(record)
    return records


def load_grid(source: TableSource, name: str) -> Grid:
    try:
        return source.get_table(name)
    except MissingTableError:
        logger.error(f"Required table '{name}' not found")
        raise


def load_table(source: TableSource, name: str, options: Optional[LoaderSettings] = None) -> List[Dict[str, Any]]:
    records = records_from_grid(load_grid(source, name), options)
    logger.info(f"Loaded table '{name}': {len(records)} records")
    return records


def load_models(
    source: TableSource,
    name: str,
    model: Type[RecordT],
    options: Optional[LoaderSettings] = None,
) -> List[RecordT]:
    """
    Loads a named table into typed records.
    Rows failing validation are logged and skipped.
    """
    parsed: List[RecordT] = []
    for row_num, record in enumerate(load_table(source, name, options), start=1):
        try:
            parsed.append(model.model_validate(record))
        except ValidationError as e:
            logger.warning(f"Skipping invalid row {row_num} in '{name}': {e.error_count()} error(s). Data: {record}")
    return parsed
