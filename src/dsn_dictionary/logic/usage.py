"""
Interpretation of the usage matrix sheet.

The sheet is not a plain header + rows table: declaration-type names sit on
one header row, field keys (rubriques) in one column, and obligation codes
fill the cells to the right, aligned positionally with the header names.
Offsets come from `UsageLayoutSettings`.
"""
import logging
from typing import Any, Dict, List, Optional

from dsn_dictionary.config import ObligationSettings, UsageLayoutSettings, settings
from dsn_dictionary.domain.models import UsageEntry, cell_text
from dsn_dictionary.etl.sources import Grid

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    return cell_text(value).strip()


def declaration_types(grid: Grid, layout: UsageLayoutSettings) -> List[str]:
    if len(grid) <= layout.header_row:
        logger.warning(f"Usage matrix has no header row at index {layout.header_row} (layout {layout.version})")
        return []
    return [_text(v) for v in grid[layout.header_row][layout.first_code_column:]]


def build_usage_map(
    grid: Grid,
    layout: Optional[UsageLayoutSettings] = None,
    obligation: Optional[ObligationSettings] = None,
) -> Dict[str, UsageEntry]:
    layout = layout or settings.usage_layout
    obligation = obligation or settings.obligation
    obligatory = obligation.obligatory_code
    conditional = obligation.conditional_code

    names = declaration_types(grid, layout)
    usage: Dict[str, UsageEntry] = {}

    for row_idx in range(layout.first_data_row, len(grid)):
        row = grid[row_idx]
        key = _text(row[layout.key_column]) if layout.key_column < len(row) else ""
        if not key:
            # section separator
            continue

        codes = [_text(v) for v in row[layout.first_code_column:]]
        details = {name: code for name, code in zip(names, codes) if name}

        if key in usage:
            logger.warning(f"Duplicate rubrique '{key}' in usage matrix at row {row_idx}; later row wins")
        usage[key] = UsageEntry(
            field_key=key,
            is_obligatory=obligatory in codes,
            is_conditional=conditional in codes,
            details=details,
        )

    logger.info(f"Usage matrix: {len(usage)} rubriques across {len([n for n in names if n])} declaration types")
    return usage


def usage_for(usage: Dict[str, UsageEntry], field_key: str) -> UsageEntry:
    return usage.get(field_key) or UsageEntry.absent(field_key)


def obligation_label(entry: UsageEntry, obligation: Optional[ObligationSettings] = None) -> str:
    """Obligatory wins over conditional when both flags are set."""
    obligation = obligation or settings.obligation
    if entry.is_obligatory:
        return obligation.obligatory_label
    if entry.is_conditional:
        return obligation.conditional_label
    return obligation.optional_label
