#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
from pathlib import Path

from dsn_dictionary.config import Settings
from dsn_dictionary.etl.sources import WorkbookTableSource
from dsn_dictionary.exceptions import DsnDictionaryError
from dsn_dictionary.logging_config import configure_logging
from dsn_dictionary.reporting.writer import WorkbookWriter
from dsn_dictionary.services.builder import DictionaryBuildService


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build the DSN data dictionary and nomenclature tables from a reference workbook."
    )
    parser.add_argument("--input-xlsx", type=Path, required=True, help="Workbook holding the four source sheets")
    parser.add_argument("--output-xlsx", type=Path, help="Destination workbook (defaults to the input workbook)")
    parser.add_argument("--config", type=Path, help="Settings YAML (defaults to config/settings.yaml)")
    return parser


def main() -> int:
    args = _build_parser().parse_args()
    config = Settings.load(args.config)
    configure_logging(config)

    try:
        with WorkbookTableSource(args.input_xlsx) as source:
            result = DictionaryBuildService(source, config).build()
    except DsnDictionaryError as e:
        raise SystemExit(f"Build failed: {e}")

    output = WorkbookWriter(config.output).write(result, args.output_xlsx or args.input_xlsx)
    print(json.dumps({"output": str(output), **result.stats}, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
