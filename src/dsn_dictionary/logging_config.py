import logging
from typing import Optional

from dsn_dictionary.config import Settings, settings as default_settings


def configure_logging(config: Optional[Settings] = None) -> None:
    config = config or default_settings
    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    logging.getLogger("openpyxl").setLevel(logging.WARNING)
