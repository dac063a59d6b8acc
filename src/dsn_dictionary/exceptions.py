from typing import Iterable, Optional


class DsnDictionaryError(Exception):
    """Base exception for DSN dictionary errors."""
    pass

class ConfigError(DsnDictionaryError):
    """Configuration loading specific errors."""
    pass

class DataSourceError(DsnDictionaryError):
    """Source table reading specific errors."""
    pass

class MissingTableError(DataSourceError):
    """A required named table is absent from its source."""

    def __init__(self, table_name: str, available: Optional[Iterable[str]] = None):
        self.table_name = table_name
        self.available = sorted(available or [])
        detail = f"Missing table: '{table_name}'"
        if self.available:
            detail += f" (available: {', '.join(self.available)})"
        super().__init__(detail)
