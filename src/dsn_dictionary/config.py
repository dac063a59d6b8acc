from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dsn_dictionary.exceptions import ConfigError


class TableSettings(BaseModel):
    # Names of the four source tables (sheet names in a workbook).
    fields: str = "Fields"
    data_types: str = "Data Types"
    blocks: str = "Blocks"
    usage: str = "Usage"


class UsageLayoutSettings(BaseModel):
    """
    Positional layout of the usage matrix sheet (0-based indexes).
    Bump `version` together with the offsets when the sheet layout changes.
    """
    version: str = "v1"
    header_row: int = 1
    first_code_column: int = 4
    first_data_row: int = 3
    key_column: int = 2

    @field_validator("header_row", "first_code_column", "first_data_row", "key_column")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("usage layout offsets must be >= 0")
        return value


class ObligationSettings(BaseModel):
    obligatory_code: str = "O"
    conditional_code: str = "C"
    obligatory_label: str = "Oui"
    conditional_label: str = "Conditionnel"
    optional_label: str = "Non"


class LoaderSettings(BaseModel):
    duplicate_headers: Literal["first", "last"] = "last"  # last = legacy behaviour
    strip_values: bool = True


class OutputSettings(BaseModel):
    dictionary_table: str = "Dictionnaire"
    nomenclature_table: str = "Nomenclatures"
    dictionary_columns: list[str] = [
        "Bloc",
        "Rubrique",
        "Nom du champ",
        "Type",
        "Longueur",
        "Obligatoire",
        "Nomenclature",
        "Description",
        "Commentaire",
    ]
    nomenclature_columns: list[str] = ["Nomenclature", "Code", "Libellé", "Commentaire"]


class LoggingSettings(BaseModel):
    level: str = "INFO"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_nested_delimiter="__", env_file=".env", extra="ignore")
    tables: TableSettings = TableSettings()
    usage_layout: UsageLayoutSettings = UsageLayoutSettings()
    obligation: ObligationSettings = ObligationSettings()
    loader: LoaderSettings = LoaderSettings()
    output: OutputSettings = OutputSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        # Load from default path if exists
        default_path = Path("config/settings.yaml")
        path = config_path or (default_path if default_path.exists() else None)

        if not path:
            return cls()

        try:
            with open(path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read settings file {path}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigError(f"Settings file {path} must contain a mapping")

        try:
            return cls(**config_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings in {path}: {e}") from e

settings = Settings.load()
