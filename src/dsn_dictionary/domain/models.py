from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def cell_text(value: Any) -> str:
    """Render a spreadsheet cell as text: None -> "", 5.0 -> "5"."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class SourceRecord(BaseModel):
    """
    Base for records read from a source table.
    Fields are populated by header name (alias) or by attribute name.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> str:
        return cell_text(value)


class FieldRecord(SourceRecord):
    block_id: str = Field(default="", alias="Block Id")
    id: str = Field(default="", alias="Id")
    data_type_id: str = Field(default="", alias="DataType Id")
    name: str = Field(default="", alias="Name")
    description: str = Field(default="", alias="Description")
    comment: str = Field(default="", alias="Comment")

    @property
    def field_key(self) -> str:
        return f"{self.block_id}.{self.id}"


class DataTypeRecord(SourceRecord):
    id: str = Field(alias="Id", min_length=1)
    name: str = Field(default="", alias="Name")
    nature: str = Field(default="", alias="Nature")
    length_min: str = Field(default="", alias="Lg Min")
    length_max: str = Field(default="", alias="Lg Max")
    values: str = Field(default="", alias="Values")

    @model_validator(mode="after")
    def _default_name(self) -> "DataTypeRecord":
        if not self.name:
            # frozen model: bypass __setattr__
            object.__setattr__(self, "name", self.id)
        return self

    @property
    def length_range(self) -> str:
        return f"{self.length_min}-{self.length_max}"


class BlockRecord(SourceRecord):
    id: str = Field(alias="Id", min_length=1)
    name: str = Field(default="", alias="Name")


class CodeValue(BaseModel):
    code: str
    label: str = ""
    comment: str = ""


class Nomenclature(BaseModel):
    id: str
    name: str
    values: list[CodeValue] = Field(default_factory=list)


class UsageEntry(BaseModel):
    """Obligation codes of one field across declaration types."""
    field_key: str
    is_obligatory: bool = False
    is_conditional: bool = False
    details: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def absent(cls, field_key: str) -> "UsageEntry":
        return cls(field_key=field_key)
