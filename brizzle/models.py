"""
Brizzle Models - Pydantic models for fields, naming and options

Defines the structured values every generator consumes.
Pydantic handles validation, defaults, and immutability.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator


# ═══════════════════════════════════════════════════════════════════════════
# ENUMS
# ═══════════════════════════════════════════════════════════════════════════


class FieldType(str, Enum):
    STRING = "string"
    TEXT = "text"
    INTEGER = "integer"
    INT = "int"
    BIGINT = "bigint"
    BOOLEAN = "boolean"
    BOOL = "bool"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"
    DATE = "date"
    FLOAT = "float"
    DECIMAL = "decimal"
    JSON = "json"
    UUID = "uuid"
    ENUM = "enum"
    REFERENCES = "references"


class Dialect(str, Enum):
    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"


# Types accepted after the field name in `name:type`
VALID_FIELD_TYPES: tuple[str, ...] = tuple(
    t.value for t in FieldType if t not in (FieldType.ENUM, FieldType.REFERENCES)
)

BOOLEAN_TYPES = (FieldType.BOOLEAN, FieldType.BOOL)
INTEGER_TYPES = (FieldType.INTEGER, FieldType.INT, FieldType.BIGINT)
DATETIME_TYPES = (FieldType.DATETIME, FieldType.TIMESTAMP)


# ═══════════════════════════════════════════════════════════════════════════
# FIELD
# ═══════════════════════════════════════════════════════════════════════════


class ModelField(BaseModel):
    """One column parsed from a `name:type:modifier` token"""

    name: str
    type: FieldType = FieldType.STRING
    nullable: bool = False
    unique: bool = False
    is_enum: bool = False
    enum_values: list[str] | None = None
    is_reference: bool = False
    reference_to: str | None = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_auxiliary_data(self) -> "ModelField":
        """Enum and reference fields must carry their values/target"""
        if self.type == FieldType.ENUM and not self.enum_values:
            raise ValueError(f'Enum field "{self.name}" requires values.')
        if self.type == FieldType.REFERENCES and not self.reference_to:
            raise ValueError(f'Reference field "{self.name}" requires a target model.')
        return self


# ═══════════════════════════════════════════════════════════════════════════
# NAMING CONTEXT
# ═══════════════════════════════════════════════════════════════════════════


class ModelContext(BaseModel):
    """Every name variant derived from the model name"""

    name: str
    singular_name: str
    plural_name: str
    pascal_name: str
    pascal_plural: str
    camel_name: str
    camel_plural: str
    snake_name: str
    snake_plural: str
    kebab_name: str
    kebab_plural: str
    table_name: str

    model_config = {"frozen": True}


# ═══════════════════════════════════════════════════════════════════════════
# OPTIONS
# ═══════════════════════════════════════════════════════════════════════════


class GeneratorOptions(BaseModel):
    """Per-invocation command flags"""

    force: bool = False
    dry_run: bool = Field(False, alias="dryRun")
    uuid: bool = False
    no_timestamps: bool = Field(False, alias="noTimestamps")

    model_config = {"populate_by_name": True, "frozen": True}
