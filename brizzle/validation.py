"""
Field DSL validation and parsing

Turns `name[?][:type[?][:modifier]]` tokens into ModelField values.
"""

from __future__ import annotations

import re

from brizzle.models import VALID_FIELD_TYPES, FieldType, ModelField


# SQL reserved words that break generated column names
SQL_RESERVED_WORDS = frozenset([
    # SQL keywords
    "select", "from", "where", "insert", "update", "delete", "drop", "create",
    "alter", "index", "table", "column", "database", "schema", "and", "or",
    "not", "null", "true", "false", "order", "by", "group", "having", "limit",
    "offset", "join", "left", "right", "inner", "outer", "on", "as", "in",
    "between", "like", "is", "case", "when", "then", "else", "end", "exists",
    "distinct", "all", "any", "union", "intersect", "except", "primary",
    "foreign", "key", "references", "unique", "default", "check", "constraint",
    # Type names
    "int", "integer", "float", "double", "decimal", "numeric", "boolean",
    "bool", "text", "varchar", "char", "date", "time", "timestamp", "datetime",
])

RESERVED_MODEL_NAMES = frozenset(["model", "schema", "db", "database", "table"])

# Column every generated table already has
PRIMARY_KEY_COLUMN = "id"

# Added to every table unless --no-timestamps
TIMESTAMP_COLUMNS = ("createdAt", "updatedAt")

MODEL_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9]*$")
FIELD_NAME_RE = re.compile(r"^[a-z][a-zA-Z0-9]*$")


def validate_model_name(name: str) -> None:
    """Raise ValueError unless name is usable as a model name."""
    if not name:
        raise ValueError("Model name is required")
    if not MODEL_NAME_RE.match(name):
        raise ValueError(
            f'Invalid model name "{name}". Must start with a letter and contain only letters and numbers.'
        )
    if name.lower() in RESERVED_MODEL_NAMES:
        raise ValueError(f'"{name}" is a reserved word and cannot be used as a model name.')


def validate_field_definition(field_def: str) -> None:
    """Raise ValueError if a field token is malformed."""
    parts = field_def.split(":")
    name = parts[0].removesuffix("?")
    field_type = (parts[1] if len(parts) > 1 and parts[1] else "string").removesuffix("?")

    if not name:
        raise ValueError(f'Invalid field definition "{field_def}". Field name is required.')
    if not FIELD_NAME_RE.match(name):
        raise ValueError(
            f'Invalid field name "{name}". Must be camelCase (start with lowercase letter).'
        )
    if name.lower() in SQL_RESERVED_WORDS:
        raise ValueError(
            f'Field name "{name}" is a SQL reserved word. '
            f'Consider renaming to "{name}Value" or "{name}Field".'
        )
    if name == PRIMARY_KEY_COLUMN:
        raise ValueError(f'Field name "{name}" is generated automatically and cannot be redefined.')

    if field_type not in ("references", "enum", "unique") and field_type not in VALID_FIELD_TYPES:
        raise ValueError(
            f'Invalid field type "{field_type}". Valid types: {", ".join(VALID_FIELD_TYPES)}, enum'
        )

    if field_type == "enum":
        raw_values = parts[2] if len(parts) > 2 else ""
        enum_values = [v.strip() for v in raw_values.split(",") if v.strip()]
        if not enum_values or raw_values == "unique":
            raise ValueError(
                f'Enum field "{name}" requires values. Example: {name}:enum:draft,published,archived'
            )
    if field_type == "references":
        target = parts[2] if len(parts) > 2 else ""
        if not target or target == "unique":
            raise ValueError(
                f'Reference field "{name}" requires a target model. Example: {name}:references:user'
            )


def parse_field(field_def: str) -> ModelField:
    """Parse one validated token into a ModelField."""
    validate_field_definition(field_def)

    parts = field_def.split(":")
    raw_name = parts[0]
    raw_type = parts[1] if len(parts) > 1 and parts[1] else "string"

    nullable = raw_name.endswith("?") or raw_type.endswith("?")
    name = raw_name.removesuffix("?")
    field_type = raw_type.removesuffix("?")

    # `email:unique` is shorthand for a unique string
    if field_type == "unique":
        return ModelField(name=name, type=FieldType.STRING, nullable=nullable, unique=True)

    if field_type == "enum":
        enum_values = [v.strip() for v in parts[2].split(",") if v.strip()]
        return ModelField(
            name=name,
            type=FieldType.ENUM,
            nullable=nullable,
            unique="unique" in parts[3:],
            is_enum=True,
            enum_values=enum_values,
        )

    if field_type == "references":
        return ModelField(
            name=name,
            type=FieldType.REFERENCES,
            nullable=nullable,
            unique="unique" in parts[3:],
            is_reference=True,
            reference_to=parts[2],
        )

    return ModelField(
        name=name,
        type=FieldType(field_type),
        nullable=nullable,
        unique="unique" in parts[2:],
    )


def parse_fields(field_args: list[str], no_timestamps: bool = False) -> list[ModelField]:
    """Parse all tokens, rejecting duplicate names and timestamp columns."""
    fields: list[ModelField] = []
    seen: set[str] = set()

    for field_def in field_args:
        field = parse_field(field_def)
        if not no_timestamps and field.name in TIMESTAMP_COLUMNS:
            raise ValueError(
                f'Field name "{field.name}" is generated automatically. '
                "Use --no-timestamps to define it yourself."
            )
        if field.name in seen:
            raise ValueError(f'Duplicate field "{field.name}".')
        seen.add(field.name)
        fields.append(field)

    return fields
