"""
Schema composer - Drizzle table source for new and existing schema files

Three modes, picked by the caller from the schema file state:
create a new file, append a table, or replace a table in place.
Content outside the affected table is left untouched.
"""

from __future__ import annotations

import re

from brizzle.drizzle import (
    MYSQL_TYPE_MAP,
    UUID_LENGTH,
    VARCHAR_LENGTH,
    drizzle_type,
    get_drizzle_import,
    get_id_column,
    get_reference_column,
    get_required_imports,
    get_table_function,
    get_timestamp_columns,
    update_schema_imports,
)
from brizzle.models import Dialect, FieldType, GeneratorOptions, ModelContext, ModelField
from brizzle.strings import escape_string, pluralize, to_camel_case, to_pascal_case, to_snake_case


# ═══════════════════════════════════════════════════════════════════════════
# COLUMNS
# ═══════════════════════════════════════════════════════════════════════════


def enum_name(ctx: ModelContext, field: ModelField) -> str:
    """Exported name of a PostgreSQL enum, e.g. postStatusEnum."""
    return f"{ctx.camel_name}{to_pascal_case(field.name)}Enum"


def _enum_values(field: ModelField) -> str:
    return ", ".join(f'"{escape_string(v)}"' for v in field.enum_values or [])


def field_modifiers(field: ModelField) -> str:
    modifiers = ""
    if not field.nullable:
        modifiers += ".notNull()"
    if field.unique:
        modifiers += ".unique()"
    return modifiers


def generate_enum_field(ctx: ModelContext, field: ModelField, column_name: str, dialect: Dialect) -> str:
    modifiers = field_modifiers(field)
    dialect = Dialect(dialect)

    if dialect == Dialect.POSTGRESQL:
        return f'  {field.name}: {enum_name(ctx, field)}("{column_name}"){modifiers},'
    if dialect == Dialect.MYSQL:
        return f'  {field.name}: mysqlEnum("{column_name}", [{_enum_values(field)}]){modifiers},'
    return f'  {field.name}: text("{column_name}", {{ enum: [{_enum_values(field)}] }}){modifiers},'


def generate_field_definition(
    ctx: ModelContext,
    field: ModelField,
    dialect: Dialect,
    options: GeneratorOptions,
) -> str:
    """One column line of a table body."""
    column_name = to_snake_case(field.name)
    modifiers = field_modifiers(field)

    if field.is_enum:
        return generate_enum_field(ctx, field, column_name, dialect)

    if field.is_reference:
        target = to_camel_case(pluralize(field.reference_to or ""))
        column = get_reference_column(column_name, dialect, options.uuid)
        return f"  {field.name}: {column}.references(() => {target}.id){modifiers},"

    type_def = drizzle_type(field, dialect)

    if Dialect(dialect) == Dialect.MYSQL and type_def == MYSQL_TYPE_MAP["string"]:
        length = UUID_LENGTH if field.type == FieldType.UUID else VARCHAR_LENGTH
        return f'  {field.name}: varchar("{column_name}", {{ length: {length} }}){modifiers},'

    # Types with an option object, e.g. integer({ mode: "boolean" })
    if "(" in type_def:
        type_name, _, rest = type_def.partition("(")
        type_options = rest.rsplit(")", 1)[0]
        return f'  {field.name}: {type_name}("{column_name}", {type_options}){modifiers},'

    return f'  {field.name}: {type_def}("{column_name}"){modifiers},'


# ═══════════════════════════════════════════════════════════════════════════
# DEFINITIONS
# ═══════════════════════════════════════════════════════════════════════════


def generate_enum_definitions(ctx: ModelContext, fields: list[ModelField], dialect: Dialect) -> list[str]:
    """Standalone pgEnum exports; other dialects declare enums inline."""
    if Dialect(dialect) != Dialect.POSTGRESQL:
        return []

    return [
        f'export const {enum_name(ctx, field)} = pgEnum('
        f'"{ctx.snake_name}_{to_snake_case(field.name)}", [{_enum_values(field)}]);'
        for field in fields
        if field.is_enum and field.enum_values
    ]


def generate_table_definition(
    ctx: ModelContext,
    fields: list[ModelField],
    dialect: Dialect,
    options: GeneratorOptions,
) -> str:
    lines = [f"  {get_id_column(dialect, options.uuid)},"]
    lines.extend(generate_field_definition(ctx, f, dialect, options) for f in fields)

    timestamp_columns = get_timestamp_columns(dialect, options.no_timestamps)
    if timestamp_columns:
        lines.append(f"  {timestamp_columns},")

    body = "\n".join(lines)
    return f'export const {ctx.camel_plural} = {get_table_function(dialect)}("{ctx.table_name}", {{\n{body}\n}});'


def generate_definitions(
    ctx: ModelContext,
    fields: list[ModelField],
    dialect: Dialect,
    options: GeneratorOptions,
) -> str:
    """Enum exports followed by the table, separated by blank lines."""
    blocks = generate_enum_definitions(ctx, fields, dialect)
    blocks.append(generate_table_definition(ctx, fields, dialect, options))
    return "\n\n".join(blocks)


# ═══════════════════════════════════════════════════════════════════════════
# FILE MODES
# ═══════════════════════════════════════════════════════════════════════════


def _table_block_re(table_name: str) -> re.Pattern[str]:
    # From the export line to the first line closing the table call
    return re.compile(
        rf"""^export const \w+\s*=\s*\w+Table\(\s*["']{re.escape(table_name)}["'].*?^[\]}}]\)+;?[ \t]*$""",
        re.MULTILINE | re.DOTALL,
    )


def model_exists_in_schema(content: str, table_name: str) -> bool:
    return re.search(rf"""\w+Table\(\s*["']{re.escape(table_name)}["']""", content) is not None


def generate_schema_content(
    ctx: ModelContext,
    fields: list[ModelField],
    dialect: Dialect,
    options: GeneratorOptions,
) -> str:
    """A complete schema file holding one table."""
    imports = get_required_imports(fields, dialect, options)
    import_line = f'import {{ {", ".join(imports)} }} from "{get_drizzle_import(dialect)}";'
    return f"{import_line}\n\n{generate_definitions(ctx, fields, dialect, options)}\n"


def append_to_schema(
    existing: str,
    ctx: ModelContext,
    fields: list[ModelField],
    dialect: Dialect,
    options: GeneratorOptions,
) -> str:
    """Existing content plus a new table, with the import line merged."""
    separator = "\n" if existing.endswith("\n") else "\n\n"
    content = existing + separator + generate_definitions(ctx, fields, dialect, options) + "\n"
    return update_schema_imports(content, get_required_imports(fields, dialect, options), dialect)


def replace_in_schema(
    existing: str,
    ctx: ModelContext,
    fields: list[ModelField],
    dialect: Dialect,
    options: GeneratorOptions,
) -> str:
    """Swap an existing table (and the enums it uses) for a new definition."""
    block_re = _table_block_re(ctx.table_name)
    match = block_re.search(existing)
    if not match:
        raise ValueError(f'Table "{ctx.table_name}" not found in schema.')

    content = existing
    for old_enum in sorted(set(re.findall(r"(\w+Enum)\(", match.group(0)))):
        content = re.sub(
            rf"^export const {re.escape(old_enum)}\s*=\s*pgEnum\([^\n]*\);[ \t]*\n(?:[ \t]*\n)?",
            "",
            content,
            count=1,
            flags=re.MULTILINE,
        )

    definitions = generate_definitions(ctx, fields, dialect, options)
    content = block_re.sub(lambda _: definitions, content, count=1)
    return update_schema_imports(content, get_required_imports(fields, dialect, options), dialect)
