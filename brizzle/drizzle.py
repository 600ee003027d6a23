"""
Drizzle dialect tables - abstract field types to column constructors

One lookup table per dialect plus the id, foreign key and timestamp columns
and the import symbols a table needs.
"""

from __future__ import annotations

import re

from brizzle.models import Dialect, FieldType, GeneratorOptions, ModelField


# ═══════════════════════════════════════════════════════════════════════════
# TYPE TABLES
# ═══════════════════════════════════════════════════════════════════════════


SQLITE_TYPE_MAP: dict[str, str] = {
    "string": "text",
    "text": "text",
    "integer": "integer",
    "int": "integer",
    "bigint": "integer",  # SQLite has one integer storage class
    "boolean": 'integer({ mode: "boolean" })',
    "bool": 'integer({ mode: "boolean" })',
    "datetime": 'integer({ mode: "timestamp" })',
    "timestamp": 'integer({ mode: "timestamp" })',
    "date": 'integer({ mode: "timestamp" })',
    "float": "real",
    "decimal": "text",  # no native decimal
    "json": "text",
    "uuid": "text",
}

POSTGRESQL_TYPE_MAP: dict[str, str] = {
    "string": "text",
    "text": "text",
    "integer": "integer",
    "int": "integer",
    "bigint": "bigint",
    "boolean": "boolean",
    "bool": "boolean",
    "datetime": "timestamp",
    "timestamp": "timestamp",
    "date": "date",
    "float": "doublePrecision",
    "decimal": "numeric",
    "json": "jsonb",
    "uuid": "uuid",
}

MYSQL_TYPE_MAP: dict[str, str] = {
    "string": "varchar",
    "text": "text",
    "integer": "int",
    "int": "int",
    "bigint": "bigint",
    "boolean": "boolean",
    "bool": "boolean",
    "datetime": "datetime",
    "timestamp": "timestamp",
    "date": "date",
    "float": "double",
    "decimal": "decimal",
    "json": "json",
    "uuid": "varchar",  # varchar(36)
}

TYPE_MAPS: dict[Dialect, dict[str, str]] = {
    Dialect.SQLITE: SQLITE_TYPE_MAP,
    Dialect.POSTGRESQL: POSTGRESQL_TYPE_MAP,
    Dialect.MYSQL: MYSQL_TYPE_MAP,
}

VARCHAR_LENGTH = 255
UUID_LENGTH = 36


def drizzle_type(field: ModelField, dialect: Dialect = Dialect.SQLITE) -> str:
    """Column constructor for a field, `text` when the type is unmapped."""
    return TYPE_MAPS[Dialect(dialect)].get(field.type.value, "text")


def get_drizzle_import(dialect: Dialect) -> str:
    return {
        Dialect.POSTGRESQL: "drizzle-orm/pg-core",
        Dialect.MYSQL: "drizzle-orm/mysql-core",
    }.get(Dialect(dialect), "drizzle-orm/sqlite-core")


def get_table_function(dialect: Dialect) -> str:
    return {
        Dialect.POSTGRESQL: "pgTable",
        Dialect.MYSQL: "mysqlTable",
    }.get(Dialect(dialect), "sqliteTable")


def get_enum_function(dialect: Dialect) -> str | None:
    """Enum constructor import; SQLite enums are plain text columns."""
    return {
        Dialect.POSTGRESQL: "pgEnum",
        Dialect.MYSQL: "mysqlEnum",
    }.get(Dialect(dialect))


# ═══════════════════════════════════════════════════════════════════════════
# GENERATED COLUMNS
# ═══════════════════════════════════════════════════════════════════════════


def get_id_column(dialect: Dialect, use_uuid: bool = False) -> str:
    """Primary key column: auto-increment, or a UUID default."""
    dialect = Dialect(dialect)

    if use_uuid:
        if dialect == Dialect.POSTGRESQL:
            return 'id: uuid("id").primaryKey().defaultRandom()'
        if dialect == Dialect.MYSQL:
            return (
                f'id: varchar("id", {{ length: {UUID_LENGTH} }})'
                ".primaryKey().$defaultFn(() => crypto.randomUUID())"
            )
        return 'id: text("id").primaryKey().$defaultFn(() => crypto.randomUUID())'

    if dialect == Dialect.POSTGRESQL:
        return 'id: serial("id").primaryKey()'
    if dialect == Dialect.MYSQL:
        return 'id: int("id").primaryKey().autoincrement()'
    return 'id: integer("id").primaryKey({ autoIncrement: true })'


def get_id_import(dialect: Dialect, use_uuid: bool = False) -> str:
    """Import symbol the id column (and foreign keys to it) needs."""
    dialect = Dialect(dialect)
    if use_uuid:
        return {Dialect.POSTGRESQL: "uuid", Dialect.MYSQL: "varchar"}.get(dialect, "text")
    return {Dialect.POSTGRESQL: "serial", Dialect.MYSQL: "int"}.get(dialect, "integer")


def get_reference_column(column_name: str, dialect: Dialect, use_uuid: bool = False) -> str:
    """Foreign key constructor matching the referenced table's id type."""
    dialect = Dialect(dialect)

    if use_uuid:
        if dialect == Dialect.POSTGRESQL:
            return f'uuid("{column_name}")'
        if dialect == Dialect.MYSQL:
            return f'varchar("{column_name}", {{ length: {UUID_LENGTH} }})'
        return f'text("{column_name}")'

    if dialect == Dialect.MYSQL:
        return f'int("{column_name}")'
    return f'integer("{column_name}")'


def get_reference_import(dialect: Dialect, use_uuid: bool = False) -> str:
    dialect = Dialect(dialect)
    if use_uuid:
        return get_id_import(dialect, use_uuid=True)
    return "int" if dialect == Dialect.MYSQL else "integer"


def get_timestamp_columns(dialect: Dialect, no_timestamps: bool = False) -> str | None:
    """createdAt/updatedAt column text, or None when disabled."""
    if no_timestamps:
        return None

    dialect = Dialect(dialect)
    if dialect == Dialect.POSTGRESQL:
        return """createdAt: timestamp("created_at")
    .notNull()
    .defaultNow(),
  updatedAt: timestamp("updated_at")
    .notNull()
    .defaultNow()"""
    if dialect == Dialect.MYSQL:
        return """createdAt: datetime("created_at")
    .notNull()
    .$defaultFn(() => new Date()),
  updatedAt: datetime("updated_at")
    .notNull()
    .$defaultFn(() => new Date())"""
    return """createdAt: integer("created_at", { mode: "timestamp" })
    .notNull()
    .$defaultFn(() => new Date()),
  updatedAt: integer("updated_at", { mode: "timestamp" })
    .notNull()
    .$defaultFn(() => new Date())"""


def get_timestamp_import(dialect: Dialect) -> str:
    return {
        Dialect.POSTGRESQL: "timestamp",
        Dialect.MYSQL: "datetime",
    }.get(Dialect(dialect), "integer")


# ═══════════════════════════════════════════════════════════════════════════
# IMPORTS
# ═══════════════════════════════════════════════════════════════════════════


def get_required_imports(
    fields: list[ModelField],
    dialect: Dialect,
    options: GeneratorOptions | None = None,
) -> list[str]:
    """Import symbols for a table, in first-use order without duplicates."""
    options = options or GeneratorOptions()
    dialect = Dialect(dialect)
    types: dict[str, None] = {}

    types[get_table_function(dialect)] = None
    types[get_id_import(dialect, options.uuid)] = None

    if not options.no_timestamps:
        types[get_timestamp_import(dialect)] = None

    has_enums = any(f.is_enum for f in fields)
    enum_function = get_enum_function(dialect)
    if has_enums and enum_function:
        types[enum_function] = None

    for field in fields:
        if field.is_enum:
            continue
        if field.is_reference:
            types[get_reference_import(dialect, options.uuid)] = None
            continue
        # Base constructor name, before any option object
        types[drizzle_type(field, dialect).split("(")[0]] = None

    if dialect == Dialect.SQLITE and has_enums:
        types["text"] = None

    return list(types)


IMPORT_RE = re.compile(r"""import\s*\{([^}]+)\}\s*from\s*["']drizzle-orm/[^"']+["'];?""")


def extract_imports_from_schema(content: str) -> list[str]:
    """Symbols imported from drizzle-orm/* in a schema file."""
    match = IMPORT_RE.search(content)
    if not match:
        return []
    return [s.strip() for s in match.group(1).split(",") if s.strip()]


def update_schema_imports(content: str, new_imports: list[str], dialect: Dialect) -> str:
    """Merge symbols into the drizzle import line, or prepend one."""
    merged = list(dict.fromkeys(extract_imports_from_schema(content) + list(new_imports)))
    import_line = f'import {{ {", ".join(merged)} }} from "{get_drizzle_import(dialect)}";'

    if IMPORT_RE.search(content):
        return IMPORT_RE.sub(lambda _: import_line, content, count=1)
    return import_line + "\n" + content
