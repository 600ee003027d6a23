"""Tests for schema file composition: create, append and replace."""

from __future__ import annotations

import pytest

from brizzle.models import Dialect, GeneratorOptions
from brizzle.schema import (
    append_to_schema,
    generate_enum_definitions,
    generate_field_definition,
    generate_schema_content,
    generate_table_definition,
    model_exists_in_schema,
    replace_in_schema,
)
from brizzle.strings import create_model_context
from brizzle.validation import parse_fields


DEFAULTS = GeneratorOptions()


def _schema(name: str, field_args: list[str], dialect: Dialect = Dialect.SQLITE, **options) -> str:
    return generate_schema_content(
        create_model_context(name), parse_fields(field_args), dialect, GeneratorOptions(**options)
    )


# ---------------------------------------------------------------------------
# Columns
# ---------------------------------------------------------------------------


def test_sqlite_enum_column() -> None:
    ctx = create_model_context("post")
    [field] = parse_fields(["status:enum:draft,published,archived"])

    line = generate_field_definition(ctx, field, Dialect.SQLITE, DEFAULTS)

    assert 'text("status", { enum: ["draft", "published", "archived"] })' in line
    assert line == '  status: text("status", { enum: ["draft", "published", "archived"] }).notNull(),'


def test_mysql_enum_column_is_inline() -> None:
    ctx = create_model_context("post")
    [field] = parse_fields(["status:enum:draft,published"])

    line = generate_field_definition(ctx, field, Dialect.MYSQL, DEFAULTS)

    assert line == '  status: mysqlEnum("status", ["draft", "published"]).notNull(),'


def test_postgresql_enum_column_references_named_enum() -> None:
    ctx = create_model_context("post")
    fields = parse_fields(["status:enum:draft,published"])

    assert generate_field_definition(ctx, fields[0], Dialect.POSTGRESQL, DEFAULTS) == (
        '  status: postStatusEnum("status").notNull(),'
    )
    assert generate_enum_definitions(ctx, fields, Dialect.POSTGRESQL) == [
        'export const postStatusEnum = pgEnum("post_status", ["draft", "published"]);'
    ]
    assert generate_enum_definitions(ctx, fields, Dialect.SQLITE) == []


def test_enum_values_are_escaped() -> None:
    ctx = create_model_context("post")
    [field] = parse_fields(['label:enum:say"hi,plain'])

    line = generate_field_definition(ctx, field, Dialect.MYSQL, DEFAULTS)

    assert '["say\\"hi", "plain"]' in line


def test_column_modifiers() -> None:
    ctx = create_model_context("user")
    nullable, unique = parse_fields(["bio:text?", "email:string:unique"])

    assert generate_field_definition(ctx, nullable, Dialect.SQLITE, DEFAULTS) == '  bio: text("bio"),'
    assert generate_field_definition(ctx, unique, Dialect.SQLITE, DEFAULTS) == (
        '  email: text("email").notNull().unique(),'
    )


def test_column_names_are_snake_case() -> None:
    ctx = create_model_context("user")
    [field] = parse_fields(["firstName:string"])

    assert generate_field_definition(ctx, field, Dialect.POSTGRESQL, DEFAULTS) == (
        '  firstName: text("first_name").notNull(),'
    )


def test_sqlite_boolean_keeps_mode_option() -> None:
    ctx = create_model_context("post")
    [field] = parse_fields(["published:boolean"])

    assert generate_field_definition(ctx, field, Dialect.SQLITE, DEFAULTS) == (
        '  published: integer("published", { mode: "boolean" }).notNull(),'
    )


def test_mysql_varchar_lengths() -> None:
    ctx = create_model_context("token")
    title, value = parse_fields(["title", "value:uuid"])

    assert generate_field_definition(ctx, title, Dialect.MYSQL, DEFAULTS) == (
        '  title: varchar("title", { length: 255 }).notNull(),'
    )
    assert generate_field_definition(ctx, value, Dialect.MYSQL, DEFAULTS) == (
        '  value: varchar("value", { length: 36 }).notNull(),'
    )


def test_reference_column() -> None:
    ctx = create_model_context("post")
    [field] = parse_fields(["authorId:references:user"])

    assert generate_field_definition(ctx, field, Dialect.SQLITE, DEFAULTS) == (
        '  authorId: integer("author_id").references(() => users.id).notNull(),'
    )
    assert generate_field_definition(ctx, field, Dialect.POSTGRESQL, GeneratorOptions(uuid=True)) == (
        '  authorId: uuid("author_id").references(() => users.id).notNull(),'
    )


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


def test_table_definition_layout() -> None:
    ctx = create_model_context("post")
    fields = parse_fields(["title"])

    table = generate_table_definition(ctx, fields, Dialect.SQLITE, GeneratorOptions(no_timestamps=True))

    assert table == (
        'export const posts = sqliteTable("posts", {\n'
        '  id: integer("id").primaryKey({ autoIncrement: true }),\n'
        '  title: text("title").notNull(),\n'
        "});"
    )


def test_table_definition_with_timestamps() -> None:
    ctx = create_model_context("post")

    table = generate_table_definition(ctx, [], Dialect.POSTGRESQL, DEFAULTS)

    assert 'createdAt: timestamp("created_at")' in table
    assert 'updatedAt: timestamp("updated_at")' in table
    assert table.endswith(".defaultNow(),\n});")


@pytest.mark.parametrize("dialect", list(Dialect))
def test_uuid_table_has_no_auto_increment(dialect: Dialect) -> None:
    content = _schema("session", ["token"], dialect, uuid=True)

    assert "autoIncrement" not in content
    assert "autoincrement" not in content
    assert "serial" not in content


def test_new_schema_content() -> None:
    content = _schema("post", ["title", "status:enum:draft,published,archived"])

    assert content.startswith('import { sqliteTable, integer, text } from "drizzle-orm/sqlite-core";\n\n')
    assert 'export const posts = sqliteTable("posts", {' in content
    assert 'status: text("status", { enum: ["draft", "published", "archived"] }).notNull(),' in content
    assert content.endswith("});\n")


def test_new_postgresql_schema_puts_enums_before_table() -> None:
    content = _schema("post", ["status:enum:draft,published"], Dialect.POSTGRESQL)

    assert content.index("export const postStatusEnum") < content.index("export const posts")
    assert "pgEnum" in content.splitlines()[0]


# ---------------------------------------------------------------------------
# Existing files
# ---------------------------------------------------------------------------


def test_model_exists_in_schema() -> None:
    content = _schema("post", ["title"])

    assert model_exists_in_schema(content, "posts") is True
    assert model_exists_in_schema(content, "post") is False
    assert model_exists_in_schema(content, "users") is False


def test_append_preserves_existing_table_and_merges_imports() -> None:
    existing = _schema("user", ["name"])
    ctx = create_model_context("post")
    fields = parse_fields(["title", "views:float"])

    content = append_to_schema(existing, ctx, fields, Dialect.SQLITE, DEFAULTS)

    users_block = existing.split("\n\n", 1)[1]
    assert users_block in content
    assert content.count("import {") == 1
    assert content.splitlines()[0] == (
        'import { sqliteTable, integer, text, real } from "drizzle-orm/sqlite-core";'
    )
    assert content.index('sqliteTable("users"') < content.index('sqliteTable("posts"')


def test_append_to_file_without_trailing_newline() -> None:
    existing = _schema("user", ["name"]).rstrip("\n")
    ctx = create_model_context("post")

    content = append_to_schema(existing, ctx, [], Dialect.SQLITE, DEFAULTS)

    assert "});\n\nexport const posts" in content


def test_replace_swaps_table_in_place() -> None:
    existing = append_to_schema(
        _schema("post", ["title"]),
        create_model_context("user"),
        parse_fields(["name"]),
        Dialect.SQLITE,
        DEFAULTS,
    )
    ctx = create_model_context("post")

    content = replace_in_schema(existing, ctx, parse_fields(["title", "body:text"]), Dialect.SQLITE, DEFAULTS)

    assert content.count('sqliteTable("posts"') == 1
    assert 'body: text("body").notNull(),' in content
    assert content.index('sqliteTable("posts"') < content.index('sqliteTable("users"')
    assert 'name: text("name").notNull(),' in content


def test_replace_drops_old_postgresql_enums() -> None:
    existing = _schema("post", ["status:enum:draft,published"], Dialect.POSTGRESQL)
    ctx = create_model_context("post")

    content = replace_in_schema(
        existing, ctx, parse_fields(["status:enum:draft,archived"]), Dialect.POSTGRESQL, DEFAULTS
    )

    assert content.count("export const postStatusEnum") == 1
    assert '["draft", "archived"]' in content
    assert '["draft", "published"]' not in content


def test_replace_missing_table_raises() -> None:
    ctx = create_model_context("post")

    with pytest.raises(ValueError, match='Table "posts" not found'):
        replace_in_schema(_schema("user", []), ctx, [], Dialect.SQLITE, DEFAULTS)
