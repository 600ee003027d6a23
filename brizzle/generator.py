"""
Brizzle Generator - Rails-style scaffolding for Next.js + Drizzle

Writes the Drizzle schema, server actions, CRUD pages and REST route
handlers for one model, and removes generated directories again.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from jinja2 import Environment, FileSystemLoader, select_autoescape

from brizzle import console
from brizzle.config import ProjectConfig
from brizzle.forms import display_value, form_field, form_value
from brizzle.models import Dialect, GeneratorOptions, ModelContext, ModelField
from brizzle.schema import (
    append_to_schema,
    generate_schema_content,
    model_exists_in_schema,
    replace_in_schema,
)
from brizzle.strings import create_model_context, to_pascal_case
from brizzle.validation import parse_fields, validate_model_name


# ═══════════════════════════════════════════════════════════════════════════
# GENERATED FILE TRACKING
# ═══════════════════════════════════════════════════════════════════════════


@dataclass
class GeneratedFile:
    """Represents a generated (or skipped) file."""

    path: str  # Relative to the project root
    content: str
    action: str  # create, force, update or skip


@dataclass
class GenerationResult:
    """Everything one command wrote or removed."""

    files: list[GeneratedFile] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    @property
    def written(self) -> list[GeneratedFile]:
        return [f for f in self.files if f.action != "skip"]


# ═══════════════════════════════════════════════════════════════════════════
# JINJA ENVIRONMENT SETUP
# ═══════════════════════════════════════════════════════════════════════════


def create_jinja_env(templates_dir: Path) -> Environment:
    """Create Jinja2 environment for the TypeScript templates."""
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


# Primary key handling for [id] pages
NUMERIC_ID_LOOKUP = """const numericId = Number(id);

  if (isNaN(numericId)) {{
    notFound();
  }}

  const {camel} = await get{pascal}(numericId);"""

UUID_ID_LOOKUP = "const {camel} = await get{pascal}(id);"

PRIMARY_BUTTON = (
    "rounded-lg bg-gray-900 px-4 py-2 text-sm font-medium text-white transition-colors hover:bg-gray-800"
)
SECONDARY_BUTTON = (
    "rounded-lg border border-gray-200 px-4 py-2 text-sm font-medium text-gray-600 "
    "transition-colors hover:bg-gray-50"
)


# ═══════════════════════════════════════════════════════════════════════════
# SCAFFOLD GENERATOR
# ═══════════════════════════════════════════════════════════════════════════


class ScaffoldGenerator:
    """
    Generates Drizzle models, server actions, pages and API routes.

    Every command is one linear pass: validate, parse, derive names,
    compose text, write. Writes are not transactional.
    """

    def __init__(
        self,
        config: ProjectConfig,
        options: GeneratorOptions | None = None,
        templates_dir: Path | None = None,
    ):
        """
        Initialize generator for one project.

        Args:
            config: Detected or loaded project configuration
            options: Command flags (force, dry run, uuid, timestamps)
            templates_dir: Path to Jinja2 templates. Defaults to package templates.
        """
        if templates_dir is None:
            templates_dir = Path(__file__).parent / "templates"

        self.config = config
        self.options = options or GeneratorOptions()
        self.env = create_jinja_env(templates_dir)
        self.result = GenerationResult()

    @property
    def dialect(self) -> Dialect:
        return self.config.dialect

    @property
    def prefix(self) -> str:
        return "\\[dry-run] " if self.options.dry_run else ""

    def _create_context(self, ctx: ModelContext) -> dict[str, Any]:
        """Create template rendering context."""
        timestamps = not self.options.no_timestamps
        return {
            "ctx": ctx,
            "table": ctx.camel_plural,
            "db_import": self.config.db_import,
            "schema_import": self.config.schema_import,
            "id_type": "string" if self.options.uuid else "number",
            "uuid": self.options.uuid,
            # MySQL has no RETURNING clause
            "returning": self.dialect != Dialect.MYSQL,
            "order_column": "createdAt" if timestamps else "id",
            "generated_columns": '"id" | "createdAt" | "updatedAt"' if timestamps else '"id"',
            "update_values": "{ ...data, updatedAt: new Date() }" if timestamps else "data",
        }

    def _render_template(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a Jinja2 template."""
        template = self.env.get_template(template_path)
        return template.render(**context)

    def _write_file(self, relative_path: str, content: str, overwrite: bool = False) -> GeneratedFile:
        """
        Write a generated file and track it.

        Existing files are skipped unless --force is given or the caller
        is updating a file it merged itself (overwrite).
        """
        full_path = self.config.root / relative_path

        if not full_path.exists():
            action = "create"
        elif overwrite:
            action = "update"
        elif self.options.force:
            action = "force"
        else:
            action = "skip"

        console.file_action(action, relative_path, self.options.dry_run)

        if action != "skip" and not self.options.dry_run:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_text(content)

        generated = GeneratedFile(path=relative_path, content=content, action=action)
        self.result.files.append(generated)
        return generated

    def _delete_directory(self, relative_path: str) -> None:
        """Remove a generated directory tree."""
        full_path = self.config.root / relative_path

        if not full_path.exists():
            console.file_action("missing", relative_path, self.options.dry_run)
            return

        console.file_action("remove", relative_path, self.options.dry_run)
        if not self.options.dry_run:
            shutil.rmtree(full_path)
        self.result.removed.append(relative_path)

    def _app_file(self, ctx: ModelContext, *parts: str) -> str:
        return "/".join([self.config.app_path, ctx.kebab_plural, *parts])

    # ═══════════════════════════════════════════════════════════════════════
    # MODEL
    # ═══════════════════════════════════════════════════════════════════════

    def generate_model(self, name: str, field_args: list[str]) -> GenerationResult:
        """Add (or with --force, replace) the model's table in the schema file."""
        validate_model_name(name)

        ctx = create_model_context(name)
        fields = parse_fields(field_args, self.options.no_timestamps)
        schema_path = self.config.schema_file
        relative_path = f"{self.config.db_path}/schema.ts"

        if not schema_path.exists():
            content = generate_schema_content(ctx, fields, self.dialect, self.options)
            self._write_file(relative_path, content)
            return self.result

        existing = schema_path.read_text()
        if model_exists_in_schema(existing, ctx.table_name):
            if not self.options.force:
                raise ValueError(
                    f'Model "{ctx.pascal_name}" already exists in schema. Use --force to regenerate.'
                )
            content = replace_in_schema(existing, ctx, fields, self.dialect, self.options)
        else:
            content = append_to_schema(existing, ctx, fields, self.dialect, self.options)

        self._write_file(relative_path, content, overwrite=True)
        return self.result

    # ═══════════════════════════════════════════════════════════════════════
    # ACTIONS
    # ═══════════════════════════════════════════════════════════════════════

    def generate_actions(self, name: str) -> GenerationResult:
        """Server actions: list, get, create, update, delete."""
        validate_model_name(name)

        ctx = create_model_context(name)
        content = self._render_template("actions.ts.j2", self._create_context(ctx))
        self._write_file(self._app_file(ctx, "actions.ts"), content)
        return self.result

    # ═══════════════════════════════════════════════════════════════════════
    # SCAFFOLD / RESOURCE / API
    # ═══════════════════════════════════════════════════════════════════════

    def generate_scaffold(self, name: str, field_args: list[str]) -> GenerationResult:
        """Model, actions and the four CRUD pages."""
        validate_model_name(name)

        ctx = create_model_context(name)
        fields = parse_fields(field_args, self.options.no_timestamps)

        console.info(f"\n{self.prefix}Scaffolding {ctx.pascal_name}...\n")

        self.generate_model(ctx.singular_name, field_args)
        self.generate_actions(ctx.singular_name)
        self.generate_pages(ctx, fields)

        console.next_steps(
            "Run 'pnpm db:push' to update the database",
            f"Run 'pnpm dev' and visit /{ctx.kebab_plural}",
        )
        return self.result

    def generate_resource(self, name: str, field_args: list[str]) -> GenerationResult:
        """Model and actions, no pages."""
        validate_model_name(name)

        ctx = create_model_context(name)
        parse_fields(field_args, self.options.no_timestamps)

        console.info(f"\n{self.prefix}Generating resource {ctx.pascal_name}...\n")

        self.generate_model(ctx.singular_name, field_args)
        self.generate_actions(ctx.singular_name)

        console.next_steps(
            "Run 'pnpm db:push' to update the database",
            f"Import actions from '{self._app_file(ctx, 'actions')}'",
        )
        return self.result

    def generate_api(self, name: str, field_args: list[str]) -> GenerationResult:
        """Model and REST route handlers under app/api."""
        validate_model_name(name)

        ctx = create_model_context(name)
        parse_fields(field_args, self.options.no_timestamps)

        console.info(f"\n{self.prefix}Generating API {ctx.pascal_name}...\n")

        self.generate_model(ctx.singular_name, field_args)

        context = self._create_context(ctx)
        base = "/".join([self.config.app_path, "api", ctx.kebab_plural])
        self._write_file(f"{base}/route.ts", self._render_template("api/route.ts.j2", context))
        self._write_file(f"{base}/[id]/route.ts", self._render_template("api/id_route.ts.j2", context))

        console.next_steps(
            "Run 'pnpm db:push' to update the database",
            f"API available at /api/{ctx.kebab_plural}",
        )
        return self.result

    # ═══════════════════════════════════════════════════════════════════════
    # DESTROY
    # ═══════════════════════════════════════════════════════════════════════

    def destroy(self, kind: str, name: str) -> GenerationResult:
        """
        Remove generated files for a scaffold, resource or api.

        The schema file is never modified; the table definition has to be
        removed by hand.
        """
        builders: dict[str, tuple[str, Callable[[ModelContext], str]]] = {
            "scaffold": ("scaffold", lambda c: f"{self.config.app_path}/{c.kebab_plural}"),
            "resource": ("resource", lambda c: f"{self.config.app_path}/{c.kebab_plural}"),
            "api": ("API", lambda c: f"{self.config.app_path}/api/{c.kebab_plural}"),
        }
        if kind not in builders:
            raise ValueError(f'Unknown type "{kind}". Use: scaffold, resource, or api')

        validate_model_name(name)
        ctx = create_model_context(name)
        label, build_path = builders[kind]

        console.info(f"\n{self.prefix}Destroying {label} {ctx.pascal_name}...\n")

        self._delete_directory(build_path(ctx))

        console.warning(f"\nNote: Schema in {self.config.db_path}/schema.ts was not modified.")
        console.info("      Remove the table definition manually if needed.")
        return self.result

    # ═══════════════════════════════════════════════════════════════════════
    # PAGES
    # ═══════════════════════════════════════════════════════════════════════

    def generate_pages(self, ctx: ModelContext, fields: list[ModelField]) -> GenerationResult:
        """List, new, show and edit pages."""
        self._write_file(self._app_file(ctx, "page.tsx"), self._generate_index_page(ctx, fields))
        self._write_file(self._app_file(ctx, "new", "page.tsx"), self._generate_new_page(ctx, fields))
        self._write_file(self._app_file(ctx, "[id]", "page.tsx"), self._generate_show_page(ctx, fields))
        self._write_file(
            self._app_file(ctx, "[id]", "edit", "page.tsx"), self._generate_edit_page(ctx, fields)
        )
        return self.result

    def _id_lookup(self, ctx: ModelContext) -> str:
        template = UUID_ID_LOOKUP if self.options.uuid else NUMERIC_ID_LOOKUP
        return template.format(camel=ctx.camel_name, pascal=ctx.pascal_name)

    def _form_values(self, fields: list[ModelField]) -> str:
        return "\n".join(f"      {f.name}: {form_value(f, self.options.uuid)}," for f in fields)

    def _form_fields(self, ctx: ModelContext, fields: list[ModelField], with_default: bool = False) -> str:
        return "\n\n".join(form_field(f, ctx.camel_name, with_default) for f in fields)

    def _generate_index_page(self, ctx: ModelContext, fields: list[ModelField]) -> str:
        """List page with edit/delete per row."""
        name, plural, item, items, path = (
            ctx.pascal_name, ctx.pascal_plural, ctx.camel_name, ctx.camel_plural, ctx.kebab_plural,
        )
        label = display_value(fields[0], item) if fields else f"{{{item}.id}}"

        return f"""import Link from "next/link";
import {{ get{plural}, delete{name} }} from "./actions";

export default async function {plural}Page() {{
  const {items} = await get{plural}();

  return (
    <div className="mx-auto max-w-3xl px-6 py-12">
      <div className="mb-10 flex items-center justify-between">
        <h1 className="text-2xl font-semibold text-gray-900">{plural}</h1>
        <Link
          href="/{path}/new"
          className="{PRIMARY_BUTTON}"
        >
          New {name}
        </Link>
      </div>

      {{{items}.length === 0 ? (
        <p className="text-gray-500">No {ctx.plural_name} yet.</p>
      ) : (
        <div className="divide-y divide-gray-100">
          {{{items}.map(({item}) => (
            <div
              key={{{item}.id}}
              className="flex items-center justify-between py-4"
            >
              <Link href={{`/{path}/${{{item}.id}}`}} className="font-medium text-gray-900 hover:text-gray-600">
                {label}
              </Link>
              <div className="flex gap-4 text-sm">
                <Link
                  href={{`/{path}/${{{item}.id}}/edit`}}
                  className="text-gray-500 hover:text-gray-900"
                >
                  Edit
                </Link>
                <form
                  action={{async () => {{
                    "use server";
                    await delete{name}({item}.id);
                  }}}}
                >
                  <button type="submit" className="text-gray-500 hover:text-red-600">
                    Delete
                  </button>
                </form>
              </div>
            </div>
          ))}}
        </div>
      )}}
    </div>
  );
}}
"""

    def _generate_new_page(self, ctx: ModelContext, fields: list[ModelField]) -> str:
        """Create form posting to a server action."""
        name, path = ctx.pascal_name, ctx.kebab_plural

        return f"""import {{ redirect }} from "next/navigation";
import Link from "next/link";
import {{ create{name} }} from "../actions";

export default function New{name}Page() {{
  async function handleCreate(formData: FormData) {{
    "use server";

    await create{name}({{
{self._form_values(fields)}
    }});

    redirect("/{path}");
  }}

  return (
    <div className="mx-auto max-w-xl px-6 py-12">
      <h1 className="mb-8 text-2xl font-semibold text-gray-900">New {name}</h1>

      <form action={{handleCreate}} className="space-y-5">
{self._form_fields(ctx, fields)}

        <div className="flex gap-3 pt-4">
          <button
            type="submit"
            className="{PRIMARY_BUTTON}"
          >
            Create {name}
          </button>
          <Link
            href="/{path}"
            className="{SECONDARY_BUTTON}"
          >
            Cancel
          </Link>
        </div>
      </form>
    </div>
  );
}}
"""

    def _generate_show_page(self, ctx: ModelContext, fields: list[ModelField]) -> str:
        """Detail page listing every field."""
        name, item, path = ctx.pascal_name, ctx.camel_name, ctx.kebab_plural

        rows = [
            f"""        <div className="py-3">
          <dt className="text-sm text-gray-500">{to_pascal_case(f.name)}</dt>
          <dd className="mt-1 text-gray-900">{display_value(f, item)}</dd>
        </div>"""
            for f in fields
        ]
        if not self.options.no_timestamps:
            rows.append(f"""        <div className="py-3">
          <dt className="text-sm text-gray-500">Created At</dt>
          <dd className="mt-1 text-gray-900">{{{item}.createdAt.toLocaleString()}}</dd>
        </div>""")
        rows_text = "\n".join(rows)

        return f"""import {{ notFound }} from "next/navigation";
import Link from "next/link";
import {{ get{name} }} from "../actions";

export default async function {name}Page({{
  params,
}}: {{
  params: Promise<{{ id: string }}>;
}}) {{
  const {{ id }} = await params;
  {self._id_lookup(ctx)}

  if (!{item}) {{
    notFound();
  }}

  return (
    <div className="mx-auto max-w-xl px-6 py-12">
      <div className="mb-8 flex items-center justify-between">
        <h1 className="text-2xl font-semibold text-gray-900">{name}</h1>
        <div className="flex gap-3">
          <Link
            href={{`/{path}/${{{item}.id}}/edit`}}
            className="{PRIMARY_BUTTON}"
          >
            Edit
          </Link>
          <Link
            href="/{path}"
            className="{SECONDARY_BUTTON}"
          >
            Back
          </Link>
        </div>
      </div>

      <dl className="divide-y divide-gray-100">
{rows_text}
      </dl>
    </div>
  );
}}
"""

    def _generate_edit_page(self, ctx: ModelContext, fields: list[ModelField]) -> str:
        """Edit form prefilled from the record."""
        name, item, path = ctx.pascal_name, ctx.camel_name, ctx.kebab_plural
        update_id = "id" if self.options.uuid else "numericId"

        return f"""import {{ notFound, redirect }} from "next/navigation";
import Link from "next/link";
import {{ get{name}, update{name} }} from "../../actions";

export default async function Edit{name}Page({{
  params,
}}: {{
  params: Promise<{{ id: string }}>;
}}) {{
  const {{ id }} = await params;
  {self._id_lookup(ctx)}

  if (!{item}) {{
    notFound();
  }}

  async function handleUpdate(formData: FormData) {{
    "use server";

    await update{name}({update_id}, {{
{self._form_values(fields)}
    }});

    redirect("/{path}");
  }}

  return (
    <div className="mx-auto max-w-xl px-6 py-12">
      <h1 className="mb-8 text-2xl font-semibold text-gray-900">Edit {name}</h1>

      <form action={{handleUpdate}} className="space-y-5">
{self._form_fields(ctx, fields, with_default=True)}

        <div className="flex gap-3 pt-4">
          <button
            type="submit"
            className="{PRIMARY_BUTTON}"
          >
            Update {name}
          </button>
          <Link
            href="/{path}"
            className="{SECONDARY_BUTTON}"
          >
            Cancel
          </Link>
        </div>
      </form>
    </div>
  );
}}
"""
