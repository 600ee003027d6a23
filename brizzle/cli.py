"""
Brizzle CLI - Rails-like generators for Next.js + Drizzle

Usage:
    brizzle model <name> [fields...]
    brizzle scaffold <name> [fields...]
    brizzle destroy <type> <name>
    brizzle config
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich import print as rprint
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from brizzle import console
from brizzle.config import detect_project_config, write_config_file
from brizzle.generator import GenerationResult, ScaffoldGenerator
from brizzle.models import GeneratorOptions

app = typer.Typer(
    name="brizzle",
    help="Rails-like generators for Next.js + Drizzle",
    add_completion=False,
)

FIELDS_HELP = "Field definitions, e.g. title:string body:text? status:enum:draft,published"

ForceOption = typer.Option(False, "--force", "-f", help="Overwrite existing files")
DryRunOption = typer.Option(False, "--dry-run", "-n", help="Preview changes without writing files")
UuidOption = typer.Option(False, "--uuid", "-u", help="Use UUID for primary key instead of auto-increment")
TimestampsOption = typer.Option(
    True, "--timestamps/--no-timestamps", help="Add createdAt/updatedAt fields"
)
ProjectOption = typer.Option(
    None,
    "--project", "-p",
    help="Project directory (defaults to the current directory)",
    file_okay=False,
    resolve_path=True,
)


def _options(
    force: bool = False,
    dry_run: bool = False,
    uuid: bool = False,
    timestamps: bool = True,
) -> GeneratorOptions:
    return GeneratorOptions(
        force=force,
        dry_run=dry_run,
        uuid=uuid,
        no_timestamps=not timestamps,
    )


def _run(project: Optional[Path], options: GeneratorOptions, command: str, *args) -> None:
    """Run one generator command; any error exits with status 1."""
    try:
        generator = ScaffoldGenerator(detect_project_config(project), options)
        result = getattr(generator, command)(*args)
    except Exception as e:
        console.error(str(e))
        raise typer.Exit(1)

    if options.dry_run:
        _show_preview(result)


@app.command()
def model(
    name: str = typer.Argument(..., help="Model name"),
    fields: Optional[List[str]] = typer.Argument(None, help=FIELDS_HELP),
    force: bool = ForceOption,
    dry_run: bool = DryRunOption,
    uuid: bool = UuidOption,
    timestamps: bool = TimestampsOption,
    project: Optional[Path] = ProjectOption,
) -> None:
    """
    Generate a Drizzle schema model.

    Examples:
        brizzle model user name:string email:string:unique
        brizzle model order total:decimal status:enum:pending,paid,shipped
        brizzle model token value:uuid --uuid --no-timestamps
    """
    _run(project, _options(force, dry_run, uuid, timestamps), "generate_model", name, fields or [])


@app.command()
def actions(
    name: str = typer.Argument(..., help="Model name"),
    force: bool = ForceOption,
    dry_run: bool = DryRunOption,
    uuid: bool = typer.Option(False, "--uuid", "-u", help="Model uses UUID primary keys"),
    timestamps: bool = TimestampsOption,
    project: Optional[Path] = ProjectOption,
) -> None:
    """
    Generate server actions for an existing model.

    Examples:
        brizzle actions user
        brizzle actions post --force
    """
    _run(project, _options(force, dry_run, uuid, timestamps), "generate_actions", name)


@app.command()
def resource(
    name: str = typer.Argument(..., help="Model name"),
    fields: Optional[List[str]] = typer.Argument(None, help=FIELDS_HELP),
    force: bool = ForceOption,
    dry_run: bool = DryRunOption,
    uuid: bool = UuidOption,
    timestamps: bool = TimestampsOption,
    project: Optional[Path] = ProjectOption,
) -> None:
    """
    Generate model and actions (no views).

    Examples:
        brizzle resource session token:uuid userId:references:user --uuid
    """
    _run(project, _options(force, dry_run, uuid, timestamps), "generate_resource", name, fields or [])


@app.command()
def scaffold(
    name: str = typer.Argument(..., help="Model name"),
    fields: Optional[List[str]] = typer.Argument(None, help=FIELDS_HELP),
    force: bool = ForceOption,
    dry_run: bool = DryRunOption,
    uuid: bool = UuidOption,
    timestamps: bool = TimestampsOption,
    project: Optional[Path] = ProjectOption,
) -> None:
    """
    Generate model, actions, and pages (full CRUD).

    Examples:
        brizzle scaffold post title:string body:text published:boolean
        brizzle scaffold product name:string price:float description:text?
    """
    _run(project, _options(force, dry_run, uuid, timestamps), "generate_scaffold", name, fields or [])


@app.command()
def api(
    name: str = typer.Argument(..., help="Model name"),
    fields: Optional[List[str]] = typer.Argument(None, help=FIELDS_HELP),
    force: bool = ForceOption,
    dry_run: bool = DryRunOption,
    uuid: bool = UuidOption,
    timestamps: bool = TimestampsOption,
    project: Optional[Path] = ProjectOption,
) -> None:
    """
    Generate model and API route handlers (REST).

    Examples:
        brizzle api product name:string price:float
        brizzle api webhook url:string secret:string:unique --uuid
    """
    _run(project, _options(force, dry_run, uuid, timestamps), "generate_api", name, fields or [])


@app.command()
def destroy(
    kind: str = typer.Argument(..., metavar="TYPE", help="scaffold, resource, or api"),
    name: str = typer.Argument(..., help="Model name"),
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Preview changes without deleting files"),
    project: Optional[Path] = ProjectOption,
) -> None:
    """
    Remove generated files (scaffold, resource, api).

    Examples:
        brizzle destroy scaffold post
        brizzle d api product --dry-run
    """
    _run(project, _options(dry_run=dry_run), "destroy", kind, name)


app.command("d", hidden=True)(destroy)


@app.command()
def config(
    init: bool = typer.Option(False, "--init", help="Write the detected configuration to brizzle.yaml"),
    force: bool = ForceOption,
    project: Optional[Path] = ProjectOption,
) -> None:
    """Show detected project configuration."""
    try:
        project_config = detect_project_config(project)
    except Exception as e:
        console.error(str(e))
        raise typer.Exit(1)

    table = Table(title="Detected project configuration")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    structure = "src/ (e.g., src/app/, src/db/)" if project_config.use_src else "root (e.g., app/, db/)"
    table.add_row("Project structure", structure)
    table.add_row("Path alias", f"{project_config.alias}/")
    table.add_row("App directory", f"{project_config.app_path}/")
    table.add_row("DB directory", f"{project_config.db_path}/")
    table.add_row("Database dialect", project_config.dialect.value)
    table.add_row("DB import", project_config.db_import)
    table.add_row("Schema import", project_config.schema_import)

    rprint(table)

    if init:
        try:
            path = write_config_file(project_config, force=force)
        except Exception as e:
            console.error(str(e))
            raise typer.Exit(1)
        console.success(f"Created {path}")


@app.command()
def version() -> None:
    """Show version."""
    from brizzle import __version__
    rprint(f"brizzle {__version__}")


def _show_preview(result: GenerationResult) -> None:
    """Show what would be written or removed."""
    tree = Tree("[bold]Dry run[/bold] - nothing was written")

    if result.written:
        files = tree.add("[blue]Files[/blue]")
        for f in result.written:
            files.add(f"{escape(f.path)} [dim]({f.action})[/dim]")

    if result.removed:
        removed = tree.add("[red]Removed[/red]")
        for path in result.removed:
            removed.add(escape(path))

    rprint(tree)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
