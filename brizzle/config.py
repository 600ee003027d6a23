"""
Project configuration - where generated files go and which dialect to emit

Detected from the project directory, optionally overridden by brizzle.yaml.
The resulting ProjectConfig is passed explicitly to the generator.
"""

from __future__ import annotations

import json
import re
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from brizzle.models import Dialect


CONFIG_FILE = "brizzle.yaml"

DRIZZLE_CONFIG_FILES = ("drizzle.config.ts", "drizzle.config.js", "drizzle.config.mjs")

POSTGRESQL_PACKAGES = ("pg", "postgres", "@neondatabase/serverless", "@vercel/postgres")
MYSQL_PACKAGES = ("mysql2", "@planetscale/database")

# drizzle-kit accepts a few spellings for each dialect
DIALECT_ALIASES: dict[str, Dialect] = {
    "sqlite": Dialect.SQLITE,
    "turso": Dialect.SQLITE,
    "postgresql": Dialect.POSTGRESQL,
    "postgres": Dialect.POSTGRESQL,
    "pg": Dialect.POSTGRESQL,
    "mysql": Dialect.MYSQL,
}


class ProjectConfig(BaseModel):
    """Paths and dialect for one target project"""

    root: Path = Field(default_factory=Path.cwd)
    use_src: bool = Field(False, alias="useSrc")
    alias: str = "@"
    app_path: str = Field("app", alias="appPath")
    db_path: str = Field("db", alias="dbPath")
    dialect: Dialect = Dialect.SQLITE

    model_config = {"populate_by_name": True}

    @property
    def app_dir(self) -> Path:
        return self.root / self.app_path

    @property
    def db_dir(self) -> Path:
        return self.root / self.db_path

    @property
    def schema_file(self) -> Path:
        return self.db_dir / "schema.ts"

    @property
    def db_import(self) -> str:
        """Module specifier for the db client, e.g. @/db"""
        return f"{self.alias}/{re.sub(r'^src/', '', self.db_path)}"

    @property
    def schema_import(self) -> str:
        return f"{self.db_import}/schema"

    def to_yaml(self) -> str:
        """Export the overridable settings as brizzle.yaml content"""
        data = self.model_dump(by_alias=True, exclude={"root"}, mode="json")
        return yaml.dump(data, default_flow_style=False, sort_keys=False)


# ═══════════════════════════════════════════════════════════════════════════
# DETECTION
# ═══════════════════════════════════════════════════════════════════════════


def _strip_json_comments(text: str) -> str:
    # tsconfig.json allows comments and trailing commas
    text = re.sub(r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/', lambda m: m.group(1) or "", text, flags=re.DOTALL)
    return re.sub(r",(\s*[}\]])", r"\1", text)


def _load_json(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        data = json.loads(_strip_json_comments(path.read_text()))
    except json.JSONDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def detect_alias(root: Path) -> str:
    """First `X/*` key in tsconfig compilerOptions.paths, `@` otherwise."""
    paths = _load_json(root / "tsconfig.json").get("compilerOptions", {}).get("paths") or {}
    for key in paths:
        if key.endswith("/*"):
            return key[:-2]
    return "@"


def detect_dialect(root: Path) -> Dialect:
    """Dialect from drizzle config, then from package.json dependencies."""
    for name in DRIZZLE_CONFIG_FILES:
        path = root / name
        if path.exists():
            match = re.search(r"""dialect\s*:\s*["'](\w+)["']""", path.read_text())
            if match and match.group(1).lower() in DIALECT_ALIASES:
                return DIALECT_ALIASES[match.group(1).lower()]

    package = _load_json(root / "package.json")
    deps = {**package.get("dependencies", {}), **package.get("devDependencies", {})}
    if any(p in deps for p in POSTGRESQL_PACKAGES):
        return Dialect.POSTGRESQL
    if any(p in deps for p in MYSQL_PACKAGES):
        return Dialect.MYSQL
    return Dialect.SQLITE


def detect_project_config(root: str | Path | None = None) -> ProjectConfig:
    """
    Detect project conventions and apply brizzle.yaml overrides.

    Args:
        root: Project directory. Defaults to the current directory.

    Returns:
        ProjectConfig for the project
    """
    root = Path(root) if root is not None else Path.cwd()
    use_src = (root / "src" / "app").is_dir()

    detected = {
        "useSrc": use_src,
        "alias": detect_alias(root),
        "appPath": "src/app" if use_src else "app",
        "dbPath": "src/db" if use_src else "db",
        "dialect": detect_dialect(root),
    }

    config_path = root / CONFIG_FILE
    if config_path.exists():
        overrides = yaml.safe_load(config_path.read_text()) or {}
        if not isinstance(overrides, dict):
            raise ValueError(f"{CONFIG_FILE} must contain a mapping")
        for name, info in ProjectConfig.model_fields.items():
            if info.alias and name in overrides:
                overrides[info.alias] = overrides.pop(name)
        detected.update(overrides)

    return ProjectConfig.model_validate({**detected, "root": root})


def write_config_file(config: ProjectConfig, force: bool = False) -> Path:
    """Write brizzle.yaml into the project root."""
    path = config.root / CONFIG_FILE
    if path.exists() and not force:
        raise ValueError(f"{CONFIG_FILE} already exists. Use --force to overwrite.")
    path.write_text(config.to_yaml())
    return path
