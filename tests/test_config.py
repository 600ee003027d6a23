"""Tests for project convention detection and brizzle.yaml handling."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from brizzle.config import ProjectConfig, detect_project_config, write_config_file
from brizzle.models import Dialect


def _write_package(root: Path, **dependencies: str) -> None:
    (root / "package.json").write_text(json.dumps({"name": "app", "dependencies": dependencies}))


# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------


def test_defaults_for_empty_project(project_dir: Path):
    config = detect_project_config(project_dir)

    assert config.root == project_dir
    assert config.use_src is False
    assert config.alias == "@"
    assert config.app_path == "app"
    assert config.db_path == "db"
    assert config.dialect == Dialect.SQLITE
    assert config.schema_file == project_dir / "db" / "schema.ts"
    assert config.db_import == "@/db"
    assert config.schema_import == "@/db/schema"


def test_src_layout(project_dir: Path):
    (project_dir / "src" / "app").mkdir(parents=True)

    config = detect_project_config(project_dir)

    assert config.use_src is True
    assert config.app_path == "src/app"
    assert config.db_path == "src/db"
    assert config.app_dir == project_dir / "src" / "app"
    assert config.db_import == "@/db"


def test_alias_from_tsconfig_with_comments(project_dir: Path):
    (project_dir / "tsconfig.json").write_text(
        """{
  // Next.js defaults
  "compilerOptions": {
    "strict": true,
    /* path aliases */
    "paths": { "~/*": ["./src/*"] },
  },
}
"""
    )

    config = detect_project_config(project_dir)

    assert config.alias == "~"
    assert config.schema_import == "~/db/schema"


def test_broken_tsconfig_falls_back(project_dir: Path):
    (project_dir / "tsconfig.json").write_text("{ not json")

    assert detect_project_config(project_dir).alias == "@"


@pytest.mark.parametrize(
    "package, dialect",
    [
        ("pg", Dialect.POSTGRESQL),
        ("postgres", Dialect.POSTGRESQL),
        ("@neondatabase/serverless", Dialect.POSTGRESQL),
        ("mysql2", Dialect.MYSQL),
        ("@planetscale/database", Dialect.MYSQL),
        ("better-sqlite3", Dialect.SQLITE),
    ],
)
def test_dialect_from_package_json(project_dir: Path, package: str, dialect: Dialect):
    _write_package(project_dir, **{package: "^1.0.0"})

    assert detect_project_config(project_dir).dialect == dialect


def test_drizzle_config_wins_over_dependencies(project_dir: Path):
    _write_package(project_dir, mysql2="^3.0.0")
    (project_dir / "drizzle.config.ts").write_text(
        'export default defineConfig({\n  dialect: "postgresql",\n  schema: "./db/schema.ts",\n});\n'
    )

    assert detect_project_config(project_dir).dialect == Dialect.POSTGRESQL


def test_drizzle_config_turso_is_sqlite(project_dir: Path):
    _write_package(project_dir, pg="^8.0.0")
    (project_dir / "drizzle.config.ts").write_text("export default { dialect: 'turso' };\n")

    assert detect_project_config(project_dir).dialect == Dialect.SQLITE


# ---------------------------------------------------------------------------
# brizzle.yaml
# ---------------------------------------------------------------------------


def test_yaml_overrides_detected_values(project_dir: Path):
    (project_dir / "brizzle.yaml").write_text("dialect: mysql\napp_path: web/app\ndbPath: lib/db\n")

    config = detect_project_config(project_dir)

    assert config.dialect == Dialect.MYSQL
    assert config.app_path == "web/app"
    assert config.db_path == "lib/db"
    assert config.db_import == "@/lib/db"


def test_empty_yaml_is_ignored(project_dir: Path):
    (project_dir / "brizzle.yaml").write_text("")

    assert detect_project_config(project_dir).dialect == Dialect.SQLITE


def test_yaml_must_be_mapping(project_dir: Path):
    (project_dir / "brizzle.yaml").write_text("- sqlite\n")

    with pytest.raises(ValueError, match="must contain a mapping"):
        detect_project_config(project_dir)


def test_yaml_rejects_unknown_dialect(project_dir: Path):
    (project_dir / "brizzle.yaml").write_text("dialect: oracle\n")

    with pytest.raises(ValueError):
        detect_project_config(project_dir)


def test_write_config_file_round_trips(project_dir: Path):
    _write_package(project_dir, pg="^8.0.0")
    config = detect_project_config(project_dir)

    path = write_config_file(config)

    assert path == project_dir / "brizzle.yaml"
    assert yaml.safe_load(path.read_text()) == {
        "useSrc": False,
        "alias": "@",
        "appPath": "app",
        "dbPath": "db",
        "dialect": "postgresql",
    }
    assert detect_project_config(project_dir) == config


def test_write_config_file_requires_force(project_dir: Path):
    config = ProjectConfig(root=project_dir)
    write_config_file(config)

    with pytest.raises(ValueError, match="already exists"):
        write_config_file(config)

    write_config_file(config.model_copy(update={"dialect": Dialect.MYSQL}), force=True)
    assert "dialect: mysql" in (project_dir / "brizzle.yaml").read_text()
