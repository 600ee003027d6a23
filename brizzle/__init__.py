"""
Brizzle - Rails-like generators for Next.js + Drizzle

Turns `name field:type ...` commands into Drizzle schema tables,
server actions, CRUD pages and REST route handlers.
"""

__version__ = "0.1.0"

from brizzle.models import Dialect, FieldType, GeneratorOptions, ModelContext, ModelField
from brizzle.config import ProjectConfig, detect_project_config
from brizzle.generator import GenerationResult, ScaffoldGenerator

__all__ = [
    "Dialect",
    "FieldType",
    "GeneratorOptions",
    "ModelContext",
    "ModelField",
    "ProjectConfig",
    "detect_project_config",
    "GenerationResult",
    "ScaffoldGenerator",
]
