"""
String helpers - case conversion and English inflection

Rule-based only: irregular plurals ("person" -> "persons") are not handled.
"""

from __future__ import annotations

import re

from brizzle.models import ModelContext


# ═══════════════════════════════════════════════════════════════════════════
# CASE CONVERSION
# ═══════════════════════════════════════════════════════════════════════════


def to_pascal_case(s: str) -> str:
    """Convert to PascalCase. Accepts camel, snake and kebab input."""
    s = re.sub(r"[-_](\w)", lambda m: m.group(1).upper(), s)
    return s[:1].upper() + s[1:]


def to_camel_case(s: str) -> str:
    """Convert to camelCase."""
    pascal = to_pascal_case(s)
    return pascal[:1].lower() + pascal[1:]


def to_snake_case(s: str) -> str:
    """Convert to snake_case."""
    s = re.sub(r"([A-Z])", r"_\1", s).lower()
    return re.sub(r"^_", "", s)


def to_kebab_case(s: str) -> str:
    """Convert to kebab-case."""
    return to_snake_case(s).replace("_", "-")


def escape_string(s: str) -> str:
    """Escape a value for use inside a double-quoted TypeScript string."""
    return s.replace("\\", "\\\\").replace('"', '\\"')


# ═══════════════════════════════════════════════════════════════════════════
# INFLECTION
# ═══════════════════════════════════════════════════════════════════════════


def pluralize(s: str) -> str:
    """Simple English pluralization."""
    if s.endswith("y") and not re.search(r"[aeiou]y$", s):
        return s[:-1] + "ies"
    if s.endswith(("s", "x", "ch", "sh")):
        return s + "es"
    return s + "s"


def singularize(s: str) -> str:
    """Simple English singularization."""
    if s.endswith("ies"):
        return s[:-3] + "y"
    if s.endswith(("xes", "ches", "shes", "sses")):
        return s[:-2]
    if s.endswith("s") and not s.endswith("ss"):
        return s[:-1]
    return s


def create_model_context(name: str) -> ModelContext:
    """Derive every naming variant from a model name (singular or plural)."""
    singular_name = singularize(name)
    plural_name = pluralize(singular_name)

    return ModelContext(
        name=name,
        singular_name=singular_name,
        plural_name=plural_name,
        pascal_name=to_pascal_case(singular_name),
        pascal_plural=to_pascal_case(plural_name),
        camel_name=to_camel_case(singular_name),
        camel_plural=to_camel_case(plural_name),
        snake_name=to_snake_case(singular_name),
        snake_plural=to_snake_case(plural_name),
        kebab_name=to_kebab_case(singular_name),
        kebab_plural=to_kebab_case(plural_name),
        table_name=pluralize(to_snake_case(singular_name)),
    )
