"""
Form rendering helpers for the generated pages

Each field type maps to one input widget, one FormData parse expression
and one display expression. Registered as Jinja2 filters.
"""

from __future__ import annotations

from brizzle.models import BOOLEAN_TYPES, DATETIME_TYPES, INTEGER_TYPES, FieldType, ModelField
from brizzle.strings import escape_string, to_pascal_case


INPUT_CLASSES = (
    "mt-1.5 block w-full rounded-lg border border-gray-200 px-3 py-2 text-gray-900 "
    "placeholder:text-gray-400 focus:border-gray-400 focus:outline-none focus:ring-0"
)
SELECT_CLASSES = (
    "mt-1.5 block w-full rounded-lg border border-gray-200 px-3 py-2 text-gray-900 "
    "focus:border-gray-400 focus:outline-none focus:ring-0"
)
CHECKBOX_CLASSES = "h-4 w-4 rounded border-gray-300 text-gray-900 focus:ring-0 focus:ring-offset-0"


# ═══════════════════════════════════════════════════════════════════════════
# INPUT WIDGETS
# ═══════════════════════════════════════════════════════════════════════════


def _label(field: ModelField) -> str:
    optional = ' <span className="text-gray-400">(optional)</span>' if field.nullable else ""
    return f"""          <label htmlFor="{field.name}" className="block text-sm font-medium text-gray-700">
            {to_pascal_case(field.name)}{optional}
          </label>"""


def _required(field: ModelField) -> str:
    return "" if field.nullable else " required"


def _default_value(field: ModelField, camel_name: str) -> str:
    value = f"{camel_name}.{field.name}"
    if field.type == FieldType.JSON:
        return f" defaultValue={{JSON.stringify({value}, null, 2)}}"
    if field.nullable:
        return f' defaultValue={{{value} ?? ""}}'
    return f" defaultValue={{{value}}}"


def _input(field: ModelField, input_type: str, attrs: str = "") -> str:
    return f"""        <div>
{_label(field)}
          <input
            type="{input_type}"{attrs}
            id="{field.name}"
            name="{field.name}"
            className="{INPUT_CLASSES}\""""


def textarea_field(field: ModelField, camel_name: str, with_default: bool) -> str:
    rows = 6 if field.type == FieldType.JSON else 4
    placeholder = ' placeholder="{}"' if field.type == FieldType.JSON else ""
    default = _default_value(field, camel_name) if with_default else ""
    return f"""        <div>
{_label(field)}
          <textarea
            id="{field.name}"
            name="{field.name}"
            rows={{{rows}}}
            className="{INPUT_CLASSES} resize-none"{default}{placeholder}{_required(field)}
          />
        </div>"""


def checkbox_field(field: ModelField, camel_name: str, with_default: bool) -> str:
    fallback = " ?? false" if field.nullable else ""
    default = f" defaultChecked={{{camel_name}.{field.name}{fallback}}}" if with_default else ""
    return f"""        <div className="flex items-center gap-2">
          <input
            type="checkbox"
            id="{field.name}"
            name="{field.name}"
            className="{CHECKBOX_CLASSES}"{default}
          />
          <label htmlFor="{field.name}" className="text-sm font-medium text-gray-700">
            {to_pascal_case(field.name)}
          </label>
        </div>"""


def number_field(field: ModelField, camel_name: str, with_default: bool, step: str | None = None) -> str:
    step_attr = f'\n            step="{step}"' if step else ""
    default = _default_value(field, camel_name) if with_default else ""
    return f"""{_input(field, "number", step_attr)}{default}{_required(field)}
          />
        </div>"""


def date_field(field: ModelField, camel_name: str, with_default: bool, input_type: str = "date") -> str:
    if with_default:
        slice_expr = 'split("T")[0]' if input_type == "date" else "slice(0, 16)"
        default = f" defaultValue={{{camel_name}.{field.name}?.toISOString().{slice_expr}}}"
    else:
        default = ""
    return f"""{_input(field, input_type)}{default}{_required(field)}
          />
        </div>"""


def select_field(field: ModelField, camel_name: str, with_default: bool) -> str:
    default = _default_value(field, camel_name) if with_default else ""
    options = "\n".join(
        f'            <option value="{escape_string(v)}">{to_pascal_case(v)}</option>'
        for v in field.enum_values or []
    )
    empty_option = '\n            <option value="">None</option>' if field.nullable else ""
    return f"""        <div>
{_label(field)}
          <select
            id="{field.name}"
            name="{field.name}"
            className="{SELECT_CLASSES}"{default}{_required(field)}
          >{empty_option}
{options}
          </select>
        </div>"""


def text_field(field: ModelField, camel_name: str, with_default: bool) -> str:
    default = _default_value(field, camel_name) if with_default else ""
    return f"""{_input(field, "text")}{default}{_required(field)}
          />
        </div>"""


def form_field(field: ModelField, camel_name: str, with_default: bool = False) -> str:
    """Input widget markup for one field."""
    if field.type in (FieldType.TEXT, FieldType.JSON):
        return textarea_field(field, camel_name, with_default)
    if field.type in BOOLEAN_TYPES:
        return checkbox_field(field, camel_name, with_default)
    if field.type in INTEGER_TYPES:
        return number_field(field, camel_name, with_default)
    if field.type == FieldType.FLOAT:
        return number_field(field, camel_name, with_default, step="any")
    if field.type == FieldType.DECIMAL:
        return number_field(field, camel_name, with_default, step="0.01")
    if field.type == FieldType.DATE:
        return date_field(field, camel_name, with_default)
    if field.type in DATETIME_TYPES:
        return date_field(field, camel_name, with_default, input_type="datetime-local")
    if field.is_enum and field.enum_values:
        return select_field(field, camel_name, with_default)
    return text_field(field, camel_name, with_default)


# ═══════════════════════════════════════════════════════════════════════════
# VALUE EXPRESSIONS
# ═══════════════════════════════════════════════════════════════════════════


def form_value(field: ModelField, uuid: bool = False) -> str:
    """TypeScript expression reading the field from `formData`."""
    get_value = f'formData.get("{field.name}")'
    as_string = f"{get_value} as string"

    if field.type in BOOLEAN_TYPES:
        parsed = f'{get_value} === "on"'
        return f"{parsed} ? true : null" if field.nullable else parsed

    if field.type in INTEGER_TYPES or (field.is_reference and not uuid):
        parsed = f"parseInt({as_string})"
    elif field.type == FieldType.FLOAT:
        parsed = f"parseFloat({as_string})"
    elif field.type in DATETIME_TYPES or field.type == FieldType.DATE:
        parsed = f"new Date({as_string})"
    elif field.type == FieldType.JSON:
        parsed = f"JSON.parse({as_string})"
    else:
        # Decimals stay strings to keep their precision
        parsed = as_string

    if field.nullable:
        return f"{get_value} ? {parsed} : null"
    return parsed


def display_value(field: ModelField, camel_name: str) -> str:
    """JSX expression rendering the field on the detail page."""
    value = f"{camel_name}.{field.name}"

    if field.type in BOOLEAN_TYPES:
        return f'{{{value} ? "Yes" : "No"}}'
    if field.type == FieldType.DATE:
        return f"{{{value}?.toLocaleDateString()}}"
    if field.type in DATETIME_TYPES:
        return f"{{{value}?.toLocaleString()}}"
    if field.type == FieldType.JSON:
        return f"{{JSON.stringify({value})}}"
    return f"{{{value}}}"
