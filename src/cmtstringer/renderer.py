"""Render the generated ``String()`` method with Jinja2."""

from __future__ import annotations

from typing import Sequence

from jinja2 import Environment, StrictUndefined, Template, TemplateError

from .errors import RenderError
from .labels import DerivedEntry

__all__ = [
    "GENERATOR_NAME",
    "default_template",
    "go_quote",
    "receiver_for",
    "render_source",
]

GENERATOR_NAME = "cmtstringer"

_SOURCE_TEMPLATE = """\
package {{ package_name }}

// This file is generated by command {{ generator }}.
// DO NOT EDIT IT.

// String returns comment of const type {{ type_name }}
func ({{ receiver }} {{ type_name }}) String() string {
	switch {{ receiver }} {
{% for entry in entries %}
	case {{ entry.name }}:
		return {{ entry.message | go_quote }}
{% endfor %}
	default:
		return "Unknown"
	}
}
"""

_SIMPLE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def go_quote(text: str) -> str:
    """Return ``text`` as a double-quoted Go string literal."""

    parts = ['"']
    for char in text:
        escaped = _SIMPLE_ESCAPES.get(char)
        if escaped is not None:
            parts.append(escaped)
        elif char == " " or char.isprintable():
            parts.append(char)
        else:
            code = ord(char)
            if code < 0x80:
                parts.append(f"\\x{code:02x}")
            elif code < 0x10000:
                parts.append(f"\\u{code:04x}")
            else:
                parts.append(f"\\U{code:08x}")
    parts.append('"')
    return "".join(parts)


def receiver_for(type_name: str) -> str:
    if not type_name:
        raise RenderError("Type name must be a non-empty string.")
    return type_name[0].lower()


def default_template() -> Template:
    env = Environment(
        autoescape=False,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )
    env.filters["go_quote"] = go_quote
    return env.from_string(_SOURCE_TEMPLATE)


def render_source(
    package_name: str,
    type_name: str,
    entries: Sequence[DerivedEntry],
    *,
    template: Template | None = None,
) -> str:
    """Substitute ``entries`` into the method template.

    Entries are rendered in order; repeated names are kept as repeated
    ``case`` clauses.
    """

    receiver = receiver_for(type_name)
    tpl = template or default_template()
    try:
        return tpl.render(
            package_name=package_name,
            generator=GENERATOR_NAME,
            type_name=type_name,
            receiver=receiver,
            entries=list(entries),
        )
    except TemplateError as exc:
        raise RenderError(f"Failed to render template: {exc}") from exc
