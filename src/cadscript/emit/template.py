"""
Text templates for command bodies.

Templates use `str.format` syntax. Every resolved parameter is exposed as a
`TemplateValue`: ``{radius}`` formats the whole value, ``{center.x}`` one
coordinate of a point or vector, ``{color.r}`` one channel of a color.
Literal braces in the target language are doubled (``{{`` / ``}}``).
"""

import math
from typing import Callable, Dict, Mapping, Optional

from ..values import Value, ValueKind, format_number, number_val, vector_val


class TemplateValue:
    """Formatted view of a Value with per-component attributes."""

    def __init__(self, text: str, **components: str):
        self.text = text
        self.__dict__.update(components)

    def __format__(self, spec: str) -> str:
        return format(self.text, spec)

    def __str__(self) -> str:
        return self.text


def template_value(value: Value) -> TemplateValue:
    """Build the template view of a value."""
    kind = value.kind
    if kind == ValueKind.NUMBER:
        return TemplateValue(format_number(value.value))
    if kind == ValueKind.TEXT:
        return TemplateValue(value.value)
    if kind == ValueKind.BOOLEAN:
        return TemplateValue("true" if value.value else "false")
    if kind in (ValueKind.POINT, ValueKind.VECTOR):
        x, y, z = (format_number(c) for c in (value.x, value.y, value.z))
        return TemplateValue(f"{x}, {y}, {z}", x=x, y=y, z=z)
    if kind == ValueKind.COLOR:
        r, g, b = str(value.r), str(value.g), str(value.b)
        return TemplateValue(f"{r}, {g}, {b}", r=r, g=g, b=b)
    raise AssertionError(f"unhandled value kind: {kind}")


Derivation = Callable[[Mapping[str, Value]], Value]


def template(body: str, derived: Optional[Dict[str, Derivation]] = None):
    """
    Create a render function from a template body.

    `derived` maps extra placeholder names to functions of the resolved
    parameters, for values the target needs in another form (radians,
    displacement vectors).
    """
    derived = dict(derived or {})

    def render(params: Mapping[str, Value]) -> str:
        fields = {name: template_value(v) for name, v in params.items()}
        for name, fn in derived.items():
            fields[name] = template_value(fn(params))
        return body.format(**fields)

    render.body = body
    return render


# --- Derivations ---

def radians(name: str) -> Derivation:
    """Parameter given in degrees, converted to radians."""
    def derive(params: Mapping[str, Value]) -> Value:
        return number_val(params[name].value * math.pi / 180.0)
    return derive


def displacement(start: str, end: str) -> Derivation:
    """Vector from one point parameter to another."""
    def derive(params: Mapping[str, Value]) -> Value:
        a, b = params[start], params[end]
        return vector_val(b.x - a.x, b.y - a.y, b.z - a.z)
    return derive
