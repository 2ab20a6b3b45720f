"""
Typed parameter values.

A parameter value is exactly one of six variants. Each variant is a frozen
dataclass tagged with a `ValueKind`, so code that consumes values (the
emission registry in particular) can dispatch on `value.kind` exhaustively.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union


class ValueKind(Enum):
    """The closed set of value variants."""
    NUMBER = "number"
    TEXT = "text"
    BOOLEAN = "boolean"
    POINT = "point"
    VECTOR = "vector"
    COLOR = "color"


def format_number(x: float) -> str:
    """
    Format a number for emitted source text.

    Integral values print without a fractional part (``5``), everything else
    uses the shortest round-tripping representation (``2.5``, ``1e-09``).
    """
    if math.isfinite(x) and x == int(x) and abs(x) < 1e16:
        return str(int(x))
    return repr(float(x))


@dataclass(frozen=True)
class Number:
    value: float
    kind = ValueKind.NUMBER

    def to_literal(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True)
class Text:
    value: str
    kind = ValueKind.TEXT

    def to_literal(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class Boolean:
    value: bool
    kind = ValueKind.BOOLEAN

    def to_literal(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class Point:
    x: float
    y: float
    z: float
    kind = ValueKind.POINT

    def to_literal(self) -> str:
        return f"[{format_number(self.x)}, {format_number(self.y)}, {format_number(self.z)}]"


@dataclass(frozen=True)
class Vector:
    x: float
    y: float
    z: float
    kind = ValueKind.VECTOR

    def to_literal(self) -> str:
        return f"<{format_number(self.x)}, {format_number(self.y)}, {format_number(self.z)}>"


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int
    kind = ValueKind.COLOR

    def to_literal(self) -> str:
        return f"RGB({self.r}, {self.g}, {self.b})"


Value = Union[Number, Text, Boolean, Point, Vector, Color]


# Convenience constructors

def number_val(x: float) -> Number:
    """Create a number value."""
    return Number(float(x))


def text_val(s: str) -> Text:
    """Create a text value."""
    return Text(str(s))


def bool_val(b: bool) -> Boolean:
    """Create a boolean value."""
    return Boolean(bool(b))


def point_val(x: float, y: float, z: float) -> Point:
    """Create a point value."""
    return Point(float(x), float(y), float(z))


def vector_val(x: float, y: float, z: float) -> Vector:
    """Create a vector value."""
    return Vector(float(x), float(y), float(z))


def color_val(r: int, g: int, b: int) -> Color:
    """Create a color value."""
    return Color(int(r), int(g), int(b))


ORIGIN = point_val(0, 0, 0)
Z_AXIS = vector_val(0, 0, 1)
