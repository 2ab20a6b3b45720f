"""
Literal value parsing.

Recognition order (first match wins):

    [x, y, z]      -> Point
    <x, y, z>      -> Vector
    RGB(r, g, b)   -> Color   (keyword is case-insensitive)
    "text"         -> Text    (quotes stripped, no escape processing)
    true / false   -> Boolean (case-insensitive)
    3.5, -1e3      -> Number
    anything else  -> Text    (the literal itself)

Once a literal has the point, vector or color shape it never falls back to
text: a wrong component count or a bad component raises FormatError.
"""

import re
from typing import List

from .errors import error_component_count, error_invalid_component
from .values import (
    Value, number_val, text_val, bool_val, point_val, vector_val, color_val,
)

# Plain decimal notation only: no 'inf', 'nan', underscores or hex.
NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
INTEGER_RE = re.compile(r"[+-]?\d+")
COLOR_RE = re.compile(r"RGB\s*\((.*)\)", re.IGNORECASE | re.DOTALL)


def is_number(text: str) -> bool:
    """Check if text is a plain decimal number literal."""
    return NUMBER_RE.fullmatch(text.strip()) is not None


def parse_number(text: str) -> float:
    """Parse a plain decimal number; raises ValueError otherwise."""
    text = text.strip()
    if NUMBER_RE.fullmatch(text) is None:
        raise ValueError(f"not a number: {text!r}")
    return float(text)


def _components(kind: str, inner: str, literal: str) -> List[str]:
    parts = [p.strip() for p in inner.split(",")]
    if len(parts) != 3:
        raise error_component_count(kind, literal)
    return parts


def _coordinates(kind: str, inner: str, literal: str) -> List[float]:
    coords = []
    for part in _components(kind, inner, literal):
        if NUMBER_RE.fullmatch(part) is None:
            raise error_invalid_component(kind, part, literal)
        coords.append(float(part))
    return coords


def parse_point(literal: str) -> Value:
    """Parse a ``[x, y, z]`` literal."""
    return point_val(*_coordinates("point", literal[1:-1], literal))


def parse_vector(literal: str) -> Value:
    """Parse a ``<x, y, z>`` literal."""
    return vector_val(*_coordinates("vector", literal[1:-1], literal))


def parse_color(literal: str, inner: str) -> Value:
    """Parse the component list of an ``RGB(r, g, b)`` literal."""
    channels = []
    for part in _components("color", inner, literal):
        if INTEGER_RE.fullmatch(part) is None:
            raise error_invalid_component("color", part, literal)
        channels.append(int(part))
    return color_val(*channels)


def parse_value(text: str) -> Value:
    """Convert a (substituted) value string into exactly one Value."""
    text = text.strip()

    if text.startswith("[") and text.endswith("]"):
        return parse_point(text)

    if text.startswith("<") and text.endswith(">"):
        return parse_vector(text)

    color = COLOR_RE.fullmatch(text)
    if color is not None:
        return parse_color(text, color.group(1))

    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        return text_val(text[1:-1])

    lowered = text.lower()
    if lowered == "true":
        return bool_val(True)
    if lowered == "false":
        return bool_val(False)

    if NUMBER_RE.fullmatch(text) is not None:
        return number_val(float(text))

    return text_val(text)
