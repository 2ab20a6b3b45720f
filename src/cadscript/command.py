"""
Parsed command records.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from .values import Value


@dataclass(frozen=True)
class Command:
    """
    One ``NAME(param=value, ...)`` invocation.

    `type` is the upper-cased command name used as the schema key. The
    parameter mapping is read-only; a command never changes after parsing.
    """
    type: str
    parameters: Mapping[str, Value] = field(default_factory=dict)
    source_line: int = 0

    def __post_init__(self):
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    def get(self, name: str, default: Optional[Value] = None) -> Optional[Value]:
        return self.parameters.get(name, default)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Command):
            return NotImplemented
        return (self.type == other.type
                and dict(self.parameters) == dict(other.parameters)
                and self.source_line == other.source_line)

    def __hash__(self) -> int:
        return hash((self.type, frozenset(self.parameters.items()), self.source_line))

    def to_source(self) -> str:
        """Render back to script syntax (numbers normalized)."""
        args = ", ".join(f"{k}={v.to_literal()}" for k, v in self.parameters.items())
        return f"{self.type}({args})"

    def __str__(self) -> str:
        return f"Line {self.source_line}: {self.type} ({len(self.parameters)} params)"
