"""
Schema-driven emission registry.

Each command type is described by a `CommandSchema`: an ordered list of
parameter specs with defaults and a render function. Rendering a command
resolves every schema parameter by name (falling back to the default when a
parameter is missing or cannot be coerced to the expected kind) and hands the
resolved values to the render function. Rendering never raises for unknown
commands or bad parameters; those degrade to a marker or a default.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from ..command import Command
from ..errors import (
    DiagnosticCollector,
    warning_unknown_command,
    warning_parameter_default,
    warning_unknown_parameter,
)
from ..literals import parse_number
from ..values import Value, ValueKind, number_val, text_val, bool_val

logger = logging.getLogger(__name__)

BODY_INDENT = "    "


@dataclass(frozen=True)
class ParamSpec:
    """One declared parameter of a command schema."""
    name: str
    kind: ValueKind
    default: Value
    integer: bool = False       # Truncate numbers toward zero (counts)
    doc: str = ""

    def __post_init__(self):
        if self.default.kind != self.kind:
            raise ValueError(f"default for '{self.name}' is {self.default.kind.value}, "
                             f"expected {self.kind.value}")


@dataclass(frozen=True)
class CommandSchema:
    """Static description of a command type and how to render it."""
    command_type: str
    params: Tuple[ParamSpec, ...]
    render: Callable[[Mapping[str, Value]], str]
    category: str = ""
    doc: str = ""

    def param(self, name: str) -> Optional[ParamSpec]:
        for spec in self.params:
            if spec.name == name:
                return spec
        return None

    @property
    def param_names(self) -> List[str]:
        return [spec.name for spec in self.params]


# --- Coercion ---

def coerce(value: Value, kind: ValueKind) -> Optional[Value]:
    """
    Best-effort conversion of value to kind.

    Returns None when no sensible conversion exists.
    """
    given = value.kind
    if given == kind:
        return value

    if kind == ValueKind.NUMBER:
        if given == ValueKind.BOOLEAN:
            return number_val(1.0 if value.value else 0.0)
        if given == ValueKind.TEXT:
            try:
                return number_val(parse_number(value.value))
            except ValueError:
                return None
        return None

    if kind == ValueKind.TEXT:
        if given in (ValueKind.NUMBER, ValueKind.BOOLEAN):
            return text_val(value.to_literal())
        return None

    if kind == ValueKind.BOOLEAN:
        if given == ValueKind.NUMBER:
            return bool_val(value.value != 0)
        if given == ValueKind.TEXT:
            lowered = value.value.strip().lower()
            if lowered in ("true", "false"):
                return bool_val(lowered == "true")
        return None

    # Points, vectors and colors only accept their own kind.
    return None


def _as_integer(value: Value) -> Optional[Value]:
    if not math.isfinite(value.value):
        return None
    return number_val(math.trunc(value.value))


def resolve_parameter(command: Command, spec: ParamSpec,
                      diagnostics: Optional[DiagnosticCollector] = None) -> Value:
    """Resolve one schema parameter for a command. Never raises."""
    given = command.parameters.get(spec.name)
    if given is None:
        return spec.default

    value = coerce(given, spec.kind)
    if value is not None and spec.integer:
        value = _as_integer(value)

    if value is None:
        logger.debug(f"{command.type}.{spec.name}: cannot use {given.to_literal()}, "
                     f"falling back to {spec.default.to_literal()}")
        if diagnostics is not None:
            diagnostics.add(warning_parameter_default(
                command.type, spec.name, given.kind.value, spec.kind.value, command.source_line))
        return spec.default
    return value


def indent_block(text: str, indent: str) -> str:
    """Prefix every non-empty line with indent."""
    return "\n".join(indent + line if line else line for line in text.split("\n"))


class EmissionRegistry:
    """
    Registry of command schemas.

    Schemas are registered by canonical (upper-case) command type and looked
    up case-sensitively.
    """

    def __init__(self, schemas: Iterable[CommandSchema] = ()):
        self._schemas: Dict[str, CommandSchema] = {}
        for schema in schemas:
            self.register(schema)

    def register(self, schema: CommandSchema) -> None:
        """Register a schema, replacing any schema of the same type."""
        self._schemas[schema.command_type] = schema

    def get(self, command_type: str) -> Optional[CommandSchema]:
        """Look up a schema by canonical command type."""
        return self._schemas.get(command_type)

    def names(self) -> List[str]:
        return list(self._schemas)

    def categories(self) -> Dict[str, List[str]]:
        """Command types grouped by category, in registration order."""
        groups: Dict[str, List[str]] = {}
        for schema in self._schemas.values():
            groups.setdefault(schema.category, []).append(schema.command_type)
        return groups

    def __contains__(self, command_type: str) -> bool:
        return command_type in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def resolve(self, command: Command,
                diagnostics: Optional[DiagnosticCollector] = None) -> Optional[Dict[str, Value]]:
        """Resolved parameter values for a command, or None if its type is unknown."""
        schema = self.get(command.type)
        if schema is None:
            return None
        if diagnostics is not None:
            declared = set(schema.param_names)
            for name in command.parameters:
                if name not in declared:
                    diagnostics.add(warning_unknown_parameter(command.type, name, command.source_line))
        return {spec.name: resolve_parameter(command, spec, diagnostics) for spec in schema.params}

    def render(self, command: Command, diagnostics: Optional[DiagnosticCollector] = None,
               indent: str = "") -> str:
        """
        Render one command to a text block.

        The block is a header comment, the template body in its own brace
        scope, then a blank line. Unknown command types render as a marker.
        """
        header = f"// {command.type} command (line {command.source_line})"
        resolved = self.resolve(command, diagnostics)

        if resolved is None:
            logger.debug(f"No schema for {command.type}")
            if diagnostics is not None:
                diagnostics.add(warning_unknown_command(command.type, command.source_line))
            lines = [header, f"// Unknown command: {command.type}"]
        else:
            body = self.get(command.type).render(resolved).rstrip("\n")
            lines = [header, "{", indent_block(body, BODY_INDENT), "}"]

        return indent_block("\n".join(lines), indent) + "\n\n"

    def render_all(self, commands: Iterable[Command],
                   diagnostics: Optional[DiagnosticCollector] = None,
                   indent: str = "") -> str:
        """Render commands in order and concatenate the blocks."""
        return "".join(self.render(cmd, diagnostics, indent) for cmd in commands)

    # --- Introspection ---

    def usage(self, command_type: str) -> Optional[str]:
        """Example invocation built from the schema defaults."""
        schema = self.get(command_type)
        if schema is None:
            return None
        args = ", ".join(f"{p.name}={p.default.to_literal()}" for p in schema.params)
        return f"{schema.command_type}({args})"

    def describe(self, command_type: str) -> Optional[Dict[str, Any]]:
        """JSON-serializable description of a schema."""
        schema = self.get(command_type)
        if schema is None:
            return None
        return {
            "type": schema.command_type,
            "category": schema.category,
            "doc": schema.doc,
            "usage": self.usage(command_type),
            "params": [
                {
                    "name": p.name,
                    "kind": p.kind.value,
                    "default": p.default.to_literal(),
                    "integer": p.integer,
                    "doc": p.doc,
                }
                for p in schema.params
            ],
        }


# Global singleton registry
_registry: Optional[EmissionRegistry] = None


def get_default_registry() -> EmissionRegistry:
    """Get the registry of built-in command schemas."""
    global _registry
    if _registry is None:
        from .schemas import BUILTIN_SCHEMAS
        _registry = EmissionRegistry(BUILTIN_SCHEMAS)
    return _registry


def render(commands: Iterable[Command], registry: Optional[EmissionRegistry] = None,
           diagnostics: Optional[DiagnosticCollector] = None, indent: str = "") -> str:
    """Render commands with the given or default registry."""
    registry = registry if registry is not None else get_default_registry()
    return registry.render_all(commands, diagnostics, indent)
