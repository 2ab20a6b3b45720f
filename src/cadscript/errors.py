"""
Script errors and diagnostics.

Error code ranges:
- E1xx: Syntax errors (line shape, parameter and variable declarations)
- E2xx: Format errors (point, vector and color literals)
- W1xx: Render warnings (unknown commands, parameter fallbacks)
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, List


class ErrorSeverity(Enum):
    """Severity levels for diagnostics."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Diagnostic:
    """A single diagnostic message (error or warning)."""
    code: str                           # E101, W102, etc.
    message: str                        # Human-readable message
    severity: ErrorSeverity
    line: Optional[int] = None          # 1-indexed script line
    filename: Optional[str] = None
    source_line: Optional[str] = None   # The actual line of script text
    hints: List[str] = field(default_factory=list)

    @property
    def location(self) -> str:
        if self.filename and self.line is not None:
            return f"{self.filename}:{self.line}"
        if self.filename:
            return self.filename
        if self.line is not None:
            return f"Line {self.line}"
        return "<script>"

    def format(self, show_source: bool = True) -> str:
        """Format the diagnostic for display."""
        parts = [f"{self.location}: {self.severity.value}[{self.code}]: {self.message}"]

        if show_source and self.source_line is not None:
            parts.append("    |")
            parts.append(f"{self.line:>3} | {self.source_line}")
            parts.append("    |")

        for hint in self.hints:
            parts.append(f"    = hint: {hint}")

        return "\n".join(parts)

    def to_json(self) -> dict:
        """Convert to JSON-serializable dict for tooling integration."""
        return {
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "line": self.line,
            "filename": self.filename,
            "hints": list(self.hints),
        }


class ScriptError(Exception):
    """Base exception for script errors."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    @property
    def line_number(self) -> Optional[int]:
        return self.diagnostic.line

    def located(self, line: int, source_line: Optional[str] = None,
                filename: Optional[str] = None) -> "ScriptError":
        """Return a copy of this error attached to a script line."""
        diag = replace(
            self.diagnostic,
            line=line,
            source_line=source_line,
            filename=filename or self.diagnostic.filename,
        )
        return type(self)(diag)

    def __str__(self) -> str:
        if self.diagnostic.line is None:
            return self.diagnostic.message
        return f"Line {self.diagnostic.line}: {self.diagnostic.message}"


class ScriptSyntaxError(ScriptError):
    """A line or field that does not have the expected shape (E1xx)."""
    pass


class FormatError(ScriptError):
    """A malformed point, vector or color literal (E2xx)."""
    pass


# --- Syntax error codes ---

def error_invalid_command(text: str, line: Optional[int] = None) -> ScriptSyntaxError:
    """E101: Line is not a NAME(args) invocation."""
    diag = Diagnostic(
        code="E101",
        message=f"invalid command format: {text}",
        severity=ErrorSeverity.ERROR,
        line=line,
        hints=["commands look like NAME(param=value, ...)"],
    )
    return ScriptSyntaxError(diag)


def error_invalid_parameter(text: str) -> ScriptSyntaxError:
    """E102: Parameter field without exactly one '='."""
    diag = Diagnostic(
        code="E102",
        message=f"invalid parameter format: {text}",
        severity=ErrorSeverity.ERROR,
        hints=["parameters are written as name=value"],
    )
    return ScriptSyntaxError(diag)


def error_invalid_variable(text: str) -> ScriptSyntaxError:
    """E103: Malformed VAR declaration."""
    diag = Diagnostic(
        code="E103",
        message=f"invalid variable declaration: {text}",
        severity=ErrorSeverity.ERROR,
        hints=["variables are declared as VAR name = value"],
    )
    return ScriptSyntaxError(diag)


# --- Format error codes ---

def error_component_count(kind: str, literal: str, expected: int = 3) -> FormatError:
    """E201: Point, vector or color with the wrong number of components."""
    noun = "components" if kind == "color" else "coordinates"
    diag = Diagnostic(
        code="E201",
        message=f"{kind} must have {expected} {noun}: {literal}",
        severity=ErrorSeverity.ERROR,
    )
    return FormatError(diag)


def error_invalid_component(kind: str, component: str, literal: str) -> FormatError:
    """E202: Non-numeric coordinate or non-integer color component."""
    expected = "an integer" if kind == "color" else "a number"
    diag = Diagnostic(
        code="E202",
        message=f"{kind} component '{component}' is not {expected}: {literal}",
        severity=ErrorSeverity.ERROR,
    )
    return FormatError(diag)


# --- Render warnings ---

def warning_unknown_command(command_type: str, line: Optional[int] = None) -> Diagnostic:
    """W101: No schema registered for the command type."""
    return Diagnostic(
        code="W101",
        message=f"unknown command: {command_type}",
        severity=ErrorSeverity.WARNING,
        line=line,
    )


def warning_parameter_default(command_type: str, name: str, found: str, expected: str,
                              line: Optional[int] = None) -> Diagnostic:
    """W102: Parameter could not be coerced and was replaced by its default."""
    return Diagnostic(
        code="W102",
        message=f"{command_type}.{name}: expected {expected}, found {found}; using default",
        severity=ErrorSeverity.WARNING,
        line=line,
    )


def warning_unknown_parameter(command_type: str, name: str,
                              line: Optional[int] = None) -> Diagnostic:
    """W103: Parameter not declared by the command's schema."""
    return Diagnostic(
        code="W103",
        message=f"{command_type} has no parameter '{name}'; ignored",
        severity=ErrorSeverity.WARNING,
        line=line,
    )


class DiagnosticCollector:
    """Collects diagnostics during a render pass."""

    def __init__(self):
        self.diagnostics: List[Diagnostic] = []

    def add(self, diagnostic: Diagnostic) -> None:
        """Add a diagnostic."""
        self.diagnostics.append(diagnostic)

    def add_error(self, error: ScriptError) -> None:
        """Add an error exception as a diagnostic."""
        self.add(error.diagnostic)

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == ErrorSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == ErrorSeverity.WARNING)

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0

    @property
    def has_warnings(self) -> bool:
        return self.warning_count > 0

    def __len__(self) -> int:
        return len(self.diagnostics)

    def __iter__(self):
        return iter(self.diagnostics)

    def format_all(self, show_source: bool = True) -> str:
        """Format all diagnostics for display."""
        parts = [d.format(show_source) for d in self.diagnostics]
        if self.error_count > 0:
            parts.append(f"{self.error_count} error(s), {self.warning_count} warning(s)")
        elif self.warning_count > 0:
            parts.append(f"{self.warning_count} warning(s)")
        return "\n".join(parts)

    def to_json(self) -> dict:
        """Convert all diagnostics to JSON format."""
        return {
            "diagnostics": [d.to_json() for d in self.diagnostics],
            "error_count": self.error_count,
            "warning_count": self.warning_count,
        }
