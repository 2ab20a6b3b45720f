"""
Unit tests for errors and diagnostics.
"""

from cadscript import (
    Diagnostic, DiagnosticCollector, ErrorSeverity, ScriptSyntaxError, FormatError,
)
from cadscript.errors import (
    error_invalid_command, error_component_count, warning_unknown_command,
)


class TestScriptError:
    """Test error exceptions."""

    def test_str_without_line(self):
        """Unlocated errors show only the message."""
        err = error_component_count("point", "[1,2]")
        assert str(err) == "point must have 3 coordinates: [1,2]"
        assert err.line_number is None

    def test_located(self):
        """Locating keeps the error class and adds the line."""
        err = error_component_count("color", "RGB(1,2)")
        located = err.located(4, "LAYER(color=RGB(1,2))", "a.cad")
        assert isinstance(located, FormatError)
        assert located.line_number == 4
        assert str(located) == "Line 4: color must have 3 components: RGB(1,2)"
        assert located.diagnostic.filename == "a.cad"
        assert err.line_number is None

    def test_format_with_source(self):
        """Formatted errors show the source line and hints."""
        err = error_invalid_command("BOX width=1").located(2, "BOX width=1")
        assert isinstance(err, ScriptSyntaxError)
        assert err.diagnostic.format().split("\n") == [
            "Line 2: error[E101]: invalid command format: BOX width=1",
            "    |",
            "  2 | BOX width=1",
            "    |",
            "    = hint: commands look like NAME(param=value, ...)",
        ]


class TestDiagnosticCollector:
    """Test diagnostic collection."""

    def test_counts(self):
        """Errors and warnings are counted separately."""
        collector = DiagnosticCollector()
        collector.add(warning_unknown_command("GADGET", 3))
        collector.add_error(error_invalid_command("x", 1))
        assert collector.error_count == 1
        assert collector.warning_count == 1
        assert collector.has_errors
        assert len(collector) == 2

    def test_format_all(self):
        """Summary line follows the diagnostics."""
        collector = DiagnosticCollector()
        collector.add(warning_unknown_command("GADGET", 3))
        assert collector.format_all(show_source=False) == (
            "Line 3: warning[W101]: unknown command: GADGET\n1 warning(s)")

    def test_empty(self):
        """An empty collector formats to nothing."""
        collector = DiagnosticCollector()
        assert not collector.has_warnings
        assert collector.format_all() == ""

    def test_to_json(self):
        """JSON output lists diagnostics and counts."""
        collector = DiagnosticCollector()
        collector.add(Diagnostic("W101", "unknown command: X", ErrorSeverity.WARNING, line=1))
        data = collector.to_json()
        assert data["warning_count"] == 1
        assert data["diagnostics"][0] == {
            "code": "W101",
            "message": "unknown command: X",
            "severity": "warning",
            "line": 1,
            "filename": None,
            "hints": [],
        }
