"""
Unit tests for parse sessions.
"""

from pathlib import Path

import pytest
from cadscript import (
    Session, Config, DiagnosticCollector, FormatError, ScriptSyntaxError,
    VariableBinding, number_val, point_val,
)


SCRIPT = """\
// bracket
VAR size = 10
VAR base = [0, 0, 0]
BOX(width=$size, height=2, depth=$size, position=$base)
CYLINDER(radius=1.5, height=$size, position=[5, 5, 2])
"""


class TestSession:
    """Test the session lifecycle."""

    def test_parse_script(self):
        """Parsing fills commands and variables."""
        session = Session()
        commands = session.parse_script(SCRIPT)
        assert [c.type for c in commands] == ["BOX", "CYLINDER"]
        assert session.commands == tuple(commands)
        assert commands[0].get("width") == number_val(10)
        assert commands[0].get("position") == point_val(0, 0, 0)
        assert session.list_variables() == [
            VariableBinding("size", "10"), VariableBinding("base", "[0, 0, 0]"),
        ]

    def test_commands_read_only(self):
        """The command list cannot be changed through the property."""
        session = Session()
        session.parse_script(SCRIPT)
        assert isinstance(session.commands, tuple)

    def test_reparse_replaces_commands(self):
        """A second script replaces the command list."""
        session = Session()
        session.parse_script(SCRIPT)
        session.parse_script("SPHERE(radius=$size)")
        assert len(session.commands) == 1
        assert session.commands[0].get("radius") == number_val(10)

    def test_error_leaves_empty_commands(self):
        """A failed parse returns no partial list."""
        session = Session()
        session.parse_script(SCRIPT)
        with pytest.raises(FormatError) as exc_info:
            session.parse_script("BOX(width=1)\nLINE(start=[1,2])")
        assert exc_info.value.line_number == 2
        assert session.commands == ()

    def test_filename_passed(self):
        """Errors carry the filename given to parse_script."""
        session = Session()
        with pytest.raises(ScriptSyntaxError) as exc_info:
            session.parse_script("oops", filename="a.cad")
        assert exc_info.value.diagnostic.filename == "a.cad"

    def test_clear(self):
        """Clear resets both commands and variables."""
        session = Session()
        session.parse_script(SCRIPT)
        session.clear()
        assert session.commands == ()
        assert session.list_variables() == []

    def test_idempotent_after_clear(self):
        """Parse, clear, parse gives equal command lists."""
        session = Session()
        first = session.parse_script(SCRIPT)
        session.clear()
        second = session.parse_script(SCRIPT)
        assert first == second

    def test_define_variable(self):
        """Variables can be defined through the API."""
        session = Session()
        session.define_variable("r", "4")
        command = session.parse_script("SPHERE(radius=$r)")[0]
        assert command.get("radius") == number_val(4)

    def test_define_invalid_variable(self):
        """Invalid names are rejected by the API."""
        with pytest.raises(ValueError):
            Session().define_variable("not valid", "1")

    def test_sessions_independent(self):
        """Two sessions share no variables."""
        a, b = Session(), Session()
        a.parse_script("VAR n = 1")
        assert b.list_variables() == []
        assert b.parse_script("SPHERE(radius=$n)")[0].get("radius").value == "$n"


class TestSessionRender:
    """Test rendering from a session."""

    def test_render_blocks(self):
        """Render uses the configured indent."""
        session = Session(config=Config(indent="  "))
        session.parse_script(SCRIPT)
        text = session.render()
        assert text.startswith("  // BOX command (line 4)\n  {\n")
        assert "  // CYLINDER command (line 5)\n" in text

    def test_render_given_commands(self):
        """Explicit commands override the session list."""
        session = Session(config=Config(indent=""))
        session.parse_script(SCRIPT)
        text = session.render(session.commands[1:])
        assert "BOX" not in text
        assert text.startswith("// CYLINDER command (line 5)")

    def test_render_document(self):
        """Render a full document with header and footer."""
        session = Session()
        session.parse_script(SCRIPT)
        text = session.render_document()
        assert text.startswith("using Autodesk.AutoCAD")
        assert "box.CreateBox(10, 2, 10);" in text
        assert "CreateFrustum(10, 1.5, 1.5, 1.5)" in text
        assert text.rstrip().endswith("}")

    def test_render_unknown_warning(self):
        """Unknown commands are collected as warnings."""
        session = Session()
        session.parse_script("WIDGET(size=1)")
        diagnostics = DiagnosticCollector()
        text = session.render(diagnostics=diagnostics)
        assert "// Unknown command: WIDGET" in text
        assert diagnostics.warning_count == 1


class TestExampleScript:
    """Test the bundled example script."""

    def test_bracket(self):
        """The example parses and renders without warnings."""
        source = (Path(__file__).parent.parent / "examples" / "bracket.cad").read_text()
        session = Session()
        commands = session.parse_script(source)
        assert len(commands) == 9
        assert commands[-1].get("point2") == point_val(40, 0, 0)
        diagnostics = DiagnosticCollector()
        session.render_document(diagnostics=diagnostics)
        assert len(diagnostics) == 0
