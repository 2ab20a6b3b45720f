"""
Unit tests for the line and script parsers.
"""

import logging

import pytest
from cadscript import (
    CommandParser, ScriptParser, VariableTable, Command, ScriptSyntaxError, FormatError,
    ScriptError, parse_line, parse_script,
    number_val, text_val, bool_val, point_val, vector_val, color_val,
)


class TestParseLine:
    """Test single-line parsing."""

    def test_blank_and_comment(self):
        """Blank lines and comments produce nothing."""
        assert parse_line("") is None
        assert parse_line("   \t") is None
        assert parse_line("// BOX(width=5)") is None
        assert parse_line("   // indented comment") is None

    def test_simple_command(self):
        """A command with typed parameters."""
        cmd = parse_line('BOX(width=5, height=2.5, position=[1,2,3])', line_number=4)
        assert cmd.type == "BOX"
        assert cmd.source_line == 4
        assert cmd.parameters == {
            "width": number_val(5),
            "height": number_val(2.5),
            "position": point_val(1, 2, 3),
        }

    def test_type_upper_cased(self):
        """Command names are case-insensitive."""
        assert parse_line("sphere(radius=1)").type == "SPHERE"

    def test_no_parameters(self):
        """Empty argument list."""
        cmd = parse_line("UNION()")
        assert cmd.type == "UNION"
        assert len(cmd.parameters) == 0

    def test_space_before_paren(self):
        """Whitespace between name and parenthesis is allowed."""
        assert parse_line("CIRCLE (radius=2)").type == "CIRCLE"

    def test_all_value_kinds(self):
        """Every literal kind in one command."""
        table = VariableTable()
        table.define("up", "<0,0,1>")
        cmd = parse_line('LAYER(name="Walls", color=RGB(255,0,0), visible=true, '
                         'normal=$up, label=Walls)', table)
        assert cmd.get("name") == text_val("Walls")
        assert cmd.get("color") == color_val(255, 0, 0)
        assert cmd.get("visible") == bool_val(True)
        assert cmd.get("normal") == vector_val(0, 0, 1)
        assert cmd.get("label") == text_val("Walls")

    def test_quoted_text_with_commas(self):
        """Quoted text keeps its commas."""
        cmd = parse_line('TEXT(text="Hello, world", height=2)')
        assert cmd.get("text") == text_val("Hello, world")
        assert cmd.get("height") == number_val(2)

    def test_missing_paren(self):
        """A line without parentheses is a syntax error."""
        with pytest.raises(ScriptSyntaxError) as exc_info:
            parse_line("BOX width=5", line_number=3)
        assert exc_info.value.diagnostic.code == "E101"
        assert exc_info.value.line_number == 3

    def test_unclosed_paren(self):
        """An unclosed argument list is a syntax error."""
        with pytest.raises(ScriptSyntaxError):
            parse_line("BOX(width=5")

    def test_trailing_text(self):
        """Text after the closing parenthesis is rejected."""
        with pytest.raises(ScriptSyntaxError):
            parse_line("BOX(width=5) extra")

    def test_bad_name(self):
        """Command names must be identifiers."""
        with pytest.raises(ScriptSyntaxError):
            parse_line("3D(width=5)")

    def test_bad_parameter(self):
        """A parameter without '=' is a syntax error."""
        with pytest.raises(ScriptSyntaxError) as exc_info:
            parse_line("BOX(width)")
        assert exc_info.value.diagnostic.code == "E102"

    def test_duplicate_parameter(self, caplog):
        """Repeated parameters keep the last value and warn."""
        with caplog.at_level(logging.WARNING, logger="cadscript.parser"):
            cmd = parse_line("BOX(width=1, width=2)")
        assert cmd.get("width") == number_val(2)
        assert "given more than once" in caplog.text

    def test_parse_acknowledged(self, caplog):
        """Each parsed command is logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger="cadscript.parser"):
            parse_line("BOX(width=1, height=2, depth=3)")
        assert "Parsed: BOX with 3 parameters" in caplog.text

    def test_inline_vector_splits(self):
        """Angle brackets do not protect commas from the splitter."""
        with pytest.raises(ScriptSyntaxError) as exc_info:
            parse_line("CIRCLE(normal=<0,0,1>)")
        assert exc_info.value.diagnostic.code == "E102"

    def test_single_field_vector(self):
        """A vector written without commas inside reaches the value parser."""
        with pytest.raises(FormatError):
            parse_line("CIRCLE(normal=<1>)")

    def test_malformed_literal(self):
        """Malformed points propagate as FormatError."""
        with pytest.raises(FormatError):
            parse_line("BOX(position=[1,2])")


class TestVariables:
    """Test VAR declarations and substitution."""

    def test_var_line_returns_none(self):
        """VAR lines bind a variable and produce no command."""
        table = VariableTable()
        assert parse_line("VAR size = 10", table) is None
        assert table.get("size") == "10"

    def test_substitution(self):
        """$name in a value is replaced before parsing."""
        table = VariableTable()
        parser = CommandParser(table)
        parser.parse_line("VAR n = 5")
        cmd = parser.parse_line("SPHERE(radius=$n)")
        assert cmd.get("radius") == number_val(5.0)

    def test_point_variable(self):
        """A variable can hold a whole literal."""
        table = VariableTable()
        parser = CommandParser(table)
        parser.parse_line("VAR origin = [1, 2, 3]")
        cmd = parser.parse_line("SPHERE(position=$origin)")
        assert cmd.get("position") == point_val(1, 2, 3)

    def test_value_with_equals(self):
        """Only the first '=' separates name and value."""
        table = VariableTable()
        parse_line('VAR label = "a=b"', table)
        assert table.get("label") == '"a=b"'

    def test_missing_equals(self):
        """VAR without '=' is a syntax error."""
        with pytest.raises(ScriptSyntaxError) as exc_info:
            parse_line("VAR size 10")
        assert exc_info.value.diagnostic.code == "E103"

    def test_missing_value(self):
        """VAR with an empty value is a syntax error."""
        with pytest.raises(ScriptSyntaxError):
            parse_line("VAR size =")

    def test_invalid_name(self):
        """VAR with a non-identifier name is a syntax error."""
        with pytest.raises(ScriptSyntaxError) as exc_info:
            parse_line("VAR 9lives = 1")
        assert exc_info.value.diagnostic.code == "E103"

    def test_var_prefix_needs_space(self):
        """A command whose name starts with VAR is still a command."""
        cmd = parse_line("VARIANT(x=1)")
        assert cmd.type == "VARIANT"


class TestScriptParser:
    """Test whole-script parsing."""

    def test_empty_script(self):
        """An empty script yields an empty list."""
        assert parse_script("") == []
        assert parse_script("\n\n// only comments\n") == []

    def test_order_and_lines(self):
        """Commands keep script order and 1-based line numbers."""
        source = "// header\nBOX(width=1)\n\nSPHERE(radius=2)\n"
        commands = parse_script(source)
        assert [c.type for c in commands] == ["BOX", "SPHERE"]
        assert [c.source_line for c in commands] == [2, 4]

    def test_crlf(self):
        """Windows line endings are accepted."""
        commands = parse_script("BOX(width=1)\r\nSPHERE(radius=2)\r\n")
        assert [c.type for c in commands] == ["BOX", "SPHERE"]
        assert commands[1].source_line == 2

    def test_variables_across_lines(self):
        """Variables defined earlier apply to later lines."""
        source = "VAR r = 2.5\nVAR c = [0,0,5]\nSPHERE(radius=$r, position=$c)"
        cmd = parse_script(source)[0]
        assert cmd.get("radius") == number_val(2.5)
        assert cmd.get("position") == point_val(0, 0, 5)

    def test_nested_reference_not_expanded(self):
        """Variable text containing $name is stored and used raw."""
        source = "VAR r = 2.5\nVAR c = [0,0,$r]\nSPHERE(position=$c)"
        with pytest.raises(FormatError) as exc_info:
            parse_script(source)
        assert exc_info.value.diagnostic.code == "E202"
        assert exc_info.value.line_number == 3

    def test_use_before_definition(self):
        """Variables are not hoisted."""
        cmd = parse_script("TEXT(text=$t)\nVAR t = 1")[0]
        assert cmd.get("text") == text_val("$t")

    def test_syntax_error_line(self):
        """A missing parenthesis is reported at its line."""
        source = "BOX(width=1)\n// ok\nSPHERE radius=2\nCIRCLE(radius=1)"
        with pytest.raises(ScriptSyntaxError) as exc_info:
            parse_script(source)
        err = exc_info.value
        assert err.line_number == 3
        assert err.diagnostic.source_line == "SPHERE radius=2"
        assert str(err).startswith("Line 3:")

    def test_format_error_line(self):
        """A malformed literal is reported as FormatError at its line."""
        source = "BOX(width=1)\nLINE(start=[1,2], end=[1,1,1])"
        with pytest.raises(FormatError) as exc_info:
            parse_script(source)
        assert exc_info.value.line_number == 2
        assert str(exc_info.value) == "Line 2: point must have 3 coordinates: [1,2]"

    def test_error_from_substituted_value(self):
        """Errors in substituted text are located at the using line."""
        source = "VAR p = [1,2]\n\nPOINT(position=$p)"
        with pytest.raises(FormatError) as exc_info:
            parse_script(source)
        assert exc_info.value.line_number == 3

    def test_bad_parameter_located(self):
        """Parameter errors get the line number too."""
        with pytest.raises(ScriptSyntaxError) as exc_info:
            parse_script("\nBOX(a=1=2)")
        assert exc_info.value.line_number == 2
        assert exc_info.value.diagnostic.code == "E102"

    def test_filename_in_diagnostic(self):
        """The filename is attached to located errors."""
        with pytest.raises(ScriptError) as exc_info:
            parse_script("nonsense", filename="part.cad")
        diag = exc_info.value.diagnostic
        assert diag.location == "part.cad:1"
        assert "part.cad:1: error[E101]" in diag.format()
        assert "  1 | nonsense" in diag.format()

    def test_parser_resets_commands(self):
        """Reusing a ScriptParser starts from an empty list."""
        parser = ScriptParser()
        parser.parse("BOX(width=1)")
        assert len(parser.parse("SPHERE(radius=1)")) == 1

    def test_idempotent_with_fresh_variables(self):
        """Parsing the same script twice gives equal commands."""
        source = "VAR w = 4\nBOX(width=$w, position=[1,2,3])\nLAYER(name=\"A\")"
        first = parse_script(source, VariableTable())
        second = parse_script(source, VariableTable())
        assert first == second

    def test_shared_variables(self):
        """A passed variable table collects the script's definitions."""
        table = VariableTable()
        parse_script("VAR a = 1\nVAR b = 2", table)
        assert table.names() == ["a", "b"]


class TestCommand:
    """Test command records."""

    def test_parameters_read_only(self):
        """Parameters cannot be changed after parsing."""
        cmd = parse_line("BOX(width=1)")
        with pytest.raises(TypeError):
            cmd.parameters["width"] = number_val(2)

    def test_equality_and_hash(self):
        """Commands compare by type, parameters and line."""
        a = Command("BOX", {"width": number_val(1)}, 1)
        b = Command("BOX", {"width": number_val(1)}, 1)
        c = Command("BOX", {"width": number_val(1)}, 2)
        assert a == b
        assert hash(a) == hash(b)
        assert a != c

    def test_to_source(self):
        """Commands render back to script syntax."""
        cmd = parse_line('box(width=5.0, position=[1,2,3], name="x")')
        assert cmd.to_source() == 'BOX(width=5, position=[1, 2, 3], name="x")'
        assert parse_line(cmd.to_source()).parameters == cmd.parameters

    def test_str(self):
        """Summary line used by listings."""
        cmd = parse_line("BOX(width=1, height=2)", line_number=7)
        assert str(cmd) == "Line 7: BOX (2 params)"
