"""
Line-oriented parser for drawing scripts.

A script is plain text with one instruction per line:

    // comment
    VAR r = 2.5
    SPHERE(radius=$r, position=[0,0,0])

`CommandParser` handles a single line; `ScriptParser` drives it over a whole
script and attaches the line number to any error raised below it.
"""

import logging
import re
from typing import List, Optional

from .command import Command
from .errors import ScriptError, error_invalid_command, error_invalid_variable
from .literals import parse_value
from .splitter import split_fields, split_assignment
from .variables import VariableTable

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "//"
VAR_RE = re.compile(r"VAR\s")
INVOCATION_RE = re.compile(r"([A-Za-z_]\w*)\s*\((.*)\)", re.ASCII | re.DOTALL)


class CommandParser:
    """
    Parser for one script line.

    Usage:
        parser = CommandParser(VariableTable())
        command = parser.parse_line('BOX(width=5)', line_number=1)
    """

    def __init__(self, variables: VariableTable):
        self.variables = variables

    def parse_line(self, line: str, line_number: int = 0) -> Optional[Command]:
        """
        Parse one line.

        Returns a Command for an invocation, or None for blank lines,
        comments and variable declarations.
        """
        text = line.strip()
        if not text or text.startswith(COMMENT_PREFIX):
            return None

        if VAR_RE.match(text):
            self._parse_variable(text)
            return None

        match = INVOCATION_RE.fullmatch(text)
        if match is None:
            raise error_invalid_command(text, line_number)

        command = Command(
            type=match.group(1).upper(),
            parameters=self._parse_parameters(match.group(2)),
            source_line=line_number,
        )
        logger.debug(f"Parsed: {command.type} with {len(command.parameters)} parameters")
        return command

    def _parse_variable(self, text: str) -> None:
        """Handle ``VAR name = value`` (split on the first '=')."""
        body = text[3:]
        name, sep, value = body.partition("=")
        name, value = name.strip(), value.strip()
        if not sep or not value:
            raise error_invalid_variable(text)
        try:
            self.variables.define(name, value)
        except ValueError:
            raise error_invalid_variable(text) from None

    def _parse_parameters(self, arguments: str) -> dict:
        parameters = {}
        for field in split_fields(arguments):
            name, raw = split_assignment(field)
            if name in parameters:
                logger.warning(f"Parameter '{name}' given more than once; last value wins")
            parameters[name] = parse_value(self.variables.substitute(raw))
        return parameters


class ScriptParser:
    """
    Parses a whole script into an ordered command list.

    Parsing stops at the first error, which is re-raised located at the
    offending 1-based line; no partial command list is returned.
    """

    def __init__(self, variables: Optional[VariableTable] = None,
                 filename: Optional[str] = None):
        self.variables = variables if variables is not None else VariableTable()
        self.filename = filename
        self.command_parser = CommandParser(self.variables)
        self.commands: List[Command] = []
        self.current_line = 0

    def parse(self, source: str) -> List[Command]:
        """Parse every line of source and return the commands."""
        self.commands = []
        self.current_line = 0

        for line in source.split("\n"):
            self.current_line += 1
            try:
                command = self.command_parser.parse_line(line, self.current_line)
            except ScriptError as e:
                raise e.located(self.current_line, line.rstrip("\r"), self.filename) from e
            if command is not None:
                self.commands.append(command)

        logger.debug(f"Parsed {len(self.commands)} command(s) from {self.current_line} line(s)")
        return list(self.commands)


def parse_line(line: str, variables: Optional[VariableTable] = None,
               line_number: int = 0) -> Optional[Command]:
    """Parse a single line with a fresh or given variable table."""
    return CommandParser(variables if variables is not None else VariableTable()).parse_line(
        line, line_number)


def parse_script(source: str, variables: Optional[VariableTable] = None,
                 filename: Optional[str] = None) -> List[Command]:
    """Parse a script into a list of commands."""
    return ScriptParser(variables, filename).parse(source)
