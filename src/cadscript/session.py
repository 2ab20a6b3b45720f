"""
Parse sessions.

A session owns one variable table and one command list and resets them
together. Independent sessions share nothing, so separate scripts can be
parsed side by side with one session each.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from .command import Command
from .config import Config, DEFAULT_CONFIG
from .emit.document import render_document
from .emit.registry import EmissionRegistry, get_default_registry
from .errors import DiagnosticCollector
from .parser import ScriptParser
from .variables import VariableTable, VariableBinding

logger = logging.getLogger(__name__)


class Session:
    """
    One parse lifecycle: variables + commands.

    Usage:
        session = Session()
        session.parse_script('VAR r = 2\\nSPHERE(radius=$r)')
        code = session.render_document()
    """

    def __init__(self, registry: Optional[EmissionRegistry] = None,
                 config: Config = DEFAULT_CONFIG):
        self.registry = registry if registry is not None else get_default_registry()
        self.config = config
        self.variables = VariableTable()
        self._commands: List[Command] = []

    @property
    def commands(self) -> Tuple[Command, ...]:
        return tuple(self._commands)

    def parse_script(self, source: str, filename: Optional[str] = None) -> List[Command]:
        """
        Parse a script, replacing the current command list.

        Variables defined by earlier scripts stay bound until `clear()`. The
        command list is emptied first, so after an error it stays empty.
        """
        self._commands = []
        commands = ScriptParser(self.variables, filename).parse(source)
        self._commands = commands
        return list(commands)

    def define_variable(self, name: str, raw_text: str) -> None:
        self.variables.define(name, raw_text)

    def list_variables(self) -> List[VariableBinding]:
        return self.variables.bindings()

    def render(self, commands: Optional[Sequence[Command]] = None,
               diagnostics: Optional[DiagnosticCollector] = None) -> str:
        """Render command blocks only (no header/footer)."""
        if commands is None:
            commands = self._commands
        return self.registry.render_all(commands, diagnostics, indent=self.config.indent)

    def render_document(self, commands: Optional[Sequence[Command]] = None,
                        diagnostics: Optional[DiagnosticCollector] = None) -> str:
        """Render command blocks between the configured header and footer."""
        if commands is None:
            commands = self._commands
        return render_document(commands, self.registry, self.config, diagnostics)

    def clear(self) -> None:
        """Reset both the variable table and the command list."""
        self.variables.clear()
        self._commands = []
        logger.debug("Session cleared")
