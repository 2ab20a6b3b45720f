"""
Variable table for ``VAR name = value`` declarations.

Variables hold raw text, not parsed values. Every ``$name`` occurrence in a
parameter value is replaced by the bound text before the value is parsed.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern

logger = logging.getLogger(__name__)

NAME_RE = re.compile(r"[A-Za-z_]\w*", re.ASCII)


@dataclass(frozen=True)
class VariableBinding:
    """A single name -> raw text binding."""
    name: str
    raw_text: str

    def __str__(self) -> str:
        return f"${self.name} = {self.raw_text}"


class VariableTable:
    """
    Name -> raw text bindings owned by one parsing session.

    Redefinition overwrites (last write wins). Substitution is a single pass:
    replaced text is never expanded again, and when one name is a prefix of
    another the longer name binds first (``$ab`` before ``$a``).
    """

    def __init__(self):
        self._bindings: Dict[str, str] = {}
        self._pattern: Optional[Pattern] = None

    def define(self, name: str, raw_text: str) -> None:
        """Bind name to raw_text, replacing any previous binding."""
        if NAME_RE.fullmatch(name) is None:
            raise ValueError(f"invalid variable name: {name!r}")
        previous = self._bindings.get(name)
        if previous is not None and previous != raw_text:
            logger.warning(f"Redefined: ${name} = {raw_text} (was {previous})")
        else:
            logger.debug(f"Variable {name} = {raw_text}")
        self._bindings[name] = raw_text
        self._pattern = None

    def get(self, name: str) -> Optional[str]:
        """Look up the raw text bound to name."""
        return self._bindings.get(name)

    def names(self) -> List[str]:
        return list(self._bindings)

    def bindings(self) -> List[VariableBinding]:
        """All bindings in definition order."""
        return [VariableBinding(k, v) for k, v in self._bindings.items()]

    def items(self):
        return self._bindings.items()

    def clear(self) -> None:
        self._bindings.clear()
        self._pattern = None

    def __contains__(self, name: str) -> bool:
        return name in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def _compiled(self) -> Pattern:
        if self._pattern is None:
            names = sorted(self._bindings, key=lambda n: (-len(n), n))
            self._pattern = re.compile(r"\$(" + "|".join(re.escape(n) for n in names) + ")")
        return self._pattern

    def substitute(self, text: str) -> str:
        """Replace every ``$name`` of a bound variable with its raw text."""
        if not self._bindings or "$" not in text:
            return text
        return self._compiled().sub(lambda m: self._bindings[m.group(1)], text)
