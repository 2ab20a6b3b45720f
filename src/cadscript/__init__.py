"""
cadscript: a line-oriented drawing script front end.

This package provides:
- Splitter: bracket- and quote-aware splitting of command arguments
- Literals: typed values (numbers, text, booleans, points, vectors, colors)
- Variables: ``VAR name = value`` bindings with ``$name`` substitution
- Parser: scripts to ordered lists of commands
- Emit: schema-driven rendering of commands to AutoCAD .NET source

Usage:
    from cadscript import Session

    session = Session()
    session.parse_script('''
    // a box and a sphere on top of it
    VAR size = 10
    BOX(width=$size, height=$size, depth=$size, position=[0,0,0])
    SPHERE(radius=5, position=[5,5,15])
    ''')
    print(session.render_document())
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cadscript")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

from .values import (
    ValueKind,
    Value,
    Number,
    Text,
    Boolean,
    Point,
    Vector,
    Color,
    format_number,
    number_val,
    text_val,
    bool_val,
    point_val,
    vector_val,
    color_val,
)

from .errors import (
    ScriptError,
    ScriptSyntaxError,
    FormatError,
    Diagnostic,
    DiagnosticCollector,
    ErrorSeverity,
)

from .splitter import (
    FieldSplitter,
    split_fields,
    split_assignment,
)

from .literals import (
    parse_value,
    parse_number,
)

from .variables import (
    VariableTable,
    VariableBinding,
)

from .command import Command

from .parser import (
    CommandParser,
    ScriptParser,
    parse_line,
    parse_script,
)

from .emit import (
    ParamSpec,
    CommandSchema,
    EmissionRegistry,
    get_default_registry,
    render,
    render_document,
)

from .config import (
    Config,
    DEFAULT_CONFIG,
    load_config,
)

from .session import Session

__all__ = [
    # Values
    'ValueKind',
    'Value',
    'Number',
    'Text',
    'Boolean',
    'Point',
    'Vector',
    'Color',
    'format_number',
    'number_val',
    'text_val',
    'bool_val',
    'point_val',
    'vector_val',
    'color_val',

    # Errors
    'ScriptError',
    'ScriptSyntaxError',
    'FormatError',
    'Diagnostic',
    'DiagnosticCollector',
    'ErrorSeverity',

    # Splitting and literals
    'FieldSplitter',
    'split_fields',
    'split_assignment',
    'parse_value',
    'parse_number',

    # Variables
    'VariableTable',
    'VariableBinding',

    # Parsing
    'Command',
    'CommandParser',
    'ScriptParser',
    'parse_line',
    'parse_script',

    # Emission
    'ParamSpec',
    'CommandSchema',
    'EmissionRegistry',
    'get_default_registry',
    'render',
    'render_document',

    # Configuration and sessions
    'Config',
    'DEFAULT_CONFIG',
    'load_config',
    'Session',
]
