#!/usr/bin/env python3
"""
CLI for cadscript drawing scripts.

Usage:
    python -m cadscript check FILE
    python -m cadscript list FILE
    python -m cadscript render FILE [--output OUT] [--body-only]
    python -m cadscript schemas [TYPE]

Examples:
    # Check a script for syntax and literal errors
    python -m cadscript check examples/bracket.cad

    # Show the parsed commands and variables
    python -m cadscript list examples/bracket.cad

    # Generate AutoCAD .NET source for a script
    python -m cadscript render examples/bracket.cad -o Bracket.cs

    # Describe the parameters accepted by a command
    python -m cadscript schemas ARC
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import load_config
from .emit.registry import get_default_registry
from .errors import DiagnosticCollector, ScriptError
from .session import Session


def _read_script(path_str: str) -> str:
    source_path = Path(path_str)
    if not source_path.exists():
        raise FileNotFoundError(f"File not found: {source_path}")
    return source_path.read_text(encoding="utf-8")


def _parse_file(args) -> Session:
    """Parse the script named by args.file into a new session."""
    session = Session(config=args.config)
    session.parse_script(_read_script(args.file), filename=args.file)
    return session


def cmd_check(args):
    """Check a script for errors."""
    session = _parse_file(args)
    print(f"OK: {Path(args.file).name} - {len(session.commands)} command(s), no errors")

    diagnostics = DiagnosticCollector()
    session.render(diagnostics=diagnostics)
    if diagnostics.has_warnings:
        print(diagnostics.format_all(show_source=False))
    return 0


def cmd_list(args):
    """List commands and variables of a script."""
    session = _parse_file(args)

    commands = session.commands
    print(f"Total commands: {len(commands)}")
    for i, cmd in enumerate(commands, start=1):
        print(f"{i}. {cmd}")

    variables = session.list_variables()
    print(f"Variables ({len(variables)}):")
    for binding in variables:
        print(f"  {binding}")
    return 0


def cmd_render(args):
    """Render a script to target source text."""
    session = _parse_file(args)

    diagnostics = DiagnosticCollector()
    if args.body_only:
        text = session.render(diagnostics=diagnostics)
    else:
        text = session.render_document(diagnostics=diagnostics)

    if diagnostics.has_warnings:
        print(diagnostics.format_all(show_source=False), file=sys.stderr)

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(text, encoding="utf-8")
        print(f"Generated code saved to {output_path}")
    else:
        sys.stdout.write(text)
    return 0


def cmd_schemas(args):
    """List registered command types, or describe one."""
    registry = get_default_registry()

    if args.type:
        info = registry.describe(args.type.upper())
        if info is None:
            print(f"Error: Unknown command: {args.type}", file=sys.stderr)
            return 1
        if args.json:
            print(json.dumps(info, indent=2))
            return 0
        print(f"{info['type']} - {info['doc']} ({info['category']})")
        print(f"  {info['usage']}")
        for param in info["params"]:
            kind = "integer" if param["integer"] else param["kind"]
            note = f"  [{param['doc']}]" if param["doc"] else ""
            print(f"    {param['name']}: {kind} = {param['default']}{note}")
        return 0

    if args.json:
        print(json.dumps([registry.describe(name) for name in registry.names()], indent=2))
        return 0
    for category, names in registry.categories().items():
        print(f"{category}:")
        for name in names:
            print(f"  {registry.usage(name)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='python -m cadscript',
        description='Drawing script parser and code generator',
    )
    parser.add_argument('-c', '--config', metavar='FILE',
                        help='YAML configuration file (default: $CADSCRIPT_CONFIG)')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='More logging (repeat for debug output)')

    subparsers = parser.add_subparsers(dest='action', required=True)

    # check command
    check_parser = subparsers.add_parser('check', help='Check a script for errors')
    check_parser.add_argument('file', help='Script file')

    # list command
    list_parser = subparsers.add_parser('list', help='List parsed commands and variables')
    list_parser.add_argument('file', help='Script file')

    # render command
    render_parser = subparsers.add_parser('render', help='Generate code from a script')
    render_parser.add_argument('file', help='Script file')
    render_parser.add_argument('-o', '--output', metavar='FILE',
                               help='Write generated code to FILE instead of stdout')
    render_parser.add_argument('--body-only', action='store_true',
                               help='Omit the document header and footer')

    # schemas command
    schemas_parser = subparsers.add_parser('schemas', help='List or describe command schemas')
    schemas_parser.add_argument('type', nargs='?', help='Command type to describe')
    schemas_parser.add_argument('--json', action='store_true', help='JSON output')

    return parser


def _configure_logging(verbose: int, config_level: str) -> None:
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = getattr(logging, config_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        args.config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    _configure_logging(args.verbose, args.config.log_level)

    try:
        if args.action == 'check':
            return cmd_check(args)
        elif args.action == 'list':
            return cmd_list(args)
        elif args.action == 'render':
            return cmd_render(args)
        elif args.action == 'schemas':
            return cmd_schemas(args)
        else:
            parser.print_help()
            return 1
    except ScriptError as e:
        print(e.diagnostic.format(), file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
