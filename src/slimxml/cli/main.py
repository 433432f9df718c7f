"""Main CLI entry point for the slimxml command-line tool.

Provides value lookups, node searches and tree dumps for XML files.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from slimxml import __version__
from slimxml.api import load_file
from slimxml.shared import (
    ConfigError,
    MalformedPathError,
    ParserConfig,
    SlimXMLError,
    get_logger,
)
from slimxml.query import convert_bool, convert_double, convert_int
from slimxml.tree import XMLDocument

VALUE_TYPES = ("string", "int", "bool", "double")

logger = get_logger(__name__, component="cli")


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="slimxml",
        description="Query values and nodes in small XML configuration files"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Get command
    get_parser = subparsers.add_parser("get", help="Print the value at a value path")
    get_parser.add_argument("file", type=Path, help="XML file to read")
    get_parser.add_argument(
        "path",
        help="Value path, e.g. 'config/server/port$' or 'config/server:host'"
    )
    get_parser.add_argument(
        "--type", "-t",
        choices=VALUE_TYPES,
        default="string",
        help="Convert the value to this type (default: string)"
    )
    get_parser.add_argument(
        "--default", "-d",
        help="Value printed when the path does not resolve"
    )

    # Find command
    find_parser = subparsers.add_parser("find", help="Print the node at a node-search path")
    find_parser.add_argument("file", type=Path, help="XML file to read")
    find_parser.add_argument(
        "path",
        help="Node-search path, e.g. 'catalog/item?id=2/price'"
    )
    find_parser.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)"
    )

    # Dump command
    dump_parser = subparsers.add_parser("dump", help="Print the parsed tree")
    dump_parser.add_argument("file", type=Path, help="XML file to read")

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )
    parser.add_argument(
        "--no-declaration",
        action="store_true",
        help="Do not expect an <?xml ...?> declaration line"
    )
    parser.add_argument(
        "--buffer-length",
        type=int,
        help="Maximum length of names, values and path segments"
    )

    return parser


def build_config(args: argparse.Namespace) -> ParserConfig:
    """Translate global options into a parser configuration."""
    config = ParserConfig.lenient() if args.no_declaration else ParserConfig()
    if args.buffer_length is not None:
        config = config.override(tokenization__buffer_length=args.buffer_length)
    return config


CONVERTERS = {
    "int": convert_int,
    "double": convert_double,
    "bool": convert_bool,
}


def _convert(value_type: str, text: str) -> Any:
    converter = CONVERTERS.get(value_type)
    if converter is None:
        return text
    return converter(text)


def _parse_default(value_type: str, text: Optional[str]) -> Any:
    if text is None:
        return None
    value = _convert(value_type, text)
    if value is None:
        raise ValueError(f"{text!r} is not a valid {value_type}")
    return value


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def cmd_get(args: argparse.Namespace, document: XMLDocument) -> int:
    """Print the value at a value path."""
    try:
        default = _parse_default(args.type, args.default)
    except ValueError as e:
        print(f"Error: invalid --default: {e}", file=sys.stderr)
        return 1

    raw = document.get_value(args.path)
    if raw is None:
        if default is None:
            print(f"Not found: {args.path}", file=sys.stderr)
            return 1
        value = default
    else:
        value = _convert(args.type, raw)
        if value is None:
            if default is None:
                print(
                    f"Error: value {raw!r} at {args.path} is not a valid {args.type}",
                    file=sys.stderr,
                )
                return 1
            logger.warning(
                "Value does not convert, using default",
                extra={"path": args.path, "value": raw, "type": args.type},
            )
            value = default

    print(_format_value(value))
    return 0


def cmd_find(args: argparse.Namespace, document: XMLDocument) -> int:
    """Print the node at a node-search path.

    The JSON form describes the node itself and lists its children by path;
    the text form renders the whole subtree.
    """
    node = document.find(args.path)
    if node is None:
        print(f"Not found: {args.path}", file=sys.stderr)
        return 1

    if args.format == "json":
        result = node.to_dict(deep=False)
        result["path"] = node.get_path()
        result["children"] = [child.get_path() for child in node.children]
        print(json.dumps(result, indent=2))
    else:
        print(node.dump())
    return 0


def cmd_dump(args: argparse.Namespace, document: XMLDocument) -> int:
    """Print the whole parsed tree."""
    if document.declaration:
        print(document.declaration)
    print(document.root.dump())
    return 0


COMMANDS = {
    "get": cmd_get,
    "find": cmd_find,
    "dump": cmd_dump,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Set up logging verbosity
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        with load_file(args.file, config) as document:
            return COMMANDS[args.command](args, document)
    except OSError as e:
        print(f"Error: cannot read {args.file}: {e}", file=sys.stderr)
        return 1
    except MalformedPathError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except SlimXMLError as e:
        logger.debug("Command failed", extra={"command": args.command, "error": str(e)})
        print(f"Error: {args.file}: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
