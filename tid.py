#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import argparse

from tid_context import RegistryContext, LogLevel
from tid_errors import TypeIdError
from tid_identity import format_type
from tid_logger import log_error, log_info
from tid_parser import split_type_params
from tid_printer import format_type_tree
from tid_registry import TypeRegistry


def build_registry_context(args: argparse.Namespace) -> RegistryContext:
    """Build a RegistryContext from command-line arguments."""
    log_rich_format = getattr(args, 'log', False)

    verbosity = getattr(args, 'verbosity', 0)
    if verbosity >= 3:
        log_level = LogLevel.DEBUG
    elif verbosity >= 1:
        log_level = LogLevel.INFO
    else:
        log_level = LogLevel.ERROR

    return RegistryContext(
        log_level=log_level,
        log_rich_format=log_rich_format,
        strict_syntax=not getattr(args, 'lenient', False),
    )


def cmd_parse(args: argparse.Namespace) -> int:
    """Print the canonical name of each type reference."""
    context = build_registry_context(args)
    registry = TypeRegistry(context)
    rc = 0
    for ref in args.refs:
        try:
            t = registry.type(ref)
        except TypeIdError as e:
            log_error(context, e.format())
            rc = 1
            continue
        print(f"{ref} -> {format_type(t)}")
    log_info(context, f"{len(registry.names)} named type(s), {len(registry.interner)} complex type(s)")
    return rc


def cmd_split(args: argparse.Namespace) -> int:
    """Print the depth-0 pieces of a parameter list, one per line."""
    context = build_registry_context(args)
    try:
        params = split_type_params(args.text, strict=context.strict_syntax)
    except TypeIdError as e:
        log_error(context, e.format())
        return 1
    for p in params:
        print(p)
    return 0


def cmd_tree(args: argparse.Namespace) -> int:
    """Pretty-print the decomposition of a parsed type."""
    context = build_registry_context(args)
    registry = TypeRegistry(context)
    try:
        t = registry.type(args.ref)
    except TypeIdError as e:
        log_error(context, e.format())
        return 1
    for line in format_type_tree(t):
        print(line)
    return 0


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(prog="tid", description="Runtime type-identity registry tools")
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    parser.add_argument("-v", "--verbose",
                        action='count',
                        default=0,
                        dest='verbosity',
                        help="Increase verbosity: -v=INFO, -vvv=DEBUG")
    parser.add_argument("-l", "--log",
                        action='store_true',
                        default=False,
                        help="Enable rich log formatting (timestamps, levels)")
    parser.add_argument("--lenient",
                        action='store_true',
                        default=False,
                        help="Parse malformed generic type names on a best-effort basis instead of failing")

    ###########################
    # parse command
    ###########################
    p_parse = subparsers.add_parser("parse", help="Print canonical type names")
    p_parse.add_argument("refs", nargs="+", help="Type references (e.g. 'Map<string, List<number>>')")
    p_parse.set_defaults(func=cmd_parse)

    ###########################
    # split command
    ###########################
    p_split = subparsers.add_parser("split", help="Split a type parameter list at depth 0")
    p_split.add_argument("text", help="Parameter list without the outer brackets")
    p_split.set_defaults(func=cmd_split)

    ###########################
    # tree command
    ###########################
    p_tree = subparsers.add_parser("tree", help="Pretty-print the decomposition of a type")
    p_tree.add_argument("ref", help="Type reference")
    p_tree.set_defaults(func=cmd_tree)

    args = parser.parse_args(argv)

    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
