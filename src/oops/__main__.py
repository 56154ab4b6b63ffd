#!/usr/bin/env python3
"""Oops CLI - Command-line interface for the Oops language.

Usage:
    oops                          # Interactive REPL
    oops <file.oops>              # Run a program
    oops -c "[1 + 2]"             # Run source text and show the result
    oops <file.oops> --ast        # Show the AST
    oops <file.oops> --lark       # Show Lark parse tree
    oops <file.oops> --trace      # Log every message send
"""

import argparse
import logging
import pathlib
import sys

from lark import Token, Tree

import oops
from . import _colorize


def prettylark(node, indent=0, show_positions=False):
    """Pretty-print a Lark parse tree.

    More readable than Lark's built-in pretty() for small programs. Shows
    tree structure with clear indentation and token values.
    """
    prefix = "  " * indent

    if isinstance(node, Token):
        pos = f" @{node.line}:{node.column}" if show_positions else ""
        value = repr(node.value) if len(node.value) < 60 else repr(node.value[:57] + "...")
        print(f"{prefix}{node.type}: {value}{pos}")

    elif isinstance(node, Tree):
        pos = ""
        if show_positions and not node.meta.empty:
            pos = f" @{node.meta.line}:{node.meta.column}"

        if len(node.children) == 0:
            print(f"{prefix}{node.data}(){pos}")
        elif len(node.children) == 1 and isinstance(node.children[0], Token):
            # Compact single-token nodes
            print(f"{prefix}{node.data}: {node.children[0].value!r}{pos}")
        else:
            print(f"{prefix}{node.data}:{pos}")
            for child in node.children:
                prettylark(child, indent + 1, show_positions)


def format_error(error, filename=None):
    """Format an OopsError or ParseError as `file:line:col: Kind: message`.

    The result carries color codes, see `_colorize.render`.
    """
    position = error.position
    if position is not None and position.filename is not None:
        location = position.location()
    elif position is not None and position.start_line is not None:
        location = f"{filename or '<input>'}:{position.start_line}:{position.start_column}"
    else:
        location = filename or "<input>"
    kind = type(error).__name__
    return f"\\-s-{location}:\\-n- \\-r-{kind}\\-n-: {error.message}"


def report_error(error, filename=None, stream=None):
    stream = stream or sys.stderr
    stream.write(_colorize.render(format_error(error, filename), stream) + "\n")


def run_program(program, filename=None, max_depth=oops.DEFAULT_MAX_DEPTH, show_result=False):
    """Run a parsed program and report a failure.

    Returns:
        Process exit code, 0 on success and 1 for a runtime error
    """
    interp = oops.Interpreter(max_depth=max_depth)
    result = interp.evaluate_program(program)
    if isinstance(result, oops.OopsError):
        report_error(result, filename)
        return 1
    if show_result:
        print(result.unparse())
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="oops",
        description="Oops language interpreter")
    parser.add_argument("source", nargs="?",
        help="Program file to run, starts the REPL when omitted")
    parser.add_argument("-c", dest="code", metavar="CODE",
        help="Run source text and show the value of the last statement")
    parser.add_argument("--ast", action="store_true",
        help="Show the parsed AST instead of running")
    parser.add_argument("--lark", action="store_true",
        help="Show Lark parse tree instead of running")
    parser.add_argument("--pos", action="store_true",
        help="Show line:column positions with --lark")
    parser.add_argument("--trace", action="store_true",
        help="Log every message send while running")
    parser.add_argument("--max-depth", type=int, default=oops.DEFAULT_MAX_DEPTH,
        help="Deepest evaluation stack before StackOverflow (default %(default)s)")

    args = parser.parse_args(argv)

    if args.trace:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.code is not None:
        if args.source:
            parser.error("-c cannot be combined with a source file")
        source, filename = args.code, "<string>"
    elif args.source:
        filepath = pathlib.Path(args.source)
        try:
            source = filepath.read_text(encoding="utf-8")
        except OSError as e:
            parser.error(f"cannot read {args.source}: {e.strerror}")
        filename = args.source
    else:
        if args.ast or args.lark:
            parser.error("--ast and --lark need a source file or -c")
        from . import repl
        repl.repl(max_depth=args.max_depth)
        return 0

    try:
        program = oops.parse_program(source, filename=filename)
    except oops.ParseError as e:
        report_error(e, filename)
        return 1

    if args.lark:
        tree = oops._parser._get_parser("start").parse(source)
        prettylark(tree, show_positions=args.pos)
        return 0

    if args.ast:
        program.print_tree()
        return 0

    return run_program(program, filename, max_depth=args.max_depth,
                       show_result=args.code is not None)


if __name__ == "__main__":
    sys.exit(main())
