"""Command-line entry point: `keikaku FILE`.

Reads one source file, parses it completely, then evaluates each top-level
form and prints its value. `--ast` prints the parsed forms instead.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from keikaku import __version__
from keikaku.config import get_log_level
from keikaku.debug_utils.pprint import format_value, pprint_program
from keikaku.errors import EvalError, ParseError
from keikaku.interpreter import Interpreter

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="keikaku", description="Evaluate a keikaku source file")
    parser.add_argument("file", help="source file to run")
    parser.add_argument("--ast", action="store_true", help="print the parsed forms instead of evaluating")
    parser.add_argument("--spans", action="store_true", help="with --ast, annotate every node with its span")
    parser.add_argument("--max-depth", type=int, default=None,
                        help="evaluation depth limit (default: $KEIKAKU_MAX_EVAL_DEPTH or 200)")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def abort(msg: str) -> int:
    print(msg, file=sys.stderr)
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        with open(args.file, encoding="utf-8") as f:
            source = f.read()
    except OSError as e:
        return abort(f"Could not open source file: {e}")
    except UnicodeDecodeError as e:
        return abort(f"Failed to read source file: {e}")

    if args.max_depth is not None and args.max_depth <= 0:
        return abort("--max-depth must be positive")

    try:
        interp = Interpreter(max_depth=args.max_depth)
    except ValueError as e:
        return abort(f"Configuration error: {e}")

    try:
        exprs = interp.read(source, args.file)
    except ParseError as e:
        return abort(f"Parse error: {e}")

    if args.ast:
        try:
            text = pprint_program(exprs, {"max_line_length": 80, "show_spans": args.spans})
        except RecursionError:
            return abort("AST too deeply nested to print")
        print(text)
        return 0

    try:
        for expr in exprs:
            print(format_value(interp.evaluator.eval(expr)))
    except EvalError as e:
        return abort(f"Evaluation error: {e}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
