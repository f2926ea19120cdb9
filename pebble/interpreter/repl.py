"""
Command line driver for Pebble.

    pebble FILE      run a program; the first error stops it with status 1
    pebble           interactive session

Interactive input keeps reading continuation lines while parentheses are
unbalanced or the parser ran out of input mid-form (a trailing quote). Two commands are recognised on their own line: `env` lists the
current bindings and `exit` ends the session (as does end of input).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, TextIO

from pebble import __version__, config
from pebble.errors import PebbleError, PebbleSyntaxError
from pebble.interpreter import Interpreter
from pebble.printer import to_string
from pebble.reader.lexer import lex
from pebble.reader.parser import parse
from pebble.types.nil import Nil

logger = logging.getLogger(__name__)

PROMPT = "> "
CONTINUATION_PROMPT = "... "


def paren_depth(source: str) -> int:
    """Open minus close parens, ignoring those inside strings and comments."""
    depth = 0
    for tok_type, _ in lex(source):
        if tok_type == "lparen":
            depth += 1
        elif tok_type == "rparen":
            depth -= 1
    return depth


def needs_more_input(source: str) -> bool:
    """True while `source` is an unfinished form that later lines could complete."""
    if paren_depth(source) > 0:
        return True
    try:
        parse(source)
    except PebbleSyntaxError as ex:
        return ex.incomplete
    return False


def print_env(interp: Interpreter, out: TextIO) -> None:
    for name, value in sorted(interp.env.names(), key=lambda kv: kv[0].id):
        print(f"{name} = {to_string(value)}", file=out)


def run_source(interp: Interpreter, source: str, out: TextIO, err: TextIO, echo: bool = True) -> bool:
    """Evaluate every form in `source`, echoing non-Nil results.

    Returns False if a form failed; forms after the failure are not run.
    """
    try:
        for result in interp.eval_forms(source):
            if echo and result is not Nil:
                print(to_string(result), file=out)
    except PebbleError as ex:
        logger.debug("evaluation failed: %r", ex)
        print(f"Error: {ex}", file=err)
        return False
    return True


def run_file(interp: Interpreter, path: Path, out: TextIO, err: TextIO) -> int:
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as ex:
        print(f"Error: cannot read {path}: {ex.strerror}", file=err)
        return 1
    logger.info("running %s", path)
    return 0 if run_source(interp, source, out, err, echo=False) else 1


def repl(
    interp: Interpreter,
    read_line: Callable[[str], str] = input,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> None:
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    buffer: list[str] = []
    while True:
        try:
            line = read_line(CONTINUATION_PROMPT if buffer else PROMPT)
        except EOFError:
            print(file=out)
            break
        except KeyboardInterrupt:
            # drop any partial form and start over
            print(file=out)
            buffer = []
            continue

        if not buffer:
            command = line.strip()
            if not command:
                continue
            if command == "exit":
                break
            if command == "env":
                print_env(interp, out)
                continue

        buffer.append(line)
        source = "\n".join(buffer)
        if needs_more_input(source):
            continue
        buffer = []
        run_source(interp, source, out, err)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pebble", description="Pebble Lisp interpreter")
    parser.add_argument("file", nargs="?", type=Path, help="program to run (omit for an interactive session)")
    parser.add_argument("--max-depth", type=int, default=None,
                        help="maximum nesting of non-tail evaluation (default: $PEBBLE_MAX_DEPTH or 400)")
    parser.add_argument("--log-level", default=None,
                        help="logging level name (default: $PEBBLE_LOG_LEVEL or WARNING)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    level = config.get_log_level()
    if args.log_level:
        level = logging.getLevelName(args.log_level.upper())
        if not isinstance(level, int):
            print(f"Error: unknown log level {args.log_level!r}", file=sys.stderr)
            return 2
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.max_depth is not None and args.max_depth <= 0:
        print("Error: --max-depth must be positive", file=sys.stderr)
        return 2
    interp = Interpreter(max_depth=args.max_depth)

    if args.file is not None:
        return run_file(interp, args.file, sys.stdout, sys.stderr)
    repl(interp)
    return 0


if __name__ == "__main__":
    sys.exit(main())
