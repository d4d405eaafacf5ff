"""Quill command-line interface.

    quill [--log-level LEVEL] [--strict] [-e EXPR ...] [PROGRAM ...]

Loads any prelude files (QUILL_PRELUDE_PATH) and then each PROGRAM into one
environment. With -e, evaluates each EXPR and exits; otherwise reads one
expression per line from stdin. A failing request prints `error: ...` and the
next one proceeds.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Sequence, TextIO

from quill import __version__
from quill.config import get_log_level, get_prelude_paths, get_recursion_limit
from quill.errors import QuillError
from quill.interpreter import Interpreter

PROMPT = "> "


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="quill", description="Evaluate Quill expressions")
    parser.add_argument("programs", nargs="*", type=Path, metavar="PROGRAM", help="Program files to load.")
    parser.add_argument(
        "-e",
        "--eval",
        dest="expressions",
        action="append",
        metavar="EXPR",
        help="Evaluate EXPR and print the result (repeatable).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat unparsed program text as an error instead of a warning.",
    )
    parser.add_argument(
        "--log-level",
        default=get_log_level(),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default from QUILL_LOG_LEVEL, else WARNING).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def evaluate_line(interp: Interpreter, line: str) -> tuple[bool, str]:
    """Run one request. Returns (ok, text to print)."""
    try:
        return True, interp.eval_to_text(line)
    except QuillError as exc:
        return False, f"error: {exc}"
    except RecursionError:
        return False, "error: maximum recursion depth exceeded"


def run_repl(interp: Interpreter, lines: Iterable[str], out: TextIO, prompt: str = "") -> int:
    """Evaluate each non-blank line; returns the number of failed requests."""
    failures = 0
    if prompt:
        out.write(prompt)
        out.flush()
    for raw in lines:
        line = raw.strip()
        if line.startswith(":type"):
            name = line[len(":type"):].strip()
            decl = interp.declaration(name)
            out.write(f"{decl}\n" if decl is not None else f"no declaration for '{name}'\n")
        elif line:
            ok, text = evaluate_line(interp, line)
            failures += not ok
            out.write(text + "\n")
        if prompt:
            out.write(prompt)
            out.flush()
    return failures


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=args.log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    limit = get_recursion_limit()
    if limit is not None:
        sys.setrecursionlimit(limit)

    paths = [*get_prelude_paths(), *args.programs]
    try:
        interp = Interpreter.from_paths(paths, strict=args.strict)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read program: {exc}", file=sys.stderr)
        return 2
    except QuillError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.expressions:
        failures = 0
        for expression in args.expressions:
            ok, text = evaluate_line(interp, expression)
            failures += not ok
            print(text)
        return 1 if failures else 0

    prompt = PROMPT if sys.stdin.isatty() else ""
    run_repl(interp, sys.stdin, sys.stdout, prompt)
    return 0


if __name__ == "__main__":
    sys.exit(main())
