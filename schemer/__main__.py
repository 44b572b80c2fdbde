"""Console for schemer: `python -m schemer [file ...]`.

Loads each file in batch mode, then reads lines from stdin and prints one
record per top-level form (error records are prefixed with `!`).
"""

import argparse
import logging
import sys
from pathlib import Path

from schemer.config import get_log_level, get_recursion_limit
from schemer.errors import SchemeError
from schemer.interpreter import Interpreter

PROMPT = "schemer> "


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="schemer", description="A small Scheme interpreter")
    parser.add_argument("files", nargs="*", help="source files to load before the console starts")
    parser.add_argument("--no-prelude", action="store_true", help="start without the standard prelude")
    parser.add_argument("--document", action="store_true", help="treat files as documents with <script language=\"scheme\"> blocks")
    args = parser.parse_args(argv)

    logging.basicConfig(level=get_log_level(), format="%(levelname)s %(name)s: %(message)s")
    limit = get_recursion_limit()
    if limit is not None:
        sys.setrecursionlimit(limit)

    interp = Interpreter(prelude=None if args.no_prelude else 'auto')

    for name in args.files:
        text = Path(name).read_text(encoding="utf-8")
        try:
            if args.document:
                interp.load_document(text)
            else:
                interp.load(text)
        except SchemeError as exc:
            print(f"! {name}: {exc}", file=sys.stderr)
            return 1

    if args.files and not sys.stdin.isatty():
        return 0

    interactive = sys.stdin.isatty()
    while True:
        try:
            line = input(PROMPT if interactive else "")
        except EOFError:
            break
        for record in interp.repl(line):
            print(f"! {record.text}" if record.is_error else record.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
