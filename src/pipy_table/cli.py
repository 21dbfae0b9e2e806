"""pipy-table CLI - render delimited text as a terminal table."""

import argparse
import csv
import logging
import sys

from .errors import TableError
from .table import Table
from .utils import ALIGNMENTS


def read_rows(stream, delimiter: str) -> list[list[str]]:
    """Read delimited rows, skipping blank lines."""
    return [row for row in csv.reader(stream, delimiter=delimiter) if row]


def build_options(args) -> dict:
    """Translate parsed arguments into table options."""
    options: dict = {"word_wrap": args.wrap or args.hard_wrap}
    if args.hard_wrap:
        options["wrap_on_word_boundary"] = False
    if args.widths:
        options["col_widths"] = args.widths
    if args.aligns:
        options["col_aligns"] = args.aligns
    style: dict = {"compact": args.compact}
    if args.no_color:
        style["head"] = []
        style["border"] = []
    options["style"] = style
    if args.ellipsis is not None:
        options["truncate"] = args.ellipsis
    return options


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="pipy-table",
        description="pipy-table: render CSV or other delimited text as a table",
    )
    parser.add_argument("file", nargs="?", help="Input file (default: stdin)")
    parser.add_argument("--delimiter", "-d", default=",", help="Field delimiter (default: ,)")
    parser.add_argument(
        "--no-header", action="store_true", help="Treat the first row as data"
    )
    parser.add_argument(
        "--width",
        "-w",
        type=int,
        action="append",
        dest="widths",
        help="Column width including padding (repeat per column)",
    )
    parser.add_argument(
        "--align",
        "-a",
        choices=ALIGNMENTS,
        action="append",
        dest="aligns",
        help="Column alignment (repeat per column)",
    )
    parser.add_argument("--wrap", action="store_true", help="Wrap long cells at word boundaries")
    parser.add_argument("--hard-wrap", action="store_true", help="Wrap and split long words")
    parser.add_argument("--compact", action="store_true", help="No lines between body rows")
    parser.add_argument("--no-color", action="store_true", help="Disable header/border colors")
    parser.add_argument("--ellipsis", help="Truncation marker (default: …)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.delimiter == "\\t":
        args.delimiter = "\t"
    if len(args.delimiter) != 1:
        print(
            f"error: delimiter must be a single character, got {args.delimiter!r}",
            file=sys.stderr,
        )
        return 1

    try:
        if args.file:
            with open(args.file, newline="", encoding="utf-8") as f:
                rows = read_rows(f, args.delimiter)
        else:
            rows = read_rows(sys.stdin, args.delimiter)
    except (OSError, UnicodeDecodeError) as e:
        print(f"error: cannot read {args.file or 'stdin'}: {e}", file=sys.stderr)
        return 1

    options = build_options(args)
    if rows and not args.no_header:
        options["head"] = rows.pop(0)

    try:
        table = Table(options)
        table.push(*rows)
        output = table.render()
    except TableError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if output:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
