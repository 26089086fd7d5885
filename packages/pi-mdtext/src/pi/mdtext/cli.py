"""Entry point for the pi-mdtext CLI."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, TextIO

from pi.mdtext.convert import markdown_to_text, markdown_to_text_no_metadata
from pi.mdtext.metadata import Metadata
from pi.mdtext.options import options_from_env
from pi.mdtext.table import Align, TableAlignment

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pi-mdtext",
        description="Render markdown as word-wrapped terminal text",
    )
    parser.add_argument("file", nargs="?", help="Markdown file to read (default: stdin)")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    parser.add_argument(
        "-w",
        "--width",
        type=int,
        default=None,
        help="Line width; 0 for the terminal width, negative for terminal width minus N",
    )
    parser.add_argument("--indent", default="", help="Prefix for the first output line")
    parser.add_argument(
        "--continuation-indent", default="", help="Prefix for every later output line"
    )
    parser.add_argument(
        "--table-align",
        choices=[a.value for a in Align],
        default=Align.LEFT.value,
        help="Alignment of table cell text (default: left)",
    )
    parser.add_argument(
        "--markup-align",
        action="store_true",
        help="Honor column alignment written in table markup",
    )
    parser.add_argument("--no-metadata", action="store_true", help="Do not look for leading metadata")
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    return parser.parse_args(argv)


def read_input(path: str | None) -> str:
    if path is None or path == "-":
        data = sys.stdin.buffer.read()
    else:
        with open(path, "rb") as f:
            data = f.read()
    return data.decode("utf-8", errors="replace")


def write_output(metadata: Metadata, body: str, stream: TextIO) -> None:
    for name, value in metadata:
        stream.write(f"{name}:\n    {value}\n")
    stream.write("\n")
    stream.write(body)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    overrides: dict[str, Any] = {
        "first_line_prefix": args.indent,
        "continuation_prefix": args.continuation_indent,
        "table_alignment": TableAlignment(
            default=Align(args.table_align), honor_markup=args.markup_align
        ),
    }
    if args.no_color:
        overrides["color"] = False
    if args.width is not None:
        overrides["width"] = args.width
    options = options_from_env(**overrides)

    try:
        markdown = read_input(args.file)
    except OSError as e:
        print(f"Error: cannot read {args.file}: {e}", file=sys.stderr)
        sys.exit(1)

    if args.no_metadata:
        metadata: Metadata = []
        body = markdown_to_text_no_metadata(markdown, options)
    else:
        metadata, body = markdown_to_text(markdown, options)
    logger.debug("rendered %d metadata items, %d chars of body", len(metadata), len(body))

    write_output(metadata, body, sys.stdout)


if __name__ == "__main__":
    main()
