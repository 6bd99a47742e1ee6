#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdoffice/cli.py
"""Command-line interface for mdoffice.

Examples
--------
Convert a document to Markdown on stdout:
    $ mdoffice to-md report.docx

Write the Markdown to a file:
    $ mdoffice to-md budget.xlsx -o budget.md

Build a presentation from Markdown:
    $ mdoffice from-md talk.md -o talk.pptx

Force a format when the extension is ambiguous or missing:
    $ mdoffice to-md download.bin --format pdf

List supported formats:
    $ mdoffice formats
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mdoffice import __version__
from mdoffice.api import convert_from_markdown, convert_to_markdown
from mdoffice.converter_registry import registry
from mdoffice.exceptions import ConversionError
from mdoffice.utils.io_utils import read_source_bytes, write_content

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_CONVERSION_ERROR = 1

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
PLAIN_FORMAT = "%(levelname)s: %(message)s"


def _configure_logging(log_level: str, log_file: Optional[str] = None, trace_mode: bool = False) -> None:
    """Send log records to stderr and, when ``log_file`` is given, to that file as well."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=log_level,
        format=TRACE_FORMAT if trace_mode else PLAIN_FORMAT,
        datefmt="%H:%M:%S" if trace_mode else None,
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with its subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser

    """
    parser = argparse.ArgumentParser(
        prog="mdoffice",
        description="Convert office documents to and from Markdown.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        type=str.upper,
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log messages to this file")
    parser.add_argument("--trace", action="store_true", help="Include timestamps and logger names in log output")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    to_md = subparsers.add_parser("to-md", help="Convert a document to Markdown")
    to_md.add_argument("input", help="Input document")
    to_md.add_argument("-o", "--out", help="Output Markdown file (default: stdout)")
    to_md.add_argument("--format", help="Input format name (default: detected from the file extension)")
    to_md.set_defaults(handler=handle_to_markdown)

    from_md = subparsers.add_parser("from-md", help="Convert Markdown to a document")
    from_md.add_argument("input", help="Input Markdown file")
    from_md.add_argument("-o", "--out", required=True, help="Output document")
    from_md.add_argument("--format", help="Output format name (default: detected from the output extension)")
    from_md.set_defaults(handler=handle_from_markdown)

    formats = subparsers.add_parser("formats", help="List supported formats")
    formats.set_defaults(handler=handle_formats)

    return parser


def handle_to_markdown(args: argparse.Namespace, console: Console) -> int:
    """Convert ``args.input`` to Markdown and write it to ``args.out`` or stdout."""
    markdown = convert_to_markdown(args.input, format=args.format)
    if args.out:
        write_content(markdown, args.out)
        logger.info("Wrote %s", args.out)
    else:
        sys.stdout.write(markdown)
    return EXIT_SUCCESS


def handle_from_markdown(args: argparse.Namespace, console: Console) -> int:
    """Convert the Markdown file ``args.input`` to the document ``args.out``."""
    data = read_source_bytes(args.input)
    try:
        markdown = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ConversionError.wrap("Input is not valid UTF-8", e) from e

    convert_from_markdown(markdown, args.out, format=args.format)
    logger.info("Wrote %s", args.out)
    return EXIT_SUCCESS


def handle_formats(args: argparse.Namespace, console: Console) -> int:
    """Print a table of the registered formats."""
    metadata_list = registry.all_metadata()

    table = Table(title=f"mdoffice Supported Formats ({len(metadata_list)} formats)")
    table.add_column("Format", style="cyan", no_wrap=True)
    table.add_column("Extensions", style="yellow")
    table.add_column("Capabilities", style="blue")
    table.add_column("Description", style="white")

    for metadata in metadata_list:
        capabilities = "Import+Export" if metadata.can_export else "Import"
        table.add_row(metadata.format_name, ", ".join(metadata.extensions), capabilities, metadata.description)

    console.print(table)
    return EXIT_SUCCESS


def main(argv: Optional[list[str]] = None) -> int:
    """Run the command-line interface.

    Parameters
    ----------
    argv : list[str], optional
        Arguments excluding the program name; defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Exit code: 0 on success, 1 when a conversion fails

    """
    parser = create_parser()
    args = parser.parse_args(argv)
    try:
        _configure_logging(args.log_level, log_file=args.log_file, trace_mode=args.trace)
    except OSError as e:
        parser.error(f"cannot open log file: {e}")

    console = Console()
    try:
        return args.handler(args, console)
    except ConversionError as e:
        Console(stderr=True).print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        return EXIT_CONVERSION_ERROR


if __name__ == "__main__":
    sys.exit(main())
