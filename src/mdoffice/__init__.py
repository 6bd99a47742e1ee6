#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdoffice/__init__.py
"""mdoffice - bidirectional conversion between Markdown and office formats.

mdoffice converts word-processing documents (DOCX), spreadsheets (XLSX,
XLSM, ODS, CSV, TSV) and presentations (PPTX) to and from Markdown, and
extracts the plain text of PDF documents as Markdown.

Only the structure common to Markdown and each format survives a
conversion: headings, bold and italic runs, and pipe tables for documents;
one table per sheet for spreadsheets; a title and body lines per slide for
presentations.

Examples
--------
Import a document:

    >>> from mdoffice import docx_to_markdown
    >>> print(docx_to_markdown("report.docx"))

Export with the format picked from the file extension:

    >>> from mdoffice import convert_from_markdown
    >>> convert_from_markdown("# Intro\\nHello", "deck.pptx")

"""

from mdoffice.api import (
    convert_from_markdown,
    convert_to_markdown,
    docx_to_markdown,
    markdown_to_docx,
    markdown_to_pptx,
    markdown_to_xlsx,
    pdf_to_markdown,
    pptx_to_markdown,
    spreadsheet_to_markdown,
    xlsx_to_markdown,
)
from mdoffice.converter_registry import registry
from mdoffice.exceptions import ConversionError
from mdoffice.options import DocxOptions, PdfOptions, PptxOptions, SpreadsheetOptions

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "docx_to_markdown",
    "markdown_to_docx",
    "spreadsheet_to_markdown",
    "xlsx_to_markdown",
    "markdown_to_xlsx",
    "pptx_to_markdown",
    "markdown_to_pptx",
    "pdf_to_markdown",
    "convert_to_markdown",
    "convert_from_markdown",
    # Registry system
    "registry",
    # Options
    "DocxOptions",
    "SpreadsheetOptions",
    "PptxOptions",
    "PdfOptions",
    # Exceptions
    "ConversionError",
]
