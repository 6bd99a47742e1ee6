#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdoffice/api.py
"""Public conversion functions.

One function per supported direction, plus two dispatching entry points that
pick the converter from an explicit format name or from the file extension
(or, for raw bytes, the content signature).

Every function is independent and stateless: each call reads its whole
source, builds its own private structures, and either returns a complete
result or raises :class:`~mdoffice.exceptions.ConversionError`.

"""

from __future__ import annotations

import logging
from typing import Optional

from mdoffice.converter_registry import get_converter
from mdoffice.converters import DocxConverter, PdfConverter, PptxConverter, SpreadsheetConverter
from mdoffice.options import BaseConverterOptions, DocxOptions, PdfOptions, PptxOptions, SpreadsheetOptions
from mdoffice.utils.io_utils import Destination, Source, is_path_like

logger = logging.getLogger(__name__)


def docx_to_markdown(source: Source, options: Optional[DocxOptions] = None) -> str:
    """Convert a DOCX document to Markdown.

    Parameters
    ----------
    source : str, Path or bytes
        DOCX file path or raw bytes
    options : DocxOptions, optional
        Conversion options

    Returns
    -------
    str
        Markdown text

    Examples
    --------
        >>> markdown = docx_to_markdown("report.docx")

    """
    return DocxConverter(options).to_markdown(source)


def markdown_to_docx(markdown: str, destination: Destination, options: Optional[DocxOptions] = None) -> None:
    """Write Markdown headings, paragraphs and tables to a DOCX document."""
    DocxConverter(options).from_markdown(markdown, destination)


def spreadsheet_to_markdown(source: Source, options: Optional[SpreadsheetOptions] = None) -> str:
    """Convert a workbook (xlsx, xlsm, ods, csv or tsv) to Markdown.

    Each sheet with at least one column becomes a ``##`` section holding a
    pipe table. Sheets longer than ``options.max_rows`` data rows are
    truncated with a note.

    Parameters
    ----------
    source : str, Path or bytes
        Workbook file path or raw bytes
    options : SpreadsheetOptions, optional
        Conversion options

    Returns
    -------
    str
        Markdown text

    """
    return SpreadsheetConverter(options).to_markdown(source)


xlsx_to_markdown = spreadsheet_to_markdown


def markdown_to_xlsx(markdown: str, destination: Destination, options: Optional[SpreadsheetOptions] = None) -> None:
    """Write the pipe tables in ``markdown`` to an xlsx workbook, one sheet per table."""
    SpreadsheetConverter(options).from_markdown(markdown, destination)


def pptx_to_markdown(source: Source, options: Optional[PptxOptions] = None) -> str:
    """Convert a PPTX presentation to Markdown, one section per slide."""
    return PptxConverter(options).to_markdown(source)


def markdown_to_pptx(markdown: str, destination: Destination, options: Optional[PptxOptions] = None) -> None:
    """Write Markdown to a PPTX presentation, one slide per top-level heading."""
    PptxConverter(options).from_markdown(markdown, destination)


def pdf_to_markdown(source: Source, options: Optional[PdfOptions] = None) -> str:
    """Extract the plain text of a PDF, prefixed with an import notice."""
    return PdfConverter(options).to_markdown(source)


def convert_to_markdown(
    source: Source,
    format: Optional[str] = None,
    options: Optional[BaseConverterOptions] = None,
) -> str:
    """Convert any supported container to Markdown.

    Parameters
    ----------
    source : str, Path or bytes
        File path or raw bytes
    format : str, optional
        Registered format name; detected from ``source`` when omitted
    options : BaseConverterOptions, optional
        Options matching the resolved format

    Returns
    -------
    str
        Markdown text

    Raises
    ------
    ConversionError
        If the format is unknown or cannot be detected, or conversion fails

    """
    converter = get_converter(format=format, path=source, options=options)
    logger.debug("Converting to Markdown with %s converter", converter.format_name)
    return converter.to_markdown(source)


def convert_from_markdown(
    markdown: str,
    destination: Destination,
    format: Optional[str] = None,
    options: Optional[BaseConverterOptions] = None,
) -> None:
    """Convert Markdown to any exportable container.

    Parameters
    ----------
    markdown : str
        Markdown source
    destination : str, Path or IO[bytes]
        Output file path or binary stream; streams require ``format``
    format : str, optional
        Registered format name; detected from the destination path when omitted
    options : BaseConverterOptions, optional
        Options matching the resolved format

    Raises
    ------
    ConversionError
        If the format is unknown, import-only, or conversion fails

    """
    path = destination if is_path_like(destination) else None
    converter = get_converter(format=format, path=path, options=options)  # type: ignore[arg-type]
    logger.debug("Converting from Markdown with %s converter", converter.format_name)
    converter.from_markdown(markdown, destination)
