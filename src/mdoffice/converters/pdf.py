#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdoffice/converters/pdf.py
"""PDF to Markdown (import only).

Text is extracted page by page with PyMuPDF and concatenated in page order.
No layout analysis is attempted: headings, tables and images are not
recovered, and the output is prefixed with a blockquote notice saying so.

Examples
--------
    >>> from mdoffice.converters.pdf import PdfConverter
    >>> markdown = PdfConverter().to_markdown("report.pdf")
    >>> markdown.startswith("> **Import Notice**")
    True

"""

from __future__ import annotations

import logging

from mdoffice.converters.base import BaseConverter
from mdoffice.exceptions import ConversionError
from mdoffice.options import PdfOptions
from mdoffice.utils.io_utils import Source, read_source_bytes

logger = logging.getLogger(__name__)


def extract_pdf_text(data: bytes) -> str:
    """Return the concatenated plain text of every page.

    Parameters
    ----------
    data : bytes
        PDF file content

    Returns
    -------
    str
        Page texts joined in page order

    Raises
    ------
    ConversionError
        If the document cannot be opened, is password protected, or text
        extraction fails

    """
    import fitz

    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as e:
        raise ConversionError.wrap("Failed to read PDF", e) from e

    with doc:
        if doc.needs_pass:
            raise ConversionError("Failed to read PDF: document is password protected")
        try:
            pages = [page.get_text() for page in doc]
        except Exception as e:
            raise ConversionError.wrap("Failed to extract PDF text", e) from e

    logger.debug("Extracted text from %d PDF pages", len(pages))
    return "".join(pages)


class PdfConverter(BaseConverter[PdfOptions]):
    """Convert PDF documents to Markdown.

    Export is not supported; :meth:`from_markdown` raises
    :class:`~mdoffice.exceptions.ConversionError`.

    Parameters
    ----------
    options : PdfOptions or None, default = None
        Conversion options

    """

    format_name = "pdf"
    options_class = PdfOptions

    def to_markdown(self, source: Source) -> str:
        """Convert a PDF document to Markdown.

        Parameters
        ----------
        source : str, Path or bytes
            PDF file path or raw bytes

        Returns
        -------
        str
            Import notice followed by the extracted text

        """
        return self.options.import_notice + extract_pdf_text(read_source_bytes(source))
