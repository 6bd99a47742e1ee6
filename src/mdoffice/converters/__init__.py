#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdoffice/converters/__init__.py
"""Format converters.

One converter class per supported container format, each implementing the
:class:`~mdoffice.converters.base.BaseConverter` capability interface.

"""

from mdoffice.converters.base import BaseConverter
from mdoffice.converters.docx import DocxConverter
from mdoffice.converters.pdf import PdfConverter
from mdoffice.converters.pptx import PptxConverter
from mdoffice.converters.spreadsheet import SpreadsheetConverter

__all__ = [
    "BaseConverter",
    "DocxConverter",
    "PdfConverter",
    "PptxConverter",
    "SpreadsheetConverter",
]
