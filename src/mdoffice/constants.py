#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdoffice/constants.py
"""Shared constants for the mdoffice converters.

All tables here are read-only lookup data shared between conversion calls.

"""

from __future__ import annotations

import re
from typing import Final

# Word-processing heading styles ---------------------------------------------

HEADING_LEVELS: Final[range] = range(1, 7)

# Accepts "Heading1" and "Heading 1" spellings, compared case-insensitively
HEADING_STYLE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^heading ?([1-6])$")

# Spreadsheet -----------------------------------------------------------------

DEFAULT_MAX_ROWS_PER_SHEET: Final[int] = 500
DEFAULT_FALLBACK_SHEET_NAME: Final[str] = "Sheet1"
DEFAULT_TABLE_SHEET_PREFIX: Final[str] = "Table"

# Integral floats at or above this magnitude skip the plain integer rendering
INTEGRAL_FLOAT_LIMIT: Final[float] = 1e15

SPREADSHEET_EXTENSIONS: Final[dict[str, str]] = {
    ".xlsx": "xlsx",
    ".xlsm": "xlsx",
    ".ods": "ods",
    ".csv": "csv",
    ".tsv": "tsv",
}

ZIP_MAGIC: Final[bytes] = b"PK\x03\x04"
# Compound File Binary header of legacy .xls/.doc/.ppt files
OLE_MAGIC: Final[bytes] = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
ODS_MIMETYPE: Final[bytes] = b"application/vnd.oasis.opendocument.spreadsheet"

# Presentation ----------------------------------------------------------------

DEFAULT_PRESENTATION_TITLE: Final[str] = "Presentation"
DEFAULT_SLIDE_ID_BASE: Final[int] = 256
DEFAULT_SLIDE_WIDTH_EMU: Final[int] = 9144000
DEFAULT_SLIDE_HEIGHT_EMU: Final[int] = 6858000
SLIDE_MASTER_ID: Final[int] = 2147483648
SLIDE_LAYOUT_ID: Final[int] = 2147483649

SLIDE_ENTRY_PREFIX: Final[str] = "ppt/slides/slide"
SLIDE_ENTRY_SUFFIX: Final[str] = ".xml"

NS_PRESENTATION: Final[str] = "http://schemas.openxmlformats.org/presentationml/2006/main"
NS_DRAWING: Final[str] = "http://schemas.openxmlformats.org/drawingml/2006/main"
NS_RELATIONSHIPS: Final[str] = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
NS_PACKAGE_RELATIONSHIPS: Final[str] = "http://schemas.openxmlformats.org/package/2006/relationships"
NS_CONTENT_TYPES: Final[str] = "http://schemas.openxmlformats.org/package/2006/content-types"

REL_TYPE_OFFICE_DOCUMENT: Final[str] = f"{NS_RELATIONSHIPS}/officeDocument"
REL_TYPE_SLIDE: Final[str] = f"{NS_RELATIONSHIPS}/slide"
REL_TYPE_SLIDE_LAYOUT: Final[str] = f"{NS_RELATIONSHIPS}/slideLayout"
REL_TYPE_SLIDE_MASTER: Final[str] = f"{NS_RELATIONSHIPS}/slideMaster"

CT_RELATIONSHIPS: Final[str] = "application/vnd.openxmlformats-package.relationships+xml"
CT_XML: Final[str] = "application/xml"
CT_PRESENTATION: Final[str] = "application/vnd.openxmlformats-officedocument.presentationml.presentation.main+xml"
CT_SLIDE: Final[str] = "application/vnd.openxmlformats-officedocument.presentationml.slide+xml"
CT_SLIDE_LAYOUT: Final[str] = "application/vnd.openxmlformats-officedocument.presentationml.slideLayout+xml"
CT_SLIDE_MASTER: Final[str] = "application/vnd.openxmlformats-officedocument.presentationml.slideMaster+xml"

# Substring markers used by the tolerant slide text scan
XML_PARAGRAPH_MARKER: Final[str] = "<a:p>"
XML_TEXT_OPEN_MARKER: Final[str] = "<a:t>"
XML_TEXT_CLOSE_MARKER: Final[str] = "</a:t>"

# The five predefined XML entities; "&amp;" must be decoded last
XML_ENTITY_DECODE: Final[tuple[tuple[str, str], ...]] = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&apos;", "'"),
    ("&amp;", "&"),
)

# PDF ------------------------------------------------------------------------

DEFAULT_PDF_IMPORT_NOTICE: Final[str] = (
    "> **Import Notice**: This PDF was imported as plain text.\n"
    "> Images, tables, and complex formatting have been removed.\n\n"
)
