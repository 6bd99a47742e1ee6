#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdoffice/options.py
"""Configuration options for the mdoffice converters.

Each converter takes one frozen options dataclass. Defaults reproduce the
documented behavior, so passing ``None`` is always valid. Use
:meth:`CloneFrozenMixin.create_updated` to derive a modified copy.

"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, TypeVar

from mdoffice.constants import (
    DEFAULT_FALLBACK_SHEET_NAME,
    DEFAULT_MAX_ROWS_PER_SHEET,
    DEFAULT_PDF_IMPORT_NOTICE,
    DEFAULT_PRESENTATION_TITLE,
    DEFAULT_SLIDE_HEIGHT_EMU,
    DEFAULT_SLIDE_ID_BASE,
    DEFAULT_SLIDE_WIDTH_EMU,
    DEFAULT_TABLE_SHEET_PREFIX,
)

_T = TypeVar("_T", bound="CloneFrozenMixin")


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self: _T, **kwargs: Any) -> _T:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseConverterOptions(CloneFrozenMixin):
    """Base class for all converter options."""


@dataclass(frozen=True)
class DocxOptions(BaseConverterOptions):
    """Configuration options for word-processing conversion.

    Parameters
    ----------
    table_style : str or None, default None
        Name of a table style from the default template applied to exported
        tables (e.g. "Table Grid"). None leaves the template default.

    """

    table_style: str | None = field(
        default=None,
        metadata={"help": "Table style name applied to exported tables"},
    )


@dataclass(frozen=True)
class SpreadsheetOptions(BaseConverterOptions):
    """Configuration options for spreadsheet conversion.

    Parameters
    ----------
    max_rows : int, default 500
        Maximum number of data rows (excluding the header) rendered per sheet.
        Remaining rows are dropped and an omission note is appended.
    render_formulas : bool, default True
        Render the cached value of formula cells instead of the formula.
    fallback_sheet_name : str, default "Sheet1"
        Sheet name used on export when the Markdown contains no table.
    table_sheet_prefix : str, default "Table"
        Prefix of the 1-based sheet names created for each exported table.

    """

    max_rows: int = field(
        default=DEFAULT_MAX_ROWS_PER_SHEET,
        metadata={"help": "Maximum data rows rendered per sheet", "type": int},
    )
    render_formulas: bool = field(
        default=True,
        metadata={"help": "Use cached formula results instead of formula text"},
    )
    fallback_sheet_name: str = field(
        default=DEFAULT_FALLBACK_SHEET_NAME,
        metadata={"help": "Sheet name used when the Markdown has no tables"},
    )
    table_sheet_prefix: str = field(
        default=DEFAULT_TABLE_SHEET_PREFIX,
        metadata={"help": "Prefix for sheets created from Markdown tables"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If ``max_rows`` is not positive.

        """
        if self.max_rows <= 0:
            raise ValueError(f"max_rows must be positive, got {self.max_rows}")


@dataclass(frozen=True)
class PptxOptions(BaseConverterOptions):
    """Configuration options for presentation conversion.

    Parameters
    ----------
    default_title : str, default "Presentation"
        Title of the single slide built when the Markdown has no top-level heading.
    slide_id_base : int, default 256
        First id in the slide list; subsequent slides count up from it.
    slide_width : int, default 9144000
        Slide width in EMU.
    slide_height : int, default 6858000
        Slide height in EMU.

    """

    default_title: str = DEFAULT_PRESENTATION_TITLE
    slide_id_base: int = DEFAULT_SLIDE_ID_BASE
    slide_width: int = DEFAULT_SLIDE_WIDTH_EMU
    slide_height: int = DEFAULT_SLIDE_HEIGHT_EMU

    def __post_init__(self) -> None:
        """Validate slide geometry and id range."""
        # Slide ids below 256 are reserved by the presentation schema
        if self.slide_id_base < 256:
            raise ValueError(f"slide_id_base must be at least 256, got {self.slide_id_base}")
        if self.slide_width <= 0 or self.slide_height <= 0:
            raise ValueError(f"slide size must be positive, got {self.slide_width}x{self.slide_height}")


@dataclass(frozen=True)
class PdfOptions(BaseConverterOptions):
    """Configuration options for page-layout text extraction.

    Parameters
    ----------
    import_notice : str
        Blockquote prepended to the extracted text.

    """

    import_notice: str = DEFAULT_PDF_IMPORT_NOTICE
