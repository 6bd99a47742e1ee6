#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdoffice/model.py
"""Intermediate document model shared by the converters.

Converters build these short-lived structures while walking a container or a
Markdown event stream, then discard them when the call returns. Nothing here
is shared between conversion calls.

Block-level structures
    - Heading, Paragraph, Table (the ``Block`` union)
    - Run, a span of text with one bold/italic state

Spreadsheet structures
    - Cell (typed value, see CellKind), Sheet

Presentation structures
    - Slide

"""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Union

from mdoffice.constants import HEADING_LEVELS, INTEGRAL_FLOAT_LIMIT


@dataclass
class Run:
    """A contiguous span of text sharing one formatting state.

    Parameters
    ----------
    text : str
        Opaque text content; tabs are kept as literal tab characters
    bold : bool, default False
        Whether the run is bold
    italic : bool, default False
        Whether the run is italic

    """

    text: str
    bold: bool = False
    italic: bool = False


@dataclass
class Heading:
    """Heading block with a level from 1 to 6.

    Parameters
    ----------
    level : int
        Heading level (1-6, where 1 is most important)
    runs : list of Run, default = empty list
        Heading text

    """

    level: int
    runs: list[Run] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if self.level not in HEADING_LEVELS:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")


@dataclass
class Paragraph:
    """Unstyled paragraph block."""

    runs: list[Run] = field(default_factory=list)


@dataclass
class Table:
    """Table block, also used as the GFM table intermediate.

    Rows may be ragged; consumers pad or truncate to :attr:`column_count`.

    Parameters
    ----------
    header : list of str
        Header row cell texts
    rows : list of list of str
        Body rows

    """

    header: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        """Return the widest row length, header included."""
        return max((len(row) for row in [self.header, *self.rows]), default=0)

    def normalized_rows(self) -> list[list[str]]:
        """Return header and body rows, each padded or truncated to :attr:`column_count`."""
        width = self.column_count
        return [(list(row) + [""] * width)[:width] for row in [self.header, *self.rows]]


Block = Union[Heading, Paragraph, Table]

# Alias kept for readability at the spreadsheet export seam
GfmTable = Table


class CellKind(Enum):
    """Type tag of a spreadsheet cell value."""

    EMPTY = "empty"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOL = "bool"
    ERROR = "error"
    DATETIME = "datetime"
    DATETIME_ISO = "datetime_iso"
    DURATION_ISO = "duration_iso"


@dataclass(frozen=True)
class Cell:
    """One typed value at a sheet row/column position.

    Parameters
    ----------
    kind : CellKind
        Type tag
    value : Any, default None
        Native value. ``str`` for STRING, ERROR and the ISO kinds, ``int`` for
        INTEGER, ``float`` for FLOAT, ``bool`` for BOOL and a ``datetime``,
        ``date``, ``time`` or ``timedelta`` for DATETIME.

    """

    kind: CellKind
    value: Any = None

    @classmethod
    def from_value(cls, value: Any) -> "Cell":
        """Infer the cell kind from a native Python value.

        Parameters
        ----------
        value : Any
            Value as returned by a spreadsheet reader

        Returns
        -------
        Cell
            Typed cell

        """
        if value is None or value == "":
            return cls(CellKind.EMPTY)
        # bool is a subclass of int, test it first
        if isinstance(value, bool):
            return cls(CellKind.BOOL, value)
        if isinstance(value, int):
            return cls(CellKind.INTEGER, value)
        if isinstance(value, float):
            return cls(CellKind.FLOAT, value)
        if isinstance(value, (dt.datetime, dt.date, dt.time, dt.timedelta)):
            return cls(CellKind.DATETIME, value)
        return cls(CellKind.STRING, str(value))

    def to_text(self) -> str:
        """Stringify the value for display.

        Floats print in positional notation (``0.00001``, never ``1e-05``) and
        drop the decimal point when the fraction is zero. Booleans print
        ``TRUE``/``FALSE``; dates use their native display form.

        Returns
        -------
        str
            Display text

        """
        if self.kind is CellKind.EMPTY:
            return ""
        if self.kind is CellKind.FLOAT:
            number = float(self.value)
            if number.is_integer() and abs(number) < INTEGRAL_FLOAT_LIMIT:
                return str(int(number))
            if math.isnan(number):
                return "NaN"
            if math.isinf(number):
                return "inf" if number > 0 else "-inf"
            # shortest round-trip digits, never exponent notation
            return format(Decimal(repr(number)), "f")
        if self.kind is CellKind.INTEGER:
            return str(int(self.value))
        if self.kind is CellKind.BOOL:
            return "TRUE" if self.value else "FALSE"
        return str(self.value)


@dataclass
class Sheet:
    """Named sheet of typed cells.

    Parameters
    ----------
    name : str
        Sheet name
    rows : list of list of Cell
        Rows in sheet order; rows may be ragged

    """

    name: str
    rows: list[list[Cell]] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        """Return the widest row length."""
        return max((len(row) for row in self.rows), default=0)


@dataclass
class Slide:
    """One presentation page: a title and ordered body lines."""

    title: str
    body: list[str] = field(default_factory=list)
