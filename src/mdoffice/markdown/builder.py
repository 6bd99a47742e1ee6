#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdoffice/markdown/builder.py
"""Event stream to document blocks.

:class:`DocumentBuilder` is a small finite-state machine fed one
:class:`~mdoffice.markdown.events.Event` at a time. It accumulates runs of
text with their bold/italic state, turns heading and paragraph boundaries
into :class:`~mdoffice.model.Heading` and :class:`~mdoffice.model.Paragraph`
blocks, and collects pipe tables into :class:`~mdoffice.model.Table` blocks.

States
------
DEFAULT
    Collecting plain text outside any table.
IN_EMPHASIS_RUN
    Collecting text while at least one of bold/italic is active.
IN_TABLE_HEAD, IN_TABLE_ROW
    Inside a table header or body row, between cells.
IN_TABLE_CELL
    Collecting the text of one table cell.

Breaks outside tables become a single space so that soft-wrapped source
lines reflow into one paragraph. Inside tables, breaks and emphasis
boundaries are ignored; a cell is its concatenated text.

"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Callable, Iterable, Optional

from mdoffice.markdown.events import Event, EventType, parse_events
from mdoffice.model import Block, Heading, Paragraph, Run, Table

logger = logging.getLogger(__name__)


class BuilderState(Enum):
    """States of :class:`DocumentBuilder`."""

    DEFAULT = auto()
    IN_EMPHASIS_RUN = auto()
    IN_TABLE_HEAD = auto()
    IN_TABLE_ROW = auto()
    IN_TABLE_CELL = auto()


_TABLE_STATES = frozenset({BuilderState.IN_TABLE_HEAD, BuilderState.IN_TABLE_ROW, BuilderState.IN_TABLE_CELL})


class DocumentBuilder:
    """Fold a Markdown event stream into a list of blocks.

    Examples
    --------
        >>> builder = DocumentBuilder()
        >>> blocks = builder.feed_all(parse_events("# Title\\n\\nSome **bold** text\\n"))
        >>> [type(b).__name__ for b in blocks]
        ['Heading', 'Paragraph']

    """

    def __init__(self) -> None:
        """Initialize an empty builder in the DEFAULT state."""
        self.state = BuilderState.DEFAULT
        self.blocks: list[Block] = []

        self._runs: list[Run] = []
        self._buffer: list[str] = []
        self._bold_depth = 0
        self._italic_depth = 0
        self._heading_level: Optional[int] = None

        self._table: Optional[Table] = None
        self._row: list[str] = []
        self._cell: list[str] = []
        self._row_state = BuilderState.IN_TABLE_ROW

        self._handlers: dict[EventType, Callable[[Event], None]] = {
            EventType.HEADING_START: self._on_heading_start,
            EventType.HEADING_END: self._on_heading_end,
            EventType.PARAGRAPH_START: self._on_paragraph_start,
            EventType.PARAGRAPH_END: self._on_paragraph_end,
            EventType.STRONG_START: self._on_strong_start,
            EventType.STRONG_END: self._on_strong_end,
            EventType.EMPHASIS_START: self._on_emphasis_start,
            EventType.EMPHASIS_END: self._on_emphasis_end,
            EventType.TABLE_START: self._on_table_start,
            EventType.TABLE_END: self._on_table_end,
            EventType.TABLE_HEAD_START: self._on_table_head_start,
            EventType.TABLE_HEAD_END: self._on_table_head_end,
            EventType.TABLE_ROW_START: self._on_table_row_start,
            EventType.TABLE_ROW_END: self._on_table_row_end,
            EventType.TABLE_CELL_START: self._on_table_cell_start,
            EventType.TABLE_CELL_END: self._on_table_cell_end,
            EventType.TEXT: self._on_text,
            EventType.SOFT_BREAK: self._on_break,
            EventType.HARD_BREAK: self._on_break,
        }

    # Public API ---------------------------------------------------------------

    def feed(self, event: Event) -> None:
        """Apply one event to the builder."""
        self._handlers[event.type](event)

    def feed_all(self, events: Iterable[Event]) -> list[Block]:
        """Apply every event, flush trailing content and return the blocks."""
        for event in events:
            self.feed(event)
        return self.finish()

    def finish(self) -> list[Block]:
        """Flush any pending paragraph content and return the blocks."""
        if self._table is not None:
            logger.debug("Event stream ended inside a table; emitting collected rows")
            self._on_table_end(Event(EventType.TABLE_END))
        self._flush_paragraph()
        return self.blocks

    # Run handling -------------------------------------------------------------

    @property
    def _in_table(self) -> bool:
        return self.state in _TABLE_STATES or self._table is not None

    def _flush_buffer(self) -> None:
        """Move buffered text into a new run carrying the current formatting."""
        if self._buffer:
            self._runs.append(Run("".join(self._buffer), bold=self._bold_depth > 0, italic=self._italic_depth > 0))
            self._buffer = []

    def _flush_paragraph(self, level: Optional[int] = None) -> None:
        """Emit pending runs as a heading (``level`` set) or paragraph."""
        self._flush_buffer()
        runs, self._runs = self._runs, []
        if level is not None:
            self.blocks.append(Heading(level=level, runs=runs))
        elif runs:
            self.blocks.append(Paragraph(runs=runs))

    def _update_run_state(self) -> None:
        if self._bold_depth > 0 or self._italic_depth > 0:
            self.state = BuilderState.IN_EMPHASIS_RUN
        else:
            self.state = BuilderState.DEFAULT

    # Block events -------------------------------------------------------------

    def _on_heading_start(self, event: Event) -> None:
        self._flush_paragraph()
        self._heading_level = event.level or 1

    def _on_heading_end(self, event: Event) -> None:
        level = self._heading_level or event.level or 1
        self._flush_paragraph(level)
        self._heading_level = None

    def _on_paragraph_start(self, event: Event) -> None:
        pass

    def _on_paragraph_end(self, event: Event) -> None:
        if self._heading_level is None:
            self._flush_paragraph()

    # Inline formatting events ---------------------------------------------------

    def _on_strong_start(self, event: Event) -> None:
        if self._in_table:
            return
        self._flush_buffer()
        self._bold_depth += 1
        self._update_run_state()

    def _on_strong_end(self, event: Event) -> None:
        if self._in_table:
            return
        self._flush_buffer()
        self._bold_depth = max(0, self._bold_depth - 1)
        self._update_run_state()

    def _on_emphasis_start(self, event: Event) -> None:
        if self._in_table:
            return
        self._flush_buffer()
        self._italic_depth += 1
        self._update_run_state()

    def _on_emphasis_end(self, event: Event) -> None:
        if self._in_table:
            return
        self._flush_buffer()
        self._italic_depth = max(0, self._italic_depth - 1)
        self._update_run_state()

    # Table events -------------------------------------------------------------

    def _on_table_start(self, event: Event) -> None:
        self._flush_paragraph()
        self._table = Table()

    def _on_table_end(self, event: Event) -> None:
        if self._table is not None:
            self.blocks.append(self._table)
        self._table = None
        self._row = []
        self._cell = []
        self._update_run_state()

    def _on_table_head_start(self, event: Event) -> None:
        self._row = []
        self._row_state = BuilderState.IN_TABLE_HEAD
        self.state = BuilderState.IN_TABLE_HEAD

    def _on_table_head_end(self, event: Event) -> None:
        if self._table is not None:
            self._table.header = self._row
        self._row = []

    def _on_table_row_start(self, event: Event) -> None:
        self._row = []
        self._row_state = BuilderState.IN_TABLE_ROW
        self.state = BuilderState.IN_TABLE_ROW

    def _on_table_row_end(self, event: Event) -> None:
        if self._table is not None:
            self._table.rows.append(self._row)
        self._row = []

    def _on_table_cell_start(self, event: Event) -> None:
        self._cell = []
        self.state = BuilderState.IN_TABLE_CELL

    def _on_table_cell_end(self, event: Event) -> None:
        self._row.append("".join(self._cell))
        self._cell = []
        self.state = self._row_state

    # Text events --------------------------------------------------------------

    def _on_text(self, event: Event) -> None:
        if self.state is BuilderState.IN_TABLE_CELL:
            self._cell.append(event.text)
        elif not self._in_table:
            self._buffer.append(event.text)

    def _on_break(self, event: Event) -> None:
        if not self._in_table:
            self._buffer.append(" ")


def build_blocks(markdown: str) -> list[Block]:
    """Parse Markdown into headings, paragraphs and tables.

    Parameters
    ----------
    markdown : str
        Markdown source

    Returns
    -------
    list of Block
        Blocks in document order

    """
    return DocumentBuilder().feed_all(parse_events(markdown))


def extract_tables(markdown: str) -> list[Table]:
    """Return every pipe table in the Markdown, in encounter order."""
    return [block for block in build_blocks(markdown) if isinstance(block, Table)]
