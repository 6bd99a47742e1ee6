#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdoffice/markdown/events.py
"""Markdown to event stream tokenizer.

This module parses Markdown with mistune (``table`` and ``strikethrough``
plugins enabled) and flattens the resulting token tree into a linear stream
of start/end, text and break events. Exporters consume the stream instead of
walking mistune's nested token dictionaries themselves.

Only the restricted dialect the converters understand produces events:
headings, paragraphs, strong/emphasis, pipe tables, text and breaks.
Container blocks (lists, block quotes) contribute their inner paragraphs,
code contributes its text, and images and raw HTML are dropped.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Iterator

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Kinds of Markdown events."""

    HEADING_START = auto()
    HEADING_END = auto()
    PARAGRAPH_START = auto()
    PARAGRAPH_END = auto()
    STRONG_START = auto()
    STRONG_END = auto()
    EMPHASIS_START = auto()
    EMPHASIS_END = auto()
    TABLE_START = auto()
    TABLE_END = auto()
    TABLE_HEAD_START = auto()
    TABLE_HEAD_END = auto()
    TABLE_ROW_START = auto()
    TABLE_ROW_END = auto()
    TABLE_CELL_START = auto()
    TABLE_CELL_END = auto()
    TEXT = auto()
    SOFT_BREAK = auto()
    HARD_BREAK = auto()


@dataclass(frozen=True)
class Event:
    """One Markdown event.

    Parameters
    ----------
    type : EventType
        Event kind
    text : str, default ""
        Text payload for TEXT events
    level : int, default 0
        Heading level for HEADING_START and HEADING_END events

    """

    type: EventType
    text: str = ""
    level: int = 0


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` and ``\\r\\n`` only; a trailing newline adds no empty line.

    Unlike :meth:`str.splitlines`, form feeds, vertical tabs and Unicode
    separators stay inside their line.
    """
    lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def parse_events(markdown: str) -> Iterator[Event]:
    """Tokenize Markdown text into a linear event stream.

    Parameters
    ----------
    markdown : str
        Markdown source

    Yields
    ------
    Event
        Events in document order

    """
    import mistune

    parser = mistune.create_markdown(plugins=["table", "strikethrough"], renderer=None)
    tokens, _state = parser.parse(markdown)
    if not isinstance(tokens, list):
        return
    yield from _walk_blocks(tokens)


def _walk_blocks(tokens: list[dict[str, Any]]) -> Iterator[Event]:
    for token in tokens:
        token_type = token.get("type", "")

        if token_type == "heading":
            level = _heading_level(token)
            yield Event(EventType.HEADING_START, level=level)
            yield from _walk_inlines(token.get("children", []))
            yield Event(EventType.HEADING_END, level=level)
        elif token_type in ("paragraph", "block_text"):
            yield Event(EventType.PARAGRAPH_START)
            yield from _walk_inlines(token.get("children", []))
            yield Event(EventType.PARAGRAPH_END)
        elif token_type == "table":
            yield from _walk_table(token)
        elif token_type == "block_code":
            # one paragraph per code line
            for line in token.get("raw", "").rstrip("\n").split("\n"):
                yield Event(EventType.PARAGRAPH_START)
                if line:
                    yield Event(EventType.TEXT, text=line)
                yield Event(EventType.PARAGRAPH_END)
        elif token_type in ("block_quote", "list", "list_item"):
            yield from _walk_blocks(token.get("children", []))
        else:
            # blank_line, thematic_break, block_html and anything unknown
            logger.debug("Skipping markdown block token %r", token_type)


def _heading_level(token: dict[str, Any]) -> int:
    attrs = token.get("attrs", {})
    level = attrs.get("level", 1) if isinstance(attrs, dict) else 1
    if not isinstance(level, int) or not 1 <= level <= 6:
        level = 1
    return level


def _walk_table(token: dict[str, Any]) -> Iterator[Event]:
    yield Event(EventType.TABLE_START)
    for section in token.get("children", []):
        section_type = section.get("type", "")
        if section_type == "table_head":
            # header cells sit directly under table_head with no row wrapper
            yield Event(EventType.TABLE_HEAD_START)
            yield from _walk_cells(section.get("children", []))
            yield Event(EventType.TABLE_HEAD_END)
        elif section_type == "table_body":
            for row in section.get("children", []):
                yield Event(EventType.TABLE_ROW_START)
                yield from _walk_cells(row.get("children", []))
                yield Event(EventType.TABLE_ROW_END)
    yield Event(EventType.TABLE_END)


def _walk_cells(cells: list[dict[str, Any]]) -> Iterator[Event]:
    for cell in cells:
        if cell.get("type") != "table_cell":
            continue
        yield Event(EventType.TABLE_CELL_START)
        yield from _walk_inlines(cell.get("children", []))
        yield Event(EventType.TABLE_CELL_END)


def _walk_inlines(tokens: list[dict[str, Any]]) -> Iterator[Event]:
    for token in tokens:
        token_type = token.get("type", "")

        if token_type in ("text", "codespan"):
            text = token.get("raw", "")
            if text:
                yield Event(EventType.TEXT, text=text)
        elif token_type == "strong":
            yield Event(EventType.STRONG_START)
            yield from _walk_inlines(token.get("children", []))
            yield Event(EventType.STRONG_END)
        elif token_type == "emphasis":
            yield Event(EventType.EMPHASIS_START)
            yield from _walk_inlines(token.get("children", []))
            yield Event(EventType.EMPHASIS_END)
        elif token_type == "softbreak":
            yield Event(EventType.SOFT_BREAK)
        elif token_type == "linebreak":
            attrs = token.get("attrs", {})
            soft = isinstance(attrs, dict) and attrs.get("soft", False)
            yield Event(EventType.SOFT_BREAK if soft else EventType.HARD_BREAK)
        elif token_type in ("link", "strikethrough"):
            # formatting dropped, text kept
            yield from _walk_inlines(token.get("children", []))
        else:
            logger.debug("Skipping markdown inline token %r", token_type)
