#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_markdown_events.py
"""Unit tests for the Markdown event tokenizer."""

import pytest

from mdoffice.markdown.events import Event, EventType, parse_events, split_lines


def _types(markdown: str) -> list[EventType]:
    return [event.type for event in parse_events(markdown)]


def _texts(markdown: str) -> list[str]:
    return [event.text for event in parse_events(markdown) if event.type is EventType.TEXT]


@pytest.mark.unit
class TestBlockEvents:
    """Tests for block-level events."""

    def test_heading_and_paragraph(self):
        events = list(parse_events("# Title\n\nSome **bold** text\n"))

        assert events == [
            Event(EventType.HEADING_START, level=1),
            Event(EventType.TEXT, text="Title"),
            Event(EventType.HEADING_END, level=1),
            Event(EventType.PARAGRAPH_START),
            Event(EventType.TEXT, text="Some "),
            Event(EventType.STRONG_START),
            Event(EventType.TEXT, text="bold"),
            Event(EventType.STRONG_END),
            Event(EventType.TEXT, text=" text"),
            Event(EventType.PARAGRAPH_END),
        ]

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_heading_levels(self, level):
        events = list(parse_events("#" * level + " Heading\n"))

        assert events[0] == Event(EventType.HEADING_START, level=level)
        assert events[-1] == Event(EventType.HEADING_END, level=level)

    def test_table_structure(self):
        types = _types("| a | b |\n| --- | --- |\n| 1 | 2 |\n")

        assert types == [
            EventType.TABLE_START,
            EventType.TABLE_HEAD_START,
            EventType.TABLE_CELL_START,
            EventType.TEXT,
            EventType.TABLE_CELL_END,
            EventType.TABLE_CELL_START,
            EventType.TEXT,
            EventType.TABLE_CELL_END,
            EventType.TABLE_HEAD_END,
            EventType.TABLE_ROW_START,
            EventType.TABLE_CELL_START,
            EventType.TEXT,
            EventType.TABLE_CELL_END,
            EventType.TABLE_CELL_START,
            EventType.TEXT,
            EventType.TABLE_CELL_END,
            EventType.TABLE_ROW_END,
            EventType.TABLE_END,
        ]

    def test_list_items_surface_as_paragraphs(self):
        types = _types("- one\n- two\n")

        assert types.count(EventType.PARAGRAPH_START) == 2
        assert _texts("- one\n- two\n") == ["one", "two"]

    def test_block_quote_surfaces_inner_text(self):
        assert _texts("> quoted\n") == ["quoted"]

    def test_code_block_one_paragraph_per_line(self):
        events = list(parse_events("```\nfirst\nsecond\n```\n"))

        assert [e.type for e in events].count(EventType.PARAGRAPH_START) == 2
        assert _texts("```\nfirst\nsecond\n```\n") == ["first", "second"]

    def test_thematic_break_is_dropped(self):
        assert _types("---\n") == []


@pytest.mark.unit
class TestInlineEvents:
    """Tests for inline events."""

    def test_emphasis(self):
        types = _types("*it*\n")

        assert types == [
            EventType.PARAGRAPH_START,
            EventType.EMPHASIS_START,
            EventType.TEXT,
            EventType.EMPHASIS_END,
            EventType.PARAGRAPH_END,
        ]

    def test_inline_code_is_text(self):
        assert _texts("use `code` here\n") == ["use ", "code", " here"]

    def test_link_keeps_label(self):
        assert "".join(_texts("see [docs](https://example.com)\n")) == "see docs"

    def test_image_is_dropped(self):
        assert "".join(_texts("a ![alt](pic.png) b\n")) == "a  b"

    def test_soft_break(self):
        assert EventType.SOFT_BREAK in _types("line one\nline two\n")

    def test_hard_break(self):
        assert EventType.HARD_BREAK in _types("line one  \nline two\n")

    def test_empty_document(self):
        assert list(parse_events("")) == []


@pytest.mark.unit
class TestSplitLines:
    """Tests for line splitting of Markdown source."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("", []),
            ("one", ["one"]),
            ("one\n", ["one"]),
            ("one\n\ntwo", ["one", "", "two"]),
            ("one\r\ntwo\r\n", ["one", "two"]),
            ("a\x0cb\x0bc d\x85e", ["a\x0cb\x0bc d\x85e"]),
            ("\n", [""]),
        ],
    )
    def test_split_lines(self, text, expected):
        assert split_lines(text) == expected
