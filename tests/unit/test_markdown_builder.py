#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_markdown_builder.py
"""Unit tests for DocumentBuilder and its helpers."""

import pytest

from mdoffice.markdown.builder import BuilderState, DocumentBuilder, build_blocks, extract_tables
from mdoffice.markdown.events import Event, EventType
from mdoffice.model import Heading, Paragraph, Run, Table


@pytest.mark.unit
class TestParagraphs:
    """Tests for heading and paragraph blocks."""

    def test_heading_then_paragraph(self):
        blocks = build_blocks("# Title\n\nBody text\n")

        assert blocks == [
            Heading(level=1, runs=[Run("Title")]),
            Paragraph(runs=[Run("Body text")]),
        ]

    def test_runs_carry_formatting(self):
        blocks = build_blocks("Hello **World** and *you*\n")

        assert blocks == [
            Paragraph(
                runs=[
                    Run("Hello "),
                    Run("World", bold=True),
                    Run(" and "),
                    Run("you", italic=True),
                ]
            )
        ]

    def test_bold_italic(self):
        blocks = build_blocks("***both***\n")

        assert blocks == [Paragraph(runs=[Run("both", bold=True, italic=True)])]

    def test_soft_break_becomes_space(self):
        blocks = build_blocks("line one\nline two\n")

        assert blocks == [Paragraph(runs=[Run("line one line two")])]

    def test_bold_heading(self):
        blocks = build_blocks("## **Result**\n")

        assert blocks == [Heading(level=2, runs=[Run("Result", bold=True)])]

    def test_no_empty_paragraph_before_heading(self):
        blocks = build_blocks("# One\n# Two\n")

        assert [type(block) for block in blocks] == [Heading, Heading]

    def test_empty_markdown(self):
        assert build_blocks("") == []


@pytest.mark.unit
class TestTables:
    """Tests for pipe table collection."""

    def test_simple_table(self):
        blocks = build_blocks("| a | b |\n| --- | --- |\n| 1 | 2 |\n")

        assert blocks == [Table(header=["a", "b"], rows=[["1", "2"]])]

    def test_emphasis_inside_cell_is_plain(self):
        blocks = build_blocks("| **x** | *y* |\n| --- | --- |\n")

        assert blocks == [Table(header=["x", "y"], rows=[])]

    def test_paragraph_before_table_is_flushed(self):
        blocks = build_blocks("Intro\n\n| a |\n| --- |\n| 1 |\n\nOutro\n")

        assert blocks == [
            Paragraph(runs=[Run("Intro")]),
            Table(header=["a"], rows=[["1"]]),
            Paragraph(runs=[Run("Outro")]),
        ]

    def test_extract_tables_in_order(self):
        markdown = "| a |\n| --- |\n| 1 |\n\ntext\n\n| b |\n| --- |\n| 2 |\n"

        tables = extract_tables(markdown)

        assert [table.header for table in tables] == [["a"], ["b"]]
        assert [table.rows for table in tables] == [[["1"]], [["2"]]]

    def test_extract_tables_none(self):
        assert extract_tables("# Just a heading\n") == []


@pytest.mark.unit
class TestStateMachine:
    """Tests for the builder state transitions."""

    def test_states_through_table(self):
        builder = DocumentBuilder()
        assert builder.state is BuilderState.DEFAULT

        builder.feed(Event(EventType.TABLE_START))
        builder.feed(Event(EventType.TABLE_HEAD_START))
        assert builder.state is BuilderState.IN_TABLE_HEAD

        builder.feed(Event(EventType.TABLE_CELL_START))
        assert builder.state is BuilderState.IN_TABLE_CELL

        builder.feed(Event(EventType.TEXT, text="h"))
        builder.feed(Event(EventType.TABLE_CELL_END))
        assert builder.state is BuilderState.IN_TABLE_HEAD

        builder.feed(Event(EventType.TABLE_HEAD_END))
        builder.feed(Event(EventType.TABLE_ROW_START))
        assert builder.state is BuilderState.IN_TABLE_ROW

        builder.feed(Event(EventType.TABLE_ROW_END))
        builder.feed(Event(EventType.TABLE_END))
        assert builder.state is BuilderState.DEFAULT
        assert builder.finish() == [Table(header=["h"], rows=[[]])]

    def test_emphasis_state(self):
        builder = DocumentBuilder()
        builder.feed(Event(EventType.PARAGRAPH_START))
        builder.feed(Event(EventType.STRONG_START))
        assert builder.state is BuilderState.IN_EMPHASIS_RUN

        builder.feed(Event(EventType.TEXT, text="b"))
        builder.feed(Event(EventType.STRONG_END))
        assert builder.state is BuilderState.DEFAULT

    def test_text_outside_cell_in_table_is_ignored(self):
        builder = DocumentBuilder()
        builder.feed(Event(EventType.TABLE_START))
        builder.feed(Event(EventType.TABLE_ROW_START))
        builder.feed(Event(EventType.TEXT, text="stray"))
        builder.feed(Event(EventType.TABLE_ROW_END))
        builder.feed(Event(EventType.TABLE_END))

        assert builder.finish() == [Table(header=[], rows=[[]])]

    def test_finish_flushes_trailing_text(self):
        builder = DocumentBuilder()
        builder.feed(Event(EventType.TEXT, text="tail"))

        assert builder.finish() == [Paragraph(runs=[Run("tail")])]
