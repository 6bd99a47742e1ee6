#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_docx_converter.py
"""Integration tests for DOCX import and export."""

import io
from pathlib import Path

import docx
import pytest
from hypothesis import given
from hypothesis import strategies as st

from mdoffice import ConversionError, DocxOptions, docx_to_markdown, markdown_to_docx


def _docx(build) -> bytes:
    document = docx.Document()
    build(document)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.mark.integration
class TestDocxImport:
    """Tests for DOCX to Markdown."""

    def test_heading_paragraph_and_table(self, docx_bytes):
        markdown = docx_to_markdown(docx_bytes)

        assert markdown == (
            "## **Result**\n"
            "\n"
            "Plain *italic*\n"
            "\n"
            "| A | B |\n"
            "| --- | --- |\n"
            "| 1 | 2 |\n"
        )

    def test_reads_from_path(self, docx_bytes, write_file):
        path = write_file("report.docx", docx_bytes)

        assert docx_to_markdown(path).startswith("## **Result**\n")

    def test_bold_italic_run(self):
        def build(document):
            run = document.add_paragraph().add_run("both")
            run.bold = True
            run.italic = True

        assert docx_to_markdown(_docx(build)) == "***both***\n"

    def test_blank_paragraph_adds_newline(self):
        def build(document):
            document.add_paragraph("A")
            document.add_paragraph("")
            document.add_paragraph("B")

        assert docx_to_markdown(_docx(build)) == "A\n\n\nB\n"

    def test_leading_blank_paragraph_is_dropped(self):
        def build(document):
            document.add_paragraph("   ")
            document.add_paragraph("B")

        assert docx_to_markdown(_docx(build)) == "B\n"

    def test_tab_is_kept(self):
        def build(document):
            document.add_paragraph("a\tb")

        assert docx_to_markdown(_docx(build)) == "a\tb\n"

    def test_table_cell_with_two_paragraphs(self):
        def build(document):
            table = document.add_table(rows=1, cols=1)
            cell = table.rows[0].cells[0]
            cell.paragraphs[0].add_run("first")
            cell.add_paragraph("second")

        assert docx_to_markdown(_docx(build)) == "| first second |\n| --- |\n"

    def test_heading_style_spelling(self):
        def build(document):
            document.add_heading("Top", level=1)
            document.add_heading("Deep", level=6)

        assert docx_to_markdown(_docx(build)) == "# Top\n\n###### Deep\n"

    def test_empty_document(self):
        assert docx_to_markdown(_docx(lambda document: None)) == ""

    def test_corrupt_bytes(self):
        with pytest.raises(ConversionError, match="Failed to parse DOCX"):
            docx_to_markdown(b"this is not a docx")

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConversionError, match="Failed to read file"):
            docx_to_markdown(tmp_path / "nope.docx")


@pytest.mark.integration
class TestDocxExport:
    """Tests for Markdown to DOCX."""

    def test_round_trip(self, sample_markdown, tmp_path: Path):
        target = tmp_path / "out.docx"

        markdown_to_docx(sample_markdown, target)

        assert docx_to_markdown(target) == sample_markdown

    def test_styles_and_runs(self):
        buffer = io.BytesIO()
        markdown_to_docx("## Title\n\nplain **bold** *it*\n", buffer)

        document = docx.Document(io.BytesIO(buffer.getvalue()))
        heading, paragraph = document.paragraphs

        assert heading.style.name == "Heading 2"
        assert heading.text == "Title"
        assert [(r.text, r.bold, r.italic) for r in paragraph.runs] == [
            ("plain ", None, None),
            ("bold", True, None),
            (" ", None, None),
            ("it", None, True),
        ]

    def test_ragged_table(self):
        buffer = io.BytesIO()
        markdown_to_docx("| a | b | c |\n| --- | --- | --- |\n| 1 |\n", buffer)

        table = docx.Document(io.BytesIO(buffer.getvalue())).tables[0]

        assert len(table.rows) == 2
        assert len(table.columns) == 3
        assert [cell.text for cell in table.rows[1].cells] == ["1", "", ""]

    def test_table_style_option(self):
        buffer = io.BytesIO()
        markdown_to_docx("| a |\n| --- |\n", buffer, options=DocxOptions(table_style="Table Grid"))

        table = docx.Document(io.BytesIO(buffer.getvalue())).tables[0]

        assert table.style.name == "Table Grid"

    def test_empty_markdown(self, tmp_path: Path):
        target = tmp_path / "empty.docx"
        markdown_to_docx("", target)

        assert docx_to_markdown(target) == ""

    def test_unwritable_destination(self, tmp_path: Path):
        with pytest.raises(ConversionError, match="Failed to create file"):
            markdown_to_docx("# x", tmp_path)

    @given(
        level=st.integers(min_value=1, max_value=6),
        text=st.lists(st.sampled_from(["alpha", "beta", "gamma", "42"]), min_size=1, max_size=4).map(" ".join),
    )
    def test_heading_levels_round_trip(self, level, text):
        buffer = io.BytesIO()
        markdown = "#" * level + " " + text + "\n"

        markdown_to_docx(markdown, buffer)

        assert docx_to_markdown(buffer.getvalue()) == markdown
