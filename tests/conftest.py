#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/conftest.py
"""Pytest configuration and shared fixtures for the mdoffice test suite.

Fixtures build small sample containers with the same libraries the
converters read them with, so tests never depend on checked-in binaries.
"""

import io
import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20, deadline=None)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def sample_markdown() -> str:
    """Markdown exercising headings, emphasis and a pipe table."""
    return """# Report

Intro with **bold** and *italic* text.

## Results

| Name | Score |
| --- | --- |
| Ada | 42 |
| Bob | 7 |
"""


@pytest.fixture
def docx_bytes() -> bytes:
    """A DOCX with a bold level-2 heading, a paragraph and a 2x2 table."""
    import docx

    document = docx.Document()
    heading = document.add_paragraph(style="Heading 2")
    heading.add_run("Result").bold = True
    paragraph = document.add_paragraph("Plain ")
    paragraph.add_run("italic").italic = True
    table = document.add_table(rows=2, cols=2)
    for row_idx, values in enumerate([["A", "B"], ["1", "2"]]):
        for col_idx, value in enumerate(values):
            table.rows[row_idx].cells[col_idx].text = value

    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def build_xlsx(sheets: dict) -> bytes:
    """Build an XLSX from ``{sheet name: list of rows}``."""
    import openpyxl

    workbook = openpyxl.Workbook()
    workbook.remove(workbook.active)
    for name, rows in sheets.items():
        worksheet = workbook.create_sheet(title=name)
        for row in rows:
            worksheet.append(row)

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def xlsx_factory():
    """Return the XLSX builder function."""
    return build_xlsx


def build_ods(rows: list, name: str = "Data") -> bytes:
    """Build a one-sheet ODS where each row is a list of Python values."""
    from odf.opendocument import OpenDocumentSpreadsheet
    from odf.table import Table, TableCell, TableRow
    from odf.text import P

    document = OpenDocumentSpreadsheet()
    table = Table(name=name)
    for values in rows:
        row = TableRow()
        for value in values:
            if isinstance(value, bool):
                cell = TableCell(valuetype="boolean", booleanvalue="true" if value else "false")
                cell.addElement(P(text="TRUE" if value else "FALSE"))
            elif isinstance(value, (int, float)):
                cell = TableCell(valuetype="float", value=str(value))
                cell.addElement(P(text=str(value)))
            elif value is None:
                cell = TableCell()
            else:
                cell = TableCell(valuetype="string")
                cell.addElement(P(text=str(value)))
            row.addElement(cell)
        table.addElement(row)
    document.spreadsheet.addElement(table)

    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def ods_factory():
    """Return the ODS builder function."""
    return build_ods


@pytest.fixture
def pdf_bytes() -> bytes:
    """A two-page PDF with one line of text per page."""
    import fitz

    doc = fitz.open()
    for text in ("First page text", "Second page text"):
        page = doc.new_page()
        page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def write_file(tmp_path: Path):
    """Return a helper writing bytes under ``tmp_path`` and returning the path."""

    def _write(name: str, data: bytes) -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _write
