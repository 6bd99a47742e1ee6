#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_registry.py
"""Unit tests for the converter registry."""

import pytest

from mdoffice.converter_registry import detect_format, get_converter, list_formats, registry
from mdoffice.converters import DocxConverter, PdfConverter, PptxConverter, SpreadsheetConverter
from mdoffice.exceptions import ConversionError
from mdoffice.options import DocxOptions, SpreadsheetOptions


@pytest.mark.unit
class TestRegistry:
    """Tests for lookup and detection."""

    def test_list_formats(self):
        assert list_formats() == ["docx", "pdf", "pptx", "spreadsheet"]

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("a.docx", "docx"),
            ("b.XLSX", "spreadsheet"),
            ("c.xlsm", "spreadsheet"),
            ("d.ods", "spreadsheet"),
            ("e.csv", "spreadsheet"),
            ("f.tsv", "spreadsheet"),
            ("g.pptx", "pptx"),
            ("h.pdf", "pdf"),
        ],
    )
    def test_detect_by_extension(self, path, expected):
        assert detect_format(path) == expected

    def test_unknown_extension(self):
        with pytest.raises(ConversionError, match="Cannot determine format"):
            detect_format("notes.txt")

    def test_hint_wins(self):
        assert detect_format("file.bin", hint="PDF") == "pdf"

    def test_unknown_hint(self):
        with pytest.raises(ConversionError, match="Unknown format 'rtf'"):
            detect_format("file.docx", hint="rtf")

    def test_detect_pdf_content(self, pdf_bytes):
        assert detect_format(pdf_bytes) == "pdf"

    def test_detect_docx_content(self, docx_bytes):
        assert detect_format(docx_bytes) == "docx"

    def test_detect_xlsx_content(self, xlsx_factory):
        assert detect_format(xlsx_factory({"S": [["a"]]})) == "spreadsheet"

    def test_undetectable_content(self):
        with pytest.raises(ConversionError, match="Cannot determine format from content"):
            detect_format(b"plain words")

    @pytest.mark.parametrize(
        "name, cls",
        [("docx", DocxConverter), ("spreadsheet", SpreadsheetConverter), ("pptx", PptxConverter), ("pdf", PdfConverter)],
    )
    def test_get_converter(self, name, cls):
        assert isinstance(get_converter(format=name), cls)

    def test_get_converter_passes_options(self):
        options = SpreadsheetOptions(max_rows=3)

        converter = get_converter(path="x.csv", options=options)

        assert converter.options is options

    def test_wrong_options_type(self):
        with pytest.raises(ConversionError, match="Invalid options"):
            get_converter(format="spreadsheet", options=DocxOptions())

    def test_requires_format_or_path(self):
        with pytest.raises(ConversionError):
            get_converter()

    def test_can_export(self):
        exportable = {meta.format_name: meta.can_export for meta in registry.all_metadata()}

        assert exportable == {"docx": True, "pdf": False, "pptx": True, "spreadsheet": True}
