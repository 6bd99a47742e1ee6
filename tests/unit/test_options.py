#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_options.py
"""Unit tests for converter option dataclasses."""

import dataclasses

import pytest

from mdoffice.options import DocxOptions, PdfOptions, PptxOptions, SpreadsheetOptions


@pytest.mark.unit
class TestOptions:
    """Tests for defaults, validation and cloning."""

    def test_defaults(self):
        assert SpreadsheetOptions().max_rows == 500
        assert PptxOptions().default_title == "Presentation"
        assert PptxOptions().slide_id_base == 256
        assert DocxOptions().table_style is None
        assert PdfOptions().import_notice.startswith("> **Import Notice**")

    def test_frozen(self):
        options = SpreadsheetOptions()

        with pytest.raises(dataclasses.FrozenInstanceError):
            options.max_rows = 10  # type: ignore[misc]

    def test_create_updated(self):
        options = SpreadsheetOptions()
        updated = options.create_updated(max_rows=10)

        assert updated.max_rows == 10
        assert options.max_rows == 500

    @pytest.mark.parametrize("max_rows", [0, -5])
    def test_invalid_max_rows(self, max_rows):
        with pytest.raises(ValueError):
            SpreadsheetOptions(max_rows=max_rows)

    def test_invalid_slide_id_base(self):
        with pytest.raises(ValueError):
            PptxOptions(slide_id_base=255)

    def test_invalid_slide_size(self):
        with pytest.raises(ValueError):
            PptxOptions(slide_width=0)
