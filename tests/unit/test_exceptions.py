#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_exceptions.py
"""Unit tests for ConversionError."""

import pytest

from mdoffice.exceptions import ConversionError


@pytest.mark.unit
class TestConversionError:
    """Tests for message formatting and wrapping."""

    def test_str_is_message(self):
        error = ConversionError("Failed to parse DOCX: bad")

        assert str(error) == "Failed to parse DOCX: bad"
        assert error.original_error is None

    def test_wrap_embeds_cause(self):
        cause = ValueError("not a zip file")
        error = ConversionError.wrap("Failed to read PPTX archive", cause)

        assert error.message == "Failed to read PPTX archive: not a zip file"
        assert error.original_error is cause
