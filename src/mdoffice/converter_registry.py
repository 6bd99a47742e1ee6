#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdoffice/converter_registry.py
"""Converter registry and format detection.

The registry maps a format name to the metadata describing its converter:
accepted file extensions, content signatures, and whether the format can be
written as well as read. The built-in formats are registered when this
module is imported; the mapping is read-only afterwards.

Detection order for a source is: explicit format name, file extension,
content signature. A source that matches nothing is an error rather than
falling back to a default format.

"""

from __future__ import annotations

import io
import logging
import os
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from mdoffice.constants import ODS_MIMETYPE, ZIP_MAGIC
from mdoffice.converters import (
    BaseConverter,
    DocxConverter,
    PdfConverter,
    PptxConverter,
    SpreadsheetConverter,
)
from mdoffice.exceptions import ConversionError
from mdoffice.options import BaseConverterOptions

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"


@dataclass
class ConverterMetadata:
    """Metadata describing a converter's capabilities.

    Parameters
    ----------
    format_name : str
        Unique identifier for the format (e.g., "pdf", "docx")
    converter_class : type
        :class:`~mdoffice.converters.base.BaseConverter` subclass
    extensions : list[str]
        File extensions supported (e.g., [".pdf"])
    magic_bytes : list[tuple[bytes, int]]
        Magic byte patterns and their offset for content detection
    content_detector : Callable[[bytes], bool], optional
        Content-based detection function, consulted after magic bytes
    export_extension : str
        Extension of files written by export, "" for import-only formats
    description : str
        Human-readable description of the converter

    """

    format_name: str
    converter_class: type[BaseConverter]
    extensions: list[str] = field(default_factory=list)
    magic_bytes: list[tuple[bytes, int]] = field(default_factory=list)
    content_detector: Optional[Callable[[bytes], bool]] = None
    export_extension: str = ""
    description: str = ""

    @property
    def can_export(self) -> bool:
        """Whether Markdown can be written to this format."""
        return self.converter_class.from_markdown is not BaseConverter.from_markdown

    def matches_extension(self, filename: str) -> bool:
        """Check if filename matches any supported extension."""
        if not filename:
            return False

        _, ext = os.path.splitext(filename.lower())
        return ext in self.extensions

    def matches_magic_bytes(self, content: bytes, max_check: int = 512) -> bool:
        """Check if content matches any magic byte pattern."""
        if not content or not self.magic_bytes:
            return False

        check_bytes = content[:max_check]
        for pattern, offset in self.magic_bytes:
            if check_bytes[offset : offset + len(pattern)] == pattern:
                return True
        return False

    def matches_content(self, content: bytes) -> bool:
        """Check content against magic bytes, then the content detector."""
        if self.matches_magic_bytes(content):
            return True
        return bool(self.content_detector and self.content_detector(content))


def _zip_names(content: bytes) -> set[str]:
    if not content.startswith(ZIP_MAGIC):
        return set()
    try:
        with zipfile.ZipFile(io.BytesIO(content)) as archive:
            return set(archive.namelist())
    except (zipfile.BadZipFile, ValueError):
        return set()


def _is_docx(content: bytes) -> bool:
    return "word/document.xml" in _zip_names(content)


def _is_pptx(content: bytes) -> bool:
    return "ppt/presentation.xml" in _zip_names(content)


def _is_spreadsheet(content: bytes) -> bool:
    if content.startswith(ZIP_MAGIC) and ODS_MIMETYPE in content[:256]:
        return True
    return "xl/workbook.xml" in _zip_names(content)


class ConverterRegistry:
    """Registry of the supported formats.

    Attributes
    ----------
    _converters : dict
        Registered converter metadata by format name

    """

    def __init__(self) -> None:
        self._converters: Dict[str, ConverterMetadata] = {}

    def register(self, metadata: ConverterMetadata) -> None:
        """Register a converter with its metadata."""
        self._converters[metadata.format_name] = metadata
        logger.debug("Registered converter: %s", metadata.format_name)

    def get_format_info(self, format_name: str) -> ConverterMetadata:
        """Return metadata for a registered format.

        Raises
        ------
        ConversionError
            If the format is not registered

        """
        try:
            return self._converters[format_name.lower()]
        except KeyError:
            known = ", ".join(self.list_formats())
            raise ConversionError(f"Unknown format '{format_name}' (supported: {known})") from None

    def get_converter(
        self,
        format_name: str,
        options: Optional[BaseConverterOptions] = None,
    ) -> BaseConverter:
        """Instantiate the converter for ``format_name`` with ``options``."""
        return self.get_format_info(format_name).converter_class(options)

    def detect_format(self, source: Union[str, Path, bytes], hint: Optional[str] = None) -> str:
        """Detect the format of a conversion source or destination.

        Parameters
        ----------
        source : str, Path or bytes
            File path (extension is used) or raw content (signatures are used)
        hint : str, optional
            Explicit format name; validated and returned when given

        Returns
        -------
        str
            Registered format name

        Raises
        ------
        ConversionError
            If the hint is unknown or no format matches

        """
        if hint:
            return self.get_format_info(hint).format_name

        if isinstance(source, (str, Path)):
            filename = str(source)
            for metadata in self._converters.values():
                if metadata.matches_extension(filename):
                    logger.debug("Format detected from filename: %s", metadata.format_name)
                    return metadata.format_name
            raise ConversionError(f"Cannot determine format from file name: {Path(filename).name}")

        for metadata in self._converters.values():
            if metadata.matches_content(source):
                logger.debug("Format detected from content: %s", metadata.format_name)
                return metadata.format_name
        raise ConversionError("Cannot determine format from content")

    def list_formats(self) -> List[str]:
        """List all registered format names, sorted."""
        return sorted(self._converters)

    def all_metadata(self) -> List[ConverterMetadata]:
        """Return metadata for every registered format, sorted by name."""
        return [self._converters[name] for name in self.list_formats()]


registry = ConverterRegistry()

registry.register(
    ConverterMetadata(
        format_name="docx",
        converter_class=DocxConverter,
        extensions=[".docx"],
        content_detector=_is_docx,
        export_extension=".docx",
        description="Word-processing documents (headings, bold/italic runs, tables)",
    )
)
registry.register(
    ConverterMetadata(
        format_name="spreadsheet",
        converter_class=SpreadsheetConverter,
        extensions=[".xlsx", ".xlsm", ".ods", ".csv", ".tsv"],
        content_detector=_is_spreadsheet,
        export_extension=".xlsx",
        description="Spreadsheets as one pipe table per sheet",
    )
)
registry.register(
    ConverterMetadata(
        format_name="pptx",
        converter_class=PptxConverter,
        extensions=[".pptx"],
        content_detector=_is_pptx,
        export_extension=".pptx",
        description="Presentations, one section per slide",
    )
)
registry.register(
    ConverterMetadata(
        format_name="pdf",
        converter_class=PdfConverter,
        extensions=[".pdf"],
        magic_bytes=[(PDF_MAGIC, 0)],
        description="PDF plain-text extraction (import only)",
    )
)


def get_converter(
    format: Optional[str] = None,
    path: Optional[Union[str, Path, bytes]] = None,
    options: Optional[BaseConverterOptions] = None,
) -> BaseConverter:
    """Return a converter chosen by format name or detected from ``path``.

    Raises
    ------
    ConversionError
        If neither argument is given or the format cannot be resolved

    """
    if format is None and path is None:
        raise ConversionError("Either a format name or a path is required")
    format_name = registry.detect_format(path if path is not None else b"", hint=format)
    return registry.get_converter(format_name, options)


def detect_format(source: Union[str, Path, bytes], hint: Optional[str] = None) -> str:
    """Detect the registered format of ``source``; see :meth:`ConverterRegistry.detect_format`."""
    return registry.detect_format(source, hint)


def list_formats() -> List[str]:
    """List all registered format names."""
    return registry.list_formats()
