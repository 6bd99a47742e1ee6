#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdoffice/converters/spreadsheet.py
"""Spreadsheet to and from Markdown.

Import detects the workbook flavor (XLSX through openpyxl, ODS through odfpy,
CSV/TSV through the csv module), reads every sheet in file order into typed
:class:`~mdoffice.model.Cell` rows and renders each sheet as a ``##`` heading
followed by a pipe table whose first row is the header. Data rows beyond
``SpreadsheetOptions.max_rows`` are dropped and an omission note is appended.

Export writes one XLSX sheet per pipe table found in the Markdown, named
``Table1``, ``Table2``, ... in encounter order. Every cell is written as text.
Markdown without tables is written line by line into column A of ``Sheet1``.

"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Any, Iterator

from mdoffice.constants import ODS_MIMETYPE, OLE_MAGIC, SPREADSHEET_EXTENSIONS, ZIP_MAGIC
from mdoffice.converters.base import BaseConverter
from mdoffice.exceptions import ConversionError
from mdoffice.markdown.builder import extract_tables
from mdoffice.markdown.events import split_lines
from mdoffice.markdown.writer import render_table
from mdoffice.model import Cell, CellKind, GfmTable, Sheet
from mdoffice.options import SpreadsheetOptions
from mdoffice.utils.io_utils import (
    Destination,
    Source,
    is_path_like,
    open_destination,
    read_source_bytes,
    source_suffix,
)

logger = logging.getLogger(__name__)


def detect_spreadsheet_format(source: Source, data: bytes) -> str:
    """Detect the spreadsheet flavor of a source.

    The file extension wins when it is known. Otherwise ZIP content is XLSX
    unless its leading ``mimetype`` entry names an OpenDocument spreadsheet,
    and text content is TSV when every sampled line contains a tab, else CSV.

    Parameters
    ----------
    source : str, Path or bytes
        Original source, used for its extension
    data : bytes
        Source content

    Returns
    -------
    str
        One of "xlsx", "ods", "csv" or "tsv"

    Raises
    ------
    ConversionError
        If the content is a legacy binary workbook

    """
    suffix = source_suffix(source)
    if suffix in SPREADSHEET_EXTENSIONS:
        return SPREADSHEET_EXTENSIONS[suffix]

    if data.startswith(OLE_MAGIC):
        raise ConversionError("Failed to open spreadsheet: legacy binary workbooks (.xls) are not supported")
    if data.startswith(ZIP_MAGIC):
        return "ods" if ODS_MIMETYPE in data[:256] else "xlsx"

    sample = data[:4096].decode("utf-8", errors="ignore")
    lines = [line for line in split_lines(sample)[:5] if line.strip()]
    if lines and all("\t" in line for line in lines):
        return "tsv"
    return "csv"


def _trim_used_range(rows: list[list[Cell]]) -> list[list[Cell]]:
    """Crop rows to the bounding box of non-empty cells."""

    def is_empty(cell: Cell) -> bool:
        return cell.kind is CellKind.EMPTY

    occupied = [i for i, row in enumerate(rows) if not all(is_empty(c) for c in row)]
    if not occupied:
        return []
    rows = rows[occupied[0] : occupied[-1] + 1]

    columns = [i for row in rows for i, cell in enumerate(row) if not is_empty(cell)]
    first_col, last_col = min(columns), max(columns)
    return [row[first_col : last_col + 1] for row in rows]


def _openpyxl_cell(cell: Any) -> Cell:
    if getattr(cell, "data_type", None) == "e":
        return Cell(CellKind.ERROR, str(cell.value))
    return Cell.from_value(cell.value)


def _odf_cell(cell: Any) -> Cell:
    from odf import teletype
    from odf.text import P

    value_type = cell.getAttribute("valuetype")
    text = "\n".join(teletype.extractText(p) for p in cell.getElementsByType(P))

    if value_type in ("float", "percentage", "currency"):
        raw = cell.getAttribute("value")
        return Cell(CellKind.FLOAT, float(raw)) if raw is not None else Cell.from_value(text)
    if value_type == "boolean":
        return Cell(CellKind.BOOL, (cell.getAttribute("booleanvalue") or "").lower() == "true")
    if value_type == "date":
        return Cell(CellKind.DATETIME_ISO, cell.getAttribute("datevalue") or text)
    if value_type == "time":
        return Cell(CellKind.DURATION_ISO, cell.getAttribute("timevalue") or text)
    if not text:
        return Cell(CellKind.EMPTY)
    return Cell(CellKind.STRING, text)


def _repeat(element: Any, attribute: str) -> int:
    try:
        return max(1, int(element.getAttribute(attribute) or 1))
    except (TypeError, ValueError):
        return 1


def _odf_rows(table: Any) -> Iterator[list[Cell]]:
    """Yield ODS rows with repeats expanded; trailing empty repeats are not materialized."""
    from odf.table import TableRow

    pending_rows = 0
    for row in table.getElementsByType(TableRow):
        cells: list[Cell] = []
        pending_cells = 0
        for child in row.childNodes:
            if getattr(child, "qname", (None, None))[1] not in ("table-cell", "covered-table-cell"):
                continue
            cell = _odf_cell(child)
            count = _repeat(child, "numbercolumnsrepeated")
            if cell.kind is CellKind.EMPTY:
                pending_cells += count
                continue
            cells.extend([Cell(CellKind.EMPTY)] * pending_cells)
            pending_cells = 0
            cells.extend([cell] * count)

        count = _repeat(row, "numberrowsrepeated")
        if not cells:
            pending_rows += count
            continue
        for _ in range(pending_rows):
            yield []
        pending_rows = 0
        for _ in range(count):
            yield list(cells)


class SpreadsheetConverter(BaseConverter[SpreadsheetOptions]):
    """Convert spreadsheets to Markdown and Markdown tables to XLSX.

    Parameters
    ----------
    options : SpreadsheetOptions or None, default = None
        Conversion options

    """

    format_name = "spreadsheet"
    options_class = SpreadsheetOptions

    # Import -------------------------------------------------------------------

    def to_markdown(self, source: Source) -> str:
        """Convert every sheet of a workbook to Markdown.

        Parameters
        ----------
        source : str, Path or bytes
            Workbook file path or raw bytes

        Returns
        -------
        str
            One ``## <sheet name>`` section per non-empty sheet

        Raises
        ------
        ConversionError
            If the file cannot be read or the workbook is corrupt

        """
        data = read_source_bytes(source)
        sheets = self.read_sheets(source, data)
        return self.sheets_to_markdown(sheets)

    def read_sheets(self, source: Source, data: bytes) -> list[Sheet]:
        """Read all sheets of a workbook in file order."""
        detected = detect_spreadsheet_format(source, data)
        logger.debug("Detected spreadsheet format: %s", detected)

        try:
            if detected == "xlsx":
                return self._read_xlsx(data)
            if detected == "ods":
                return self._read_ods(data)
            name = Path(source).stem if is_path_like(source) else ""  # type: ignore[arg-type]
            return [self._read_delimited(data, name or self.options.fallback_sheet_name, detected)]
        except ConversionError:
            raise
        except Exception as e:
            raise ConversionError.wrap("Failed to open spreadsheet", e) from e

    def _read_xlsx(self, data: bytes) -> list[Sheet]:
        import openpyxl

        workbook = openpyxl.load_workbook(io.BytesIO(data), data_only=self.options.render_formulas)
        sheets: list[Sheet] = []
        for worksheet in workbook.worksheets:
            rows = [
                [_openpyxl_cell(cell) for cell in row]
                for row in worksheet.iter_rows(
                    min_row=worksheet.min_row,
                    max_row=worksheet.max_row,
                    min_col=worksheet.min_column,
                    max_col=worksheet.max_column,
                )
            ]
            sheets.append(Sheet(name=worksheet.title, rows=_trim_used_range(rows)))
        return sheets

    def _read_ods(self, data: bytes) -> list[Sheet]:
        from odf import opendocument
        from odf.table import Table as OdfTable

        document = opendocument.load(io.BytesIO(data))
        sheets: list[Sheet] = []
        for index, table in enumerate(document.body.getElementsByType(OdfTable), start=1):
            name = table.getAttribute("name") or f"Sheet{index}"
            sheets.append(Sheet(name=name, rows=_trim_used_range(list(_odf_rows(table)))))
        return sheets

    @staticmethod
    def _read_delimited(data: bytes, name: str, detected: str) -> Sheet:
        text = data.decode("utf-8-sig", errors="replace")
        delimiter = "\t" if detected == "tsv" else ","
        rows = [[Cell.from_value(value) for value in row] for row in csv.reader(io.StringIO(text), delimiter=delimiter)]
        return Sheet(name=name, rows=_trim_used_range(rows))

    def sheets_to_markdown(self, sheets: list[Sheet]) -> str:
        """Render sheets as Markdown sections.

        A sheet with zero columns is skipped without a heading. Consecutive
        sections are separated by exactly one blank line.
        """
        max_rows = self.options.max_rows
        parts: list[str] = []

        for sheet in sheets:
            col_count = sheet.column_count
            if col_count == 0:
                logger.debug("Skipping sheet %r with no columns", sheet.name)
                continue

            if parts:
                parts.append("\n")
            parts.append(f"## {sheet.name}\n\n")

            text_rows = [[cell.to_text() for cell in row] for row in sheet.rows[: max_rows + 1]]
            # header carries the sheet width so short leading rows still pad out
            text_rows[0] = text_rows[0] + [""] * (col_count - len(text_rows[0]))
            parts.append(render_table(text_rows))

            omitted = len(sheet.rows) - 1 - max_rows
            if omitted > 0:
                parts.append(f"\n> **Note**: {omitted} rows were omitted (showing first {max_rows} data rows).\n")

        return "".join(parts)

    # Export -------------------------------------------------------------------

    def from_markdown(self, markdown: str, destination: Destination) -> None:
        """Convert the pipe tables of a Markdown document to an XLSX workbook.

        Parameters
        ----------
        markdown : str
            Markdown source
        destination : str, Path or IO[bytes]
            Output file path or binary stream

        Raises
        ------
        ConversionError
            If a sheet or cell cannot be written, or the workbook cannot be saved

        """
        import openpyxl

        tables = extract_tables(markdown)
        workbook = openpyxl.Workbook()

        if not tables:
            lines = split_lines(markdown)
            logger.debug("No tables found; writing %d lines to %s", len(lines), self.options.fallback_sheet_name)
            worksheet = self._prepare_sheet(workbook, 0, self.options.fallback_sheet_name)
            for row_idx, line in enumerate(lines):
                self._write_text(worksheet, row_idx, 0, line)
        else:
            for table_idx, table in enumerate(tables):
                name = f"{self.options.table_sheet_prefix}{table_idx + 1}"
                worksheet = self._prepare_sheet(workbook, table_idx, name)
                self._write_table(worksheet, table)

        with open_destination(destination) as stream:
            try:
                workbook.save(stream)
            except Exception as e:
                raise ConversionError.wrap("Failed to save workbook", e) from e

    @staticmethod
    def _prepare_sheet(workbook: Any, index: int, name: str) -> Any:
        try:
            worksheet = workbook.active if index == 0 else workbook.create_sheet()
            worksheet.title = name
        except Exception as e:
            raise ConversionError.wrap("Failed to create sheet", e) from e
        return worksheet

    def _write_table(self, worksheet: Any, table: GfmTable) -> None:
        for col_idx, text in enumerate(table.header):
            self._write_text(worksheet, 0, col_idx, text)
        for row_idx, row in enumerate(table.rows, start=1):
            for col_idx, text in enumerate(row):
                self._write_text(worksheet, row_idx, col_idx, text)

    @staticmethod
    def _write_text(worksheet: Any, row_idx: int, col_idx: int, text: str) -> None:
        """Write ``text`` as a string cell at 0-based coordinates."""
        try:
            cell = worksheet.cell(row=row_idx + 1, column=col_idx + 1)
            cell.value = text
            # keep "=..." and numeric-looking text as literal strings
            cell.data_type = "s"
        except Exception as e:
            raise ConversionError.wrap("Failed to write cell", e) from e
