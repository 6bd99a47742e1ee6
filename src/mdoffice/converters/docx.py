#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdoffice/converters/docx.py
"""Word-processing (DOCX) to and from Markdown.

Import walks the top-level children of the document body in order and keeps
only paragraphs and tables. Headers, footers, drawings, comments, footnotes
and tracked changes are dropped. Inside a run only text and tab children
contribute; embedded objects are skipped.

Export folds the Markdown event stream into blocks with
:class:`~mdoffice.markdown.builder.DocumentBuilder` and writes one Word
paragraph per block, styled ``Heading1`` to ``Heading6`` for headings, and one
Word table per pipe table.

"""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING, Any, Iterator, Optional

from mdoffice.constants import HEADING_STYLE_PATTERN
from mdoffice.converters.base import BaseConverter
from mdoffice.exceptions import ConversionError
from mdoffice.markdown.builder import build_blocks
from mdoffice.markdown.writer import render_block
from mdoffice.model import Block, Heading, Paragraph, Run, Table
from mdoffice.options import DocxOptions
from mdoffice.utils.io_utils import Destination, Source, open_destination, read_source_bytes

if TYPE_CHECKING:
    import docx.document

logger = logging.getLogger(__name__)


def heading_level_for_style(style_id: Optional[str]) -> Optional[int]:
    """Map a paragraph style id to a heading level.

    Accepts ``Heading1`` and ``Heading 1`` spellings in any letter case.

    Parameters
    ----------
    style_id : str or None
        Paragraph style id

    Returns
    -------
    int or None
        Heading level 1-6, or None for non-heading styles

    """
    if not style_id:
        return None
    match = HEADING_STYLE_PATTERN.match(style_id.strip().lower())
    return int(match.group(1)) if match else None


def _run_from_element(run: Any) -> Run:
    """Build a Run from a python-docx run, keeping only text and tab children."""
    from docx.oxml.ns import qn

    text_tag, tab_tag = qn("w:t"), qn("w:tab")
    parts: list[str] = []
    for child in run._r.iterchildren():
        if child.tag == text_tag:
            parts.append(child.text or "")
        elif child.tag == tab_tag:
            parts.append("\t")
    return Run("".join(parts), bold=bool(run.bold), italic=bool(run.italic))


def _paragraph_block(paragraph: Any) -> Block:
    runs = [_run_from_element(run) for run in paragraph.runs]
    level = heading_level_for_style(paragraph._p.style)
    if level is not None:
        return Heading(level=level, runs=runs)
    return Paragraph(runs=runs)


def _table_block(table: Any) -> Table:
    """Build a Table block; the first row is the header.

    A cell is the space-joined, trimmed Markdown of its paragraphs.
    """
    from docx.text.paragraph import Paragraph as DocxParagraph

    rows: list[list[str]] = []
    for tr in table._tbl.tr_lst:
        cells: list[str] = []
        for tc in tr.tc_lst:
            texts = [render_block(_paragraph_block(DocxParagraph(p, table))).strip() for p in tc.p_lst]
            cells.append(" ".join(text for text in texts if text))
        if cells:
            rows.append(cells)

    if not rows:
        return Table()
    return Table(header=rows[0], rows=rows[1:])


class DocxConverter(BaseConverter[DocxOptions]):
    """Convert DOCX documents to and from Markdown.

    Parameters
    ----------
    options : DocxOptions or None, default = None
        Conversion options

    """

    format_name = "docx"
    options_class = DocxOptions

    def to_markdown(self, source: Source) -> str:
        """Convert a DOCX document to Markdown.

        Parameters
        ----------
        source : str, Path or bytes
            DOCX file path or raw bytes

        Returns
        -------
        str
            Markdown text

        Raises
        ------
        ConversionError
            If the file cannot be read or is not a valid DOCX package

        """
        import docx

        data = read_source_bytes(source)
        try:
            document = docx.Document(io.BytesIO(data))
        except Exception as e:
            raise ConversionError.wrap("Failed to parse DOCX", e) from e

        return self.document_to_markdown(document)

    def read_blocks(self, document: "docx.document.Document") -> Iterator[Block]:
        """Yield paragraph and table blocks of the document body in order."""
        from docx.oxml.ns import qn
        from docx.table import Table as DocxTable
        from docx.text.paragraph import Paragraph as DocxParagraph

        paragraph_tag, table_tag = qn("w:p"), qn("w:tbl")
        for child in document.element.body.iterchildren():
            if child.tag == paragraph_tag:
                yield _paragraph_block(DocxParagraph(child, document))
            elif child.tag == table_tag:
                yield _table_block(DocxTable(child, document))
            else:
                logger.debug("Skipping DOCX body element %s", child.tag)

    def document_to_markdown(self, document: "docx.document.Document") -> str:
        """Render a python-docx document as Markdown.

        Blocks are separated by one blank line and the first block is not
        preceded by one. A paragraph that renders empty adds a blank line but
        no content.
        """
        parts: list[str] = []
        first_block = True
        for block in self.read_blocks(document):
            text = render_block(block)
            if not text.strip():
                if not first_block:
                    parts.append("\n")
                continue

            if not first_block:
                parts.append("\n")
            parts.append(text if isinstance(block, Table) else text + "\n")
            first_block = False

        return "".join(parts)

    def from_markdown(self, markdown: str, destination: Destination) -> None:
        """Convert Markdown to a DOCX document.

        Parameters
        ----------
        markdown : str
            Markdown source
        destination : str, Path or IO[bytes]
            Output file path or binary stream

        Raises
        ------
        ConversionError
            If the document cannot be built, serialized or written

        """
        import docx

        blocks = build_blocks(markdown)
        logger.debug("Writing %d blocks to DOCX", len(blocks))
        try:
            document = docx.Document()
            for block in blocks:
                self._write_block(document, block)
        except Exception as e:
            raise ConversionError.wrap("Failed to build DOCX", e) from e

        with open_destination(destination) as stream:
            try:
                document.save(stream)
            except Exception as e:
                raise ConversionError.wrap("Failed to write DOCX", e) from e

    def _write_block(self, document: "docx.document.Document", block: Block) -> None:
        if isinstance(block, Heading):
            self._write_runs(document.add_paragraph(style=f"Heading {block.level}"), block.runs)
        elif isinstance(block, Paragraph):
            self._write_runs(document.add_paragraph(), block.runs)
        elif isinstance(block, Table):
            self._write_table(document, block)

    @staticmethod
    def _write_runs(paragraph: Any, runs: list[Run]) -> None:
        for run in runs:
            docx_run = paragraph.add_run(run.text)
            if run.bold:
                docx_run.bold = True
            if run.italic:
                docx_run.italic = True

    def _write_table(self, document: "docx.document.Document", block: Table) -> None:
        rows = block.normalized_rows()
        width = block.column_count
        if width == 0:
            return

        table = document.add_table(rows=len(rows), cols=width)
        if self.options.table_style:
            table.style = self.options.table_style

        for row_idx, row in enumerate(rows):
            cells = table.rows[row_idx].cells
            for col_idx, text in enumerate(row):
                cells[col_idx].paragraphs[0].add_run(text)
