#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdoffice/markdown/writer.py
"""Render document blocks as Markdown text.

The output dialect is the restricted GFM subset the converters exchange:
``#`` to ``######`` headings, plain paragraphs, ``**bold**``, ``*italic*``,
``***both***`` and pipe tables with a separator row.

"""

from __future__ import annotations

from typing import Sequence

from mdoffice.model import Block, Heading, Paragraph, Run, Table


def render_run(run: Run) -> str:
    """Render one run with its emphasis markers.

    Each run becomes its own emphasis span; adjacent runs with the same
    formatting are not merged.

    Parameters
    ----------
    run : Run
        Run to render

    Returns
    -------
    str
        ``***text***`` when bold and italic, ``**text**`` when bold,
        ``*text*`` when italic, the plain text otherwise, and "" for empty runs

    """
    if not run.text:
        return ""
    if run.bold and run.italic:
        return f"***{run.text}***"
    if run.bold:
        return f"**{run.text}**"
    if run.italic:
        return f"*{run.text}*"
    return run.text


def render_runs(runs: Sequence[Run]) -> str:
    """Concatenate rendered runs inline."""
    return "".join(render_run(run) for run in runs)


def heading_prefix(level: int) -> str:
    """Return the ATX marker for a heading level, e.g. ``"## "`` for 2."""
    return "#" * level + " "


def sanitize_cell_text(text: str) -> str:
    """Make cell text safe inside a pipe table row.

    Line breaks collapse to spaces and literal pipes are escaped.
    """
    text = text.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")
    return text.replace("|", "\\|")


def _render_row(cells: Sequence[str], width: int) -> str:
    padded = [cells[i] if i < len(cells) else "" for i in range(width)]
    return "|" + "".join(f" {sanitize_cell_text(cell)} |" for cell in padded) + "\n"


def render_table(rows: Sequence[Sequence[str]]) -> str:
    """Render rows as a GFM pipe table.

    The first row is the header. Every output row, the separator included,
    has exactly ``max(len(row))`` cells; short rows are padded with empty
    cells. The separator row is emitted even when there are no data rows.

    Parameters
    ----------
    rows : sequence of sequence of str
        Header row followed by data rows

    Returns
    -------
    str
        Table text with one trailing newline per row, or "" when there is
        nothing to render

    """
    if not rows:
        return ""
    width = max(len(row) for row in rows)
    if width == 0:
        return ""

    lines = [_render_row(rows[0], width), "|" + " --- |" * width + "\n"]
    lines.extend(_render_row(row, width) for row in rows[1:])
    return "".join(lines)


def render_block(block: Block) -> str:
    """Render a single block without a trailing newline for text blocks.

    Headings and paragraphs whose text is empty render as "". Tables keep
    one newline per row.
    """
    if isinstance(block, Heading):
        text = render_runs(block.runs)
        return heading_prefix(block.level) + text if text else ""
    if isinstance(block, Paragraph):
        return render_runs(block.runs)
    if isinstance(block, Table):
        return render_table([block.header, *block.rows])
    raise TypeError(f"Unsupported block type: {type(block).__name__}")
