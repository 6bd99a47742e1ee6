#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdoffice/markdown/__init__.py
"""Markdown reading and writing shared by all converters.

- :mod:`mdoffice.markdown.events` turns Markdown text into a flat event stream
- :mod:`mdoffice.markdown.builder` folds that stream into document blocks
- :mod:`mdoffice.markdown.writer` renders blocks back to Markdown text

"""

from mdoffice.markdown.builder import DocumentBuilder, build_blocks, extract_tables
from mdoffice.markdown.events import Event, EventType, parse_events, split_lines
from mdoffice.markdown.writer import render_block, render_run, render_runs, render_table

__all__ = [
    "DocumentBuilder",
    "Event",
    "EventType",
    "build_blocks",
    "extract_tables",
    "parse_events",
    "render_block",
    "render_run",
    "render_runs",
    "render_table",
    "split_lines",
]
