#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdoffice/utils/__init__.py
"""Utility helpers for mdoffice converters."""
