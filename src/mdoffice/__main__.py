#!/usr/bin/env python3
#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdoffice/__main__.py
"""Entry point for running mdoffice as a module.

This allows the package to be executed as:
    python -m mdoffice [arguments]
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
