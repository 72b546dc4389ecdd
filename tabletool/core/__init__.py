# tabletool/core/__init__.py
"""
Core - Table Processing Core Module

Module Structure:
- table_processor: Main TableProcessor class
- processor/: Format handlers
    - csv_handler: CSV/TSV processing
- functions/: Utility functions
    - file_converter: byte-to-text conversion

Usage:
    from tabletool import TableProcessor
    from tabletool.core.processor import CSVHandler
"""

# === Main Class ===
from tabletool.core.table_processor import (
    TableProcessor,
    CurrentFile,
    create_processor,
)

# === Explicit Subpackage Imports ===
from tabletool.core import processor
from tabletool.core import functions

__all__ = [
    # Main Class
    "TableProcessor",
    "CurrentFile",
    "create_processor",
    # Subpackages
    "processor",
    "functions",
]
