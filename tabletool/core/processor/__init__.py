# tabletool/core/processor/__init__.py
"""
Processor - Format-specific Handler Module

Handler List:
- base_handler: BaseHandler abstract class
- csv_handler: CSV/TSV processing

Helper Modules (subdirectories):
- csv_helper/: CSV processing helper

Usage Example:
    from tabletool.core.processor import CSVHandler
    from tabletool.core.processor.csv_helper import CSVReader
"""

from tabletool.core.processor.base_handler import BaseHandler
from tabletool.core.processor.csv_handler import CSVHandler

# === Helper Modules (subpackages) ===
from tabletool.core.processor import csv_helper

__all__ = [
    "BaseHandler",
    "CSVHandler",
    "csv_helper",
]
