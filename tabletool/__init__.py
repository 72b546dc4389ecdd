# tabletool/__init__.py
"""
tabletool Library

Delimited-text format inference, parsing and writing.

Package Structure:
- core: Table processing core module
    - TableProcessor: Main entry point
    - processor: Format handlers (CSV/TSV)
    - functions: Utility functions

Usage:
    from tabletool import TableProcessor

    processor = TableProcessor()
    document = processor.open("data.csv")
    processor.save(document, "data.csv")

    from tabletool import detect_configuration, parse, serialize

    configuration = detect_configuration(raw)
    table = parse(raw, configuration)
    raw = serialize(table, configuration)
"""

__version__ = "0.1.0"

# Expose core classes at top level
from tabletool.core import TableProcessor, create_processor
from tabletool.core.table_processor import detect_configuration, parse, serialize
from tabletool.core.processor.csv_helper import (
    CSVConfiguration,
    CSVDocument,
    CSVHeuristic,
    CSVReader,
    CSVTable,
    CSVWriter,
    CSVWriteError,
    ScoringWeights,
    SUPPORTED_ENCODINGS,
)

# Explicit subpackages
from tabletool import core

__all__ = [
    "__version__",
    # Core classes
    "TableProcessor",
    "create_processor",
    # Core operations
    "detect_configuration",
    "parse",
    "serialize",
    # Types
    "CSVConfiguration",
    "CSVDocument",
    "CSVHeuristic",
    "CSVReader",
    "CSVTable",
    "CSVWriter",
    "CSVWriteError",
    "ScoringWeights",
    "SUPPORTED_ENCODINGS",
    # Subpackages
    "core",
]
