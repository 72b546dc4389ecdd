# csv_helper/__init__.py
"""
CSV Helper Module

Functional building blocks used by csv_handler.py.

Module Structure:
- csv_constants: candidate sets, sampling limits, display names
- csv_configuration: CSVConfiguration value type
- csv_encoding: BOM detection, encoding candidates, codec resolution
- csv_file_converter: BOM-aware byte-to-text conversion
- csv_reader: tokenizer
- csv_writer: serializer
- csv_heuristic: format detection (encoding, separator, quoting, header)
- csv_table: in-memory table and structural edits
- csv_document: table plus owning configuration
"""

# Constants
from tabletool.core.processor.csv_helper.csv_constants import (
    DELIMITER_CANDIDATES,
    DELIMITER_NAMES,
    QUOTE_CANDIDATES,
    ESCAPE_CANDIDATES,
    SUPPORTED_ENCODINGS,
)

# Configuration
from tabletool.core.processor.csv_helper.csv_configuration import (
    CSVConfiguration,
    DEFAULT_CONFIGURATION,
)

# Encoding
from tabletool.core.processor.csv_helper.csv_encoding import (
    detect_bom,
    detect_encoding_candidates,
)

# Converter
from tabletool.core.processor.csv_helper.csv_file_converter import CSVFileConverter

# Reader / Writer
from tabletool.core.processor.csv_helper.csv_reader import CSVReader, remap_row
from tabletool.core.processor.csv_helper.csv_writer import (
    CSVWriter,
    CSVWriteError,
    preview_configuration,
)

# Heuristic
from tabletool.core.processor.csv_helper.csv_heuristic import (
    CSVHeuristic,
    ScoringWeights,
    detect_header,
    is_numeric,
)

# Table / Document
from tabletool.core.processor.csv_helper.csv_table import CSVTable
from tabletool.core.processor.csv_helper.csv_document import CSVDocument

__all__ = [
    # Constants
    "DELIMITER_CANDIDATES",
    "DELIMITER_NAMES",
    "QUOTE_CANDIDATES",
    "ESCAPE_CANDIDATES",
    "SUPPORTED_ENCODINGS",
    # Configuration
    "CSVConfiguration",
    "DEFAULT_CONFIGURATION",
    # Encoding
    "detect_bom",
    "detect_encoding_candidates",
    # Converter
    "CSVFileConverter",
    # Reader / Writer
    "CSVReader",
    "remap_row",
    "CSVWriter",
    "CSVWriteError",
    "preview_configuration",
    # Heuristic
    "CSVHeuristic",
    "ScoringWeights",
    "detect_header",
    "is_numeric",
    # Table / Document
    "CSVTable",
    "CSVDocument",
]
