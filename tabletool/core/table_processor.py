# tabletool/core/table_processor.py
"""TableProcessor - Delimited Table Processing Class

Main entry point of the tabletool library. Opens delimited text files with
automatic format detection, and saves tables back in their configured
format.

Usage Example:
    from tabletool.core.table_processor import TableProcessor

    processor = TableProcessor()

    # Open a file (format detected automatically)
    document = processor.open("data.csv")

    # Edit and save
    document.table.update_cell(0, 0, "id")
    processor.save(document, "data.csv")

    # Work on raw bytes
    configuration = processor.detect_configuration(raw)
    table = processor.parse(raw, configuration)
    raw = processor.serialize(table, configuration)
"""

import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypedDict, Union

from tabletool.core.processor.csv_handler import CSVHandler
from tabletool.core.processor.csv_helper.csv_configuration import CSVConfiguration
from tabletool.core.processor.csv_helper.csv_document import CSVDocument
from tabletool.core.processor.csv_helper.csv_table import CSVTable


class CurrentFile(TypedDict, total=False):
    """
    TypedDict containing file information.

    Standard structure for reading files at binary level and passing to handlers.

    Attributes:
        file_path: Absolute path of the original file
        file_name: File name (including extension)
        file_extension: File extension (lowercase, without dot)
        file_data: Binary data of the file
        file_size: File size in bytes
    """
    file_path: str
    file_name: str
    file_extension: str
    file_data: bytes
    file_size: int


class TableProcessor:
    """
    tabletool Main Table Processing Class

    Attributes:
        config: Configuration dictionary
        supported_extensions: List of supported file extensions

    Example:
        >>> processor = TableProcessor(config={"max_workers": 4})
        >>> document = processor.open("data.csv")
        >>> document.configuration.column_separator
        ','
    """

    # === Supported File Type Classifications ===
    DATA_TYPES = frozenset(['csv', 'tsv', 'tab', 'psv', 'txt'])

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        """
        Initialize TableProcessor.

        Args:
            config: Configuration dictionary
                   - max_workers: Thread pool size for format detection
                   - sample_rows: Rows tokenized per detection candidate
                   - sample_bytes: Bytes of input tokenized per detection candidate
                   - sample_chars: Characters inspected for separator counting
                   - max_separators: Separators kept after ranking
                   - scoring_weights: ScoringWeights or dict of overrides
                   - legacy_encodings: Legacy fallback encodings
                   - use_chardet: Whether chardet may suggest an encoding
            **kwargs: Additional configuration options (merged into config)
        """
        self._config = dict(config or {})
        self._config.update(kwargs)

        # Logger setup
        self._logger = logging.getLogger("tabletool.processor")

        self._handler = CSVHandler(config=self._config)

    # =========================================================================
    # Public Properties
    # =========================================================================

    @property
    def supported_extensions(self) -> List[str]:
        """List of all supported file extensions."""
        return sorted(self.DATA_TYPES)

    @property
    def config(self) -> Dict[str, Any]:
        """Current configuration."""
        return self._config

    @property
    def handler(self) -> CSVHandler:
        return self._handler

    # =========================================================================
    # Public Methods - Files
    # =========================================================================

    def open(
        self,
        file_path: Union[str, Path],
        configuration: Optional[CSVConfiguration] = None,
        **kwargs
    ) -> CSVDocument:
        """
        Open a delimited text file.

        Args:
            file_path: File path
            configuration: Format to parse with (detected when None)
            **kwargs: progress_callback / parse_progress_callback

        Returns:
            CSVDocument

        Raises:
            FileNotFoundError: If file cannot be found
            ValueError: If file format is not supported
        """
        file_path_str = str(file_path)

        if not os.path.exists(file_path_str):
            raise FileNotFoundError(f"File not found: {file_path_str}")

        ext = os.path.splitext(file_path_str)[1].lstrip('.').lower()
        if ext and not self.is_supported(ext):
            raise ValueError(f"Unsupported file format: {ext}")

        self._logger.info(f"Opening table: {file_path_str} (ext={ext})")

        current_file = self._create_current_file(file_path_str, ext)
        return self._handler.read_document(current_file, configuration=configuration, **kwargs)

    def save(self, document: CSVDocument, file_path: Union[str, Path]) -> str:
        """
        Save a document with its owning configuration.

        The bytes are produced before the file is opened, so a write error
        leaves an existing file untouched.

        Args:
            document: Document to save
            file_path: Target path

        Returns:
            Saved file path

        Raises:
            CSVWriteError: If the table cannot be represented in the encoding
        """
        data = self._handler.save(document)

        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'wb') as f:
            f.write(data)

        self._logger.info(f"Saved {document.table.row_count} rows to {path}")
        return str(path)

    # =========================================================================
    # Public Methods - Bytes
    # =========================================================================

    def detect_configuration(
        self,
        data: bytes,
        progress_callback: Optional[Callable[[float], None]] = None
    ) -> CSVConfiguration:
        """Detect the configuration of raw bytes (never raises)."""
        return self._handler.detect_configuration(data, progress_callback=progress_callback)

    def parse(self, data: bytes, configuration: Optional[CSVConfiguration] = None) -> CSVTable:
        """Parse raw bytes (never raises; degrades to the sentinel table)."""
        return self._handler.parse(data, configuration)

    def serialize(self, table: CSVTable, configuration: Optional[CSVConfiguration] = None) -> bytes:
        """Serialize a table (raises CSVWriteError on encoding failure)."""
        return self._handler.serialize(table, configuration)

    def load(self, data: bytes, configuration: Optional[CSVConfiguration] = None, **kwargs) -> CSVDocument:
        """Build a document from raw bytes."""
        return self._handler.load(data, configuration=configuration, **kwargs)

    def is_supported(self, file_extension: str) -> bool:
        """
        Check if file extension is supported.

        Args:
            file_extension: File extension (with or without dot)

        Returns:
            True if supported
        """
        return file_extension.lower().lstrip('.') in self.DATA_TYPES

    # =========================================================================
    # Private Methods
    # =========================================================================

    def _create_current_file(self, file_path: str, ext: str) -> CurrentFile:
        """
        Create a CurrentFile dict from a file path.

        Args:
            file_path: Path to the file
            ext: File extension (lowercase, without dot)

        Returns:
            CurrentFile dict containing file info and binary data
        """
        file_path = os.path.abspath(file_path)
        file_name = os.path.basename(file_path)

        with open(file_path, 'rb') as f:
            file_data = f.read()

        return {
            "file_path": file_path,
            "file_name": file_name,
            "file_extension": ext,
            "file_data": file_data,
            "file_size": len(file_data)
        }

    # =========================================================================
    # Context Manager Support
    # =========================================================================

    def __enter__(self) -> "TableProcessor":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        pass

    # =========================================================================
    # String Representation
    # =========================================================================

    def __repr__(self) -> str:
        return f"TableProcessor(supported_extensions={len(self.supported_extensions)})"

    def __str__(self) -> str:
        return f"tabletool TableProcessor ({len(self.supported_extensions)} supported formats)"


# === Module-level Convenience Functions ===

_default_handler: Optional[CSVHandler] = None


def _get_default_handler() -> CSVHandler:
    global _default_handler
    if _default_handler is None:
        _default_handler = CSVHandler()
    return _default_handler


def create_processor(config: Optional[Dict[str, Any]] = None, **kwargs) -> TableProcessor:
    """
    Create a TableProcessor instance.

    Args:
        config: Configuration dictionary
        **kwargs: Additional configuration options

    Returns:
        TableProcessor instance

    Example:
        >>> processor = create_processor(max_workers=1)
    """
    return TableProcessor(config=config, **kwargs)


def detect_configuration(data: bytes) -> CSVConfiguration:
    """Detect the configuration of raw bytes with the default handler."""
    return _get_default_handler().detect_configuration(data)


def parse(data: bytes, configuration: Optional[CSVConfiguration] = None) -> CSVTable:
    """Parse raw bytes with the default handler."""
    return _get_default_handler().parse(data, configuration)


def serialize(table: CSVTable, configuration: Optional[CSVConfiguration] = None) -> bytes:
    """Serialize a table with the default handler."""
    return _get_default_handler().serialize(table, configuration)


__all__ = [
    "TableProcessor",
    "CurrentFile",
    "create_processor",
    "detect_configuration",
    "parse",
    "serialize",
]
