# tabletool/core/processor/base_handler.py
"""
BaseHandler - Abstract base class for table format handlers

Defines the base interface for handlers that turn raw bytes into tables
and back. Manages the config dictionary passed from TableProcessor, a
per-class logger and a lazily created file converter.

Each handler should override:
- _create_file_converter(): Provide format-specific file converter
- detect_configuration(): Infer the format of raw bytes
- parse(): Raw bytes + format -> table
- serialize(): Table + format -> raw bytes

Processing Pipeline:
    1. detect_configuration() - Raw bytes -> format description
    2. parse() - Raw bytes -> table
    3. serialize() - Table -> raw bytes
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from tabletool.core.functions.file_converter import BaseFileConverter, TextFileConverter


class BaseHandler(ABC):
    """
    Abstract base class for table format handlers.

    Attributes:
        config: Configuration dictionary passed from TableProcessor
        file_converter: Format-specific file converter (lazy-initialized)
        logger: Logging instance
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize BaseHandler.

        Args:
            config: Configuration dictionary (passed from TableProcessor)
        """
        self._config = config or {}
        self._file_converter: Optional[BaseFileConverter] = None
        self._logger = logging.getLogger(f"table-tool.{self.__class__.__name__}")

    def _create_file_converter(self) -> BaseFileConverter:
        """
        Create format-specific file converter.

        Override this method in subclasses to provide the appropriate
        file converter for the file format.
        """
        return TextFileConverter()

    @property
    def config(self) -> Dict[str, Any]:
        """Configuration dictionary."""
        return self._config

    @property
    def file_converter(self) -> BaseFileConverter:
        """Format-specific file converter (lazy-initialized)."""
        if self._file_converter is None:
            converter = self._create_file_converter()
            self._file_converter = converter if converter is not None else TextFileConverter()
        return self._file_converter

    @property
    def logger(self) -> logging.Logger:
        """Logger instance."""
        return self._logger

    @abstractmethod
    def detect_configuration(self, data: bytes, **kwargs) -> Any:
        """Infer the format of raw bytes."""
        pass

    @abstractmethod
    def parse(self, data: bytes, configuration: Any, **kwargs) -> Any:
        """Parse raw bytes into a table."""
        pass

    @abstractmethod
    def serialize(self, table: Any, configuration: Any) -> bytes:
        """Serialize a table into raw bytes."""
        pass
