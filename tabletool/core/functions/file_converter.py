# tabletool/core/functions/file_converter.py
"""
BaseFileConverter - Abstract base class for byte-to-text conversion

Defines the interface for turning raw file bytes into text that can be
inspected (e.g. for separator counting) before tokenization.

Usage:
    class MyConverter(TextFileConverter):
        def get_format_name(self) -> str:
            return "My Format"
"""
from abc import ABC, abstractmethod
from typing import Any, List, Optional


class BaseFileConverter(ABC):
    """
    Abstract base class for file format converters.

    Subclasses must implement:
    - convert(): Convert binary data to a workable format
    - get_format_name(): Return human-readable format name
    """

    @abstractmethod
    def convert(self, file_data: bytes, **kwargs) -> Any:
        """
        Convert binary file data to a workable format.

        Args:
            file_data: Raw binary file data
            **kwargs: Additional format-specific options

        Returns:
            Format-specific object
        """
        pass

    @abstractmethod
    def get_format_name(self) -> str:
        """Return human-readable format name."""
        pass


class TextFileConverter(BaseFileConverter):
    """
    Converter for text-based files.

    Decodes binary data to a text string, trying a list of encodings in order
    and falling back to UTF-8 with replacement characters.
    """

    DEFAULT_ENCODINGS = ['utf-8', 'cp1252', 'mac-roman']

    def __init__(self, encodings: Optional[List[str]] = None):
        """
        Initialize TextFileConverter.

        Args:
            encodings: List of encodings to try (default: common encodings)
        """
        self._encodings = encodings or self.DEFAULT_ENCODINGS
        self._detected_encoding: Optional[str] = None

    def convert(self, file_data: bytes, **kwargs) -> str:
        """
        Convert binary data to text string.

        Args:
            file_data: Raw binary file data
            **kwargs: Additional options

        Returns:
            Decoded text string
        """
        for enc in self._encodings:
            try:
                result = file_data.decode(enc)
                self._detected_encoding = enc
                return result
            except (UnicodeDecodeError, LookupError):
                continue

        self._detected_encoding = 'utf-8'
        return file_data.decode('utf-8', errors='replace')

    def get_format_name(self) -> str:
        """Return format name with detected encoding."""
        if self._detected_encoding:
            return f"Text ({self._detected_encoding})"
        return "Text"

    @property
    def detected_encoding(self) -> Optional[str]:
        """Return the encoding detected during last conversion."""
        return self._detected_encoding
