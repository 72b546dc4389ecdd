# tabletool/core/processor/csv_helper/csv_file_converter.py
"""
CSVFileConverter - CSV file format converter

Converts binary CSV data to text with BOM awareness. Used to decode the
prefix the format heuristic counts separators on.
"""
from typing import List, Optional, Sequence, Tuple

from tabletool.core.functions.file_converter import TextFileConverter
from tabletool.core.processor.csv_helper.csv_constants import LEGACY_ENCODING_CANDIDATES
from tabletool.core.processor.csv_helper.csv_encoding import bom_family, resolve_codec


class CSVFileConverter(TextFileConverter):
    """
    CSV file converter.

    Extends TextFileConverter with BOM detection and lenient decoding of a
    bounded prefix under a known encoding.
    """

    def __init__(self, legacy_encodings: Optional[Sequence[str]] = None):
        """
        Initialize CSVFileConverter.

        Args:
            legacy_encodings: Fallbacks tried after UTF-8 when no encoding is
                given (default: LEGACY_ENCODING_CANDIDATES)
        """
        encodings: List[str] = ['utf-8'] + list(legacy_encodings or LEGACY_ENCODING_CANDIDATES)
        super().__init__(encodings=encodings)

    def convert(
        self,
        file_data: bytes,
        encoding: Optional[str] = None,
        max_chars: Optional[int] = None,
        **kwargs
    ) -> Tuple[str, str]:
        """
        Convert binary CSV data to text.

        With an encoding, the data (BOM skipped) is decoded leniently, so a
        prefix cut in the middle of a character still converts. Without one,
        the BOM decides, then the encoding list, then UTF-8 with replacement
        characters.

        Args:
            file_data: Raw binary CSV data
            encoding: Specific encoding to use
            max_chars: Return at most this many characters
            **kwargs: Additional options

        Returns:
            Tuple of (decoded text, encoding)
        """
        encoding = encoding or bom_family(file_data)

        if encoding:
            try:
                resolved = resolve_codec(file_data, encoding)
            except LookupError:
                resolved = None
            if resolved is not None:
                data = file_data[resolved.bom_length:]
                if max_chars is not None:
                    data = data[:max_chars * 4]
                data = data[:len(data) - len(data) % resolved.unit_size]
                text = data.decode(resolved.codec, errors='replace')
                self._detected_encoding = encoding
                return (text[:max_chars] if max_chars is not None else text), encoding

        text = super().convert(file_data, **kwargs)
        if max_chars is not None:
            text = text[:max_chars]
        return text, self._detected_encoding or 'utf-8'

    def get_format_name(self) -> str:
        """Return format name."""
        enc = self._detected_encoding or 'unknown'
        return f"CSV ({enc})"


__all__ = ['CSVFileConverter']
