# csv_helper/csv_writer.py
"""
CSV Writer - serializer

Turns rows of string fields back into delimited text. Output re-reads
through CSVReader under the same configuration to the same rows.

Quoting policy:
    A field is quoted when it contains the separator, the quote character,
    LF or CR, or starts/ends with whitespace. Inside a quoted field every
    quote is doubled (escape == quote) or prefixed with the escape
    character; with prefix escaping the escape character itself is
    doubled as well. Rows are joined with LF, without a trailing line break.
"""
import logging
from typing import Iterable, List, Optional, Sequence

from tabletool.core.processor.csv_helper.csv_configuration import CSVConfiguration
from tabletool.core.processor.csv_helper.csv_constants import PREVIEW_ROWS

logger = logging.getLogger("table-tool")


class CSVWriteError(ValueError):
    """Raised when a table cannot be represented in the target encoding."""

    def __init__(self, encoding: str, message: str):
        super().__init__(f"Cannot write CSV as {encoding}: {message}")
        self.encoding = encoding


class CSVWriter:
    """Serializer for one CSVConfiguration."""

    def __init__(self, configuration: Optional[CSVConfiguration] = None):
        self.configuration = configuration or CSVConfiguration()

    def write_data(self, rows: Iterable[Sequence[str]]) -> str:
        """
        Serialize rows to text.

        Args:
            rows: Rows of string fields

        Returns:
            Delimited text, rows separated by LF
        """
        return "\n".join(self.write_row(row) for row in rows)

    def write_row(self, row: Sequence[str]) -> str:
        """Serialize one row."""
        return self.configuration.column_separator.join(self.process_field(field) for field in row)

    def process_field(self, field: str) -> str:
        """Quote and escape a field when the quoting policy requires it."""
        if not self.should_quote_field(field):
            return field
        quote = self.configuration.quote_character
        return f"{quote}{self.escape_field(field)}{quote}"

    def should_quote_field(self, field: str) -> bool:
        config = self.configuration
        return (
            config.column_separator in field
            or config.quote_character in field
            or "\n" in field
            or "\r" in field
            or field[:1].isspace()
            or field[-1:].isspace()
        )

    def escape_field(self, field: str) -> str:
        quote = self.configuration.quote_character
        escape = self.configuration.escape_character
        if self.configuration.uses_doubled_quotes:
            return field.replace(quote, quote + quote)
        # Escape characters first so the prefixes added for quotes stay single
        field = field.replace(escape, escape + escape)
        return field.replace(quote, escape + quote)

    def write_to_data(self, rows: Iterable[Sequence[str]]) -> bytes:
        """
        Serialize rows and encode them with the configured encoding.

        Args:
            rows: Rows of string fields

        Returns:
            Encoded bytes (BOM included for utf-8-sig / utf-16 / utf-32)

        Raises:
            CSVWriteError: If the text cannot be represented in the encoding
        """
        text = self.write_data(rows)
        encoding = self.configuration.encoding
        try:
            return text.encode(encoding)
        except UnicodeEncodeError as e:
            logger.warning(f"Encoding failure while writing CSV as {encoding}: {e}")
            raise CSVWriteError(encoding, f"character {e.object[e.start:e.end]!r} is not representable") from e
        except LookupError as e:
            logger.warning(f"Unknown encoding while writing CSV: {encoding}")
            raise CSVWriteError(encoding, "unknown encoding") from e


def preview_configuration(
    configuration: CSVConfiguration,
    rows: Optional[List[List[str]]] = None
) -> str:
    """
    Render sample rows under a configuration.

    Args:
        configuration: Format to preview
        rows: Rows to render (default: a small name/age/city/salary table)

    Returns:
        Serialized text
    """
    return CSVWriter(configuration).write_data(rows if rows is not None else PREVIEW_ROWS)


__all__ = [
    "CSVWriter",
    "CSVWriteError",
    "preview_configuration",
]
