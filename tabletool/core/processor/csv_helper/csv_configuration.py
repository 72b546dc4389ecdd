# csv_helper/csv_configuration.py
"""
CSV Configuration

Immutable description of a delimited-text format: encoding, separator,
quote and escape characters, decimal mark and header flag.

Usage:
    config = CSVConfiguration(column_separator=";")
    record = config.to_dict()
    restored = CSVConfiguration.from_dict(record)
"""
import codecs
import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Dict

logger = logging.getLogger("table-tool")


def normalize_encoding(encoding: str) -> str:
    """
    Normalize an encoding name through the codec registry.

    Unknown names are returned unchanged so that the failure surfaces where
    the codec is actually used.

    Args:
        encoding: Encoding name (e.g. "UTF8", "Windows-1252")

    Returns:
        Canonical codec name (e.g. "utf-8", "cp1252")
    """
    try:
        return codecs.lookup(encoding).name
    except (LookupError, TypeError):
        return encoding


@dataclass(frozen=True)
class CSVConfiguration:
    """
    Delimited-text format description.

    Separator, quote and escape characters are always exactly one character:
    empty values fall back to the defaults and longer values are truncated.
    ``decimal_mark`` is advisory and never affects tokenization.

    Attributes:
        encoding: Python codec name
        column_separator: Field separator
        quote_character: Quote character
        escape_character: Escape character (equal to the quote for doubled quotes)
        decimal_mark: Decimal mark of numeric cells
        first_row_as_header: Whether the first row holds column titles
    """
    encoding: str = "utf-8"
    column_separator: str = ","
    quote_character: str = '"'
    escape_character: str = '"'
    decimal_mark: str = "."
    first_row_as_header: bool = False

    def __post_init__(self):
        object.__setattr__(self, "encoding", normalize_encoding(self.encoding or "utf-8"))
        for f in dataclasses.fields(self):
            if f.type is not str or f.name == "encoding":
                continue
            value = getattr(self, f.name)
            if not value:
                object.__setattr__(self, f.name, f.default)
            elif len(value) > 1:
                logger.debug(f"Truncating {f.name}={value!r} to a single character")
                object.__setattr__(self, f.name, value[0])
        object.__setattr__(self, "first_row_as_header", bool(self.first_row_as_header))

    @property
    def uses_doubled_quotes(self) -> bool:
        """True when quotes are escaped by doubling them."""
        return self.escape_character == self.quote_character

    def with_changes(self, **changes: Any) -> "CSVConfiguration":
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Return the persisted form of this configuration."""
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "CSVConfiguration":
        """
        Build a configuration from its persisted form.

        Unknown keys are ignored and missing keys take their defaults.

        Args:
            record: Mapping produced by to_dict()

        Returns:
            CSVConfiguration instance
        """
        names = {f.name for f in dataclasses.fields(cls)}
        return cls(**{k: v for k, v in record.items() if k in names})


DEFAULT_CONFIGURATION = CSVConfiguration()


__all__ = [
    "CSVConfiguration",
    "DEFAULT_CONFIGURATION",
    "normalize_encoding",
]
