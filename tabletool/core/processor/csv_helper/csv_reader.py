# csv_helper/csv_reader.py
"""
CSV Reader - single-pass tokenizer

Splits an encoded buffer into rows of string fields under a
CSVConfiguration. The scan runs over encoded code units (bytes for UTF-8 and
single-byte encodings, 2-byte units for UTF-16, 4-byte units for UTF-32,
whole characters for multi-byte legacy encodings such as GBK) and never
over decoded characters; each field is decoded once, when it is
complete.

Tokenizing rules:
    outside quotes  separator ends the field, quote enters quoted mode,
                    LF / CR / CRLF ends the row, anything else is content
    inside quotes   quote + escape is a literal quote; with prefix escaping
                    escape + quote and escape + escape are literals too;
                    a lone quote leaves quoted mode; anything else
                    (separators and line breaks included) is content

Usage:
    reader = CSVReader(data, configuration)
    while not reader.is_at_end:
        row = reader.read_line()
"""
from typing import Iterator, List, Optional, Sequence

from tabletool.core.processor.csv_helper.csv_configuration import CSVConfiguration
from tabletool.core.processor.csv_helper.csv_encoding import (
    decode_field,
    encode_unit,
    resolve_codec,
)


class CSVReader:
    """
    Stateful tokenizer over an encoded buffer.

    Attributes:
        configuration: Format the buffer is read with
        codec: Concrete codec fields are decoded with
        position: Cursor (byte offset) of the next row
    """

    def __init__(self, data: bytes, configuration: Optional[CSVConfiguration] = None):
        """
        Initialize CSVReader.

        Args:
            data: Encoded delimited text
            configuration: Format to read with (default configuration if None)

        Raises:
            LookupError: If the configured encoding is unknown
        """
        self.configuration = configuration or CSVConfiguration()
        self._data = bytes(data)

        resolved = resolve_codec(self._data, self.configuration.encoding)
        self.codec = resolved.codec
        self._unit = resolved.unit_size
        self._multibyte = resolved.multibyte
        self._start = resolved.bom_length
        self.position = self._start

        self._separator = self._token(self.configuration.column_separator)
        self._quote = self._token(self.configuration.quote_character)
        self._escape = self._token(self.configuration.escape_character)
        self._lf = self._token("\n")
        self._cr = self._token("\r")
        self._prefix_escaping = not self.configuration.uses_doubled_quotes

        self._lead_bytes = frozenset(
            tok[0] for tok in (self._separator, self._quote, self._escape, self._lf, self._cr) if tok
        )

    @classmethod
    def from_string(cls, text: str, configuration: Optional[CSVConfiguration] = None) -> "CSVReader":
        """
        Create a reader over already decoded text.

        The text is tokenized as UTF-8; the configuration's other settings
        are kept.
        """
        configuration = (configuration or CSVConfiguration()).with_changes(encoding="utf-8")
        return cls(text.encode("utf-8", errors="surrogatepass"), configuration)

    def _token(self, char: str) -> bytes:
        encoded = encode_unit(char, self.codec)
        if len(encoded) % self._unit != 0:
            return b""
        return encoded

    def _char_width(self, i: int) -> int:
        """Byte length of the character at ``i`` under a multi-byte legacy codec."""
        data = self._data
        if data[i] < 0x80:
            return 1
        for n in (1, 2, 3, 4):
            try:
                if len(data[i:i + n].decode(self.codec)) == 1:
                    return n
            except UnicodeDecodeError:
                continue
        return 1

    @property
    def is_at_end(self) -> bool:
        """True when the cursor has consumed the entire buffer."""
        return self.position >= len(self._data)

    def reset(self) -> None:
        """Move the cursor back to the first row."""
        self.position = self._start

    def consumed_bytes(self) -> bytes:
        """Return the bytes read so far, BOM excluded."""
        return self._data[self._start:self.position]

    def read_line(self) -> Optional[List[str]]:
        """
        Read the next row.

        Returns:
            List of fields (at least one), or None when the cursor is
            already at the end of the buffer
        """
        if self.is_at_end:
            return None

        data = self._data
        end = len(data)
        unit = self._unit
        lead = self._lead_bytes
        multibyte, char_width = self._multibyte, self._char_width
        sep, quote, escape, lf, cr = self._separator, self._quote, self._escape, self._lf, self._cr

        fields: List[str] = []
        field = bytearray()
        inside_quotes = False
        i = self.position

        while i < end:
            if data[i] not in lead:
                width = char_width(i) if multibyte else unit
                field += data[i:i + width]
                i += width
                continue

            if inside_quotes:
                if quote and data.startswith(quote, i):
                    after = i + len(quote)
                    if escape and data.startswith(escape, after):
                        field += quote
                        i = after + len(escape)
                    else:
                        inside_quotes = False
                        i = after
                elif self._prefix_escaping and escape and data.startswith(escape, i):
                    after = i + len(escape)
                    if quote and data.startswith(quote, after):
                        field += quote
                        i = after + len(quote)
                    elif data.startswith(escape, after):
                        field += escape
                        i = after + len(escape)
                    else:
                        field += escape
                        i = after
                else:
                    width = char_width(i) if multibyte else unit
                    field += data[i:i + width]
                    i += width
                continue

            if quote and data.startswith(quote, i):
                inside_quotes = True
                i += len(quote)
            elif sep and data.startswith(sep, i):
                fields.append(decode_field(bytes(field), self.codec))
                field = bytearray()
                i += len(sep)
            elif lf and data.startswith(lf, i):
                i += len(lf)
                break
            elif cr and data.startswith(cr, i):
                i += len(cr)
                if lf and data.startswith(lf, i):
                    i += len(lf)
                break
            else:
                width = char_width(i) if multibyte else unit
                field += data[i:i + width]
                i += width

        fields.append(decode_field(bytes(field), self.codec))
        self.position = i
        return fields

    def read_all_lines(self) -> List[List[str]]:
        """Reset the cursor and read every row."""
        self.reset()
        rows = []
        while True:
            row = self.read_line()
            if row is None:
                break
            rows.append(row)
        return rows

    def read_lines(self, limit: int) -> List[List[str]]:
        """Read at most ``limit`` rows from the current cursor."""
        rows = []
        while len(rows) < limit:
            row = self.read_line()
            if row is None:
                break
            rows.append(row)
        return rows

    def read_line_for_pasting(
        self,
        columns_order: Sequence[int],
        max_column_index: int
    ) -> Optional[List[str]]:
        """
        Read the next row and remap it onto fixed target columns.

        Field ``i`` lands in column ``columns_order[i]``. Fields without a
        target, or whose target lies beyond ``max_column_index``, are dropped.

        Args:
            columns_order: Target column of each source field
            max_column_index: Last column of the returned row

        Returns:
            Row of ``max_column_index + 1`` cells, or None at end of input
        """
        row = self.read_line()
        if row is None:
            return None
        return remap_row(row, columns_order, max_column_index)

    def __iter__(self) -> Iterator[List[str]]:
        while True:
            row = self.read_line()
            if row is None:
                return
            yield row


def remap_row(row: Sequence[str], columns_order: Sequence[int], max_column_index: int) -> List[str]:
    """Place ``row[i]`` at ``columns_order[i]`` in a row of ``max_column_index + 1`` cells."""
    adjusted = [""] * (max_column_index + 1)
    for index, value in enumerate(row):
        if index >= len(columns_order):
            break
        target = columns_order[index]
        if 0 <= target <= max_column_index:
            adjusted[target] = value
    return adjusted


__all__ = [
    "CSVReader",
    "remap_row",
]
