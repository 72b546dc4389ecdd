# csv_helper/csv_table.py
"""
CSV Table - in-memory document state

Rows of string cells plus the derived width of the widest row.

Invariants:
- ``rows`` is never empty; the empty table is the sentinel ``[[""]]``
- every row has at least one cell
- no row is wider than ``max_column_count``
- short rows read as padded with empty cells and are padded on write

Structural edits never raise on bad indices. Out-of-range edits are
ignored and reported through a False return value.
"""
from typing import Iterable, List, Optional, Sequence, Tuple

from tabletool.core.processor.csv_helper.csv_constants import SENTINEL_ROWS


def _widest(rows: Sequence[Sequence[str]]) -> int:
    return max((len(row) for row in rows), default=0)


class CSVTable:
    """
    Jagged-tolerant table of string cells.

    Attributes:
        rows: Row data (list of lists of str)
        max_column_count: Number of cells in the widest row
    """

    def __init__(self, rows: Optional[Iterable[Sequence[str]]] = None):
        """
        Initialize CSVTable.

        Args:
            rows: Initial rows (copied); None or no rows gives the sentinel table,
                a row without cells becomes [""]
        """
        self.rows: List[List[str]] = [list(row) or [""] for row in rows] if rows is not None else []
        self.max_column_count = 1
        if not self.rows:
            self._reset()
        else:
            self._recompute_max_column_count()

    @classmethod
    def empty(cls) -> "CSVTable":
        """Return the sentinel table."""
        return cls()

    def _reset(self) -> None:
        self.rows = [list(row) for row in SENTINEL_ROWS]
        self.max_column_count = 1

    def _recompute_max_column_count(self) -> None:
        self.max_column_count = _widest(self.rows) or 1

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        """True for the sentinel table."""
        return self.rows == SENTINEL_ROWS

    def cell(self, row: int, column: int) -> str:
        """Return a cell value; cells past the end of a short row read as ""."""
        if not (0 <= row < len(self.rows)) or column < 0:
            return ""
        cells = self.rows[row]
        return cells[column] if column < len(cells) else ""

    def padded_rows(self) -> List[List[str]]:
        """Return a copy of the rows, each padded to max_column_count."""
        width = self.max_column_count
        return [row + [""] * (width - len(row)) for row in self.rows]

    def split_header(self, first_row_as_header: bool) -> Tuple[Optional[List[str]], List[List[str]]]:
        """
        Split the table into a header row and data rows.

        Args:
            first_row_as_header: Whether the first row holds column titles

        Returns:
            (header, records); header is None when the flag is off
        """
        rows = self.padded_rows()
        if first_row_as_header:
            return rows[0], rows[1:]
        return None, rows

    def copy(self) -> "CSVTable":
        return CSVTable(self.rows)

    # =========================================================================
    # Structural edits
    # =========================================================================

    def add_row(self, at_index: Optional[int] = None) -> bool:
        """
        Insert a row of empty cells as wide as the table.

        Args:
            at_index: Insert position (append when None or past the end)

        Returns:
            True when the row was inserted
        """
        if at_index is not None and at_index < 0:
            return False
        new_row = [""] * self.max_column_count
        if at_index is None or at_index >= len(self.rows):
            self.rows.append(new_row)
        else:
            self.rows.insert(at_index, new_row)
        return True

    def delete_row(self, index: int) -> bool:
        """
        Remove a row.

        Args:
            index: Row to remove

        Returns:
            False when the index is out of bounds
        """
        if not (0 <= index < len(self.rows)):
            return False
        del self.rows[index]
        if not self.rows:
            self._reset()
        else:
            self._recompute_max_column_count()
        return True

    def add_column(self, at_index: Optional[int] = None) -> bool:
        """
        Insert an empty cell into every row.

        Rows shorter than the insert position get the cell appended.

        Args:
            at_index: Insert position (append when None)

        Returns:
            True when the column was added
        """
        if at_index is not None and at_index < 0:
            return False
        insert_index = self.max_column_count if at_index is None else at_index
        self.max_column_count += 1
        for row in self.rows:
            if insert_index < len(row):
                row.insert(insert_index, "")
            else:
                row.append("")
        return True

    def delete_column(self, index: int) -> bool:
        """
        Remove a column from every row that has it.

        Rows left without cells keep one empty cell; when every row is
        emptied the table becomes the sentinel.

        Args:
            index: Column to remove

        Returns:
            False when the index is out of bounds
        """
        if not (0 <= index < self.max_column_count):
            return False
        for row in self.rows:
            if index < len(row):
                del row[index]
        if _widest(self.rows) == 0:
            self._reset()
        else:
            for row in self.rows:
                if not row:
                    row.append("")
            self._recompute_max_column_count()
        return True

    def update_cell(self, row: int, column: int, value: str) -> bool:
        """
        Set a cell value, padding the row when needed.

        Args:
            row: Row index
            column: Column index
            value: New cell value

        Returns:
            False when the row (or a negative column) is out of bounds
        """
        if not (0 <= row < len(self.rows)) or column < 0:
            return False
        cells = self.rows[row]
        if len(cells) <= column:
            cells.extend([""] * (column + 1 - len(cells)))
        cells[column] = value
        self.max_column_count = max(self.max_column_count, len(cells))
        return True

    # =========================================================================
    # Comparison / representation
    # =========================================================================

    def normalized_rows(self) -> List[List[str]]:
        """Return the rows with trailing empty cells removed (at least one cell kept)."""
        normalized = []
        for row in self.rows:
            end = len(row)
            while end > 1 and row[end - 1] == "":
                end -= 1
            normalized.append(row[:end] if end else [""])
        return normalized

    def __eq__(self, other) -> bool:
        if not isinstance(other, CSVTable):
            return NotImplemented
        return self.rows == other.rows

    def __len__(self) -> int:
        return len(self.rows)

    def __repr__(self) -> str:
        return f"CSVTable(rows={len(self.rows)}, columns={self.max_column_count})"


__all__ = [
    "CSVTable",
]
