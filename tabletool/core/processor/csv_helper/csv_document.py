# csv_helper/csv_document.py
"""
CSV Document

A CSVTable together with the configuration that owns it. Replacing the
configuration only affects later serialization; existing cells are never
re-tokenized.
"""
from typing import TYPE_CHECKING, List, Optional

from tabletool.core.processor.csv_helper.csv_configuration import CSVConfiguration
from tabletool.core.processor.csv_helper.csv_table import CSVTable
from tabletool.core.processor.csv_helper.csv_writer import CSVWriter

if TYPE_CHECKING:
    from tabletool.core.processor.csv_handler import CSVHandler


class CSVDocument:
    """
    Table plus owning configuration.

    Attributes:
        table: Cell data
        configuration: Format used for the next save
    """

    def __init__(
        self,
        table: Optional[CSVTable] = None,
        configuration: Optional[CSVConfiguration] = None
    ):
        self.table = table if table is not None else CSVTable()
        self.configuration = configuration or CSVConfiguration()

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        configuration: Optional[CSVConfiguration] = None,
        handler: Optional["CSVHandler"] = None
    ) -> "CSVDocument":
        """
        Build a document from raw bytes.

        Args:
            data: Raw file data
            configuration: Format to parse with (detected when None)
            handler: Handler to use (a default CSVHandler when None)

        Returns:
            CSVDocument
        """
        if handler is None:
            from tabletool.core.processor.csv_handler import CSVHandler
            handler = CSVHandler()
        return handler.load(data, configuration=configuration)

    def to_bytes(self) -> bytes:
        """
        Serialize the table with the owning configuration.

        Raises:
            CSVWriteError: If the table cannot be encoded
        """
        return CSVWriter(self.configuration).write_to_data(self.table.rows)

    def to_text(self) -> str:
        return CSVWriter(self.configuration).write_data(self.table.rows)

    def apply_configuration(self, configuration: CSVConfiguration) -> None:
        """Make ``configuration`` the owning configuration; cells are untouched."""
        self.configuration = configuration

    @property
    def header(self) -> Optional[List[str]]:
        """Column titles when the first row is a header, else None."""
        header, _ = self.table.split_header(self.configuration.first_row_as_header)
        return header

    @property
    def records(self) -> List[List[str]]:
        """Data rows (header excluded), padded to the table width."""
        _, records = self.table.split_header(self.configuration.first_row_as_header)
        return records

    def __repr__(self) -> str:
        return f"CSVDocument(table={self.table!r}, configuration={self.configuration!r})"


__all__ = [
    "CSVDocument",
]
