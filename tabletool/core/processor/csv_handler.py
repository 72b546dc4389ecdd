# tabletool/core/processor/csv_handler.py
"""
CSV Handler - Delimited Text Processor

Class-based handler for CSV/TSV files inheriting from BaseHandler.
Detects the format of raw bytes, parses them into a CSVTable and writes
tables back.
"""
import traceback
from typing import TYPE_CHECKING, Callable, Optional

from tabletool.core.processor.base_handler import BaseHandler
from tabletool.core.processor.csv_helper.csv_configuration import CSVConfiguration
from tabletool.core.processor.csv_helper.csv_constants import PROGRESS_INTERVAL
from tabletool.core.processor.csv_helper.csv_document import CSVDocument
from tabletool.core.processor.csv_helper.csv_file_converter import CSVFileConverter
from tabletool.core.processor.csv_helper.csv_heuristic import CSVHeuristic
from tabletool.core.processor.csv_helper.csv_reader import CSVReader
from tabletool.core.processor.csv_helper.csv_table import CSVTable
from tabletool.core.processor.csv_helper.csv_writer import CSVWriter

if TYPE_CHECKING:
    from tabletool.core.table_processor import CurrentFile


class CSVHandler(BaseHandler):
    """CSV/TSV File Processing Handler Class"""

    def _create_file_converter(self) -> CSVFileConverter:
        """Create CSV-specific file converter."""
        return CSVFileConverter(self._config.get("legacy_encodings"))

    @property
    def heuristic(self) -> CSVHeuristic:
        """Format heuristic sharing this handler's config and converter."""
        return CSVHeuristic(self._config, file_converter=self.file_converter)

    def detect_configuration(
        self,
        data: bytes,
        progress_callback: Optional[Callable[[float], None]] = None,
        **kwargs
    ) -> CSVConfiguration:
        """
        Detect the configuration of raw bytes.

        Never raises; falls back to the default configuration.

        Args:
            data: Raw file data
            progress_callback: Receives the fraction of candidates evaluated

        Returns:
            Detected CSVConfiguration
        """
        return self.heuristic.detect_configuration(data, progress_callback=progress_callback)

    def parse(
        self,
        data: bytes,
        configuration: Optional[CSVConfiguration] = None,
        progress_callback: Optional[Callable[[int], None]] = None,
        **kwargs
    ) -> CSVTable:
        """
        Parse raw bytes into a table.

        Never raises: a failure while tokenizing discards partial results and
        returns the sentinel table.

        Args:
            data: Raw file data
            configuration: Format to parse with (default configuration if None)
            progress_callback: Receives the number of rows read, every 100 rows

        Returns:
            CSVTable
        """
        configuration = configuration or CSVConfiguration()

        try:
            reader = CSVReader(data, configuration)
            rows = []
            while not reader.is_at_end:
                row = reader.read_line()
                if row is None:
                    break
                rows.append(row)
                if progress_callback is not None and len(rows) % PROGRESS_INTERVAL == 0:
                    progress_callback(len(rows))
        except Exception as e:
            self.logger.error(f"Error parsing CSV data as {configuration.encoding}: {e}")
            self.logger.debug(traceback.format_exc())
            return CSVTable.empty()

        table = CSVTable(rows)
        self.logger.info(f"CSV parsing completed: {table.row_count} rows, {table.max_column_count} columns")
        return table

    def serialize(self, table: CSVTable, configuration: Optional[CSVConfiguration] = None) -> bytes:
        """
        Serialize a table.

        Args:
            table: Table to write
            configuration: Format to write with (default configuration if None)

        Returns:
            Encoded bytes

        Raises:
            CSVWriteError: If the table cannot be represented in the encoding
        """
        writer = CSVWriter(configuration or CSVConfiguration())
        try:
            return writer.write_to_data(table.rows)
        except Exception as e:
            self.logger.error(f"Error serializing CSV table: {e}")
            raise

    def load(
        self,
        data: bytes,
        configuration: Optional[CSVConfiguration] = None,
        **kwargs
    ) -> CSVDocument:
        """
        Build a document from raw bytes, detecting the format if needed.

        Args:
            data: Raw file data
            configuration: Format to parse with (detected when None)
            **kwargs: progress_callback / parse_progress_callback

        Returns:
            CSVDocument owning the configuration it was parsed with
        """
        if configuration is None:
            configuration = self.detect_configuration(data, progress_callback=kwargs.get("progress_callback"))
        table = self.parse(data, configuration, progress_callback=kwargs.get("parse_progress_callback"))
        return CSVDocument(table, configuration)

    def save(self, document: CSVDocument) -> bytes:
        """Serialize a document with its owning configuration."""
        return self.serialize(document.table, document.configuration)

    def read_document(
        self,
        current_file: "CurrentFile",
        configuration: Optional[CSVConfiguration] = None,
        **kwargs
    ) -> CSVDocument:
        """
        Build a document from a CurrentFile.

        Args:
            current_file: CurrentFile dict containing file info and binary data
            configuration: Format to parse with (detected when None)
            **kwargs: Passed to load()

        Returns:
            CSVDocument
        """
        file_path = current_file.get("file_path", "unknown")
        self.logger.info(f"CSV processing: {file_path} ({current_file.get('file_size', 0)} bytes)")
        return self.load(current_file.get("file_data", b""), configuration=configuration, **kwargs)


__all__ = ["CSVHandler"]
