# csv_helper/csv_heuristic.py
"""
CSV Format Heuristic

Infers encoding, separator, quote/escape convention and header presence
from raw bytes by scoring candidate configurations.

Detection pipeline:
    1. Encoding candidates (BOM short-circuit, strict UTF-8, legacy fallbacks)
    2. Separator candidates counted on a short decoded prefix
    3. Candidate configurations: encodings x separators x quotes x escapes,
       each header-off then header-on, numbered in generation order
    4. Scoring of the first rows tokenized under every candidate; the
       highest score wins and ties go to the earliest candidate

Candidate evaluations are independent and run on a thread pool.
"""
import codecs
import logging
import re
import traceback
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, fields
from itertools import product
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple

from tabletool.core.processor.csv_helper.csv_configuration import CSVConfiguration
from tabletool.core.processor.csv_helper.csv_constants import (
    DELIMITER_CANDIDATES,
    ESCAPE_CANDIDATES,
    MAX_DELIMITER_CANDIDATES,
    QUOTE_CANDIDATES,
    SAMPLE_BYTES,
    SAMPLE_CHARS,
    SAMPLE_LINES,
    SAMPLE_ROWS,
)
from tabletool.core.processor.csv_helper.csv_encoding import detect_encoding_candidates
from tabletool.core.processor.csv_helper.csv_file_converter import CSVFileConverter
from tabletool.core.processor.csv_helper.csv_reader import CSVReader

ProgressCallback = Callable[[float], None]


@dataclass(frozen=True)
class ScoringWeights:
    """
    Scoring policy of the heuristic.

    Attributes:
        consistent_row: Row has as many fields as the previous row
        plausible_width: Row field count within [min_columns, max_columns]
        single_field_row: Row with a single field
        wide_row: Row with more than max_columns fields
        non_empty_field: Each non-empty field
        multiple_rows: Flat bonus when more than one row was read
        modal_row: Each row whose field count is the most frequent one
        header_agreement: Header flag matches detect_header() on the sample
        min_columns: Lower bound of a plausible row width
        max_columns: Upper bound of a plausible row width
        floor: Score of a candidate that cannot be read
    """
    consistent_row: int = 10
    plausible_width: int = 5
    single_field_row: int = -2
    wide_row: int = -5
    non_empty_field: int = 1
    multiple_rows: int = 20
    modal_row: int = 5
    header_agreement: int = 1
    min_columns: int = 2
    max_columns: int = 50
    floor: int = -1

    @classmethod
    def from_value(cls, value: Any) -> "ScoringWeights":
        """Build weights from None, an instance, or a dict of overrides."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in dict(value).items() if k in names})


class Candidate(NamedTuple):
    """A configuration numbered in generation order."""
    index: int
    configuration: CSVConfiguration


# === Sample analysis ===

_NUMERIC_PATTERNS = [
    re.compile(r'^-?\d+$'),                       # integer
    re.compile(r'^-?\d+[.,]\d+$'),                # decimal (dot or comma)
    re.compile(r'^-?\d{1,3}([,.\s]\d{3})+([.,]\d+)?$'),  # thousands separators
    re.compile(r'^-?\d+([.,]\d+)?%$'),            # percentage
    re.compile(r'^[$€£¥₩]-?\d+([.,]\d+)?$'),      # currency
]

_DOT_DECIMAL = re.compile(r'^-?\d+\.\d+$')
_COMMA_DECIMAL = re.compile(r'^-?\d+,\d+$')


def is_numeric(value: str) -> bool:
    """
    Check whether a cell holds a number.

    Supported formats: integers, decimals with dot or comma, thousands
    separators, percentages and simple currency amounts.

    Args:
        value: Cell value

    Returns:
        True if the value looks numeric
    """
    if not value or not value.strip():
        return False
    value = value.strip()
    return any(pattern.match(value) for pattern in _NUMERIC_PATTERNS)


def detect_header(rows: Sequence[Sequence[str]]) -> bool:
    """
    Detect whether the first row is a header.

    Criteria:
    1. Every non-empty cell of the first row is non-numeric
    2. The second row has a numeric cell, or the first row's cells are unique

    Args:
        rows: Parsed rows

    Returns:
        True if the first row looks like a header
    """
    if len(rows) < 2:
        return False

    first_row = rows[0]
    second_row = rows[1]

    first_non_empty = [cell for cell in first_row if cell.strip()]
    if not first_non_empty:
        return False

    first_all_text = all(not is_numeric(cell) for cell in first_non_empty)
    second_has_numbers = any(is_numeric(cell) for cell in second_row if cell.strip())
    first_unique = len(set(first_row)) == len(first_row)

    return first_all_text and (second_has_numbers or first_unique)


def detect_decimal_mark(rows: Sequence[Sequence[str]], separator: str) -> str:
    """
    Infer the decimal mark of numeric cells.

    Args:
        rows: Parsed rows
        separator: Column separator of the rows

    Returns:
        "," when comma decimals outnumber dot decimals and the separator is
        not a comma, otherwise "."
    """
    if separator == ',':
        return '.'
    dots = commas = 0
    for row in rows:
        for cell in row:
            cell = cell.strip()
            if _DOT_DECIMAL.match(cell):
                dots += 1
            elif _COMMA_DECIMAL.match(cell):
                commas += 1
    return ',' if commas > dots else '.'


def count_delimiters(lines: Sequence[str], candidates: Sequence[str] = DELIMITER_CANDIDATES) -> Dict[str, List[int]]:
    """Count every candidate separator on every line."""
    return {delim: [line.count(delim) for line in lines] for delim in candidates}


def detect_delimiter_candidates(
    content: str,
    max_candidates: int = MAX_DELIMITER_CANDIDATES,
    max_lines: int = SAMPLE_LINES,
    candidates: Sequence[str] = DELIMITER_CANDIDATES
) -> List[str]:
    """
    Rank the separators that occur in a text sample.

    Separators that occur at all are ranked by their fixed priority, with
    total occurrences as tie-break, and the first ``max_candidates`` kept.

    Args:
        content: Decoded sample text
        max_candidates: Number of separators kept
        max_lines: Number of lines inspected
        candidates: Separators in priority order

    Returns:
        Separator candidates; [","] when none occurs
    """
    lines = content.splitlines()[:max_lines]
    counts = count_delimiters(lines, candidates)

    found = []
    for priority, delim in enumerate(candidates):
        total = sum(counts[delim])
        if total > 0:
            found.append((priority, -total, delim))

    if not found:
        return [',']

    found.sort()
    return [delim for _, _, delim in found[:max_candidates]]


def score_rows(rows: Sequence[Sequence[str]], weights: ScoringWeights) -> int:
    """
    Score rows tokenized under one candidate configuration.

    Args:
        rows: Sampled rows
        weights: Scoring policy

    Returns:
        Integer score (header agreement not included)
    """
    score = 0
    column_counts: List[int] = []

    for row in rows:
        width = len(row)
        if column_counts and column_counts[-1] == width:
            score += weights.consistent_row
        column_counts.append(width)

        if weights.min_columns <= width <= weights.max_columns:
            score += weights.plausible_width

        if width == 1:
            score += weights.single_field_row
        elif width > weights.max_columns:
            score += weights.wide_row

        score += weights.non_empty_field * sum(1 for cell in row if cell)

    if len(rows) > 1:
        score += weights.multiple_rows

    if column_counts:
        _, modal_rows = Counter(column_counts).most_common(1)[0]
        score += weights.modal_row * modal_rows

    return score


class CSVHeuristic:
    """
    Configuration detector.

    Options (config dict):
        max_workers: Thread pool size (1 evaluates inline)
        sample_rows: Rows tokenized per candidate
        sample_bytes: Bytes of input every candidate may tokenize
        sample_chars: Characters inspected for separator counting
        max_separators: Separators kept after ranking
        scoring_weights: ScoringWeights or dict of overrides
        legacy_encodings: Legacy fallback encodings in priority order
        use_chardet: Whether chardet may contribute a legacy encoding

    Usage:
        heuristic = CSVHeuristic()
        configuration = heuristic.detect_configuration(data)
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        file_converter: Optional[CSVFileConverter] = None
    ):
        self._config = config or {}
        self._file_converter = file_converter or CSVFileConverter(self._config.get("legacy_encodings"))
        self.weights = ScoringWeights.from_value(self._config.get("scoring_weights"))
        self.max_workers = self._config.get("max_workers")
        self.sample_rows = self._config.get("sample_rows", SAMPLE_ROWS)
        self.sample_bytes = self._config.get("sample_bytes", SAMPLE_BYTES)
        self.sample_chars = self._config.get("sample_chars", SAMPLE_CHARS)
        self.max_separators = self._config.get("max_separators", MAX_DELIMITER_CANDIDATES)
        self.legacy_encodings = self._config.get("legacy_encodings")
        self.use_chardet = self._config.get("use_chardet", True)
        self._logger = logging.getLogger("table-tool.CSVHeuristic")

    # =========================================================================
    # Public API
    # =========================================================================

    def detect_configuration(
        self,
        data: bytes,
        progress_callback: Optional[ProgressCallback] = None
    ) -> CSVConfiguration:
        """
        Detect the most likely configuration of a byte blob.

        Never raises: on any internal failure the default configuration is
        returned.

        Args:
            data: Raw file data
            progress_callback: Receives the fraction of candidates evaluated

        Returns:
            Best-scoring CSVConfiguration
        """
        try:
            return self._detect(bytes(data), progress_callback)
        except Exception as e:
            self._logger.error(f"Configuration detection failed: {e}")
            self._logger.debug(traceback.format_exc())
            return CSVConfiguration()

    def generate_candidates(self, data: bytes) -> Tuple[List[Candidate], bool]:
        """
        Generate candidate configurations in scoring tie-break order.

        Args:
            data: Raw file data

        Returns:
            (candidates, strict) where strict is False when no encoding
            decoded the data and UTF-8 was forced
        """
        encodings = detect_encoding_candidates(
            data,
            legacy_encodings=self.legacy_encodings,
            use_chardet=self.use_chardet,
        )
        strict = bool(encodings)
        if not encodings:
            self._logger.warning("No candidate encoding decodes the data, forcing utf-8")
            encodings = ['utf-8']

        # Without a decodable candidate the converter falls back to lenient UTF-8
        sample, _ = self._file_converter.convert(
            data, encoding=encodings[0] if strict else None, max_chars=self.sample_chars
        )
        separators = detect_delimiter_candidates(sample, max_candidates=self.max_separators)

        self._logger.debug(f"Encoding candidates: {encodings}, separator candidates: {separators!r}")

        candidates = []
        for encoding, separator, quote, escape in product(encodings, separators, QUOTE_CANDIDATES, ESCAPE_CANDIDATES):
            for header in (False, True):
                configuration = CSVConfiguration(
                    encoding=encoding,
                    column_separator=separator,
                    quote_character=quote,
                    escape_character=escape,
                    first_row_as_header=header,
                )
                candidates.append(Candidate(len(candidates), configuration))

        return candidates, strict

    def evaluate_configuration(self, configuration: CSVConfiguration, data: bytes, strict: bool = True) -> int:
        """
        Score one configuration against the first rows of the data.

        Only the first ``sample_bytes`` bytes are tokenized, so a quote that
        never closes cannot make a candidate scan the whole input.

        Args:
            configuration: Candidate configuration
            data: Raw file data
            strict: Whether the consumed prefix must decode cleanly

        Returns:
            Score, or weights.floor when the data cannot be read
        """
        try:
            sample = data[:self.sample_bytes]
            reader = CSVReader(sample, configuration)
            rows = reader.read_lines(self.sample_rows)
            if strict:
                # A character cut at the sample boundary is not a decoding error
                final = len(sample) == len(data) or not reader.is_at_end
                decoder = codecs.getincrementaldecoder(reader.codec)()
                decoder.decode(reader.consumed_bytes(), final=final)
        except (UnicodeDecodeError, LookupError):
            return self.weights.floor
        except Exception as e:
            self._logger.debug(f"Candidate {configuration} failed: {e}")
            return self.weights.floor

        score = score_rows(rows, self.weights)
        if detect_header(rows) == configuration.first_row_as_header:
            score += self.weights.header_agreement
        return score

    # =========================================================================
    # Internal
    # =========================================================================

    def _detect(self, data: bytes, progress_callback: Optional[ProgressCallback]) -> CSVConfiguration:
        candidates, strict = self.generate_candidates(data)
        if not candidates:
            return CSVConfiguration()

        results = self._evaluate_all(candidates, data, strict, progress_callback)

        best_index, best_score = min(results, key=lambda item: (-item[1], item[0]))
        if best_score <= self.weights.floor:
            self._logger.info("No readable candidate configuration, using defaults")
            return CSVConfiguration()

        best = candidates[best_index].configuration
        decimal_mark = self._detect_decimal_mark(best, data)
        if decimal_mark != best.decimal_mark:
            best = best.with_changes(decimal_mark=decimal_mark)

        self._logger.info(
            f"Detected CSV configuration: encoding={best.encoding}, "
            f"separator={best.column_separator!r}, quote={best.quote_character!r}, "
            f"escape={best.escape_character!r}, header={best.first_row_as_header} "
            f"(score {best_score}, {len(candidates)} candidates)"
        )
        return best

    def _evaluate_all(
        self,
        candidates: List[Candidate],
        data: bytes,
        strict: bool,
        progress_callback: Optional[ProgressCallback]
    ) -> List[Tuple[int, int]]:
        total = len(candidates)
        results: List[Tuple[int, int]] = []

        def report():
            if progress_callback is not None:
                progress_callback(len(results) / total)

        if self.max_workers == 1:
            for candidate in candidates:
                results.append((candidate.index, self.evaluate_configuration(candidate.configuration, data, strict)))
                report()
            return results

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                executor.submit(self.evaluate_configuration, candidate.configuration, data, strict): candidate.index
                for candidate in candidates
            }
            for future in as_completed(futures):
                results.append((futures[future], future.result()))
                report()

        return results

    def _detect_decimal_mark(self, configuration: CSVConfiguration, data: bytes) -> str:
        rows = CSVReader(data[:self.sample_bytes], configuration).read_lines(self.sample_rows)
        if configuration.first_row_as_header:
            rows = rows[1:]
        return detect_decimal_mark(rows, configuration.column_separator)


def detect_configuration(
    data: bytes,
    config: Optional[Dict[str, Any]] = None,
    progress_callback: Optional[ProgressCallback] = None
) -> CSVConfiguration:
    """Detect the configuration of ``data`` with a one-off CSVHeuristic."""
    return CSVHeuristic(config).detect_configuration(data, progress_callback)


__all__ = [
    "ScoringWeights",
    "Candidate",
    "CSVHeuristic",
    "is_numeric",
    "detect_header",
    "detect_decimal_mark",
    "count_delimiters",
    "detect_delimiter_candidates",
    "score_rows",
    "detect_configuration",
]
