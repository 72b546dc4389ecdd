"""Tests for configuration detection."""

from __future__ import annotations

import time

import pytest

from tabletool import CSVConfiguration, CSVHeuristic, ScoringWeights
from tabletool.core.processor.csv_helper.csv_heuristic import (
    detect_configuration,
    detect_decimal_mark,
    detect_delimiter_candidates,
    detect_header,
    is_numeric,
    score_rows,
)

SAMPLES = [
    b'name;age\n"Alice";30\n"Bob";25',
    b"a\tb\tc\n1\t2\t3\n4\t5\t6",
    b"id,name\n1,foo\n2,bar\n3,baz",
    b"x|y\n1|2",
    b"",
    b"\x00\x01\x02garbage\xff",
]


@pytest.fixture()
def heuristic() -> CSVHeuristic:
    return CSVHeuristic({"max_workers": 1})


def test_semicolon_sample(semicolon_data: bytes) -> None:
    configuration = detect_configuration(semicolon_data)
    assert configuration.encoding == "utf-8"
    assert configuration.column_separator == ";"
    assert configuration.quote_character == '"'
    assert configuration.escape_character == '"'
    assert configuration.first_row_as_header is True
    assert configuration.decimal_mark == "."


def test_header_agreement_breaks_tie(heuristic: CSVHeuristic, semicolon_data: bytes) -> None:
    without_header = CSVConfiguration(column_separator=";")
    with_header = without_header.with_changes(first_row_as_header=True)
    assert heuristic.evaluate_configuration(with_header, semicolon_data) == 77
    assert heuristic.evaluate_configuration(without_header, semicolon_data) == 76


def test_zero_header_weight_prefers_header_off(semicolon_data: bytes) -> None:
    configuration = detect_configuration(semicolon_data, {"scoring_weights": {"header_agreement": 0}})
    assert configuration.column_separator == ";"
    assert configuration.first_row_as_header is False


def test_empty_input_gives_default(heuristic: CSVHeuristic) -> None:
    assert heuristic.detect_configuration(b"") == CSVConfiguration()


def test_tab_separated() -> None:
    assert detect_configuration(b"a\tb\tc\n1\t2\t3\n4\t5\t6").column_separator == "\t"


def test_semicolon_beats_comma_decimals() -> None:
    configuration = detect_configuration(b"a;b;c\n1,5;2,5;3\n4;5;6")
    assert configuration.column_separator == ";"
    assert configuration.first_row_as_header is True
    assert configuration.decimal_mark == ","


def test_utf16_bom_detected() -> None:
    configuration = detect_configuration("a\tb\n1\t2".encode("utf-16"))
    assert configuration.encoding == "utf-16"
    assert configuration.column_separator == "\t"


def test_utf8_bom_detected() -> None:
    assert detect_configuration(b"\xef\xbb\xbfa;b\n1;2").encoding == "utf-8-sig"


def test_legacy_encoding_detected() -> None:
    data = "name,city\nJosé,Zürich\nAna,Köln".encode("cp1252")
    configuration = detect_configuration(data, {"use_chardet": False})
    assert configuration.encoding == "cp1252"
    assert configuration.column_separator == ","


def test_undecodable_data_forces_utf8() -> None:
    config = {"use_chardet": False, "legacy_encodings": ["ascii"]}
    configuration = detect_configuration(b"a;b\n\xff;\xfe", config)
    assert configuration.encoding == "utf-8"
    assert configuration.column_separator == ";"


@pytest.mark.parametrize("data", SAMPLES)
def test_detection_is_deterministic(data: bytes) -> None:
    inline = CSVHeuristic({"max_workers": 1}).detect_configuration(data)
    pooled = CSVHeuristic({"max_workers": 4}).detect_configuration(data)
    assert inline == pooled
    assert inline == CSVHeuristic({"max_workers": 4}).detect_configuration(data)


@pytest.mark.parametrize("max_workers", [1, 3])
def test_progress_reports_every_candidate(max_workers: int, semicolon_data: bytes) -> None:
    heuristic = CSVHeuristic({"max_workers": max_workers})
    candidates, _ = heuristic.generate_candidates(semicolon_data)
    progress: list[float] = []
    heuristic.detect_configuration(semicolon_data, progress_callback=progress.append)
    assert len(progress) == len(candidates)
    assert progress == sorted(progress)
    assert progress[-1] == pytest.approx(1.0)


def test_candidate_generation_order(heuristic: CSVHeuristic, semicolon_data: bytes) -> None:
    candidates, strict = heuristic.generate_candidates(semicolon_data)
    assert strict is True
    assert [c.index for c in candidates] == list(range(len(candidates)))
    first, second = candidates[0].configuration, candidates[1].configuration
    assert first == CSVConfiguration(column_separator=";")
    assert second == first.with_changes(first_row_as_header=True)
    # 1 separator x 2 quotes x 2 escapes x 2 header flags per encoding
    assert len(candidates) % 8 == 0


def test_unreadable_candidates_score_floor(heuristic: CSVHeuristic) -> None:
    assert heuristic.evaluate_configuration(CSVConfiguration(encoding="no-such-codec"), b"a,b") == -1
    assert heuristic.evaluate_configuration(CSVConfiguration(), b"a,\xff\n") == -1
    assert heuristic.evaluate_configuration(CSVConfiguration(), b"a,\xff\n", strict=False) > -1


def test_score_rows() -> None:
    weights = ScoringWeights()
    assert score_rows([["a", "b"], ["c", "d"]], weights) == 54
    assert score_rows([["x"]], weights) == 4
    assert score_rows([], weights) == 0
    assert score_rows([["a"] * 51], weights) == -5 + 51 + 5


def test_scoring_weights_from_value() -> None:
    assert ScoringWeights.from_value(None) == ScoringWeights()
    weights = ScoringWeights(modal_row=7)
    assert ScoringWeights.from_value(weights) is weights
    assert ScoringWeights.from_value({"modal_row": 7, "unknown": 1}) == weights


def test_detect_delimiter_candidates() -> None:
    assert detect_delimiter_candidates("a,b;c|d\te") == [",", ";", "\t"]
    assert detect_delimiter_candidates("a:b") == [":"]
    assert detect_delimiter_candidates("") == [","]
    assert detect_delimiter_candidates("a|b;c", max_candidates=1) == [";"]


@pytest.mark.parametrize(
    "value, expected",
    [
        ("42", True),
        ("-3.14", True),
        ("3,14", True),
        ("1,234,567", True),
        ("12%", True),
        ("$5", True),
        ("abc", False),
        ("", False),
        ("  ", False),
    ],
)
def test_is_numeric(value: str, expected: bool) -> None:
    assert is_numeric(value) is expected


def test_detect_header() -> None:
    assert detect_header([["name", "age"], ["Alice", "30"]])
    assert not detect_header([["1", "2"], ["3", "4"]])
    assert not detect_header([["only"]])
    assert not detect_header([["a", "a"], ["b", "c"]])


def test_detect_decimal_mark() -> None:
    assert detect_decimal_mark([["1,5", "2,25"]], ";") == ","
    assert detect_decimal_mark([["1.5", "2,25"]], ";") == "."
    assert detect_decimal_mark([["1,5"]], ",") == "."


def test_unclosed_quote_on_large_input_stays_fast() -> None:
    body = b"".join(b"%d,name%d,%d\n" % (i, i, i * 3) for i in range(200_000))
    data = b"id,name,value\n1,O'Brien,2\n" + body

    started = time.perf_counter()
    configuration = CSVHeuristic().detect_configuration(data)
    elapsed = time.perf_counter() - started

    assert configuration.column_separator == ","
    assert configuration.quote_character == '"'
    assert elapsed < 3.0


def test_candidates_only_tokenize_sample_bytes() -> None:
    heuristic = CSVHeuristic({"max_workers": 1, "sample_bytes": 8})
    # Only "a,b\nc,d\n" is read
    assert heuristic.evaluate_configuration(CSVConfiguration(), b"a,b\nc,d\ne,f\ng,h") == 54


def test_character_cut_at_sample_boundary_still_decodes() -> None:
    heuristic = CSVHeuristic({"max_workers": 1, "sample_bytes": 3})
    assert heuristic.evaluate_configuration(CSVConfiguration(), "a,é\nb,c".encode("utf-8")) > -1
