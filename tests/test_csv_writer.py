"""Tests for CSV serialization."""

from __future__ import annotations

import pytest

from tabletool import CSVConfiguration, CSVReader, CSVWriteError, CSVWriter
from tabletool.core.processor.csv_helper import preview_configuration


@pytest.fixture()
def writer() -> CSVWriter:
    return CSVWriter()


@pytest.mark.parametrize(
    "field, expected",
    [
        ("hello", "hello"),
        ("", ""),
        ("a,b", '"a,b"'),
        ('He said "hi"', '"He said ""hi"""'),
        ("line1\nline2", '"line1\nline2"'),
        ("cr\rhere", '"cr\rhere"'),
        (" leading", '" leading"'),
        ("trailing\t", '"trailing\t"'),
        ("in side", "in side"),
    ],
)
def test_quoting_policy(writer: CSVWriter, field: str, expected: str) -> None:
    assert writer.process_field(field) == expected


def test_prefix_escaping_escapes_quote_and_escape() -> None:
    writer = CSVWriter(CSVConfiguration(escape_character="\\"))
    assert writer.process_field('a"b') == '"a\\"b"'
    assert writer.process_field('x\\"y,z') == '"x\\\\\\"y,z"'
    assert writer.process_field("back\\slash") == "back\\slash"


def test_rows_joined_with_lf_without_trailing_break(writer: CSVWriter) -> None:
    assert writer.write_data([["a", "b"], ["c"]]) == "a,b\nc"


def test_write_to_data_encodes(writer: CSVWriter) -> None:
    assert writer.write_to_data([["café"]]) == "café".encode("utf-8")
    cp1252 = CSVWriter(CSVConfiguration(encoding="cp1252"))
    assert cp1252.write_to_data([["€"]]) == b"\x80"


def test_utf16_output_carries_bom() -> None:
    data = CSVWriter(CSVConfiguration(encoding="utf-16")).write_to_data([["a"]])
    assert data[:2] in (b"\xff\xfe", b"\xfe\xff")


def test_unencodable_content_raises() -> None:
    writer = CSVWriter(CSVConfiguration(encoding="cp1252"))
    with pytest.raises(CSVWriteError) as excinfo:
        writer.write_to_data([["ok", "中"]])
    assert excinfo.value.encoding == "cp1252"
    assert isinstance(excinfo.value.__cause__, UnicodeEncodeError)


def test_unknown_encoding_raises() -> None:
    writer = CSVWriter(CSVConfiguration(encoding="no-such-codec"))
    with pytest.raises(CSVWriteError):
        writer.write_to_data([["a"]])


def test_write_error_is_value_error() -> None:
    assert issubclass(CSVWriteError, ValueError)


@pytest.mark.parametrize(
    "options",
    [
        {},
        {"column_separator": ";"},
        {"column_separator": "\t"},
        {"column_separator": "|", "quote_character": "'"},
        {"quote_character": "'", "escape_character": "'"},
        {"escape_character": "\\"},
        {"encoding": "utf-16"},
        {"encoding": "utf-32", "column_separator": ";"},
        {"encoding": "cp1252"},
        {"encoding": "utf-8-sig"},
    ],
)
def test_output_reads_back_to_same_rows(options: dict, tricky_rows: list[list[str]]) -> None:
    configuration = CSVConfiguration(**options)
    data = CSVWriter(configuration).write_to_data(tricky_rows)
    assert CSVReader(data, configuration).read_all_lines() == tricky_rows


def test_preview_configuration() -> None:
    text = preview_configuration(CSVConfiguration(column_separator=";"))
    assert text.splitlines()[0] == "Name;Age;City;Salary"
    assert "50,000.00" in text

    text = preview_configuration(CSVConfiguration())
    assert '"50,000.00"' in text

    assert preview_configuration(CSVConfiguration(), [["x", "y"]]) == "x,y"


@pytest.mark.parametrize("options", [{"column_separator": "|"}, {"escape_character": "\\"}])
def test_gbk_output_reads_back(options: dict) -> None:
    configuration = CSVConfiguration(encoding="gbk", **options)
    rows = [["亅", "x"], ['乗"', "y|z"], ["中文", "a,b"]]
    data = CSVWriter(configuration).write_to_data(rows)
    assert CSVReader(data, configuration).read_all_lines() == rows
