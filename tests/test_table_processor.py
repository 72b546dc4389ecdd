"""Tests for the TableProcessor facade, the handler and documents."""

from __future__ import annotations

from pathlib import Path

import pytest

import tabletool
from tabletool import (
    CSVConfiguration,
    CSVDocument,
    CSVTable,
    CSVWriteError,
    TableProcessor,
    create_processor,
)
from tabletool.core.processor.csv_handler import CSVHandler


@pytest.fixture()
def processor() -> TableProcessor:
    return TableProcessor(config={"max_workers": 1})


def test_config_merges_kwargs() -> None:
    processor = create_processor({"max_workers": 2}, use_chardet=False)
    assert processor.config == {"max_workers": 2, "use_chardet": False}
    assert processor.handler.config is processor.config


def test_supported_extensions(processor: TableProcessor) -> None:
    assert processor.supported_extensions == ["csv", "psv", "tab", "tsv", "txt"]
    assert processor.is_supported(".CSV")
    assert not processor.is_supported("xlsx")


def test_open_detects_format(processor: TableProcessor, tmp_path: Path, semicolon_data: bytes) -> None:
    path = tmp_path / "people.csv"
    path.write_bytes(semicolon_data)

    document = processor.open(path)
    assert document.configuration.column_separator == ";"
    assert document.header == ["name", "age"]
    assert document.records == [["Alice", "30"], ["Bob", "25"]]


def test_open_with_configuration(processor: TableProcessor, tmp_path: Path) -> None:
    path = tmp_path / "data.txt"
    path.write_bytes(b"a;b")
    document = processor.open(path, configuration=CSVConfiguration())
    assert document.table.rows == [["a;b"]]


def test_open_missing_file(processor: TableProcessor, tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        processor.open(tmp_path / "missing.csv")


def test_open_unsupported_extension(processor: TableProcessor, tmp_path: Path) -> None:
    path = tmp_path / "report.pdf"
    path.write_bytes(b"%PDF")
    with pytest.raises(ValueError):
        processor.open(path)


def test_save_uses_owning_configuration(processor: TableProcessor, tmp_path: Path, semicolon_data: bytes) -> None:
    source = tmp_path / "people.csv"
    source.write_bytes(semicolon_data)
    document = processor.open(source)
    document.table.update_cell(1, 0, "Alice; Jr.")

    target = tmp_path / "out" / "people.csv"
    assert processor.save(document, target) == str(target)
    assert target.read_bytes() == b'name;age\n"Alice; Jr.";30\nBob;25'


def test_failed_save_leaves_file_untouched(processor: TableProcessor, tmp_path: Path) -> None:
    path = tmp_path / "data.csv"
    path.write_bytes(b"old")
    document = CSVDocument(CSVTable([["中"]]), CSVConfiguration(encoding="cp1252"))
    with pytest.raises(CSVWriteError):
        processor.save(document, path)
    assert path.read_bytes() == b"old"


def test_apply_configuration_changes_only_output() -> None:
    document = CSVDocument.from_bytes(b"a,b\nc,d", CSVConfiguration())
    document.apply_configuration(CSVConfiguration(column_separator="\t"))
    assert document.table.rows == [["a", "b"], ["c", "d"]]
    assert document.to_bytes() == b"a\tb\nc\td"
    assert document.to_text() == "a\tb\nc\td"


def test_parse_failure_degrades_to_sentinel(processor: TableProcessor) -> None:
    table = processor.parse(b"a,b", CSVConfiguration(encoding="no-such-codec"))
    assert table.rows == [[""]]


def test_parse_empty(processor: TableProcessor) -> None:
    assert processor.parse(b"").is_empty


def test_parse_progress(processor: TableProcessor) -> None:
    data = "\n".join(str(i) for i in range(250)).encode()
    seen: list[int] = []
    table = processor.handler.parse(data, CSVConfiguration(), progress_callback=seen.append)
    assert table.row_count == 250
    assert seen == [100, 200]


def test_serialize_round_trip(processor: TableProcessor, tricky_rows: list[list[str]]) -> None:
    configuration = CSVConfiguration(column_separator=";", escape_character="\\", encoding="utf-16")
    data = processor.serialize(CSVTable(tricky_rows), configuration)
    assert processor.parse(data, configuration).rows == tricky_rows


def test_load_reports_progress(processor: TableProcessor, semicolon_data: bytes) -> None:
    fractions: list[float] = []
    document = processor.load(semicolon_data, progress_callback=fractions.append)
    assert fractions[-1] == pytest.approx(1.0)
    assert document.configuration.first_row_as_header


def test_detected_round_trip(processor: TableProcessor) -> None:
    data = b"id;label;price\n1;Widget;2,50\n2;\"Gadget; large\";10,00"
    configuration = processor.detect_configuration(data)
    assert configuration.decimal_mark == ","
    table = processor.parse(data, configuration)
    assert processor.serialize(table, configuration) == data


def test_module_level_functions(semicolon_data: bytes) -> None:
    configuration = tabletool.detect_configuration(semicolon_data)
    table = tabletool.parse(semicolon_data, configuration)
    assert table.rows == [["name", "age"], ["Alice", "30"], ["Bob", "25"]]
    assert tabletool.serialize(table, configuration) == b"name;age\nAlice;30\nBob;25"


def test_handler_read_document(semicolon_data: bytes) -> None:
    handler = CSVHandler({"max_workers": 1})
    document = handler.read_document({"file_path": "mem.csv", "file_data": semicolon_data, "file_size": 3})
    assert document.table.row_count == 3
    assert handler.file_converter.get_format_name() == "CSV (utf-8)"


def test_context_manager() -> None:
    with TableProcessor() as processor:
        assert "5 supported formats" in str(processor)
