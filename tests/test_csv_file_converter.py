"""Tests for the BOM-aware byte-to-text converter."""

from __future__ import annotations

from tabletool.core.processor.csv_helper import CSVFileConverter


def test_bom_decides_encoding_and_length_is_capped() -> None:
    text, encoding = CSVFileConverter().convert(b"\xef\xbb\xbfa,b\nc,d", max_chars=3)
    assert (text, encoding) == ("a,b", "utf-8-sig")


def test_known_encoding_prefix_is_unit_aligned() -> None:
    data = "a;b;c".encode("utf-16-le")
    text, encoding = CSVFileConverter().convert(data, encoding="utf-16-le", max_chars=2)
    assert (text, encoding) == ("a;", "utf-16-le")


def test_encoding_list_is_tried_in_order() -> None:
    converter = CSVFileConverter()
    assert converter.convert("café".encode("cp1252")) == ("café", "cp1252")
    assert converter.detected_encoding == "cp1252"


def test_lenient_utf8_when_nothing_decodes() -> None:
    converter = CSVFileConverter(["ascii"])
    assert converter.convert(b"a;\xff") == ("a;�", "utf-8")
    assert converter.get_format_name() == "CSV (utf-8)"


def test_unknown_encoding_uses_encoding_list() -> None:
    assert CSVFileConverter().convert(b"a,b", encoding="no-such-codec") == ("a,b", "utf-8")
