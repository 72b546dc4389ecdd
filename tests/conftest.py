"""Shared fixtures for the tabletool test-suite."""

from __future__ import annotations

import pytest

from tabletool import CSVConfiguration


@pytest.fixture()
def semicolon_data() -> bytes:
    return b'name;age\n"Alice";30\n"Bob";25'


@pytest.fixture()
def tricky_rows() -> list[list[str]]:
    return [
        ["id", "name", "note"],
        ["1", "a,b", 'He said "hi"'],
        ["2", " padded ", "multi\nline"],
        ["3", "back\\slash", ""],
        ["4", "café", "cr\rhere"],
        ["5", "it's", 'q\\"uote,mix'],
    ]


@pytest.fixture()
def default_configuration() -> CSVConfiguration:
    return CSVConfiguration()
