import io

import pytest

from conftest import ForwardOnlyStream
from dbfcursor.binary.reader import Reader
from dbfcursor.errors import HeaderParseError, TableClosedError
from dbfcursor.models.options import ReaderOptions
from dbfcursor.models.table import Table


def test_open_from_path(sample_path):
    with Table.open(sample_path) as table:
        assert table.header.record_count == 3
        assert isinstance(table.open_reader(), Reader)
    assert table.closed


def test_open_from_str_path(sample_path):
    with Table.open(str(sample_path)) as table:
        assert [c.name for c in table.columns][:2] == ["NAME", "BORN"]


def test_open_from_bytes_and_streams(sample_bytes):
    for src in (sample_bytes, bytearray(sample_bytes), io.BytesIO(sample_bytes), ForwardOnlyStream(sample_bytes)):
        with Table.open(src) as table:
            reader = table.open_reader()
            assert reader.read()
            assert reader.get_string("NAME") == "Alice"


def test_close_closes_stream(sample_bytes):
    stream = io.BytesIO(sample_bytes)
    table = Table.open(stream)
    table.close()
    table.close()
    assert stream.closed


def test_bad_header_closes_stream():
    stream = io.BytesIO(b"\x03" * 10)
    with pytest.raises(HeaderParseError):
        Table.open(stream)
    assert stream.closed


def test_closed_table_refuses_access(sample_bytes):
    table = Table.open(sample_bytes)
    table.close()
    with pytest.raises(TableClosedError):
        table.header
    with pytest.raises(TableClosedError):
        table.open_reader()


def test_reader_encoding(sample_bytes):
    with Table.open(sample_bytes) as table:
        assert table.open_reader().encoding == "ascii"
        assert table.open_reader("cp1252").encoding == "cp1252"
        opts = ReaderOptions(encoding="latin-1", encoding_errors="replace")
        reader = table.open_reader(options=opts)
        assert reader.encoding == "iso8859-1"
        assert reader.options.encoding_errors == "replace"
        assert table.open_reader("utf-8", options=opts).options.encoding_errors == "replace"
