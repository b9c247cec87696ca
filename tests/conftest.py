import io
import struct

import pytest

# (name, type code, size, decimal count)
SAMPLE_FIELDS = [
    ("NAME", "C", 10, 0),
    ("BORN", "D", 8, 0),
    ("ACTIVE", "L", 1, 0),
    ("SALARY", "N", 8, 2),
    ("AGE", "I", 4, 0),
]


def field_descriptor(name, code, size, decimals=0):
    return (
        name.encode("ascii").ljust(11, b"\x00")
        + code.encode("ascii")
        + b"\x00" * 4
        + bytes([size, decimals])
        + b"\x00" * 14
    )


def build_dbf(fields, rows, *, record_count=None, eof=True, version=0x03, trailer=b""):
    """Assemble a dBASE III table. ``rows`` are complete records, marker byte included."""
    record_size = 1 + sum(f[2] for f in fields)
    header_size = 32 + 32 * len(fields) + 1 + len(trailer)
    count = len(rows) if record_count is None else record_count
    out = bytearray()
    out += bytes([version, 124, 3, 15])
    out += struct.pack("<IHH", count, header_size, record_size)
    out += b"\x00" * 17
    out += bytes([0x57])
    out += b"\x00" * 2
    for f in fields:
        out += field_descriptor(*f)
    out += b"\r"
    out += trailer
    for r in rows:
        assert len(r) == record_size, (len(r), record_size)
        out += r
    if eof:
        out += b"\x1a"
    return bytes(out)


def sample_row(name, born, active, salary, age, *, deleted=False):
    return (
        (b"*" if deleted else b" ")
        + name.encode("ascii").ljust(10)
        + born.encode("ascii").ljust(8)
        + active.encode("ascii")
        + salary.encode("ascii").rjust(8)
        + struct.pack("<i", age)
    )


class ForwardOnlyStream(io.RawIOBase):
    """Readable stream that refuses to seek, like a pipe or socket."""

    def __init__(self, data: bytes):
        self._inner = io.BytesIO(data)

    def readable(self):
        return True

    def readinto(self, b):
        chunk = self._inner.read(len(b))
        b[: len(chunk)] = chunk
        return len(chunk)


@pytest.fixture
def sample_bytes():
    return build_dbf(
        SAMPLE_FIELDS,
        [
            sample_row("Alice", "19800115", "T", "1234.50", 42),
            sample_row("Bob", "19751231", "F", "99.00", 50, deleted=True),
            sample_row("Carol", "", "?", "", -7),
        ],
    )


@pytest.fixture
def sample_path(tmp_path, sample_bytes):
    p = tmp_path / "people.dbf"
    p.write_bytes(sample_bytes)
    return p
