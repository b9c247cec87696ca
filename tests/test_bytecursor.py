import io

import pytest

from conftest import ForwardOnlyStream
from dbfcursor.binary.codecs.bytecursor import ByteCursor
from dbfcursor.errors import OutOfOrderReadError, StreamExhaustedError


def test_read_is_exact():
    cur = ByteCursor.from_bytes(b"abcdef")
    assert cur.read(2) == b"ab"
    assert cur.read_byte() == ord("c")
    assert cur.tell() == 3


def test_read_underrun():
    cur = ByteCursor.from_bytes(b"abc")
    with pytest.raises(StreamExhaustedError, match="underrun"):
        cur.read(4)


def test_little_endian_ints():
    cur = ByteCursor.from_bytes(b"\x01\x00\x02\x00\x00\x00\xff\xff\xff\xff")
    assert cur.u16() == 1
    assert cur.u32() == 2
    assert cur.s32() == -1


def test_forward_only_read_collects_short_reads():
    class Trickle(ForwardOnlyStream):
        def readinto(self, b):
            return super().readinto(memoryview(b)[:1])

    cur = ByteCursor(Trickle(b"hello"))
    assert cur.read(5) == b"hello"


@pytest.mark.parametrize("make", [ByteCursor.from_bytes, lambda d: ByteCursor(ForwardOnlyStream(d))])
def test_skip_on_any_stream(make):
    cur = make(b"0123456789")
    cur.skip(4)
    assert cur.read(2) == b"45"
    cur.skip(0)
    assert cur.tell() == 6


@pytest.mark.parametrize("make", [ByteCursor.from_bytes, lambda d: ByteCursor(ForwardOnlyStream(d))])
def test_skip_past_end(make):
    cur = make(b"0123")
    with pytest.raises(StreamExhaustedError):
        cur.skip(5)


def test_seekable_skip_past_end_keeps_position():
    cur = ByteCursor.from_bytes(b"0123")
    cur.read(1)
    with pytest.raises(StreamExhaustedError):
        cur.skip(10)
    assert cur.read(1) == b"1"


def test_seek_back_on_seekable_stream():
    cur = ByteCursor.from_bytes(b"abcdef")
    cur.read(4)
    cur.seek_back(3)
    assert cur.tell() == 1
    assert cur.read(2) == b"bc"


def test_seek_back_refused_on_forward_only_stream():
    cur = ByteCursor(ForwardOnlyStream(b"abcdef"))
    assert not cur.can_seek
    cur.read(4)
    with pytest.raises(OutOfOrderReadError):
        cur.seek_back(1)


def test_starts_at_current_stream_position():
    stream = io.BytesIO(b"xxabc")
    stream.seek(2)
    cur = ByteCursor(stream)
    assert cur.tell() == 2
    cur.read(2)
    cur.seek_back(2)
    assert cur.read(3) == b"abc"


def test_seekable_skip_measures_stream_end_once():
    class CountingStream(io.BytesIO):
        end_seeks = 0

        def seek(self, pos, whence=io.SEEK_SET):
            if whence == io.SEEK_END:
                self.end_seeks += 1
            return super().seek(pos, whence)

    stream = CountingStream(b"0123456789")
    cur = ByteCursor(stream)
    for _ in range(4):
        cur.skip(2)
    assert cur.read(2) == b"89"
    assert stream.end_seeks == 1


def test_seekable_underrun_restores_position():
    cur = ByteCursor.from_bytes(b"abc")
    cur.read(1)
    with pytest.raises(StreamExhaustedError):
        cur.read(5)
    assert cur.tell() == 1
    assert cur.read(2) == b"bc"
