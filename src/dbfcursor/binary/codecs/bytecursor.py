from __future__ import annotations
import io
import struct
from typing import BinaryIO

from dbfcursor.errors import OutOfOrderReadError, StreamExhaustedError

# read-and-discard chunk for forced skips on non-seekable streams
_SKIP_CHUNK = 64 * 1024


class ByteCursor:
    """Byte-exact reads over a binary file object.

    Works on forward-only streams; backward moves are only available when
    the underlying stream is seekable.
    """
    __slots__ = ("stream", "pos", "can_seek", "_end")

    def __init__(self, stream: BinaryIO):
        self.stream = stream
        self.can_seek = bool(stream.seekable())
        self.pos = stream.tell() if self.can_seek else 0
        self._end = None

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> "ByteCursor":
        return cls(io.BytesIO(bytes(data)))

    def tell(self) -> int: return self.pos

    def read(self, n: int) -> bytes:
        if n < 0: raise ValueError(f"negative read size {n}")
        out = bytearray()
        while len(out) < n:
            chunk = self.stream.read(n - len(out))
            if not chunk:
                if self.can_seek: self.stream.seek(self.pos)
                raise StreamExhaustedError(f"underrun: need {n} at {self.pos}, got {len(out)}")
            out += chunk
        self.pos += n
        return bytes(out)

    def read_byte(self) -> int: return self.read(1)[0]

    def _stream_end(self) -> int:
        # measured once; tables are not appended to while being read
        if self._end is None:
            self._end = self.stream.seek(0, io.SEEK_END)
            self.stream.seek(self.pos)
        return self._end

    def skip(self, n: int) -> None:
        """Move forward ``n`` bytes on any stream."""
        if n < 0: raise ValueError(f"negative skip {n}")
        if n == 0: return
        if self.can_seek:
            end = self._stream_end()
            target = self.pos + n
            if target > end:
                raise StreamExhaustedError(f"skip of {n} at {self.pos} runs past end {end}")
            self.stream.seek(target)
            self.pos = target
            return
        left = n
        while left:
            chunk = self.stream.read(min(left, _SKIP_CHUNK))
            if not chunk:
                raise StreamExhaustedError(f"skip of {n} at {self.pos} ran out after {n - left}")
            left -= len(chunk)
            self.pos += len(chunk)

    def seek(self, pos: int) -> None:
        """Absolute move; seekable streams only."""
        if not self.can_seek:
            raise OutOfOrderReadError("the underlying stream is not seekable")
        if pos < 0: raise ValueError(f"seek to {pos} before start")
        self.stream.seek(pos)
        self.pos = pos

    def seek_back(self, n: int) -> None:
        if n < 0: raise ValueError(f"negative seek {n}")
        if n > self.pos: raise ValueError(f"seek back {n} before start (at {self.pos})")
        self.seek(self.pos - n)

    # little-endian reads used by the header codec
    def _unpack(self, fmt: str, n: int):
        return struct.unpack(fmt, self.read(n))[0]
    def u8(self) -> int:  return self.read_byte()
    def u16(self) -> int: return self._unpack("<H", 2)
    def u32(self) -> int: return self._unpack("<I", 4)
    def s32(self) -> int: return self._unpack("<i", 4)

    def close(self) -> None: self.stream.close()
