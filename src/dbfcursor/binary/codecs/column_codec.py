from __future__ import annotations
import struct
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Callable, Dict, Optional

from dbfcursor.errors import ColumnDecodeError, HeaderParseError
from dbfcursor.models.column import Column
from dbfcursor.models.common import ColumnType
from dbfcursor.models.options import ReaderOptions

_TRUE = frozenset(b"TtYy")
_FALSE = frozenset(b"FfNn")
_BLANK = frozenset(b"? \x00")


def _ascii(raw: bytes) -> str:
    try:
        return raw.decode("ascii").strip(" \x00")
    except UnicodeDecodeError as e:
        raise ColumnDecodeError(f"non-ASCII bytes {raw!r}") from e


def decode_boolean(raw: bytes, options: ReaderOptions) -> Optional[bool]:
    flag = raw[0]
    if flag in _TRUE:
        return True
    if flag in _FALSE:
        return False
    if flag in _BLANK:
        return None
    raise ColumnDecodeError(f"invalid logical flag {raw!r}")


def decode_date(raw: bytes, options: ReaderOptions) -> Optional[date]:
    """``YYYYMMDD``; all-blank or all-zero means no date."""
    text = _ascii(raw)
    if not text or text.strip("0") == "":
        return None
    if len(text) != 8 or not text.isdigit():
        raise ColumnDecodeError(f"malformed date {raw!r}")
    try:
        return date(int(text[0:4]), int(text[4:6]), int(text[6:8]))
    except ValueError as e:
        raise ColumnDecodeError(f"malformed date {raw!r}: {e}") from e


def decode_decimal(raw: bytes, options: ReaderOptions) -> Optional[Decimal]:
    text = _ascii(raw)
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation as e:
        raise ColumnDecodeError(f"malformed number {raw!r}") from e
    if not value.is_finite():
        raise ColumnDecodeError(f"malformed number {raw!r}")
    return value


def decode_int32(raw: bytes, options: ReaderOptions) -> int:
    return struct.unpack("<i", raw)[0]


def decode_text(raw: bytes, options: ReaderOptions) -> str:
    try:
        text = raw.decode(options.encoding, options.encoding_errors)
    except UnicodeDecodeError as e:
        raise ColumnDecodeError(f"cannot decode text as {options.encoding}: {e}") from e
    return text.rstrip(" \x00")


def decode_raw(raw: bytes, options: ReaderOptions) -> bytes:
    return bytes(raw)


@dataclass(frozen=True)
class ColumnCodec:
    type: ColumnType
    size: Optional[int]  # required width, None = any
    decode: Callable[[bytes, ReaderOptions], object]


COLUMN_CODECS: Dict[ColumnType, ColumnCodec] = {
    ColumnType.BOOLEAN: ColumnCodec(ColumnType.BOOLEAN, 1, decode_boolean),
    ColumnType.DATE:    ColumnCodec(ColumnType.DATE,    8, decode_date),
    ColumnType.DECIMAL: ColumnCodec(ColumnType.DECIMAL, None, decode_decimal),
    ColumnType.INT32:   ColumnCodec(ColumnType.INT32,   4, decode_int32),
    ColumnType.TEXT:    ColumnCodec(ColumnType.TEXT,    None, decode_text),
    ColumnType.RAW:     ColumnCodec(ColumnType.RAW,     None, decode_raw),
}


def check_column_size(column: Column) -> None:
    expected = COLUMN_CODECS[column.type].size
    if expected is not None and column.size != expected:
        raise HeaderParseError(
            f"column {column.name!r} of type {column.type_code} must be {expected} bytes, got {column.size}"
        )


def decode_column(column: Column, raw: bytes, options: ReaderOptions) -> object:
    if len(raw) != column.size:
        raise ColumnDecodeError(f"column {column.name!r}: have {len(raw)} bytes, expected {column.size}")
    return COLUMN_CODECS[column.type].decode(raw, options)
