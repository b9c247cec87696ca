from __future__ import annotations
import logging
from datetime import date
from typing import List, Optional

from pydantic import ValidationError

from dbfcursor.errors import HeaderParseError, StreamExhaustedError
from dbfcursor.models.column import Column
from dbfcursor.models.common import column_type_for_code
from dbfcursor.models.table_header import TableHeader
from .bytecursor import ByteCursor
from .column_codec import check_column_size
from .field_descriptor import DESCRIPTOR_SIZE, HEADER_TERMINATOR, decode_field_descriptor

logger = logging.getLogger(__name__)

HEADER_PREFIX_SIZE = 32


def _last_modified(yy: int, mm: int, dd: int) -> Optional[date]:
    # Year is stored as an offset from 1900; zeroed or junk dates are common.
    try:
        return date(1900 + yy, mm, dd)
    except ValueError:
        return None


def _build_columns(raw_fields: List[dict], record_size: int) -> List[Column]:
    columns: List[Column] = []
    seen = set()
    offset = 0
    for fld in raw_fields:
        name = fld["name"]
        if not name:
            raise HeaderParseError(f"field descriptor #{len(columns)} has an empty name")
        if name in seen:
            raise HeaderParseError(f"duplicate column name {name!r}")
        seen.add(name)
        try:
            column = Column(
                name=name,
                type=column_type_for_code(fld["type_code"]),
                type_code=fld["type_code"],
                offset=offset,
                size=fld["size"],
                decimal_count=fld["decimal_count"],
            )
        except ValidationError as e:
            raise HeaderParseError(f"bad descriptor for column {name!r}: {e}") from e
        check_column_size(column)
        offset = column.end
        columns.append(column)

    # byte 0 of each record is the deletion marker
    if offset > record_size - 1:
        raise HeaderParseError(
            f"columns span {offset} bytes but records hold only {record_size - 1} data bytes"
        )
    return columns


def decode_table_header(cur: ByteCursor) -> TableHeader:
    """
    Parse the dBASE table header and field descriptors, leaving the cursor
    at the first record.
    """
    start = cur.tell()
    try:
        version = cur.u8()
        yy, mm, dd = cur.u8(), cur.u8(), cur.u8()
        record_count = cur.u32()
        header_size = cur.u16()
        record_size = cur.u16()
        cur.skip(17)                              # reserved, transaction/encryption flags, MDX flag
        language_driver = cur.u8()
        cur.skip(2)

        raw_fields: List[dict] = []
        while True:
            first = cur.u8()
            if first == HEADER_TERMINATOR:
                break
            if cur.tell() - start + DESCRIPTOR_SIZE - 1 > header_size:
                raise HeaderParseError(f"field descriptors run past header size {header_size}")
            raw_fields.append(decode_field_descriptor(first, cur))

        consumed = cur.tell() - start
        if consumed > header_size:
            raise HeaderParseError(f"header declares {header_size} bytes but {consumed} were read")
        # trailing bytes (e.g. Visual FoxPro backlink) up to the first record
        cur.skip(header_size - consumed)
    except StreamExhaustedError as e:
        raise HeaderParseError(f"truncated table header: {e}") from e

    if record_size < 1:
        raise HeaderParseError("record size is zero")

    try:
        header = TableHeader(
            version=version,
            last_modified=_last_modified(yy, mm, dd),
            record_count=record_count,
            header_size=header_size,
            record_size=record_size,
            language_driver=language_driver,
            columns=_build_columns(raw_fields, record_size),
        )
    except ValidationError as e:
        raise HeaderParseError(f"invalid table header: {e}") from e

    logger.debug(
        "decoded header: version=0x%02x records=%d record_size=%d columns=%d",
        version, record_count, record_size, len(header.columns),
    )
    return header
