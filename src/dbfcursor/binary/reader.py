from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, Iterator, Optional, Union

from dbfcursor.errors import (
    ColumnTypeMismatchError,
    ForeignColumnError,
    InvalidArgumentError,
    NoRecordLoadedError,
    OutOfOrderReadError,
    StreamExhaustedError,
    UnknownColumnError,
)
from dbfcursor.models.column import Column
from dbfcursor.models.common import ColumnType
from dbfcursor.models.options import ReaderOptions
from dbfcursor.models.table import Table
from dbfcursor.models.table_header import TableHeader

from .codecs.bytecursor import ByteCursor
from .codecs.column_codec import decode_column

logger = logging.getLogger(__name__)

DELETED_RECORD_FLAG = 0x2A  # '*'
END_OF_DATA = 0x1A

ColumnRef = Union[str, Column]


class Reader:
    """
    Forward-only reader of table records.

    Call ``read()`` to move to the next live record, then fetch column values
    by name or by ``Column``. Only the bytes of requested columns are read.
    On a forward-only stream columns of one record must be requested in
    non-decreasing offset order.
    """

    def __init__(self, table: Table, options: Optional[ReaderOptions] = None):
        if table is None:
            raise InvalidArgumentError("table is required")
        self._table = table
        self._options = options if options is not None else ReaderOptions()
        self._columns_by_name: Dict[str, Column] = {c.name: c for c in table.columns}
        self._column_ids = frozenset(id(c) for c in table.columns)

        self._loaded_count = 0
        self._row_offset = -1
        self._row_loaded = False
        self._at_end = False

    # -----------------------------
    # Properties
    # -----------------------------

    @property
    def table(self) -> Table:
        self._table.check_open()
        return self._table

    @property
    def encoding(self) -> str:
        self._table.check_open()
        return self._options.encoding

    @property
    def options(self) -> ReaderOptions:
        self._table.check_open()
        return self._options

    @property
    def loaded_count(self) -> int:
        """Records consumed so far, deleted ones included."""
        self._table.check_open()
        return self._loaded_count

    @property
    def _header(self) -> TableHeader:
        return self._table._header

    @property
    def _cursor(self) -> ByteCursor:
        return self._table._cursor

    # -----------------------------
    # Record advancement
    # -----------------------------

    def read(self) -> bool:
        """Move to the next live record. Returns False once there are no more."""
        self._table.check_open()
        self._row_loaded = False
        self._row_loaded = self._read_next_row()
        return self._row_loaded

    def _read_next_row(self) -> bool:
        if self._at_end or self._loaded_count >= self._header.record_count:
            return False
        self._move_to_end_of_row()
        return self._skip_deleted_rows()

    def _move_to_end_of_row(self) -> None:
        if self._row_offset >= 0:
            self._cursor.skip(self._header.record_size - 1 - self._row_offset)
            self._row_offset = -1

    def _skip_deleted_rows(self) -> bool:
        record_size = self._header.record_size
        while True:
            flag = self._cursor.read_byte()
            if flag == END_OF_DATA:
                logger.debug("end-of-data marker after %d records", self._loaded_count)
                self._at_end = True
                return False

            self._loaded_count += 1
            if flag != DELETED_RECORD_FLAG:
                self._row_offset = 0
                return True

            logger.debug("skipping deleted record #%d", self._loaded_count)
            self._cursor.skip(record_size - 1)
            if self._loaded_count >= self._header.record_count:
                return False

    def rows(self, columns: Optional[Iterable[ColumnRef]] = None) -> Iterator[Dict[str, object]]:
        """
        Yield each remaining live record as ``{name: value}``.
        Columns are decoded once each, in offset order, so forward-only streams work.
        """
        self._table.check_open()
        if columns is None:
            wanted = list(self._header.columns)
        else:
            wanted = []
            for c in columns:
                self._check_column_argument(c)
                wanted.append(self._resolve(c))
            wanted = list({id(c): c for c in wanted}.values())
        wanted.sort(key=lambda c: c.offset)

        while self.read():
            yield {c.name: self._load_value(c) for c in wanted}

    # -----------------------------
    # Column access
    # -----------------------------

    def get_value(self, column: ColumnRef) -> object:
        self._validate_reader_state(column)
        return self._load_value(self._resolve(column))

    def get_typed(self, column: ColumnRef, column_type: ColumnType) -> object:
        try:
            requested = ColumnType(column_type)
        except ValueError:
            raise InvalidArgumentError(f"unknown column type {column_type!r}") from None
        self._validate_reader_state(column)
        col = self._resolve(column)
        if col.type != requested:
            raise ColumnTypeMismatchError(
                f"column {col.name!r} is {col.type.value}, not {requested.value}"
            )
        return self._load_value(col)

    def get_boolean(self, column: ColumnRef) -> Optional[bool]:
        return self.get_typed(column, ColumnType.BOOLEAN)

    def get_date(self, column: ColumnRef) -> Optional[date]:
        return self.get_typed(column, ColumnType.DATE)

    def get_decimal(self, column: ColumnRef) -> Optional[Decimal]:
        return self.get_typed(column, ColumnType.DECIMAL)

    def get_int32(self, column: ColumnRef) -> int:
        return self.get_typed(column, ColumnType.INT32)

    def get_string(self, column: ColumnRef) -> str:
        return self.get_typed(column, ColumnType.TEXT)

    def get_bytes(self, column: ColumnRef) -> bytes:
        return self.get_typed(column, ColumnType.RAW)

    # -----------------------------
    # Helpers
    # -----------------------------

    def _check_column_argument(self, column: ColumnRef) -> None:
        if column is None or (isinstance(column, str) and not column):
            raise InvalidArgumentError("a column name or Column is required")
        if not isinstance(column, (str, Column)):
            raise InvalidArgumentError(f"expected a column name or Column, got {type(column).__name__}")

    def _validate_reader_state(self, column: ColumnRef) -> None:
        self._check_column_argument(column)
        self._table.check_open()
        if not self._row_loaded:
            raise NoRecordLoadedError("no record is loaded; call read() first and check it returns True")

    def _resolve(self, column: ColumnRef) -> Column:
        if isinstance(column, str):
            try:
                return self._columns_by_name[column]
            except KeyError:
                raise UnknownColumnError(f"column {column!r} not found") from None
        if id(column) not in self._column_ids:
            raise ForeignColumnError(f"column {column.name!r} does not belong to this table")
        return column

    def _load_value(self, column: Column) -> object:
        raw = self._load_column_bytes(column.offset, column.size)
        return decode_column(column, raw, self._options)

    def _load_column_bytes(self, offset: int, size: int) -> bytes:
        start = self._cursor.tell()
        seek = offset - self._row_offset
        if seek < 0:
            if not self._cursor.can_seek:
                raise OutOfOrderReadError(
                    "the underlying non-seekable stream does not allow reading columns out of order"
                )
            self._cursor.seek_back(-seek)
        elif seek > 0:
            self._cursor.skip(seek)

        try:
            raw = self._cursor.read(size)
        except StreamExhaustedError:
            # back to where the request started so the offset stays in step
            if self._cursor.can_seek:
                self._cursor.seek(start)
            raise
        self._row_offset = offset + size
        return raw
