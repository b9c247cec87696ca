from __future__ import annotations
import io
import logging
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from dbfcursor.errors import TableClosedError
from .column import Column
from .options import ReaderOptions
from .table_header import TableHeader

logger = logging.getLogger(__name__)

TableSource = Union[str, Path, bytes, bytearray, memoryview, BinaryIO]


def _open_stream(src: TableSource) -> BinaryIO:
    if isinstance(src, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(src))
    if isinstance(src, (str, Path)):
        return open(Path(src), "rb")
    return src


class Table:
    """
    An open dBASE table. Owns the stream and closes it on ``close()``.

    Use ``Table.open(...)`` rather than the constructor.
    """

    def __init__(self, cursor, header: TableHeader):
        self._cursor = cursor
        self._header = header
        self._closed = False

    @classmethod
    def open(cls, src: TableSource) -> "Table":
        from ..binary.codecs.bytecursor import ByteCursor
        from ..binary.codecs.table_header import decode_table_header

        stream = _open_stream(src)
        cursor = ByteCursor(stream)
        try:
            header = decode_table_header(cursor)
        except Exception:
            stream.close()
            raise
        logger.debug("opened table (%s stream)", "seekable" if cursor.can_seek else "forward-only")
        return cls(cursor, header)

    def open_reader(
        self,
        encoding: Optional[str] = None,
        *,
        options: Optional[ReaderOptions] = None,
    ):
        from ..binary.reader import Reader

        self.check_open()
        if options is None:
            options = ReaderOptions() if encoding is None else ReaderOptions(encoding=encoding)
        elif encoding is not None:
            options = options.model_copy(update={"encoding": ReaderOptions(encoding=encoding).encoding})
        return Reader(self, options)

    @property
    def header(self) -> TableHeader:
        self.check_open()
        return self._header

    @property
    def columns(self) -> List[Column]:
        self.check_open()
        return self._header.columns

    @property
    def closed(self) -> bool:
        return self._closed

    def check_open(self) -> None:
        if self._closed:
            raise TableClosedError("the table has been closed")

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._cursor.close()
        logger.debug("closed table")

    def __enter__(self) -> "Table":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
