from __future__ import annotations


class DbfError(Exception):
    """Base class for every error raised by dbfcursor."""


class InvalidArgumentError(DbfError, ValueError):
    pass


class UnknownColumnError(DbfError, LookupError):
    pass


class ColumnTypeMismatchError(DbfError, TypeError):
    pass


class ForeignColumnError(DbfError, ValueError):
    pass


class NoRecordLoadedError(DbfError, RuntimeError):
    pass


class OutOfOrderReadError(DbfError, RuntimeError):
    pass


class TableClosedError(DbfError, RuntimeError):
    pass


class StreamExhaustedError(DbfError, EOFError):
    pass


class HeaderParseError(DbfError, ValueError):
    pass


class ColumnDecodeError(DbfError, ValueError):
    pass
