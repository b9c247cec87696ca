from __future__ import annotations
from enum import Enum

class ColumnType(str, Enum):
    BOOLEAN = "boolean"
    DATE = "date"
    DECIMAL = "decimal"
    INT32 = "int32"
    TEXT = "text"
    RAW = "raw"

# dBASE one-letter type codes; anything else is read as RAW
TYPE_CODES: dict[str, ColumnType] = {
    "C": ColumnType.TEXT,
    "D": ColumnType.DATE,
    "L": ColumnType.BOOLEAN,
    "N": ColumnType.DECIMAL,
    "F": ColumnType.DECIMAL,
    "I": ColumnType.INT32,
}

def column_type_for_code(code: str) -> ColumnType:
    return TYPE_CODES.get(code.upper(), ColumnType.RAW)
