from __future__ import annotations
from .bytecursor import ByteCursor

DESCRIPTOR_SIZE = 32
HEADER_TERMINATOR = 0x0D

def decode_field_descriptor(first: int, cur: ByteCursor) -> dict:
    """
    Rest of a 32-byte field descriptor whose first byte (``first``) was
    already consumed while looking for the terminator.
    Returns a dict with raw fields; Column offsets are assigned by the caller.
    """
    raw_name = bytes([first]) + cur.read(10)
    type_code = chr(cur.u8())
    cur.skip(4)                                   # field data address, unused on disk
    size = cur.u8()
    decimal_count = cur.u8()
    cur.skip(14)                                  # work area id, flags, reserved

    name = raw_name.split(b"\x00", 1)[0].decode("ascii", errors="replace").strip()
    return {"name": name, "type_code": type_code, "size": size, "decimal_count": decimal_count}
