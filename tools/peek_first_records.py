#!/usr/bin/env python3
from pathlib import Path
from dbfcursor.binary.codecs.bytecursor import ByteCursor
from dbfcursor.binary.codecs.table_header import decode_table_header
from dbfcursor.binary.reader import DELETED_RECORD_FLAG, END_OF_DATA

def main(path: Path, n: int = 5):
    with open(path, "rb") as f:
        cur = ByteCursor(f)
        hdr = decode_table_header(cur)
        print(f"version=0x{hdr.version:02x} records={hdr.record_count} "
              f"header_size={hdr.header_size} record_size={hdr.record_size}")
        for c in hdr.columns:
            print(f"  {c.name:<11} {c.type_code} off={c.offset:4d} size={c.size:3d} dec={c.decimal_count}")

        for i in range(min(n, hdr.record_count)):
            flag = cur.read_byte()
            if flag == END_OF_DATA:
                print(f"R[{i:02d}] <end of data>")
                return
            body = cur.read(hdr.record_size - 1)
            mark = "deleted" if flag == DELETED_RECORD_FLAG else "live"
            print(f"R[{i:02d}] {mark:<7} {body[:48].hex()}")

if __name__ == "__main__":
    import sys
    main(Path(sys.argv[1]), int(sys.argv[2]) if len(sys.argv) > 2 else 5)
