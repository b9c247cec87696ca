from __future__ import annotations
import argparse, itertools, json, logging, sys

from .errors import DbfError
from .models.options import ReaderOptions
from .models.table import Table


def _json_default(value):
    # Decimal, date and bytes have no JSON form
    if isinstance(value, (bytes, bytearray)):
        return value.hex()
    return str(value)


def _open_source(path: str):
    if path == "-":
        return sys.stdin.buffer
    return path


def cmd_info(args):
    with Table.open(_open_source(args.input)) as table:
        print(json.dumps(table.header.model_dump(mode="json"), indent=2))
    return 0


def cmd_dump(args):
    options = ReaderOptions(encoding=args.encoding, encoding_errors=args.encoding_errors)
    columns = [c.strip() for c in args.columns.split(",") if c.strip()] if args.columns else None

    with Table.open(_open_source(args.input)) as table:
        reader = table.open_reader(options=options)
        # bounded before pulling so no record past the limit is read
        for row in itertools.islice(reader.rows(columns), args.limit):
            print(json.dumps(row, default=_json_default))
    return 0


def build_parser():
    p = argparse.ArgumentParser(prog="dbfcursor", description="dBASE table utilities")
    p.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("info", help="print the table header as JSON")
    sp.add_argument("input", help="Path to .dbf file, or - for stdin")
    sp.set_defaults(func=cmd_info)

    sp = sub.add_parser("dump", help="print live records as JSON lines")
    sp.add_argument("input", help="Path to .dbf file, or - for stdin (forward-only)")
    sp.add_argument("--columns", default=None, help="Comma-separated column names (default: all)")
    sp.add_argument("--limit", type=int, default=None, help="Stop after N records")
    sp.add_argument("--encoding", default="ascii", help="Text column encoding")
    sp.add_argument("--encoding-errors", default="strict", choices=["strict", "replace", "ignore"])
    sp.set_defaults(func=cmd_dump)

    return p


def main(argv=None):
    p = build_parser()
    ns = p.parse_args(argv)
    if ns.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    try:
        return ns.func(ns)
    except (DbfError, ValueError, OSError) as e:
        print(f"dbfcursor: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
