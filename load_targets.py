import argparse
import sys
from pathlib import Path

from urlshort.db import import_redirects, open_writable_engine
from urlshort.dispatch import read_source
from urlshort.errors import RedirectConfigError
from urlshort.loaders import parse_json, parse_yaml

PARSERS = {"yaml": parse_yaml, "json": parse_json}


def main(argv=None):
    parser = argparse.ArgumentParser(description="Import a YAML/JSON targets file into the sqlite urls table.")
    parser.add_argument("source", help="targets file to import")
    parser.add_argument("--type", dest="file_type", choices=sorted(PARSERS), default="yaml")
    parser.add_argument("--db", default="test.db", help="sqlite database file, created if missing")
    args = parser.parse_args(argv)

    try:
        entries = PARSERS[args.file_type](read_source(args.source))
    except RedirectConfigError as e:
        print(f"Failed to load {args.source}: {e}", file=sys.stderr)
        return 1

    engine = open_writable_engine(args.db)
    try:
        count = import_redirects(engine, entries)
    finally:
        engine.dispose()

    print(f"Imported {count} redirects from {args.source} into {Path(args.db).resolve()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
