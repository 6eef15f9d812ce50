import argparse
import json
import logging
import sys

from wire.exceptions import DecodeError
from wire.stream import iter_delimited

logging.basicConfig(level=logging.INFO)


def inspect(path: str, as_json: bool = False, out=None) -> int:
    out = out or sys.stdout
    count = 0
    non_default = {"query": 0, "page_number": 0, "page_size": 0}
    unknown_bytes = 0

    with open(path, "rb") as f:
        for record in iter_delimited(f):
            count += 1
            for name, _ in record.list_fields():
                non_default[name] += 1
            unknown_bytes += len(record.unknown_fields)

            if as_json:
                print(json.dumps(record.to_dict(), ensure_ascii=False), file=out)
            else:
                print(f"# record {count}", file=out)
                print(record.to_text(as_utf8=True), end="", file=out)

    logging.info("Records: %d", count)
    logging.info("Fields set: %s", non_default)
    logging.info("Unknown field bytes: %d", unknown_bytes)
    return count


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Print the records of a length-delimited Query stream.")
    parser.add_argument("path", help="Stream file written by ingestion.convert.save_delimited")
    parser.add_argument("--json", action="store_true", help="Print JSON lines instead of text format")
    args = parser.parse_args(argv)

    try:
        inspect(args.path, as_json=args.json)
    except DecodeError as e:
        logging.error("Stream is corrupt [%s]: %s %s", e.code, e.message, e.details or "")
        return 1
    except OSError as e:
        logging.error("Cannot read %s: %s", args.path, e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
