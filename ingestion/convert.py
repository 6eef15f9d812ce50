from models.query import Query
from wire.stream import iter_delimited, write_delimited
import logging
from typing import Optional, Iterable, List
import json
import tempfile
import os

def convert_one(raw: dict) -> Optional[Query]:
    if not isinstance(raw, dict):
        logging.warning("Skipping non-dict record: %r", raw)
        return None

    try:
        record = Query.from_dict(raw)
    except ValueError as e:
        logging.warning("Skipping record query=%s: %s", raw.get("query", "<missing>"), e)
        return None

    return record

def convert_many(raw_list: Iterable[dict], continue_on_error=True) -> List[Query]:
    results = []
    ok_count = 0
    skipped_count = 0
    error_count = 0

    for raw in raw_list:
        result = convert_one(raw)

        if result is None:
            if continue_on_error:
                skipped_count += 1
                continue
            else:
                error_count += 1
                raise ValueError(f"Record could not be converted: {raw!r}")
        else:
            ok_count += 1
            results.append(result)

    logging.warning("OK=%s", ok_count)
    logging.warning("SKIP=%s", skipped_count)
    logging.warning("NOK=%s", error_count)

    return results

def _only_objects(items, source):
    for index, item in enumerate(items):
        if isinstance(item, dict):
            yield item
        else:
            logging.warning("%s entry %d is not a query object, skipping", source, index)

def load_queries(path):
    """
    Yield raw query objects from `path`.

    Accepts a JSON array of queries, an export envelope {"queries": [...]},
    or one query per line (NDJSON, '#' lines are comments).
    """
    with open(path, "r", encoding="utf-8-sig") as f:
        text = f.read()

    head = text.lstrip()[:1]

    if head == "[":
        yield from _only_objects(json.loads(text), path)
        return

    if head == "{":
        try:
            doc = json.loads(text)
        except json.JSONDecodeError:
            doc = None
        # a single document with a "queries" list, otherwise fall through to NDJSON
        if isinstance(doc, dict) and isinstance(doc.get("queries"), list):
            yield from _only_objects(doc["queries"], path)
            return

    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        try:
            obj = json.loads(line)
        except json.JSONDecodeError as e:
            logging.warning("Skipping invalid JSON line %d: %s", lineno, e)
            continue

        if isinstance(obj, dict):
            yield obj
        else:
            logging.warning("Line %d is not a query object, skipping", lineno)

def save_delimited(records: Iterable[Query], path: str, append: bool = False) -> int:

    tmp_path = None
    use_atomic = False

    if append:
        f = open(path, "ab")
    else:
        dir_name = os.path.dirname(os.path.abspath(path))
        tmp_fd, tmp_path = tempfile.mkstemp(dir=dir_name, prefix=".tmp_convert_")
        f = os.fdopen(tmp_fd, "wb")
        use_atomic = True

    count = 0

    try:
        with f:
            for record in records:
                if not isinstance(record, Query):
                    logging.warning("Skipping non-Query object in output")
                    continue
                write_delimited(f, record)
                count += 1
    except BaseException:
        if use_atomic and tmp_path is not None:
            os.remove(tmp_path)
        raise

    if use_atomic and tmp_path is not None:
        os.replace(tmp_path, path)

    logging.info("Saved %d records to %s", count, path)
    return count

def dump_jsonl(path_in: str, path_out: str) -> int:
    count = 0

    with open(path_in, "rb") as src, open(path_out, "w", encoding="utf-8") as dst:
        for record in iter_delimited(src):
            dst.write(json.dumps(record.to_dict(), ensure_ascii=False) + "\n")
            count += 1

    logging.info("Wrote %d records to %s", count, path_out)
    return count
