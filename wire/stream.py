import os
from typing import BinaryIO, Iterator, Optional

from google.protobuf.internal.encoder import _VarintBytes

from models.query import Query
from wire.exceptions import (
    EncodeError,
    MalformedVarintError,
    MessageTooLargeError,
    TruncatedMessageError,
)

DEFAULT_MAX_MESSAGE_BYTES = 64 * 1024 * 1024
MAX_VARINT_BYTES = 10


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except Exception:
        return default


MAX_MESSAGE_BYTES = _env_int("QUERY_WIRE_MAX_MESSAGE_BYTES", DEFAULT_MAX_MESSAGE_BYTES)


def write_delimited(fp: BinaryIO, record: Query) -> int:
    """
    Write one record prefixed with its byte length as a varint.
    Returns the number of bytes written.
    """
    if not isinstance(record, Query):
        raise EncodeError(
            f"Expected a Query record, got {type(record).__name__}",
            details={"type": type(record).__name__},
        )

    payload = record.serialize()
    prefix = _VarintBytes(len(payload))
    fp.write(prefix)
    fp.write(payload)
    return len(prefix) + len(payload)


def _read_length_prefix(fp: BinaryIO) -> Optional[int]:
    result = 0
    shift = 0

    for index in range(MAX_VARINT_BYTES):
        chunk = fp.read(1)
        if not chunk:
            if index == 0:
                return None
            raise TruncatedMessageError("Stream ended inside a length prefix")

        byte = chunk[0]
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result
        shift += 7

    raise MalformedVarintError("Length prefix is longer than 10 bytes")


def read_delimited(fp: BinaryIO, max_message_bytes: Optional[int] = None) -> Optional[Query]:
    """
    Read the next length-prefixed record, or None at a clean end of stream.
    """
    limit = MAX_MESSAGE_BYTES if max_message_bytes is None else max_message_bytes

    length = _read_length_prefix(fp)
    if length is None:
        return None

    if length > limit:
        raise MessageTooLargeError(details={"length": length, "limit": limit})

    payload = fp.read(length)
    if len(payload) < length:
        raise TruncatedMessageError(
            "Stream ended inside a record",
            details={"length": length, "available": len(payload)},
        )

    return Query.parse(payload)


def iter_delimited(fp: BinaryIO, max_message_bytes: Optional[int] = None) -> Iterator[Query]:
    while True:
        record = read_delimited(fp, max_message_bytes=max_message_bytes)
        if record is None:
            return
        yield record
