import logging
from typing import Any, Dict, Optional

from models.query import MESSAGE_NAME, Query
from wire.exceptions import MessageTooLargeError
from wire.stream import MAX_MESSAGE_BYTES

logger = logging.getLogger(__name__)

class CodecService:
    def __init__(self, max_message_bytes: Optional[int] = None):
        self.max_message_bytes = MAX_MESSAGE_BYTES if max_message_bytes is None else max_message_bytes
        self.encoded_count = 0
        self.decoded_count = 0
        self.failed_count = 0

    def check_size(self, size: int):
        if size > self.max_message_bytes:
            self.failed_count += 1
            raise MessageTooLargeError(details={"length": size, "limit": self.max_message_bytes})

    def encode(self, record: Query) -> bytes:
        payload = record.serialize()
        self.check_size(len(payload))
        self.encoded_count += 1
        logger.debug("Encoded %s record into %d bytes", MESSAGE_NAME, len(payload))
        return payload

    def decode(self, payload: bytes) -> Query:
        self.check_size(len(payload))

        try:
            record = Query.parse(payload)
        except Exception:
            self.failed_count += 1
            raise

        self.decoded_count += 1
        logger.debug("Decoded %d bytes into %s record", len(payload), MESSAGE_NAME)
        return record

    def health_check(self) -> Dict[str, Any]:
        return {
            "status": "ok",
            "message": MESSAGE_NAME,
            "max_message_bytes": self.max_message_bytes,
            "encoded": self.encoded_count,
            "decoded": self.decoded_count,
            "failed": self.failed_count,
        }
