class WireError(Exception):
    code = "WIRE_ERROR"
    message = "Wire format error"

    def __init__(self, message: str | None = None, details=None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)

class DecodeError(WireError):
    code = "DECODE_ERROR"
    message = "Failed to decode message"

class TruncatedMessageError(DecodeError):
    code = "TRUNCATED_MESSAGE"
    message = "Input ended in the middle of a record"

class MalformedVarintError(DecodeError):
    code = "MALFORMED_VARINT"
    message = "Varint is longer than 10 bytes"

class WireTypeMismatchError(DecodeError):
    code = "WIRE_TYPE_MISMATCH"
    message = "Field was sent with the wrong wire type"

class MessageTooLargeError(DecodeError):
    code = "MESSAGE_TOO_LARGE"
    message = "Message exceeds the size limit"

class EncodeError(WireError):
    code = "ENCODE_ERROR"
    message = "Failed to encode message"
