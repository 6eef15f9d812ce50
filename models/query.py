from typing import Any, Dict

from google.protobuf import json_format, text_format
from google.protobuf import message as _message
from google.protobuf.unknown_fields import UnknownFieldSet
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    StrictInt,
    StrictStr,
    field_validator,
)

from wire import person_pb2
from wire.exceptions import DecodeError, EncodeError, WireTypeMismatchError

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1

# The schema names the message "Person"; other readers of the same schema
# know it under that name.
MESSAGE_NAME = person_pb2.Person.DESCRIPTOR.name

# field name -> field number
FIELDS: Dict[str, int] = {f.name: f.number for f in person_pb2.Person.DESCRIPTOR.fields}

_FIELDS_BY_NUMBER = {number: name for name, number in FIELDS.items()}


def _merge_wire(msg: person_pb2.Person, data: bytes) -> None:
    try:
        msg.MergeFromString(bytes(data))
    except (_message.DecodeError, RecursionError) as e:
        raise DecodeError(details={"reason": str(e), "length": len(data)}) from e


class Query(BaseModel):
    """
    Paginated query record, encoded on the wire as the `Person` message.

    The pydantic model validates what callers assign; the protobuf runtime
    does all encoding and decoding. Unknown fields met while parsing are
    kept as raw bytes and written back after the known fields.
    """
    model_config = ConfigDict(
        validate_assignment=True,
        populate_by_name=True,
        extra="forbid",
    )

    query: StrictStr = Field(default="", description="Query string")

    page_number: StrictInt = Field(
        default=0,
        ge=INT32_MIN,
        le=INT32_MAX,
        alias="pageNumber",
        description="Page number (int32)"
    )

    page_size: StrictInt = Field(
        default=0,
        ge=INT32_MIN,
        le=INT32_MAX,
        alias="pageSize",
        description="Number of results per page (int32)"
    )

    _unknown_fields: bytes = PrivateAttr(default=b"")

    @field_validator("query")
    @classmethod
    def _encodable_as_utf8(cls, value: str) -> str:
        # lone surrogates are valid str but cannot go on the wire
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ValueError(f"query is not encodable as UTF-8: {e.reason}") from e
        return value

    @property
    def unknown_fields(self) -> bytes:
        return self._unknown_fields

    # ------------------------------------------------------
    # Field access
    # ------------------------------------------------------

    def clear_field(self, name: str) -> None:
        if name not in FIELDS:
            raise ValueError(f'Query has no field named "{name}"')
        setattr(self, name, type(self).model_fields[name].default)

    def clear(self) -> None:
        for name in FIELDS:
            self.clear_field(name)
        self._unknown_fields = b""

    def is_initialized(self) -> bool:
        # proto3 has no required fields
        return True

    def list_fields(self) -> list:
        """(name, value) pairs for the fields holding a non-default value, in field-number order."""
        return [(f.name, value) for f, value in self._to_message().ListFields()]

    # ------------------------------------------------------
    # Conversion to and from the protobuf message
    # ------------------------------------------------------

    def _to_message(self) -> person_pb2.Person:
        try:
            msg = person_pb2.Person(
                query=self.query,
                page_number=self.page_number,
                page_size=self.page_size,
            )
        except (TypeError, ValueError) as e:
            raise EncodeError(details={"reason": str(e)}) from e

        if self._unknown_fields:
            msg.MergeFromString(self._unknown_fields)
        return msg

    @classmethod
    def _from_message(cls, msg: person_pb2.Person) -> "Query":
        """Build a record from `msg`. Consumes `msg`: its known fields are cleared."""
        values = {name: getattr(msg, name) for name in FIELDS}

        for name in FIELDS:
            msg.ClearField(name)

        # the runtime keeps a known number sent with the wrong wire type as unknown
        for field in UnknownFieldSet(msg):
            if field.field_number in _FIELDS_BY_NUMBER:
                raise WireTypeMismatchError(
                    details={
                        "field": _FIELDS_BY_NUMBER[field.field_number],
                        "field_number": field.field_number,
                        "wire_type": field.wire_type,
                    }
                )

        record = cls(**values)
        record._unknown_fields = msg.SerializeToString()
        return record

    # ------------------------------------------------------
    # Wire encoding
    # ------------------------------------------------------

    def serialize(self) -> bytes:
        return self._to_message().SerializeToString()

    def byte_size(self) -> int:
        return self._to_message().ByteSize()

    @classmethod
    def parse(cls, data: bytes) -> "Query":
        msg = person_pb2.Person()
        _merge_wire(msg, data)
        return cls._from_message(msg)

    def merge_from_bytes(self, data: bytes) -> int:
        """
        Parse `data` and apply it on top of this record.
        Fields present on the wire overwrite, even when they carry a zero value.
        Returns the number of bytes consumed.
        """
        msg = self._to_message()
        _merge_wire(msg, data)
        self.copy_from(self._from_message(msg))
        return len(data)

    # ------------------------------------------------------
    # Copy / merge
    # ------------------------------------------------------

    def merge(self, other: "Query") -> None:
        if not isinstance(other, Query):
            raise TypeError(
                f"Parameter to merge() must be instance of same class: expected Query got {type(other).__name__}."
            )

        msg = self._to_message()
        msg.MergeFrom(other._to_message())
        self.copy_from(self._from_message(msg))

    def copy_from(self, other: "Query") -> None:
        if not isinstance(other, Query):
            raise TypeError(
                f"Parameter to copy_from() must be instance of same class: expected Query got {type(other).__name__}."
            )
        if other is self:
            return

        for name in FIELDS:
            setattr(self, name, getattr(other, name))
        self._unknown_fields = other._unknown_fields

    def clone(self) -> "Query":
        return self.model_copy()

    def swap(self, other: "Query") -> None:
        if other is self:
            return

        mine = self.clone()
        self.copy_from(other)
        other.copy_from(mine)

    # ------------------------------------------------------
    # JSON / text
    # ------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """JSON mapping: camelCase names, defaults left out."""
        return json_format.MessageToDict(self._to_message())

    @classmethod
    def from_dict(cls, raw: Dict[str, Any], ignore_unknown_fields: bool = False) -> "Query":
        if not isinstance(raw, dict):
            raise ValueError(f"Expected a JSON object, got {type(raw).__name__}")

        msg = person_pb2.Person()
        try:
            json_format.ParseDict(raw, msg, ignore_unknown_fields=ignore_unknown_fields)
        except json_format.ParseError as e:
            raise ValueError(str(e)) from e

        return cls._from_message(msg)

    def to_text(self, as_one_line: bool = False, as_utf8: bool = False) -> str:
        return text_format.MessageToString(self._to_message(), as_one_line=as_one_line, as_utf8=as_utf8)

    def __str__(self) -> str:
        return self.to_text()
