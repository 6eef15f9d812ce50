"""Protocol buffer code for proto/person.proto."""
from google.protobuf import descriptor as _descriptor
from google.protobuf import descriptor_pool as _descriptor_pool
from google.protobuf import symbol_database as _symbol_database
from google.protobuf.internal import builder as _builder

# @@protoc_insertion_point(imports)

_sym_db = _symbol_database.Default()


DESCRIPTOR = _descriptor_pool.Default().AddSerializedFile(
    b'\n\x0cperson.proto"\x3f\n\x06Person\x12\x0d\n\x05query\x18\x01 \x01(\t'
    b'\x12\x13\n\x0bpage_number\x18\x02 \x01(\x05'
    b'\x12\x11\n\x09page_size\x18\x03 \x01(\x05b\x06proto3'
)

_globals = globals()
_builder.BuildMessageAndEnumDescriptors(DESCRIPTOR, _globals)
_builder.BuildTopDescriptorsAndMessages(DESCRIPTOR, "person_pb2", _globals)
if not _descriptor._USE_C_DESCRIPTORS:
    DESCRIPTOR._loaded_options = None
    _globals["_PERSON"]._serialized_start = 16
    _globals["_PERSON"]._serialized_end = 79
# @@protoc_insertion_point(module_scope)
