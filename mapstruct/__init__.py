"""
mapstruct -- bind loosely-typed mappings to dataclass records and back.

    @dataclass
    class Query:
        id: int = tagged("id,required", default=0)
        tags: list[str] = tagged("tags", default_factory=list)
        page: int = tagged("page,1", default=0)

    q = Query()
    decode({"id": "1001", "tags": "a,b"}, q)   # Query(id=1001, tags=['a', 'b'], page=1)
    encode(q)                                   # {'id': 1001, 'tags': ['a', 'b'], 'page': 1}

Decode falls back to the field identifier when a tag has no name; encode
falls back to the lowercased identifier. Decode does not populate embedded
fields; encode flattens them.
"""

from mapstruct.binder import Binder
from mapstruct.config import BinderConfig, get_default_config, load_config
from mapstruct.domain import (
    DEFAULT_TAG,
    FieldKind,
    FieldSpec,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    RawPayload,
    Uint,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
    describe,
    embedded,
    parse_tag,
    tagged,
)
from mapstruct.exceptions import (
    CoercionError,
    DecodeError,
    InternalDecodeError,
    InternalNotAddressableError,
    InvalidBooleanError,
    InvalidFloatError,
    InvalidIntegerError,
    InvalidPayloadError,
    InvalidSourceError,
    InvalidTargetError,
    InvalidUnsignedError,
    MapstructError,
    MissingRequiredError,
    PayloadError,
    UnsupportedFieldTypeError,
    UnsupportedValueTypeError,
)
from mapstruct.mapping import decode, encode

__all__ = [
    "decode",
    "encode",
    "Binder",
    "BinderConfig",
    "get_default_config",
    "load_config",
    "DEFAULT_TAG",
    "parse_tag",
    "describe",
    "tagged",
    "embedded",
    "FieldKind",
    "FieldSpec",
    "RawPayload",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Uint",
    "Uint8",
    "Uint16",
    "Uint32",
    "Uint64",
    "Float32",
    "Float64",
    "MapstructError",
    "DecodeError",
    "InvalidTargetError",
    "InvalidSourceError",
    "MissingRequiredError",
    "CoercionError",
    "InvalidBooleanError",
    "InvalidIntegerError",
    "InvalidUnsignedError",
    "InvalidFloatError",
    "InvalidPayloadError",
    "UnsupportedValueTypeError",
    "UnsupportedFieldTypeError",
    "InternalDecodeError",
    "InternalNotAddressableError",
    "PayloadError",
]
