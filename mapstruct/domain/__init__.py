"""Domain layer: tag grammar, numeric widths, field descriptors. ZERO I/O."""

from mapstruct.domain.fields import (
    FieldKind,
    FieldSpec,
    TypeShape,
    describe,
    embedded,
    new_record,
    shape_of,
    tagged,
    zero_value,
)
from mapstruct.domain.tags import (
    DEFAULT_TAG,
    OPTION_OMITEMPTY,
    OPTION_REQUIRED,
    OPTION_STRING,
    PAYLOAD_TAG,
    RESERVED_OPTIONS,
    parse_tag,
)
from mapstruct.domain.types import (
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
    Width,
)

__all__ = [
    "DEFAULT_TAG",
    "PAYLOAD_TAG",
    "OPTION_REQUIRED",
    "OPTION_OMITEMPTY",
    "OPTION_STRING",
    "RESERVED_OPTIONS",
    "parse_tag",
    "FieldKind",
    "FieldSpec",
    "TypeShape",
    "describe",
    "embedded",
    "new_record",
    "shape_of",
    "tagged",
    "zero_value",
    "Width",
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
    "RawPayload",
]
