"""Mapping engine: coercion cascade, payload codec, decode and encode pipelines."""

from mapstruct.mapping.coercion import (
    coerce_string,
    coerce_value,
    parse_bool,
    parse_float,
    parse_int,
    parse_uint,
    transfer,
)
from mapstruct.mapping.decoder import decode
from mapstruct.mapping.encoder import encode, is_empty
from mapstruct.mapping.payload import build_value, load_payload

__all__ = [
    "decode",
    "encode",
    "is_empty",
    "coerce_value",
    "coerce_string",
    "transfer",
    "parse_bool",
    "parse_int",
    "parse_uint",
    "parse_float",
    "load_payload",
    "build_value",
]
