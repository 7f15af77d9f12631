"""
Value coercion: dynamically-typed input -> value of a field's static shape.

Cascade, first match wins:

1. direct transfer -- the value already fits (or converts numerically);
2. text -- trimmed and parsed by the field's kind (bool/int/uint/float,
   comma lists, embedded JSON for records and bracketed lists);
3. raw payload -- ``bytes``/``RawPayload`` loaded through the JSON codec
   (a ``str`` field already took the raw text in step 1);
   a ``dict`` is accepted as an already-parsed payload for record fields;
4. native sequence -- each element coerced through this same cascade.

Anything else is an ``UnsupportedValueTypeError``. ZERO I/O; the only state
touched is the value handed back to the caller.
"""

from __future__ import annotations

import math
import numbers
import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from mapstruct.config import BinderConfig, get_default_config
from mapstruct.domain.fields import FieldKind, TypeShape, zero_value
from mapstruct.domain.types import PARSE_SIGNED, PARSE_UNSIGNED, Width, to_float32
from mapstruct.exceptions import (
    InvalidBooleanError,
    InvalidFloatError,
    InvalidIntegerError,
    InvalidPayloadError,
    InvalidUnsignedError,
    PayloadError,
    UnsupportedFieldTypeError,
    UnsupportedValueTypeError,
)
from mapstruct.mapping.payload import build_value, load_payload

_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)

_TRUE = frozenset({"true", "1"})
_FALSE = frozenset({"false", "0"})

_RECORD_KINDS = (FieldKind.RECORD, FieldKind.REFERENCE)


# -----------------------------------------------------------------------------
# Scalar parsers (text -> typed)
# -----------------------------------------------------------------------------


def parse_bool(text: str, field: str = "") -> bool:
    """Accept true/false/1/0, case-insensitively."""
    low = text.lower()
    if low in _TRUE:
        return True
    if low in _FALSE:
        return False
    raise InvalidBooleanError(field, text)


def parse_int(text: str, field: str = "", width: Width | None = None) -> int:
    """
    Base-10 signed parse.

    Width-carrying fields parse within the 64-bit range and are then
    wrapped to their declared width; plain ``int`` is unbounded.
    """
    if not _SIGNED_RE.fullmatch(text):
        raise InvalidIntegerError(field, text)
    value = int(text)
    if width is None:
        return value
    if not PARSE_SIGNED.holds(value):
        raise InvalidIntegerError(field, text)
    return width.wrap(value)


def parse_uint(text: str, field: str = "", width: Width | None = None) -> int:
    """Base-10 unsigned parse. Any sign, including ``+``, is rejected."""
    if not _UNSIGNED_RE.fullmatch(text):
        raise InvalidUnsignedError(field, text)
    value = int(text)
    if not PARSE_UNSIGNED.holds(value):
        raise InvalidUnsignedError(field, text)
    return width.wrap(value) if width is not None else value


def parse_float(text: str, field: str = "", width: Width | None = None) -> float:
    """Decimal or scientific notation, plus inf/nan. Overflow is an error."""
    if not _FLOAT_RE.fullmatch(text):
        raise InvalidFloatError(field, text)
    value = float(text)
    if math.isinf(value) and "inf" not in text.lower():
        raise InvalidFloatError(field, text)
    if width is not None and width.bits == 32:
        value = to_float32(value)
    return value


# -----------------------------------------------------------------------------
# Direct transfer
# -----------------------------------------------------------------------------


def _is_number(value: Any) -> bool:
    return isinstance(value, (numbers.Real, Decimal)) and not isinstance(value, bool)


def _is_finite(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, float):
        return math.isfinite(value)
    return True


def _fit_int(value: int, shape: TypeShape) -> int:
    return shape.width.wrap(value) if shape.width is not None else value


def _fit_float(value: float, shape: TypeShape) -> float:
    if shape.width is not None and shape.width.bits == 32:
        return to_float32(value)
    return value


def transfer(value: Any, shape: TypeShape) -> tuple[bool, Any]:
    """
    Assign or convert *value* without parsing.

    Returns:
        ``(True, converted)`` when the value fits *shape* directly or by
        numeric conversion, ``(False, None)`` otherwise.
    """
    kind = shape.kind
    if kind is FieldKind.ANY:
        return True, value
    if value is None:
        return (True, None) if shape.optional else (False, None)

    if kind is FieldKind.STRING:
        if isinstance(value, str):
            return True, value
        if isinstance(value, (bytes, bytearray)):
            return True, bytes(value).decode("utf-8", errors="replace")
        return False, None

    if kind is FieldKind.BYTES:
        if isinstance(value, (bytes, bytearray)):
            return True, bytes(value)
        if isinstance(value, str):
            return True, value.encode("utf-8")
        return False, None

    if kind is FieldKind.BOOL:
        return (True, value) if isinstance(value, bool) else (False, None)

    if kind in (FieldKind.INT, FieldKind.UINT):
        if not _is_number(value) or not _is_finite(value):
            return False, None
        return True, _fit_int(int(value), shape)

    if kind is FieldKind.FLOAT:
        if not _is_number(value):
            return False, None
        try:
            return True, _fit_float(float(value), shape)
        except OverflowError:
            return False, None

    if kind is FieldKind.SEQUENCE:
        if isinstance(value, shape.type) and shape.element.kind is FieldKind.ANY:
            return True, value
        return False, None

    if kind is FieldKind.MAPPING:
        if isinstance(value, dict):
            return True, value
        if isinstance(value, Mapping):
            return True, dict(value)
        return False, None

    if kind in _RECORD_KINDS:
        return (True, value) if isinstance(value, shape.type) else (False, None)

    annotation = shape.annotation
    if isinstance(annotation, type) and isinstance(value, annotation):
        return True, value
    return False, None


# -----------------------------------------------------------------------------
# Cascade
# -----------------------------------------------------------------------------


def coerce_value(
    value: Any,
    shape: TypeShape,
    current: Any = None,
    field: str = "",
    *,
    config: BinderConfig | None = None,
) -> Any:
    """
    Coerce a dynamically-typed *value* into *shape*.

    Args:
        value: Input value of any runtime type.
        shape: Static shape of the destination.
        current: The destination's current value (records merge into it,
            empty lists leave it as is).
        field: Field name used in error reports.
        config: Binder settings; defaults when omitted.

    Returns:
        The value to store.

    Raises:
        DecodeError subclasses describing the first failure.
    """
    config = config or get_default_config()

    ok, converted = transfer(value, shape)
    if ok:
        return converted

    if isinstance(value, str):
        return coerce_string(value.strip(), shape, current, field, config=config)

    if isinstance(value, (bytes, bytearray)):
        return _load(bytes(value), shape, current, field, config)

    if isinstance(value, Mapping) and shape.kind in _RECORD_KINDS:
        try:
            return build_value(dict(value), shape, current, namespace=config.payload_tag)
        except PayloadError as exc:
            raise InvalidPayloadError(field, repr(value), exc.reason) from exc

    if isinstance(value, (list, tuple)) and shape.kind is FieldKind.SEQUENCE:
        return shape.type(
            coerce_value(item, shape.element, None, field, config=config)
            for item in value
        )

    raise UnsupportedValueTypeError(field, type(value).__name__, value)


def coerce_string(
    text: str,
    shape: TypeShape,
    current: Any = None,
    field: str = "",
    *,
    config: BinderConfig | None = None,
) -> Any:
    """Parse already-trimmed *text* according to the kind of *shape*."""
    config = config or get_default_config()
    kind = shape.kind

    if kind in (FieldKind.STRING, FieldKind.ANY):
        return text

    if kind is FieldKind.BYTES:
        return text.encode("utf-8")

    if kind is FieldKind.SEQUENCE:
        if not text:
            return current if current is not None else zero_value(shape)
        if text.startswith("[") and text.endswith("]"):
            return _load(text, shape, current, field, config)
        return shape.type(
            coerce_string(part, shape.element, None, field, config=config)
            for part in text.split(config.list_separator)
        )

    if kind in _RECORD_KINDS:
        return _load(text, shape, current, field, config)

    if kind is FieldKind.BOOL:
        return parse_bool(text, field)

    if kind is FieldKind.INT:
        return parse_int(text, field, shape.width)

    if kind is FieldKind.UINT:
        return parse_uint(text, field, shape.width)

    if kind is FieldKind.FLOAT:
        return parse_float(text, field, shape.width)

    raise UnsupportedFieldTypeError(field, kind.value, text)


def _load(raw: str | bytes, shape: TypeShape, current: Any, field: str, config: BinderConfig) -> Any:
    try:
        return load_payload(raw, shape, current, namespace=config.payload_tag)
    except PayloadError as exc:
        text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
        raise InvalidPayloadError(field, text, exc.reason) from exc
