"""
Structured payload codec: JSON text -> typed value.

The coercion engine decides *when* a value is a serialized record or array;
this module does the loading. It wraps the standard ``json`` codec and
builds the target from the parsed document:

* records are matched through the ``json`` tag namespace (tag name, else the
  field identifier; exact key first, then case-insensitive); ``"-"`` fields
  and unknown keys are ignored; embedded fields read the same object.
* records merge into the existing instance; unset references are allocated.
* ``null`` leaves scalars untouched and clears references and optionals.
* JSON strings load into ``bytes`` fields as standard base64.

ZERO I/O. Every mismatch raises ``PayloadError`` with a dotted path.
"""

from __future__ import annotations

import base64
import json
import math
from typing import Any

from mapstruct.domain.fields import (
    FieldKind,
    TypeShape,
    describe,
    is_record,
    new_record,
    zero_value,
)
from mapstruct.domain.tags import PAYLOAD_TAG
from mapstruct.domain.types import to_float32
from mapstruct.exceptions import PayloadError

_UNCHANGED = object()


def load_payload(
    raw: str | bytes | bytearray,
    shape: TypeShape,
    current: Any = None,
    *,
    namespace: str = PAYLOAD_TAG,
) -> Any:
    """
    Parse *raw* as JSON and build a value of *shape*.

    Args:
        raw: Serialized payload text.
        shape: Target shape.
        current: The field's current value; records are merged into it.
        namespace: Tag namespace used to match record keys.

    Returns:
        The value to store in the field.

    Raises:
        PayloadError: Malformed JSON or a value that does not fit *shape*.
    """
    try:
        document = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise PayloadError("", str(exc)) from exc
    return build_value(document, shape, current, namespace=namespace)


def build_value(
    data: Any,
    shape: TypeShape,
    current: Any = None,
    *,
    namespace: str = PAYLOAD_TAG,
    path: str = "",
) -> Any:
    """Build a value of *shape* from an already-parsed JSON document."""
    result = _build(data, shape, current, namespace, path)
    return current if result is _UNCHANGED else result


def _build(data: Any, shape: TypeShape, current: Any, namespace: str, path: str) -> Any:
    kind = shape.kind

    if data is None:
        if shape.optional or kind is FieldKind.ANY:
            return None
        if kind in (FieldKind.SEQUENCE, FieldKind.MAPPING):
            return zero_value(shape)
        return _UNCHANGED

    if kind is FieldKind.ANY:
        return data

    if kind in (FieldKind.RECORD, FieldKind.REFERENCE):
        if not isinstance(data, dict):
            raise PayloadError(path, f"cannot load {type(data).__name__} into {shape.type.__name__}")
        target = current if isinstance(current, shape.type) else new_record(shape.type)
        _fill_record(data, target, namespace, path)
        return target

    if kind is FieldKind.SEQUENCE:
        if not isinstance(data, list):
            raise PayloadError(path, f"cannot load {type(data).__name__} into a sequence")
        items = [
            build_value(item, shape.element, None, namespace=namespace, path=f"{path}[{i}]")
            for i, item in enumerate(data)
        ]
        return shape.type(items)

    if kind is FieldKind.MAPPING:
        if not isinstance(data, dict):
            raise PayloadError(path, f"cannot load {type(data).__name__} into a mapping")
        return data

    if kind is FieldKind.STRING:
        if not isinstance(data, str):
            raise PayloadError(path, f"cannot load {type(data).__name__} into str")
        return data

    if kind is FieldKind.BYTES:
        if not isinstance(data, str):
            raise PayloadError(path, f"cannot load {type(data).__name__} into bytes")
        try:
            return base64.b64decode(data, validate=True)
        except ValueError as exc:
            raise PayloadError(path, f"invalid base64: {exc}") from exc

    if kind is FieldKind.BOOL:
        if not isinstance(data, bool):
            raise PayloadError(path, f"cannot load {type(data).__name__} into bool")
        return data

    if kind in (FieldKind.INT, FieldKind.UINT):
        if isinstance(data, bool) or not isinstance(data, int):
            raise PayloadError(path, f"cannot load {data!r} into {kind.value}")
        if shape.width is not None and not shape.width.holds(data):
            raise PayloadError(path, f"{data} overflows {kind.value}{shape.width.bits}")
        if kind is FieldKind.UINT and data < 0:
            raise PayloadError(path, f"cannot load {data} into uint")
        return data

    if kind is FieldKind.FLOAT:
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            raise PayloadError(path, f"cannot load {type(data).__name__} into float")
        try:
            value = float(data)
        except OverflowError:
            raise PayloadError(path, f"{data} overflows float") from None
        if shape.width is not None and shape.width.bits == 32:
            narrowed = to_float32(value)
            if math.isinf(narrowed) and not math.isinf(value):
                raise PayloadError(path, f"{data} overflows float32")
            return narrowed
        return value

    raise PayloadError(path, f"unsupported target kind {kind.value}")


def _fill_record(data: dict[str, Any], target: Any, namespace: str, path: str) -> None:
    folded = {key.lower(): key for key in data}
    for spec in describe(type(target), namespace):
        if not spec.visible or spec.excluded:
            continue
        current = getattr(target, spec.name)
        if spec.is_embedded and spec.kind in (FieldKind.RECORD, FieldKind.REFERENCE):
            inner = current if is_record(current) else new_record(spec.shape.type)
            _fill_record(data, inner, namespace, path)
            setattr(target, spec.name, inner)
            continue
        key = spec.source_name if spec.source_name in data else folded.get(spec.source_name.lower())
        if key is None:
            continue
        field_path = f"{path}.{key}" if path else key
        value = build_value(data[key], spec.shape, current, namespace=namespace, path=field_path)
        setattr(target, spec.name, value)
