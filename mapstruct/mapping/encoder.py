"""
Encode pipeline: record -> mapping.

Walks a dataclass instance in declaration order and builds a fresh dict:

* the output key is the tag name, or the lowercased field identifier when
  the tag has no name (decode falls back to the identifier unchanged);
* ``"-"`` skips the field, ``omitempty`` skips zero values;
* embedded records are encoded recursively and merged into the parent,
  later keys overwriting earlier ones;
* ``string`` renders numeric fields as text (floats with
  ``config.float_precision`` digits).

Encode never raises for field values. A source that is not a dataclass
instance yields ``None``.
"""

from __future__ import annotations

from typing import Any

from mapstruct.config import BinderConfig, get_default_config
from mapstruct.domain.fields import NUMERIC_KINDS, FieldKind, FieldSpec, describe, is_record
from mapstruct.domain.tags import OPTION_OMITEMPTY, OPTION_STRING
from mapstruct.logging_config import get_logger

logger = get_logger("mapping.encoder")

_RECORD_KINDS = (FieldKind.RECORD, FieldKind.REFERENCE)


def is_empty(value: Any) -> bool:
    """Zero value test used by ``omitempty``."""
    if value is None:
        return True
    if isinstance(value, bool):
        return value is False
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (str, bytes, bytearray, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    return False


def encode(
    src: Any,
    tag: str | None = None,
    *,
    config: BinderConfig | None = None,
) -> dict[str, Any] | None:
    """
    Flatten the dataclass instance *src* into a new dict.

    Args:
        src: A dataclass instance.
        tag: Tag namespace to read; defaults to ``config.tag`` (``"map"``).
        config: Binder settings.

    Returns:
        The encoded mapping, or ``None`` when *src* is not a dataclass
        instance.
    """
    config = config or get_default_config()
    namespace = tag or config.tag

    if not is_record(src):
        logger.debug("encode_skipped_non_record", extra={"source_type": type(src).__name__})
        return None

    out: dict[str, Any] = {}
    for spec in describe(type(src), namespace, fallback=str.lower):
        if not spec.visible or spec.excluded:
            continue

        value = getattr(src, spec.name)
        if spec.option == OPTION_OMITEMPTY and is_empty(value):
            continue

        if spec.is_embedded and spec.kind in _RECORD_KINDS:
            if value is None:
                continue
            out.update(encode(value, namespace, config=config) or {})
            continue

        out[spec.source_name] = _render(spec, value, config)

    logger.debug(
        "record_encoded",
        extra={"record_type": type(src).__name__, "key_count": len(out)},
    )
    return out


def _render(spec: FieldSpec, value: Any, config: BinderConfig) -> Any:
    if spec.option != OPTION_STRING or spec.kind not in NUMERIC_KINDS:
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    if spec.kind is FieldKind.FLOAT:
        return f"{float(value):.{config.float_precision}f}"
    return str(int(value))
