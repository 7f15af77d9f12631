"""
Decode pipeline: mapping -> record.

Walks the destination dataclass in declaration order and writes each
visible, non-embedded field from the input mapping:

1. resolve the source key from the field's tag (``"-"`` skips the field;
   an empty name falls back to the field identifier, unchanged);
2. look the key up; when absent, ``required`` fails, literal default text
   stands in for the value, and anything else leaves the field untouched;
3. coerce the value (``mapstruct.mapping.coercion``) and assign it.

The first failure aborts the walk. Fields assigned before it keep their new
values; there is no rollback. Any exception that is not a ``MapstructError``
is converted to ``InternalDecodeError`` at this boundary.

Embedded fields are not populated; input mappings are flat.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from mapstruct.config import BinderConfig, get_default_config
from mapstruct.domain.fields import describe, is_frozen, is_record
from mapstruct.domain.tags import OPTION_REQUIRED, is_default_option
from mapstruct.exceptions import (
    DecodeError,
    InternalDecodeError,
    InternalNotAddressableError,
    InvalidSourceError,
    InvalidTargetError,
    MapstructError,
    MissingRequiredError,
)
from mapstruct.logging_config import LogContext, get_logger
from mapstruct.mapping.coercion import coerce_value

logger = get_logger("mapping.decoder")


def decode(
    values: Mapping[str, Any],
    dst: Any,
    tag: str | None = None,
    *,
    config: BinderConfig | None = None,
) -> None:
    """
    Populate the dataclass instance *dst* from *values*, in place.

    Args:
        values: Input mapping of string keys to dynamically-typed values.
        dst: A mutable (non-frozen) dataclass instance.
        tag: Tag namespace to read; defaults to ``config.tag`` (``"map"``).
        config: Binder settings.

    Raises:
        InvalidTargetError: *dst* is not a mutable dataclass instance.
        InvalidSourceError: *values* is not a mapping.
        DecodeError: the first field that fails to decode.
    """
    config = config or get_default_config()
    namespace = tag or config.tag

    if not is_record(dst):
        raise InvalidTargetError(_type_name(dst), "not a dataclass instance")
    if is_frozen(dst):
        raise InvalidTargetError(_type_name(dst), "frozen dataclass")
    if not isinstance(values, Mapping):
        raise InvalidSourceError(_type_name(values))

    with LogContext.bind(record_type=_type_name(dst), tag_namespace=namespace):
        try:
            _decode_fields(values, dst, namespace, config)
        except DecodeError as exc:
            logger.warning(
                "decode_rejected",
                extra={"error_code": exc.code, "error": str(exc)},
            )
            raise
        except MapstructError:
            raise
        except Exception as exc:
            logger.error("decode_internal_fault", exc_info=True)
            raise InternalDecodeError(f"{type(exc).__name__}: {exc}") from exc


def _decode_fields(
    values: Mapping[str, Any],
    dst: Any,
    namespace: str,
    config: BinderConfig,
) -> None:
    for spec in describe(type(dst), namespace):
        if spec.is_embedded or not spec.visible or spec.excluded:
            continue

        key = spec.source_name
        if key in values:
            value = values[key]
        elif spec.option == OPTION_REQUIRED:
            raise MissingRequiredError(spec.name, key)
        elif is_default_option(spec.option):
            # Literal default text, coerced like any string input
            value = spec.option
            logger.debug(
                "field_default_applied",
                extra={"field": spec.name, "default": spec.option},
            )
        else:
            continue

        current = getattr(dst, spec.name, None)
        new = coerce_value(value, spec.shape, current, spec.name, config=config)
        _assign(dst, spec.name, new)


def _assign(dst: Any, name: str, value: Any) -> None:
    try:
        setattr(dst, name, value)
    except (AttributeError, TypeError) as exc:
        raise InternalNotAddressableError(name) from exc


def _type_name(obj: Any) -> str:
    return type(obj).__name__
