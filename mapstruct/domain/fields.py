"""
Field descriptors for dataclass records.

Responsibility
--------------
Turns a dataclass type into the list of ``FieldSpec`` entries the decode and
encode pipelines walk: declared name, resolved source key, tag option, the
static shape of the field's type, and whether the field is embedded.

Invariants enforced
-------------------
* ``describe()`` is recomputed on every call. Nothing is cached, so a
  descriptor never outlives the conversion that asked for it.
* Field order is declaration order, as reported by ``dataclasses.fields()``.
* A field whose tag name is ``"-"`` is reported with ``excluded=True``.

Failure modes
-------------
* An annotation that cannot be resolved (a forward reference to a name
  that only exists under ``TYPE_CHECKING``) becomes an ``OTHER`` shape
  carrying the annotation text. Such a field still encodes; decode leaves
  it alone unless a value is supplied, which it then rejects.
"""

from __future__ import annotations

import dataclasses
import inspect
import sys
import types
from collections.abc import Callable
from dataclasses import MISSING, dataclass
from enum import Enum
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from mapstruct.domain.tags import DEFAULT_TAG, SKIP, parse_tag
from mapstruct.domain.types import Width

EMBEDDED_KEY = "mapstruct.embedded"


class FieldKind(str, Enum):
    """Static shape of a field's declared type."""

    STRING = "string"
    BOOL = "bool"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    BYTES = "bytes"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    RECORD = "record"
    REFERENCE = "reference"  # Optional[<dataclass>]
    ANY = "any"
    OTHER = "other"


NUMERIC_KINDS: frozenset[FieldKind] = frozenset(
    {FieldKind.INT, FieldKind.UINT, FieldKind.FLOAT}
)


@dataclass(frozen=True)
class TypeShape:
    """Kind plus the type details coercion needs."""

    kind: FieldKind
    annotation: Any = None
    type: Any = None  # python type, record class, or container class
    element: TypeShape | None = None  # SEQUENCE only
    width: Width | None = None
    optional: bool = False


@dataclass(frozen=True)
class FieldSpec:
    """One field of a record, as seen through a single tag namespace."""

    name: str  # Declared identifier
    source_name: str  # Key used for lookup (decode) or output (encode)
    option: str
    shape: TypeShape
    is_embedded: bool = False
    tag: str = ""

    @property
    def kind(self) -> FieldKind:
        return self.shape.kind

    @property
    def excluded(self) -> bool:
        return self.source_name == SKIP

    @property
    def visible(self) -> bool:
        return not self.name.startswith("_")


# -----------------------------------------------------------------------------
# Type analysis
# -----------------------------------------------------------------------------


def is_record_type(tp: Any) -> bool:
    return isinstance(tp, type) and dataclasses.is_dataclass(tp)


def is_record(obj: Any) -> bool:
    """True for dataclass instances (not dataclass types)."""
    return dataclasses.is_dataclass(obj) and not isinstance(obj, type)


def is_frozen(obj: Any) -> bool:
    params = getattr(type(obj), "__dataclass_params__", None)
    return bool(params is not None and params.frozen)


_SCALARS: dict[Any, FieldKind] = {
    str: FieldKind.STRING,
    bool: FieldKind.BOOL,
    int: FieldKind.INT,
    float: FieldKind.FLOAT,
    bytes: FieldKind.BYTES,
}


def shape_of(tp: Any) -> TypeShape:
    """Derive the ``TypeShape`` of a resolved type annotation."""
    origin = get_origin(tp)

    if origin is Annotated:
        base, *extras = get_args(tp)
        inner = shape_of(base)
        width = next((e for e in extras if isinstance(e, Width)), None)
        if width is None:
            return inner
        kind = inner.kind
        if kind in (FieldKind.INT, FieldKind.UINT):
            kind = FieldKind.INT if width.signed else FieldKind.UINT
        return dataclasses.replace(inner, kind=kind, width=width, annotation=tp)

    if tp is Any or tp is object:
        return TypeShape(FieldKind.ANY, annotation=tp)

    if tp in _SCALARS:
        return TypeShape(_SCALARS[tp], annotation=tp, type=tp)

    if origin is Union or origin is types.UnionType:
        args = get_args(tp)
        present = [a for a in args if a is not type(None)]
        if len(present) == 1 and len(present) < len(args):
            inner = shape_of(present[0])
            if inner.kind is FieldKind.RECORD:
                return TypeShape(
                    FieldKind.REFERENCE, annotation=tp, type=inner.type, optional=True
                )
            return dataclasses.replace(inner, annotation=tp, optional=True)
        return TypeShape(FieldKind.OTHER, annotation=tp)

    if tp is list or origin is list:
        args = get_args(tp)
        element = shape_of(args[0]) if args else TypeShape(FieldKind.ANY, annotation=Any)
        return TypeShape(FieldKind.SEQUENCE, annotation=tp, type=list, element=element)

    if tp is tuple or origin is tuple:
        args = get_args(tp)
        if not args:
            element = TypeShape(FieldKind.ANY, annotation=Any)
        elif len(args) == 2 and args[1] is Ellipsis:
            element = shape_of(args[0])
        else:
            # Fixed-length heterogeneous tuples are not sequences of one kind.
            return TypeShape(FieldKind.OTHER, annotation=tp)
        return TypeShape(FieldKind.SEQUENCE, annotation=tp, type=tuple, element=element)

    if tp is dict or origin is dict:
        return TypeShape(FieldKind.MAPPING, annotation=tp, type=dict)

    if is_record_type(tp):
        return TypeShape(FieldKind.RECORD, annotation=tp, type=tp)

    return TypeShape(FieldKind.OTHER, annotation=tp)


def type_hints(record_type: type) -> dict[str, Any]:
    """
    Resolved annotations of *record_type*, keyed by field name.

    Falls back to resolving one annotation at a time when the record as a
    whole does not resolve (typically a name imported under
    ``TYPE_CHECKING``). Annotations that still fail are left out, so the
    caller sees the raw annotation string instead.
    """
    try:
        return get_type_hints(record_type, include_extras=True)
    except NameError:
        pass

    hints: dict[str, Any] = {}
    for klass in reversed(record_type.__mro__):
        module = sys.modules.get(klass.__module__)
        globalns = dict(vars(module)) if module is not None else {}
        localns = dict(vars(klass))
        for name, annotation in inspect.get_annotations(klass).items():
            if not isinstance(annotation, str):
                hints[name] = annotation
                continue
            try:
                hints[name] = eval(annotation, globalns, localns)  # noqa: S307
            except (NameError, AttributeError, TypeError):
                hints.pop(name, None)
    return hints


# -----------------------------------------------------------------------------
# Descriptors
# -----------------------------------------------------------------------------


def describe(
    record_type: type,
    namespace: str = DEFAULT_TAG,
    *,
    fallback: Callable[[str], str] | None = None,
) -> list[FieldSpec]:
    """
    Build the field descriptor table of *record_type* for one tag namespace.

    Args:
        record_type: A dataclass type.
        namespace: Metadata key the tag grammar is read from.
        fallback: Maps the declared identifier to the key used when the tag
            name is empty. Defaults to the identifier unchanged.

    Returns:
        One ``FieldSpec`` per dataclass field, in declaration order.
    """
    hints = type_hints(record_type)
    specs: list[FieldSpec] = []
    for f in dataclasses.fields(record_type):
        tag = f.metadata.get(namespace, "")
        name, option = parse_tag(tag)
        if not name:
            name = fallback(f.name) if fallback else f.name
        specs.append(
            FieldSpec(
                name=f.name,
                source_name=name,
                option=option,
                shape=shape_of(hints.get(f.name, f.type)),
                is_embedded=bool(f.metadata.get(EMBEDDED_KEY, False)),
                tag=tag,
            )
        )
    return specs


def tagged(
    tag: str = "",
    *,
    namespace: str = DEFAULT_TAG,
    embedded: bool = False,
    tags: dict[str, str] | None = None,
    **field_kwargs: Any,
) -> Any:
    """
    ``dataclasses.field()`` carrying a mapstruct tag.

    >>> @dataclass
    ... class Args:
    ...     user_id: int = tagged("user_id,required", default=0)
    ...     labels: list[str] = tagged("labels", default_factory=list)
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    if tags:
        metadata.update(tags)
    if tag:
        metadata[namespace] = tag
    if embedded:
        metadata[EMBEDDED_KEY] = True
    return dataclasses.field(metadata=metadata, **field_kwargs)


def embedded(tag: str = "", **field_kwargs: Any) -> Any:
    """Mark a record-typed field as embedded (flattened into its parent)."""
    return tagged(tag, embedded=True, **field_kwargs)


# -----------------------------------------------------------------------------
# Zero values and allocation
# -----------------------------------------------------------------------------


def zero_value(shape: TypeShape) -> Any:
    """The empty value of *shape*: "", 0, False, empty container, or None."""
    if shape.optional:
        return None
    kind = shape.kind
    if kind is FieldKind.STRING:
        return ""
    if kind is FieldKind.BOOL:
        return False
    if kind in (FieldKind.INT, FieldKind.UINT):
        return 0
    if kind is FieldKind.FLOAT:
        return 0.0
    if kind is FieldKind.BYTES:
        return b""
    if kind is FieldKind.SEQUENCE:
        return shape.type()
    if kind is FieldKind.MAPPING:
        return {}
    if kind is FieldKind.RECORD:
        return new_record(shape.type)
    return None


def new_record(record_type: type) -> Any:
    """Allocate *record_type*, filling fields without defaults with zeros."""
    hints = type_hints(record_type)
    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(record_type):
        if f.init and f.default is MISSING and f.default_factory is MISSING:
            kwargs[f.name] = zero_value(shape_of(hints.get(f.name, f.type)))
    return record_type(**kwargs)
