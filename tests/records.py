"""
Record types shared by the mapstruct test suite.

Defined at module level so ``typing.get_type_hints`` can resolve their
annotations.
"""

from dataclasses import dataclass
from typing import Any, Optional

from mapstruct import (
    Float32,
    Int8,
    Int16,
    Int32,
    Uint,
    Uint8,
    embedded,
    tagged,
)


@dataclass
class BookInfo:
    id: int = tagged(tags={"json": "id"}, default=0)
    name: str = tagged(tags={"json": "name"}, default="")


@dataclass
class BasicArgs:
    Id: int = tagged("id,required", default=0)
    Name: str = tagged("name,required", default="")
    IsOK: bool = tagged("ok", default=False)
    Price: float = tagged("price", default=0.0)

    Ignore: str = tagged("-", default="")
    NoName: str = ""
    NoValue: int = tagged("novalue,1002", default=0)


@dataclass
class SliceArgs:
    tags: list[str] = tagged("tags", default_factory=list)
    ids: list[int] = tagged("ids", default_factory=list)
    things: list[Any] = tagged("things", default_factory=list)
    scores: tuple[float, ...] = tagged("scores", default=())


@dataclass
class JsonArgs:
    book: Optional[BookInfo] = tagged("book", default=None)
    books: list[Optional[BookInfo]] = tagged("books", default_factory=list)
    book_names: list[str] = tagged("booknames", default_factory=list)
    group: BookInfo = tagged("group", default_factory=BookInfo)


@dataclass
class WidthArgs:
    i8: Int8 = tagged("i8", default=0)
    i16: Int16 = tagged("i16", default=0)
    i32: Int32 = tagged("i32", default=0)
    u8: Uint8 = tagged("u8", default=0)
    u: Uint = tagged("u", default=0)
    f32: Float32 = tagged("f32", default=0.0)


@dataclass
class OptionalArgs:
    limit: Optional[int] = tagged("limit", default=None)
    label: Optional[str] = tagged("label", default=None)
    extra: dict[str, Any] = tagged("extra", default_factory=dict)
    blob: bytes = tagged("blob", default=b"")
    anything: Any = tagged("anything", default=None)


@dataclass
class EncodeArgs:
    Id: int = tagged("id", default=0)
    Name: str = tagged("name", default="")
    IsOK: bool = tagged("ok", default=False)
    OmitEmpty: str = tagged("empty,omitempty", default="")
    Ignore: str = tagged("-", default="")
    NoName: str = ""
    StringInt: int = tagged("strint,string", default=0)


@dataclass
class Audit:
    created_by: str = tagged("created_by", default="")
    source: str = tagged("source", default="")


@dataclass
class Origin:
    source: str = tagged("source", default="")
    region: str = tagged("region", default="")


@dataclass
class Order:
    audit: Audit = embedded(default_factory=Audit)
    origin: Optional[Origin] = embedded(default=None)
    id: int = tagged("id", default=0)
    total: float = tagged("total,string", default=0.0)


@dataclass
class Account:
    _secret: str = "hidden"
    login: str = tagged("login", default="")
    owner: Optional[BookInfo] = tagged("owner,omitempty", default=None)


@dataclass
class StringArgsForConfig:
    ids: list[int] = tagged("ids_map", default_factory=list, tags={"form": "ids"})
    ratio: float = tagged("ratio_map", default=0.0, tags={"form": "ratio,string"})


@dataclass(frozen=True)
class FrozenPoint:
    x: int = tagged("x", default=0)


@dataclass
class Unresolvable:
    thing: "DoesNotExist" = tagged("thing", default=None)  # noqa: F821
