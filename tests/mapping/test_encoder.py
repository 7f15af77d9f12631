"""Tests for the encode pipeline (record -> mapping)."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

import pytest

from mapstruct import embedded, encode, tagged
from mapstruct.config import BinderConfig
from mapstruct.domain.types import Float32, Uint8
from mapstruct.mapping.encoder import is_empty
from tests.deferred_records import Invoice
from tests.records import (
    Account,
    Audit,
    BookInfo,
    EncodeArgs,
    Order,
    Origin,
    Unresolvable,
)


@dataclass
class OmitArgs:
    text: str = tagged("text,omitempty", default="")
    count: int = tagged("count,omitempty", default=0)
    ratio: float = tagged("ratio,omitempty", default=0.0)
    flag: bool = tagged("flag,omitempty", default=False)
    items: list[int] = tagged("items,omitempty", default_factory=list)
    attrs: dict[str, int] = tagged("attrs,omitempty", default_factory=dict)
    ref: Optional[BookInfo] = tagged("ref,omitempty", default=None)
    nested: BookInfo = tagged("nested,omitempty", default_factory=BookInfo)


@dataclass
class StringArgs:
    i: int = tagged("i,string", default=0)
    u: Uint8 = tagged("u,string", default=0)
    f: float = tagged("f,string", default=0.0)
    f32: Float32 = tagged("f32,string", default=0.0)
    s: str = tagged("s,string", default="")
    b: bool = tagged("b,string", default=False)
    maybe: Optional[int] = tagged("maybe,string", default=None)


@dataclass
class Colliding:
    first: Audit = embedded(default_factory=Audit)
    second: Origin = embedded(default_factory=Origin)


@dataclass
class OwnKeyThenEmbedded:
    source: str = tagged("source", default="own")
    origin: Origin = embedded(default_factory=Origin)


@dataclass
class Untagged:
    UserName: str = ""
    Items: list[str] = field(default_factory=list)
    Blank: str = tagged(",omitempty", default="")


class TestEncodeBasics:
    def test_basic_record(self):
        args = EncodeArgs(
            Id=1001,
            Name="tim",
            IsOK=True,
            OmitEmpty="",
            Ignore="never mind",
            NoName="hello",
            StringInt=2001,
        )
        assert encode(args) == {
            "id": 1001,
            "name": "tim",
            "ok": True,
            "noname": "hello",
            "strint": "2001",
        }

    def test_untagged_fields_use_the_lowercased_identifier(self):
        assert encode(Untagged(UserName="a", Items=["x"])) == {"username": "a", "items": ["x"]}

    def test_skip_marker_is_never_written(self):
        out = encode(EncodeArgs(Ignore="x"))
        assert "-" not in out
        assert "Ignore" not in out
        assert "ignore" not in out

    def test_private_fields_are_invisible(self):
        assert encode(Account(login="tom")) == {"login": "tom"}

    def test_values_are_stored_unmodified(self):
        book = BookInfo(1, "x")
        out = encode(Account(login="tom", owner=book))
        assert out["owner"] is book

    def test_output_is_fresh_each_call(self):
        args = EncodeArgs()
        assert encode(args) is not encode(args)

    @pytest.mark.parametrize("src", [None, 5, "text", {"id": 1}, EncodeArgs])
    def test_non_records_yield_none(self, src):
        assert encode(src) is None

    def test_type_checking_only_import(self):
        assert encode(Invoice(number="A1", lines=2)) == {"number": "A1", "lines": 2}
        out = encode(Invoice(number="A2", amount=Decimal("9.50")))
        assert out["amount"] == Decimal("9.50")

    def test_unresolvable_annotation_still_encodes(self):
        assert encode(Unresolvable(thing=1)) == {"thing": 1}


class TestOmitEmpty:
    def test_zero_values_are_skipped(self):
        assert encode(OmitArgs()) == {"nested": BookInfo()}

    def test_non_zero_values_are_kept(self):
        args = OmitArgs(
            text="t",
            count=-1,
            ratio=0.5,
            flag=True,
            items=[0],
            attrs={"a": 0},
            ref=BookInfo(),
        )
        out = encode(args)
        assert out["text"] == "t"
        assert out["count"] == -1
        assert out["ratio"] == 0.5
        assert out["flag"] is True
        assert out["items"] == [0]
        assert out["attrs"] == {"a": 0}
        assert out["ref"] == BookInfo()

    def test_omitempty_with_empty_name(self):
        assert encode(Untagged()) == {"username": "", "items": []}
        assert encode(Untagged(Blank="b"))["blank"] == "b"

    @pytest.mark.parametrize(
        "value, empty",
        [
            (None, True),
            (False, True),
            (True, False),
            (0, True),
            (0.0, True),
            (3, False),
            ("", True),
            ("a", False),
            (b"", True),
            ([], True),
            ((), True),
            ({}, True),
            (set(), True),
            ([None], False),
            (BookInfo(), False),
        ],
    )
    def test_is_empty(self, value, empty):
        assert is_empty(value) is empty


class TestStringOption:
    def test_numbers_are_rendered(self):
        out = encode(StringArgs(i=-42, u=7, f=29.9, f32=1.0, s="s", b=True))
        assert out == {
            "i": "-42",
            "u": "7",
            "f": "29.90",
            "f32": "1.00",
            "s": "s",
            "b": True,
            "maybe": None,
        }

    def test_optional_number_is_rendered_when_set(self):
        assert encode(StringArgs(maybe=5))["maybe"] == "5"

    def test_float_precision_from_config(self):
        out = encode(StringArgs(f=1 / 3), config=BinderConfig(float_precision=4))
        assert out["f"] == "0.3333"

    def test_float_rounding(self):
        assert encode(StringArgs(f=2.675))["f"] == "2.67"
        assert encode(StringArgs(f=-0.004))["f"] == "-0.00"


class TestEmbedded:
    def test_embedded_records_are_flattened(self):
        order = Order(
            audit=Audit(created_by="ops", source="api"),
            origin=Origin(source="batch", region="eu"),
            id=7,
            total=12.5,
        )
        assert encode(order) == {
            "created_by": "ops",
            "source": "batch",
            "region": "eu",
            "id": 7,
            "total": "12.50",
        }

    def test_unset_embedded_reference_is_skipped(self):
        out = encode(Order(audit=Audit(source="api"), id=1))
        assert out == {"created_by": "", "source": "api", "id": 1, "total": "0.00"}
        assert "origin" not in out
        assert "audit" not in out

    def test_later_embedded_record_wins(self):
        out = encode(Colliding(first=Audit(source="first"), second=Origin(source="second")))
        assert out["source"] == "second"

    def test_embedded_overwrites_earlier_own_key(self):
        out = encode(OwnKeyThenEmbedded(origin=Origin(source="inner")))
        assert out == {"source": "inner", "region": ""}

    def test_embedded_uses_the_same_namespace(self):
        @dataclass
        class Inner:
            code: str = tagged("c", namespace="form", default="")

        @dataclass
        class Outer:
            inner: Inner = embedded(default_factory=Inner)
            name: str = tagged("n", namespace="form", default="")

        assert encode(Outer(Inner("x"), "y"), "form") == {"c": "x", "n": "y"}
        assert encode(Outer(Inner("x"), "y")) == {"code": "x", "name": "y"}


class TestEncodeLogging:
    def test_encode_is_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="mapstruct"):
            encode(EncodeArgs())
        records = [r for r in caplog.records if r.getMessage() == "record_encoded"]
        assert len(records) == 1
        assert records[0].key_count == 5
        assert records[0].levelno == logging.DEBUG
