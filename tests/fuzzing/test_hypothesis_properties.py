"""
Hypothesis-based property tests for the binder.

Properties checked here:
- Tag parsing is total and splits on the first comma only
- Scalar text round-trips: str(x) decodes back to x for int/float/bool
- Comma lists decode to the parts, in order
- required fields fail when absent, whatever else is present
- decode(encode(x)) reproduces x for records without omitempty/string
- omitempty keeps exactly the non-zero fields
"""

from dataclasses import dataclass

import pytest
from hypothesis import assume, given, settings
from hypothesis import strategies as st

from mapstruct import decode, encode, tagged
from mapstruct.domain.fields import shape_of
from mapstruct.domain.tags import parse_tag
from mapstruct.exceptions import MissingRequiredError
from mapstruct.mapping.coercion import coerce_string, parse_bool, parse_float, parse_int
from mapstruct.mapping.encoder import is_empty
from tests.records import BasicArgs, BookInfo


@dataclass
class Profile:
    id: int = tagged("id", default=0)
    name: str = tagged("name", default="")
    active: bool = tagged("active", default=False)
    score: float = tagged("score", default=0.0)
    tags: list[str] = tagged("tags", default_factory=list)
    book: BookInfo = tagged("book", default_factory=BookInfo)


@dataclass
class Sparse:
    name: str = tagged("name,omitempty", default="")
    count: int = tagged("count,omitempty", default=0)
    items: list[int] = tagged("items,omitempty", default_factory=list)


_words = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",), blacklist_characters=","),
    min_size=1,
    max_size=12,
).filter(lambda s: s.strip() == s and s != "")


class TestTagProperties:
    @given(st.text(max_size=40))
    def test_parse_tag_is_total(self, tag):
        name, option = parse_tag(tag)
        assert "," not in name
        assert (name + "," + option if "," in tag else name) == tag

    @given(_words, st.text(max_size=20))
    def test_option_is_everything_after_first_comma(self, name, option):
        assert parse_tag(f"{name},{option}") == (name, option)


class TestScalarProperties:
    @given(st.integers())
    def test_int_text_round_trip(self, value):
        assert parse_int(str(value)) == value

    @given(st.floats(allow_nan=False))
    def test_float_text_round_trip(self, value):
        assert parse_float(repr(value)) == value

    @given(st.booleans(), st.sampled_from([str.lower, str.upper, str.title]))
    def test_bool_text_round_trip(self, value, case):
        assert parse_bool(case(str(value))) is value

    @given(st.lists(_words, min_size=1, max_size=8))
    def test_comma_lists_keep_order(self, parts):
        assume(not (parts[0].startswith("[") and parts[-1].endswith("]")))
        assert coerce_string(",".join(parts), shape_of(list[str])) == parts

    @given(st.lists(st.integers(min_value=-(10**12), max_value=10**12), min_size=1, max_size=8))
    def test_int_lists(self, values):
        text = ",".join(str(v) for v in values)
        assert coerce_string(text, shape_of(list[int])) == values


class TestDecodeProperties:
    @given(st.dictionaries(st.text(max_size=8), st.integers(), max_size=6))
    def test_required_fields_fail_when_absent(self, values):
        values.pop("name", None)
        values["id"] = 1
        with pytest.raises(MissingRequiredError):
            decode(values, BasicArgs())

    @settings(max_examples=60)
    @given(
        st.integers(min_value=-(2**63), max_value=2**63 - 1),
        st.text(max_size=20),
        st.booleans(),
        st.floats(allow_nan=False, allow_infinity=False),
        st.lists(st.text(max_size=6), max_size=5),
        st.integers(min_value=0, max_value=10**6),
        st.text(max_size=10),
    )
    def test_encode_decode_round_trip(self, id_, name, active, score, tags, book_id, book_name):
        original = Profile(
            id=id_,
            name=name,
            active=active,
            score=score,
            tags=tags,
            book=BookInfo(book_id, book_name),
        )
        restored = Profile()
        decode(encode(original), restored)
        assert restored == original


class TestEncodeProperties:
    @given(st.text(max_size=5), st.integers(min_value=-3, max_value=3), st.lists(st.integers(), max_size=3))
    def test_omitempty_keeps_exactly_non_zero_fields(self, name, count, items):
        out = encode(Sparse(name=name, count=count, items=items))
        expected = {
            key: value
            for key, value in (("name", name), ("count", count), ("items", items))
            if not is_empty(value)
        }
        assert out == expected
