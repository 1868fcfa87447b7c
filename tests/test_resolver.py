"""Dot-path lookup, truthiness and output stringification."""

from __future__ import annotations

import math
from collections import ChainMap
from dataclasses import dataclass

import pytest

from motif.nodes import Text
from motif.template.resolver import (
    UNDEFINED,
    Fragment,
    is_absent,
    is_sequence,
    is_truthy,
    resolve_path,
    stringify,
)


@dataclass
class User:
    name: str
    _secret: str = "hidden"


class TestResolvePath:
    def test_nested_mapping(self) -> None:
        assert resolve_path({"a": {"b": {"c": 1}}}, "a.b.c") == 1

    def test_sequence_index_and_length(self) -> None:
        context = {"tags": ["x", "y"]}
        assert resolve_path(context, "tags.1") == "y"
        assert resolve_path(context, "tags.length") == 2
        assert resolve_path(context, "tags.5") is UNDEFINED
        assert resolve_path(context, "tags.first") is UNDEFINED

    def test_attribute_access(self) -> None:
        assert resolve_path({"user": User("Ada")}, "user.name") == "Ada"

    def test_private_attributes_hidden(self) -> None:
        assert resolve_path({"user": User("Ada")}, "user._secret") is UNDEFINED

    def test_missing_segments(self) -> None:
        assert resolve_path({}, "missing") is UNDEFINED
        assert resolve_path({"a": None}, "a.b") is UNDEFINED
        assert resolve_path({"a": {}}, "a.b.c") is UNDEFINED

    def test_dotted_key_tried_whole(self) -> None:
        assert resolve_path({"a.b": 1, "a": {"b": 2}}, "a.b") == 1

    def test_blank_path(self) -> None:
        assert resolve_path({"": 1}, "  ") is UNDEFINED

    def test_falsy_values_returned_as_is(self) -> None:
        context = {"zero": 0, "empty": "", "no": False}
        assert resolve_path(context, "zero") == 0
        assert resolve_path(context, "empty") == ""
        assert resolve_path(context, "no") is False

    def test_chainmap_layers(self) -> None:
        context = ChainMap({"name": "inner"}, {"name": "outer", "site": "s"})
        assert resolve_path(context, "name") == "inner"
        assert resolve_path(context, "site") == "s"

    def test_special_names(self) -> None:
        context = {"this": "item", "@index": 2, "$slots": {"header": "h"}}
        assert resolve_path(context, "this") == "item"
        assert resolve_path(context, "@index") == 2
        assert resolve_path(context, "$slots.header") == "h"


class TestTruthiness:
    @pytest.mark.parametrize(
        "value", [None, UNDEFINED, False, 0, 0.0, math.nan, "", [], (), Fragment((), {})]
    )
    def test_falsy(self, value: object) -> None:
        assert is_truthy(value) is False

    @pytest.mark.parametrize(
        "value", [True, 1, -1, 0.5, "0", "false", [0], {}, {"a": 1}, object(), Fragment((Text(1, 0, "x"),), {})]
    )
    def test_truthy(self, value: object) -> None:
        assert is_truthy(value) is True


class TestStringify:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, ""),
            (UNDEFINED, ""),
            (True, "true"),
            (False, "false"),
            (3, "3"),
            (2.0, "2"),
            (2.5, "2.5"),
            (["a", 1, None], "a,1,"),
            ("text", "text"),
        ],
    )
    def test_values(self, value: object, expected: str) -> None:
        assert stringify(value) == expected


def test_is_sequence_excludes_strings() -> None:
    assert is_sequence([1]) and is_sequence((1,))
    assert not is_sequence("ab")
    assert not is_sequence(b"ab")
    assert not is_sequence({"a": 1})


def test_is_absent() -> None:
    assert is_absent(None) and is_absent(UNDEFINED) and is_absent("")
    assert not is_absent(0)
    assert not is_absent(False)


def test_undefined_repr() -> None:
    assert repr(UNDEFINED) == "UNDEFINED"
    assert str(UNDEFINED) == ""
