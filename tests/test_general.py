"""Tests for the ready-made parsers."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from tagcomb.general import parse_bool, parse_comma_tags, parse_hello
from tagcomb.main import CombinedMismatch, Input, Mismatch, tag


def test_parse_hello() -> None:
    assert parse_hello("Hello, world!") == (", world!", "Hello")
    assert parse_hello("Hello, world!") == tag("Hello")("Hello, world!")


def test_parse_hello_mismatch() -> None:
    result = parse_hello("Goodbye")
    assert isinstance(result, Mismatch)
    assert result.expected == "Hello"


class TestParseBool:

    def test_true(self) -> None:
        result = parse_bool("true, 12345")
        assert result == (", 12345", True)
        assert result.value is True
        assert result.pos == (0, 4)

    def test_false(self) -> None:
        result = parse_bool("false, 12345")
        assert result == (", 12345", False)
        assert result.value is False

    def test_invalid(self) -> None:
        result = parse_bool("borked")
        assert not result
        assert isinstance(result, CombinedMismatch)

    def test_from_view_offset(self) -> None:
        assert parse_bool(Input("x=false", 2)) == ("", False)

    @given(rest=st.text())
    def test_consumes_only_the_literal(self, rest: str) -> None:
        assert parse_bool("true" + rest) == (rest, True)
        assert parse_bool("false" + rest) == (rest, False)

    @given(text=st.text(alphabet="truefals, ", max_size=12))
    def test_deterministic(self, text: str) -> None:
        assert parse_bool(text) == parse_bool(text)


class TestParseCommaTags:

    def test_hello_world(self) -> None:
        assert parse_comma_tags("Hello", "world")("Hello, world!") == ("!", ("Hello", "world"))

    def test_requires_comma_separator(self) -> None:
        result = parse_comma_tags("Hello", "world")("Hello world!")
        assert isinstance(result, Mismatch)
        assert result.expected == ", "

    def test_is_reusable(self) -> None:
        parser = parse_comma_tags("a", "b")
        assert parser("a, b") == ("", ("a", "b"))
        assert parser("a, b, c") == (", c", ("a", "b"))
