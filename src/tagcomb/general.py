from __future__ import annotations

import tagcomb.const as const
from tagcomb.main import (
    Input,
    Mismatch,
    ParseFailure,
    Parser,
    Success,
    as_input,
    either,
    separated,
    tag,
    value,
)

# hand-written

def parse_hello(inp: Input | str) -> Success[str] | ParseFailure:
    """Matches `Hello` without going through `tag()`."""
    inp = as_input(inp)
    if inp.startswith(const.HELLO_LITERAL):
        tail = inp.advance(len(const.HELLO_LITERAL))
        return Success(tail, const.HELLO_LITERAL, (inp.pos, tail.pos))
    return Mismatch(inp.src, inp.pos, const.HELLO_LITERAL)

# composed

_bool_parser: Parser[bool] = either(
    value(tag(const.TRUE_LITERAL), True),
    value(tag(const.FALSE_LITERAL), False),
)

def parse_bool(inp: Input | str) -> Success[bool] | ParseFailure:
    """
    Matches `true` or `false`, in that order.

    Only the literal is consumed, anything after it (like a comma) is left alone.
    """
    return _bool_parser(inp)

def parse_comma_tags(tag1: str, tag2: str) -> Parser[tuple[str, str]]:
    """
    Parser factory.

    Matches `tag1`, then `, `, then `tag2`. The value is `(tag1, tag2)`.
    """
    return separated(tag(tag1), tag(const.COMMA_SEPARATOR), tag(tag2))
