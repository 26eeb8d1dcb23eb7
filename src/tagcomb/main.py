"""
The implementations of the main classes and combinators.
"""

from __future__ import annotations
from typing import overload, Literal, TypeVar, Generic, Final, Protocol, Self

from collections.abc import Iterator


_T = TypeVar("_T")
_LeftT = TypeVar("_LeftT")
_RightT = TypeVar("_RightT")
_DataCovT = TypeVar("_DataCovT", covariant=True)



class Input:
    """
    An immutable view into a string.

    Consuming input creates a new view over the same source string, so `advance()` never copies.

    ```
    inp = Input("Hello, world!")
    tail = inp.advance(5)
    tail == ", world!"      # True
    inp == "Hello, world!"  # Still True, views are never modified.
    ```
    """
    __slots__ = ("src", "pos")

    def __init__(self, src: str, pos: int = 0) -> None:
        if not 0 <= pos <= len(src):
            raise ValueError(f"Position {pos} is outside of the source string (length {len(src)}).")
        self.src: Final[str] = src
        """The string that's being parsed."""
        self.pos: Final[int] = pos
        """The start of the unconsumed part."""

    def __len__(self) -> int:
        """The amount of characters left."""
        return len(self.src) - self.pos

    def __bool__(self) -> bool:
        """Whether there are any characters left to parse."""
        return self.pos < len(self.src)

    def has_chars(self, amount: int) -> bool:
        """Whether there are at least that many characters left."""
        return self.pos+amount <= len(self.src)

    def startswith(self, value: str) -> bool:
        """Whether the unconsumed part starts with the given string. Case sensitive."""
        return self.src.startswith(value, self.pos)

    def advance(self, amount: int) -> Input:
        """Returns a view with `amount` more characters consumed."""
        if not self.has_chars(amount):
            raise ValueError(f"Can't advance {amount} characters, only {len(self)} left.")
        return Input(self.src, self.pos+amount)

    def get_string(self, end: Input) -> str:
        """The text between this view and a later view of the same source."""
        return self.src[self.pos : end.pos]

    def rest(self) -> str:
        """The unconsumed text."""
        return self.src[self.pos:]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Input):
            return len(other) == len(self) and self.src.startswith(other.rest(), self.pos)
        elif isinstance(other, str):
            return self.src.startswith(other, self.pos) and len(other) == len(self)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.rest())

    def __repr__(self) -> str:
        return f"Input({self.rest()!r}, pos={self.pos})"


def as_input(inp: Input | str) -> Input:
    """Wraps a string into an `Input`. Views are returned as-is."""
    if isinstance(inp, Input):
        return inp
    return Input(inp)



class PosNote:
    """
    Positioned note.

    For `ParseError`s and `ParseFailure`s.
    """
    def __init__(self, pos: int, msg: str | None = None) -> None:
        self.pos: int = pos
        self.msg: str | None = msg

class ParseFailure:
    """
    When returned from a parser, indicates that it has failed to match. Recoverable: combinators such as `either()` may try something else.

    Can be converted into a `ParseError` to abort the whole parse.

    All failures compare equal to each other, their contents are informational only.

    ```
    r = parser(inp)
    if r:
        ... # `r` is a `Success` object
    else:
        ... # `r` is a `ParseFailure` object
    ```
    """

    def __init__(self, src: str, pos: int, msg: str | None = None, notes: list[PosNote] | None = None) -> None:
        """
        `src`: The string that was being parsed.
        `pos`: The position of the failure.
        `msg`: The reason for the failure.
        `notes`: Positioned notes to add to the error. Should be in reverse order. That is, the note that's last in the list will be shown above the other notes.
        """
        self.src: str = src
        self.pos: int = pos
        self.msg: str | None = msg
        self.notes: list[PosNote] = [] if notes is None else notes
        """Should be in reverse order. That is, the note that's last in the list will be shown above the other notes."""

    def prepend_pos_note(self, pos: int, msg: str | None = None) -> Self:
        """Appends a note to the top of the other notes."""
        self.notes.append(PosNote(pos, msg))
        return self

    def error(self) -> ParseError:
        """Converts this to a ParseError."""
        return ParseError(self.src, self.pos, self.msg, self.notes)

    def __bool__(self) -> Literal[False]:
        return False

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ParseFailure):
            return True
        return NotImplemented

    def __hash__(self) -> int:
        return hash(ParseFailure)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.pos}>" + ("" if self.msg is None else f" {{{self.msg}}}")

class Mismatch(ParseFailure):
    """The input doesn't start with the expected literal."""

    def __init__(self, src: str, pos: int, expected: str, notes: list[PosNote] | None = None) -> None:
        super().__init__(src, pos, f"Expected `{expected}`.", notes)
        self.expected: Final[str] = expected

class CombinedMismatch(ParseFailure):
    """
    None of the alternatives matched.

    Keeps both of the underlying failures, in the order they were tried.
    """

    def __init__(self, left: ParseFailure, right: ParseFailure) -> None:
        # left is shown above right
        notes = [PosNote(right.pos, right.msg), PosNote(left.pos, left.msg)]
        super().__init__(left.src, min(left.pos, right.pos), "None of the alternatives matched.", notes)
        self.left: Final[ParseFailure] = left
        self.right: Final[ParseFailure] = right

    def alternatives(self) -> tuple[ParseFailure, ...]:
        """The underlying failures, with nested combinations flattened. In the order they were tried."""
        out: list[ParseFailure] = []
        for failure in (self.left, self.right):
            if isinstance(failure, CombinedMismatch):
                out.extend(failure.alternatives())
            else:
                out.append(failure)
        return tuple(out)

class ParseError(Exception):
    """
    The exception that's raised when a parser encounters an unrecoverable error.

    Unlike a `ParseFailure`, it's never caught by the combinators, so it aborts the whole parse.
    """

    def __init__(self, src: str, pos: int, msg: str | None = None, notes: list[PosNote] | None = None) -> None:
        """
        `src`: The string that was being parsed.
        `pos`: The position of the error.
        `msg`: The reason for the error.
        `notes`: Positioned notes to add to the error. Should be in reverse order. That is, the note that's last in the list will be shown above the other notes.
        """
        if msg is None:
            super().__init__()
        else:
            super().__init__(msg)
        self.src = src
        self.pos = pos
        self.append_pos_note(pos)
        for note in reversed(notes or []):
            self.append_existing_note(note)

    def append_pos_note(self, pos: int, msg: str | None = None) -> Self:
        note: list[str] = [] if msg is None else [msg]

        pos = min(pos, len(self.src))
        # should still work with CRLF
        line = self.src.count("\n", 0, pos) + 1
        column = pos - self.src.rfind("\n", 0, pos) # works even when it returns -1
        note.append(f"At position {pos} (line {line}, column {column})")

        # same line breaks as the line count
        lines = self.src.split("\n")
        if len(lines) > line-1:
            line_str = lines[line-1].removesuffix("\r")
            if len(line_str) >= column:
                if column <= 20:
                    note.append(f"{line_str[:40]}\n{' '*(column-1)}^")
                else:
                    note.append(f"{line_str[(column-20):(column+20)]}\n{' '*19}^")
        self.add_note("\n".join(note))
        return self

    def append_existing_note(self, note: PosNote) -> Self:
        return self.append_pos_note(note.pos, note.msg)



class Success(Generic[_DataCovT]):
    """
    When returned from a parser, indicates that it has succeeded.

    Unpacks into the remaining input and the parsed value:
    ```
    r = parser(inp)
    if r:
        tail, value = r
    ```

    Compares equal to a `(remaining, value)` tuple, where `remaining` may be a string.
    """
    def __init__(self, remaining: Input, value: _DataCovT, pos: tuple[int, int] | None = None) -> None:
        self.remaining: Final[Input] = remaining
        """The unconsumed input."""
        self.value: Final[_DataCovT] = value
        self.pos: Final[tuple[int, int] | None] = pos
        """The consumed range."""

    def with_value(self, value: _T) -> Success[_T]:
        """Creates a copy of this result with the provided value."""
        return Success(self.remaining, value, self.pos)

    def __iter__(self) -> Iterator[object]:
        yield self.remaining
        yield self.value

    def __bool__(self) -> Literal[True]:
        return True

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Success):
            return self.remaining == other.remaining and self.value == other.value
        elif isinstance(other, tuple):
            return (self.remaining, self.value) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.remaining, self.value))

    def __repr__(self) -> str:
        return (
            (
                "<success>"
                if self.pos is None else
                f"<success {self.pos[0]}..{self.pos[1]}>"
            )
            + f" {{{self.value!r}}} rest={self.remaining.rest()!r}"
        )


ParseResult = Success[_T] | ParseFailure


class Parser(Protocol[_DataCovT]):
    """
    A protocol for parsers.

    Takes an `Input` (or a string, which is wrapped with `as_input()`), returns a `Success` or a `ParseFailure`.

    Parsers must not keep state between calls. Unrecoverable errors are raised as `ParseError`.
    """
    def __call__(self, inp: Input | str, /) -> Success[_DataCovT] | ParseFailure: ...

@overload
def convert_factory_parameter(parser: str) -> Parser[str]: ...
@overload
def convert_factory_parameter(parser: Parser[_T]) -> Parser[_T]: ...

def convert_factory_parameter(parser: Parser | str) -> Parser:
    """Strings are shorthand for `tag(...)`."""
    if isinstance(parser, str):
        return tag(parser)
    else:
        assert callable(parser)
        return parser


def parse(parser: Parser[_T], src: Input | str) -> Success[_T] | ParseFailure:
    """Applies the parser to a string or an `Input`."""
    return parser(as_input(src))



def tag(literal: str) -> Parser[str]:
    """
    Parser factory.

    Matches the literal at the start of the input, case sensitive. The value is the matched text.

    An empty literal always matches without consuming anything.
    """
    def parse_tag(inp: Input | str) -> Success[str] | ParseFailure:
        inp = as_input(inp)
        if not inp.startswith(literal):
            return Mismatch(inp.src, inp.pos, literal)
        tail = inp.advance(len(literal))
        return Success(tail, inp.get_string(tail), (inp.pos, tail.pos))
    return parse_tag

def separated(
    first: Parser[_LeftT] | str,
    separator: Parser[object] | str,
    second: Parser[_RightT] | str,
) -> Parser[tuple[_LeftT, _RightT]]:
    """
    Parser factory.

    Matches `first`, `separator` and `second` in sequence. The value is the pair of the first and the second values, the separator's value is discarded.

    The first failure is returned as-is. Nothing is retried.
    """
    first_parser = convert_factory_parameter(first)
    separator_parser = convert_factory_parameter(separator)
    second_parser = convert_factory_parameter(second)
    def parse_separated(inp: Input | str) -> Success[tuple[_LeftT, _RightT]] | ParseFailure:
        inp = as_input(inp)
        if not (r1 := first_parser(inp)):
            return r1
        if not (rs := separator_parser(r1.remaining)):
            return rs
        if not (r2 := second_parser(rs.remaining)):
            return r2
        return Success(r2.remaining, (r1.value, r2.value), (inp.pos, r2.remaining.pos))
    return parse_separated

def either(choice1: Parser[_T] | str, choice2: Parser[_T] | str) -> Parser[_T]:
    """
    Parser factory.

    Attempts `choice1`, then `choice2` on the same input if the first one failed. If neither matches, fails with a `CombinedMismatch`.

    A `ParseError` raised by `choice1` is not caught, so `choice2` isn't attempted.
    """
    parser1 = convert_factory_parameter(choice1)
    parser2 = convert_factory_parameter(choice2)
    def parse_either(inp: Input | str) -> Success[_T] | ParseFailure:
        inp = as_input(inp)
        if (r1 := parser1(inp)):
            return r1
        if (r2 := parser2(inp)):
            return r2
        return CombinedMismatch(r1, r2)
    return parse_either

def value(parser: Parser[object] | str, result: _T) -> Parser[_T]:
    """
    Parser factory.

    Replaces the value of the parser with `result` if it matched.
    """
    inner = convert_factory_parameter(parser)
    def parse_value(inp: Input | str) -> Success[_T] | ParseFailure:
        if not (r := inner(inp)):
            return r
        return r.with_value(result)
    return parse_value

def cut(parser: Parser[_T] | str) -> Parser[_T]:
    """
    Parser factory.

    Makes the failures of the parser unrecoverable by raising them as a `ParseError`.

    ```
    either(cut("true"), "false")("false")   # raises, "false" is never attempted
    ```
    """
    inner = convert_factory_parameter(parser)
    def parse_cut(inp: Input | str) -> Success[_T]:
        if not (r := inner(inp)):
            raise r.error()
        return r
    return parse_cut
