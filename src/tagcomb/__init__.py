"""
Small parser combinators over immutable string views.

A parser takes an `Input` (or a plain string) and returns either a `Success` holding the remaining input and a value, or a `ParseFailure`.

See the `tagcomb.general` module for ready-made parsers you can use as examples.

Defining parsers:
```
def foo(inp: Input | str) -> Success[int] | ParseFailure:
    inp = as_input(inp)
    if not (r := tag("abc")(inp)):
        return r                        # fail, recoverable
    if r.remaining.startswith("!"):
        raise ParseError(inp.src, r.remaining.pos, "Unexpected `!`.")   # error, aborts everything
    return r.with_value(10)             # success
```

Using parsers:
```
result = separated("Hello", ", ", "world")("Hello, world!")
if result:
    tail, value = result    # `result` is a `Success` object
else:
    ...                     # `result` is a `ParseFailure` object
```
"""

import tagcomb.const as const
import tagcomb.main
from tagcomb.main import (
    Input,
    PosNote,
    ParseFailure,
    Mismatch,
    CombinedMismatch,
    ParseError,
    Success,
    ParseResult,
    Parser,
    as_input,
    parse,
    tag,
    separated,
    either,
    value,
    cut,
)
import tagcomb.general as general
from tagcomb.general import (
    parse_hello,
    parse_bool,
    parse_comma_tags,
)
