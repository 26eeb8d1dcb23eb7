"""
Runs the example parsers against a fixed message and logs every result.

```
python -m tagcomb
```
"""

from __future__ import annotations
from typing import Final, TypeVar

import logging
import sys

from tagcomb.main import ParseError, ParseFailure, Success, either, separated, tag
from tagcomb.general import parse_bool, parse_comma_tags, parse_hello

_T = TypeVar("_T")

MESSAGE: Final[str] = "Hello, world!"

log = logging.getLogger("tagcomb")


def setup_logging(level: int = logging.DEBUG) -> None:
    fmt = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")

    root = logging.getLogger()
    root.setLevel(level)

    # don't duplicate handlers when called again
    if root.handlers:
        root.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(fmt)
    root.addHandler(console_handler)


def show(expr: str, result: Success[_T] | ParseFailure) -> Success[_T]:
    """Logs a successful result. Failures are raised."""
    if not result:
        raise result.error()
    log.debug("%s = %r", expr, result)
    return result


def run(message: str = MESSAGE) -> None:
    show("parse_hello(msg)", parse_hello(message))
    show('tag("Hello")(msg)', tag("Hello")(message))
    show('parse_comma_tags("Hello", "world")(msg)', parse_comma_tags("Hello", "world")(message))
    show(
        'separated(tag("Hello"), tag(", "), tag("world"))(msg)',
        separated(tag("Hello"), tag(", "), tag("world"))(message),
    )
    show('parse_bool("true, 12345")', parse_bool("true, 12345"))
    show('either(tag("true"), tag("false"))("false, 54321")', either(tag("true"), tag("false"))("false, 54321"))


def main(message: str = MESSAGE) -> int:
    setup_logging()
    try:
        run(message)
    except ParseError as e:
        log.error("Parsing failed: %s\n%s", e, "\n".join(getattr(e, "__notes__", [])))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
