"""
Literals used by the ready-made parsers.
"""

from __future__ import annotations
from typing import Final

HELLO_LITERAL: Final[str] = "Hello"
TRUE_LITERAL: Final[str] = "true"
FALSE_LITERAL: Final[str] = "false"
COMMA_SEPARATOR: Final[str] = ", "
