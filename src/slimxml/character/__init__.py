"""Character stream layer for slimxml.

Key Components:
    CharacterStream: forward-only reader with lookahead and position tracking
    EOF: end-of-input sentinel returned by ``read`` and ``peek``
"""

from .stream import EOF, CharacterStream, InputType

__all__ = [
    "EOF",
    "CharacterStream",
    "InputType",
]
