"""Typed value accessors.

Each accessor resolves a value path and converts the result, falling back to
the caller's default when the value is missing or cannot be converted.

Numbers are accepted in plain ASCII notation only: an optional sign, digits
and, for doubles, a fraction and exponent. Python-specific spellings such as
digit group underscores (``1_000``) or non-ASCII digits are not numbers here.
"""

from typing import Optional, Union

from slimxml.shared.config import DEFAULT_BUFFER_LENGTH
from slimxml.shared.logging import CorrelationLogger, get_logger
from slimxml.tree.document import XMLDocument
from slimxml.tree.node import Node

from .resolver import resolve_value

QuerySource = Union[XMLDocument, Node]

TRUE_LITERAL = "true"
FALSE_LITERAL = "false"

logger = get_logger(__name__, component="typed_accessors")


def _plain_number_text(text: str) -> Optional[str]:
    text = text.strip()
    if not text.isascii() or "_" in text:
        return None
    return text


def convert_int(text: str) -> Optional[int]:
    """Convert stored text to an integer, or None when it is not one."""
    number = _plain_number_text(text)
    if number is None:
        return None
    try:
        return int(number)
    except ValueError:
        return None


def convert_double(text: str) -> Optional[float]:
    """Convert stored text to a float, or None when it is not a number."""
    number = _plain_number_text(text)
    if number is None:
        return None
    try:
        return float(number)
    except ValueError:
        return None


def convert_bool(text: str) -> Optional[bool]:
    """Map exactly ``"true"``/``"false"``; anything else is None."""
    if text == TRUE_LITERAL:
        return True
    if text == FALSE_LITERAL:
        return False
    return None


def _lookup(
    source: QuerySource, path: str, log: Optional[CorrelationLogger]
) -> Optional[str]:
    if isinstance(source, XMLDocument):
        return resolve_value(path, source.require_root(), source.buffer_length, log)
    if isinstance(source, Node):
        return resolve_value(path, source, DEFAULT_BUFFER_LENGTH, log)
    raise TypeError(
        f"Expected XMLDocument or Node, got {type(source).__name__}"
    )


def get_string(
    source: QuerySource,
    path: str,
    default: Optional[str] = None,
    log: Optional[CorrelationLogger] = None,
) -> Optional[str]:
    """Return the value at ``path`` or ``default``."""
    value = _lookup(source, path, log)
    return default if value is None else value


def get_int(
    source: QuerySource,
    path: str,
    default: int = 0,
    log: Optional[CorrelationLogger] = None,
) -> int:
    """Return the value at ``path`` as an integer, or ``default``."""
    value = _lookup(source, path, log)
    if value is None:
        return default
    number = convert_int(value)
    if number is None:
        (log or logger).warning(
            "Value is not an integer, using default",
            extra={"path": path, "value": value, "default": default},
        )
        return default
    return number


def get_bool(
    source: QuerySource,
    path: str,
    default: bool = False,
    log: Optional[CorrelationLogger] = None,
) -> bool:
    """Return True/False for exactly ``"true"``/``"false"``, else ``default``."""
    value = _lookup(source, path, log)
    flag = None if value is None else convert_bool(value)
    return default if flag is None else flag


def get_double(
    source: QuerySource,
    path: str,
    default: float = 0.0,
    log: Optional[CorrelationLogger] = None,
) -> float:
    """Return the value at ``path`` as a float, or ``default``."""
    value = _lookup(source, path, log)
    if value is None:
        return default
    number = convert_double(value)
    if number is None:
        (log or logger).warning(
            "Value is not a number, using default",
            extra={"path": path, "value": value, "default": default},
        )
        return default
    return number
