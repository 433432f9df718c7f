"""Attributes, attribute lists and the attribute reader.

An ``AttributeList`` keeps every attribute of a tag or node. ``add`` always
prepends, so traversal order is the reverse of insertion order; moving the
attributes of a tag into a node with ``pop_first``/``add`` therefore restores
source order on the node. Duplicate names are accepted and lookups return the
first match in traversal order.
"""

from collections import deque
from typing import Deque, Iterator, List, Optional, Tuple

from slimxml.character import EOF, CharacterStream
from slimxml.shared.errors import (
    InvalidOperationError,
    MalformedTagError,
    UnexpectedEndOfInputError,
)

from .buffer import ScratchBuffer

# Characters that can never appear inside an attribute name
_NAME_TERMINATORS = frozenset("<>/\"")


class Attribute:
    """A single name/value pair."""

    __slots__ = ("_name", "_value")

    def __init__(self, name: str = "", value: str = "") -> None:
        self.name = name
        self.value = value

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        if name is None:
            raise ValueError("Attribute name cannot be None")
        if not isinstance(name, str):
            raise TypeError("Attribute name must be a string")
        self._name = name

    @property
    def value(self) -> str:
        return self._value

    @value.setter
    def value(self, value: str) -> None:
        if value is None:
            raise ValueError("Attribute value cannot be None")
        if not isinstance(value, str):
            raise TypeError("Attribute value must be a string")
        self._value = value

    def copy_from(self, other: "Attribute") -> None:
        """Overwrite this attribute's name and value in place."""
        self.name = other.name
        self.value = other.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Attribute):
            return NotImplemented
        return self._name == other._name and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._name, self._value))

    def __repr__(self) -> str:
        return f"Attribute({self._name!r}, {self._value!r})"


class AttributeList:
    """Attributes owned by one tag or node."""

    def __init__(self) -> None:
        self._items: Deque[Attribute] = deque()

    def add(self, attr: Attribute) -> None:
        """Prepend an attribute."""
        if not isinstance(attr, Attribute):
            raise TypeError("Only Attribute instances can be added")
        self._items.appendleft(attr)

    def pop_first(self) -> Attribute:
        """Detach and return the first attribute."""
        if not self._items:
            raise InvalidOperationError("Nothing to detach from attribute list")
        return self._items.popleft()

    def transfer_to(self, target: "AttributeList") -> None:
        """Move every attribute into ``target`` without copying."""
        while self._items:
            target.add(self.pop_first())

    def find(self, name: str) -> Optional[Attribute]:
        """Return the first attribute called ``name``."""
        for attr in self._items:
            if attr.name == name:
                return attr
        return None

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        attr = self.find(name)
        return attr.value if attr is not None else default

    def matches(self, name: str, value: str) -> bool:
        """Check whether any attribute has exactly this name and value."""
        return any(attr.name == name and attr.value == value for attr in self._items)

    def clear(self) -> None:
        self._items.clear()

    def to_list(self) -> List[Tuple[str, str]]:
        """Name/value pairs in traversal order."""
        return [(attr.name, attr.value) for attr in self._items]

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"AttributeList({self.to_list()!r})"


def read_attribute(stream: CharacterStream, buffer_length: int) -> Attribute:
    """Read one ``name="value"`` pair from the stream.

    The stream must be positioned on the first character of the name.

    Raises:
        MalformedTagError: missing ``="`` pairing or invalid name character
        UnexpectedEndOfInputError: the stream ended inside the attribute
        BufferOverflowError: name or value longer than ``buffer_length``
    """
    buffer = ScratchBuffer(buffer_length, "attribute name")

    char = stream.read()
    while char != "=":
        if char == EOF:
            raise UnexpectedEndOfInputError(
                "Reached end of input while reading attribute name", stream.position
            )
        if char in _NAME_TERMINATORS or char.isspace():
            raise MalformedTagError(
                f"Unexpected character {char!r} in attribute name", stream.position
            )
        buffer.append(char, stream.position)
        char = stream.read()

    name = buffer.take()
    if not name:
        raise MalformedTagError("Attribute without a name", stream.position)

    quote = stream.read()
    if quote != '"':
        if quote == EOF:
            raise UnexpectedEndOfInputError(
                "Reached end of input before attribute value", stream.position
            )
        raise MalformedTagError(
            f"Attribute {name!r} value must be enclosed in double quotes",
            stream.position,
        )

    buffer.label = "attribute value"
    char = stream.read()
    while char != '"':
        if char == EOF:
            raise UnexpectedEndOfInputError(
                f"Reached end of input inside value of attribute {name!r}",
                stream.position,
            )
        buffer.append(char, stream.position)
        char = stream.read()

    return Attribute(name, buffer.take())
