"""Tree layer for slimxml.

Key Components:
    Node: persistent tree element owning its children
    DocumentParser: state machine building a tree from tag tokens
    XMLDocument: parsed document handle with query helpers
"""

from .node import Node
from .builder import DocumentParser, ParserState, parse_stream
from .document import XMLDocument

__all__ = [
    "Node",
    "DocumentParser",
    "ParserState",
    "parse_stream",
    "XMLDocument",
]
