"""Parsed document handle.

``XMLDocument`` owns the root node of one parsed document together with the
information gathered while loading it. Queries are delegated to the path
resolvers and typed accessors in ``slimxml.query``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

from slimxml.shared.config import DEFAULT_BUFFER_LENGTH
from slimxml.shared.errors import InvalidOperationError
from slimxml.shared.result import ParseMetrics

from .node import Node


@dataclass
class XMLDocument:
    """A parsed document: the root node plus load metadata.

    Attributes:
        root: Root node of the tree (None once the document is closed)
        source: Where the document was read from
        metrics: Counters collected while parsing
        correlation_id: Correlation ID of the load operation
        declaration: The XML declaration line, if one was read
        buffer_length: Capacity used for path segments in queries
    """

    root: Optional[Node]
    source: str = "<string>"
    metrics: ParseMetrics = field(default_factory=ParseMetrics)
    correlation_id: Optional[str] = None
    declaration: Optional[str] = None
    buffer_length: int = DEFAULT_BUFFER_LENGTH

    def require_root(self) -> Node:
        """Return the root node.

        Raises:
            InvalidOperationError: the document has been closed
        """
        if self.root is None:
            raise InvalidOperationError(f"Document {self.source} has been closed")
        return self.root

    def get_value(self, path: str) -> Optional[str]:
        """Resolve a value path (``a/b$`` or ``a/b:attr``) from the root."""
        # Import here to avoid circular dependency
        from slimxml.query.resolver import resolve_value

        return resolve_value(path, self.require_root(), self.buffer_length)

    def find(self, path: str, start: Optional[Node] = None) -> Optional[Node]:
        """Resolve a node-search path.

        The search starts at ``start`` when given, otherwise at the root, so
        paths name the root first like value paths do:
        ``find("catalog/item?id=2")``.
        """
        # Import here to avoid circular dependency
        from slimxml.query.resolver import resolve_node

        if start is None:
            start = self.require_root()
        return resolve_node(path, start, self.buffer_length)

    def get_string(self, path: str, default: Optional[str] = None) -> Optional[str]:
        from slimxml.query.accessors import get_string

        return get_string(self, path, default)

    def get_int(self, path: str, default: int = 0) -> int:
        from slimxml.query.accessors import get_int

        return get_int(self, path, default)

    def get_bool(self, path: str, default: bool = False) -> bool:
        from slimxml.query.accessors import get_bool

        return get_bool(self, path, default)

    def get_double(self, path: str, default: float = 0.0) -> float:
        from slimxml.query.accessors import get_double

        return get_double(self, path, default)

    def iter_nodes(self) -> Iterator[Node]:
        """Pre-order traversal of the whole tree."""
        return self.require_root().iter()

    @property
    def is_closed(self) -> bool:
        return self.root is None

    def close(self) -> None:
        """Destroy the tree. Closing twice is a no-op."""
        if self.root is not None:
            root, self.root = self.root, None
            root.destroy()

    def __enter__(self) -> "XMLDocument":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def to_dict(self) -> Dict[str, Any]:
        """Convert document to dictionary representation."""
        return {
            "source": self.source,
            "declaration": self.declaration,
            "correlation_id": self.correlation_id,
            "root": self.root.to_dict() if self.root is not None else None,
            "metrics": self.metrics.to_dict(),
        }
