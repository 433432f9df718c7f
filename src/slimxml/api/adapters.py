"""Integration adapters for slimxml trees.

Converts parsed trees into the element model of established XML libraries
so they can be processed with XPath, serialization and schema tools.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Union

from slimxml.shared import ConversionError, InvalidOperationError, get_logger
from slimxml.tree import Node, XMLDocument

ConvertibleType = Union[XMLDocument, Node]


class AdapterType(Enum):
    """Types of integration adapters."""

    XML_LIBRARY = auto()     # XML processing libraries (lxml)


@dataclass
class AdapterMetadata:
    """Metadata about an integration adapter."""

    name: str
    version: str
    adapter_type: AdapterType
    target_library: str
    supported_versions: List[str]
    description: str
    author: str = "slimxml"


@dataclass
class ConversionResult:
    """Result of a conversion operation."""

    converted_data: Any
    original_data: Any
    conversion_time_ms: float
    metadata: Dict[str, Any] = field(default_factory=dict)


class LxmlAdapter:
    """Adapter converting slimxml trees into ``lxml.etree`` elements.

    Node values become element text. When a node carries several attributes
    with the same name, the first one in traversal order is the one kept,
    matching the first-match rule of ``:attr`` value paths.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize the adapter.

        Args:
            correlation_id: Optional correlation ID for request tracking
        """
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)

    @property
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""
        return AdapterMetadata(
            name="lxml",
            version="1.0.0",
            adapter_type=AdapterType.XML_LIBRARY,
            target_library="lxml",
            supported_versions=["4.0+"],
            description="Conversion from slimxml trees to lxml.etree",
        )

    def is_available(self) -> bool:
        """Check if lxml is available."""
        try:
            import lxml.etree  # noqa: F401
            return True
        except ImportError:
            return False

    def to_target(self, source: ConvertibleType) -> ConversionResult:
        """Convert a document or subtree to an ``lxml.etree`` element.

        Args:
            source: Parsed document or any node of a tree

        Returns:
            ConversionResult holding the root ``lxml.etree._Element``

        Raises:
            InvalidOperationError: the document is closed or the node destroyed
            ConversionError: lxml rejects a name or string, such as the
                prefixed tag ``ns:a`` or the digit-leading ``1b``
        """
        import lxml.etree as ET

        start_time = time.time()
        if isinstance(source, XMLDocument):
            if source.root is None:
                raise InvalidOperationError("Cannot convert a closed document")
            node = source.root
        elif isinstance(source, Node):
            node = source
        else:
            raise TypeError(
                f"Expected XMLDocument or Node, got {type(source).__name__}"
            )
        if node.is_destroyed:
            raise InvalidOperationError("Cannot convert a destroyed node")

        lxml_root = self._convert_node_to_lxml(node, ET)
        processing_time = (time.time() - start_time) * 1000

        self._logger.debug(
            "Converted tree to lxml",
            extra={"root": node.name, "processing_time_ms": processing_time},
        )
        return ConversionResult(
            converted_data=lxml_root,
            original_data=source,
            conversion_time_ms=processing_time,
            metadata={
                "lxml_version": ET.LXML_VERSION,
                "element_count": sum(1 for _ in lxml_root.iter()),
            },
        )

    def _convert_node_to_lxml(self, root: Node, ET: Any) -> Any:
        """Convert a node and its subtree to ``lxml.etree.Element``."""
        lxml_root = self._create_element(root, ET)
        pending = [(root, lxml_root)]
        while pending:
            node, element = pending.pop()
            # Reverse so the first attribute of a duplicated name is set last
            for attr in reversed(list(node.attributes)):
                try:
                    element.set(attr.name, attr.value)
                except ValueError as e:
                    raise self._conversion_error(node, e) from e
            if node.value is not None:
                try:
                    element.text = node.value
                except ValueError as e:
                    raise self._conversion_error(node, e) from e
            for child in node.children:
                pending.append((child, self._create_element(child, ET, element)))
        return lxml_root

    def _create_element(self, node: Node, ET: Any, parent: Any = None) -> Any:
        try:
            if parent is None:
                return ET.Element(node.name)
            return ET.SubElement(parent, node.name)
        except ValueError as e:
            raise self._conversion_error(node, e) from e

    def _conversion_error(self, node: Node, error: Exception) -> ConversionError:
        path = node.get_path()
        self._logger.error(
            "Failed to convert to lxml",
            extra={"node_path": path, "error": str(error)},
        )
        return ConversionError(f"Failed to convert {path} to lxml: {error}")
