"""Document tree nodes.

A node exclusively owns its children. The parent link is a weak
back-reference used only for navigation and detachment, and sibling links are
derived from the parent's child list, so ownership always flows strictly
downward and destroying a subtree never has to break a reference cycle.
"""

import weakref
from typing import Any, Dict, Iterator, List, Optional, Tuple

from slimxml.shared.errors import InvalidOperationError
from slimxml.tokenization import AttributeList, Tag, TagKind


class Node:
    """A named tree element with an optional text value, attributes and children."""

    def __init__(self, name: str = "", value: Optional[str] = None) -> None:
        self._destroyed = False
        self._parent: Optional["weakref.ReferenceType[Node]"] = None
        self._children: List[Node] = []
        self.attributes = AttributeList()
        self.name = name
        self.value = value

    @classmethod
    def from_tag(cls, tag: Tag) -> "Node":
        """Create a node from a tag, taking over the tag's attributes."""
        node = cls(tag.name)
        tag.attributes.transfer_to(node.attributes)
        return node

    # -- state -----------------------------------------------------------

    def _check_alive(self) -> None:
        if self._destroyed:
            raise InvalidOperationError(f"Node {self._name!r} has been destroyed")

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    @property
    def name(self) -> str:
        self._check_alive()
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._check_alive()
        if name is None:
            raise ValueError("Node name cannot be None")
        if not isinstance(name, str):
            raise TypeError("Node name must be a string")
        self._name = name

    @property
    def value(self) -> Optional[str]:
        self._check_alive()
        return self._value

    @value.setter
    def value(self, value: Optional[str]) -> None:
        self._check_alive()
        if value is not None and not isinstance(value, str):
            raise TypeError("Node value must be a string or None")
        self._value = value

    # -- navigation ------------------------------------------------------

    @property
    def parent(self) -> Optional["Node"]:
        return self._parent() if self._parent is not None else None

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def children(self) -> Tuple["Node", ...]:
        """Children in document order (read-only view)."""
        self._check_alive()
        return tuple(self._children)

    @property
    def child_count(self) -> int:
        self._check_alive()
        return len(self._children)

    @property
    def first_child(self) -> Optional["Node"]:
        self._check_alive()
        return self._children[0] if self._children else None

    @property
    def last_child(self) -> Optional["Node"]:
        self._check_alive()
        return self._children[-1] if self._children else None

    def _sibling_index(self) -> Tuple[List["Node"], int]:
        self._check_alive()
        parent = self.parent
        if parent is None:
            return [self], 0
        siblings = parent._children
        for index, sibling in enumerate(siblings):
            if sibling is self:
                return siblings, index
        raise InvalidOperationError(f"Node {self._name!r} is not among its parent's children")

    @property
    def previous_sibling(self) -> Optional["Node"]:
        siblings, index = self._sibling_index()
        return siblings[index - 1] if index > 0 else None

    @property
    def next_sibling(self) -> Optional["Node"]:
        siblings, index = self._sibling_index()
        return siblings[index + 1] if index + 1 < len(siblings) else None

    def iter_siblings(self) -> Iterator["Node"]:
        """Yield this node followed by its later siblings."""
        self._check_alive()
        siblings, index = self._sibling_index()
        yield from siblings[index:]

    # -- structure -------------------------------------------------------

    def add_child(self, child: "Node") -> None:
        """Append a parentless node as the last child."""
        if not isinstance(child, Node):
            raise TypeError("Child must be a Node instance")
        self._check_alive()
        child._check_alive()
        if child.parent is not None:
            raise InvalidOperationError(f"Node {child.name!r} already has a parent")

        ancestor: Optional[Node] = self
        while ancestor is not None:
            if ancestor is child:
                raise InvalidOperationError("A node cannot be added below itself")
            ancestor = ancestor.parent

        child._parent = weakref.ref(self)
        self._children.append(child)

    def detach(self) -> None:
        """Remove this node from its parent, keeping its own subtree."""
        self._check_alive()
        if self.parent is None:
            raise InvalidOperationError(f"Node {self._name!r} has no parent to detach from")
        siblings, index = self._sibling_index()
        del siblings[index]
        self._parent = None

    def remove_child(self, child: "Node") -> None:
        """Detach ``child`` from this node."""
        if child.parent is not self:
            raise InvalidOperationError(f"Node {child.name!r} is not a child of {self._name!r}")
        child.detach()

    def destroy(self) -> None:
        """Destroy the subtree rooted here, then detach from the parent.

        Raises:
            InvalidOperationError: the node was already destroyed
        """
        self._check_alive()
        if self.parent is not None:
            self.detach()

        # Reversed pre-order visits every descendant before its ancestors
        for node in reversed(list(self.iter())):
            node._children.clear()
            node._parent = None
            node.attributes.clear()
            node._value = None
            node._destroyed = True

    # -- traversal -------------------------------------------------------

    def iter(self) -> Iterator["Node"]:
        """Pre-order traversal of the subtree rooted here."""
        self._check_alive()
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node._children))

    def iter_tags(self) -> Iterator[Tuple[TagKind, str]]:
        """Yield the tag events that describe this subtree's nesting.

        Childless nodes without a value produce one UNIQUE event; every
        other node produces an OPENING event, its children's events and a
        CLOSING event.
        """
        self._check_alive()
        stack: List[Tuple[Node, bool]] = [(self, False)]
        while stack:
            node, closing = stack.pop()
            if closing:
                yield TagKind.CLOSING, node.name
            elif not node._children and node.value is None:
                yield TagKind.UNIQUE, node.name
            else:
                yield TagKind.OPENING, node.name
                stack.append((node, True))
                stack.extend((child, False) for child in reversed(node._children))

    def find_child(self, name: str) -> Optional["Node"]:
        """Find the first direct child called ``name``."""
        self._check_alive()
        for child in self._children:
            if child.name == name:
                return child
        return None

    def find_children(self, name: str) -> List["Node"]:
        """Find all direct children called ``name``."""
        self._check_alive()
        return [child for child in self._children if child.name == name]

    def get_depth(self) -> int:
        """Depth of this node in its tree (root = 0)."""
        self._check_alive()
        depth = 0
        parent = self.parent
        while parent is not None:
            depth += 1
            parent = parent.parent
        return depth

    def get_path(self) -> str:
        """Slash-separated path from the root, indexed among same-named siblings."""
        self._check_alive()
        parts = []
        node: Optional[Node] = self
        while node is not None:
            parent = node.parent
            part = node.name
            if parent is not None:
                same = [c for c in parent._children if c.name == node.name]
                if len(same) > 1:
                    position = next(i for i, c in enumerate(same) if c is node) + 1
                    part = f"{node.name}[{position}]"
            parts.append(part)
            node = parent
        return "/" + "/".join(reversed(parts))

    # -- output ----------------------------------------------------------

    def _fields(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "name": self._name,
            "attributes": [list(pair) for pair in self.attributes.to_list()],
        }
        if self._value is not None:
            result["value"] = self._value
        return result

    def to_dict(self, deep: bool = True) -> Dict[str, Any]:
        """Convert the node to a dictionary representation.

        The deep form nests every descendant under ``children``; the shallow
        form holds only this node's name, attributes and value.
        """
        self._check_alive()
        result = self._fields()
        if not deep:
            return result

        pending = [(self, result)]
        while pending:
            node, data = pending.pop()
            if node._children:
                data["children"] = []
                for child in node._children:
                    child_data = child._fields()
                    data["children"].append(child_data)
                    pending.append((child, child_data))
        return result

    def _open_tag(self) -> str:
        attrs = "".join(f' {attr.name}="{attr.value}"' for attr in self.attributes)
        return f"<{self.name}{attrs}"

    def dump(self, deep: bool = True, indent: str = "  ") -> str:
        """Render the node for debugging.

        The shallow form shows only this node; the deep form shows the whole
        subtree, one tag per line. This is a diagnostic view, not a
        serializer: values and attributes are printed unescaped.
        """
        self._check_alive()
        if not deep:
            if self.value is not None:
                return f"{self._open_tag()}>{self.value}</{self.name}>"
            return f"{self._open_tag()}/>"

        lines = []
        stack: List[Tuple[Node, int, bool]] = [(self, 0, False)]
        while stack:
            node, level, closing = stack.pop()
            pad = indent * level
            if closing:
                lines.append(f"{pad}</{node.name}>")
                continue
            if not node._children:
                lines.append(pad + node.dump(deep=False))
                continue
            head = f"{pad}{node._open_tag()}>"
            if node.value is not None:
                head += node.value
            lines.append(head)
            stack.append((node, level, True))
            stack.extend((child, level + 1, False) for child in reversed(node._children))
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self._children)

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        if self._destroyed:
            return "Node(<destroyed>)"
        return f"Node({self._name!r}, children={len(self._children)})"
