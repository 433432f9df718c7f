"""Path query resolvers.

Two small path languages address a parsed tree:

Value paths select a node's text or one of its attributes::

    config/server/port$         value of <port>
    config/server:host          value of <server host="...">

Node-search paths select a node, optionally filtered by an attribute::

    item                        first <item> in scope
    item?id=2                   first <item id="2"> in scope
    item?id=2/price             its first <price> child

Each segment is matched by name against the nodes in scope, first match
wins, and there is no backtracking: if a later segment fails below the first
match, sibling candidates are not retried. Misses return ``None``; only
syntactically invalid paths raise.
"""

from typing import List, NamedTuple, Optional, Tuple

from slimxml.shared.config import DEFAULT_BUFFER_LENGTH
from slimxml.shared.errors import MalformedPathError
from slimxml.shared.logging import CorrelationLogger, resolve_logger
from slimxml.tokenization import ScratchBuffer
from slimxml.tree.node import Node

CHILD_SEPARATOR = "/"
VALUE_MARKER = "$"
ATTRIBUTE_MARKER = ":"
PREDICATE_MARKER = "?"
PREDICATE_ASSIGN = "="
END_OF_PATH = ""

_VALUE_STOPS = frozenset((CHILD_SEPARATOR, VALUE_MARKER, ATTRIBUTE_MARKER))
_NAME_STOPS = frozenset((CHILD_SEPARATOR, PREDICATE_MARKER))


class NodeStep(NamedTuple):
    """One segment of a node-search path."""

    name: str
    attribute: Optional[str] = None
    value: Optional[str] = None


def _read_segment(
    path: str, start: int, stops: frozenset, capacity: int, label: str
) -> Tuple[str, str, int]:
    """Read characters from ``start`` up to one of ``stops``.

    Returns:
        The segment text, the stop character (``END_OF_PATH`` when the path
        ran out) and the index just past the stop character.
    """
    buffer = ScratchBuffer(capacity, label)
    index = start
    while index < len(path):
        char = path[index]
        if char in stops:
            return buffer.take(), char, index + 1
        buffer.append(char)
        index += 1
    return buffer.take(), END_OF_PATH, index


def _first_in_scope(start: Optional[Node], name: str) -> Optional[Node]:
    if start is None:
        return None
    for node in start.iter_siblings():
        if node.name == name:
            return node
    return None


def parse_value_path(
    path: str, buffer_length: int = DEFAULT_BUFFER_LENGTH
) -> Tuple[List[str], Optional[str]]:
    """Split a value path into node names and an optional attribute name.

    Returns:
        ``(names, attribute)``; ``attribute`` is None for ``$`` paths.

    Raises:
        MalformedPathError: no ``$``/``:`` terminator, or text after ``$``
        BufferOverflowError: a segment is longer than ``buffer_length``
    """
    if not isinstance(path, str):
        raise TypeError("Path must be a string")

    names: List[str] = []
    index = 0
    while True:
        name, stop, index = _read_segment(
            path, index, _VALUE_STOPS, buffer_length, "path segment"
        )
        if stop == END_OF_PATH:
            raise MalformedPathError(
                f"Value path {path!r} must end with '$' or ':attribute'"
            )
        names.append(name)

        if stop == VALUE_MARKER:
            if index < len(path):
                raise MalformedPathError(
                    f"Unexpected text after '$' in value path {path!r}"
                )
            return names, None
        if stop == ATTRIBUTE_MARKER:
            attribute, _, _ = _read_segment(
                path, index, frozenset(), buffer_length, "attribute name"
            )
            return names, attribute


def parse_node_path(
    path: str, buffer_length: int = DEFAULT_BUFFER_LENGTH
) -> List[NodeStep]:
    """Split a node-search path into steps.

    Raises:
        MalformedPathError: a ``?`` predicate has no ``=``
        BufferOverflowError: a segment is longer than ``buffer_length``
    """
    if not isinstance(path, str):
        raise TypeError("Path must be a string")

    steps: List[NodeStep] = []
    index = 0
    while True:
        name, stop, index = _read_segment(
            path, index, _NAME_STOPS, buffer_length, "path segment"
        )
        if stop == PREDICATE_MARKER:
            attribute, assign, index = _read_segment(
                path, index, frozenset(PREDICATE_ASSIGN), buffer_length, "predicate name"
            )
            if assign != PREDICATE_ASSIGN:
                raise MalformedPathError(
                    f"Predicate {attribute!r} in node path {path!r} has no '=value'"
                )
            value, stop, index = _read_segment(
                path, index, frozenset(CHILD_SEPARATOR), buffer_length, "predicate value"
            )
            steps.append(NodeStep(name, attribute, value))
        else:
            steps.append(NodeStep(name))

        if stop == END_OF_PATH:
            return steps


def resolve_value(
    path: str,
    root: Node,
    buffer_length: int = DEFAULT_BUFFER_LENGTH,
    logger: Optional[CorrelationLogger] = None,
) -> Optional[str]:
    """Evaluate a value path against the tree rooted at ``root``.

    The first segment is matched against ``root`` itself; each following
    segment against the children of the previous match.

    Returns:
        The node value or attribute value, or None when a segment, the
        attribute or the node value is missing.

    Raises:
        InvalidOperationError: ``root`` has been destroyed
    """
    names, attribute = parse_value_path(path, buffer_length)
    log = resolve_logger(logger, __name__, "value_resolver")

    scope: Optional[Node] = root
    match: Optional[Node] = None
    for depth, name in enumerate(names):
        match = _first_in_scope(scope, name)
        if match is None:
            log.debug(
                "No node matches path segment",
                extra={"path": path, "segment": name, "depth": depth},
            )
            return None
        scope = match.first_child

    if attribute is None:
        return match.value

    found = match.attributes.find(attribute)
    if found is None:
        log.debug(
            "Node has no such attribute",
            extra={"path": path, "node": match.name, "attribute": attribute},
        )
        return None
    return found.value


def resolve_node(
    path: str,
    start: Optional[Node],
    buffer_length: int = DEFAULT_BUFFER_LENGTH,
    logger: Optional[CorrelationLogger] = None,
) -> Optional[Node]:
    """Find a node by node-search path.

    The first step is matched against ``start`` and its following
    siblings; each deeper step restarts at the first child of the previous
    match. A step with a predicate matches only nodes carrying an attribute
    with exactly that name and value.

    Raises:
        InvalidOperationError: ``start`` has been destroyed
    """
    steps = parse_node_path(path, buffer_length)
    log = resolve_logger(logger, __name__, "node_resolver")

    scope = start
    match: Optional[Node] = None
    for depth, step in enumerate(steps):
        match = None
        if scope is not None:
            for candidate in scope.iter_siblings():
                if candidate.name != step.name:
                    continue
                if step.attribute is None or candidate.attributes.matches(
                    step.attribute, step.value
                ):
                    match = candidate
                    break
        if match is None:
            log.debug(
                "No node matches search step",
                extra={"path": path, "segment": step.name, "depth": depth},
            )
            return None
        scope = match.first_child

    return match
