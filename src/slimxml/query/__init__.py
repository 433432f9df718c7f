"""Query layer for slimxml.

Key Components:
    resolve_value: value path evaluation (``a/b$``, ``a/b:attr``)
    resolve_node: node-search path evaluation (``a?attr=value/b``)
    get_string / get_int / get_bool / get_double: typed accessors with defaults
    convert_int / convert_double / convert_bool: the conversions they apply
"""

from .accessors import (
    convert_bool,
    convert_double,
    convert_int,
    get_bool,
    get_double,
    get_int,
    get_string,
)
from .resolver import (
    NodeStep,
    parse_node_path,
    parse_value_path,
    resolve_node,
    resolve_value,
)

__all__ = [
    "convert_bool",
    "convert_double",
    "convert_int",
    "get_bool",
    "get_double",
    "get_int",
    "get_string",
    "NodeStep",
    "parse_node_path",
    "parse_value_path",
    "resolve_node",
    "resolve_value",
]
