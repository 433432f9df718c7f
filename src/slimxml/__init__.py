"""slimxml.

A minimal XML reader for small configuration-style documents: it builds a
node tree from a declaration line and nested tags, and answers path queries
such as ``config/server/port$`` or ``config/server:host``.

Progressive API Disclosure:
- Level 1: Simple functions - load_file(), load_string(), parse()
- Level 2: Configured parser - SlimXMLParser class
- Level 3: Tree and query primitives - Node, resolve_value(), resolve_node()
"""

__version__ = "0.1.0"
__author__ = "slimxml developers"

# Level 1 and 2: loading functions and the configured parser
from .api import (
    LxmlAdapter,
    SlimXMLParser,
    load_file,
    load_string,
    parse,
    parse_file,
    parse_string,
)

# Level 3: tree and query primitives
from .query import (
    get_bool,
    get_double,
    get_int,
    get_string,
    resolve_node,
    resolve_value,
)

# Configuration and errors
from .shared import (
    ParserConfig,
    SlimXMLError,
    TokenizationConfig,
    TreeConfig,
    XMLParseError,
)
from .tree import Node, XMLDocument

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple loading functions
    "load_file",
    "load_string",
    "parse",
    "parse_file",
    "parse_string",

    # Level 2: Configured parser
    "SlimXMLParser",

    # Level 3: Tree and queries
    "Node",
    "XMLDocument",
    "resolve_node",
    "resolve_value",
    "get_bool",
    "get_double",
    "get_int",
    "get_string",

    # Integration
    "LxmlAdapter",

    # Configuration and errors
    "ParserConfig",
    "TokenizationConfig",
    "TreeConfig",
    "SlimXMLError",
    "XMLParseError",
]
