"""Public API layer for slimxml.

Key Components:
    load_file / load_string / parse: module-level loading functions
    SlimXMLParser: reusable parser with configuration and statistics
    LxmlAdapter: conversion to lxml.etree elements
"""

from .adapters import AdapterMetadata, AdapterType, ConversionResult, LxmlAdapter
from .parser import (
    SlimXMLParser,
    load_file,
    load_string,
    parse,
    parse_file,
    parse_string,
)

__all__ = [
    "AdapterMetadata",
    "AdapterType",
    "ConversionResult",
    "LxmlAdapter",
    "SlimXMLParser",
    "load_file",
    "load_string",
    "parse",
    "parse_file",
    "parse_string",
]
