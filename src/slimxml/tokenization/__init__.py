"""Tokenization layer for slimxml.

Key Components:
    TagTokenizer: reads one tag token per call from a character stream
    Tag: transient token with name, kind and attributes
    TagKind: opening, closing, unique
    Attribute / AttributeList: name/value pairs owned by a tag or node
    ScratchBuffer: capacity-checked accumulator
"""

from .attribute import Attribute, AttributeList, read_attribute
from .buffer import ScratchBuffer
from .tokenizer import Tag, TagKind, TagTokenizer

__all__ = [
    "Attribute",
    "AttributeList",
    "ScratchBuffer",
    "Tag",
    "TagKind",
    "TagTokenizer",
    "read_attribute",
]
