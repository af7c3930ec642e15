"""qwhtml.ast - template tree nodes and their decoders."""

from qwhtml.ast.node import Attribute, Document, Element, For, If, Literal, Node, Splice
from qwhtml.ast.parser import parse_file, parse_json_text, parse_yaml_text

__all__ = [
    "Attribute",
    "Document",
    "Element",
    "For",
    "If",
    "Literal",
    "Node",
    "Splice",
    "parse_file",
    "parse_json_text",
    "parse_yaml_text",
]
