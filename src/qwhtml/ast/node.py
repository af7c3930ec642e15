"""Template tree - the input of the lowering stage.

Nodes are tagged by a ``kind`` field so a whole tree can be decoded from
YAML or JSON in one pass.
"""

from __future__ import annotations

from typing import List, Optional, Union

import msgspec


class NodeBase(msgspec.Struct, tag_field="kind", forbid_unknown_fields=True):
    pass


class Literal(NodeBase, tag="literal"):
    """Text fixed at lowering time. Trusted markup unless ``escape`` is set."""

    text: str
    escape: bool = False


class Splice(NodeBase, tag="splice"):
    """Value of an expression, escaped by default."""

    expr: str
    escape: bool = True


class Attribute(msgspec.Struct, forbid_unknown_fields=True):
    """``name="..."`` when ``value`` is given, bare ``name`` otherwise.

    ``when`` is a condition toggling the whole attribute on or off.
    """

    name: str
    value: Optional[List[Union[Literal, Splice]]] = None
    when: Optional[str] = None


class Element(NodeBase, tag="element"):
    """An element; ``children`` of None means a void element like ``<br>``."""

    name: str
    attrs: List[Attribute] = msgspec.field(default_factory=list)
    children: Optional[List[Node]] = None


class If(NodeBase, tag="if"):
    cond: str
    then: List[Node] = msgspec.field(default_factory=list)
    else_: Optional[List[Node]] = msgspec.field(default=None, name="else")


class For(NodeBase, tag="for"):
    pattern: str
    iterable: str
    body: List[Node] = msgspec.field(default_factory=list)


Node = Union[Literal, Splice, Element, If, For]


class Document(msgspec.Struct, forbid_unknown_fields=True):
    """Top-level template file."""

    nodes: List[Node]
    name: Optional[str] = None
