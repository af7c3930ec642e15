"""Compiler - lowers a template tree into an output program."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence, Union

from qwhtml import ast
from qwhtml.compiler.builder import Builder
from qwhtml.compiler.runtime import Template
from qwhtml.config import CompilerConfig
from qwhtml.escape import EscapeMode
from qwhtml.expr import ExpressionFactory

log = logging.getLogger(__name__)


class Compiler:
    """Compiles template nodes to a runnable `Template`."""

    def __init__(
        self,
        config: Optional[CompilerConfig] = None,
        factory: Optional[ExpressionFactory] = None,
    ):
        """Initialize compiler.

        Args:
            config: Compiler settings; defaults are used when omitted.
            factory: Builds conditions, patterns and expressions. Defaults to
                a Jinja-backed factory configured from ``config``.
        """
        self.config = config or CompilerConfig()
        self.factory = factory or ExpressionFactory(self.config)

    def compile(self, nodes: Union[ast.Document, Sequence[ast.Node]]) -> Template:
        """Compile a document or a node list into a `Template`.

        Args:
            nodes: The template tree, in document order.

        Returns:
            Template ready to render against any output sink.
        """
        if isinstance(nodes, ast.Document):
            nodes = nodes.nodes

        builder = Builder(self.config.sink)
        self.lower(nodes, builder)
        template = builder.into_program()
        log.debug("Lowered %d nodes into %d instructions", len(nodes), len(template))
        return template

    def lower(self, nodes: Iterable[ast.Node], builder: Builder) -> None:
        """Append the instructions for ``nodes`` to ``builder``, depth first."""
        for node in nodes:
            self._lower_node(node, builder)

    def _lower_scope(self, nodes: Iterable[ast.Node], parent: Builder) -> Template:
        """Lower a branch or loop body in its own forked builder."""
        scope = parent.fork()
        self.lower(nodes, scope)
        return scope.into_program()

    def _lower_node(self, node: ast.Node, builder: Builder) -> None:
        if isinstance(node, ast.Literal):
            builder.string(node.text, EscapeMode.of(node.escape))
        elif isinstance(node, ast.Splice):
            builder.splice(
                self.factory.expression(node.expr), EscapeMode.of(node.escape)
            )
        elif isinstance(node, ast.Element):
            self._lower_element(node, builder)
        elif isinstance(node, ast.If):
            then_body = self._lower_scope(node.then, builder)
            else_body = (
                None if node.else_ is None else self._lower_scope(node.else_, builder)
            )
            builder.emit_if(self.factory.condition(node.cond), then_body, else_body)
        elif isinstance(node, ast.For):
            body = self._lower_scope(node.body, builder)
            builder.emit_for(
                self.factory.pattern(node.pattern),
                self.factory.expression(node.iterable),
                body,
            )
        else:
            raise TypeError(f"Unknown template node: {node!r}")

    def _lower_element(self, node: ast.Element, builder: Builder) -> None:
        builder.element_open_start(node.name)
        for attr in node.attrs:
            self._lower_attribute(attr, builder)
        builder.element_open_end()

        if node.children is None:
            return
        self.lower(node.children, builder)
        builder.element_close(node.name)

    def _lower_attribute(self, attr: ast.Attribute, builder: Builder) -> None:
        if attr.when is not None:
            toggled = builder.fork()
            self._write_attribute(attr, toggled)
            builder.emit_if(self.factory.condition(attr.when), toggled.into_program())
        else:
            self._write_attribute(attr, builder)

    def _write_attribute(self, attr: ast.Attribute, builder: Builder) -> None:
        if attr.value is None:
            builder.attribute_empty(attr.name)
            return
        builder.attribute_start(attr.name)
        self.lower(attr.value, builder)
        builder.attribute_end()
