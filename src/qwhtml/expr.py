"""Opaque fragments - conditions, patterns, iterables and expressions.

The builder never looks inside these; it only threads them through to the
program, and the interpreter only calls through the ``Renderable`` and
``Evaluable`` capabilities. The default implementation is backed by the
Jinja2 expression language.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from jinja2 import Environment, StrictUndefined, Undefined, nodes
from jinja2.exceptions import TemplateSyntaxError
from jinja2.parser import Parser

from qwhtml.config import CompilerConfig
from qwhtml.escape import Escaper
from qwhtml.exceptions import PatternMismatchError
from qwhtml.sink import OutputSink

Scope = Mapping[str, Any]

LET_CONDITION = re.compile(r"^\s*let\s+(?P<pattern>[^=]+?)\s*=(?!=)\s*(?P<expr>.+?)\s*$", re.S)


@runtime_checkable
class Renderable(Protocol):
    def render_to(self, sink: OutputSink, scope: Scope) -> None: ...


@runtime_checkable
class Evaluable(Protocol):
    def evaluate(self, scope: Scope) -> Any: ...


def write_value(value: Any, sink: OutputSink) -> None:
    """Write a runtime value to ``sink``.

    Values implementing ``__html__`` are already markup and bypass an
    ``Escaper``. Compiled templates stream themselves; anything else is
    written as text.
    """
    if isinstance(value, Undefined):
        # strict undefined raises here
        sink.write_str(str(value))
        return

    if hasattr(value, "__html__"):
        target = sink.inner if isinstance(sink, Escaper) else sink
        target.write_str(str(value.__html__()))
        return

    render_to = getattr(value, "render_to", None)
    if callable(render_to):
        render_to(sink)
    else:
        sink.write_str(str(value))


class Expression:
    """A Jinja expression producing a value."""

    def __init__(self, env: Environment, source: str):
        self.source = source
        self._compiled = env.compile_expression(source, undefined_to_none=False)

    def evaluate(self, scope: Scope) -> Any:
        return self._compiled(**scope)

    def render_to(self, sink: OutputSink, scope: Scope) -> None:
        write_value(self.evaluate(scope), sink)

    def __repr__(self) -> str:
        return f"Expression({self.source!r})"


class Pattern:
    """An assignment target such as ``x``, ``k, v`` or ``(a, (b, c))``."""

    def __init__(self, env: Environment, source: str):
        self.source = source
        parser = Parser(env, source, state="variable")
        self._target = parser.parse_assign_target()
        if not parser.stream.eos:
            raise TemplateSyntaxError(
                "unexpected tokens after pattern", parser.stream.current.lineno
            )

    @property
    def names(self) -> list[str]:
        if isinstance(self._target, nodes.Name):
            return [self._target.name]
        return [n.name for n in self._target.find_all(nodes.Name)]

    def bind(self, value: Any) -> Dict[str, Any]:
        bindings: Dict[str, Any] = {}
        self._bind(self._target, value, bindings)
        return bindings

    def _bind(self, target: nodes.Node, value: Any, out: Dict[str, Any]) -> None:
        if isinstance(target, nodes.Name):
            out[target.name] = value
            return

        assert isinstance(target, nodes.Tuple)
        try:
            items = tuple(value)
        except TypeError:
            raise PatternMismatchError(self.source, value) from None
        if len(items) != len(target.items):
            raise PatternMismatchError(self.source, value)
        for sub, item in zip(target.items, items):
            self._bind(sub, item, out)

    def __repr__(self) -> str:
        return f"Pattern({self.source!r})"


class Condition:
    """A boolean expression, or ``let <pattern> = <expr>``.

    ``test`` returns the bindings to use for the then-branch, or None when
    the condition does not hold.
    """

    def __init__(self, env: Environment, source: str):
        self.source = source
        self.pattern: Optional[Pattern] = None
        match = LET_CONDITION.match(source)
        if match:
            self.pattern = Pattern(env, match.group("pattern"))
            self.expr = Expression(env, match.group("expr"))
        else:
            self.expr = Expression(env, source)

    def evaluate(self, scope: Scope) -> bool:
        return self.test(scope) is not None

    def test(self, scope: Scope) -> Optional[Dict[str, Any]]:
        value = self.expr.evaluate(scope)
        if self.pattern is None:
            return {} if value else None

        if value is None or isinstance(value, Undefined):
            return None
        try:
            return self.pattern.bind(value)
        except PatternMismatchError:
            return None

    def __repr__(self) -> str:
        return f"Condition({self.source!r})"


class ExpressionFactory:
    """Builds fragments against one shared Jinja environment."""

    def __init__(self, config: Optional[CompilerConfig] = None):
        config = config or CompilerConfig()
        self.env = Environment(
            undefined=StrictUndefined if config.strict_undefined else Undefined,
            autoescape=False,
        )
        self.env.globals.update(config.globals)

    def expression(self, source: str) -> Expression:
        return Expression(self.env, source)

    def condition(self, source: str) -> Condition:
        return Condition(self.env, source)

    def pattern(self, source: str) -> Pattern:
        return Pattern(self.env, source)
