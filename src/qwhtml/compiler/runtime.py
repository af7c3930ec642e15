"""Runtime - interprets output programs against a sink."""

from __future__ import annotations

from collections import ChainMap
from typing import Any, Mapping, Optional

from qwhtml.compiler.spec import For, If, Program, WriteExpr, WriteLiteral
from qwhtml.escape import EscapeMode, Escaper
from qwhtml.sink import OutputSink, StringSink

Scope = Mapping[str, Any]

EMPTY_SCOPE: Scope = {}


def _bind(pattern: object, item: Any) -> Mapping[str, Any]:
    bind = getattr(pattern, "bind", None)
    if callable(bind):
        return bind(item)
    return {str(pattern): item}


def _test(condition: Any, scope: Scope) -> Optional[Mapping[str, Any]]:
    test = getattr(condition, "test", None)
    if callable(test):
        return test(scope)
    return {} if condition.evaluate(scope) else None


def execute(program: Program, sink: OutputSink, scope: Scope = EMPTY_SCOPE) -> None:
    """Run ``program`` instruction by instruction.

    The first exception raised by the sink or by a fragment ends the run and
    propagates unchanged; whatever was already written stays written.
    """
    for ins in program:
        if isinstance(ins, WriteLiteral):
            sink.write_str(ins.text)
        elif isinstance(ins, WriteExpr):
            target = Escaper(sink) if ins.escape is EscapeMode.ESCAPE else sink
            ins.expr.render_to(target, scope)
        elif isinstance(ins, If):
            bindings = _test(ins.condition, scope)
            if bindings is not None:
                inner = ChainMap(dict(bindings), scope) if bindings else scope
                execute(ins.then_program, sink, inner)
            elif ins.else_program is not None:
                execute(ins.else_program, sink, scope)
        elif isinstance(ins, For):
            for item in ins.iterable.evaluate(scope):
                execute(ins.body, sink, ChainMap(dict(_bind(ins.pattern, item)), scope))
        else:
            raise TypeError(f"Unknown instruction: {ins!r}")


class Template:
    """A runnable output program bound to a named sink."""

    def __init__(self, program: Program, sink: str = "w"):
        self.program = program
        self.sink = sink

    def render_to(
        self, sink: OutputSink, scope: Optional[Scope] = None, /, **context: Any
    ) -> None:
        """Write the document to ``sink``; sink errors propagate."""
        if scope is None:
            scope = context
        elif context:
            scope = ChainMap(context, scope)
        execute(self.program, sink, scope)

    def render(self, /, **context: Any) -> str:
        sink = StringSink()
        self.render_to(sink, **context)
        return sink.getvalue()

    def __len__(self) -> int:
        return len(self.program)

    def __repr__(self) -> str:
        return f"Template({len(self.program)} instructions, sink={self.sink!r})"
