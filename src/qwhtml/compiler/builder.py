"""Builder - accumulates the output program for one lexical scope."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Union

from qwhtml.compiler.runtime import Template
from qwhtml.compiler.spec import For, If, Instruction, Program, WriteExpr, WriteLiteral
from qwhtml.escape import EscapeMode, apply
from qwhtml.exceptions import BuilderConsumedError
from qwhtml.expr import Evaluable, Renderable

log = logging.getLogger(__name__)

DEFAULT_SINK = "w"

Body = Union[Program, Template]


def _as_program(body: Body) -> Program:
    if isinstance(body, Template):
        return body.program
    return body


class Builder:
    """Owns the in-progress instructions of a single scope.

    A builder is single-use: ``into_program`` or ``into_instructions``
    consumes it and any later call raises ``BuilderConsumedError``.
    """

    def __init__(self, sink: str = DEFAULT_SINK):
        self.sink = sink
        self._instructions: List[Instruction] = []
        self._consumed = False

    def _check(self, operation: str) -> None:
        if self._consumed:
            raise BuilderConsumedError(operation)

    def _consume(self, operation: str) -> List[Instruction]:
        self._check(operation)
        self._consumed = True
        instructions, self._instructions = self._instructions, []
        return instructions

    @property
    def consumed(self) -> bool:
        return self._consumed

    def __len__(self) -> int:
        return len(self._instructions)

    def fork(self) -> "Builder":
        """Create an empty builder bound to the same sink."""
        self._check("fork")
        return Builder(self.sink)

    def into_program(self) -> Template:
        """Reify into a runnable program."""
        program = Program(tuple(self._consume("reify into a program")))
        log.debug("Reified %d instructions for sink %r", len(program), self.sink)
        return Template(program, sink=self.sink)

    def into_instructions(self) -> Program:
        """Reify into a raw instruction sequence for splicing elsewhere."""
        return Program(tuple(self._consume("reify into instructions")))

    def push(self, instructions: Iterable[Instruction]) -> None:
        """Append already lowered instructions."""
        self._check("push")
        self._instructions.extend(instructions)

    def write(self, text: str) -> None:
        """Append a literal, pre-escaped string."""
        self._check("write")
        self._instructions.append(WriteLiteral(text))

    def string(self, text: str, escape: EscapeMode) -> None:
        """Append a literal string with the given escaping."""
        self.write(apply(text, escape))

    def splice(self, expr: Renderable, escape: EscapeMode) -> None:
        """Append the run-time result of ``expr`` with the given escaping."""
        self._check("splice")
        self._instructions.append(WriteExpr(expr, escape))

    def element_open_start(self, name: str) -> None:
        self.write("<")
        self.write(name)

    def attribute_start(self, name: str) -> None:
        self.write(" ")
        self.write(name)
        self.write('="')

    def attribute_empty(self, name: str) -> None:
        self.write(" ")
        self.write(name)

    def attribute_end(self) -> None:
        self.write('"')

    def element_open_end(self) -> None:
        self.write(">")

    def element_close(self, name: str) -> None:
        self.write("</")
        self.write(name)
        self.write(">")

    def emit_if(
        self, condition: Evaluable, then_body: Body, else_body: Optional[Body] = None
    ) -> None:
        """Append an ``If`` wrapping two fully lowered bodies.

        The condition is threaded through untouched, so pattern-matching
        conditions need no special casing here.
        """
        self._check("emit if")
        else_program = None if else_body is None else _as_program(else_body)
        self._instructions.append(If(condition, _as_program(then_body), else_program))

    def emit_for(self, pattern: object, iterable: Evaluable, body: Body) -> None:
        self._check("emit for")
        self._instructions.append(For(pattern, iterable, _as_program(body)))
