"""Compiler IR spec - output program instruction set."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Tuple, Union

from qwhtml.escape import EscapeMode
from qwhtml.expr import Evaluable, Renderable


@dataclass(frozen=True)
class WriteLiteral:
    """Write text known at lowering time, already escaped if required."""

    text: str


@dataclass(frozen=True)
class WriteExpr:
    """Render an expression at run time, escaping per ``escape``."""

    expr: Renderable
    escape: EscapeMode


@dataclass(frozen=True)
class If:
    """Run ``then_program`` when ``condition`` holds, else ``else_program``.

    ``else_program`` is None when there is no else branch.
    """

    condition: Evaluable
    then_program: "Program"
    else_program: Optional["Program"] = None


@dataclass(frozen=True)
class For:
    """Run ``body`` once per item of ``iterable``, bound to ``pattern``."""

    pattern: object
    iterable: Evaluable
    body: "Program"


Instruction = Union[WriteLiteral, WriteExpr, If, For]


@dataclass(frozen=True)
class Program:
    """Ordered instruction sequence for one document scope."""

    instructions: Tuple[Instruction, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, instructions: Iterable[Instruction]) -> "Program":
        return cls(tuple(instructions))

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __len__(self) -> int:
        return len(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    def __add__(self, other: "Program") -> "Program":
        return Program(self.instructions + other.instructions)

    def literals(self) -> str:
        """Concatenate the top-level literal writes, in order."""
        return "".join(
            ins.text for ins in self.instructions if isinstance(ins, WriteLiteral)
        )
