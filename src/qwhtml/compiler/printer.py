"""Printer - converts an output program to a readable listing."""

from __future__ import annotations

from typing import List, Union

from qwhtml.compiler.runtime import Template
from qwhtml.compiler.spec import For, If, Program, WriteExpr, WriteLiteral
from qwhtml.escape import EscapeMode


def _fragment(obj: object) -> str:
    return getattr(obj, "source", None) or repr(obj)


class Printer:
    """Renders a Program as pseudo-code, one instruction per line."""

    INDENT = "  "

    def render(self, program: Union[Program, Template], sink: str = "w") -> str:
        """Render a program listing.

        Args:
            program: A reified Template, or a raw Program.
            sink: Sink name used for raw Programs; Templates use their own.

        Returns:
            The listing, newline-terminated.
        """
        if isinstance(program, Template):
            sink, program = program.sink, program.program

        lines: List[str] = []
        self._render_program(program, sink, 0, lines)
        lines.append("")
        return "\n".join(lines)

    def _render_program(
        self, program: Program, sink: str, depth: int, lines: List[str]
    ) -> None:
        pad = self.INDENT * depth
        if not len(program):
            lines.append(f"{pad}pass")
            return

        for ins in program:
            if isinstance(ins, WriteLiteral):
                lines.append(f"{pad}{sink}.write_str({ins.text!r})")
            elif isinstance(ins, WriteExpr):
                target = sink
                if ins.escape is EscapeMode.ESCAPE:
                    target = f"Escaper({sink})"
                lines.append(f"{pad}write({target}, {_fragment(ins.expr)})")
            elif isinstance(ins, If):
                lines.append(f"{pad}if {_fragment(ins.condition)}:")
                self._render_program(ins.then_program, sink, depth + 1, lines)
                if ins.else_program is not None:
                    lines.append(f"{pad}else:")
                    self._render_program(ins.else_program, sink, depth + 1, lines)
            elif isinstance(ins, For):
                lines.append(
                    f"{pad}for {_fragment(ins.pattern)} in {_fragment(ins.iterable)}:"
                )
                self._render_program(ins.body, sink, depth + 1, lines)
