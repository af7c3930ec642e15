"""qwhtml compiler - lowers template trees to output programs."""

from qwhtml.compiler.builder import Builder
from qwhtml.compiler.lowering import Compiler
from qwhtml.compiler.printer import Printer
from qwhtml.compiler.runtime import Template, execute
from qwhtml.compiler.spec import For, If, Instruction, Program, WriteExpr, WriteLiteral

__all__ = [
    "Builder",
    "Compiler",
    "Printer",
    "Template",
    "execute",
    "Program",
    "Instruction",
    "WriteLiteral",
    "WriteExpr",
    "If",
    "For",
]
