"""qwhtml - HTML markup lowering engine

Lowers a template tree (elements, attributes, text, expressions,
conditionals, loops) into an ordered output program that writes the
document to any output sink, stopping at the first failure.
"""

from qwhtml.compiler import Builder, Compiler, Printer, Program, Template
from qwhtml.config import CompilerConfig
from qwhtml.escape import EscapeMode, Escaper, escape
from qwhtml.exceptions import BuilderConsumedError, QwhtmlError, SinkError
from qwhtml.sink import OutputSink, StreamSink, StringSink

__version__ = "0.1.0"

__all__ = [
    # Lowering
    "Builder",
    "Compiler",
    "Program",
    "Template",
    "Printer",
    "CompilerConfig",
    # Escaping
    "EscapeMode",
    "Escaper",
    "escape",
    # Sinks
    "OutputSink",
    "StringSink",
    "StreamSink",
    # Errors
    "QwhtmlError",
    "BuilderConsumedError",
    "SinkError",
]
