"""Output sinks - destinations receiving emitted text."""

from __future__ import annotations

from typing import List, Protocol, TextIO, runtime_checkable

from qwhtml.exceptions import SinkError

__all__ = ["OutputSink", "StringSink", "StreamSink", "SinkError"]


@runtime_checkable
class OutputSink(Protocol):
    """Anything accepting a sequence of text chunks.

    ``write_str`` may raise; the exception ends the running program.
    """

    def write_str(self, text: str) -> None: ...


class StringSink:
    """Collects chunks in memory."""

    def __init__(self) -> None:
        self._chunks: List[str] = []

    def write_str(self, text: str) -> None:
        self._chunks.append(text)

    @property
    def chunks(self) -> List[str]:
        return list(self._chunks)

    def getvalue(self) -> str:
        return "".join(self._chunks)


class StreamSink:
    """Forwards chunks to a text stream such as ``sys.stdout``."""

    def __init__(self, stream: TextIO):
        self.stream = stream

    def write_str(self, text: str) -> None:
        self.stream.write(text)

    def flush(self) -> None:
        self.stream.flush()
