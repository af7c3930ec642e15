"""Escaping policy - decides whether emitted text is HTML-escaped."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from markupsafe import escape as _markup_escape

if TYPE_CHECKING:
    from qwhtml.sink import OutputSink


class EscapeMode(str, Enum):
    """Escaping applied to a single write."""

    PASS_THRU = "pass-thru"
    ESCAPE = "escape"

    @classmethod
    def of(cls, flag: bool) -> "EscapeMode":
        """Map a node's boolean escaping intent onto a mode."""
        return cls.ESCAPE if flag else cls.PASS_THRU


def escape(text: str) -> str:
    """Replace HTML structural characters with their entities.

    Not idempotent: ``escape(escape("&"))`` yields ``&amp;amp;``. Values that
    implement ``__html__`` are already markup and come back unchanged.
    """
    return str(_markup_escape(text))


def apply(text: str, mode: EscapeMode) -> str:
    if mode is EscapeMode.ESCAPE:
        return escape(text)
    return text


class Escaper:
    """Sink adapter escaping every chunk before it reaches ``inner``."""

    __slots__ = ("inner",)

    def __init__(self, inner: "OutputSink"):
        self.inner = inner

    def write_str(self, text: str) -> None:
        self.inner.write_str(escape(text))
