"""qwhtml Exceptions

Custom exceptions for the qwhtml lowering engine.
"""

from __future__ import annotations


class QwhtmlError(Exception):
    """Base exception for all qwhtml errors."""

    pass


class BuilderConsumedError(QwhtmlError, RuntimeError):
    """Raised when a builder is used after it has been reified."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Builder already consumed, cannot {operation}")


class SinkError(QwhtmlError):
    """Raised by an output sink that failed to accept a chunk."""

    pass


class TemplateLoadError(QwhtmlError):
    """Raised when a template document cannot be decoded into nodes."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot load template {source}: {reason}")


class PatternMismatchError(QwhtmlError, ValueError):
    """Raised when a loop pattern cannot unpack a value."""

    def __init__(self, pattern: str, value: object):
        self.pattern = pattern
        self.value = value
        super().__init__(f"Pattern '{pattern}' does not match {value!r}")
