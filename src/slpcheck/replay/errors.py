from __future__ import annotations


class ReplayFormatError(ValueError):
    """The replay cannot be decoded any further."""


class BufferUnderflowError(ReplayFormatError):
    """A read ran past the end of its byte window."""
