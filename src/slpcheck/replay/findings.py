from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
import logging


class Severity(IntEnum):
    # Values line up with the stdlib logging levels so findings can be logged directly.
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


@dataclass(frozen=True, slots=True)
class Finding:
    """A non-fatal anomaly reported by a record check or the ordering matcher."""

    level: Severity
    message: str
    frame_index: int | None = None
    port: int | None = None

    def describe(self) -> str:
        where: list[str] = []
        if self.frame_index is not None:
            where.append(f"Frame {int(self.frame_index)}")
        if self.port is not None:
            where.append(f"Port {int(self.port) + 1}")
        if not where:
            return self.message
        return f"[{', '.join(where)}] {self.message}"


def info(message: str, *, frame_index: int | None = None, port: int | None = None) -> Finding:
    return Finding(Severity.INFO, message, frame_index=frame_index, port=port)


def warning(message: str, *, frame_index: int | None = None, port: int | None = None) -> Finding:
    return Finding(Severity.WARNING, message, frame_index=frame_index, port=port)


def error(message: str, *, frame_index: int | None = None, port: int | None = None) -> Finding:
    return Finding(Severity.ERROR, message, frame_index=frame_index, port=port)
