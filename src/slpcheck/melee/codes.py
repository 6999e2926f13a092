from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TypeVar

E = TypeVar("E", bound=IntEnum)


@dataclass(frozen=True, slots=True)
class UnknownCode:
    """A raw value that did not resolve against its code table."""

    kind: str
    value: int

    def __str__(self) -> str:
        return f"unknown {self.kind} ({self.value})"


def lookup(table: type[E], value: int, *, kind: str) -> E | UnknownCode:
    try:
        return table(int(value))
    except ValueError:
        return UnknownCode(kind=kind, value=int(value))


def code_label(value: IntEnum | UnknownCode) -> str:
    if isinstance(value, UnknownCode):
        return str(value)
    return f"{value.name} ({int(value)})"
