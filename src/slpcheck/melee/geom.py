from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(slots=True, frozen=True)
class Vec2:
    x: float = 0.0
    y: float = 0.0

    def within(self, low: float, high: float) -> bool:
        """True if both components lie in the closed range `[low, high]`."""
        return low <= self.x <= high and low <= self.y <= high

    def __str__(self) -> str:
        return f"({self.x:.4f}, {self.y:.4f})"


Position: TypeAlias = Vec2
Velocity: TypeAlias = Vec2
StickPos: TypeAlias = Vec2
