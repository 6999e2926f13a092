from __future__ import annotations

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True, slots=True, order=True)
class Version:
    """Slippi replay version; decides which fields a record carries.

    | Version | Released    |
    |---------|-------------|
    | 1.0.0   | Jul 01 2018 |
    | 2.0.0   | Mar 19 2019 |
    | 3.0.0   | Oct 24 2019 |
    | 3.7.0   | Jul 08 2020 |
    | 3.14.0  | Nov 04 2022 |
    | 3.16.0  | Sep 20 2023 |

    Rollback netplay shipped Jun 22 2020, so anything older than 3.7.0 never
    contains rollback frames.
    """

    major: int = 0
    minor: int = 1
    build: int = 0

    def at_least(self, major: int, minor: int, build: int) -> bool:
        return (self.major, self.minor, self.build) >= (int(major), int(minor), int(build))

    def __str__(self) -> str:
        return f"v{self.major}.{self.minor}.{self.build}"


FIRST_VERSION: Final[Version] = Version(0, 1, 0)
NEWEST_KNOWN_VERSION: Final[Version] = Version(3, 16, 0)
