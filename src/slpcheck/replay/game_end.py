from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Final

from construct import Array, Byte, Int8sb, Struct

from ..melee import UnknownCode, lookup
from ..version import Version
from . import findings
from .findings import Finding
from .game_start import PORT_COUNT
from .layout import Gate, GatedLayout

# LRAS initiator and placements use -1 for "nobody"/"unplaced".
NO_PORT: Final[int] = -1


class EndMethod(IntEnum):
    INCONCLUSIVE = 0
    TIME = 1
    GAME = 2
    CONCLUSIVE = 3
    NO_CONTEST = 7


GAME_END_LAYOUT = GatedLayout(
    name="game end",
    base=Struct("method" / Byte),
    gates=(
        Gate(Version(2, 0, 0), Struct("lras_initiator" / Int8sb)),
        Gate(Version(3, 13, 0), Struct("placements" / Array(PORT_COUNT, Int8sb))),
    ),
)


@dataclass(frozen=True, slots=True)
class GameEnd:
    method: EndMethod | UnknownCode
    lras_initiator: int | None = None
    placements: tuple[int, ...] | None = None


def decode_game_end(window: bytes | memoryview, version: Version) -> GameEnd:
    raw = GAME_END_LAYOUT.parse(window, version)
    lras = raw["lras_initiator"]
    placements = raw["placements"]
    return GameEnd(
        method=lookup(EndMethod, int(raw["method"]), kind="end method"),
        lras_initiator=None if lras is None else int(lras),
        placements=None if placements is None else tuple(int(p) for p in placements),
    )


def encode_game_end(end: GameEnd, version: Version) -> bytes:
    return GAME_END_LAYOUT.build(
        {
            "method": int(end.method.value),
            "lras_initiator": NO_PORT if end.lras_initiator is None else int(end.lras_initiator),
            "placements": list(end.placements or (NO_PORT,) * PORT_COUNT),
        },
        version,
    )


def _valid_port(value: int) -> bool:
    return NO_PORT <= int(value) < PORT_COUNT


def check_game_end(end: GameEnd) -> list[Finding]:
    out: list[Finding] = []
    if isinstance(end.method, UnknownCode):
        out.append(findings.warning(f"Unknown game end method: {end.method.value}"))
    if end.lras_initiator is not None and not _valid_port(end.lras_initiator):
        out.append(findings.warning(f"Invalid LRAS initiator: {end.lras_initiator}"))
    for port, placement in enumerate(end.placements or ()):
        if not _valid_port(placement):
            out.append(findings.warning(f"Invalid placement: {placement}", port=port))
    return out
