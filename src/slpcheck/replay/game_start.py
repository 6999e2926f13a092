from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Final

from construct import Array, Byte, Bytes, Float32b, Int16ub, Int32ub, Padding, Struct

from ..melee import (
    COMPANION_CHARACTER,
    Character,
    Stage,
    UnknownCode,
    character_from_css,
    code_label,
    lookup,
    stage_from_id,
)
from ..melee.characters import NON_TOURNAMENT_CHARACTERS
from ..version import Version
from . import findings
from .errors import BufferUnderflowError
from .findings import Finding
from .layout import Gate, GatedLayout

PORT_COUNT: Final[int] = 4
DISPLAY_NAME_SIZE: Final[int] = 31
CONNECT_CODE_SIZE: Final[int] = 10
MATCH_ID_SIZE: Final[int] = 51
NETPLAY_SCENE: Final[int] = 8
TOURNAMENT_STOCKS: Final[int] = 4

# Melee writes names as Shift-JIS in the Windows code page variant.
TEXT_ENCODING: Final[str] = "cp932"


class PlayerType(IntEnum):
    HUMAN = 0
    CPU = 1
    DEMO = 2
    EMPTY = 3


class TeamShade(IntEnum):
    NORMAL = 0
    LIGHT = 1
    DARK = 2


class TeamColor(IntEnum):
    RED = 0
    BLUE = 1
    GREEN = 2


class ControllerFix(IntEnum):
    OFF = 0
    UCF = 1
    DWEEN = 2


class MatchType(str, Enum):
    UNRANKED = "u"
    RANKED = "r"
    DIRECT = "d"
    UNKNOWN = ""


ACTIVE_PLAYER_TYPES: Final[frozenset[PlayerType]] = frozenset({PlayerType.HUMAN, PlayerType.CPU})


_PLAYER = Struct(
    "character" / Byte,
    "kind" / Byte,
    "stocks" / Byte,
    "costume" / Byte,
    "team_shade" / Byte,
    "handicap" / Byte,
    "team" / Byte,
    "bitfield" / Byte,
    "cpu_level" / Byte,
    "damage_start" / Int16ub,
    "damage_spawn" / Int16ub,
    "offense_ratio" / Float32b,
    "defense_ratio" / Float32b,
    "model_scale" / Float32b,
    Padding(11),
)

_CONTROLLER_FIX = Struct(
    "dashback" / Int32ub,
    "shield_drop" / Int32ub,
)

GAME_START_LAYOUT = GatedLayout(
    name="game start",
    base=Struct(
        "version" / Array(3, Byte),
        Padding(9),  # build number, game bitfields, bomb rain
        "teams" / Byte,
        Padding(5),  # item spawn rate, self destruct score
        "stage" / Int16ub,
        "timer_seconds" / Int32ub,
        Padding(28),  # item spawn bitfields
        "damage_ratio" / Float32b,
        Padding(44),
        "players" / Array(PORT_COUNT, _PLAYER),
        Padding(72),  # unused player slots 5 and 6
        "random_seed" / Int32ub,
    ),
    gates=(
        Gate(Version(1, 0, 0), Struct("controller_fix" / Array(PORT_COUNT, _CONTROLLER_FIX))),
        Gate(Version(1, 3, 0), Struct(Padding(64))),  # in-game name tags
        Gate(Version(1, 5, 0), Struct("pal" / Byte)),
        Gate(Version(2, 0, 0), Struct("frozen_stadium" / Byte)),
        Gate(Version(3, 7, 0), Struct(Padding(1), "major_scene" / Byte)),
        Gate(
            Version(3, 9, 0),
            Struct(
                "display_names" / Array(PORT_COUNT, Bytes(DISPLAY_NAME_SIZE)),
                "connect_codes" / Array(PORT_COUNT, Bytes(CONNECT_CODE_SIZE)),
            ),
        ),
        Gate(Version(3, 11, 0), Struct(Padding(29 * PORT_COUNT))),  # Slippi user ids
        Gate(Version(3, 12, 0), Struct(Padding(1))),  # language option
        Gate(
            Version(3, 14, 0),
            Struct(
                "match_id" / Bytes(MATCH_ID_SIZE),
                "game_number" / Int32ub,
                "tiebreak_number" / Int32ub,
            ),
        ),
    ),
)


@dataclass(frozen=True, slots=True)
class ControllerFixes:
    dashback: ControllerFix | UnknownCode
    shield_drop: ControllerFix | UnknownCode


@dataclass(frozen=True, slots=True)
class Participant:
    port: int
    kind: PlayerType | UnknownCode
    character: Character | UnknownCode
    stocks: int = 4
    costume: int = 0
    team_shade: TeamShade | UnknownCode = TeamShade.NORMAL
    handicap: int = 0
    team: TeamColor | UnknownCode = TeamColor.RED
    bitfield: int = 0
    cpu_level: int = 0
    damage_start: int = 0
    damage_spawn: int = 0
    offense_ratio: float = 1.0
    defense_ratio: float = 1.0
    model_scale: float = 1.0
    controller_fix: ControllerFixes | None = None
    display_name: str | None = None
    connect_code: str | None = None

    @property
    def is_active(self) -> bool:
        return self.kind in ACTIVE_PLAYER_TYPES

    @property
    def has_companion(self) -> bool:
        return self.is_active and self.character == COMPANION_CHARACTER

    def is_tournament_legal(self) -> bool:
        if self.kind == PlayerType.EMPTY:
            return True
        return (
            self.kind == PlayerType.HUMAN
            and self.character not in NON_TOURNAMENT_CHARACTERS
            and int(self.stocks) == TOURNAMENT_STOCKS
            and int(self.handicap) == 0
            and (int(self.bitfield) >> 1) == 0
            and int(self.damage_start) == 0
            and int(self.damage_spawn) == 0
        )


@dataclass(frozen=True, slots=True)
class GameStart:
    version: Version
    teams: bool
    stage: Stage | UnknownCode
    timer_seconds: int
    damage_ratio: float
    random_seed: int
    participants: tuple[Participant, ...]
    pal: bool | None = None
    frozen_stadium: bool | None = None
    netplay: bool | None = None
    match_id: str | None = None
    game_number: int | None = None
    tiebreak_number: int | None = None

    @property
    def match_type(self) -> MatchType:
        return match_type_from_id(self.match_id)

    @property
    def active_participants(self) -> tuple[Participant, ...]:
        return tuple(p for p in self.participants if p.is_active)

    def participant(self, port: int) -> Participant | None:
        port = int(port)
        if not (0 <= port < len(self.participants)):
            return None
        return self.participants[port]


def _cstring(raw: bytes) -> bytes:
    return bytes(raw).split(b"\x00", 1)[0]


def decode_display_text(raw: bytes) -> str:
    return _cstring(raw).decode(TEXT_ENCODING, errors="replace")


def decode_connect_code(raw: bytes) -> str:
    # The full-width hash is what the game stores; nobody can type it.
    return decode_display_text(raw).replace("＃", "#")


def encode_display_text(text: str, size: int) -> bytes:
    raw = text.encode(TEXT_ENCODING)
    if len(raw) > size:
        raise ValueError(f"text too long for {size}-byte field: {text!r}")
    return raw.ljust(size, b"\x00")


def encode_connect_code(code: str) -> bytes:
    return encode_display_text(code.replace("#", "＃"), CONNECT_CODE_SIZE)


def match_type_from_id(match_id: str | None) -> MatchType:
    if not match_id:
        return MatchType.UNKNOWN
    raw = match_id.encode("utf-8")
    if len(raw) <= 5:
        return MatchType.UNKNOWN
    try:
        return MatchType(chr(raw[5]))
    except ValueError:
        return MatchType.UNKNOWN


def read_version(window: bytes | memoryview) -> Version:
    head = bytes(window[:3])
    if len(head) < 3:
        raise BufferUnderflowError(f"game start payload truncated: need 3 bytes for the version, got {len(head)}")
    return Version(int(head[0]), int(head[1]), int(head[2]))


def decode_game_start(window: bytes | memoryview) -> GameStart:
    version = read_version(window)
    raw = GAME_START_LAYOUT.parse(window, version)

    fixes = raw["controller_fix"]
    names = raw["display_names"]
    codes = raw["connect_codes"]

    participants: list[Participant] = []
    for port, entry in enumerate(raw["players"]):
        fix = None
        if fixes is not None:
            fix = ControllerFixes(
                dashback=lookup(ControllerFix, int(fixes[port]["dashback"]), kind="controller fix"),
                shield_drop=lookup(ControllerFix, int(fixes[port]["shield_drop"]), kind="controller fix"),
            )
        participants.append(
            Participant(
                port=port,
                kind=lookup(PlayerType, int(entry["kind"]), kind="player type"),
                character=character_from_css(int(entry["character"])),
                stocks=int(entry["stocks"]),
                costume=int(entry["costume"]),
                team_shade=lookup(TeamShade, int(entry["team_shade"]), kind="team shade"),
                handicap=int(entry["handicap"]),
                team=lookup(TeamColor, int(entry["team"]), kind="team"),
                bitfield=int(entry["bitfield"]),
                cpu_level=int(entry["cpu_level"]),
                damage_start=int(entry["damage_start"]),
                damage_spawn=int(entry["damage_spawn"]),
                offense_ratio=float(entry["offense_ratio"]),
                defense_ratio=float(entry["defense_ratio"]),
                model_scale=float(entry["model_scale"]),
                controller_fix=fix,
                display_name=None if names is None else decode_display_text(names[port]),
                connect_code=None if codes is None else decode_connect_code(codes[port]),
            )
        )

    match_id = raw["match_id"]
    return GameStart(
        version=version,
        teams=int(raw["teams"]) != 0,
        stage=stage_from_id(int(raw["stage"])),
        timer_seconds=int(raw["timer_seconds"]),
        damage_ratio=float(raw["damage_ratio"]),
        random_seed=int(raw["random_seed"]),
        participants=tuple(participants),
        pal=None if raw["pal"] is None else int(raw["pal"]) != 0,
        frozen_stadium=None if raw["frozen_stadium"] is None else int(raw["frozen_stadium"]) != 0,
        netplay=None if raw["major_scene"] is None else int(raw["major_scene"]) == NETPLAY_SCENE,
        match_id=None if match_id is None else _cstring(match_id).decode("utf-8", errors="replace"),
        game_number=None if raw["game_number"] is None else int(raw["game_number"]),
        tiebreak_number=None if raw["tiebreak_number"] is None else int(raw["tiebreak_number"]),
    )


def _code(value: IntEnum | UnknownCode) -> int:
    if isinstance(value, UnknownCode):
        return int(value.value)
    return int(value)


def encode_game_start(game: GameStart) -> bytes:
    version = game.version
    if len(game.participants) != PORT_COUNT:
        raise ValueError(f"game start needs {PORT_COUNT} participants, got {len(game.participants)}")

    participants = game.participants
    values = {
        "version": [int(version.major), int(version.minor), int(version.build)],
        "teams": 1 if game.teams else 0,
        "stage": _code(game.stage),
        "timer_seconds": int(game.timer_seconds),
        "damage_ratio": float(game.damage_ratio),
        "players": [
            {
                "character": _code(p.character),
                "kind": _code(p.kind),
                "stocks": int(p.stocks),
                "costume": int(p.costume),
                "team_shade": _code(p.team_shade),
                "handicap": int(p.handicap),
                "team": _code(p.team),
                "bitfield": int(p.bitfield),
                "cpu_level": int(p.cpu_level),
                "damage_start": int(p.damage_start),
                "damage_spawn": int(p.damage_spawn),
                "offense_ratio": float(p.offense_ratio),
                "defense_ratio": float(p.defense_ratio),
                "model_scale": float(p.model_scale),
            }
            for p in participants
        ],
        "random_seed": int(game.random_seed) & 0xFFFF_FFFF,
        "controller_fix": [
            {
                "dashback": _code(p.controller_fix.dashback) if p.controller_fix else int(ControllerFix.UCF),
                "shield_drop": _code(p.controller_fix.shield_drop) if p.controller_fix else int(ControllerFix.UCF),
            }
            for p in participants
        ],
        "pal": 1 if game.pal else 0,
        "frozen_stadium": 1 if game.frozen_stadium else 0,
        "major_scene": NETPLAY_SCENE if game.netplay else 2,
        "display_names": [encode_display_text(p.display_name or "", DISPLAY_NAME_SIZE) for p in participants],
        "connect_codes": [encode_connect_code(p.connect_code or "") for p in participants],
        "match_id": (game.match_id or "").encode("utf-8").ljust(MATCH_ID_SIZE, b"\x00")[:MATCH_ID_SIZE],
        "game_number": int(game.game_number or 0),
        "tiebreak_number": int(game.tiebreak_number or 0),
    }
    return GAME_START_LAYOUT.build(values, version)


def check_game_start(game: GameStart) -> list[Finding]:
    out: list[Finding] = []
    for p in game.participants:
        if isinstance(p.kind, UnknownCode):
            out.append(findings.warning(f"Invalid player type: {p.kind.value}", port=p.port))
        if not p.is_active:
            continue
        if isinstance(p.team_shade, UnknownCode):
            out.append(findings.warning(f"Invalid team shade: {p.team_shade.value}", port=p.port))
        if isinstance(p.team, UnknownCode):
            out.append(findings.warning(f"Invalid team ID: {p.team.value}", port=p.port))
        if isinstance(p.character, UnknownCode):
            out.append(findings.warning(f"Invalid character: {p.character.value}", port=p.port))
        if p.controller_fix is not None:
            for label, fix in (("dashback", p.controller_fix.dashback), ("shield drop", p.controller_fix.shield_drop)):
                if isinstance(fix, UnknownCode):
                    out.append(findings.warning(f"Invalid {label} fix: {fix.value}", port=p.port))
    if isinstance(game.stage, UnknownCode):
        out.append(findings.warning(f"Invalid stage: {code_label(game.stage)}"))
    return out


def check_tournament_legality(game: GameStart) -> list[Finding]:
    return [
        findings.warning(f"Not tournament legal ({code_label(p.character)})", port=p.port)
        for p in game.participants
        if not p.is_tournament_legal()
    ]
