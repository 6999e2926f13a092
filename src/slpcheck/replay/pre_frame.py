from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from construct import Byte, Float32b, Int8sb, Int16ub, Int32sb, Int32ub, Struct

from ..melee import (
    ALTERNATE_FORMS,
    COMPANION_CHARACTER,
    COMPANION_INTERNAL,
    Character,
    InternalCharacter,
    State,
    StickPos,
    UnknownCode,
    Vec2,
    code_label,
    resolve_action_state,
    to_internal,
)
from ..melee.geom import Position
from ..version import Version
from . import findings
from .findings import Finding
from .game_start import GameStart, Participant
from .layout import Gate, GatedLayout

# Engine button bits the game never sets.
UNUSED_ENGINE_BUTTONS: Final[int] = 0x7F00_E080
VALID_ORIENTATIONS: Final[frozenset[float]] = frozenset({-1.0, 0.0, 1.0})
MAX_PERCENT: Final[float] = 1000.0

PRE_FRAME_LAYOUT = GatedLayout(
    name="pre-frame",
    base=Struct(
        "frame_index" / Int32sb,
        "port" / Byte,
        "companion" / Byte,
        "random_seed" / Int32ub,
        "action_state" / Int16ub,
        "position_x" / Float32b,
        "position_y" / Float32b,
        "orientation" / Float32b,
        "joystick_x" / Float32b,
        "joystick_y" / Float32b,
        "cstick_x" / Float32b,
        "cstick_y" / Float32b,
        "engine_trigger" / Float32b,
        "engine_buttons" / Int32ub,
        "controller_buttons" / Int16ub,
        "controller_l" / Float32b,
        "controller_r" / Float32b,
    ),
    gates=(
        Gate(Version(1, 2, 0), Struct("raw_stick_x" / Int8sb)),
        Gate(Version(1, 4, 0), Struct("percent" / Float32b)),
        Gate(Version(3, 15, 0), Struct("raw_stick_y" / Int8sb)),
    ),
)


@dataclass(frozen=True, slots=True)
class PreFrame:
    frame_index: int
    port: int
    companion: bool
    random_seed: int
    action_state: State
    position: Position
    orientation: float
    joystick: StickPos
    cstick: StickPos
    engine_trigger: float
    engine_buttons: int
    controller_buttons: int
    controller_l: float
    controller_r: float
    raw_stick_x: int | None = None
    percent: float | None = None
    raw_stick_y: int | None = None


def _state_owner(participant: Participant | None, companion: bool) -> InternalCharacter | UnknownCode | None:
    if participant is None:
        return None
    if companion and participant.character == COMPANION_CHARACTER:
        return COMPANION_INTERNAL
    return to_internal(participant.character)


def resolve_pre_frame_state(value: int, participant: Participant | None, *, companion: bool = False) -> State:
    """Resolve a pre-frame action state against the participant's character.

    Zelda may have transformed mid-match, so a state that is unknown for her is
    retried against Sheik's table using the same raw value.
    """
    state = resolve_action_state(value, _state_owner(participant, companion))
    if isinstance(state, UnknownCode) and participant is not None and isinstance(participant.character, Character):
        alternate = ALTERNATE_FORMS.get(participant.character)
        if alternate is not None:
            return resolve_action_state(value, to_internal(alternate))
    return state


def decode_pre_frame(window: bytes | memoryview, version: Version, game: GameStart) -> PreFrame:
    raw = PRE_FRAME_LAYOUT.parse(window, version)
    port = int(raw["port"])
    companion = int(raw["companion"]) == 1
    raw_stick_x = raw["raw_stick_x"]
    percent = raw["percent"]
    raw_stick_y = raw["raw_stick_y"]
    return PreFrame(
        frame_index=int(raw["frame_index"]),
        port=port,
        companion=companion,
        random_seed=int(raw["random_seed"]),
        action_state=resolve_pre_frame_state(int(raw["action_state"]), game.participant(port), companion=companion),
        position=Vec2(float(raw["position_x"]), float(raw["position_y"])),
        orientation=float(raw["orientation"]),
        joystick=Vec2(float(raw["joystick_x"]), float(raw["joystick_y"])),
        cstick=Vec2(float(raw["cstick_x"]), float(raw["cstick_y"])),
        engine_trigger=float(raw["engine_trigger"]),
        engine_buttons=int(raw["engine_buttons"]),
        controller_buttons=int(raw["controller_buttons"]),
        controller_l=float(raw["controller_l"]),
        controller_r=float(raw["controller_r"]),
        raw_stick_x=None if raw_stick_x is None else int(raw_stick_x),
        percent=None if percent is None else float(percent),
        raw_stick_y=None if raw_stick_y is None else int(raw_stick_y),
    )


def encode_pre_frame(frame: PreFrame, version: Version) -> bytes:
    return PRE_FRAME_LAYOUT.build(
        {
            "frame_index": int(frame.frame_index),
            "port": int(frame.port),
            "companion": 1 if frame.companion else 0,
            "random_seed": int(frame.random_seed) & 0xFFFF_FFFF,
            "action_state": int(frame.action_state.value),
            "position_x": float(frame.position.x),
            "position_y": float(frame.position.y),
            "orientation": float(frame.orientation),
            "joystick_x": float(frame.joystick.x),
            "joystick_y": float(frame.joystick.y),
            "cstick_x": float(frame.cstick.x),
            "cstick_y": float(frame.cstick.y),
            "engine_trigger": float(frame.engine_trigger),
            "engine_buttons": int(frame.engine_buttons) & 0xFFFF_FFFF,
            "controller_buttons": int(frame.controller_buttons) & 0xFFFF,
            "controller_l": float(frame.controller_l),
            "controller_r": float(frame.controller_r),
            "raw_stick_x": int(frame.raw_stick_x or 0),
            "percent": float(frame.percent or 0.0),
            "raw_stick_y": int(frame.raw_stick_y or 0),
        },
        version,
    )


def check_pre_frame(frame: PreFrame, game: GameStart) -> list[Finding]:
    idx = int(frame.frame_index)
    port = int(frame.port)
    out: list[Finding] = []

    def warn(message: str) -> None:
        out.append(findings.warning(message, frame_index=idx, port=port))

    participant = game.participant(port)
    if participant is None or not participant.is_active:
        out.append(findings.error("Frame data for a port with no participant", frame_index=idx, port=port))
    elif frame.companion and participant.character != COMPANION_CHARACTER:
        out.append(
            findings.error(
                f"Has Nana frame but is playing {code_label(participant.character)}",
                frame_index=idx,
                port=port,
            )
        )

    if isinstance(frame.action_state, UnknownCode):
        warn(f"Unknown state: {frame.action_state.value}")
    if frame.orientation not in VALID_ORIENTATIONS:
        warn(f"Invalid orientation raw value: {frame.orientation}")
    if not frame.joystick.within(-1.0, 1.0):
        warn(f"Invalid joystick coordinates: {frame.joystick}")
    if not frame.cstick.within(-1.0, 1.0):
        warn(f"Invalid cstick coordinates: {frame.cstick}")
    if not (0.0 <= frame.engine_trigger <= 1.0):
        warn(f"Invalid engine trigger value: {frame.engine_trigger}")
    if int(frame.engine_buttons) & UNUSED_ENGINE_BUTTONS:
        warn(f"Invalid bits set in engine buttons: {int(frame.engine_buttons):032b}")
    if not (0.0 <= frame.controller_l <= 1.0):
        warn(f"Invalid controller L value: {frame.controller_l}")
    if not (0.0 <= frame.controller_r <= 1.0):
        warn(f"Invalid controller R value: {frame.controller_r}")
    if frame.percent is not None and not (0.0 <= frame.percent < MAX_PERCENT):
        warn(f"Invalid percent: {frame.percent}")
    return out
