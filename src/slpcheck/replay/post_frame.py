from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final

from construct import Byte, BytesInteger, Float32b, Int16ub, Int32sb, Int32ub, Struct

from ..melee import (
    COMPANION_INTERNAL,
    Attack,
    InternalCharacter,
    State,
    UnknownCode,
    Vec2,
    Velocity,
    attack_from_id,
    character_from_internal,
    code_label,
    resolve_action_state,
)
from ..melee.geom import Position
from ..version import Version
from . import findings
from .findings import Finding
from .layout import Gate, GatedLayout
from .pre_frame import MAX_PERCENT, VALID_ORIENTATIONS

MAX_SHIELD: Final[float] = 60.0
FLAG_BITS: Final[int] = 40
MAX_L_CANCEL: Final[int] = 2
MAX_HURTBOX: Final[int] = 2

POST_FRAME_LAYOUT = GatedLayout(
    name="post-frame",
    base=Struct(
        "frame_index" / Int32sb,
        "port" / Byte,
        "companion" / Byte,
        "character" / Byte,
        "action_state" / Int16ub,
        "position_x" / Float32b,
        "position_y" / Float32b,
        "orientation" / Float32b,
        "percent" / Float32b,
        "shield" / Float32b,
        "last_attack_landed" / Byte,
        "combo_count" / Byte,
        "last_hit_by" / Byte,
        "stocks" / Byte,
    ),
    gates=(
        Gate(Version(0, 2, 0), Struct("state_frame" / Float32b)),
        Gate(
            Version(2, 0, 0),
            Struct(
                # Five state bitfield bytes, lowest first.
                "flags" / BytesInteger(5, swapped=True),
                "misc_action_state" / Float32b,
                "airborne" / Byte,
                "last_ground_id" / Int16ub,
                "jumps_remaining" / Byte,
                "l_cancel" / Byte,
            ),
        ),
        Gate(Version(3, 1, 0), Struct("hurtbox" / Byte)),
        Gate(
            Version(3, 5, 0),
            Struct(
                "air_velocity_x" / Float32b,
                "air_velocity_y" / Float32b,
                "knockback_x" / Float32b,
                "knockback_y" / Float32b,
                "ground_velocity_x" / Float32b,
            ),
        ),
        Gate(Version(3, 8, 0), Struct("hitlag" / Float32b)),
        Gate(Version(3, 11, 0), Struct("animation_index" / Int32ub)),
        Gate(
            Version(3, 16, 0),
            Struct(
                "instance_hit_by" / Int16ub,
                "instance_id" / Int16ub,
            ),
        ),
    ),
)


@dataclass(frozen=True, slots=True)
class PostFrame:
    frame_index: int
    port: int
    companion: bool
    character: InternalCharacter | UnknownCode
    action_state: State
    position: Position
    orientation: float
    percent: float
    shield: float
    last_attack_landed: Attack | UnknownCode
    combo_count: int
    last_hit_by: int
    stocks: int
    state_frame: float | None = None
    flags: int | None = None
    misc_action_state: float | None = None
    grounded: bool | None = None
    last_ground_id: int | None = None
    jumps_remaining: int | None = None
    l_cancel: int | None = None
    hurtbox: int | None = None
    air_velocity: Velocity | None = None
    knockback: Velocity | None = None
    ground_velocity: Velocity | None = None
    hitlag: float | None = None
    animation_index: int | None = None
    instance_hit_by: int | None = None
    instance_id: int | None = None


def _opt_int(value: Any) -> int | None:
    return None if value is None else int(value)


def _opt_float(value: Any) -> float | None:
    return None if value is None else float(value)


def decode_post_frame(window: bytes | memoryview, version: Version) -> PostFrame:
    raw = POST_FRAME_LAYOUT.parse(window, version)
    character = character_from_internal(int(raw["character"]))

    air_velocity = knockback = ground_velocity = None
    if raw["air_velocity_x"] is not None:
        air_velocity = Vec2(float(raw["air_velocity_x"]), float(raw["air_velocity_y"]))
        knockback = Vec2(float(raw["knockback_x"]), float(raw["knockback_y"]))
        # Only the ground x speed is recorded; y is shared with the air velocity.
        ground_velocity = Vec2(float(raw["ground_velocity_x"]), air_velocity.y)

    airborne = raw["airborne"]
    return PostFrame(
        frame_index=int(raw["frame_index"]),
        port=int(raw["port"]),
        companion=int(raw["companion"]) != 0,
        character=character,
        action_state=resolve_action_state(int(raw["action_state"]), character),
        position=Vec2(float(raw["position_x"]), float(raw["position_y"])),
        orientation=float(raw["orientation"]),
        percent=float(raw["percent"]),
        shield=float(raw["shield"]),
        last_attack_landed=attack_from_id(int(raw["last_attack_landed"])),
        combo_count=int(raw["combo_count"]),
        last_hit_by=int(raw["last_hit_by"]),
        stocks=int(raw["stocks"]),
        state_frame=_opt_float(raw["state_frame"]),
        flags=_opt_int(raw["flags"]),
        misc_action_state=_opt_float(raw["misc_action_state"]),
        grounded=None if airborne is None else int(airborne) == 0,
        last_ground_id=_opt_int(raw["last_ground_id"]),
        jumps_remaining=_opt_int(raw["jumps_remaining"]),
        l_cancel=_opt_int(raw["l_cancel"]),
        hurtbox=_opt_int(raw["hurtbox"]),
        air_velocity=air_velocity,
        knockback=knockback,
        ground_velocity=ground_velocity,
        hitlag=_opt_float(raw["hitlag"]),
        animation_index=_opt_int(raw["animation_index"]),
        instance_hit_by=_opt_int(raw["instance_hit_by"]),
        instance_id=_opt_int(raw["instance_id"]),
    )


def encode_post_frame(frame: PostFrame, version: Version) -> bytes:
    air = frame.air_velocity or Vec2()
    knockback = frame.knockback or Vec2()
    ground = frame.ground_velocity or Vec2()
    return POST_FRAME_LAYOUT.build(
        {
            "frame_index": int(frame.frame_index),
            "port": int(frame.port),
            "companion": 1 if frame.companion else 0,
            "character": int(frame.character.value),
            "action_state": int(frame.action_state.value),
            "position_x": float(frame.position.x),
            "position_y": float(frame.position.y),
            "orientation": float(frame.orientation),
            "percent": float(frame.percent),
            "shield": float(frame.shield),
            "last_attack_landed": int(frame.last_attack_landed.value),
            "combo_count": int(frame.combo_count),
            "last_hit_by": int(frame.last_hit_by),
            "stocks": int(frame.stocks),
            "state_frame": float(frame.state_frame or 0.0),
            "flags": int(frame.flags or 0),
            "misc_action_state": float(frame.misc_action_state or 0.0),
            "airborne": 1 if frame.grounded is False else 0,
            "last_ground_id": int(frame.last_ground_id or 0),
            "jumps_remaining": int(frame.jumps_remaining or 0),
            "l_cancel": int(frame.l_cancel or 0),
            "hurtbox": int(frame.hurtbox or 0),
            "air_velocity_x": float(air.x),
            "air_velocity_y": float(air.y),
            "knockback_x": float(knockback.x),
            "knockback_y": float(knockback.y),
            "ground_velocity_x": float(ground.x),
            "hitlag": float(frame.hitlag or 0.0),
            "animation_index": int(frame.animation_index or 0),
            "instance_hit_by": int(frame.instance_hit_by or 0),
            "instance_id": int(frame.instance_id or 0),
        },
        version,
    )


def check_post_frame(frame: PostFrame) -> list[Finding]:
    idx = int(frame.frame_index)
    port = int(frame.port)
    out: list[Finding] = []

    def warn(message: str) -> None:
        out.append(findings.warning(message, frame_index=idx, port=port))

    if frame.companion and frame.character != COMPANION_INTERNAL:
        warn(f"Nana frame for non-Nana character: {code_label(frame.character)}")
    if isinstance(frame.character, UnknownCode):
        warn(f"Unknown internal character ID: {frame.character.value}")
    if isinstance(frame.action_state, UnknownCode):
        warn(f"Unknown state ID {frame.action_state.value} for character {code_label(frame.character)}")
    if frame.orientation not in VALID_ORIENTATIONS:
        warn(f"Invalid orientation raw value: {frame.orientation}")
    if not (0.0 <= frame.percent < MAX_PERCENT):
        warn(f"Invalid percent: {frame.percent}")
    if not (0.0 <= frame.shield <= MAX_SHIELD):
        warn(f"Invalid shield health: {frame.shield}")
    if isinstance(frame.last_attack_landed, UnknownCode):
        warn(f"Invalid attack ID: {frame.last_attack_landed.value}")
    if frame.flags is not None and int(frame.flags) >> FLAG_BITS:
        warn(f"Invalid flag bits set: {int(frame.flags):040b}")
    if frame.l_cancel is not None and int(frame.l_cancel) > MAX_L_CANCEL:
        warn(f"Invalid l cancel value: {frame.l_cancel}")
    if frame.hurtbox is not None and int(frame.hurtbox) > MAX_HURTBOX:
        warn(f"Invalid hurtbox value: {frame.hurtbox}")
    return out
