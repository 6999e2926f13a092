from __future__ import annotations

from dataclasses import dataclass

from construct import Byte, Float32b, Int8sb, Int16ub, Int32sb, Int32ub, Struct

from ..melee import Item, UnknownCode, Vec2, Velocity, item_from_id
from ..melee.geom import Position
from ..version import Version
from . import findings
from .findings import Finding
from .layout import Gate, GatedLayout

ITEM_FRAME_LAYOUT = GatedLayout(
    name="item frame",
    base=Struct(
        "frame_index" / Int32sb,
        "item" / Int16ub,
        "state" / Byte,
        "orientation" / Float32b,
        "velocity_x" / Float32b,
        "velocity_y" / Float32b,
        "position_x" / Float32b,
        "position_y" / Float32b,
        "damage_taken" / Int16ub,
        "expiration_timer" / Float32b,
        "spawn_id" / Int32ub,
    ),
    gates=(
        Gate(
            Version(3, 2, 0),
            Struct(
                "missile_type" / Byte,
                "turnip_face" / Byte,
                "launched" / Byte,
                "charge_power" / Byte,
            ),
        ),
        Gate(Version(3, 6, 0), Struct("owner" / Int8sb)),
        Gate(Version(3, 16, 0), Struct("instance_id" / Int16ub)),
    ),
)


@dataclass(frozen=True, slots=True)
class ItemFrame:
    frame_index: int
    item: Item | UnknownCode
    state: int
    orientation: float
    velocity: Velocity
    position: Position
    damage_taken: int
    expiration_timer: float
    # Unique per spawned item within one game.
    spawn_id: int
    missile_type: int | None = None
    turnip_face: int | None = None
    launched: bool | None = None
    charge_power: int | None = None
    owner: int | None = None
    instance_id: int | None = None


def decode_item_frame(window: bytes | memoryview, version: Version) -> ItemFrame:
    raw = ITEM_FRAME_LAYOUT.parse(window, version)
    missile = raw["missile_type"]
    owner = raw["owner"]
    instance_id = raw["instance_id"]
    return ItemFrame(
        frame_index=int(raw["frame_index"]),
        item=item_from_id(int(raw["item"])),
        state=int(raw["state"]),
        orientation=float(raw["orientation"]),
        velocity=Vec2(float(raw["velocity_x"]), float(raw["velocity_y"])),
        position=Vec2(float(raw["position_x"]), float(raw["position_y"])),
        damage_taken=int(raw["damage_taken"]),
        expiration_timer=float(raw["expiration_timer"]),
        spawn_id=int(raw["spawn_id"]),
        missile_type=None if missile is None else int(missile),
        turnip_face=None if missile is None else int(raw["turnip_face"]),
        launched=None if missile is None else int(raw["launched"]) != 0,
        charge_power=None if missile is None else int(raw["charge_power"]),
        owner=None if owner is None else int(owner),
        instance_id=None if instance_id is None else int(instance_id),
    )


def encode_item_frame(frame: ItemFrame, version: Version) -> bytes:
    return ITEM_FRAME_LAYOUT.build(
        {
            "frame_index": int(frame.frame_index),
            "item": int(frame.item.value),
            "state": int(frame.state),
            "orientation": float(frame.orientation),
            "velocity_x": float(frame.velocity.x),
            "velocity_y": float(frame.velocity.y),
            "position_x": float(frame.position.x),
            "position_y": float(frame.position.y),
            "damage_taken": int(frame.damage_taken),
            "expiration_timer": float(frame.expiration_timer),
            "spawn_id": int(frame.spawn_id) & 0xFFFF_FFFF,
            "missile_type": int(frame.missile_type or 0),
            "turnip_face": int(frame.turnip_face or 0),
            "launched": 1 if frame.launched else 0,
            "charge_power": int(frame.charge_power or 0),
            "owner": -1 if frame.owner is None else int(frame.owner),
            "instance_id": int(frame.instance_id or 0),
        },
        version,
    )


def check_item_frame(frame: ItemFrame) -> list[Finding]:
    if isinstance(frame.item, UnknownCode):
        return [findings.warning(f"Invalid item id: {frame.item.value}", frame_index=int(frame.frame_index))]
    return []
