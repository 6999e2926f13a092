from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from construct import Int32sb, Int32ub, Struct

from ..version import Version
from .layout import Gate, GatedLayout

# Frame start events were added in 2.2.0 and frame end events in 3.0.0.
FRAME_START_SINCE: Final[Version] = Version(2, 2, 0)
FRAME_END_SINCE: Final[Version] = Version(3, 0, 0)

FRAME_START_LAYOUT = GatedLayout(
    name="frame start",
    base=Struct(
        "frame_index" / Int32sb,
        "random_seed" / Int32ub,
    ),
    gates=(Gate(Version(3, 10, 0), Struct("scene_frame_counter" / Int32ub)),),
)

FRAME_END_LAYOUT = GatedLayout(
    name="frame end",
    base=Struct("frame_index" / Int32sb),
    gates=(Gate(Version(3, 7, 0), Struct("latest_finalized" / Int32sb)),),
)


@dataclass(frozen=True, slots=True)
class FrameStart:
    frame_index: int
    scene_frame_counter: int | None = None


@dataclass(frozen=True, slots=True)
class FrameEnd:
    frame_index: int
    latest_finalized: int | None = None


def decode_frame_start(window: bytes | memoryview, version: Version) -> FrameStart:
    raw = FRAME_START_LAYOUT.parse(window, version)
    counter = raw["scene_frame_counter"]
    # The random seed is read past but not kept.
    return FrameStart(
        frame_index=int(raw["frame_index"]),
        scene_frame_counter=None if counter is None else int(counter),
    )


def decode_frame_end(window: bytes | memoryview, version: Version) -> FrameEnd:
    raw = FRAME_END_LAYOUT.parse(window, version)
    finalized = raw["latest_finalized"]
    return FrameEnd(
        frame_index=int(raw["frame_index"]),
        latest_finalized=None if finalized is None else int(finalized),
    )


def encode_frame_start(frame: FrameStart, version: Version, *, random_seed: int = 0) -> bytes:
    return FRAME_START_LAYOUT.build(
        {
            "frame_index": int(frame.frame_index),
            "random_seed": int(random_seed) & 0xFFFF_FFFF,
            "scene_frame_counter": int(frame.scene_frame_counter or 0),
        },
        version,
    )


def encode_frame_end(frame: FrameEnd, version: Version) -> bytes:
    latest = frame.frame_index if frame.latest_finalized is None else frame.latest_finalized
    return FRAME_END_LAYOUT.build(
        {"frame_index": int(frame.frame_index), "latest_finalized": int(latest)},
        version,
    )
