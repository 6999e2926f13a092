from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
import io
from types import MappingProxyType
from typing import Final

from construct import Array, Byte, ConstructError, Int16ub, StreamError, Struct

from .errors import BufferUnderflowError, ReplayFormatError


class EventType(IntEnum):
    MESSAGE_SPLITTER = 0x10
    EVENT_PAYLOADS = 0x35
    GAME_START = 0x36
    PRE_FRAME = 0x37
    POST_FRAME = 0x38
    GAME_END = 0x39
    FRAME_START = 0x3A
    ITEM = 0x3B
    FRAME_END = 0x3C
    GECKO_LIST = 0x3D


# Known events that carry nothing the validator looks at.
SILENT_EVENTS: Final[frozenset[EventType]] = frozenset({EventType.GECKO_LIST, EventType.MESSAGE_SPLITTER})

_TABLE_HEAD = Struct(
    "code" / Byte,
    "length" / Byte,
)

_TABLE_ENTRY = Struct(
    "code" / Byte,
    "size" / Int16ub,
)


def event_label(code: int) -> str:
    try:
        return EventType(int(code)).name
    except ValueError:
        return f"0x{int(code):02X}"


@dataclass(frozen=True, slots=True)
class EventSizeTable:
    """Payload size for every event code the replay declares, excluding the code byte."""

    sizes: Mapping[int, int]
    length: int

    @property
    def consumed(self) -> int:
        # code byte + length byte + entries; `length` already counts itself.
        return 1 + int(self.length)

    def get(self, code: int) -> int | None:
        return self.sizes.get(int(code))

    def size_of(self, code: int) -> int:
        size = self.sizes.get(int(code))
        if size is None:
            raise ReplayFormatError(f"event {event_label(code)} missing from the event payloads table")
        return int(size)


def decode_event_sizes(window: bytes | memoryview) -> EventSizeTable:
    stream = io.BytesIO(bytes(window))
    try:
        head = _TABLE_HEAD.parse_stream(stream)
    except StreamError as exc:
        raise BufferUnderflowError("event payloads table truncated") from exc

    code = int(head["code"])
    if code != EventType.EVENT_PAYLOADS:
        raise ReplayFormatError(f"expected EVENT_PAYLOADS (0x35), got 0x{code:02X}")

    length = int(head["length"])
    if length < 1 or (length - 1) % 3 != 0:
        raise ReplayFormatError(f"event payloads table length invalid: {length}")

    try:
        entries = Array((length - 1) // 3, _TABLE_ENTRY).parse_stream(stream)
    except StreamError as exc:
        raise BufferUnderflowError(f"event payloads table truncated: declared length {length}") from exc
    except ConstructError as exc:
        raise ReplayFormatError(str(exc)) from exc

    sizes: dict[int, int] = {}
    for entry in entries:
        # Later duplicates win.
        sizes[int(entry["code"])] = int(entry["size"])
    return EventSizeTable(sizes=MappingProxyType(sizes), length=length)


def encode_event_sizes(sizes: Mapping[int, int]) -> bytes:
    entries = [{"code": int(code) & 0xFF, "size": int(size) & 0xFFFF} for code, size in sizes.items()]
    length = 1 + 3 * len(entries)
    if length > 0xFF:
        raise ValueError(f"too many event sizes: {len(entries)}")
    return _TABLE_HEAD.build({"code": int(EventType.EVENT_PAYLOADS), "length": length}) + Array(
        len(entries), _TABLE_ENTRY
    ).build(entries)
