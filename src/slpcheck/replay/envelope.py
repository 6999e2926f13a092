from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import io
import logging
from typing import Any, Final

from construct import Const, ConstError, ConstructError, Int32ub, StreamError, Struct
import ubjson

from .errors import BufferUnderflowError, ReplayFormatError

logger = logging.getLogger(__name__)

SIGNATURE: Final[bytes] = b"{U\x03raw[$U#l"
METADATA_MARKER: Final[bytes] = b"U\x08metadata{"
EVENTS_OFFSET: Final[int] = len(SIGNATURE) + 4

# Frame indices start at -123; `lastFrame + 124` is the number of frames played.
FIRST_FRAME_INDEX: Final[int] = -123
FRAME_COUNT_OFFSET: Final[int] = 1 - FIRST_FRAME_INDEX

_HEADER = Struct(
    "signature" / Const(SIGNATURE),
    "raw_length" / Int32ub,
)


@dataclass(frozen=True, slots=True)
class Metadata:
    last_frame: int | None = None
    start_at: str | None = None
    document: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def expected_frames(self) -> int | None:
        if self.last_frame is None:
            return None
        return int(self.last_frame) + FRAME_COUNT_OFFSET


@dataclass(frozen=True, slots=True)
class Envelope:
    raw_length: int
    metadata: Metadata

    @property
    def events_start(self) -> int:
        return EVENTS_OFFSET

    @property
    def events_end(self) -> int:
        return EVENTS_OFFSET + int(self.raw_length)


def decode_metadata(window: bytes | memoryview) -> Metadata:
    """Decode the trailing metadata block, starting at its `metadata` key."""
    data = bytes(window)
    if len(data) < len(METADATA_MARKER):
        raise BufferUnderflowError("metadata block truncated")
    if data[: len(METADATA_MARKER)] != METADATA_MARKER:
        raise ReplayFormatError(f"expected metadata marker {METADATA_MARKER!r}, got {data[: len(METADATA_MARKER)]!r}")

    # The marker ends with the object's opening brace; hand the whole object to the decoder.
    try:
        document = ubjson.loadb(data[len(METADATA_MARKER) - 1 :])
    except ubjson.DecoderException as exc:
        raise ReplayFormatError(f"metadata document undecodable: {exc}") from exc
    if not isinstance(document, dict):
        raise ReplayFormatError(f"metadata document is not an object: {type(document).__name__}")

    last_frame = document.get("lastFrame")
    start_at = document.get("startAt")
    if not isinstance(last_frame, int) or isinstance(last_frame, bool):
        last_frame = None
    if not isinstance(start_at, str):
        start_at = None
    return Metadata(last_frame=last_frame, start_at=start_at, document=document)


def read_envelope(data: bytes | memoryview) -> Envelope:
    stream = io.BytesIO(bytes(data))
    try:
        header = _HEADER.parse_stream(stream)
    except StreamError as exc:
        raise BufferUnderflowError("unexpected EOF in replay header") from exc
    except ConstError as exc:
        raise ReplayFormatError("invalid Slippi signature") from exc
    except ConstructError as exc:
        raise ReplayFormatError(str(exc)) from exc

    raw_length = int(header["raw_length"])
    logger.debug("raw length: %d", raw_length)
    metadata = decode_metadata(memoryview(data)[EVENTS_OFFSET + raw_length :])
    if metadata.expected_frames is not None:
        logger.debug("frame count: %d", metadata.expected_frames)
    if metadata.start_at is not None:
        logger.debug("date: %s", metadata.start_at)
    return Envelope(raw_length=raw_length, metadata=metadata)


def encode_envelope(events: bytes, metadata: Mapping[str, Any]) -> bytes:
    """Wrap an event stream and a metadata object into a complete replay file."""
    out = bytearray()
    out += _HEADER.build({"raw_length": len(events)})
    out += events
    out += METADATA_MARKER[:-1]
    out += ubjson.dumpb(dict(metadata))
    out += b"}"
    return bytes(out)
