from __future__ import annotations

import pytest

from slpcheck.replay.errors import BufferUnderflowError, ReplayFormatError
from slpcheck.replay.events import EventType, decode_event_sizes, encode_event_sizes, event_label


def test_event_sizes_table_decodes_entries() -> None:
    raw = encode_event_sizes({EventType.GAME_START: 0x2FD, EventType.PRE_FRAME: 0x40})
    table = decode_event_sizes(raw + b"\x36")
    assert table.length == 7
    assert table.consumed == 8
    assert table.size_of(EventType.GAME_START) == 0x2FD
    assert table.get(EventType.PRE_FRAME) == 0x40
    assert table.get(EventType.POST_FRAME) is None


def test_event_sizes_later_duplicate_wins() -> None:
    raw = bytes([0x35, 7, 0x37, 0x00, 10, 0x37, 0x00, 20])
    assert decode_event_sizes(raw).size_of(EventType.PRE_FRAME) == 20


def test_event_sizes_rejects_bad_length() -> None:
    with pytest.raises(ReplayFormatError, match="length invalid: 5"):
        decode_event_sizes(bytes([0x35, 5, 0x36, 0x00, 0x10, 0x00]))
    with pytest.raises(ReplayFormatError, match="length invalid: 0"):
        decode_event_sizes(bytes([0x35, 0]))


def test_event_sizes_requires_payloads_code_first() -> None:
    with pytest.raises(ReplayFormatError, match="expected EVENT_PAYLOADS"):
        decode_event_sizes(bytes([0x36, 4, 0x37, 0x00, 0x40]))


def test_event_sizes_truncated_table() -> None:
    with pytest.raises(BufferUnderflowError):
        decode_event_sizes(bytes([0x35, 7, 0x36, 0x00]))


def test_missing_code_lookup_names_the_event() -> None:
    table = decode_event_sizes(encode_event_sizes({EventType.GAME_START: 10}))
    with pytest.raises(ReplayFormatError, match="FRAME_END"):
        table.size_of(EventType.FRAME_END)
    assert event_label(0x50) == "0x50"
