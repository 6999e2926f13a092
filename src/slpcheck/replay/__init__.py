from __future__ import annotations

from .envelope import Envelope, Metadata, decode_metadata, encode_envelope, read_envelope
from .errors import BufferUnderflowError, ReplayFormatError
from .events import EventSizeTable, EventType, decode_event_sizes, encode_event_sizes
from .findings import Finding, Severity
from .frame_markers import FrameEnd, FrameStart, decode_frame_end, decode_frame_start
from .game_end import EndMethod, GameEnd, check_game_end, decode_game_end
from .game_start import (
    ControllerFix,
    GameStart,
    MatchType,
    Participant,
    PlayerType,
    TeamColor,
    TeamShade,
    check_game_start,
    decode_game_start,
)
from .item_frame import ItemFrame, check_item_frame, decode_item_frame
from .layout import Gate, GatedLayout
from .ordering import DecodeSession, ExpectedEvent, build_expected_order
from .post_frame import PostFrame, check_post_frame, decode_post_frame
from .pre_frame import PreFrame, check_pre_frame, decode_pre_frame
from .validate import ValidationResult, validate_bytes, validate_file, validate_path

__all__ = [
    "BufferUnderflowError",
    "ControllerFix",
    "DecodeSession",
    "EndMethod",
    "Envelope",
    "EventSizeTable",
    "EventType",
    "ExpectedEvent",
    "Finding",
    "FrameEnd",
    "FrameStart",
    "GameEnd",
    "GameStart",
    "Gate",
    "GatedLayout",
    "ItemFrame",
    "MatchType",
    "Metadata",
    "Participant",
    "PlayerType",
    "PostFrame",
    "PreFrame",
    "ReplayFormatError",
    "Severity",
    "TeamColor",
    "TeamShade",
    "ValidationResult",
    "build_expected_order",
    "check_game_end",
    "check_game_start",
    "check_item_frame",
    "check_post_frame",
    "check_pre_frame",
    "decode_event_sizes",
    "decode_frame_end",
    "decode_frame_start",
    "decode_game_end",
    "decode_game_start",
    "decode_item_frame",
    "decode_metadata",
    "decode_post_frame",
    "decode_pre_frame",
    "encode_envelope",
    "encode_event_sizes",
    "read_envelope",
    "validate_bytes",
    "validate_file",
    "validate_path",
]
