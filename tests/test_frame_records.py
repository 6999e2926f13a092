from __future__ import annotations

from dataclasses import replace

from replay_factory import make_game, make_item, make_post, make_pre

from slpcheck.melee import (
    ActionState,
    Character,
    CharacterState,
    InternalCharacter,
    UnknownCode,
    Vec2,
)
from slpcheck.replay.findings import Severity
from slpcheck.replay.frame_markers import (
    FrameEnd,
    FrameStart,
    decode_frame_end,
    decode_frame_start,
    encode_frame_end,
    encode_frame_start,
)
from slpcheck.replay.game_end import EndMethod, GameEnd, check_game_end, decode_game_end, encode_game_end
from slpcheck.replay.item_frame import check_item_frame, decode_item_frame, encode_item_frame
from slpcheck.replay.post_frame import check_post_frame, decode_post_frame, encode_post_frame
from slpcheck.replay.pre_frame import (
    check_pre_frame,
    decode_pre_frame,
    encode_pre_frame,
    resolve_pre_frame_state,
)
from slpcheck.version import Version

V = Version(3, 16, 0)


def test_pre_frame_decodes_and_passes_checks() -> None:
    game = make_game(Character.FOX, Character.MARTH)
    frame = replace(make_pre(10, 1), joystick=Vec2(0.5, -1.0), percent=42.0)
    decoded = decode_pre_frame(encode_pre_frame(frame, V), V, game)
    assert decoded.frame_index == 10
    assert decoded.port == 1
    assert decoded.action_state == ActionState.WAIT
    assert decoded.joystick == Vec2(0.5, -1.0)
    assert decoded.percent == 42.0
    assert check_pre_frame(decoded, game) == []


def test_pre_frame_old_version_has_no_percent() -> None:
    game = make_game(Character.FOX, Character.MARTH, version=Version(1, 3, 0))
    decoded = decode_pre_frame(encode_pre_frame(make_pre(0, 0), Version(1, 3, 0)), Version(1, 3, 0), game)
    assert decoded.raw_stick_x == 0
    assert decoded.percent is None
    assert decoded.raw_stick_y is None


def test_pre_frame_for_empty_port_is_error() -> None:
    game = make_game(Character.FOX, Character.MARTH)
    found = check_pre_frame(make_pre(5, 3), game)
    assert [(f.level, f.message) for f in found] == [(Severity.ERROR, "Frame data for a port with no participant")]
    assert found[0].describe() == "[Frame 5, Port 4] Frame data for a port with no participant"


def test_pre_frame_nana_for_non_climber_is_error() -> None:
    game = make_game(Character.FOX, Character.MARTH)
    found = check_pre_frame(make_pre(0, 0, companion=True), game)
    assert found[0].level == Severity.ERROR
    assert found[0].message == "Has Nana frame but is playing FOX (2)"


def test_pre_frame_range_warnings() -> None:
    game = make_game(Character.FOX, Character.MARTH)
    frame = replace(
        make_pre(0, 0),
        orientation=0.5,
        joystick=Vec2(1.5, 0.0),
        cstick=Vec2(0.0, -2.0),
        engine_trigger=1.5,
        engine_buttons=0x80,
        controller_l=-0.1,
        controller_r=2.0,
        percent=1000.0,
    )
    messages = [f.message for f in check_pre_frame(frame, game)]
    assert len(messages) == 8
    assert messages[0] == "Invalid orientation raw value: 0.5"
    assert messages[1].startswith("Invalid joystick coordinates")
    assert messages[4].startswith("Invalid bits set in engine buttons")
    assert messages[-1] == "Invalid percent: 1000.0"


def test_zelda_state_falls_back_to_sheik_table() -> None:
    game = make_game(Character.ZELDA, Character.MARTH)
    zelda = game.participant(0)
    # Zelda has 20 character states, Sheik has 26.
    assert resolve_pre_frame_state(341 + 5, zelda) == CharacterState(InternalCharacter.ZELDA, 5)
    assert resolve_pre_frame_state(341 + 22, zelda) == CharacterState(InternalCharacter.SHEIK, 22)
    assert isinstance(resolve_pre_frame_state(341 + 30, zelda), UnknownCode)
    assert isinstance(resolve_pre_frame_state(341 + 22, game.participant(1)), CharacterState)
    assert isinstance(resolve_pre_frame_state(341 + 40, game.participant(1)), UnknownCode)


def test_nana_states_resolve_against_nana() -> None:
    game = make_game(Character.ICE_CLIMBERS, Character.FOX)
    state = resolve_pre_frame_state(341 + 3, game.participant(0), companion=True)
    assert state == CharacterState(InternalCharacter.NANA, 3)


def test_post_frame_decodes_velocities() -> None:
    game = make_game(Character.FOX, Character.MARTH)
    frame = replace(
        make_post(7, game.participants[0]),
        air_velocity=Vec2(1.0, 2.0),
        ground_velocity=Vec2(3.0, 9.0),
        grounded=False,
    )
    decoded = decode_post_frame(encode_post_frame(frame, V), V)
    assert decoded.character == InternalCharacter.FOX
    assert decoded.air_velocity == Vec2(1.0, 2.0)
    # Ground y is not recorded and mirrors the air y.
    assert decoded.ground_velocity == Vec2(3.0, 2.0)
    assert decoded.grounded is False
    assert check_post_frame(decoded) == []


def test_post_frame_old_version_leaves_late_fields_unset() -> None:
    game = make_game(Character.FOX, Character.MARTH)
    old = Version(2, 0, 0)
    decoded = decode_post_frame(encode_post_frame(make_post(0, game.participants[0]), old), old)
    assert decoded.flags == 0
    assert decoded.grounded is True
    assert decoded.hurtbox is None
    assert decoded.air_velocity is None
    assert decoded.instance_id is None


def test_post_frame_range_warnings() -> None:
    game = make_game(Character.FOX, Character.MARTH)
    frame = replace(
        make_post(0, game.participants[0]),
        percent=-1.0,
        shield=61.0,
        flags=1 << 40,
        l_cancel=3,
        hurtbox=3,
    )
    messages = [f.message for f in check_post_frame(frame)]
    assert messages[0] == "Invalid percent: -1.0"
    assert messages[1] == "Invalid shield health: 61.0"
    assert messages[2].startswith("Invalid flag bits set")
    assert messages[3:] == ["Invalid l cancel value: 3", "Invalid hurtbox value: 3"]


def test_post_frame_nana_for_other_character_warns() -> None:
    game = make_game(Character.FOX, Character.MARTH)
    frame = replace(make_post(0, game.participants[0]), companion=True)
    found = check_post_frame(frame)
    assert [f.message for f in found] == ["Nana frame for non-Nana character: FOX (1)"]


def test_item_frame_checks_item_id() -> None:
    item = make_item(3, spawn_id=12)
    decoded = decode_item_frame(encode_item_frame(item, V), V)
    assert decoded.spawn_id == 12
    assert decoded.owner == 0
    assert check_item_frame(decoded) == []

    bad = replace(item, item=UnknownCode("item", 0x3FF))
    assert [f.message for f in check_item_frame(bad)] == ["Invalid item id: 1023"]


def test_frame_markers_follow_version() -> None:
    assert decode_frame_start(encode_frame_start(FrameStart(-50, 7), V), V) == FrameStart(-50, 7)
    old = Version(3, 0, 0)
    assert decode_frame_start(encode_frame_start(FrameStart(-50, 7), old), old) == FrameStart(-50, None)
    assert decode_frame_end(encode_frame_end(FrameEnd(4), V), V) == FrameEnd(4, 4)
    assert decode_frame_end(encode_frame_end(FrameEnd(4), old), old) == FrameEnd(4, None)


def test_game_end_checks() -> None:
    end = decode_game_end(encode_game_end(GameEnd(EndMethod.GAME, 1, (0, 1, -1, -1)), V), V)
    assert end == GameEnd(EndMethod.GAME, 1, (0, 1, -1, -1))
    assert check_game_end(end) == []

    unknown = decode_game_end(bytes([5]), Version(1, 0, 0))
    assert unknown.lras_initiator is None
    assert [f.message for f in check_game_end(unknown)] == ["Unknown game end method: 5"]

    bad = GameEnd(EndMethod.NO_CONTEST, 4, (0, 5, -1, -1))
    assert [f.message for f in check_game_end(bad)] == ["Invalid LRAS initiator: 4", "Invalid placement: 5"]
