from __future__ import annotations

from dataclasses import replace

from replay_factory import make_game, with_participant

from slpcheck.melee import Character, Stage, UnknownCode
from slpcheck.replay.findings import Severity
from slpcheck.replay.game_start import (
    GAME_START_LAYOUT,
    ControllerFix,
    MatchType,
    PlayerType,
    check_game_start,
    check_tournament_legality,
    decode_connect_code,
    decode_display_text,
    decode_game_start,
    encode_game_start,
    match_type_from_id,
)
from slpcheck.version import Version


def test_game_start_decodes_participants_and_settings() -> None:
    game = make_game(Character.FOX, Character.ICE_CLIMBERS, stage=Stage.FINAL_DESTINATION)
    decoded = decode_game_start(encode_game_start(game))

    assert decoded.version == Version(3, 16, 0)
    assert decoded.stage == Stage.FINAL_DESTINATION
    assert decoded.timer_seconds == 480
    assert decoded.netplay is True
    assert decoded.game_number == 1
    assert decoded.match_type == MatchType.UNRANKED
    assert [p.character for p in decoded.active_participants] == [Character.FOX, Character.ICE_CLIMBERS]
    assert decoded.participants[1].has_companion
    assert not decoded.participants[0].has_companion
    assert decoded.participants[2].kind == PlayerType.EMPTY
    fix = decoded.participants[0].controller_fix
    assert fix is not None and fix.dashback == ControllerFix.UCF
    assert check_game_start(decoded) == []


def test_game_start_names_use_shift_jis_and_fullwidth_hash() -> None:
    game = make_game(Character.FOX, Character.MARTH)
    game = with_participant(game, 0, display_name="マリオ", connect_code="MARI#123")
    decoded = decode_game_start(encode_game_start(game))
    assert decoded.participants[0].display_name == "マリオ"
    assert decoded.participants[0].connect_code == "MARI#123"
    assert decoded.participants[1].display_name == ""


def test_text_helpers() -> None:
    assert decode_connect_code("ABC＃1".encode("cp932") + b"\x00\x00") == "ABC#1"
    assert decode_display_text("テスト".encode("cp932") + b"\x00junk") == "テスト"


def test_old_versions_leave_late_fields_unset() -> None:
    game = make_game(Character.FOX, Character.MARTH, version=Version(2, 0, 0))
    raw = encode_game_start(game)
    assert len(raw) == GAME_START_LAYOUT.size_for(Version(2, 0, 0))
    decoded = decode_game_start(raw)
    assert decoded.frozen_stadium is False
    assert decoded.netplay is None
    assert decoded.match_id is None
    assert decoded.match_type == MatchType.UNKNOWN
    assert decoded.participants[0].display_name is None


def test_match_type_from_match_id() -> None:
    assert match_type_from_id("mode.ranked-2023-01-01T00:00:00.00-0") == MatchType.RANKED
    assert match_type_from_id("mode.direct-2023-01-01T00:00:00.00-0") == MatchType.DIRECT
    assert match_type_from_id("mode.unranked-2023") == MatchType.UNRANKED
    assert match_type_from_id("mode.xyz") == MatchType.UNKNOWN
    assert match_type_from_id("mode") == MatchType.UNKNOWN
    assert match_type_from_id(None) == MatchType.UNKNOWN


def test_check_game_start_flags_unknown_codes() -> None:
    game = make_game(Character.FOX, Character.MARTH)
    game = with_participant(game, 0, team_shade=UnknownCode("team shade", 7))
    game = with_participant(game, 1, character=UnknownCode("character", 40))
    game = replace(game, stage=UnknownCode("stage", 99))

    found = check_game_start(game)
    messages = [f.message for f in found]
    assert "Invalid team shade: 7" in messages
    assert "Invalid character: 40" in messages
    assert "Invalid stage: unknown stage (99)" in messages
    assert all(f.level == Severity.WARNING for f in found)


def test_check_game_start_ignores_empty_ports() -> None:
    game = make_game(Character.FOX, Character.MARTH)
    game = with_participant(game, 3, team_shade=UnknownCode("team shade", 9))
    assert check_game_start(game) == []


def test_tournament_legality() -> None:
    game = make_game(Character.FOX, Character.MARTH)
    assert check_tournament_legality(game) == []

    game = with_participant(game, 1, stocks=3)
    game = with_participant(game, 0, kind=PlayerType.CPU)
    found = check_tournament_legality(game)
    assert [f.port for f in found] == [0, 1]
    assert found[0].message == "Not tournament legal (FOX (2))"
