from __future__ import annotations

from pathlib import Path

import pytest
from replay_factory import ReplayBuilder, event_sizes, make_game, make_post, make_pre, one_v_one

from slpcheck.config import ValidatorConfig
from slpcheck.melee import Character
from slpcheck.replay.errors import BufferUnderflowError, ReplayFormatError
from slpcheck.replay.events import EventType
from slpcheck.replay.findings import Severity
from slpcheck.replay.validate import count_failures, validate_bytes, validate_file, validate_path
from slpcheck.version import Version


def test_minimal_replay_is_clean() -> None:
    data = one_v_one().frame(-123).game_end().build()
    result = validate_bytes(data, source="tiny.slp")
    assert result.ok
    assert result.frames_expected == 1
    assert result.frames_observed == 1
    assert result.rollback_frames == 0
    assert result.findings == ()
    assert result.clean
    assert result.summary() == (
        "tiny.slp: expected frames 1, actual frames 1, rollback frames 0 (0.00%), 0 errors, 0 warnings"
    )


def test_full_match_counts_every_frame() -> None:
    builder = one_v_one().frames(range(-123, 200), items=2).game_end()
    result = validate_bytes(builder.build())
    assert result.frames_expected == 323
    assert result.frames_observed == 323
    assert result.error_count == 0
    assert result.warning_count == 0
    assert result.game_start is not None and result.game_start.version == Version(3, 16, 0)
    assert result.game_end is not None


def test_rollback_is_info_only() -> None:
    builder = one_v_one().frames(range(-123, 13)).frames(range(9, 14)).game_end()
    result = validate_bytes(builder.build())
    assert result.error_count == 0
    assert result.frames_expected == 137
    assert result.frames_observed == 141
    assert result.rollback_frames == 4
    infos = [f.message for f in result.findings if f.level == Severity.INFO]
    assert infos == ["Rollback from frame 12 to frame 9"]


def test_rollback_limit_comes_from_config() -> None:
    builder = one_v_one().frames(range(-123, 13)).frames(range(9, 14)).game_end()
    result = validate_bytes(builder.build(), config=ValidatorConfig(rollback_limit=2))
    assert result.error_count == 1


@pytest.mark.parametrize(("jump_from", "jump_to"), [(10, 15), (50, 10)])
def test_frame_irregularities_are_errors(jump_from: int, jump_to: int) -> None:
    builder = one_v_one().frames(range(-123, jump_from + 1)).frame(jump_to).game_end()
    result = validate_bytes(builder.build())
    errors = [f.message for f in result.findings if f.level == Severity.ERROR]
    assert errors == [
        f"Unexpected frame ordering. Previous frame was index {jump_from}, current frame is index {jump_to}"
    ]


def test_ice_climbers_without_nana_is_clean() -> None:
    builder = ReplayBuilder(make_game(Character.ICE_CLIMBERS, Character.FOX))
    builder.frames(range(-123, -100)).frames(range(-100, -50), with_companion=False).frames(range(-50, 0))
    result = validate_bytes(builder.game_end().build())
    assert result.error_count == 0
    assert result.frames_observed == 123


def test_nana_post_frame_for_other_character_breaks_ordering() -> None:
    builder = one_v_one()
    game = builder.game
    builder.frame(-123)
    builder.frame_start(-122)
    builder.pre(make_pre(-122, 0)).pre(make_pre(-122, 1))
    builder.post(make_post(-122, game.participants[0]))
    builder.post(make_post(-122, game.participants[0], companion=True))
    builder.post(make_post(-122, game.participants[1]))
    builder.frame_end(-122)
    builder.frame(-121).game_end()

    result = validate_bytes(builder.build())
    errors = [f.message for f in result.findings if f.level == Severity.ERROR]
    assert len(errors) == 2
    assert errors[0].endswith("got POST_FRAME (port 1, Nana) for frame -122")


def test_duplicate_game_end_and_trailing_events() -> None:
    builder = one_v_one().frame(-123).game_end().frame(-122).game_end()
    result = validate_bytes(builder.build())
    warnings = [f.message for f in result.findings if f.level == Severity.WARNING]
    assert warnings == ["Duplicate game end event", "6 events after game end"]
    assert result.frames_observed == 1


def test_truncated_event_after_game_end_stops_scan() -> None:
    builder = one_v_one().frame(-123).game_end().event(EventType.FRAME_START, b"\x00")
    result = validate_bytes(builder.build())
    assert result.ok
    assert result.frames_observed == 1
    assert result.game_end is not None
    assert [f.message for f in result.findings] == ["Truncated FRAME_START event after game end; stopped scanning"]


def test_missing_game_end_is_warning() -> None:
    result = validate_bytes(one_v_one().frame(-123).build())
    assert result.ok
    assert [f.message for f in result.findings] == ["Replay has no game end event"]
    assert result.game_end is None


def test_unknown_event_code_is_skipped() -> None:
    builder = one_v_one()
    sizes = {**event_sizes(builder.version), 0x50: 2}
    builder.frame(-123).event(0x50, b"\x00\x00").frame(-122).game_end()
    result = validate_bytes(builder.build(sizes=sizes))
    assert result.ok
    assert result.frames_observed == 2
    assert [f.message for f in result.findings] == ["Unknown event type: 80"]


def test_event_missing_from_table_is_fatal() -> None:
    builder = one_v_one()
    sizes = event_sizes(builder.version)
    del sizes[EventType.ITEM]
    data = builder.frame(-123, items=1).game_end().build(sizes=sizes)
    with pytest.raises(ReplayFormatError, match="missing from the event payloads table"):
        validate_bytes(data)


def test_truncated_payload_size_is_fatal() -> None:
    builder = one_v_one()
    sizes = {**event_sizes(builder.version), EventType.FRAME_START: 2}
    data = builder.frame(-123).game_end().build(sizes=sizes)
    with pytest.raises(BufferUnderflowError, match="frame start payload truncated"):
        validate_bytes(data)


def test_game_start_must_follow_table() -> None:
    builder = one_v_one()
    table = bytes([0x35, 4, 0x37, 0x00, 0x40])
    with pytest.raises(ReplayFormatError):
        validate_bytes(builder.frame(-123).build(table=table))


def test_older_replay_validates() -> None:
    builder = ReplayBuilder(make_game(Character.FOX, Character.MARTH, version=Version(3, 0, 0)))
    result = validate_bytes(builder.frames(range(-123, -60)).game_end().build())
    assert result.version == Version(3, 0, 0)
    assert result.error_count == 0
    assert result.warning_count == 0


@pytest.mark.parametrize("characters", [(Character.FOX, Character.MARTH), (Character.FOX, Character.ICE_CLIMBERS)])
def test_replay_without_frame_end_events_is_ordered(characters: tuple[Character, Character]) -> None:
    builder = ReplayBuilder(make_game(*characters, version=Version(2, 2, 0)))
    result = validate_bytes(builder.frames(range(-123, -113)).game_end().build())
    assert result.ok
    assert result.frames_observed == 10
    assert result.error_count == 0


def test_buffer_types_give_the_same_result() -> None:
    data = one_v_one().frames(range(-123, -110), items=1).game_end().build()
    expected = validate_bytes(data)
    for buffer in (bytearray(data), memoryview(data)):
        result = validate_bytes(buffer)
        assert result.findings == expected.findings
        assert result.frames_observed == expected.frames_observed == 13


def test_newer_replay_is_still_read() -> None:
    builder = ReplayBuilder(make_game(Character.FOX, Character.MARTH, version=Version(3, 18, 0)))
    result = validate_bytes(builder.frames(range(-123, -100)).game_end().build())
    assert result.ok
    assert result.version == Version(3, 18, 0)


def test_legality_check_is_opt_in() -> None:
    builder = ReplayBuilder(make_game(Character.FOX, Character.MARTH, stocks=3))
    data = builder.frame(-123).game_end().build()
    assert validate_bytes(data).warning_count == 0
    result = validate_bytes(data, config=ValidatorConfig(check_legality=True))
    assert result.warning_count == 2


def test_validate_path_keeps_going_after_fatal_file(tmp_path: Path) -> None:
    good = one_v_one().frame(-123).game_end()
    (tmp_path / "a_bad.slp").write_bytes(good.build(table=bytes([0x35, 5, 0x36, 0x00, 0x10, 0x00])))
    (tmp_path / "b_good.slp").write_bytes(good.build())
    (tmp_path / "notes.txt").write_text("ignored")

    results = validate_path(tmp_path)
    assert [Path(r.source).name for r in results] == ["a_bad.slp", "b_good.slp"]
    assert not results[0].ok
    assert "event payloads table length invalid: 5" in str(results[0].fatal)
    assert results[0].summary().endswith("failed: event payloads table length invalid: 5")
    assert results[1].clean
    assert count_failures(results) == 1


def test_validate_file_reports_unreadable_input(tmp_path: Path) -> None:
    path = tmp_path / "junk.slp"
    path.write_bytes(b"\x00" * 40)
    result = validate_file(path)
    assert not result.ok
    assert result.fatal == "invalid Slippi signature"


def test_validate_path_missing(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        validate_path(tmp_path / "nope.slp")


def test_count_failures_strict_counts_errors() -> None:
    builder = one_v_one().frames(range(-123, 11)).frame(15).game_end()
    results = [validate_bytes(builder.build())]
    assert count_failures(results) == 0
    assert count_failures(results, strict=True) == 1
