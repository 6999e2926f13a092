from __future__ import annotations

import msgspec
import pytest
from replay_factory import one_v_one

from slpcheck.replay.report import decode_report, encode_report
from slpcheck.replay.validate import ValidationResult, validate_bytes


def test_report_json_carries_counts_and_findings() -> None:
    good = validate_bytes(one_v_one().frames(range(-123, 11)).frame(15).game_end().build(), source="a.slp")
    failed = ValidationResult(source="b.slp", ok=False, fatal="invalid Slippi signature")

    report = decode_report(encode_report([good, failed]))
    assert report.failed == 1
    first, second = report.files
    assert first.source == "a.slp"
    assert first.version == "v3.16.0"
    assert first.frames_observed == 135
    assert first.error_count == 1
    assert first.findings[0].level == "ERROR"
    assert first.findings[0].message.startswith("Unexpected frame ordering")
    assert second.ok is False
    assert second.fatal == "invalid Slippi signature"
    assert second.frames_expected is None


def test_report_rejects_unknown_fields() -> None:
    with pytest.raises(msgspec.ValidationError):
        decode_report(b'{"files": [], "failed": 0, "extra": 1}')
