from __future__ import annotations

from collections.abc import Sequence

import msgspec

from .validate import ValidationResult


class FindingReport(msgspec.Struct, forbid_unknown_fields=True):
    level: str
    message: str
    frame_index: int | None = None
    port: int | None = None


class FileReport(msgspec.Struct, forbid_unknown_fields=True):
    source: str
    ok: bool
    version: str = ""
    frames_expected: int | None = None
    frames_observed: int = 0
    rollback_frames: int = 0
    rollback_percent: float = 0.0
    error_count: int = 0
    warning_count: int = 0
    fatal: str = ""
    findings: list[FindingReport] = msgspec.field(default_factory=list)


class BatchReport(msgspec.Struct, forbid_unknown_fields=True):
    files: list[FileReport] = msgspec.field(default_factory=list)
    failed: int = 0


def file_report(result: ValidationResult) -> FileReport:
    return FileReport(
        source=str(result.source),
        ok=bool(result.ok),
        version="" if result.version is None else str(result.version),
        frames_expected=result.frames_expected,
        frames_observed=int(result.frames_observed),
        rollback_frames=int(result.rollback_frames),
        rollback_percent=round(float(result.rollback_percent), 4),
        error_count=int(result.error_count),
        warning_count=int(result.warning_count),
        fatal=str(result.fatal or ""),
        findings=[
            FindingReport(
                level=finding.level.name,
                message=finding.message,
                frame_index=finding.frame_index,
                port=finding.port,
            )
            for finding in result.findings
        ],
    )


def batch_report(results: Sequence[ValidationResult]) -> BatchReport:
    files = [file_report(result) for result in results]
    return BatchReport(files=files, failed=sum(1 for f in files if not f.ok))


def encode_report(results: Sequence[ValidationResult]) -> bytes:
    return msgspec.json.encode(batch_report(results))


def decode_report(payload: bytes) -> BatchReport:
    return msgspec.json.decode(payload, type=BatchReport)
