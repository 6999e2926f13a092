from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Final

from ..config import ValidatorConfig
from ..version import NEWEST_KNOWN_VERSION, Version
from . import findings
from .envelope import EVENTS_OFFSET, read_envelope
from .errors import BufferUnderflowError, ReplayFormatError
from .events import SILENT_EVENTS, EventSizeTable, EventType, decode_event_sizes, event_label
from .findings import Finding, Severity
from .frame_markers import decode_frame_end, decode_frame_start
from .game_end import GameEnd, check_game_end, decode_game_end
from .game_start import GameStart, check_game_start, check_tournament_legality, decode_game_start
from .item_frame import check_item_frame, decode_item_frame
from .ordering import DecodeSession
from .post_frame import check_post_frame, decode_post_frame
from .pre_frame import check_pre_frame, decode_pre_frame

logger = logging.getLogger(__name__)

REPLAY_SUFFIX: Final[str] = ".slp"


@dataclass(frozen=True, slots=True)
class ValidationResult:
    source: str
    ok: bool
    version: Version | None = None
    frames_expected: int | None = None
    frames_observed: int = 0
    rollback_frames: int = 0
    findings: tuple[Finding, ...] = ()
    game_start: GameStart | None = None
    game_end: GameEnd | None = None
    fatal: str | None = None

    @property
    def error_count(self) -> int:
        return sum(1 for f in self.findings if f.level == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for f in self.findings if f.level == Severity.WARNING)

    @property
    def rollback_percent(self) -> float:
        if self.frames_observed <= 0:
            return 0.0
        return 100.0 * float(self.rollback_frames) / float(self.frames_observed)

    @property
    def clean(self) -> bool:
        return self.ok and self.error_count == 0

    def summary(self) -> str:
        if not self.ok:
            return f"{self.source}: failed: {self.fatal}"
        expected = "unknown" if self.frames_expected is None else str(int(self.frames_expected))
        return (
            f"{self.source}: expected frames {expected}, actual frames {int(self.frames_observed)}, "
            f"rollback frames {int(self.rollback_frames)} ({self.rollback_percent:.2f}%), "
            f"{self.error_count} errors, {self.warning_count} warnings"
        )


def _window(view: memoryview, start: int, size: int, end: int, code: int) -> memoryview:
    stop = int(start) + int(size)
    if stop > end:
        raise BufferUnderflowError(
            f"[File pos: {int(start) - 1}] {event_label(code)} payload of {int(size)} bytes runs past the event stream"
        )
    return view[start:stop]


def _observe(session: DecodeSession, code: int, window: memoryview) -> None:
    game = session.game
    version = game.version

    if code == EventType.FRAME_START:
        session.observe_frame_start(decode_frame_start(window, version))
    elif code == EventType.PRE_FRAME:
        pre = decode_pre_frame(window, version, game)
        session.report_all(check_pre_frame(pre, game))
        session.observe_pre_frame(pre)
    elif code == EventType.POST_FRAME:
        post = decode_post_frame(window, version)
        session.report_all(check_post_frame(post))
        session.observe_post_frame(post)
    elif code == EventType.ITEM:
        item = decode_item_frame(window, version)
        session.report_all(check_item_frame(item))
        session.observe_item(item)
    elif code == EventType.FRAME_END:
        session.observe_frame_end(decode_frame_end(window, version))
    elif code == EventType.GAME_END:
        end = decode_game_end(window, version)
        session.report_all(check_game_end(end))
        session.observe_game_end(end)
    elif code in SILENT_EVENTS:
        pass
    elif code in (EventType.EVENT_PAYLOADS, EventType.GAME_START):
        session.report(findings.warning(f"Unexpected {event_label(code)} event inside the frame stream"))
    else:
        session.report(findings.warning(f"Unknown event type: {int(code)}"))


def _scan_after_game_end(
    session: DecodeSession,
    data: bytes,
    view: memoryview,
    pos: int,
    end: int,
    sizes: EventSizeTable,
) -> None:
    trailing = 0
    while pos < end:
        code = data[pos]
        session.position = pos
        size = sizes.get(code)
        if size is None:
            session.report(findings.warning(f"Unknown event code 0x{code:02X} after game end; stopped scanning"))
            break
        if pos + 1 + size > end:
            session.report(findings.warning(f"Truncated {event_label(code)} event after game end; stopped scanning"))
            break
        window = view[pos + 1 : pos + 1 + size]
        pos += 1 + size
        if code == EventType.GAME_END:
            session.observe_game_end(decode_game_end(window, session.game.version))
        elif code not in SILENT_EVENTS:
            trailing += 1
    if trailing:
        session.report(findings.warning(f"{trailing} events after game end"))


def validate_bytes(
    data: bytes | bytearray | memoryview,
    *,
    source: str = "<bytes>",
    config: ValidatorConfig | None = None,
) -> ValidationResult:
    """Validate one complete replay held in memory.

    Raises `ReplayFormatError` when the file cannot be decoded any further; every
    other anomaly is logged and collected on the result.
    """
    cfg = config if config is not None else ValidatorConfig()
    # Mutable buffers are frozen once; `bytes` input is used as is.
    data = bytes(data)
    view = memoryview(data)

    envelope = read_envelope(data)
    end = envelope.events_end

    pos = EVENTS_OFFSET
    sizes = decode_event_sizes(view[pos:end])
    pos += sizes.consumed

    if pos >= end or data[pos] != EventType.GAME_START:
        found = "end of stream" if pos >= end else event_label(data[pos])
        raise ReplayFormatError(f"[File pos: {pos}] expected GAME_START, got {found}")
    size = sizes.size_of(EventType.GAME_START)
    game = decode_game_start(_window(view, pos + 1, size, end, EventType.GAME_START))
    logger.info("Parser max version: %s, replay version: %s", NEWEST_KNOWN_VERSION, game.version)
    if game.version > NEWEST_KNOWN_VERSION:
        logger.info("Replay is newer than %s; unknown trailing fields are skipped", NEWEST_KNOWN_VERSION)

    session = DecodeSession.for_game(
        game,
        rollback_limit=cfg.rollback_limit,
        ordering_player_count=cfg.ordering_player_count,
        frames_expected=envelope.metadata.expected_frames,
    )
    session.position = pos
    session.report_all(check_game_start(game))
    if cfg.check_legality:
        session.report_all(check_tournament_legality(game))
    pos += 1 + size

    while pos < end and session.game_end is None:
        code = data[pos]
        session.position = pos
        size = sizes.get(code)
        if size is None:
            raise ReplayFormatError(f"[File pos: {pos}] event code 0x{code:02X} missing from the event payloads table")
        window = _window(view, pos + 1, size, end, code)
        pos += 1 + size
        _observe(session, code, window)

    if session.game_end is None:
        session.position = pos
        session.report(findings.warning("Replay has no game end event"))
    else:
        _scan_after_game_end(session, data, view, pos, end, sizes)

    result = ValidationResult(
        source=source,
        ok=True,
        version=game.version,
        frames_expected=session.frames_expected,
        frames_observed=session.frames_observed,
        rollback_frames=session.rollback_frames,
        findings=tuple(session.findings),
        game_start=game,
        game_end=session.game_end,
    )
    logger.info("%s", result.summary())
    return result


def validate_file(path: Path, config: ValidatorConfig | None = None) -> ValidationResult:
    path = Path(path)
    logger.info("Validating %s", path)
    try:
        data = path.read_bytes()
        return validate_bytes(data, source=str(path), config=config)
    except (ReplayFormatError, OSError) as exc:
        logger.error("%s: %s", path, exc)
        return ValidationResult(source=str(path), ok=False, fatal=str(exc))


def iter_replay_paths(path: Path) -> list[Path]:
    path = Path(path)
    if path.is_dir():
        return sorted(p for p in path.iterdir() if p.is_file() and p.suffix.lower() == REPLAY_SUFFIX)
    return [path]


def validate_path(path: Path, config: ValidatorConfig | None = None) -> list[ValidationResult]:
    """Validate a replay file, or every `.slp` file directly inside a directory."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)
    paths = iter_replay_paths(path)
    if path.is_dir():
        logger.info("Found %d files in %s", len(paths), path)
    return [validate_file(p, config) for p in paths]


def count_failures(results: Iterable[ValidationResult], *, strict: bool = False) -> int:
    if strict:
        return sum(1 for r in results if not r.clean)
    return sum(1 for r in results if not r.ok)
