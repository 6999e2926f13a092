from __future__ import annotations

from dataclasses import dataclass, field
import logging

from ..config import DEFAULT_ORDERING_PLAYER_COUNT, DEFAULT_ROLLBACK_LIMIT
from . import findings
from .envelope import FIRST_FRAME_INDEX
from .events import EventType
from .findings import Finding, Severity
from .frame_markers import FRAME_END_SINCE, FRAME_START_SINCE, FrameEnd, FrameStart
from .game_end import GameEnd
from .game_start import GameStart
from .item_frame import ItemFrame
from .post_frame import PostFrame
from .pre_frame import PreFrame

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExpectedEvent:
    """One slot of the per-frame event cycle."""

    port: int | None
    companion: bool
    kind: EventType

    @property
    def optional(self) -> bool:
        # Nana can be dead for the rest of a stock, and a frame may carry zero items.
        return self.companion or self.kind == EventType.ITEM

    def describe(self) -> str:
        if self.port is None:
            return self.kind.name
        unit = ", Nana" if self.companion else ""
        return f"{self.kind.name} (port {int(self.port) + 1}{unit})"


def _participant_slots(game: GameStart, kind: EventType) -> list[ExpectedEvent]:
    out: list[ExpectedEvent] = []
    for participant in sorted(game.active_participants, key=lambda p: p.port):
        out.append(ExpectedEvent(participant.port, False, kind))
        if participant.has_companion:
            out.append(ExpectedEvent(participant.port, True, kind))
    return out


def build_expected_order(game: GameStart) -> tuple[ExpectedEvent, ...]:
    """Build the event cycle every frame is expected to follow.

    frame start, pre-frame per active participant (Nana right after her
    partner), one item slot, post-frame in the same pattern, frame end. Frame
    markers are left out for replays older than the version that added them.
    """
    order: list[ExpectedEvent] = []
    if game.version >= FRAME_START_SINCE:
        order.append(ExpectedEvent(None, False, EventType.FRAME_START))
    order.extend(_participant_slots(game, EventType.PRE_FRAME))
    order.append(ExpectedEvent(None, False, EventType.ITEM))
    order.extend(_participant_slots(game, EventType.POST_FRAME))
    if game.version >= FRAME_END_SINCE:
        order.append(ExpectedEvent(None, False, EventType.FRAME_END))
    return tuple(order)


@dataclass(slots=True)
class DecodeSession:
    """Per-file decode state: ordering cursor, resync flag and frame counters."""

    game: GameStart
    order: tuple[ExpectedEvent, ...]
    rollback_limit: int = DEFAULT_ROLLBACK_LIMIT
    ordering_player_count: int = DEFAULT_ORDERING_PLAYER_COUNT
    frames_expected: int | None = None
    cursor: int = 0
    need_sync: bool = False
    previous_frame: int = FIRST_FRAME_INDEX - 1
    latest_frame: int | None = None
    frames_observed: int = 0
    rollback_frames: int = 0
    game_end: GameEnd | None = None
    position: int = 0
    findings: list[Finding] = field(default_factory=list)

    @classmethod
    def for_game(
        cls,
        game: GameStart,
        *,
        rollback_limit: int = DEFAULT_ROLLBACK_LIMIT,
        ordering_player_count: int = DEFAULT_ORDERING_PLAYER_COUNT,
        frames_expected: int | None = None,
    ) -> DecodeSession:
        return cls(
            game=game,
            order=build_expected_order(game),
            rollback_limit=int(rollback_limit),
            ordering_player_count=int(ordering_player_count),
            frames_expected=frames_expected,
        )

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
    def ordering_enforced(self) -> bool:
        if self.ordering_player_count <= 0:
            return True
        return len(self.game.active_participants) == self.ordering_player_count

    def report(self, finding: Finding) -> None:
        self.findings.append(finding)
        logger.log(int(finding.level), "[File pos: %d] %s", int(self.position), finding.describe())

    def report_all(self, items: list[Finding]) -> None:
        for finding in items:
            self.report(finding)

    def expected_label(self) -> str:
        if not (0 <= self.cursor < len(self.order)):
            return "end of frame cycle"
        slot = self.order[self.cursor]
        if slot.kind == EventType.ITEM:
            return "ITEM or POST_FRAME"
        return slot.describe()

    def match_slot(self, key: ExpectedEvent) -> bool:
        """Compare `key` with the cursor slot, skipping over optional slots.

        When the cursor sits on an optional slot (Nana, or the item slot) that did
        not show up, the following run of optional slots is searched and the
        cursor moves onto the match. No slot is ever skipped otherwise.

        Without a frame end slot the cycle has no explicit close, so once only
        optional slots remain the search wraps to the start of the cycle.
        """
        found = self._find(key, int(self.cursor))
        if found is None and self._wraps():
            found = self._find(key, 0)
        if found is None:
            return False
        self.cursor = found
        return True

    def _find(self, key: ExpectedEvent, start: int) -> int | None:
        index = start
        while 0 <= index < len(self.order):
            slot = self.order[index]
            if slot == key:
                return index
            if not slot.optional:
                return None
            index += 1
        return None

    def _wraps(self) -> bool:
        if self.order and self.order[-1].kind == EventType.FRAME_END:
            return False
        return all(slot.optional for slot in self.order[int(self.cursor) :])

    def _ordering_error(self, observed: str, frame_index: int) -> None:
        self.report(
            findings.error(
                f"Unexpected event ordering. Expected {self.expected_label()} for frame {self.previous_frame}, "
                f"got {observed} for frame {frame_index}"
            )
        )

    def _check_slot(self, key: ExpectedEvent, frame_index: int) -> bool:
        if self.match_slot(key):
            return True
        if not self.need_sync and self.ordering_enforced:
            self._ordering_error(key.describe(), frame_index)
            self.need_sync = True
        return False

    def observe_frame_start(self, frame: FrameStart) -> None:
        index = int(frame.frame_index)
        previous = int(self.previous_frame)
        delta = index - previous

        if delta > 1 or delta < -int(self.rollback_limit):
            self.report(
                findings.error(
                    f"Unexpected frame ordering. Previous frame was index {previous}, current frame is index {index}"
                )
            )
        if delta < 0:
            self.report(findings.info(f"Rollback from frame {previous} to frame {index}"))

        key = ExpectedEvent(None, False, EventType.FRAME_START)
        if self.need_sync or not self.match_slot(key):
            if self.ordering_enforced:
                self._ordering_error(EventType.FRAME_START.name, index)
            self.cursor = 0
            self.need_sync = False
        self.cursor += 1

        self.frames_observed += 1
        if self.latest_frame is not None and index <= self.latest_frame:
            self.rollback_frames += 1
        else:
            self.latest_frame = index
        self.previous_frame = index

    def observe_pre_frame(self, frame: PreFrame) -> None:
        self._check_slot(ExpectedEvent(int(frame.port), bool(frame.companion), EventType.PRE_FRAME), frame.frame_index)
        self.cursor += 1

    def observe_post_frame(self, frame: PostFrame) -> None:
        self._check_slot(ExpectedEvent(int(frame.port), bool(frame.companion), EventType.POST_FRAME), frame.frame_index)
        self.cursor += 1

    def observe_item(self, frame: ItemFrame) -> None:
        # Any number of items share the one slot, so the cursor stays put.
        self._check_slot(ExpectedEvent(None, False, EventType.ITEM), frame.frame_index)

    def observe_frame_end(self, frame: FrameEnd) -> None:
        self._check_slot(ExpectedEvent(None, False, EventType.FRAME_END), frame.frame_index)
        self.cursor = 0

    def observe_game_end(self, end: GameEnd) -> None:
        if self.game_end is not None:
            self.report(findings.warning("Duplicate game end event"))
            return
        self.game_end = end
