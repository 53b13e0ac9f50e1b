"""Timed attempt state machine shared by the quiz and puzzle flows.

An attempt moves ``idle -> active -> completed``. While active, each item
goes through ``answering -> revealed`` (optionally preceded by warm-up phases
such as the memory challenge's ``showing``/``hidden``). What an item is, how
an answer is checked and what result is produced come from an ``AttemptKind``
capability; the session itself owns timing, guards and completion.

Every timer the session arms is tagged with the generation current at
scheduling time. ``start()``, ``reset()`` and completion move to a new
generation and cancel outstanding handles, so a late callback from a
superseded attempt never touches the current one.
"""
import logging
from datetime import datetime
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol, Sequence, Tuple
from quizzle.constants import COUNTDOWN_TICK_SECONDS
from quizzle.services.formatting import format_countdown

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    COMPLETED = "completed"


class ItemPhase(str, Enum):
    SHOWING = "showing"
    HIDDEN = "hidden"
    ANSWERING = "answering"
    REVEALED = "revealed"


class Scheduler(Protocol):
    def now(self) -> float: ...

    def call_later(self, delay: float, callback: Callable[[], None]) -> Any: ...


class AttemptKind(Protocol):
    """Capability that specializes an AttemptSession for one activity family."""
    name: str

    def prepare(self, activity: Any) -> Sequence[Tuple[ItemPhase, float]]:
        """Reset per-attempt state and return warm-up phases to run before answering."""

    def item_count(self, activity: Any) -> int: ...

    def has_answer(self, answer: Any) -> bool: ...

    def is_correct(self, activity: Any, index: int, answer: Any) -> bool: ...

    def points_for(self, activity: Any, index: int) -> int: ...

    def reveal_delay(self, activity: Any) -> Optional[float]:
        """Seconds to stay revealed before advancing, or None to advance at once."""

    def build_result(self, attempt: "AttemptSession", time_spent: float, completed_at: datetime) -> Any: ...

    def discard(self) -> None: ...


class AttemptSession:
    """One controller-owned attempt at a time.

    Args:
        kind: Capability describing items, answer checking and results
        scheduler: Source of time and cancellable delayed callbacks
        submit_result: Receives the result exactly once per completed attempt
        clock: Wall-clock used for the result's completion timestamp
        on_complete: Optional hook run after the result has been submitted
    """

    def __init__(
        self,
        kind: AttemptKind,
        scheduler: Scheduler,
        submit_result: Callable[[Any], None],
        clock: Callable[[], datetime] = datetime.now,
        on_complete: Optional[Callable[[Any], None]] = None
    ):
        self.kind = kind
        self._scheduler = scheduler
        self._submit_result = submit_result
        self._clock = clock
        self._on_complete = on_complete
        self._generation = 0
        self._handles: List[Any] = []
        self._clear()

    def _clear(self) -> None:
        self.state = SessionState.IDLE
        self.phase: Optional[ItemPhase] = None
        self.activity: Any = None
        self.current_index = 0
        self.answer: Any = None
        self.answers: List[Any] = []
        self.correct: List[bool] = []
        self.score = 0
        self.time_remaining = 0.0
        self.timer_active = False
        self.expired = False
        self.started_at: Optional[float] = None
        self.result: Any = None

    # Observable state

    @property
    def is_answering(self) -> bool:
        return self.state == SessionState.ACTIVE and self.phase == ItemPhase.ANSWERING

    @property
    def is_completed(self) -> bool:
        return self.state == SessionState.COMPLETED

    @property
    def item_count(self) -> int:
        return len(self.answers)

    @property
    def progress_fraction(self) -> float:
        if not self.answers:
            return 0.0
        return min(self.current_index + 1, len(self.answers)) / len(self.answers)

    @property
    def time_remaining_formatted(self) -> str:
        return format_countdown(self.time_remaining)

    # Intents

    def start(self, activity: Any) -> None:
        """Begin a fresh attempt, superseding whatever was in progress."""
        self._invalidate()
        self.kind.discard()
        self._clear()

        self.activity = activity
        count = self.kind.item_count(activity)
        self.answers = [None] * count
        self.correct = [False] * count
        self.state = SessionState.ACTIVE
        self.started_at = self._scheduler.now()
        warmup = list(self.kind.prepare(activity))

        logger.info(
            f"{self.kind.name} attempt started: {activity.id}",
            extra={"activity_id": activity.id, "session_kind": self.kind.name}
        )

        if activity.time_limit:
            self.time_remaining = float(activity.time_limit)
            self.timer_active = True
            self.call_later(COUNTDOWN_TICK_SECONDS, self._tick)

        if count == 0:
            self._complete()
            return

        self._run_phases(warmup)

    def select(self, answer: Any) -> bool:
        """Record a provisional answer for the current item."""
        if not self.is_answering:
            logger.debug(f"Ignoring select in state={self.state.value} phase={self.phase}")
            return False
        self.answer = answer
        return True

    def submit(self) -> Optional[bool]:
        """
        Check the provisional answer for the current item.

        Returns:
            Whether the answer was correct, or None if the submission was
            ignored (not answering, or no answer selected)
        """
        if not self.is_answering or not self.kind.has_answer(self.answer):
            logger.debug(f"Ignoring submit in state={self.state.value} phase={self.phase}")
            return None

        index = self.current_index
        is_correct = self.kind.is_correct(self.activity, index, self.answer)
        self.answers[index] = self.answer
        self.correct[index] = is_correct
        if is_correct:
            self.score += self.kind.points_for(self.activity, index)

        delay = self.kind.reveal_delay(self.activity)
        if delay is None:
            self._next_item()
        else:
            self.phase = ItemPhase.REVEALED
            self.call_later(delay, lambda: self._auto_advance(index))
        return is_correct

    def skip(self) -> bool:
        """Leave the current item unanswered and move on without a reveal delay."""
        if not self.is_answering:
            logger.debug(f"Ignoring skip in state={self.state.value} phase={self.phase}")
            return False
        self.answers[self.current_index] = None
        self._next_item()
        return True

    def advance(self) -> bool:
        """Leave the revealed item now instead of waiting for the auto-advance."""
        if self.state != SessionState.ACTIVE or self.phase != ItemPhase.REVEALED:
            return False
        self._next_item()
        return True

    def reset(self) -> None:
        """Return to idle from any state, dropping timers and per-attempt data."""
        self._invalidate()
        self.kind.discard()
        self._clear()

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        """Schedule ``callback`` for the current generation only.

        Handles are forgotten once they fire, so only pending timers are kept
        for cancellation.
        """
        generation = self._generation
        handle = None

        def fire():
            if handle in self._handles:
                self._handles.remove(handle)
            if generation != self._generation:
                return
            callback()

        handle = self._scheduler.call_later(delay, fire)
        self._handles.append(handle)

    @property
    def pending_timers(self) -> int:
        """Timers armed for this attempt that have not fired or been cancelled."""
        return len(self._handles)

    # Internals

    def _invalidate(self) -> None:
        for handle in self._handles:
            handle.cancel()
        self._handles.clear()
        self._generation += 1

    def _run_phases(self, phases: List[Tuple[ItemPhase, float]]) -> None:
        if not phases:
            self.phase = ItemPhase.ANSWERING
            return
        phase, delay = phases[0]
        self.phase = phase
        self.call_later(delay, lambda: self._run_phases(phases[1:]))

    def _auto_advance(self, index: int) -> None:
        if self.phase == ItemPhase.REVEALED and self.current_index == index:
            self._next_item()

    def _next_item(self) -> None:
        self.answer = None
        if self.current_index < len(self.answers) - 1:
            self.current_index += 1
            self.phase = ItemPhase.ANSWERING
        else:
            self._complete()

    def _tick(self) -> None:
        if self.state != SessionState.ACTIVE:
            return
        self.time_remaining = max(0.0, self.time_remaining - COUNTDOWN_TICK_SECONDS)
        if self.time_remaining <= 0:
            logger.info(
                f"{self.kind.name} attempt timed out",
                extra={"activity_id": self.activity.id, "session_kind": self.kind.name}
            )
            self.expired = True
            self._complete()
        else:
            self.call_later(COUNTDOWN_TICK_SECONDS, self._tick)

    def _complete(self) -> None:
        if self.state != SessionState.ACTIVE:
            return
        self._invalidate()
        self.timer_active = False

        time_spent = self._scheduler.now() - self.started_at
        result = self.kind.build_result(self, time_spent, self._clock())
        self.result = result
        self.state = SessionState.COMPLETED
        self.phase = None

        logger.info(
            f"{self.kind.name} attempt completed in {time_spent:.1f}s",
            extra={"activity_id": self.activity.id, "session_kind": self.kind.name}
        )
        self._submit_result(result)
        if self._on_complete is not None:
            self._on_complete(result)
