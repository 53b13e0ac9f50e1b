"""Puzzle-solving flow: hints, word-scramble letter board and memory phases."""
import logging
import random
from datetime import datetime
from typing import Callable, Dict, List, Optional
from quizzle.schemas import Puzzle, PuzzleResult, PuzzleType
from quizzle.services.formatting import puzzle_performance_message
from quizzle.services.puzzle_service import PuzzleService
from quizzle.services.session import AttemptSession, ItemPhase, Scheduler, SessionState
from quizzle.constants import MEMORY_SHOW_SECONDS, MEMORY_HIDE_SECONDS, PUZZLE_SOLUTION_REVEAL_DELAY

logger = logging.getLogger(__name__)


def normalize_answer(answer: str) -> str:
    return answer.strip().lower()


class HintCursor:
    """Ordered, non-restartable hint sequence for one attempt.

    The first reveal shows hint 0; each later reveal moves one step forward
    and stays on the last hint once it is reached.
    """

    def __init__(self):
        self.load([])

    def load(self, hints: List[str]) -> None:
        self.hints = list(hints)
        self.index = 0
        self.visible = False
        self.shown = False

    def reveal_next(self) -> Optional[str]:
        if not self.hints:
            return None
        if self.shown and self.index < len(self.hints) - 1:
            self.index += 1
        self.shown = True
        self.visible = True
        return self.current

    def toggle(self) -> None:
        if not self.hints:
            return
        self.visible = not self.visible
        if self.visible:
            self.shown = True

    @property
    def current(self) -> Optional[str]:
        if not self.visible or not self.hints:
            return None
        return self.hints[self.index]

    @property
    def has_more(self) -> bool:
        if not self.shown:
            return bool(self.hints)
        return self.index < len(self.hints) - 1

    @property
    def hints_used(self) -> int:
        return self.index + 1 if self.shown else 0


class LetterBoard:
    """Word-scramble letters split between ``available`` and ``placed``.

    Letters only ever move between the two lists, so together they always hold
    the puzzle's original multiset. The answer is the placed letters in order.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self.available: List[str] = []
        self.placed: List[str] = []

    def load(self, letters: List[str], shuffle: bool = True) -> None:
        self.available = list(letters)
        self.placed = []
        if shuffle:
            self._rng.shuffle(self.available)

    @property
    def answer(self) -> str:
        return "".join(self.placed)

    def place(self, letter: str) -> bool:
        if letter not in self.available:
            return False
        self.available.remove(letter)
        self.placed.append(letter)
        return True

    def remove(self, letter: str) -> bool:
        """Return the last placed occurrence of ``letter`` to the available pool."""
        if letter not in self.placed:
            return False
        position = len(self.placed) - 1 - self.placed[::-1].index(letter)
        return self.remove_at(position)

    def remove_at(self, position: int) -> bool:
        if not 0 <= position < len(self.placed):
            return False
        self.available.append(self.placed.pop(position))
        return True

    def clear(self) -> None:
        self.available.extend(self.placed)
        self.placed = []

    def shuffle(self) -> None:
        self._rng.shuffle(self.available)


class PuzzleAttempt:
    """AttemptKind for puzzles: a single item answered with free text."""
    name = "puzzle"

    def __init__(self, rng: Optional[random.Random] = None):
        self.hints = HintCursor()
        self.board = LetterBoard(rng)

    def prepare(self, puzzle: Puzzle):
        self.hints.load(puzzle.hints)
        if puzzle.type == PuzzleType.WORD_SCRAMBLE and puzzle.data.scrambled_letters:
            self.board.load(puzzle.data.scrambled_letters)
        if puzzle.type == PuzzleType.MEMORY:
            return [(ItemPhase.SHOWING, MEMORY_SHOW_SECONDS), (ItemPhase.HIDDEN, MEMORY_HIDE_SECONDS)]
        return []

    def item_count(self, puzzle: Puzzle) -> int:
        return 1

    def has_answer(self, answer) -> bool:
        return bool(answer and answer.strip())

    def is_correct(self, puzzle: Puzzle, index: int, answer: Optional[str]) -> bool:
        return normalize_answer(answer or "") == normalize_answer(puzzle.solution)

    def points_for(self, puzzle: Puzzle, index: int) -> int:
        return 1

    def reveal_delay(self, puzzle: Puzzle) -> Optional[float]:
        return None

    def build_result(self, attempt: AttemptSession, time_spent: float, completed_at: datetime) -> PuzzleResult:
        puzzle = attempt.activity
        submitted = attempt.answers[0] if attempt.answers else None
        answer = submitted if submitted is not None else (attempt.answer or "")
        return PuzzleResult(
            puzzle_id=puzzle.id,
            is_correct=self.is_correct(puzzle, 0, answer),
            time_spent=time_spent,
            hints_used=self.hints.hints_used,
            completed_at=completed_at,
            user_answer=answer,
        )

    def discard(self) -> None:
        self.hints.load([])
        self.board.load([], shuffle=False)


class PuzzleController:
    """Drives one puzzle attempt and reports the result to the PuzzleService.

    Args:
        puzzle_service: Provider receiving completed results
        scheduler: Timer source for the countdown, memory phases and solution reveal
        clock: Wall-clock for result timestamps
        rng: Random source for letter shuffling
    """

    def __init__(
        self,
        puzzle_service: PuzzleService,
        scheduler: Scheduler,
        clock: Callable[[], datetime] = datetime.now,
        rng: Optional[random.Random] = None
    ):
        self.kind = PuzzleAttempt(rng)
        self.session = AttemptSession(
            self.kind, scheduler, puzzle_service.submit, clock, on_complete=self._on_complete
        )
        self.show_solution = False

    @property
    def hints(self) -> HintCursor:
        return self.kind.hints

    @property
    def board(self) -> LetterBoard:
        return self.kind.board

    @property
    def puzzle(self) -> Optional[Puzzle]:
        return self.session.activity

    def start(self, puzzle: Puzzle) -> None:
        self.show_solution = False
        self.session.start(puzzle)

    def set_answer(self, text: str) -> bool:
        """Record typed or option-picked answer text.

        Word scrambles are only answered through the letter board, so text is
        refused for them.
        """
        if self._is_scramble():
            logger.debug("Ignoring free-text answer for a word scramble")
            return False
        return self.session.select(text)

    def submit_answer(self) -> Optional[bool]:
        return self.session.submit()

    def skip(self) -> bool:
        return self.session.skip()

    def reset(self) -> None:
        self.show_solution = False
        self.session.reset()

    # Hints

    def reveal_next_hint(self) -> Optional[str]:
        if self.session.state != SessionState.ACTIVE:
            return None
        return self.hints.reveal_next()

    def toggle_hint(self) -> None:
        if self.session.state == SessionState.ACTIVE:
            self.hints.toggle()

    # Word scramble

    def _is_scramble(self) -> bool:
        return self.puzzle is not None and self.puzzle.type == PuzzleType.WORD_SCRAMBLE

    def _scramble_active(self) -> bool:
        return self._is_scramble() and self.session.is_answering

    def _sync_answer(self) -> None:
        self.session.select(self.board.answer)

    def place_letter(self, letter: str) -> bool:
        if not self._scramble_active() or not self.board.place(letter):
            return False
        self._sync_answer()
        return True

    def remove_letter(self, letter: str) -> bool:
        if not self._scramble_active() or not self.board.remove(letter):
            return False
        self._sync_answer()
        return True

    def remove_letter_at(self, position: int) -> bool:
        if not self._scramble_active() or not self.board.remove_at(position):
            return False
        self._sync_answer()
        return True

    def clear_word(self) -> None:
        if self._scramble_active():
            self.board.clear()
            self._sync_answer()

    def shuffle_letters(self) -> None:
        if self._scramble_active():
            self.board.shuffle()

    # Completion

    def _on_complete(self, result: PuzzleResult) -> None:
        if not result.is_correct:
            logger.debug(f"Solution for {result.puzzle_id} revealed in {PUZZLE_SOLUTION_REVEAL_DELAY}s")
            self.session.call_later(PUZZLE_SOLUTION_REVEAL_DELAY, self._reveal_solution)

    def _reveal_solution(self) -> None:
        self.show_solution = True

    # Observable state

    @property
    def user_answer(self) -> str:
        result = self.session.result
        if result is not None:
            return result.user_answer
        return self.session.answer or ""

    @property
    def memory_phase(self) -> Optional[ItemPhase]:
        if self.puzzle is None or self.puzzle.type != PuzzleType.MEMORY:
            return None
        return self.session.phase

    @property
    def show_memory_sequence(self) -> bool:
        return self.memory_phase == ItemPhase.SHOWING

    @property
    def memory_sequence_text(self) -> str:
        puzzle = self.puzzle
        if puzzle is None or puzzle.type != PuzzleType.MEMORY:
            return ""
        if puzzle.data.sequence:
            return ", ".join(str(n) for n in puzzle.data.sequence)
        return puzzle.data.content

    @property
    def performance_message(self) -> str:
        result = self.session.result
        if result is None:
            return ""
        return puzzle_performance_message(result.is_correct, result.hints_used)

    def snapshot(self) -> Dict:
        """Observable state of the current attempt."""
        session = self.session
        puzzle = self.puzzle
        result = session.result
        return {
            "state": session.state.value,
            "phase": session.phase.value if session.phase else None,
            "puzzle_id": puzzle.id if puzzle else None,
            "puzzle_type": puzzle.type.value if puzzle else None,
            "content": puzzle.data.content if puzzle and not self.memory_phase else None,
            "options": puzzle.data.options if puzzle and not self._is_scramble() else None,
            "user_answer": self.user_answer,
            "available_letters": list(self.board.available),
            "placed_letters": list(self.board.placed),
            "current_hint": self.hints.current,
            "hints_used": self.hints.hints_used,
            "has_more_hints": self.hints.has_more,
            "memory_sequence": self.memory_sequence_text if self.show_memory_sequence else None,
            "time_remaining": session.time_remaining,
            "time_remaining_formatted": session.time_remaining_formatted,
            "timer_active": session.timer_active,
            "expired": session.expired,
            "show_solution": self.show_solution,
            "solution": puzzle.solution if puzzle and self.show_solution else None,
            "performance_message": self.performance_message or None,
            "result": result.model_dump(mode="json") if result else None,
        }
