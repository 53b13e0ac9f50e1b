"""Puzzle catalog and puzzle progress tracking."""
import logging
import random
from datetime import datetime
from typing import Callable, Dict, List, Optional
from quizzle.content.brain_teasers import build_brain_teasers
from quizzle.content.puzzles import build_puzzles
from quizzle.db.store import KeyValueStore
from quizzle.schemas import (
    BrainTeaser,
    DifficultyLevel,
    Puzzle,
    PuzzleProgress,
    PuzzleResult,
    PuzzleType,
    PuzzleTypeProgress,
)
from quizzle.services.formatting import format_duration
from quizzle.services.progression import (
    escalate_level,
    incremental_mean,
    is_new_best_time,
    recommended_puzzle_level,
    update_streak,
)
from quizzle.services.snapshots import delete_snapshot, load_snapshot, save_snapshot
from quizzle.constants import PUZZLE_PROGRESS_KEY, RECOMMENDED_PUZZLE_COUNT, LEVEL_UP_SUCCESS_RATE

logger = logging.getLogger(__name__)


class PuzzleService:
    """Owns the puzzle catalog and the single PuzzleProgress record.

    Args:
        store: Key-value store holding the progress snapshot
        clock: Returns the current local time (streaks use its calendar day)
        rng: Random source for recommendations and random picks
        puzzles: Catalog override, defaults to the built-in puzzles
    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: Callable[[], datetime] = datetime.now,
        rng: Optional[random.Random] = None,
        puzzles: Optional[List[Puzzle]] = None
    ):
        self._store = store
        self._clock = clock
        self._rng = rng or random.Random()
        self.puzzles: List[Puzzle] = puzzles if puzzles is not None else build_puzzles()
        self._by_id: Dict[str, Puzzle] = {p.id: p for p in self.puzzles}
        self.brain_teasers: List[BrainTeaser] = build_brain_teasers()
        self.progress = load_snapshot(store, PUZZLE_PROGRESS_KEY, PuzzleProgress) or PuzzleProgress()

    def get(self, puzzle_id: str) -> Optional[Puzzle]:
        return self._by_id.get(puzzle_id)

    def catalog(
        self,
        puzzle_type: Optional[PuzzleType] = None,
        difficulty: Optional[DifficultyLevel] = None
    ) -> List[Puzzle]:
        """Return puzzles matching every given filter."""
        return [
            p for p in self.puzzles
            if (puzzle_type is None or p.type == puzzle_type)
            and (difficulty is None or p.difficulty == difficulty)
        ]

    def recommend(self) -> List[Puzzle]:
        """Return up to RECOMMENDED_PUZZLE_COUNT shuffled puzzles at the user's tier."""
        level = recommended_puzzle_level(self.progress)
        candidates = self.catalog(difficulty=level)
        self._rng.shuffle(candidates)
        return candidates[:RECOMMENDED_PUZZLE_COUNT]

    def random_puzzle(self) -> Puzzle:
        """Uniformly random puzzle from the catalog."""
        return self._rng.choice(self.puzzles)

    def daily_brain_teasers(self) -> List[BrainTeaser]:
        return list(self.brain_teasers)

    def submit(self, result: PuzzleResult) -> None:
        """
        Fold one puzzle result into progress and persist the snapshot.

        Updates:
        - completed/solved totals
        - running average time, best time on a correct answer
        - per-type record (average hints, best time, difficulty escalation)
        - daily streak
        """
        progress = self.progress
        progress.total_puzzles_completed += 1
        if result.is_correct:
            progress.total_puzzles_solved += 1

        progress.average_time = incremental_mean(
            progress.average_time, progress.total_puzzles_completed, result.time_spent
        )
        if result.is_correct and is_new_best_time(progress.best_time, result.time_spent):
            progress.best_time = result.time_spent

        puzzle = self.get(result.puzzle_id)
        if puzzle is not None:
            self._update_type_progress(puzzle.type, result)
        else:
            logger.warning(
                f"Result for unknown puzzle {result.puzzle_id}; type progress not updated",
                extra={"activity_id": result.puzzle_id}
            )

        now = self._clock()
        progress.daily_streak = update_streak(progress.daily_streak, progress.last_puzzle_date, now)
        progress.last_puzzle_date = now

        logger.info(
            f"Puzzle result recorded: correct={result.is_correct}, "
            f"time={result.time_spent:.1f}s, hints={result.hints_used}",
            extra={"activity_id": result.puzzle_id}
        )
        save_snapshot(self._store, PUZZLE_PROGRESS_KEY, progress)

    def _update_type_progress(self, puzzle_type: PuzzleType, result: PuzzleResult) -> None:
        type_progress = self.progress.type_progress.get(puzzle_type) or PuzzleTypeProgress()
        type_progress.completed += 1
        if result.is_correct:
            type_progress.solved += 1

        type_progress.average_hints = incremental_mean(
            type_progress.average_hints, type_progress.completed, result.hints_used
        )
        if result.is_correct and is_new_best_time(type_progress.best_time, result.time_spent):
            type_progress.best_time = result.time_spent

        success_rate = type_progress.solved / type_progress.completed
        new_level = escalate_level(
            type_progress.current_difficulty,
            type_progress.completed,
            success_rate,
            LEVEL_UP_SUCCESS_RATE
        )
        if new_level != type_progress.current_difficulty:
            logger.info(f"{puzzle_type.value} difficulty raised to {new_level.value}")
            type_progress.current_difficulty = new_level

        self.progress.type_progress[puzzle_type] = type_progress

    def reset_progress(self) -> None:
        """Discard all puzzle progress, in memory and persisted."""
        self.progress = PuzzleProgress()
        delete_snapshot(self._store, PUZZLE_PROGRESS_KEY)
        logger.info("Puzzle progress reset")

    def summary(self) -> Dict:
        """
        Derived puzzle statistics for display.

        Returns:
            Dictionary with totals, success rate percentage and formatted times
        """
        progress = self.progress
        return {
            "total_completed": progress.total_puzzles_completed,
            "total_solved": progress.total_puzzles_solved,
            "success_rate": round(progress.success_rate * 100, 1),
            "average_time": format_duration(progress.average_time),
            "best_time": format_duration(progress.best_time),
            "daily_streak": progress.daily_streak,
            "types": {
                puzzle_type.value: {
                    "completed": tp.completed,
                    "solved": tp.solved,
                    "average_hints": round(tp.average_hints, 1),
                    "best_time": format_duration(tp.best_time),
                    "current_difficulty": tp.current_difficulty.value,
                }
                for puzzle_type, tp in progress.type_progress.items()
            },
        }
