"""Scoring, streak and difficulty progression rules shared by both providers."""
from datetime import datetime
from typing import Optional
from quizzle.schemas import DifficultyLevel, PuzzleProgress, UserProgress
from quizzle.constants import (
    LEVEL_UP_MIN_ATTEMPTS,
    QUIZ_LEVEL_THRESHOLDS,
    PUZZLE_BEGINNER_MIN_ATTEMPTS,
    PUZZLE_ADVANCED_MIN_ATTEMPTS,
    PUZZLE_ADVANCED_SUCCESS_RATE,
    PUZZLE_INTERMEDIATE_SUCCESS_RATE,
)


def incremental_mean(average: float, count: int, value: float) -> float:
    """
    Fold one new observation into a running mean.

    Args:
        average: Mean over the previous ``count - 1`` observations
        count: Number of observations including ``value``
        value: New observation

    Returns:
        Updated mean, ``(average * (count - 1) + value) / count``
    """
    if count <= 0:
        return 0.0
    return (average * (count - 1) + value) / count


def is_new_best_time(best: float, candidate: float) -> bool:
    """A zero best time means no successful attempt has been recorded yet."""
    return best == 0 or candidate < best


def update_streak(streak: int, last_active: Optional[datetime], now: datetime) -> int:
    """
    Compute the day streak after activity at ``now``.

    Rules:
    - No prior activity: streak starts at 1
    - Last activity yesterday: streak + 1
    - Gap of more than one day: reset to 1
    - Same day: unchanged

    Args:
        streak: Current streak value
        last_active: Timestamp of the previous activity, if any
        now: Timestamp of the new activity

    Returns:
        New streak value
    """
    if last_active is None:
        return 1

    days_between = (now.date() - last_active.date()).days
    if days_between == 1:
        return streak + 1
    if days_between > 1:
        return 1
    return streak


def escalate_level(
    level: DifficultyLevel,
    completed: int,
    metric: float,
    threshold: float
) -> DifficultyLevel:
    """
    Advance one tier once enough attempts exceed the success threshold.

    Args:
        level: Current tier for the category or puzzle type
        completed: Completed attempts in the category or type
        metric: Rolling average score (quiz) or success rate (puzzle)
        threshold: Value ``metric`` must strictly exceed

    Returns:
        The next tier when ``completed >= LEVEL_UP_MIN_ATTEMPTS`` and
        ``metric > threshold``, otherwise ``level`` unchanged
    """
    if completed >= LEVEL_UP_MIN_ATTEMPTS and metric > threshold:
        return level.next_level()
    return level


def recommended_quiz_level(progress: UserProgress) -> DifficultyLevel:
    """Pick the recommendation tier from the total number of completed quizzes."""
    completed = progress.total_quizzes_completed
    levels = list(DifficultyLevel)
    for level, threshold in zip(levels, QUIZ_LEVEL_THRESHOLDS):
        if completed < threshold:
            return level
    return DifficultyLevel.EXPERT


def recommended_puzzle_level(progress: PuzzleProgress) -> DifficultyLevel:
    """Pick the recommendation tier from puzzle completions and success rate."""
    completed = progress.total_puzzles_completed
    success_rate = progress.success_rate

    if completed < PUZZLE_BEGINNER_MIN_ATTEMPTS:
        return DifficultyLevel.BEGINNER
    if success_rate > PUZZLE_ADVANCED_SUCCESS_RATE and completed >= PUZZLE_ADVANCED_MIN_ATTEMPTS:
        return DifficultyLevel.ADVANCED
    if success_rate > PUZZLE_INTERMEDIATE_SUCCESS_RATE:
        return DifficultyLevel.INTERMEDIATE
    return DifficultyLevel.BEGINNER
