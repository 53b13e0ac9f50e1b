"""Unit tests for scoring, streak and difficulty progression rules."""
from datetime import datetime
from quizzle.schemas import DifficultyLevel, PuzzleProgress, UserProgress
from quizzle.services.progression import (
    escalate_level,
    incremental_mean,
    is_new_best_time,
    recommended_puzzle_level,
    recommended_quiz_level,
    update_streak,
)


class TestIncrementalMean:
    """Tests for the running mean fold."""

    def test_sequence_of_three(self):
        """Folding 10, 15, 20 gives 10, 12.5, 15."""
        average = 0.0
        seen = []
        for count, value in enumerate([10, 15, 20], start=1):
            average = incremental_mean(average, count, value)
            seen.append(average)
        assert seen == [10.0, 12.5, 15.0]

    def test_first_observation_is_the_mean(self):
        assert incremental_mean(0.0, 1, 42.0) == 42.0

    def test_zero_count_returns_zero(self):
        assert incremental_mean(50.0, 0, 10.0) == 0.0


class TestBestTime:
    def test_zero_best_means_unset(self):
        assert is_new_best_time(0, 90.0)

    def test_faster_time_wins(self):
        assert is_new_best_time(60.0, 45.0)
        assert not is_new_best_time(60.0, 75.0)


class TestStreak:
    """Tests for day streak bookkeeping."""

    def test_first_activity_starts_streak(self):
        assert update_streak(0, None, datetime(2026, 3, 10, 9)) == 1

    def test_next_day_increments(self):
        """Activity on D then D+1 gives streak 2."""
        assert update_streak(1, datetime(2026, 3, 10, 23, 50), datetime(2026, 3, 11, 0, 10)) == 2

    def test_gap_resets(self):
        """Activity on D then D+3 resets to 1."""
        assert update_streak(4, datetime(2026, 3, 10, 9), datetime(2026, 3, 13, 9)) == 1

    def test_same_day_unchanged(self):
        assert update_streak(3, datetime(2026, 3, 10, 8), datetime(2026, 3, 10, 20)) == 3

    def test_calendar_days_not_elapsed_hours(self):
        """Less than 24 hours across midnight still counts as the next day."""
        assert update_streak(2, datetime(2026, 3, 10, 22), datetime(2026, 3, 11, 6)) == 3


class TestEscalation:
    """Tests for one-step difficulty escalation."""

    def test_four_attempts_do_not_escalate(self):
        assert escalate_level(DifficultyLevel.BEGINNER, 4, 100.0, 80.0) == DifficultyLevel.BEGINNER

    def test_fifth_attempt_escalates(self):
        assert escalate_level(DifficultyLevel.BEGINNER, 5, 100.0, 80.0) == DifficultyLevel.INTERMEDIATE

    def test_threshold_is_strict(self):
        assert escalate_level(DifficultyLevel.BEGINNER, 5, 80.0, 80.0) == DifficultyLevel.BEGINNER

    def test_expert_saturates(self):
        assert escalate_level(DifficultyLevel.EXPERT, 10, 1.0, 0.8) == DifficultyLevel.EXPERT


class TestRecommendationTier:
    """Tests for recommendation tier selection."""

    def test_quiz_tiers_follow_total_completions(self):
        cases = [
            (0, DifficultyLevel.BEGINNER),
            (4, DifficultyLevel.BEGINNER),
            (5, DifficultyLevel.INTERMEDIATE),
            (15, DifficultyLevel.ADVANCED),
            (30, DifficultyLevel.EXPERT),
        ]
        for completed, expected in cases:
            progress = UserProgress(total_quizzes_completed=completed)
            assert recommended_quiz_level(progress) == expected

    def test_puzzle_beginner_below_three_attempts(self):
        progress = PuzzleProgress(total_puzzles_completed=2, total_puzzles_solved=2)
        assert recommended_puzzle_level(progress) == DifficultyLevel.BEGINNER

    def test_puzzle_intermediate_on_good_success_rate(self):
        progress = PuzzleProgress(total_puzzles_completed=5, total_puzzles_solved=4)
        assert recommended_puzzle_level(progress) == DifficultyLevel.INTERMEDIATE

    def test_puzzle_advanced_needs_ten_attempts(self):
        progress = PuzzleProgress(total_puzzles_completed=9, total_puzzles_solved=9)
        assert recommended_puzzle_level(progress) == DifficultyLevel.INTERMEDIATE

        progress = PuzzleProgress(total_puzzles_completed=10, total_puzzles_solved=9)
        assert recommended_puzzle_level(progress) == DifficultyLevel.ADVANCED

    def test_puzzle_low_success_stays_beginner(self):
        progress = PuzzleProgress(total_puzzles_completed=10, total_puzzles_solved=5)
        assert recommended_puzzle_level(progress) == DifficultyLevel.BEGINNER
