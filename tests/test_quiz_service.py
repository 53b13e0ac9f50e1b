"""Tests for quiz catalog, progress, achievements and the daily challenge."""
import random
from datetime import datetime
from quizzle.schemas import DifficultyLevel, QuizCategory, QuizResult, UserProgress
from quizzle.services.puzzle_service import PuzzleService
from quizzle.services.quiz_service import QuizService
from quizzle.constants import QUIZ_PROGRESS_KEY, DAILY_CHALLENGE_KEY, DAILY_REMINDER_ID


def make_result(quiz_id="history-civilizations", score=30, max_score=30, total=3, correct=None, when=None):
    correct = list(range(total)) if correct is None else correct
    return QuizResult(
        quiz_id=quiz_id,
        score=score,
        max_score=max_score,
        total_questions=total,
        time_spent=42.0,
        completed_at=when or datetime(2026, 3, 10, 12),
        correct_answers=correct,
        answers=[1] * total,
    )


class TestCatalog:
    def test_builtin_catalog(self, quiz_service):
        assert len(quiz_service.quizzes) == 6
        assert quiz_service.get("science-fundamentals").total_points == 35

    def test_unknown_id(self, quiz_service):
        assert quiz_service.get("nope") is None

    def test_filter_by_category_and_difficulty(self, quiz_service):
        science = quiz_service.catalog(category=QuizCategory.SCIENCE)
        assert [q.id for q in science] == ["science-fundamentals"]

        beginner = quiz_service.catalog(difficulty=DifficultyLevel.BEGINNER)
        assert {q.id for q in beginner} == {"technology-essentials", "world-geography", "mathematics-basics"}

        assert quiz_service.catalog(QuizCategory.SCIENCE, DifficultyLevel.BEGINNER) == []

    def test_recommend_new_user_gets_beginner(self, quiz_service):
        recommended = quiz_service.recommend()
        assert len(recommended) == 3
        assert all(q.difficulty == DifficultyLevel.BEGINNER for q in recommended)

    def test_recommend_bounded_and_from_tier(self, quiz_service):
        quiz_service.progress.total_quizzes_completed = 6
        recommended = quiz_service.recommend()
        assert len(recommended) == 3
        assert all(q.difficulty == DifficultyLevel.INTERMEDIATE for q in recommended)


class TestSubmit:
    """Tests for folding quiz results into progress."""

    def test_totals_and_category(self, quiz_service):
        quiz_service.submit(make_result(score=20, correct=[0, 1]))

        progress = quiz_service.progress
        assert progress.total_quizzes_completed == 1
        assert progress.total_score == 20
        history = progress.category_progress[QuizCategory.HISTORY]
        assert history.quizzes_completed == 1
        assert round(history.average_score, 2) == 66.67
        assert history.best_score == 20

    def test_average_score_is_incremental_mean(self, quiz_service):
        for score in (30, 15, 0):
            quiz_service.submit(make_result(score=score, correct=[]))
        history = quiz_service.progress.category_progress[QuizCategory.HISTORY]
        assert history.average_score == 50.0
        assert history.best_score == 30

    def test_category_escalates_on_fifth_attempt(self, quiz_service):
        for _ in range(4):
            quiz_service.submit(make_result())
        history = quiz_service.progress.category_progress[QuizCategory.HISTORY]
        assert history.current_level == DifficultyLevel.BEGINNER

        quiz_service.submit(make_result())
        history = quiz_service.progress.category_progress[QuizCategory.HISTORY]
        assert history.current_level == DifficultyLevel.INTERMEDIATE

    def test_unknown_quiz_still_counts(self, quiz_service):
        quiz_service.submit(make_result(quiz_id="retired-quiz", score=10))
        assert quiz_service.progress.total_quizzes_completed == 1
        assert quiz_service.progress.total_score == 10
        assert quiz_service.progress.category_progress == {}

    def test_streak_across_days(self, quiz_service, clock):
        quiz_service.submit(make_result())
        assert quiz_service.progress.streak_days == 1

        clock.advance(days=1)
        quiz_service.submit(make_result())
        assert quiz_service.progress.streak_days == 2

        clock.advance(hours=1)
        quiz_service.submit(make_result())
        assert quiz_service.progress.streak_days == 2

        clock.advance(days=3)
        quiz_service.submit(make_result())
        assert quiz_service.progress.streak_days == 1

    def test_progress_persisted_and_reloaded(self, store, quiz_service, puzzle_service, clock):
        quiz_service.submit(make_result(score=25))

        reloaded = QuizService(store, puzzle_service, clock=clock)
        assert reloaded.progress == quiz_service.progress

    def test_write_failure_keeps_memory_progress(self, failing_store, clock):
        puzzles = PuzzleService(failing_store, clock=clock)
        service = QuizService(failing_store, puzzles, clock=clock)

        service.submit(make_result())
        service.submit(make_result())
        assert service.progress.total_quizzes_completed == 2
        assert failing_store.write_attempts == 2

    def test_corrupt_snapshot_starts_fresh(self, store, puzzle_service, clock):
        store.set(QUIZ_PROGRESS_KEY, b"\x00\x01garbage")
        service = QuizService(store, puzzle_service, clock=clock)
        assert service.progress == UserProgress()


class TestAchievements:
    """Tests for achievement unlocking."""

    def test_first_quiz_and_perfect_score(self, quiz_service):
        quiz_service.submit(make_result())
        titles = [a.title for a in quiz_service.progress.achievements]
        assert titles == ["First Steps", "Perfect Score"]

    def test_imperfect_result_has_no_perfect_score(self, quiz_service):
        quiz_service.submit(make_result(score=20, correct=[0, 2]))
        titles = [a.title for a in quiz_service.progress.achievements]
        assert titles == ["First Steps"]

    def test_achievements_not_duplicated(self, quiz_service):
        quiz_service.submit(make_result())
        quiz_service.submit(make_result())
        titles = [a.title for a in quiz_service.progress.achievements]
        assert titles.count("Perfect Score") == 1

    def test_first_steps_not_duplicated_after_counter_reset(self, quiz_service):
        quiz_service.submit(make_result(correct=[]))
        quiz_service.progress.total_quizzes_completed = 0
        quiz_service.submit(make_result(correct=[]))
        titles = [a.title for a in quiz_service.progress.achievements]
        assert titles == ["First Steps"]

    def test_week_warrior_on_seventh_day(self, quiz_service, clock):
        for _ in range(6):
            quiz_service.submit(make_result(correct=[]))
            clock.advance(days=1)
        assert "Week Warrior" not in [a.title for a in quiz_service.progress.achievements]

        quiz_service.submit(make_result(correct=[]))
        assert quiz_service.progress.streak_days == 7
        assert "Week Warrior" in [a.title for a in quiz_service.progress.achievements]


class TestDailyChallenge:
    """Tests for daily challenge generation."""

    def test_generated_once_per_day(self, quiz_service, clock):
        first = quiz_service.generate_daily_challenge()
        clock.advance(hours=6)
        assert quiz_service.generate_daily_challenge() is first
        assert first.day == clock().date()

    def test_bonus_in_range(self, store, puzzle_service, clock):
        for seed in range(20):
            service = QuizService(store, puzzle_service, clock=clock, rng=random.Random(seed))
            service.daily_challenge = None
            challenge = service.generate_daily_challenge()
            assert 1.5 <= challenge.bonus_multiplier < 2.5

    def test_new_day_regenerates(self, quiz_service, clock):
        first = quiz_service.generate_daily_challenge()
        clock.advance(days=1)
        second = quiz_service.generate_daily_challenge()
        assert second.day == first.day.replace(day=first.day.day + 1)

    def test_persisted_challenge_reused(self, store, puzzle_service, quiz_service, clock):
        first = quiz_service.generate_daily_challenge()
        reloaded = QuizService(store, puzzle_service, clock=clock, rng=random.Random(99))
        assert reloaded.generate_daily_challenge() == first


class TestResetAndSummary:
    def test_reset_clears_progress_and_challenge(self, store, quiz_service):
        quiz_service.submit(make_result())
        quiz_service.generate_daily_challenge()

        quiz_service.reset_progress()
        assert quiz_service.progress == UserProgress()
        assert quiz_service.daily_challenge is None
        assert store.get(QUIZ_PROGRESS_KEY) is None
        assert store.get(DAILY_CHALLENGE_KEY) is None

    def test_summary(self, quiz_service):
        quiz_service.submit(make_result(score=20, correct=[0, 1]))
        summary = quiz_service.summary()
        assert summary["total_completed"] == 1
        assert summary["categories"]["History"]["average_score"] == 66.7
        assert summary["categories"]["History"]["current_level"] == "Beginner"


class TestReminder:
    def test_daily_reminder_scheduled_on_startup(self, quiz_service, notifier):
        assert DAILY_REMINDER_ID in notifier.pending
