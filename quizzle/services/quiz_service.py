"""Quiz catalog, quiz progress, achievements and the daily challenge."""
import logging
import random
from datetime import datetime
from typing import Callable, Dict, List, Optional
from quizzle.content.quizzes import build_quizzes
from quizzle.db.store import KeyValueStore
from quizzle.schemas import (
    Achievement,
    AchievementCategory,
    CategoryProgress,
    DailyChallenge,
    DifficultyLevel,
    Quiz,
    QuizCategory,
    QuizResult,
    UserProgress,
)
from quizzle.services.notifications import ReminderNotifier
from quizzle.services.progression import (
    escalate_level,
    incremental_mean,
    recommended_quiz_level,
    update_streak,
)
from quizzle.services.puzzle_service import PuzzleService
from quizzle.services.snapshots import delete_snapshot, load_snapshot, save_snapshot
from quizzle.constants import (
    QUIZ_PROGRESS_KEY,
    DAILY_CHALLENGE_KEY,
    RECOMMENDED_QUIZ_COUNT,
    LEVEL_UP_SCORE_THRESHOLD,
    DAILY_BONUS_MIN,
    DAILY_BONUS_SPAN,
    WEEK_STREAK_DAYS,
)

logger = logging.getLogger(__name__)


class QuizService:
    """Owns the quiz catalog, the single UserProgress record and the daily challenge.

    Args:
        store: Key-value store holding the progress and challenge snapshots
        puzzle_service: Puzzle provider used to pick the daily challenge puzzle
        clock: Returns the current local time (streaks use its calendar day)
        rng: Random source for recommendations and the daily challenge
        notifier: Reminder scheduler; the daily reminder is requested on startup
        quizzes: Catalog override, defaults to the built-in quizzes
    """

    def __init__(
        self,
        store: KeyValueStore,
        puzzle_service: PuzzleService,
        clock: Callable[[], datetime] = datetime.now,
        rng: Optional[random.Random] = None,
        notifier: Optional[ReminderNotifier] = None,
        quizzes: Optional[List[Quiz]] = None
    ):
        self._store = store
        self._puzzles = puzzle_service
        self._clock = clock
        self._rng = rng or random.Random()
        self.quizzes: List[Quiz] = quizzes if quizzes is not None else build_quizzes()
        self._by_id: Dict[str, Quiz] = {q.id: q for q in self.quizzes}
        self.progress = load_snapshot(store, QUIZ_PROGRESS_KEY, UserProgress) or UserProgress()
        self.daily_challenge: Optional[DailyChallenge] = load_snapshot(
            store, DAILY_CHALLENGE_KEY, DailyChallenge
        )
        if notifier is not None:
            notifier.schedule_daily_reminder()

    def get(self, quiz_id: str) -> Optional[Quiz]:
        return self._by_id.get(quiz_id)

    def catalog(
        self,
        category: Optional[QuizCategory] = None,
        difficulty: Optional[DifficultyLevel] = None
    ) -> List[Quiz]:
        """Return quizzes matching every given filter."""
        return [
            q for q in self.quizzes
            if (category is None or q.category == category)
            and (difficulty is None or q.difficulty == difficulty)
        ]

    def recommend(self) -> List[Quiz]:
        """Return up to RECOMMENDED_QUIZ_COUNT shuffled quizzes at the user's tier."""
        level = recommended_quiz_level(self.progress)
        candidates = self.catalog(difficulty=level)
        self._rng.shuffle(candidates)
        return candidates[:RECOMMENDED_QUIZ_COUNT]

    def submit(self, result: QuizResult) -> None:
        """
        Fold one quiz result into progress and persist the snapshot.

        Updates:
        - completion count and cumulative score
        - category record (average score %, best score, difficulty escalation)
        - streak days
        - achievements
        """
        progress = self.progress
        progress.total_quizzes_completed += 1
        progress.total_score += result.score

        quiz = self.get(result.quiz_id)
        if quiz is not None:
            self._update_category_progress(quiz.category, result)
        else:
            logger.warning(
                f"Result for unknown quiz {result.quiz_id}; category progress not updated",
                extra={"activity_id": result.quiz_id}
            )

        now = self._clock()
        progress.streak_days = update_streak(progress.streak_days, progress.last_played_date, now)
        progress.last_played_date = now

        self._check_achievements(result, now)

        logger.info(
            f"Quiz result recorded: score={result.score}/{result.max_score}, "
            f"time={result.time_spent:.1f}s, streak={progress.streak_days}",
            extra={"activity_id": result.quiz_id}
        )
        save_snapshot(self._store, QUIZ_PROGRESS_KEY, progress)

    def _update_category_progress(self, category: QuizCategory, result: QuizResult) -> None:
        category_progress = self.progress.category_progress.get(category) or CategoryProgress()
        category_progress.quizzes_completed += 1
        category_progress.average_score = incremental_mean(
            category_progress.average_score,
            category_progress.quizzes_completed,
            result.percentage
        )
        if result.score > category_progress.best_score:
            category_progress.best_score = result.score

        new_level = escalate_level(
            category_progress.current_level,
            category_progress.quizzes_completed,
            category_progress.average_score,
            LEVEL_UP_SCORE_THRESHOLD
        )
        if new_level != category_progress.current_level:
            logger.info(f"{category.value} level raised to {new_level.value}")
            category_progress.current_level = new_level

        self.progress.category_progress[category] = category_progress

    def _check_achievements(self, result: QuizResult, now: datetime) -> List[Achievement]:
        """Unlock achievements whose trigger matches this result.

        An achievement already present (by title) is never unlocked twice, even
        if its trigger fires again after a partial reset.
        """
        progress = self.progress
        candidates = []

        if progress.total_quizzes_completed == 1:
            candidates.append(("First Steps", "Complete your first quiz", "star.fill",
                               AchievementCategory.EXPLORER))
        if progress.streak_days == WEEK_STREAK_DAYS:
            candidates.append(("Week Warrior", "Play for 7 days in a row", "flame.fill",
                               AchievementCategory.STREAK))
        if result.is_perfect:
            candidates.append(("Perfect Score", "Get 100% on a quiz", "crown.fill",
                               AchievementCategory.MASTERY))

        unlocked_titles = {a.title for a in progress.achievements}
        new_achievements = [
            Achievement(title=title, description=description, icon=icon,
                        unlocked_at=now, category=category)
            for title, description, icon, category in candidates
            if title not in unlocked_titles
        ]
        for achievement in new_achievements:
            logger.info(f"Achievement unlocked: {achievement.title}")
        progress.achievements.extend(new_achievements)
        return new_achievements

    def generate_daily_challenge(self) -> DailyChallenge:
        """
        Return today's challenge, generating and caching it on first request.

        A challenge already cached for the current calendar day is returned as
        is. Otherwise a random quiz and puzzle are paired with a bonus
        multiplier drawn uniformly from [1.5, 2.5).
        """
        today = self._clock().date()
        if self.daily_challenge is not None and self.daily_challenge.day == today:
            return self.daily_challenge

        challenge = DailyChallenge(
            day=today,
            quiz=self._rng.choice(self.quizzes),
            puzzle=self._puzzles.random_puzzle(),
            bonus_multiplier=DAILY_BONUS_MIN + self._rng.random() * DAILY_BONUS_SPAN,
        )
        self.daily_challenge = challenge
        logger.info(
            f"Daily challenge generated for {today.isoformat()}: "
            f"{challenge.quiz.id} + {challenge.puzzle.id} x{challenge.bonus_multiplier:.2f}"
        )
        save_snapshot(self._store, DAILY_CHALLENGE_KEY, challenge)
        return challenge

    def reset_progress(self) -> None:
        """Discard quiz progress and the cached daily challenge, in memory and persisted."""
        self.progress = UserProgress()
        self.daily_challenge = None
        delete_snapshot(self._store, QUIZ_PROGRESS_KEY)
        delete_snapshot(self._store, DAILY_CHALLENGE_KEY)
        logger.info("Quiz progress reset")

    def summary(self) -> Dict:
        """
        Derived quiz statistics for display.

        Returns:
            Dictionary with totals, streak and per-category averages
        """
        progress = self.progress
        return {
            "total_completed": progress.total_quizzes_completed,
            "total_score": progress.total_score,
            "streak_days": progress.streak_days,
            "achievements": len(progress.achievements),
            "categories": {
                category.value: {
                    "completed": cp.quizzes_completed,
                    "average_score": round(cp.average_score, 1),
                    "best_score": cp.best_score,
                    "current_level": cp.current_level.value,
                }
                for category, cp in progress.category_progress.items()
            },
        }
