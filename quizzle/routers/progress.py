"""Progress, daily challenge, brain teaser and settings endpoints."""
import logging
from typing import Dict, List
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from quizzle.routers.deps import get_notifier, get_puzzle_service, get_quiz_service
from quizzle.services.notifications import ReminderNotifier
from quizzle.services.puzzle_service import PuzzleService
from quizzle.services.quiz_service import QuizService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["progress"])


class NotificationSettings(BaseModel):
    enabled: bool


@router.get("/progress")
async def get_progress(
    quiz_service: QuizService = Depends(get_quiz_service),
    puzzle_service: PuzzleService = Depends(get_puzzle_service)
) -> Dict:
    """Raw quiz and puzzle progress records."""
    return {
        "quiz": quiz_service.progress.model_dump(mode="json"),
        "puzzle": puzzle_service.progress.model_dump(mode="json"),
    }


@router.get("/progress/summary")
async def get_progress_summary(
    quiz_service: QuizService = Depends(get_quiz_service),
    puzzle_service: PuzzleService = Depends(get_puzzle_service)
) -> Dict:
    """
    Derived statistics for the progress screen.

    Returns:
    - quiz totals, streak and per-category averages
    - puzzle totals, success rate and formatted times
    - recent achievements, newest first
    """
    achievements = sorted(
        quiz_service.progress.achievements, key=lambda a: a.unlocked_at, reverse=True
    )
    return {
        "quiz": quiz_service.summary(),
        "puzzle": puzzle_service.summary(),
        "recent_achievements": [a.model_dump(mode="json") for a in achievements[:5]],
    }


@router.post("/progress/reset")
async def reset_progress(
    quiz_service: QuizService = Depends(get_quiz_service),
    puzzle_service: PuzzleService = Depends(get_puzzle_service)
) -> Dict:
    """Discard all quiz and puzzle progress."""
    quiz_service.reset_progress()
    puzzle_service.reset_progress()
    logger.info("All progress reset via API")
    return {"status": "reset"}


@router.get("/daily-challenge")
async def get_daily_challenge(quiz_service: QuizService = Depends(get_quiz_service)) -> Dict:
    """Today's quiz and puzzle pairing, generated on first request of the day."""
    challenge = quiz_service.generate_daily_challenge()
    return {
        "date": challenge.day.isoformat(),
        "quiz_id": challenge.quiz.id,
        "quiz_title": challenge.quiz.title,
        "puzzle_id": challenge.puzzle.id,
        "puzzle_title": challenge.puzzle.title,
        "bonus_multiplier": round(challenge.bonus_multiplier, 2),
        "is_completed": challenge.is_completed,
    }


@router.get("/brain-teasers")
async def get_brain_teasers(service: PuzzleService = Depends(get_puzzle_service)) -> List[Dict]:
    return [t.model_dump(mode="json") for t in service.daily_brain_teasers()]


@router.get("/settings/notifications")
async def get_notification_settings(notifier: ReminderNotifier = Depends(get_notifier)) -> Dict:
    return {"enabled": notifier.enabled, "pending": sorted(notifier.pending)}


@router.put("/settings/notifications")
async def update_notification_settings(
    body: NotificationSettings,
    notifier: ReminderNotifier = Depends(get_notifier)
) -> Dict:
    """Enable or disable the daily reminder. Disabling removes pending reminders."""
    notifier.set_enabled(body.enabled)
    return {"enabled": notifier.enabled, "pending": sorted(notifier.pending)}
