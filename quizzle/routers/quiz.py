"""Quiz catalog and quiz session endpoints."""
import logging
from typing import Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator
from quizzle.routers.deps import get_quiz_controller, get_quiz_service
from quizzle.schemas import DifficultyLevel, Quiz, QuizCategory
from quizzle.services.quiz_service import QuizService
from quizzle.services.quiz_session import QuizController

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["quiz"])


class StartQuizRequest(BaseModel):
    """Request body for starting a quiz attempt."""
    quiz_id: str = Field(..., min_length=1, description="Catalog id of the quiz")

    @field_validator("quiz_id")
    @classmethod
    def validate_quiz_id(cls, v):
        if not v.strip():
            raise ValueError("quiz_id cannot be empty")
        return v.strip()


class SelectAnswerRequest(BaseModel):
    """Request body for selecting an option of the current question."""
    answer_index: int = Field(..., ge=0, description="Zero-based option index")


def quiz_summary(quiz: Quiz) -> Dict:
    """Catalog listing entry; questions and answers are only served by the session."""
    return {
        "id": quiz.id,
        "title": quiz.title,
        "category": quiz.category.value,
        "category_icon": quiz.category.icon,
        "difficulty": quiz.difficulty.value,
        "difficulty_multiplier": quiz.difficulty.multiplier,
        "description": quiz.description,
        "time_limit": quiz.time_limit,
        "question_count": len(quiz.questions),
        "total_points": quiz.total_points,
    }


@router.get("/quizzes")
async def list_quizzes(
    category: Optional[QuizCategory] = None,
    difficulty: Optional[DifficultyLevel] = None,
    service: QuizService = Depends(get_quiz_service)
) -> List[Dict]:
    """List quizzes, optionally filtered by category and difficulty."""
    return [quiz_summary(q) for q in service.catalog(category, difficulty)]


@router.get("/quizzes/recommended")
async def recommended_quizzes(service: QuizService = Depends(get_quiz_service)) -> List[Dict]:
    """Quizzes at the tier matching the user's total completions."""
    return [quiz_summary(q) for q in service.recommend()]


@router.get("/quizzes/{quiz_id}")
async def get_quiz(quiz_id: str, service: QuizService = Depends(get_quiz_service)) -> Dict:
    quiz = service.get(quiz_id)
    if quiz is None:
        raise HTTPException(status_code=404, detail="Quiz not found")
    return quiz_summary(quiz)


@router.get("/quiz/session")
async def quiz_session_state(controller: QuizController = Depends(get_quiz_controller)) -> Dict:
    return controller.snapshot()


@router.post("/quiz/session/start")
async def start_quiz(
    body: StartQuizRequest,
    service: QuizService = Depends(get_quiz_service),
    controller: QuizController = Depends(get_quiz_controller)
) -> Dict:
    """
    Start a fresh attempt, superseding any attempt in progress.

    Returns:
    - session snapshot with the first question
    """
    quiz = service.get(body.quiz_id)
    if quiz is None:
        logger.warning(f"Start requested for unknown quiz {body.quiz_id}")
        raise HTTPException(status_code=404, detail="Quiz not found")
    controller.start(quiz)
    return controller.snapshot()


@router.post("/quiz/session/select")
async def select_answer(
    body: SelectAnswerRequest,
    controller: QuizController = Depends(get_quiz_controller)
) -> Dict:
    controller.select_answer(body.answer_index)
    return controller.snapshot()


@router.post("/quiz/session/submit")
async def submit_answer(controller: QuizController = Depends(get_quiz_controller)) -> Dict:
    """
    Submit the selected option.

    The answer is revealed and the session moves on automatically after a
    short delay. Submitting with nothing selected leaves the state unchanged.
    """
    is_correct = controller.submit_answer()
    state = controller.snapshot()
    state["last_answer_correct"] = is_correct
    return state


@router.post("/quiz/session/skip")
async def skip_question(controller: QuizController = Depends(get_quiz_controller)) -> Dict:
    controller.skip_question()
    return controller.snapshot()


@router.post("/quiz/session/advance")
async def next_question(controller: QuizController = Depends(get_quiz_controller)) -> Dict:
    """Leave the revealed answer without waiting for the auto-advance."""
    controller.next_question()
    return controller.snapshot()


@router.post("/quiz/session/reset")
async def reset_quiz(controller: QuizController = Depends(get_quiz_controller)) -> Dict:
    controller.reset()
    return controller.snapshot()
