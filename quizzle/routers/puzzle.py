"""Puzzle catalog and puzzle session endpoints."""
import logging
from typing import Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field, model_validator
from quizzle.routers.deps import get_puzzle_controller, get_puzzle_service
from quizzle.schemas import DifficultyLevel, Puzzle, PuzzleType
from quizzle.services.puzzle_service import PuzzleService
from quizzle.services.puzzle_session import PuzzleController

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["puzzle"])


class StartPuzzleRequest(BaseModel):
    """Request body for starting a puzzle attempt."""
    puzzle_id: str = Field(..., min_length=1)


class AnswerRequest(BaseModel):
    """Typed answer text or a picked option."""
    text: str = Field(..., max_length=200)


class LetterRequest(BaseModel):
    letter: str = Field(..., min_length=1, max_length=1)


class RemoveLetterRequest(BaseModel):
    """Remove a placed letter either by value (last occurrence) or by position."""
    letter: Optional[str] = Field(None, min_length=1, max_length=1)
    position: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def validate_target(self):
        if (self.letter is None) == (self.position is None):
            raise ValueError("provide exactly one of letter or position")
        return self


def puzzle_summary(puzzle: Puzzle) -> Dict:
    """Catalog listing entry without the solution."""
    return {
        "id": puzzle.id,
        "title": puzzle.title,
        "type": puzzle.type.value,
        "type_description": puzzle.type.blurb,
        "difficulty": puzzle.difficulty.value,
        "difficulty_multiplier": puzzle.difficulty.multiplier,
        "description": puzzle.description,
        "time_limit": puzzle.time_limit,
        "hint_count": len(puzzle.hints),
    }


@router.get("/puzzles")
async def list_puzzles(
    puzzle_type: Optional[PuzzleType] = Query(None, alias="type"),
    difficulty: Optional[DifficultyLevel] = None,
    service: PuzzleService = Depends(get_puzzle_service)
) -> List[Dict]:
    """List puzzles, optionally filtered by type and difficulty."""
    return [puzzle_summary(p) for p in service.catalog(puzzle_type, difficulty)]


@router.get("/puzzles/recommended")
async def recommended_puzzles(service: PuzzleService = Depends(get_puzzle_service)) -> List[Dict]:
    return [puzzle_summary(p) for p in service.recommend()]


@router.get("/puzzles/{puzzle_id}")
async def get_puzzle(puzzle_id: str, service: PuzzleService = Depends(get_puzzle_service)) -> Dict:
    puzzle = service.get(puzzle_id)
    if puzzle is None:
        raise HTTPException(status_code=404, detail="Puzzle not found")
    return puzzle_summary(puzzle)


@router.get("/puzzle/session")
async def puzzle_session_state(controller: PuzzleController = Depends(get_puzzle_controller)) -> Dict:
    return controller.snapshot()


@router.post("/puzzle/session/start")
async def start_puzzle(
    body: StartPuzzleRequest,
    service: PuzzleService = Depends(get_puzzle_service),
    controller: PuzzleController = Depends(get_puzzle_controller)
) -> Dict:
    """
    Start a fresh attempt, superseding any attempt in progress.

    Memory challenges open in the showing phase; the sequence is hidden
    again before answering becomes possible.
    """
    puzzle = service.get(body.puzzle_id)
    if puzzle is None:
        logger.warning(f"Start requested for unknown puzzle {body.puzzle_id}")
        raise HTTPException(status_code=404, detail="Puzzle not found")
    controller.start(puzzle)
    return controller.snapshot()


@router.post("/puzzle/session/answer")
async def set_answer(
    body: AnswerRequest,
    controller: PuzzleController = Depends(get_puzzle_controller)
) -> Dict:
    controller.set_answer(body.text)
    return controller.snapshot()


@router.post("/puzzle/session/option")
async def select_option(
    body: AnswerRequest,
    controller: PuzzleController = Depends(get_puzzle_controller)
) -> Dict:
    """Pick one of the puzzle's options as the answer."""
    puzzle = controller.puzzle
    if puzzle is not None and puzzle.data.options and body.text in puzzle.data.options:
        controller.set_answer(body.text)
    return controller.snapshot()


@router.post("/puzzle/session/submit")
async def submit_answer(controller: PuzzleController = Depends(get_puzzle_controller)) -> Dict:
    """
    Submit the current answer. The attempt completes immediately; the
    solution is revealed shortly after an incorrect answer.
    """
    is_correct = controller.submit_answer()
    state = controller.snapshot()
    state["last_answer_correct"] = is_correct
    return state


@router.post("/puzzle/session/skip")
async def skip_puzzle(controller: PuzzleController = Depends(get_puzzle_controller)) -> Dict:
    controller.skip()
    return controller.snapshot()


@router.post("/puzzle/session/hint")
async def reveal_hint(controller: PuzzleController = Depends(get_puzzle_controller)) -> Dict:
    controller.reveal_next_hint()
    return controller.snapshot()


@router.post("/puzzle/session/hint/toggle")
async def toggle_hint(controller: PuzzleController = Depends(get_puzzle_controller)) -> Dict:
    controller.toggle_hint()
    return controller.snapshot()


@router.post("/puzzle/session/letters/place")
async def place_letter(
    body: LetterRequest,
    controller: PuzzleController = Depends(get_puzzle_controller)
) -> Dict:
    controller.place_letter(body.letter)
    return controller.snapshot()


@router.post("/puzzle/session/letters/remove")
async def remove_letter(
    body: RemoveLetterRequest,
    controller: PuzzleController = Depends(get_puzzle_controller)
) -> Dict:
    if body.position is not None:
        controller.remove_letter_at(body.position)
    else:
        controller.remove_letter(body.letter)
    return controller.snapshot()


@router.post("/puzzle/session/letters/clear")
async def clear_word(controller: PuzzleController = Depends(get_puzzle_controller)) -> Dict:
    controller.clear_word()
    return controller.snapshot()


@router.post("/puzzle/session/letters/shuffle")
async def shuffle_letters(controller: PuzzleController = Depends(get_puzzle_controller)) -> Dict:
    controller.shuffle_letters()
    return controller.snapshot()


@router.post("/puzzle/session/reset")
async def reset_puzzle(controller: PuzzleController = Depends(get_puzzle_controller)) -> Dict:
    controller.reset()
    return controller.snapshot()
