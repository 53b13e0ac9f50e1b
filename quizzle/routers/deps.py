"""Request dependencies resolving the providers and controllers built at startup."""
from fastapi import Request
from quizzle.services.notifications import ReminderNotifier
from quizzle.services.puzzle_service import PuzzleService
from quizzle.services.puzzle_session import PuzzleController
from quizzle.services.quiz_service import QuizService
from quizzle.services.quiz_session import QuizController


def get_quiz_service(request: Request) -> QuizService:
    return request.app.state.quiz_service


def get_puzzle_service(request: Request) -> PuzzleService:
    return request.app.state.puzzle_service


def get_quiz_controller(request: Request) -> QuizController:
    return request.app.state.quiz_controller


def get_puzzle_controller(request: Request) -> PuzzleController:
    return request.app.state.puzzle_controller


def get_notifier(request: Request) -> ReminderNotifier:
    return request.app.state.notifier
