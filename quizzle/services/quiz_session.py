"""Quiz-taking flow: multiple-choice questions answered by option index."""
from datetime import datetime
from typing import Callable, Dict, Optional
from quizzle.schemas import Quiz, QuizQuestion, QuizResult
from quizzle.services.formatting import quiz_performance_message
from quizzle.services.quiz_service import QuizService
from quizzle.services.session import AttemptSession, ItemPhase, Scheduler, SessionState
from quizzle.constants import NO_ANSWER, QUIZ_AUTO_ADVANCE_DELAY


class QuizAttempt:
    """AttemptKind for quizzes: one item per question, scored in points."""
    name = "quiz"

    def prepare(self, quiz: Quiz):
        return ()

    def item_count(self, quiz: Quiz) -> int:
        return len(quiz.questions)

    def has_answer(self, answer) -> bool:
        return answer is not None

    def is_correct(self, quiz: Quiz, index: int, answer: int) -> bool:
        return answer == quiz.questions[index].correct_answer_index

    def points_for(self, quiz: Quiz, index: int) -> int:
        return quiz.questions[index].points

    def reveal_delay(self, quiz: Quiz) -> Optional[float]:
        return QUIZ_AUTO_ADVANCE_DELAY

    def build_result(self, attempt: AttemptSession, time_spent: float, completed_at: datetime) -> QuizResult:
        quiz = attempt.activity
        answers = [NO_ANSWER if a is None else a for a in attempt.answers]
        correct_answers = [
            i for i, answer in enumerate(answers)
            if answer == quiz.questions[i].correct_answer_index
        ]
        return QuizResult(
            quiz_id=quiz.id,
            score=attempt.score,
            max_score=quiz.total_points,
            total_questions=len(quiz.questions),
            time_spent=time_spent,
            completed_at=completed_at,
            correct_answers=correct_answers,
            answers=answers,
        )

    def discard(self) -> None:
        pass


class QuizController:
    """Drives one quiz attempt and reports the result to the QuizService.

    Args:
        quiz_service: Provider receiving completed results
        scheduler: Timer source for the countdown and auto-advance
        clock: Wall-clock for result timestamps
    """

    def __init__(
        self,
        quiz_service: QuizService,
        scheduler: Scheduler,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.session = AttemptSession(QuizAttempt(), scheduler, quiz_service.submit, clock)

    def start(self, quiz: Quiz) -> None:
        self.session.start(quiz)

    def select_answer(self, index: int) -> bool:
        """Select an option of the current question. Out-of-range indexes are ignored."""
        question = self.current_question
        if question is None or not 0 <= index < len(question.options):
            return False
        return self.session.select(index)

    def submit_answer(self) -> Optional[bool]:
        return self.session.submit()

    def skip_question(self) -> bool:
        return self.session.skip()

    def next_question(self) -> bool:
        return self.session.advance()

    def reset(self) -> None:
        self.session.reset()

    @property
    def quiz(self) -> Optional[Quiz]:
        return self.session.activity

    @property
    def current_question(self) -> Optional[QuizQuestion]:
        quiz = self.quiz
        if quiz is None or self.session.current_index >= len(quiz.questions):
            return None
        return quiz.questions[self.session.current_index]

    @property
    def show_answer(self) -> bool:
        return self.session.phase == ItemPhase.REVEALED

    @property
    def score_percentage(self) -> float:
        quiz = self.quiz
        if quiz is None or quiz.total_points == 0:
            return 0.0
        return self.session.score / quiz.total_points * 100

    @property
    def performance_message(self) -> str:
        return quiz_performance_message(self.score_percentage)

    @property
    def result(self) -> Optional[QuizResult]:
        return self.session.result

    def snapshot(self) -> Dict:
        """Observable state of the current attempt."""
        session = self.session
        question = self.current_question
        in_progress = session.state == SessionState.ACTIVE
        return {
            "state": session.state.value,
            "phase": session.phase.value if session.phase else None,
            "quiz_id": self.quiz.id if self.quiz else None,
            "current_index": session.current_index,
            "question_count": session.item_count,
            "question": question.model_dump(exclude={"correct_answer_index", "explanation"})
            if question and in_progress else None,
            "selected_answer": session.answer,
            "show_answer": self.show_answer,
            "correct_answer_index": question.correct_answer_index if question and self.show_answer else None,
            "explanation": question.explanation if question and self.show_answer else None,
            "score": session.score,
            "score_percentage": round(self.score_percentage, 1),
            "progress": session.progress_fraction,
            "time_remaining": session.time_remaining,
            "time_remaining_formatted": session.time_remaining_formatted,
            "expired": session.expired,
            "performance_message": self.performance_message if session.is_completed else None,
            "result": self.result.model_dump(mode="json") if self.result else None,
        }
