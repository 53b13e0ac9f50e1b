"""Tests for the timed quiz session flow."""
import pytest
from quizzle.schemas import DifficultyLevel, Quiz, QuizCategory, QuizQuestion
from quizzle.services.quiz_session import QuizController
from quizzle.services.session import ItemPhase, SessionState
from quizzle.constants import NO_ANSWER


def make_quiz(quiz_id="mini", questions=2, time_limit=None):
    return Quiz(
        id=quiz_id,
        title="Mini",
        category=QuizCategory.SCIENCE,
        difficulty=DifficultyLevel.BEGINNER,
        time_limit=time_limit,
        questions=[
            QuizQuestion(question=f"Q{i}", options=["a", "b", "c", "d"], correct_answer_index=0)
            for i in range(questions)
        ],
    )


@pytest.fixture
def results(quiz_service, monkeypatch):
    """Collect every result submitted to the quiz service."""
    submitted = []
    original = quiz_service.submit

    def record(result):
        submitted.append(result)
        original(result)

    monkeypatch.setattr(quiz_service, "submit", record)
    return submitted


@pytest.fixture
def controller(quiz_service, results, scheduler, clock):
    return QuizController(quiz_service, scheduler, clock)


class TestAnswering:
    """Tests for select/submit/advance within one attempt."""

    def test_start_enters_first_question(self, controller, quiz_service):
        quiz = quiz_service.get("history-civilizations")
        controller.start(quiz)
        assert controller.session.state == SessionState.ACTIVE
        assert controller.session.phase == ItemPhase.ANSWERING
        assert controller.current_question == quiz.questions[0]
        assert controller.session.progress_fraction == pytest.approx(1 / 3)

    def test_correct_answer_scores_and_reveals(self, controller, quiz_service):
        controller.start(quiz_service.get("history-civilizations"))
        assert controller.select_answer(1)
        assert controller.submit_answer() is True
        assert controller.session.score == 10
        assert controller.show_answer

    def test_auto_advance_after_reveal(self, controller, quiz_service, scheduler):
        controller.start(quiz_service.get("history-civilizations"))
        controller.select_answer(0)
        assert controller.submit_answer() is False

        scheduler.advance(2.9)
        assert controller.session.current_index == 0
        scheduler.advance(0.1)
        assert controller.session.current_index == 1
        assert controller.session.phase == ItemPhase.ANSWERING
        assert controller.session.answer is None

    def test_manual_advance_skips_wait(self, controller, quiz_service, scheduler):
        controller.start(quiz_service.get("history-civilizations"))
        controller.select_answer(1)
        controller.submit_answer()
        assert controller.next_question()
        assert controller.session.current_index == 1

        # The superseded auto-advance must not move past question 2.
        scheduler.advance(3)
        assert controller.session.current_index == 1

    def test_submit_without_selection_is_ignored(self, controller, quiz_service):
        controller.start(quiz_service.get("history-civilizations"))
        assert controller.submit_answer() is None
        assert controller.session.phase == ItemPhase.ANSWERING

    def test_out_of_range_option_ignored(self, controller, quiz_service):
        controller.start(quiz_service.get("history-civilizations"))
        assert not controller.select_answer(7)
        assert controller.session.answer is None

    def test_select_ignored_while_revealed(self, controller, quiz_service):
        controller.start(quiz_service.get("history-civilizations"))
        controller.select_answer(1)
        controller.submit_answer()
        assert not controller.select_answer(2)
        assert controller.session.answer == 1

    def test_intents_ignored_when_idle(self, controller):
        assert not controller.select_answer(0)
        assert controller.submit_answer() is None
        assert not controller.skip_question()
        assert not controller.next_question()
        assert controller.session.state == SessionState.IDLE


class TestCompletion:
    """Tests for result production and progress updates."""

    def test_perfect_run(self, controller, quiz_service, results, scheduler):
        controller.start(quiz_service.get("history-civilizations"))
        for _ in range(3):
            controller.select_answer(1)
            controller.submit_answer()
            scheduler.advance(3)

        assert controller.session.state == SessionState.COMPLETED
        assert len(results) == 1
        result = results[0]
        assert result.score == 30
        assert result.max_score == 30
        assert result.correct_answers == [0, 1, 2]
        assert result.answers == [1, 1, 1]
        assert result.is_perfect
        assert controller.performance_message == "Outstanding! 🌟"
        assert quiz_service.progress.total_quizzes_completed == 1

    def test_skipped_questions_recorded_as_no_answer(self, controller, results):
        controller.start(make_quiz(questions=2))
        assert controller.skip_question()
        controller.select_answer(0)
        controller.submit_answer()
        controller.next_question()

        assert results[0].answers == [NO_ANSWER, 0]
        assert results[0].correct_answers == [1]
        assert results[0].score == 10

    def test_empty_quiz_completes_immediately(self, controller, results):
        controller.start(make_quiz(questions=0))
        assert controller.session.state == SessionState.COMPLETED
        assert len(results) == 1
        assert results[0].max_score == 0

    def test_time_spent_uses_scheduler_clock(self, controller, results, scheduler):
        controller.start(make_quiz(questions=1))
        scheduler.advance(12)
        controller.select_answer(0)
        controller.submit_answer()
        scheduler.advance(3)
        assert results[0].time_spent == 15


class TestCountdown:
    """Tests for the recurring countdown."""

    def test_countdown_ticks(self, controller, scheduler):
        controller.start(make_quiz(time_limit=90))
        assert controller.session.time_remaining_formatted == "01:30"
        scheduler.advance(31)
        assert controller.session.time_remaining == 59
        assert controller.session.time_remaining_formatted == "00:59"

    def test_expiry_completes_exactly_once(self, controller, results, scheduler):
        controller.start(make_quiz(time_limit=3))
        controller.select_answer(0)

        scheduler.advance(3)
        assert controller.session.state == SessionState.COMPLETED
        assert controller.session.expired
        assert len(results) == 1
        # Selected but unsubmitted answers do not count.
        assert results[0].score == 0
        assert results[0].answers == [NO_ANSWER, NO_ANSWER]

        scheduler.advance(60)
        assert len(results) == 1
        assert scheduler.pending == 0

    def test_countdown_runs_during_reveal(self, controller, results, scheduler):
        controller.start(make_quiz(time_limit=2))
        controller.select_answer(0)
        controller.submit_answer()

        scheduler.advance(2)
        assert controller.session.expired
        assert len(results) == 1
        assert results[0].score == 10

    def test_fired_ticks_are_not_retained(self, controller, scheduler):
        """Only the next tick stays armed, however long the countdown runs."""
        controller.start(make_quiz(time_limit=300))
        scheduler.advance(100)
        assert controller.session.time_remaining == 200
        assert controller.session.pending_timers == 1

        controller.select_answer(0)
        controller.submit_answer()
        assert controller.session.pending_timers == 2

        scheduler.advance(3)
        assert controller.session.current_index == 1
        assert controller.session.pending_timers == 1

    def test_no_time_limit_means_no_timer(self, controller, scheduler):
        controller.start(make_quiz(time_limit=None))
        assert not controller.session.timer_active
        assert scheduler.pending == 0


class TestRestartAndReset:
    def test_reset_cancels_pending_timers(self, controller, results, scheduler):
        controller.start(make_quiz(time_limit=30))
        controller.select_answer(0)
        controller.submit_answer()
        assert scheduler.pending == 2

        controller.reset()
        assert controller.session.state == SessionState.IDLE
        assert scheduler.pending == 0
        scheduler.advance(60)
        assert results == []

    def test_restart_supersedes_old_timers(self, controller, results, scheduler):
        controller.start(make_quiz("first", time_limit=5))
        controller.select_answer(0)
        controller.submit_answer()

        controller.start(make_quiz("second", time_limit=10))
        scheduler.advance(3)
        assert controller.quiz.id == "second"
        assert controller.session.current_index == 0
        assert controller.session.time_remaining == 7

        scheduler.advance(7)
        assert [r.quiz_id for r in results] == ["second"]

    def test_snapshot_hides_answer_until_revealed(self, controller, quiz_service):
        controller.start(quiz_service.get("history-civilizations"))
        state = controller.snapshot()
        assert state["state"] == "active"
        assert "correct_answer_index" not in state["question"]
        assert state["correct_answer_index"] is None

        controller.select_answer(1)
        controller.submit_answer()
        state = controller.snapshot()
        assert state["show_answer"]
        assert state["correct_answer_index"] == 1
