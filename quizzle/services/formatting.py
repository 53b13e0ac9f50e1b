"""Display helpers for timers, statistics and result feedback."""
from typing import Optional


def format_countdown(seconds: float) -> str:
    """Format remaining time as ``MM:SS``."""
    total = max(0, int(seconds))
    return f"{total // 60:02d}:{total % 60:02d}"


def format_duration(seconds: float) -> str:
    """Format a statistic duration as ``M:SS``."""
    total = max(0, int(seconds))
    return f"{total // 60}:{total % 60:02d}"


def quiz_performance_message(percentage: float) -> str:
    """Feedback line for a finished quiz, by score percentage band."""
    if percentage >= 90:
        return "Outstanding! 🌟"
    if percentage >= 80:
        return "Excellent work! 🎉"
    if percentage >= 70:
        return "Good job! 👏"
    if percentage >= 60:
        return "Not bad! Keep learning! 📚"
    return "Keep practicing! You'll improve! 💪"


def puzzle_performance_message(is_correct: Optional[bool], hints_used: int) -> str:
    """Feedback line for a finished puzzle. Empty until a result exists."""
    if is_correct is None:
        return ""
    if not is_correct:
        return "Don't give up! Try again! 🔄"
    if hints_used == 0:
        return "Perfect! No hints needed! 🌟"
    if hints_used == 1:
        return "Great job! 🎉"
    if hints_used == 2:
        return "Good work! 👏"
    return "Well done! Keep practicing! 💪"
