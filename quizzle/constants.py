"""Application-wide constants and configuration values.

This module centralizes all magic numbers and hardcoded values used throughout
the application, making them easier to maintain and adjust.
"""

# Persistence keys
QUIZ_PROGRESS_KEY = "userProgress"
"""Key under which the quiz progress snapshot is stored."""

PUZZLE_PROGRESS_KEY = "puzzleProgress"
"""Key under which the puzzle progress snapshot is stored."""

DAILY_CHALLENGE_KEY = "dailyChallenge"
"""Key under which the cached daily challenge is stored."""

# Session timing (seconds)
COUNTDOWN_TICK_SECONDS = 1
"""Interval between countdown ticks while an attempt is active."""

QUIZ_AUTO_ADVANCE_DELAY = 3
"""Delay before moving to the next question once the explanation is shown."""

PUZZLE_SOLUTION_REVEAL_DELAY = 2
"""Delay before showing the solution after an incorrect puzzle answer."""

MEMORY_SHOW_SECONDS = 3
"""How long the memory challenge sequence stays visible."""

MEMORY_HIDE_SECONDS = 1
"""Blank pause between hiding the memory sequence and accepting answers."""

NO_ANSWER = -1
"""Sentinel recorded for a skipped or unanswered quiz question."""

# Difficulty escalation
LEVEL_UP_MIN_ATTEMPTS = 5
"""Completed attempts in a category/type before escalation is considered."""

LEVEL_UP_SCORE_THRESHOLD = 80.0
"""Average quiz score percentage that must be exceeded to escalate."""

LEVEL_UP_SUCCESS_RATE = 0.8
"""Puzzle success rate that must be exceeded to escalate."""

# Recommendations
RECOMMENDED_QUIZ_COUNT = 3
"""Maximum number of recommended quizzes."""

RECOMMENDED_PUZZLE_COUNT = 4
"""Maximum number of recommended puzzles."""

QUIZ_LEVEL_THRESHOLDS = (5, 15, 30)
"""Total quiz completions at which recommendations move up one tier."""

PUZZLE_BEGINNER_MIN_ATTEMPTS = 3
"""Puzzle completions required before recommendations leave beginner."""

PUZZLE_ADVANCED_MIN_ATTEMPTS = 10
"""Puzzle completions required for advanced recommendations."""

PUZZLE_ADVANCED_SUCCESS_RATE = 0.8
"""Success rate that must be exceeded for advanced puzzle recommendations."""

PUZZLE_INTERMEDIATE_SUCCESS_RATE = 0.6
"""Success rate that must be exceeded for intermediate puzzle recommendations."""

# Daily challenge
DAILY_BONUS_MIN = 1.5
"""Lower bound (inclusive) of the daily challenge bonus multiplier."""

DAILY_BONUS_SPAN = 1.0
"""Width of the bonus multiplier range, upper bound exclusive."""

# Achievements
WEEK_STREAK_DAYS = 7
"""Streak length that unlocks the Week Warrior achievement."""

# Notifications
DAILY_REMINDER_HOUR = 19
"""Local hour of the daily reminder."""

DAILY_REMINDER_MINUTE = 0
"""Local minute of the daily reminder."""

DAILY_REMINDER_ID = "dailyReminder"
"""Identifier of the pending daily reminder request."""
