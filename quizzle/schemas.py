"""Pydantic models for catalog entries, attempt results and durable progress."""
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class DifficultyLevel(str, Enum):
    """Ordered difficulty tier."""
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"

    @property
    def rank(self) -> int:
        return list(DifficultyLevel).index(self)

    @property
    def multiplier(self) -> float:
        return {
            DifficultyLevel.BEGINNER: 1.0,
            DifficultyLevel.INTERMEDIATE: 1.5,
            DifficultyLevel.ADVANCED: 2.0,
            DifficultyLevel.EXPERT: 3.0,
        }[self]

    def next_level(self) -> "DifficultyLevel":
        """Return the tier above this one, saturating at EXPERT."""
        levels = list(DifficultyLevel)
        return levels[min(self.rank + 1, len(levels) - 1)]


class QuizCategory(str, Enum):
    HISTORY = "History"
    SCIENCE = "Science"
    TECHNOLOGY = "Technology"
    GEOGRAPHY = "Geography"
    LITERATURE = "Literature"
    MATHEMATICS = "Mathematics"

    @property
    def icon(self) -> str:
        return {
            QuizCategory.HISTORY: "clock",
            QuizCategory.SCIENCE: "atom",
            QuizCategory.TECHNOLOGY: "laptopcomputer",
            QuizCategory.GEOGRAPHY: "globe",
            QuizCategory.LITERATURE: "book",
            QuizCategory.MATHEMATICS: "function",
        }[self]


class PuzzleType(str, Enum):
    WORD_SCRAMBLE = "Word Scramble"
    NUMBER_SEQUENCE = "Number Sequence"
    LOGIC_GRID = "Logic Grid"
    RIDDLE = "Riddle"
    PATTERN = "Pattern Recognition"
    MEMORY = "Memory Challenge"

    @property
    def blurb(self) -> str:
        return {
            PuzzleType.WORD_SCRAMBLE: "Unscramble letters to form words",
            PuzzleType.NUMBER_SEQUENCE: "Find the pattern in number sequences",
            PuzzleType.LOGIC_GRID: "Solve logic puzzles using grids",
            PuzzleType.RIDDLE: "Think creatively to solve riddles",
            PuzzleType.PATTERN: "Identify patterns in sequences",
            PuzzleType.MEMORY: "Test your memory with challenges",
        }[self]


class BrainTeaserCategory(str, Enum):
    LATERAL = "Lateral Thinking"
    MATHEMATICAL = "Mathematical"
    VERBAL = "Verbal"
    SPATIAL = "Spatial"
    LOGICAL = "Logical"


class AchievementCategory(str, Enum):
    STREAK = "Streak"
    MASTERY = "Mastery"
    EXPLORER = "Explorer"
    SPEED = "Speed"


# Catalog entries

class QuizQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    question: str
    options: List[str]
    correct_answer_index: int
    explanation: str = ""
    points: int = 10


class Quiz(BaseModel):
    """Immutable quiz catalog entry."""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    category: QuizCategory
    difficulty: DifficultyLevel
    questions: List[QuizQuestion]
    time_limit: Optional[float] = None
    description: str = ""

    @property
    def total_points(self) -> int:
        return sum(q.points for q in self.questions)


class PuzzleData(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str
    options: Optional[List[str]] = None
    grid: Optional[List[List[str]]] = None
    sequence: Optional[List[int]] = None
    target_word: Optional[str] = None
    scrambled_letters: Optional[List[str]] = None


class Puzzle(BaseModel):
    """Immutable puzzle catalog entry with a single prompt and solution."""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    type: PuzzleType
    difficulty: DifficultyLevel
    description: str = ""
    time_limit: Optional[float] = None
    data: PuzzleData
    hints: List[str] = Field(default_factory=list)
    solution: str


class BrainTeaser(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    content: str
    category: BrainTeaserCategory
    difficulty: DifficultyLevel
    estimated_time: float
    tips: List[str] = Field(default_factory=list)


# Attempt results

class QuizResult(BaseModel):
    """Outcome of one completed or expired quiz attempt."""
    model_config = ConfigDict(frozen=True)

    quiz_id: str
    score: int
    max_score: int
    total_questions: int
    time_spent: float
    completed_at: datetime
    correct_answers: List[int] = Field(default_factory=list)
    answers: List[int] = Field(default_factory=list)

    @property
    def percentage(self) -> float:
        if self.max_score <= 0:
            return 0.0
        return self.score / self.max_score * 100

    @property
    def is_perfect(self) -> bool:
        return self.total_questions > 0 and len(self.correct_answers) == self.total_questions


class PuzzleResult(BaseModel):
    """Outcome of one completed or expired puzzle attempt."""
    model_config = ConfigDict(frozen=True)

    puzzle_id: str
    is_correct: bool
    time_spent: float
    hints_used: int
    completed_at: datetime
    user_answer: str


# Durable progress

class Achievement(BaseModel):
    title: str
    description: str
    icon: str
    unlocked_at: datetime
    category: AchievementCategory


class CategoryProgress(BaseModel):
    quizzes_completed: int = 0
    average_score: float = 0.0  # percentage
    best_score: int = 0  # points
    current_level: DifficultyLevel = DifficultyLevel.BEGINNER


class UserProgress(BaseModel):
    """Aggregate quiz progress for this installation."""
    total_quizzes_completed: int = 0
    total_score: int = 0
    streak_days: int = 0
    last_played_date: Optional[datetime] = None
    category_progress: Dict[QuizCategory, CategoryProgress] = Field(default_factory=dict)
    achievements: List[Achievement] = Field(default_factory=list)


class PuzzleTypeProgress(BaseModel):
    completed: int = 0
    solved: int = 0
    average_hints: float = 0.0
    best_time: float = 0.0
    current_difficulty: DifficultyLevel = DifficultyLevel.BEGINNER


class PuzzleProgress(BaseModel):
    """Aggregate puzzle progress for this installation."""
    total_puzzles_completed: int = 0
    total_puzzles_solved: int = 0
    average_time: float = 0.0
    best_time: float = 0.0
    type_progress: Dict[PuzzleType, PuzzleTypeProgress] = Field(default_factory=dict)
    daily_streak: int = 0
    last_puzzle_date: Optional[datetime] = None

    @property
    def success_rate(self) -> float:
        if self.total_puzzles_completed == 0:
            return 0.0
        return self.total_puzzles_solved / self.total_puzzles_completed


class DailyChallenge(BaseModel):
    """One quiz and one puzzle paired for a calendar day."""
    model_config = ConfigDict(frozen=True)

    day: date
    quiz: Quiz
    puzzle: Puzzle
    bonus_multiplier: float
    is_completed: bool = False
