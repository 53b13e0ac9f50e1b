"""Daily brain teasers shown alongside the puzzle catalog."""
from typing import List
from quizzle.schemas import BrainTeaser, BrainTeaserCategory, DifficultyLevel

BRAIN_TEASERS = [
    {
        "title": "The Missing Number",
        "content": "What comes next in this sequence: 2, 6, 12, 20, 30, ?",
        "category": BrainTeaserCategory.MATHEMATICAL,
        "difficulty": DifficultyLevel.INTERMEDIATE,
        "estimated_time": 120,
        "tips": [
            "Look at the differences between consecutive numbers",
            "Consider the pattern in the differences",
        ],
    },
    {
        "title": "The Logical Door",
        "content": (
            "You have two doors. One leads to freedom, one to danger. There are two guards: "
            "one always tells the truth, one always lies. You can ask one question to one guard. "
            "What do you ask?"
        ),
        "category": BrainTeaserCategory.LOGICAL,
        "difficulty": DifficultyLevel.ADVANCED,
        "estimated_time": 300,
        "tips": [
            "Think about what question would give you the same answer from both guards",
            "Consider asking about what the other guard would say",
        ],
    },
    {
        "title": "Word Transformation",
        "content": (
            "Change COLD to WARM in 4 steps, changing one letter at a time, "
            "with each step being a valid word."
        ),
        "category": BrainTeaserCategory.VERBAL,
        "difficulty": DifficultyLevel.INTERMEDIATE,
        "estimated_time": 180,
        "tips": ["Think of intermediate words", "Consider common 4-letter words"],
    },
]


def build_brain_teasers() -> List[BrainTeaser]:
    return [BrainTeaser(**entry) for entry in BRAIN_TEASERS]
