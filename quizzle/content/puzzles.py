"""Built-in puzzle catalog."""
from typing import List
from quizzle.schemas import DifficultyLevel, Puzzle, PuzzleData, PuzzleType

PUZZLE_CATALOG = [
    {
        "id": "animal-scramble",
        "title": "Animal Scramble",
        "type": PuzzleType.WORD_SCRAMBLE,
        "difficulty": DifficultyLevel.BEGINNER,
        "description": "Unscramble these letters to form an animal name",
        "time_limit": 60,
        "data": {
            "content": "TELNHAPE",
            "options": ["ELEPHANT", "LEOPARD", "PANTHER", "ANTELOPE"],
            "target_word": "ELEPHANT",
            "scrambled_letters": ["E", "L", "E", "P", "H", "A", "N", "T"],
        },
        "hints": ["It's a large mammal", "It has a trunk", "Found in Africa and Asia"],
        "solution": "ELEPHANT",
    },
    {
        "id": "technology-terms",
        "title": "Technology Terms",
        "type": PuzzleType.WORD_SCRAMBLE,
        "difficulty": DifficultyLevel.INTERMEDIATE,
        "description": "Unscramble this technology-related word",
        "time_limit": 90,
        "data": {
            "content": "MHTIROGLA",
            "options": ["ALGORITHM", "LOGARITHM", "RHYTHMIC", "MAGNETIC"],
            "target_word": "ALGORITHM",
            "scrambled_letters": ["A", "L", "G", "O", "R", "I", "T", "H", "M"],
        },
        "hints": ["Used in computer science", "A set of rules or instructions", "Essential for programming"],
        "solution": "ALGORITHM",
    },
    {
        "id": "fibonacci-sequence",
        "title": "Fibonacci Sequence",
        "type": PuzzleType.NUMBER_SEQUENCE,
        "difficulty": DifficultyLevel.INTERMEDIATE,
        "description": "Find the next number in the sequence",
        "time_limit": 120,
        "data": {
            "content": "1, 1, 2, 3, 5, 8, 13, ?",
            "options": ["20", "21", "22", "23"],
            "sequence": [1, 1, 2, 3, 5, 8, 13],
        },
        "hints": [
            "Each number is the sum of the two preceding ones",
            "This is a famous mathematical sequence",
            "Named after an Italian mathematician",
        ],
        "solution": "21",
    },
    {
        "id": "square-numbers",
        "title": "Square Numbers",
        "type": PuzzleType.NUMBER_SEQUENCE,
        "difficulty": DifficultyLevel.BEGINNER,
        "description": "Identify the pattern in these numbers",
        "time_limit": 90,
        "data": {
            "content": "1, 4, 9, 16, 25, ?",
            "options": ["30", "32", "36", "40"],
            "sequence": [1, 4, 9, 16, 25],
        },
        "hints": ["These are perfect squares", "1×1, 2×2, 3×3, etc.", "What's 6×6?"],
        "solution": "36",
    },
    {
        "id": "color-logic",
        "title": "Color Logic",
        "type": PuzzleType.LOGIC_GRID,
        "difficulty": DifficultyLevel.INTERMEDIATE,
        "description": "Use logic to determine the correct arrangement",
        "time_limit": 300,
        "data": {
            "content": (
                "Three friends (Alice, Bob, Carol) each have a different favorite color "
                "(Red, Blue, Green). Alice doesn't like Red. Bob's favorite isn't Blue. "
                "Carol doesn't like Green. What color does each person like?"
            ),
            "options": [
                "Alice-Blue, Bob-Green, Carol-Red",
                "Alice-Green, Bob-Red, Carol-Blue",
                "Alice-Red, Bob-Blue, Carol-Green",
                "Alice-Blue, Bob-Red, Carol-Green",
            ],
            "grid": [["Alice", "Bob", "Carol"], ["Red", "Blue", "Green"]],
        },
        "hints": [
            "Use process of elimination",
            "If Alice doesn't like Red, what are her options?",
            "Work through each constraint systematically",
        ],
        "solution": "Alice-Blue, Bob-Green, Carol-Red",
    },
    {
        "id": "silent-speaker",
        "title": "The Silent Speaker",
        "type": PuzzleType.RIDDLE,
        "difficulty": DifficultyLevel.INTERMEDIATE,
        "description": "Think outside the box to solve this riddle",
        "time_limit": 180,
        "data": {
            "content": (
                "I speak without a mouth and hear without ears. I have no body, "
                "but come alive with wind. What am I?"
            ),
            "options": ["Echo", "Shadow", "Mirror", "Thought"],
        },
        "hints": ["Think about sounds in nature", "It repeats what you say", "Found in mountains and empty buildings"],
        "solution": "Echo",
    },
    {
        "id": "growing-paradox",
        "title": "The Growing Paradox",
        "type": PuzzleType.RIDDLE,
        "difficulty": DifficultyLevel.ADVANCED,
        "description": "A classic riddle that challenges logic",
        "time_limit": 240,
        "data": {
            "content": "The more you take away from me, the bigger I become. What am I?",
            "options": ["Hole", "Debt", "Problem", "Mystery"],
        },
        "hints": ["Think about physical spaces", "Digging makes it larger", "Can be found in the ground"],
        "solution": "Hole",
    },
    {
        "id": "shape-sequence",
        "title": "Shape Sequence",
        "type": PuzzleType.PATTERN,
        "difficulty": DifficultyLevel.BEGINNER,
        "description": "Identify the next shape in the pattern",
        "time_limit": 120,
        "data": {
            "content": "Circle, Square, Triangle, Circle, Square, ?",
            "options": ["Triangle", "Circle", "Square", "Pentagon"],
        },
        "hints": [
            "Look at the repeating sequence",
            "Count how many shapes repeat",
            "What comes after Square in the pattern?",
        ],
        "solution": "Triangle",
    },
    {
        "id": "number-memory",
        "title": "Number Memory",
        "type": PuzzleType.MEMORY,
        "difficulty": DifficultyLevel.BEGINNER,
        "description": "Remember the sequence of numbers",
        "time_limit": 30,
        "data": {
            "content": "7, 3, 9, 1, 5, 2, 8",
            "options": [
                "7, 3, 9, 1, 5, 2, 8",
                "7, 3, 9, 1, 5, 8, 2",
                "3, 7, 9, 1, 5, 2, 8",
                "7, 3, 1, 9, 5, 2, 8",
            ],
            "sequence": [7, 3, 9, 1, 5, 2, 8],
        },
        "hints": [
            "Take your time to memorize",
            "Try to find patterns or group numbers",
            "Repeat the sequence in your mind",
        ],
        "solution": "7, 3, 9, 1, 5, 2, 8",
    },
]


def build_puzzles() -> List[Puzzle]:
    """Validate the static catalog into Puzzle models."""
    return [
        Puzzle(**{**entry, "data": PuzzleData(**entry["data"])})
        for entry in PUZZLE_CATALOG
    ]
