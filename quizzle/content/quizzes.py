"""Built-in quiz catalog."""
from typing import List
from quizzle.schemas import DifficultyLevel, Quiz, QuizCategory, QuizQuestion

QUIZ_CATALOG = [
    {
        "id": "history-civilizations",
        "title": "Ancient Civilizations & Modern History",
        "category": QuizCategory.HISTORY,
        "difficulty": DifficultyLevel.INTERMEDIATE,
        "time_limit": 300,
        "description": "Test your knowledge of historical events and civilizations",
        "questions": [
            {
                "question": "Which ancient civilization built Machu Picchu?",
                "options": ["Aztecs", "Incas", "Mayans", "Olmecs"],
                "correct_answer_index": 1,
                "explanation": "Machu Picchu was built by the Inca civilization around 1450 AD in Peru.",
                "points": 10,
            },
            {
                "question": "In which year did World War II end?",
                "options": ["1944", "1945", "1946", "1947"],
                "correct_answer_index": 1,
                "explanation": "World War II ended in 1945 with the surrender of Japan in September.",
                "points": 10,
            },
            {
                "question": "Who was the first person to walk on the moon?",
                "options": ["Buzz Aldrin", "Neil Armstrong", "John Glenn", "Alan Shepard"],
                "correct_answer_index": 1,
                "explanation": "Neil Armstrong was the first person to walk on the moon on July 20, 1969.",
                "points": 10,
            },
        ],
    },
    {
        "id": "science-fundamentals",
        "title": "Science Fundamentals",
        "category": QuizCategory.SCIENCE,
        "difficulty": DifficultyLevel.INTERMEDIATE,
        "time_limit": 240,
        "description": "Explore the fascinating world of science",
        "questions": [
            {
                "question": "What is the chemical symbol for gold?",
                "options": ["Go", "Gd", "Au", "Ag"],
                "correct_answer_index": 2,
                "explanation": "Au comes from the Latin word 'aurum' meaning gold.",
                "points": 10,
            },
            {
                "question": "How many bones are there in an adult human body?",
                "options": ["206", "208", "210", "212"],
                "correct_answer_index": 0,
                "explanation": "An adult human body has 206 bones, while babies are born with about 270.",
                "points": 10,
            },
            {
                "question": "What is the speed of light in a vacuum?",
                "options": ["299,792,458 m/s", "300,000,000 m/s", "299,800,000 m/s", "298,000,000 m/s"],
                "correct_answer_index": 0,
                "explanation": "The speed of light in a vacuum is exactly 299,792,458 meters per second.",
                "points": 15,
            },
        ],
    },
    {
        "id": "technology-essentials",
        "title": "Technology Essentials",
        "category": QuizCategory.TECHNOLOGY,
        "difficulty": DifficultyLevel.BEGINNER,
        "time_limit": 180,
        "description": "Test your tech knowledge",
        "questions": [
            {
                "question": "What does 'HTTP' stand for?",
                "options": [
                    "HyperText Transfer Protocol",
                    "High Tech Transfer Process",
                    "Home Tool Transfer Protocol",
                    "HyperText Technical Process",
                ],
                "correct_answer_index": 0,
                "explanation": "HTTP stands for HyperText Transfer Protocol, used for transferring web pages.",
                "points": 10,
            },
            {
                "question": "Which company developed the Swift programming language?",
                "options": ["Google", "Microsoft", "Apple", "Facebook"],
                "correct_answer_index": 2,
                "explanation": "Swift was developed by Apple and introduced in 2014 for iOS and macOS development.",
                "points": 10,
            },
            {
                "question": "What does 'AI' stand for in technology?",
                "options": [
                    "Automated Intelligence",
                    "Artificial Intelligence",
                    "Advanced Integration",
                    "Algorithmic Interface",
                ],
                "correct_answer_index": 1,
                "explanation": "AI stands for Artificial Intelligence, simulating human intelligence in machines.",
                "points": 10,
            },
        ],
    },
    {
        "id": "world-geography",
        "title": "World Geography",
        "category": QuizCategory.GEOGRAPHY,
        "difficulty": DifficultyLevel.BEGINNER,
        "time_limit": 200,
        "description": "Explore the world's geography",
        "questions": [
            {
                "question": "What is the capital of Australia?",
                "options": ["Sydney", "Melbourne", "Canberra", "Perth"],
                "correct_answer_index": 2,
                "explanation": "Canberra is the capital city of Australia, located between Sydney and Melbourne.",
                "points": 10,
            },
            {
                "question": "Which is the longest river in the world?",
                "options": ["Amazon River", "Nile River", "Mississippi River", "Yangtze River"],
                "correct_answer_index": 1,
                "explanation": "The Nile River is the longest river in the world at approximately 6,650 kilometers.",
                "points": 10,
            },
            {
                "question": "How many continents are there?",
                "options": ["5", "6", "7", "8"],
                "correct_answer_index": 2,
                "explanation": (
                    "There are 7 continents: Asia, Africa, North America, South America, "
                    "Antarctica, Europe, and Australia."
                ),
                "points": 10,
            },
        ],
    },
    {
        "id": "classic-literature",
        "title": "Classic Literature",
        "category": QuizCategory.LITERATURE,
        "difficulty": DifficultyLevel.INTERMEDIATE,
        "time_limit": 250,
        "description": "Test your knowledge of classic literature",
        "questions": [
            {
                "question": "Who wrote 'Romeo and Juliet'?",
                "options": ["Charles Dickens", "William Shakespeare", "Jane Austen", "Mark Twain"],
                "correct_answer_index": 1,
                "explanation": "Romeo and Juliet was written by William Shakespeare around 1594-1596.",
                "points": 10,
            },
            {
                "question": "Which novel begins with 'It was the best of times, it was the worst of times'?",
                "options": ["Great Expectations", "Oliver Twist", "A Tale of Two Cities", "David Copperfield"],
                "correct_answer_index": 2,
                "explanation": "This famous opening line is from 'A Tale of Two Cities' by Charles Dickens.",
                "points": 15,
            },
            {
                "question": "Who wrote '1984'?",
                "options": ["Aldous Huxley", "George Orwell", "Ray Bradbury", "Kurt Vonnegut"],
                "correct_answer_index": 1,
                "explanation": "1984 was written by George Orwell and published in 1949.",
                "points": 10,
            },
        ],
    },
    {
        "id": "mathematics-basics",
        "title": "Mathematics Basics",
        "category": QuizCategory.MATHEMATICS,
        "difficulty": DifficultyLevel.BEGINNER,
        "time_limit": 180,
        "description": "Test your mathematical skills",
        "questions": [
            {
                "question": "What is the value of π (pi) to two decimal places?",
                "options": ["3.14", "3.15", "3.16", "3.13"],
                "correct_answer_index": 0,
                "explanation": "π (pi) is approximately 3.14159, which rounds to 3.14 to two decimal places.",
                "points": 10,
            },
            {
                "question": "What is 15% of 200?",
                "options": ["25", "30", "35", "40"],
                "correct_answer_index": 1,
                "explanation": "15% of 200 = 0.15 × 200 = 30.",
                "points": 10,
            },
            {
                "question": "What is the square root of 144?",
                "options": ["11", "12", "13", "14"],
                "correct_answer_index": 1,
                "explanation": "The square root of 144 is 12, because 12 × 12 = 144.",
                "points": 10,
            },
        ],
    },
]


def build_quizzes() -> List[Quiz]:
    """Validate the static catalog into Quiz models."""
    return [
        Quiz(**{**entry, "questions": [QuizQuestion(**q) for q in entry["questions"]]})
        for entry in QUIZ_CATALOG
    ]
