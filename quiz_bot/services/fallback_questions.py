"""Built-in questions used when the question source is unavailable."""
from quiz_bot.models import Question

FALLBACK_QUESTIONS = (
    Question(
        id=1,
        prompt="What is the capital of France?",
        options=("Berlin", "Madrid", "Paris", "Rome"),
        correct_option_index=2,
    ),
    Question(
        id=2,
        prompt="Which planet is known as the Red Planet?",
        options=("Venus", "Mars", "Jupiter", "Saturn"),
        correct_option_index=1,
    ),
    Question(
        id=3,
        prompt="How many continents are there on Earth?",
        options=("5", "6", "7", "8"),
        correct_option_index=2,
    ),
    Question(
        id=4,
        prompt="Which gas do plants absorb from the air?",
        options=("Oxygen", "Carbon dioxide", "Nitrogen", "Helium"),
        correct_option_index=1,
    ),
    Question(
        id=5,
        prompt="What is 9 × 7?",
        options=("56", "63", "72", "81"),
        correct_option_index=1,
    ),
)
