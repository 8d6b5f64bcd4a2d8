"""Validation of question payloads coming from the question source."""
from quiz_bot.exceptions import InvalidQuestionsError
from quiz_bot.models import Question, QuestionSet

REQUIRED_FIELDS = ("id", "question", "options", "correctAnswer")


def parse_questions(data) -> QuestionSet:
    """
    Validate a decoded question payload and convert it into a QuestionSet.

    The payload must be a JSON array of objects shaped as
    {id, question, options, correctAnswer}. A single bad item rejects the whole set.

    Raises:
        InvalidQuestionsError: if the payload is not a valid question set
    """
    if not isinstance(data, list):
        raise InvalidQuestionsError(f"expected a JSON array, got {type(data).__name__}")

    questions = []
    seen_ids = set()
    for position, item in enumerate(data):
        question = _parse_question(item, position)
        if question.id in seen_ids:
            raise InvalidQuestionsError(f"duplicate question id {question.id}")
        seen_ids.add(question.id)
        questions.append(question)

    return tuple(questions)


def _parse_question(item, position: int) -> Question:
    if not isinstance(item, dict):
        raise InvalidQuestionsError(f"item {position} is not an object")

    missing = [field for field in REQUIRED_FIELDS if field not in item]
    if missing:
        raise InvalidQuestionsError(f"item {position} is missing {', '.join(missing)}")

    question_id = item["id"]
    prompt = item["question"]
    options = item["options"]
    correct = item["correctAnswer"]

    if not _is_int(question_id):
        raise InvalidQuestionsError(f"item {position}: id must be an integer")
    if not isinstance(prompt, str) or not prompt.strip():
        raise InvalidQuestionsError(f"item {position}: question text is empty")
    if not isinstance(options, list) or len(options) < 2:
        raise InvalidQuestionsError(f"item {position}: at least two options are required")
    if not all(isinstance(opt, str) for opt in options):
        raise InvalidQuestionsError(f"item {position}: options must be strings")
    if not _is_int(correct) or not 0 <= correct < len(options):
        raise InvalidQuestionsError(
            f"item {position}: correctAnswer {correct!r} is outside 0..{len(options) - 1}"
        )

    return Question(
        id=question_id,
        prompt=prompt.strip(),
        options=tuple(options),
        correct_option_index=correct,
    )


def _is_int(value) -> bool:
    # bool is an int subclass; true/false in JSON is never a valid index
    return isinstance(value, int) and not isinstance(value, bool)
