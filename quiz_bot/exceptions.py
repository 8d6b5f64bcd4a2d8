"""Custom exceptions for the quiz core."""


class QuizError(Exception):
    """Base exception for quiz errors."""
    pass


class CommandRejected(QuizError):
    """A session command was refused; the session state is unchanged."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class QuestionSourceError(QuizError):
    """Question source unreachable or answered with a non-success status."""
    pass


class InvalidQuestionsError(QuestionSourceError):
    """Question source returned a payload that is not a valid question set."""
    pass


class StorageError(QuizError):
    """Key-value store read, write or delete failed."""
    pass
