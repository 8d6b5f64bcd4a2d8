"""Data models for the quiz session and its history."""
import enum
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Tuple


@dataclass(frozen=True)
class Question:
    """Single multiple-choice question."""
    id: int
    prompt: str
    options: Tuple[str, ...]
    correct_option_index: int


QuestionSet = Tuple[Question, ...]


@dataclass(frozen=True)
class ResolvedQuestions:
    """Question set returned by the question source."""
    questions: QuestionSet
    from_fallback: bool = False
    reason: Optional[str] = None   # why offline questions were used


class Phase(enum.Enum):
    LOADING = "loading"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    EMPTY = "empty"


@dataclass(frozen=True)
class SessionState:
    """Snapshot of the quiz session state machine."""
    questions: QuestionSet = ()
    current_index: int = 0
    selected_option: Optional[int] = None
    score: int = 0
    phase: Phase = Phase.LOADING


@dataclass(frozen=True)
class SessionView:
    """Everything the presentation layer needs to draw the current screen."""
    phase: Phase
    question: Optional[Question]
    question_number: int
    total_questions: int
    selected_option: Optional[int]
    score: int
    is_last_question: bool

    @property
    def percentage(self) -> int:
        if self.total_questions == 0:
            return 0
        return round(self.score / self.total_questions * 100)


@dataclass(frozen=True)
class HistoryRecord:
    """Outcome of one completed session."""
    id: str
    score: int
    total_questions: int
    completed_at: datetime

    @classmethod
    def create(cls, score: int, total_questions: int) -> "HistoryRecord":
        return cls(
            id=uuid.uuid4().hex,
            score=score,
            total_questions=total_questions,
            completed_at=datetime.now(timezone.utc),
        )


# ============================================================================
# CONVERTERS: stored JSON objects <-> HistoryRecord
# ============================================================================

# Date format written by the mobile client (toLocaleDateString, en-US)
LEGACY_DATE_FORMAT = "%m/%d/%Y"


def record_to_payload(record: HistoryRecord) -> dict:
    """Convert a HistoryRecord into the stored JSON object."""
    return {
        "id": record.id,
        "score": record.score,
        "totalQuestions": record.total_questions,
        "date": record.completed_at.isoformat(),
    }


def record_from_payload(payload: dict) -> HistoryRecord:
    """
    Convert a stored JSON object into a HistoryRecord.

    Raises:
        ValueError: if a field is missing, has the wrong type or breaks
            0 <= score <= totalQuestions, totalQuestions >= 1
    """
    if not isinstance(payload, dict):
        raise ValueError(f"history record must be an object, got {type(payload).__name__}")

    try:
        record_id = payload["id"]
        score = payload["score"]
        total = payload["totalQuestions"]
        raw_date = payload["date"]
    except KeyError as e:
        raise ValueError(f"history record is missing field {e}") from None

    if not _is_int(score) or not _is_int(total):
        raise ValueError("score and totalQuestions must be integers")
    if total < 1 or not 0 <= score <= total:
        raise ValueError(f"invalid score {score}/{total}")
    if not isinstance(raw_date, str):
        raise ValueError("date must be a string")

    return HistoryRecord(
        id=str(record_id),
        score=score,
        total_questions=total,
        completed_at=_parse_date(raw_date),
    )


def _parse_date(raw: str) -> datetime:
    """Aware for records written here, naive (a local calendar date) for legacy ones."""
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return datetime.strptime(raw, LEGACY_DATE_FORMAT)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
