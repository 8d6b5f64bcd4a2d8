"""Text rendering of quiz screens. Dates become locale text only here."""
from datetime import datetime
from typing import Sequence

from quiz_bot.models import HistoryRecord, SessionView

OPTION_LABELS = "ABCDEFGH"


def option_label(index: int) -> str:
    return OPTION_LABELS[index] if index < len(OPTION_LABELS) else str(index + 1)


def format_question(view: SessionView) -> str:
    """Format the current question with its options."""
    q = view.question
    lines = [f"❓ Question {view.question_number} of {view.total_questions}\n", q.prompt, ""]
    for i, option in enumerate(q.options):
        marker = "🔘" if i == view.selected_option else "⚪"
        lines.append(f"{marker} {option_label(i)}) {option}")
    lines.append(f"\n📊 Score: {view.score}")
    return "\n".join(lines)


def format_results(view: SessionView) -> str:
    """Format the final results card."""
    percent = view.percentage

    if percent >= 90:
        emoji = "🏆"
        comment = "Excellent result!"
    elif percent >= 70:
        emoji = "👍"
        comment = "Good result!"
    elif percent >= 50:
        emoji = "📖"
        comment = "Not bad, but there is room to improve."
    else:
        emoji = "💪"
        comment = "Keep practicing. You can do it!"

    return (
        f"🎉 Quiz Complete!\n\n"
        f"{emoji} Score: {view.score}/{view.total_questions} ({percent}%)\n\n"
        f"{comment}"
    )


def format_date(moment: datetime) -> str:
    """Locale date of a stored timestamp, in local time. Naive values are already local."""
    if moment.tzinfo is None:
        return moment.strftime("%x")
    return moment.astimezone().strftime("%x")


def format_history(records: Sequence[HistoryRecord]) -> str:
    """Format past results, oldest first."""
    if not records:
        return "📭 No history yet. Take your first quiz!"

    lines = ["📋 Quiz History\n"]
    for r in records:
        lines.append(f"{r.score}/{r.total_questions} on {format_date(r.completed_at)}")
    return "\n".join(lines)
