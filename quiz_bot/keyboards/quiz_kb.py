from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton

from quiz_bot.models import SessionView
from quiz_bot.services.progress_tracker import option_label


def question_keyboard(view: SessionView) -> InlineKeyboardMarkup:
    buttons = []
    for i, option in enumerate(view.question.options):
        mark = "✅ " if i == view.selected_option else ""
        buttons.append([InlineKeyboardButton(
            text=f"{mark}{option_label(i)}) {option}",
            callback_data=f"opt:{i}",
        )])
    next_text = "🏁 Finish Quiz" if view.is_last_question else "➡️ Next Question"
    buttons.append([InlineKeyboardButton(text=next_text, callback_data="next")])
    buttons.append([InlineKeyboardButton(text="🏠 Menu", callback_data="go_home")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def results_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="🔄 Take Again", callback_data="retake")],
        [InlineKeyboardButton(text="📋 View History", callback_data="history")],
        [InlineKeyboardButton(text="🏠 Menu", callback_data="go_home")],
    ])


def retry_keyboard() -> InlineKeyboardMarkup:
    """Shown when there is nothing to answer (empty question set or no quiz started)."""
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="🔁 Try again", callback_data="start_test")],
        [InlineKeyboardButton(text="🏠 Menu", callback_data="go_home")],
    ])
