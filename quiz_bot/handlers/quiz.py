import logging
from typing import Optional

from aiogram import Router, F
from aiogram.types import CallbackQuery, Message

from quiz_bot.exceptions import CommandRejected
from quiz_bot.keyboards.quiz_kb import question_keyboard, results_keyboard, retry_keyboard
from quiz_bot.models import Phase, SessionView
from quiz_bot.services.progress_tracker import format_question, format_results
from quiz_bot.services.quiz_controller import QuizController

logger = logging.getLogger(__name__)

router = Router()

LOADING_TEXT = "⏳ Loading questions…"
EMPTY_TEXT = "📭 No questions available."
EXPIRED_TEXT = "⌛ This quiz is no longer running. Start a new one."
OFFLINE_NOTICE = "📴 The question server is unavailable, using offline questions.\n\n"
NOT_SAVED_NOTICE = "\n\n⚠️ This result could not be saved to history."


async def _show_view(message: Message, view: SessionView, notice: Optional[str] = None):
    """Draw the screen for the current phase of the session."""
    prefix = notice or ""
    if view.phase is Phase.IN_PROGRESS:
        await message.edit_text(prefix + format_question(view), reply_markup=question_keyboard(view))
    elif view.phase is Phase.COMPLETED:
        await message.edit_text(prefix + format_results(view), reply_markup=results_keyboard())
    elif view.phase is Phase.LOADING:
        # no quiz started since the bot restarted, buttons of an old message
        await message.edit_text(prefix + EXPIRED_TEXT, reply_markup=retry_keyboard())
    else:
        await message.edit_text(prefix + EMPTY_TEXT, reply_markup=retry_keyboard())


@router.callback_query(F.data == "start_test")
async def start_test(callback: CallbackQuery, quiz: QuizController):
    """Fetch the questions and show the first one."""
    await callback.message.edit_text(LOADING_TEXT)
    await callback.answer()

    outcome = await quiz.start()
    await _show_view(
        callback.message,
        outcome.view,
        notice=OFFLINE_NOTICE if outcome.from_fallback else None,
    )


@router.callback_query(F.data.startswith("opt:"))
async def select_option(callback: CallbackQuery, quiz: QuizController):
    """Mark an option of the current question as selected."""
    try:
        index = int(callback.data.split(":", 1)[1])
    except ValueError:
        await callback.answer()
        return

    if quiz.view.selected_option == index:
        # already selected, the message would not change
        await callback.answer()
        return

    try:
        view = await quiz.select_option(index)
    except CommandRejected as e:
        await callback.answer(e.reason, show_alert=True)
        return

    await callback.message.edit_text(format_question(view), reply_markup=question_keyboard(view))
    await callback.answer()


@router.callback_query(F.data == "next")
async def next_question(callback: CallbackQuery, quiz: QuizController):
    """Judge the selected answer and move to the next question or the results."""
    try:
        result = await quiz.advance()
    except CommandRejected as e:
        await callback.answer(e.reason, show_alert=True)
        return

    await callback.answer("✅ Correct!" if result.was_correct else "❌ Wrong")

    if result.record is None:
        await _show_view(callback.message, result.view)
        return

    text = format_results(result.view)
    if not result.saved:
        text += NOT_SAVED_NOTICE
    await callback.message.edit_text(text, reply_markup=results_keyboard())


@router.callback_query(F.data == "retake")
async def retake(callback: CallbackQuery, quiz: QuizController):
    """Start over with the same questions."""
    view = await quiz.reset()
    logger.debug("Quiz restarted")
    await _show_view(callback.message, view)
    await callback.answer()
