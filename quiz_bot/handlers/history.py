from aiogram import Router, F
from aiogram.types import CallbackQuery

from quiz_bot.keyboards.history_kb import history_keyboard
from quiz_bot.services.progress_tracker import format_history
from quiz_bot.services.quiz_controller import QuizController

router = Router()

CLEAR_FAILED_NOTICE = (
    "\n\n⚠️ The saved history could not be deleted and may reappear after a restart."
)


@router.callback_query(F.data == "history")
async def show_history(callback: CallbackQuery, quiz: QuizController):
    records = quiz.view_history()
    await callback.message.edit_text(
        format_history(records), reply_markup=history_keyboard(bool(records)),
    )
    await callback.answer()


@router.callback_query(F.data == "history_clear")
async def clear_history(callback: CallbackQuery, quiz: QuizController):
    cleared = await quiz.clear_history()

    text = format_history(())
    if not cleared:
        text += CLEAR_FAILED_NOTICE
    await callback.message.edit_text(text, reply_markup=history_keyboard(False))
    await callback.answer("Quiz history cleared!" if cleared else None)
