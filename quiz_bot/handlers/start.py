from aiogram import Router, F
from aiogram.filters import CommandStart
from aiogram.types import Message, CallbackQuery

from quiz_bot.keyboards.main_menu import main_menu_keyboard

router = Router()

WELCOME_TEXT = (
    "👋 Hi! I'm Quiz Bot.\n\n"
    "Answer the questions one by one and I'll keep track of your results.\n"
    "What would you like to do?"
)


@router.message(CommandStart())
async def cmd_start(message: Message):
    await message.answer(WELCOME_TEXT, reply_markup=main_menu_keyboard())


@router.callback_query(F.data == "go_home")
async def go_home(callback: CallbackQuery):
    await callback.message.edit_text(WELCOME_TEXT, reply_markup=main_menu_keyboard())
    await callback.answer()
