from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton


def main_menu_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="📝 Start quiz", callback_data="start_test")],
        [InlineKeyboardButton(text="📋 History", callback_data="history")],
    ])
