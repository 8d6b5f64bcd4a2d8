from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton


def history_keyboard(has_records: bool) -> InlineKeyboardMarkup:
    buttons = []
    if has_records:
        buttons.append([InlineKeyboardButton(text="🗑 Clear All", callback_data="history_clear")])
    buttons.append([InlineKeyboardButton(text="🔙 Back", callback_data="go_home")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)
