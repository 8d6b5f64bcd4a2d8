import logging
from typing import Any, Awaitable, Callable, Optional

from aiogram import BaseMiddleware
from aiogram.types import Message, CallbackQuery, TelegramObject

logger = logging.getLogger(__name__)

BLOCKED_MSG = "❗ This quiz bot is private."


class AccessControlMiddleware(BaseMiddleware):
    """Serves only the owner: the bot runs one quiz session per process."""

    def __init__(self, owner_id: Optional[int]):
        self.owner_id = owner_id
        if owner_id is None:
            logger.warning("OWNER_ID is not set: access control disabled")

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        user = getattr(event, "from_user", None)
        if user is None:
            return  # no user info (e.g. channel post): block

        if self.owner_id is None or user.id == self.owner_id:
            return await handler(event, data)

        logger.info("Denied access for user %s", user.id)
        await self._deny(event)

    async def _deny(self, event: TelegramObject) -> None:
        """Send denial message and dismiss callback spinner if needed."""
        if isinstance(event, CallbackQuery):
            await event.answer(BLOCKED_MSG, show_alert=True)
        elif isinstance(event, Message):
            await event.answer(BLOCKED_MSG)
