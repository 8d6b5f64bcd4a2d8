"""Main entry point for Quiz Bot."""
import asyncio
import logging
import sys

from aiogram import Bot, Dispatcher
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.types import BotCommand

from quiz_bot.config import settings
from quiz_bot.db.database import init_database
from quiz_bot.db.kv_store import KeyValueStore
from quiz_bot.handlers import history, quiz, start
from quiz_bot.middleware.access import AccessControlMiddleware
from quiz_bot.services.history_ledger import HistoryLedger
from quiz_bot.services.question_source import QuestionSource
from quiz_bot.services.quiz_controller import QuizController

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)


async def main():
    """Main function to start the bot."""
    if not settings.BOT_TOKEN:
        logger.error("BOT_TOKEN is not set. Create a .env file from .env.example")
        sys.exit(1)

    logger.info("Starting Quiz Bot...")

    # History is loaded once per process and kept in memory
    db = await init_database(settings.DATABASE_PATH)
    ledger = HistoryLedger(KeyValueStore(db), key=settings.HISTORY_KEY)
    await ledger.load()

    controller = QuizController(
        source=QuestionSource(settings.QUESTIONS_URL),
        ledger=ledger,
        resolve_timeout=settings.QUESTIONS_TIMEOUT,
    )

    bot = Bot(token=settings.BOT_TOKEN)
    dp = Dispatcher(storage=MemoryStorage(), quiz=controller)

    access = AccessControlMiddleware(settings.OWNER_ID)
    dp.message.outer_middleware(access)
    dp.callback_query.outer_middleware(access)

    dp.include_router(start.router)
    dp.include_router(quiz.router)
    dp.include_router(history.router)

    await bot.set_my_commands([
        BotCommand(command="start", description="Main menu"),
    ])

    try:
        logger.info("Starting bot polling...")
        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())
    finally:
        await bot.session.close()
        await db.close()
        logger.info("Bot stopped")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)
