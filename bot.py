# bot.py
import asyncio
import logging

from treewalker.bot import create_bot, dp


logger = logging.getLogger("treewalker")


async def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    bot = create_bot()
    # polling and webhooks are mutually exclusive
    await bot.delete_webhook(drop_pending_updates=True)
    logger.info("Bot started")

    try:
        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())
    finally:
        await bot.session.close()
        logger.info("Bot stopped")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
