from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties

from .config import get_settings
from .handlers import get_routers


dp = Dispatcher()

for router in get_routers():
    dp.include_router(router)


def create_bot() -> Bot:
    settings = get_settings()
    return Bot(
        token=settings.require_bot_token(),
        default=DefaultBotProperties(parse_mode="HTML"),
    )
