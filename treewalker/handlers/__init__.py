from aiogram import Router

from . import start, walk


def get_routers() -> list[Router]:
    return [
        start.router,
        walk.router,
    ]
