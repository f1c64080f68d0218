from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command, CommandStart
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from ..catalog import available_trees
from ..keyboards import HELP_BUTTON, main_menu_keyboard, trees_inline_keyboard
from ..texts import HELP_TEXT, WELCOME_TEXT


router = Router(name="start")


def _help_text() -> str:
    lines = [f"• <code>{spec.name}</code> – {spec.title}" for spec in available_trees()]
    return HELP_TEXT.format(trees="\n".join(lines))


@router.message(CommandStart())
async def start_handler(message: Message, state: FSMContext) -> None:
    await state.clear()
    await message.answer(WELCOME_TEXT, reply_markup=main_menu_keyboard(available_trees()))
    await message.answer("Trees:", reply_markup=trees_inline_keyboard(available_trees()))


@router.message(F.text == HELP_BUTTON)
@router.message(Command("help"))
async def help_handler(message: Message) -> None:
    await message.answer(_help_text(), reply_markup=main_menu_keyboard(available_trees()))
