from __future__ import annotations

import logging
from typing import Optional, Tuple

from aiogram import F, Router
from aiogram.filters import Command, CommandObject
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message
from aiogram.utils.text_decorations import html_decoration

from ..answers import parse_answer
from ..catalog import available_trees, get_spec, load_tree
from ..config import get_settings
from ..keyboards import (
    PLAY_PREFIX,
    answer_keyboard,
    main_menu_keyboard,
    menu_button_text,
    navigation_keyboard,
)
from ..session import Session
from ..states import WalkSession
from ..texts import (
    BLANK_WORD,
    INTERNAL_ERROR,
    INVALID_ANSWER,
    NO_ACTIVE_WALK,
    STALE_BUTTON,
    UNKNOWN_TREE,
    WALK_CANCELLED,
    WORD_PROMPT,
)
from ..tree import TreeDefectError


router = Router(name="walk")
log = logging.getLogger("treewalker.walk")
CANCEL_KEYWORDS = {"cancel", "stop", "quit"}


def _is_cancel(text: Optional[str]) -> bool:
    return bool(text) and text.strip().lower() in CANCEL_KEYWORDS


def _tree_by_button(text: Optional[str]) -> Optional[str]:
    for spec in available_trees():
        if text == menu_button_text(spec):
            return spec.name
    return None


def _parse_answer_data(data: str) -> Tuple[Optional[int], str]:
    # walk:answer:<node>:<yes|no>
    parts = data.split(":")
    if len(parts) != 4 or not parts[2].isdigit():
        return None, parts[-1]
    return int(parts[2]), parts[3]


def _menu():
    return main_menu_keyboard(available_trees())


async def _load_session(state: FSMContext) -> Optional[Session]:
    data = await state.get_data()
    snapshot = data.get("session")
    if not snapshot:
        return None
    return Session.from_data(load_tree(snapshot["tree"]), snapshot)


async def _step(message: Message, state: FSMContext, session: Session) -> None:
    slot = session.pending_slot
    if slot:
        await state.update_data(session=session.to_data())
        await state.set_state(WalkSession.waiting_word)
        await message.answer(WORD_PROMPT.format(slot=slot), reply_markup=navigation_keyboard())
        return

    text = html_decoration.quote(session.content)
    if session.finished:
        await state.clear()
        await message.answer(text, reply_markup=_menu())
        return
    await state.update_data(session=session.to_data())
    await state.set_state(WalkSession.waiting_answer)
    await message.answer(text, reply_markup=answer_keyboard(session.state.node))


async def _begin(message: Message, state: FSMContext, name: str) -> None:
    try:
        spec = get_spec(name)
    except KeyError:
        names = ", ".join(spec.name for spec in available_trees())
        await message.answer(UNKNOWN_TREE.format(trees=names), reply_markup=_menu())
        return
    await state.clear()
    log.info("Starting %s walk in chat %s", spec.name, message.chat.id)
    await message.answer(html_decoration.quote(spec.intro))
    await _step(message, state, Session(load_tree(spec.name)))


async def _cancel(message: Message, state: FSMContext) -> None:
    await state.clear()
    await message.answer(WALK_CANCELLED, reply_markup=_menu())


async def _apply_answer(message: Message, state: FSMContext, value: bool) -> None:
    session = await _load_session(state)
    if session is None:
        await state.clear()
        await message.answer(NO_ACTIVE_WALK, reply_markup=_menu())
        return
    try:
        session.answer(value)
    except TreeDefectError:
        log.exception("Walk over %s aborted", session.tree.name)
        await state.clear()
        await message.answer(INTERNAL_ERROR, reply_markup=_menu())
        return
    await _step(message, state, session)


@router.message(Command("play"))
async def play_command(message: Message, state: FSMContext, command: CommandObject) -> None:
    name = (command.args or get_settings().default_tree).strip().lower()
    await _begin(message, state, name)


@router.message(F.text.startswith(PLAY_PREFIX))
async def play_button(message: Message, state: FSMContext) -> None:
    await _begin(message, state, _tree_by_button(message.text) or "")


@router.callback_query(F.data.startswith("walk:start:"))
async def play_callback(callback: CallbackQuery, state: FSMContext) -> None:
    name = callback.data.split(":", 2)[2]
    await _begin(callback.message, state, name)
    await callback.answer()


@router.callback_query(F.data == "walk:cancel")
async def cancel_callback(callback: CallbackQuery, state: FSMContext) -> None:
    await _cancel(callback.message, state)
    await callback.answer()


@router.message(WalkSession.waiting_word)
async def word_message(message: Message, state: FSMContext) -> None:
    if _is_cancel(message.text):
        await _cancel(message, state)
        return
    session = await _load_session(state)
    if session is None:
        await state.clear()
        await message.answer(NO_ACTIVE_WALK, reply_markup=_menu())
        return
    try:
        session.supply_word(message.text or "")
    except ValueError:
        await message.answer(BLANK_WORD, reply_markup=navigation_keyboard())
        return
    await _step(message, state, session)


@router.callback_query(WalkSession.waiting_answer, F.data.startswith("walk:answer:"))
async def answer_callback(callback: CallbackQuery, state: FSMContext) -> None:
    node, token = _parse_answer_data(callback.data)
    value = parse_answer(token)
    if value is None:
        await callback.answer(INVALID_ANSWER)
        return
    session = await _load_session(state)
    if session is None or session.state.node != node:
        await callback.answer(STALE_BUTTON)
        return
    await callback.message.edit_reply_markup(reply_markup=None)
    await _apply_answer(callback.message, state, value)
    await callback.answer()


@router.callback_query(F.data.startswith("walk:answer:"))
async def stale_answer_callback(callback: CallbackQuery, state: FSMContext) -> None:
    if await state.get_state() is None:
        await callback.answer(NO_ACTIVE_WALK)
        return
    await callback.answer(STALE_BUTTON)


@router.message(WalkSession.waiting_answer)
async def answer_message(message: Message, state: FSMContext) -> None:
    if _is_cancel(message.text):
        await _cancel(message, state)
        return
    value = parse_answer(message.text)
    if value is None:
        await message.answer(INVALID_ANSWER)
        return
    await _apply_answer(message, state, value)
