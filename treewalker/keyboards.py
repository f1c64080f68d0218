from __future__ import annotations

from typing import Iterable, Optional

from aiogram.types import (
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    KeyboardButton,
    ReplyKeyboardMarkup,
)

from .catalog import TreeSpec

HELP_BUTTON = "ℹ️ Help"
PLAY_PREFIX = "▶️ "


def menu_button_text(spec: TreeSpec) -> str:
    return f"{PLAY_PREFIX}{spec.title}"


def main_menu_keyboard(trees: Iterable[TreeSpec]) -> ReplyKeyboardMarkup:
    rows = [[KeyboardButton(text=menu_button_text(spec))] for spec in trees]
    rows.append([KeyboardButton(text=HELP_BUTTON)])
    return ReplyKeyboardMarkup(
        keyboard=rows,
        resize_keyboard=True,
        input_field_placeholder="Choose a tree",
    )


def trees_inline_keyboard(trees: Iterable[TreeSpec]) -> InlineKeyboardMarkup:
    rows = [
        [InlineKeyboardButton(text=spec.title, callback_data=f"walk:start:{spec.name}")]
        for spec in trees
    ]
    return InlineKeyboardMarkup(inline_keyboard=rows)


def navigation_keyboard(cancel_cb: str = "walk:cancel", back_cb: Optional[str] = None) -> InlineKeyboardMarkup:
    row = []
    if back_cb:
        row.append(InlineKeyboardButton(text="⬅️ Back", callback_data=back_cb))
    row.append(InlineKeyboardButton(text="✖️ Cancel", callback_data=cancel_cb))
    return InlineKeyboardMarkup(inline_keyboard=[row])


def with_navigation(
    markup: InlineKeyboardMarkup,
    cancel_cb: str = "walk:cancel",
    back_cb: Optional[str] = None,
) -> InlineKeyboardMarkup:
    nav = navigation_keyboard(cancel_cb=cancel_cb, back_cb=back_cb).inline_keyboard
    return InlineKeyboardMarkup(inline_keyboard=[*markup.inline_keyboard, *nav])


def answer_keyboard(node_id: int) -> InlineKeyboardMarkup:
    return with_navigation(
        InlineKeyboardMarkup(
            inline_keyboard=[
                [
                    InlineKeyboardButton(text="✅ Yes", callback_data=f"walk:answer:{node_id}:yes"),
                    InlineKeyboardButton(text="❌ No", callback_data=f"walk:answer:{node_id}:no"),
                ]
            ]
        )
    )
