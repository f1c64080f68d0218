import asyncio
from types import SimpleNamespace

from aiogram.filters import CommandObject
from aiogram.fsm.context import FSMContext
from aiogram.fsm.storage.base import StorageKey
from aiogram.fsm.storage.memory import MemoryStorage

from treewalker.catalog import MADLIBS_ADVENTURE, load_tree
from treewalker.handlers.start import help_handler, start_handler
from treewalker.handlers.walk import (
    answer_callback,
    answer_message,
    cancel_callback,
    play_button,
    play_callback,
    play_command,
    stale_answer_callback,
    word_message,
)
from treewalker.keyboards import HELP_BUTTON, menu_button_text
from treewalker.states import WalkSession
from treewalker.texts import (
    BLANK_WORD,
    INVALID_ANSWER,
    NO_ACTIVE_WALK,
    STALE_BUTTON,
    UNKNOWN_TREE,
    WALK_CANCELLED,
    WELCOME_TEXT,
)


class FakeMessage:
    def __init__(self, text=None):
        self.text = text
        self.chat = SimpleNamespace(id=42)
        self.sent = []
        self.markups = []
        self.edited = []

    async def answer(self, text, reply_markup=None):
        self.sent.append(text)
        self.markups.append(reply_markup)

    async def edit_reply_markup(self, reply_markup=None):
        self.edited.append(reply_markup)


class FakeCallback:
    def __init__(self, data, message=None):
        self.data = data
        self.message = message or FakeMessage()
        self.alerts = []

    async def answer(self, text=None, show_alert=None):
        self.alerts.append(text)


def make_state() -> FSMContext:
    return FSMContext(storage=MemoryStorage(), key=StorageKey(bot_id=1, chat_id=42, user_id=42))


def current_state(state):
    return asyncio.run(state.get_state())


def play(state, tree):
    message = FakeMessage(f"/play {tree}")
    asyncio.run(play_command(message, state, CommandObject(command="play", args=tree)))
    return message


def reply(handler, state, text):
    message = FakeMessage(text)
    asyncio.run(handler(message, state))
    return message.sent


def press(handler, state, data):
    callback = FakeCallback(data)
    asyncio.run(handler(callback, state))
    return callback


def node_of(tree, key):
    return load_tree(tree).handle(key)


def test_car_walk_over_chat():
    state = make_state()
    message = play(state, "car")
    assert message.sent[-1] == "Is the car silent when you turn the key?"
    assert current_state(state) == WalkSession.waiting_answer.state

    assert reply(answer_message, state, "maybe") == [INVALID_ANSWER]
    assert reply(answer_message, state, "yes") == ["Are the battery terminals corroded?"]
    assert reply(answer_message, state, "Y") == ["Clean terminals and try starting again."]
    assert current_state(state) is None


def test_question_buttons_carry_the_node():
    state = make_state()
    message = play(state, "car")
    buttons = [btn.callback_data for btn in message.markups[-1].inline_keyboard[0]]
    root = node_of("car", "silent")
    assert buttons == [f"walk:answer:{root}:yes", f"walk:answer:{root}:no"]


def test_car_walk_with_buttons_only():
    state = make_state()
    play(state, "car")

    first = press(answer_callback, state, f"walk:answer:{node_of('car', 'silent')}:no")
    assert first.message.edited == [None]
    assert first.message.sent == ["Does the car make a clicking noise?"]
    assert first.alerts == [None]

    second = press(answer_callback, state, f"walk:answer:{node_of('car', 'clicking')}:yes")
    assert second.message.sent == ["Replace the battery."]
    assert current_state(state) is None


def test_old_button_does_not_answer_the_next_question():
    state = make_state()
    play(state, "car")
    root = node_of("car", "silent")

    assert reply(answer_message, state, "yes") == ["Are the battery terminals corroded?"]
    stale = press(answer_callback, state, f"walk:answer:{root}:no")
    assert stale.alerts == [STALE_BUTTON]
    assert stale.message.sent == []
    assert current_state(state) == WalkSession.waiting_answer.state

    assert reply(answer_message, state, "no") == ["Replace cables and try again."]


def test_button_without_node_is_rejected():
    state = make_state()
    play(state, "car")
    callback = press(answer_callback, state, "walk:answer:yes")
    assert callback.alerts == [STALE_BUTTON]
    assert current_state(state) == WalkSession.waiting_answer.state


def test_stale_button_outside_a_walk():
    state = make_state()
    callback = press(stale_answer_callback, state, "walk:answer:0:yes")
    assert callback.alerts == [NO_ACTIVE_WALK]


def test_stale_button_while_waiting_for_a_word():
    state = make_state()
    play(state, "madlibs")
    assert current_state(state) == WalkSession.waiting_word.state
    callback = press(stale_answer_callback, state, "walk:answer:0:yes")
    assert callback.alerts == [STALE_BUTTON]
    assert current_state(state) == WalkSession.waiting_word.state


def test_madlib_walk_asks_for_words():
    state = make_state()
    message = play(state, "madlibs")
    assert message.sent[-1] == "Please enter a noun:"
    assert current_state(state) == WalkSession.waiting_word.state

    assert reply(word_message, state, "   ") == [BLANK_WORD]
    assert reply(word_message, state, "cat") == ["Please enter a verb:"]
    assert reply(word_message, state, "hug") == ["Please enter a adjective:"]
    assert reply(word_message, state, "<b>fat</b>") == [
        "Did you ever hug a &lt;b&gt;fat&lt;/b&gt; cat before breakfast?"
    ]
    assert current_state(state) == WalkSession.waiting_answer.state


def test_start_from_inline_tree_button():
    state = make_state()
    callback = press(play_callback, state, "walk:start:car")
    assert callback.message.sent[-1] == "Is the car silent when you turn the key?"
    assert callback.alerts == [None]
    assert current_state(state) == WalkSession.waiting_answer.state


def test_start_from_menu_button_text():
    state = make_state()
    message = FakeMessage(menu_button_text(MADLIBS_ADVENTURE))
    asyncio.run(play_button(message, state))
    assert message.sent == [MADLIBS_ADVENTURE.intro, "Please enter a noun:"]
    assert current_state(state) == WalkSession.waiting_word.state


def test_cancel_clears_the_walk():
    state = make_state()
    play(state, "car")
    assert reply(answer_message, state, "cancel") == [WALK_CANCELLED]
    assert current_state(state) is None
    assert asyncio.run(state.get_data()) == {}


def test_cancel_button_clears_the_walk():
    state = make_state()
    play(state, "madlibs")
    callback = press(cancel_callback, state, "walk:cancel")
    assert callback.message.sent == [WALK_CANCELLED]
    assert current_state(state) is None
    assert asyncio.run(state.get_data()) == {}


def test_start_command_ends_a_running_walk():
    state = make_state()
    play(state, "car")
    message = FakeMessage("/start")
    asyncio.run(start_handler(message, state))
    assert message.sent[0] == WELCOME_TEXT
    assert current_state(state) is None
    assert asyncio.run(state.get_data()) == {}


def test_help_lists_trees():
    message = FakeMessage(HELP_BUTTON)
    asyncio.run(help_handler(message))
    assert "<code>car</code>" in message.sent[0]
    assert "<code>madlibs</code>" in message.sent[0]


def test_unknown_tree_is_reported():
    state = make_state()
    message = play(state, "boat")
    assert message.sent == [UNKNOWN_TREE.format(trees="car, madlibs")]
    assert current_state(state) is None
