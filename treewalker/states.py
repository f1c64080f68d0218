from aiogram.fsm.state import State, StatesGroup


class WalkSession(StatesGroup):
    waiting_word = State()
    waiting_answer = State()
