from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


PLACEHOLDERS: Tuple[str, ...] = ("noun", "verb", "adjective", "adverb")


def token(slot: str) -> str:
    return "{" + slot + "}"


def required_slots(template: str) -> Tuple[str, ...]:
    """Slots referenced by ``template``, in the order they are asked for."""

    return tuple(slot for slot in PLACEHOLDERS if token(slot) in template)


def render(template: str, words: Optional[Mapping[str, str]] = None) -> str:
    text = template
    for slot, word in (words or {}).items():
        text = text.replace(token(slot), word)
    return text


@dataclass(frozen=True)
class MadLib:
    """A story template together with the words collected for it so far."""

    template: str
    words: Mapping[str, str] = field(default_factory=dict)

    def missing_slots(self) -> Tuple[str, ...]:
        return tuple(slot for slot in required_slots(self.template) if slot not in self.words)

    def with_word(self, slot: str, word: str) -> "MadLib":
        if slot not in PLACEHOLDERS:
            raise ValueError(f"Unknown placeholder: {slot}")
        if slot in self.words:
            raise ValueError(f"{slot} is already filled")
        value = (word or "").strip()
        if not value:
            raise ValueError("Word must not be blank")
        return MadLib(template=self.template, words=MappingProxyType({**self.words, slot: value}))

    def __str__(self) -> str:
        return render(self.template, self.words)
