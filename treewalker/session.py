from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from .madlib import MadLib
from .tree import DecisionTree, NodeId
from .walker import TraversalState, advance, is_terminal, start


log = logging.getLogger("treewalker.session")


class Session:
    """
    One interactive walk over a tree, without any I/O.

    Drivers fill ``pending_slot`` until it is None, then either stop when
    ``finished`` or show ``content`` and pass the reply to ``answer``.
    """

    def __init__(self, tree: DecisionTree, state: Optional[TraversalState] = None):
        self.tree = tree
        self.state = state if state is not None else start(tree)
        self.history: List[Tuple[NodeId, bool]] = []
        self._madlib = MadLib(self._text)

    @property
    def _text(self) -> str:
        return self.tree.node(self.state.node).text

    @property
    def pending_slot(self) -> Optional[str]:
        if not self.tree.fill_in:
            return None
        missing = self._madlib.missing_slots()
        return missing[0] if missing else None

    @property
    def words(self) -> Dict[str, str]:
        return dict(self._madlib.words)

    @property
    def content(self) -> str:
        if self.pending_slot:
            raise RuntimeError(f"{self.pending_slot} has not been supplied yet")
        return str(self._madlib)

    @property
    def terminal(self) -> bool:
        return is_terminal(self.tree, self.state)

    @property
    def finished(self) -> bool:
        return self.terminal and self.pending_slot is None

    def supply_word(self, word: str) -> None:
        slot = self.pending_slot
        if slot is None:
            raise RuntimeError("No word is pending")
        self._madlib = self._madlib.with_word(slot, word)

    def answer(self, value: bool) -> None:
        if self.pending_slot:
            raise RuntimeError(f"{self.pending_slot} has not been supplied yet")
        if self.terminal:
            raise RuntimeError("Session is already finished")
        previous = self.state.node
        self.state = advance(self.tree, self.state, value)
        self.history.append((previous, value))
        self._madlib = MadLib(self._text)
        if self.terminal:
            log.info(
                "%s session reached %r after %d answers",
                self.tree.name,
                self.tree.node(self.state.node).key,
                len(self.history),
            )

    def to_data(self) -> Dict[str, Any]:
        return {
            "tree": self.tree.name,
            "node": self.state.node,
            "words": self.words,
            "history": [[node, value] for node, value in self.history],
        }

    @classmethod
    def from_data(cls, tree: DecisionTree, data: Dict[str, Any]) -> "Session":
        if data.get("tree") != tree.name:
            raise ValueError(f"Snapshot belongs to {data.get('tree')!r}, not {tree.name!r}")
        session = cls(tree, TraversalState(node=int(data["node"])))
        session.history = [(int(node), bool(value)) for node, value in data.get("history", [])]
        for slot, word in (data.get("words") or {}).items():
            session._madlib = session._madlib.with_word(slot, word)
        return session
