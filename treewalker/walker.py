from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping, Optional, Protocol, Tuple

from .madlib import render
from .tree import DecisionTree, MalformedTreeError, MissingEdgeError, Node, NodeId


log = logging.getLogger("treewalker.walker")


class AnswerProvider(Protocol):
    def __call__(self, question: str) -> bool: ...


@dataclass(frozen=True)
class TraversalState:
    """Position of one walk. A plain value, so any number of walks can share a tree."""

    node: NodeId


def start(tree: DecisionTree) -> TraversalState:
    return TraversalState(node=tree.root)


def current_content(
    tree: DecisionTree,
    state: TraversalState,
    words: Optional[Mapping[str, str]] = None,
) -> str:
    text = tree.node(state.node).text
    if words:
        return render(text, words)
    return text


def is_terminal(tree: DecisionTree, state: TraversalState) -> bool:
    return tree.out_degree(state.node) == 0


def advance(tree: DecisionTree, state: TraversalState, answer: bool) -> TraversalState:
    """
    Follow the outgoing edge labelled ``answer``.

    Raises:
        TypeError: ``answer`` is not a bool.
        MissingEdgeError: the current node has no such edge. This means the
            tree itself is broken, so no branch is guessed.
    """

    if not isinstance(answer, bool):
        raise TypeError(f"answer must be a bool, got {type(answer).__name__}")
    for edge in tree.outgoing(state.node):
        if edge.label == answer:
            log.debug("%s: %s --%s--> %s", tree.name, state.node, answer, edge.target)
            return TraversalState(node=edge.target)
    node = tree.node(state.node)
    raise MissingEdgeError(f"{tree.name}: no {answer} edge from {node.key!r}")


def walk(
    tree: DecisionTree,
    answers: Iterable[bool],
    state: Optional[TraversalState] = None,
) -> TraversalState:
    current = state if state is not None else start(tree)
    for answer in answers:
        current = advance(tree, current, answer)
    return current


def evaluate(tree: DecisionTree, answer_provider: AnswerProvider) -> str:
    """
    Walk the tree until a leaf is reached.

    Args:
        tree: the tree to walk, starting at its root.
        answer_provider: callable returning True/False for a question.

    Returns:
        Content of the leaf the answers led to.
    """

    state = start(tree)
    while not is_terminal(tree, state):
        state = advance(tree, state, answer_provider(current_content(tree, state)))
    return current_content(tree, state)


def leaf_paths(tree: DecisionTree) -> Iterator[Tuple[Tuple[bool, ...], Node]]:
    """Yield every root-to-leaf answer sequence with the leaf it reaches, yes-branches first."""

    stack = [(tree.root, (), frozenset({tree.root}))]
    while stack:
        node_id, answers, visited = stack.pop()
        branches = sorted(tree.outgoing(node_id), key=lambda edge: edge.label)
        if not branches:
            yield answers, tree.node(node_id)
            continue
        for edge in branches:
            if edge.target in visited:
                raise MalformedTreeError(f"{tree.name}: cycle through {tree.node(edge.target).key!r}")
            stack.append((edge.target, answers + (edge.label,), visited | {edge.target}))


def depth(tree: DecisionTree) -> int:
    return max(len(answers) for answers, _ in leaf_paths(tree))
