from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple


NodeId = int
EdgeTriple = Tuple[str, str, bool]


class TreeDefectError(RuntimeError):
    """The hard-coded topology is wrong; never a user-input problem."""


class MalformedTreeError(TreeDefectError):
    pass


class MissingEdgeError(TreeDefectError):
    pass


@dataclass(frozen=True)
class Node:
    id: NodeId
    key: str
    text: str


@dataclass(frozen=True)
class Edge:
    source: NodeId
    target: NodeId
    label: bool


@dataclass(frozen=True)
class DecisionTree:
    """Node arena plus adjacency list. Built once by :func:`build_tree`."""

    name: str
    nodes: Tuple[Node, ...]
    adjacency: Mapping[NodeId, Tuple[Edge, ...]]
    root: NodeId = 0
    fill_in: bool = False
    _keys: Mapping[str, NodeId] = field(default_factory=dict, repr=False, compare=False)

    def __len__(self) -> int:
        return len(self.nodes)

    def node(self, node_id: NodeId) -> Node:
        return self.nodes[node_id]

    def handle(self, key: str) -> NodeId:
        return self._keys[key]

    def outgoing(self, node_id: NodeId) -> Tuple[Edge, ...]:
        return self.adjacency.get(node_id, ())

    def out_degree(self, node_id: NodeId) -> int:
        return len(self.outgoing(node_id))

    def leaves(self) -> List[Node]:
        return [node for node in self.nodes if not self.outgoing(node.id)]


def build_tree(
    name: str,
    nodes: Mapping[str, str],
    edges: Iterable[EdgeTriple],
    root: Optional[str] = None,
    fill_in: bool = False,
) -> DecisionTree:
    """
    Build an immutable decision tree from a literal table.

    Args:
        name: short identifier of the tree.
        nodes: ordered mapping of node key -> display text (or template).
        edges: ``(source_key, target_key, label)`` triples.
        root: key of the root node; the first node when omitted.
        fill_in: whether node texts carry fill-in-the-blank placeholders.

    Raises:
        MalformedTreeError: the table breaks one of the tree invariants.
    """

    if not nodes:
        raise MalformedTreeError(f"{name}: tree has no nodes")

    keys: Dict[str, NodeId] = {}
    arena: List[Node] = []
    for key, text in nodes.items():
        keys[key] = len(arena)
        arena.append(Node(id=len(arena), key=key, text=text))

    root_key = root if root is not None else arena[0].key
    if root_key not in keys:
        raise MalformedTreeError(f"{name}: unknown root {root_key!r}")

    adjacency: Dict[NodeId, List[Edge]] = {}
    for source_key, target_key, label in edges:
        for key in (source_key, target_key):
            if key not in keys:
                raise MalformedTreeError(f"{name}: edge references unknown node {key!r}")
        if not isinstance(label, bool):
            raise MalformedTreeError(f"{name}: edge {source_key!r} -> {target_key!r} has non-boolean label")
        if source_key == target_key:
            raise MalformedTreeError(f"{name}: self-loop on {source_key!r}")
        branches = adjacency.setdefault(keys[source_key], [])
        if any(edge.label == label for edge in branches):
            raise MalformedTreeError(f"{name}: {source_key!r} has two {label} edges")
        branches.append(Edge(source=keys[source_key], target=keys[target_key], label=label))

    for node_id, branches in adjacency.items():
        if len(branches) != 2:
            raise MalformedTreeError(f"{name}: {arena[node_id].key!r} is missing a yes or no branch")
        if branches[0].target == branches[1].target:
            raise MalformedTreeError(f"{name}: both branches of {arena[node_id].key!r} lead to the same node")

    _check_reachable(name, arena, adjacency, keys[root_key])

    return DecisionTree(
        name=name,
        nodes=tuple(arena),
        adjacency=MappingProxyType({node_id: tuple(branches) for node_id, branches in adjacency.items()}),
        root=keys[root_key],
        fill_in=fill_in,
        _keys=MappingProxyType(keys),
    )


def _check_reachable(
    name: str,
    arena: List[Node],
    adjacency: Mapping[NodeId, List[Edge]],
    root: NodeId,
) -> None:
    seen = {root}
    queue = deque([root])
    while queue:
        for edge in adjacency.get(queue.popleft(), []):
            if edge.target not in seen:
                seen.add(edge.target)
                queue.append(edge.target)
    orphans = [node.key for node in arena if node.id not in seen]
    if orphans:
        raise MalformedTreeError(f"{name}: unreachable nodes {', '.join(orphans)}")
