"""A dependency graph used to sort keys topologically.

The graph may contain cycles. When sorting, a cycle is broken on its
smallest key.
"""

from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from typing import Any, Generic, Hashable, Iterable, Iterator, TypeVar

__all__ = ["Node", "DependencyGraph", "dependency_graph"]

K = TypeVar("K", bound=Hashable)


def _remove_first(items: list, value: Any) -> bool:
    """Remove the first occurrence of ``value`` from ``items``; report success."""
    try:
        items.remove(value)
    except ValueError:
        return False
    return True


@dataclass
class Node(Generic[K]):
    """A graph node holding its incoming and outgoing edges.

    Incoming edges are the node's sources: they are sorted before the node.
    """

    ins: list[K] = field(default_factory=list)
    out: list[K] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Return True when the node has no edges at all."""
        return not self.ins and not self.out

    def _copy(self) -> Node[K]:
        return Node(list(self.ins), list(self.out))


class DependencyGraph(Generic[K]):
    """A graph of dependencies between orderable, hashable keys."""

    def __init__(self) -> None:
        self._nodes: dict[K, Node[K]] = {}

    def __repr__(self) -> str:
        body = ", ".join(f"{key!r}: {node!r}" for key, node in self)
        return f"DependencyGraph({{{body}}})"

    def _node(self, key: K) -> Node[K]:
        node = self._nodes.get(key)
        if node is None:
            node = self._nodes[key] = Node()
        return node

    def _copy(self) -> DependencyGraph[K]:
        graph: DependencyGraph[K] = DependencyGraph()
        graph._nodes = {key: node._copy() for key, node in self._nodes.items()}
        return graph

    def insert_dependency(self, first: K, second: K) -> bool:
        """Record that ``first`` comes before ``second``.

        Returns False if the dependency was already present.
        """
        first_out = self._node(first).out
        if second in first_out:
            return False
        first_out.append(second)
        self._node(second).ins.append(first)
        return True

    def remove_dependency(self, first: K, second: K) -> bool:
        """Remove the dependency ``first -> second``; return True if it was found."""
        first_node = self._nodes.get(first)
        first_found = first_node is not None and _remove_first(first_node.out, second)
        second_node = self._nodes.get(second)
        second_found = second_node is not None and _remove_first(second_node.ins, first)
        for key in (first, second):
            node = self._nodes.get(key)
            if node is not None and node.is_empty():
                del self._nodes[key]
        return first_found and second_found

    def keep_only(self, keys: Iterable[K]) -> None:
        """Drop all edges of nodes whose keys are not among ``keys``."""
        keep = set(keys)
        for key in sorted(self._nodes):
            if key in keep:
                continue
            node = self._nodes[key]
            self._nodes[key] = Node()
            for source in node.ins:
                other = self._nodes.get(source)
                if other is not None:
                    _remove_first(other.out, key)
            for target in node.out:
                other = self._nodes.get(target)
                if other is not None:
                    _remove_first(other.ins, key)

    def kept_only(self, keys: Iterable[K]) -> DependencyGraph[K]:
        """Return a copy of the graph with :meth:`keep_only` applied."""
        graph = self._copy()
        graph.keep_only(keys)
        return graph

    def topo_sort(self, keys: Iterable[K]) -> list[K]:
        """Sort ``keys`` topologically, breaking cycles on the smallest key."""
        sorted_keys = sorted(set(keys))
        nodes = self.kept_only(sorted_keys)._nodes

        orphans: list[K] = []
        non_orphans: set[K] = set()
        for key in sorted_keys:
            node = nodes.get(key)
            if node is None or not node.ins:
                orphans.append(key)
            else:
                non_orphans.add(key)
        heapq.heapify(orphans)
        pending = sorted(non_orphans)
        heapq.heapify(pending)

        result: list[K] = []
        while True:
            if not orphans:
                while pending and pending[0] not in non_orphans:
                    heapq.heappop(pending)
                if not pending:
                    break
                smallest = heapq.heappop(pending)
                non_orphans.discard(smallest)
                heapq.heappush(orphans, smallest)
                continue
            key = heapq.heappop(orphans)
            result.append(key)
            node = nodes.get(key)
            if node is None:
                continue
            targets, node.out = node.out, []
            for target in targets:
                target_node = nodes.get(target)
                if target_node is None:
                    continue
                _remove_first(target_node.ins, key)
                if not target_node.ins and target in non_orphans:
                    non_orphans.discard(target)
                    heapq.heappush(orphans, target)
        return result

    def update(self, items: Iterable[tuple[K, Node[K]]]) -> None:
        """Set nodes from ``(key, node)`` pairs, replacing existing ones."""
        for key, node in items:
            self._nodes[key] = node

    def __iter__(self) -> Iterator[tuple[K, Node[K]]]:
        for key in sorted(self._nodes):
            yield key, self._nodes[key]

    def __len__(self) -> int:
        return len(self._nodes)


def dependency_graph(*args: tuple[K, K]) -> DependencyGraph[K]:
    """Build a graph from ``(first, second)`` pairs, each meaning first -> second."""
    graph: DependencyGraph[K] = DependencyGraph()
    for first, second in args:
        graph.insert_dependency(first, second)
    return graph