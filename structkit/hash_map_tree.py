"""A tree whose nodes hold a value and a dictionary of keyed branches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    Optional,
    TypeVar,
)

__all__ = ["AtLeastOneOfTwo", "HashMapTree"]

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
A = TypeVar("A")
B = TypeVar("B")


class _Absent:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<absent>"


_ABSENT: Any = _Absent()


@dataclass(frozen=True)
class AtLeastOneOfTwo(Generic[A, B]):
    """A pair in which at least one of the two sides is present."""

    first: A = _ABSENT
    second: B = _ABSENT

    def __post_init__(self) -> None:
        if self.first is _ABSENT and self.second is _ABSENT:
            raise ValueError("AtLeastOneOfTwo needs at least one of its two values")

    @property
    def has_first(self) -> bool:
        """True when the first value is present."""
        return self.first is not _ABSENT

    @property
    def has_second(self) -> bool:
        """True when the second value is present."""
        return self.second is not _ABSENT

    def __repr__(self) -> str:
        if self.has_first and self.has_second:
            return f"Both({self.first!r}, {self.second!r})"
        if self.has_first:
            return f"First({self.first!r})"
        return f"Second({self.second!r})"


class HashMapTree(Generic[K, V]):
    """A tree in which every node has a value and zero or more keyed branches.

    Nodes created on the way to a path get their value from
    ``default_factory`` when one is given, otherwise None.
    """

    __slots__ = ("value", "branches", "default_factory")

    def __init__(
        self,
        value: Any = _ABSENT,
        default_factory: Optional[Callable[[], V]] = None,
    ) -> None:
        if value is _ABSENT:
            value = default_factory() if default_factory is not None else None
        self.value: V = value
        self.branches: dict[K, HashMapTree[K, V]] = {}
        self.default_factory = default_factory

    def _default(self) -> V:
        factory = self.default_factory
        return factory() if factory is not None else None  # type: ignore[return-value]

    def _child(self, value: V) -> HashMapTree[K, V]:
        return HashMapTree(value, self.default_factory)

    def is_leaf(self) -> bool:
        """True when the node has no branches."""
        return not self.branches

    def is_non_leaf(self) -> bool:
        """True when the node has at least one branch."""
        return bool(self.branches)

    def set(self, path: Iterable[K], value: V) -> None:
        """Set the value at ``path``, creating missing nodes with default values."""
        self.get_or_create_node(path).value = value

    def set_with(
        self, path: Iterable[K], value: V, cons_missing: Callable[[], V]
    ) -> None:
        """Set the value at ``path``, creating missing nodes with ``cons_missing()``."""
        self.get_or_create_node_with(path, cons_missing).value = value

    def get(self, path: Iterable[K], default: Any = None) -> Any:
        """Return the value at ``path`` or ``default`` if the path does not exist."""
        node = self.get_node(path)
        return default if node is None else node.value

    def get_node(self, path: Iterable[K]) -> Optional[HashMapTree[K, V]]:
        """Return the node at ``path`` or None if it does not exist."""
        node: Optional[HashMapTree[K, V]] = self
        for key in path:
            node = node.branches.get(key)
            if node is None:
                return None
        return node

    def remove(self, path: Iterable[K]) -> Optional[V]:
        """Remove the node at ``path`` with its subtree and return its value.

        Returns None when the path is empty or does not exist.
        """
        keys = list(path)
        if not keys:
            return None
        *prefix, last = keys
        parent = self.get_node(prefix)
        if parent is None:
            return None
        removed = parent.branches.pop(last, None)
        return None if removed is None else removed.value

    def get_or_create_node(self, path: Iterable[K]) -> HashMapTree[K, V]:
        """Return the node at ``path``, creating missing nodes with default values."""
        return self.get_or_create_node_with(path, self._default)

    def get_or_create_node_with(
        self, path: Iterable[K], cons_missing: Callable[[], V]
    ) -> HashMapTree[K, V]:
        """Return the node at ``path``, creating missing nodes with ``cons_missing()``."""
        return self.get_or_create_node_traversing_with(path, cons_missing, lambda _node: None)

    def get_or_create_node_path_with(
        self, path: Iterable[K], cons_missing: Callable[[tuple[K, ...]], V]
    ) -> HashMapTree[K, V]:
        """Like :meth:`get_or_create_node_with`, but ``cons_missing`` gets the path so far."""
        return self.get_or_create_node_traversing_path_with(
            path, cons_missing, lambda _node: None
        )

    def get_or_create_node_traversing_with(
        self,
        path: Iterable[K],
        cons_missing: Callable[[], V],
        callback: Callable[[HashMapTree[K, V]], Any],
    ) -> HashMapTree[K, V]:
        """Walk ``path``, creating missing nodes, and call ``callback`` on each branch entered."""
        return self.get_or_create_node_traversing_path_with(
            path, lambda _prefix: cons_missing(), callback
        )

    def get_or_create_node_traversing_path_with(
        self,
        path: Iterable[K],
        cons_missing: Callable[[tuple[K, ...]], V],
        callback: Callable[[HashMapTree[K, V]], Any],
    ) -> HashMapTree[K, V]:
        """Walk ``path``, creating missing nodes with ``cons_missing(prefix)``.

        ``callback`` is called on every branch entered, new or not.
        """
        node = self
        prefix: list[K] = []
        for key in path:
            prefix.append(key)
            child = node.branches.get(key)
            if child is None:
                child = node._child(cons_missing(tuple(prefix)))
                node.branches[key] = child
            callback(child)
            node = child
        return node

    def zip(self, other: HashMapTree[K, Any]) -> HashMapTree[K, AtLeastOneOfTwo[V, Any]]:
        """Combine two trees into one whose values pair up the values of both."""
        return _zip_nodes(self, other)

    def value_or_set_with(self, cons: Callable[[], V]) -> V:
        """Return the node's value, first setting it to ``cons()`` if it is None."""
        if self.value is None:
            self.value = cons()
        return self.value

    def items(self) -> Iterator[tuple[tuple[K, ...], V]]:
        """Yield ``(path, value)`` for every node, root first, depth first."""
        yield (), self.value
        stack: list[tuple[tuple[K, ...], Iterator[tuple[K, HashMapTree[K, V]]]]] = [
            ((), iter(self.branches.items()))
        ]
        while stack:
            prefix, branches = stack[-1]
            entry = next(branches, None)
            if entry is None:
                stack.pop()
                continue
            key, child = entry
            path = prefix + (key,)
            yield path, child.value
            stack.append((path, iter(child.branches.items())))

    def update_values(self, func: Callable[[V], V]) -> None:
        """Replace every node's value with ``func(value)``."""
        stack: list[HashMapTree[K, V]] = [self]
        while stack:
            node = stack.pop()
            node.value = func(node.value)
            stack.extend(node.branches.values())

    def __iter__(self) -> Iterator[tuple[tuple[K, ...], V]]:
        return self.items()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HashMapTree):
            return NotImplemented
        return self.value == other.value and self.branches == other.branches

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"HashMapTree(value={self.value!r}, branches={self.branches!r})"

    def copy(self) -> HashMapTree[K, V]:
        """Return a copy of the tree structure; the values themselves are shared."""
        tree: HashMapTree[K, V] = HashMapTree(self.value, self.default_factory)
        tree.branches = {key: child.copy() for key, child in self.branches.items()}
        return tree

    @classmethod
    def from_items(
        cls,
        items: Iterable[tuple[Iterable[K], V]],
        default_factory: Optional[Callable[[], V]] = None,
    ) -> HashMapTree[K, V]:
        """Build a tree from ``(path, value)`` pairs."""
        tree: HashMapTree[K, V] = cls(default_factory=default_factory)
        for path, value in items:
            tree.set(path, value)
        return tree


def _zip_nodes(
    first: Optional[HashMapTree[Any, Any]], second: Optional[HashMapTree[Any, Any]]
) -> HashMapTree[Any, AtLeastOneOfTwo[Any, Any]]:
    if first is not None and second is not None:
        value = AtLeastOneOfTwo(first.value, second.value)
        keys = list(first.branches)
        keys.extend(key for key in second.branches if key not in first.branches)
    elif first is not None:
        value = AtLeastOneOfTwo(first=first.value)
        keys = list(first.branches)
    elif second is not None:
        value = AtLeastOneOfTwo(second=second.value)
        keys = list(second.branches)
    else:
        raise ValueError("cannot zip two missing trees")
    tree: HashMapTree[Any, AtLeastOneOfTwo[Any, Any]] = HashMapTree(value)
    for key in keys:
        branch1 = first.branches.get(key) if first is not None else None
        branch2 = second.branches.get(key) if second is not None else None
        tree.branches[key] = _zip_nodes(branch1, branch2)
    return tree