"""Singly-linked list addressed by 1-based position.

Entries live in a chain of nodes reachable from ``_first``.  Positional
access walks the chain from the head, so ``get_entry``, ``insert``,
``remove`` and ``replace`` are linear in the position.  No tail reference is
kept, which makes ``add`` a walk to the last node as well.

The container is not thread-safe; callers sharing a list between threads
must hold a lock around every call (see :mod:`seqlist.api`).
"""
from __future__ import annotations

import logging
import random
from typing import Generic, Iterable, List, Optional, TypeVar

from . import observability
from .display import render_braced, render_indexed
from .errors import OutOfRangeError

T = TypeVar("T")

logger = logging.getLogger(__name__)


class _Node:
    __slots__ = ("data", "next")

    def __init__(self, data, next_node: Optional["_Node"] = None) -> None:
        self.data = data
        self.next = next_node


class SequentialList(Generic[T]):
    """Ordered container of entries addressed by position ``1..length()``."""

    def __init__(self, entries: Iterable[T] | None = None) -> None:
        self._first: Optional[_Node] = None
        self._count = 0
        if entries is not None:
            self._relink([_Node(entry) for entry in entries])

    # -- mutators ----------------------------------------------------------

    def clear(self) -> None:
        """Drop every entry."""
        self._first = None
        self._count = 0

    def add(self, entry: T) -> None:
        """Append ``entry`` as the new last entry."""
        node = _Node(entry)
        if self._first is None:
            self._first = node
        else:
            self._node_at(self._count).next = node
        self._count += 1

    def insert(self, position: int, entry: T) -> None:
        """Insert ``entry`` so that it ends up at ``position``.

        Entries from ``position`` onwards shift back by one.  ``position`` may
        be ``length() + 1`` to append.  Raises :class:`OutOfRangeError`
        otherwise.
        """
        self._check_position("add", position, self._count + 1)
        node = _Node(entry)
        if position == 1:
            node.next = self._first
            self._first = node
        else:
            before = self._node_at(position - 1)
            node.next = before.next
            before.next = node
        self._count += 1

    def remove(self, position: int) -> T:
        """Remove and return the entry at ``position``."""
        self._check_position("remove", position, self._count)
        if position == 1:
            removed = self._first
            self._first = removed.next
        else:
            before = self._node_at(position - 1)
            removed = before.next
            before.next = removed.next
        self._count -= 1
        return removed.data

    def replace(self, position: int, new_entry: T) -> T:
        """Store ``new_entry`` at ``position`` and return the entry it replaced."""
        self._check_position("replace", position, self._count)
        node = self._node_at(position)
        original = node.data
        node.data = new_entry
        return original

    def move_to_back(self, position: int) -> None:
        """Move the entry at ``position`` to the end of the list."""
        self._check_position("move_to_back", position, self._count)
        observability.inc_transform()
        self.add(self.remove(position))

    # -- queries -----------------------------------------------------------

    def get_entry(self, position: int) -> T:
        self._check_position("get_entry", position, self._count)
        return self._node_at(position).data

    def contains(self, entry: T) -> bool:
        current = self._first
        while current is not None:
            if entry == current.data:
                return True
            current = current.next
        return False

    def length(self) -> int:
        return self._count

    def is_empty(self) -> bool:
        return self._count == 0

    def to_array(self) -> List[T]:
        """Return a new list holding the entries in order."""
        result: List[T] = []
        current = self._first
        while current is not None:
            result.append(current.data)
            current = current.next
        return result

    def display(self) -> str:
        """Render one ``index: entry`` line per entry."""
        return render_indexed(self.to_array())

    # -- transforms --------------------------------------------------------

    def reverse(self) -> None:
        """Reverse the order of the entries in place."""
        observability.inc_transform()
        if self._count < 2:
            logger.debug("Reversing a list of %d entries, no action needed", self._count)
            return
        tracing = logger.isEnabledFor(logging.DEBUG)
        if tracing:
            logger.debug("Reversing list: %s", str(self))
        previous = None
        current = self._first
        while current is not None:
            following = current.next
            current.next = previous
            previous = current
            current = following
        self._first = previous
        if tracing:
            logger.debug("List after reversing: %s", str(self))

    def random_permutation(self, rng: random.Random | None = None) -> None:
        """Swap every position with a position drawn from the whole list.

        For ``i`` in ``1..length()`` a ``j`` is drawn from ``1..length()`` and
        the entries at ``i`` and ``j`` are swapped.  Drawing ``j`` from the
        full range every time does not give every ordering the same
        probability; use :meth:`shuffle` for a uniform result.
        """
        observability.inc_transform()
        if self._count < 2:
            return
        rng = rng or random.Random()
        nodes = self._nodes()
        for i in range(1, self._count + 1):
            j = rng.randint(1, self._count)
            self._swap(nodes, i, j)

    def shuffle(self, rng: random.Random | None = None) -> None:
        """Uniformly shuffle the entries (Fisher-Yates, shrinking range)."""
        observability.inc_transform()
        if self._count < 2:
            return
        rng = rng or random.Random()
        nodes = self._nodes()
        for i in range(self._count, 1, -1):
            j = rng.randint(1, i)
            self._swap(nodes, i, j)

    def interleave(self) -> None:
        """Riffle the first ``ceil(n/2)`` entries with the remaining ones.

        ``[1, 2, 3, 4, 5]`` becomes ``[1, 4, 2, 5, 3]``.
        """
        observability.inc_transform()
        if self._count < 3:
            return
        nodes = self._nodes()
        mid = (self._count + 1) // 2
        first_half, second_half = nodes[:mid], nodes[mid:]
        merged: List[_Node] = []
        for index, node in enumerate(first_half):
            merged.append(node)
            if index < len(second_half):
                merged.append(second_half[index])
        self._relink(merged)

    # -- internals ---------------------------------------------------------

    def _check_position(self, operation: str, position: int, upper: int) -> None:
        # bool is an int subclass but never a meaningful position
        if isinstance(position, bool) or not isinstance(position, int) or not 1 <= position <= upper:
            observability.inc_out_of_range()
            logger.info(
                "Rejected position",
                extra={"operation": operation, "position": position, "length": self._count},
            )
            raise OutOfRangeError(operation, position)

    def _node_at(self, position: int) -> _Node:
        current = self._first
        for _ in range(1, position):
            current = current.next
        return current

    def _nodes(self) -> List[_Node]:
        nodes = []
        current = self._first
        while current is not None:
            nodes.append(current)
            current = current.next
        return nodes

    @staticmethod
    def _swap(nodes: List[_Node], i: int, j: int) -> None:
        if i != j:
            a, b = nodes[i - 1], nodes[j - 1]
            a.data, b.data = b.data, a.data

    def _relink(self, nodes: List[_Node]) -> None:
        # Chains ``nodes`` in the given order and makes it the whole list.
        for node, following in zip(nodes, nodes[1:]):
            node.next = following
        if nodes:
            nodes[-1].next = None
        self._first = nodes[0] if nodes else None
        self._count = len(nodes)

    def __len__(self) -> int:  # pragma: no cover - trivial
        return self._count

    def __str__(self) -> str:
        return render_braced(self.to_array())

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"SequentialList({self.to_array()!r})"
