"""
Node Handles and Liveness Tracking

A node is an index into a fixed-size universe. Removing a node only marks it
dead; its index is never reclaimed or reused, so every per-node array keeps
its size for the whole simulation.

Ascending index order is load-bearing: every tie-break in the simulator
resolves to "first in ascending alive order wins".
"""

from __future__ import annotations
from typing import Iterator, List

import numpy as np

from .exceptions import InvariantViolationError


class Node(int):
    """
    Opaque handle for a node index.

    Handles are range-checked once, where they are created
    (``LivenessTracker.node`` or topology validation), and are never
    re-derived by arithmetic afterwards.
    """

    __slots__ = ()

    INVALID: "Node"

    def is_valid(self) -> bool:
        return self >= 0

    def __repr__(self) -> str:
        return f"Node({int(self)})" if self.is_valid() else "Node(INVALID)"


Node.INVALID = Node(-1)


class AliveNodes:
    """
    Lazy ascending view over the alive nodes of a tracker.

    The view is restartable: every ``iter()`` re-reads the tracker, so it
    reflects the liveness state at iteration time rather than at creation.
    """

    def __init__(self, tracker: "LivenessTracker"):
        self._tracker = tracker

    def __iter__(self) -> Iterator[Node]:
        for idx, alive in enumerate(self._tracker._nodes):
            if alive:
                yield Node(idx)

    def __len__(self) -> int:
        return self._tracker.alive_count()

    def exclude(self, node: Node) -> Iterator[Node]:
        """Iterate alive nodes, skipping ``node``."""
        return (n for n in self if n != node)

    def to_list(self) -> List[Node]:
        return list(self)


class LivenessTracker:
    """
    Authoritative alive/dead membership over ``node_count`` nodes.

    Only :meth:`delete` mutates the tracker and it never un-deletes.
    """

    def __init__(self, node_count: int):
        if node_count < 0:
            raise ValueError(f"node_count must be non-negative, got {node_count}")
        self._nodes = np.ones(node_count, dtype=bool)
        self._alive = node_count

    def _check_range(self, node: int) -> None:
        if not (0 <= node < len(self._nodes)):
            raise InvariantViolationError(
                f"Accessing invalid node (id = {node!r}). "
                f"Maximum node id = {len(self._nodes) - 1}"
            )

    def node(self, idx: int) -> Node:
        """Return a validated handle for ``idx``."""
        self._check_range(idx)
        return Node(idx)

    def delete(self, node: Node) -> None:
        """Mark ``node`` dead. Deleting a dead node is a programming error."""
        self._check_range(node)
        if not self._nodes[node]:
            raise InvariantViolationError(f"Trying to delete already deleted node {node!r}")
        self._nodes[node] = False
        self._alive -= 1

    def is_alive(self, node: Node) -> bool:
        self._check_range(node)
        return bool(self._nodes[node])

    def alive_count(self) -> int:
        return self._alive

    def node_count(self) -> int:
        return len(self._nodes)

    def iter_alive(self) -> AliveNodes:
        return AliveNodes(self)

    def alive_mask(self) -> np.ndarray:
        """Copy of the boolean liveness array."""
        return self._nodes.copy()

    def __repr__(self) -> str:
        return f"LivenessTracker(alive={self._alive}/{len(self._nodes)})"
