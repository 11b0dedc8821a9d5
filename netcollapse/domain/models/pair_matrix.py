"""
Dense Pair Matrix

``N x N`` container addressed by two distinct nodes. The diagonal (self-pair)
is inaccessible: algorithms must treat self relations as
undefined rather than zero.

Node ids outside ``0..N-1`` (including ``Node.INVALID``) are rejected with
InvariantViolationError instead of wrapping around numpy-style.

Instances in use:
    - BoolPairMatrix: adjacency (symmetric on edge insertion)
    - PairMatrix[int]: shortest-path costs
    - BoolPairMatrix per node: which (src, dst) pairs route through it
"""

from __future__ import annotations
from typing import Any, Iterable, Iterator, Optional, Sequence, Tuple

import numpy as np

from .exceptions import DiagonalAccessError, InvariantViolationError
from .node import LivenessTracker, Node


class PairMatrix:
    """Flattened ``N x N`` matrix with an inaccessible diagonal."""

    def __init__(self, node_count: int, dtype: Any = np.int64, default: Any = 0):
        self.node_count = node_count
        self.default = default
        self._data = np.full((node_count, node_count), default, dtype=dtype)

    def _check_range(self, node: int) -> None:
        if not (0 <= node < self.node_count):
            raise InvariantViolationError(
                f"Accessing invalid node (id = {node!r}). "
                f"Maximum node id = {self.node_count - 1}"
            )

    def _check_pair(self, i: Node, j: Node) -> None:
        self._check_range(i)
        self._check_range(j)

    # =========================================================================
    # Element Access
    # =========================================================================

    def get(self, i: Node, j: Node) -> Optional[Any]:
        """Return the value for ``(i, j)`` or ``None`` on the diagonal."""
        self._check_pair(i, j)
        if i == j:
            return None
        return self._data[i, j].item()

    def __getitem__(self, pair: Tuple[Node, Node]) -> Any:
        i, j = pair
        self._check_pair(i, j)
        if i == j:
            raise DiagonalAccessError()
        return self._data[i, j].item()

    def __setitem__(self, pair: Tuple[Node, Node], value: Any) -> None:
        i, j = pair
        self._check_pair(i, j)
        if i == j:
            raise DiagonalAccessError()
        self._data[i, j] = value

    def delete(self, tracker: LivenessTracker, node: Node) -> None:
        """
        Reset ``(j, node)`` for every node ``j`` still alive in ``tracker``.

        Erases a dead node's incoming relations without knowing which nodes
        pointed to it.
        """
        self._check_range(node)
        for j in tracker.iter_alive().exclude(node):
            self._data[j, node] = self.default

    def clear_row(self, node: Node) -> None:
        """Reset every ``(node, j)`` entry."""
        self._check_range(node)
        self._data[node].fill(self.default)

    # =========================================================================
    # Views
    # =========================================================================

    def row(self, node: Node) -> "Row":
        self._check_range(node)
        return Row(self._data[node], node)

    def block(self, nodes: Sequence[Node]) -> np.ndarray:
        """
        Dense copy of the sub-matrix over ``nodes`` (rows and columns).

        Diagonal entries of the result hold the default value and carry no
        meaning; callers mask them out.
        """
        idx = np.asarray(nodes, dtype=np.intp)
        return self._data[np.ix_(idx, idx)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PairMatrix):
            return NotImplemented
        return self.node_count == other.node_count and np.array_equal(self._data, other._data)

    def __str__(self) -> str:
        lines = []
        for i in range(self.node_count):
            cells = ["*" if i == j else str(self._data[i, j].item()) for j in range(self.node_count)]
            lines.append("[\t" + "\t".join(cells) + " ]")
        return "\n".join(lines)


class BoolPairMatrix(PairMatrix):
    """Boolean pair matrix with set/unset/is_set helpers."""

    def __init__(self, node_count: int):
        super().__init__(node_count, dtype=bool, default=False)

    def set(self, i: Node, j: Node) -> None:
        self[i, j] = True

    def unset(self, i: Node, j: Node) -> None:
        self[i, j] = False

    def is_set(self, i: Node, j: Node) -> bool:
        return bool(self[i, j])

    def __str__(self) -> str:
        lines = []
        for i in range(self.node_count):
            cells = ["*" if i == j else str(int(self._data[i, j])) for j in range(self.node_count)]
            lines.append("[\t" + "\t".join(cells) + " ]")
        return "\n".join(lines)


class Row:
    """Read-only view of one node's relations."""

    def __init__(self, values: np.ndarray, row_id: Node):
        self._values = values
        self.row_id = row_id

    def _check_column(self, j: int) -> None:
        if not (0 <= j < len(self._values)):
            raise InvariantViolationError(
                f"Accessing invalid node (id = {j!r}). "
                f"Maximum node id = {len(self._values) - 1}"
            )

    def get(self, j: Node) -> Optional[Any]:
        self._check_column(j)
        if j == self.row_id:
            return None
        return self._values[j].item()

    def __getitem__(self, j: Node) -> Any:
        self._check_column(j)
        if j == self.row_id:
            raise DiagonalAccessError()
        return self._values[j].item()

    def __iter__(self) -> Iterator[Any]:
        """Values of the row in column order, diagonal skipped."""
        for j, value in enumerate(self._values):
            if j != self.row_id:
                yield value.item()

    def items(self) -> Iterable[Tuple[Node, Any]]:
        for j, value in enumerate(self._values):
            if j != self.row_id:
                yield Node(j), value.item()

    def __len__(self) -> int:
        return max(len(self._values) - 1, 0)
