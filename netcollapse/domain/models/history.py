"""
Iteration History

Append-only arena of (Graph, GraphMetrics) snapshots addressed by index,
plus a display cursor and the run-wide logs.

While a simulation runs, the iteration under the cursor is the active one
that steps mutate. Every other iteration is frozen; only the trailing
iteration may be discarded (``pop``) when a round ends in a terminal state.
"""

from __future__ import annotations
import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .graph import Graph
from .metrics import GraphMetrics
from .topology import TopologyDescription

DEFAULT_ALPHA = 3.0


@dataclass(eq=False)
class Iteration:
    """One recorded snapshot of the network and its metrics."""
    graph: Graph
    metrics: GraphMetrics

    @classmethod
    def from_topology(cls, desc: TopologyDescription) -> "Iteration":
        graph = Graph.from_topology(desc)
        return cls(graph=graph, metrics=GraphMetrics.new(graph.node_count()))

    def clone(self) -> "Iteration":
        return copy.deepcopy(self)

    def alive_nodes(self) -> List[int]:
        return [int(n) for n in self.graph.iter_alive()]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "alive": self.alive_nodes(),
            "alive_count": self.graph.alive_count(),
            "metrics": self.metrics.to_dict(self.graph.tracker),
        }


@dataclass(eq=False)
class History:
    """
    Ordered iterations, a scrubbing cursor and the run logs.

    Attributes:
        alpha: Capacity tolerance shared by every round
        ks: Overload severity per round, ``1 / removed`` (0.0 when no
            node was overloaded)
        beta_deltas: Resilience deviation ``|beta - 1|`` per measured round
    """
    alpha: float = DEFAULT_ALPHA
    ks: List[float] = field(default_factory=list)
    beta_deltas: List[float] = field(default_factory=list)
    iterations: List[Iteration] = field(default_factory=list)
    _current: int = field(default=0, init=False, repr=False)

    @classmethod
    def from_topology(cls, desc: TopologyDescription, alpha: float = DEFAULT_ALPHA) -> "History":
        history = cls(alpha=alpha)
        history.push(Iteration.from_topology(desc))
        return history

    # =========================================================================
    # Arena
    # =========================================================================

    def push(self, iteration: Iteration) -> int:
        """Append ``iteration`` and return its index."""
        self.iterations.append(iteration)
        return len(self.iterations) - 1

    def pop(self) -> Iteration:
        """Discard the trailing iteration and reset the cursor to the start."""
        if not self.iterations:
            raise IndexError("pop from empty history")
        iteration = self.iterations.pop()
        self._current = 0
        return iteration

    def iter_count(self) -> int:
        return len(self.iterations)

    def at(self, idx: int) -> Iteration:
        if not (0 <= idx < self.iter_count()):
            raise IndexError(f"Iteration {idx} out of range (count = {self.iter_count()})")
        return self.iterations[idx]

    def last(self) -> Iteration:
        return self.at(self.iter_count() - 1)

    # =========================================================================
    # Cursor
    # =========================================================================

    def get(self) -> Iteration:
        """Iteration under the cursor."""
        return self.at(self._current)

    def current_iter(self) -> int:
        return self._current

    def set_current_iter(self, idx: int) -> None:
        if not (0 <= idx < self.iter_count()):
            raise IndexError(f"Iteration {idx} out of range (count = {self.iter_count()})")
        self._current = idx

    def next_by(self, n: int) -> Iteration:
        """Move the cursor by ``n`` (wrapping around) and return the new iteration."""
        self._current = (self._current + n) % self.iter_count()
        return self.get()

    def next(self) -> Iteration:
        return self.next_by(1)

    def prev(self) -> Iteration:
        return self.next_by(-1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "alpha": self.alpha,
            "iterations": [it.to_dict() for it in self.iterations],
            "ks": list(self.ks),
            "beta_deltas": list(self.beta_deltas),
        }
