"""
Graph Metrics

Per-node derived scalars attached to one graph snapshot. Arrays are sized to
the full node universe; only entries of alive nodes carry meaning.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np

from .node import LivenessTracker, Node


@dataclass(eq=False)
class GraphMetrics:
    """Load, capacity and resilience figures for one iteration."""
    betweenness: np.ndarray
    capacity: np.ndarray
    zs: np.ndarray

    max_betweenness: Node = Node.INVALID
    min_betweenness: Node = Node.INVALID
    max_capacity: Node = Node.INVALID
    min_capacity: Node = Node.INVALID

    zmax: float = 0.0
    beta: float = 0.0
    beta_delta: float = 0.0

    @classmethod
    def new(cls, node_count: int) -> "GraphMetrics":
        return cls(
            betweenness=np.zeros(node_count, dtype=np.float64),
            capacity=np.zeros(node_count, dtype=np.float64),
            zs=np.zeros(node_count, dtype=np.float64),
        )

    def node_count(self) -> int:
        return len(self.betweenness)

    def to_dict(self, tracker: Optional[LivenessTracker] = None) -> Dict[str, Any]:
        """
        Serialize to plain Python types.

        With a tracker, per-node values are reported for alive nodes only.
        """
        if tracker is not None:
            nodes = [int(n) for n in tracker.iter_alive()]
        else:
            nodes = list(range(self.node_count()))

        def _node(node: Node) -> Optional[int]:
            return int(node) if node.is_valid() else None

        return {
            "betweenness": {n: float(self.betweenness[n]) for n in nodes},
            "capacity": {n: float(self.capacity[n]) for n in nodes},
            "zs": {n: float(self.zs[n]) for n in nodes},
            "max_betweenness": _node(self.max_betweenness),
            "min_betweenness": _node(self.min_betweenness),
            "max_capacity": _node(self.max_capacity),
            "min_capacity": _node(self.min_capacity),
            "zmax": float(self.zmax),
            "beta": float(self.beta),
            "beta_delta": float(self.beta_delta),
        }
