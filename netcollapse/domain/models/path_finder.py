"""
Path Finder

All-pairs shortest paths over the alive subgraph, plus, for every node, the
set of (src, dst) pairs whose recorded shortest path passes through it
(endpoints included).

Edges carry a uniform positive cost. Single-source search is the classic
min-distance frontier expansion (Dijkstra) restricted to alive nodes, with
ties broken by ascending node index. A disconnected alive subgraph is an
expected outcome and is reported as ``False``, never raised.
"""

from __future__ import annotations
import logging
import math
from typing import List, Tuple

import numpy as np

from .exceptions import InvariantViolationError
from .node import LivenessTracker, Node
from .pair_matrix import BoolPairMatrix, PairMatrix

logger = logging.getLogger(__name__)

# Cost of traversing a single link
CONNECTION_COST = 2


class PathFinder:
    """Shortest-path costs and per-node path membership."""

    def __init__(self, node_count: int):
        self.node_count = node_count
        self.costs = PairMatrix(node_count, dtype=np.int64, default=0)
        self.paths: List[BoolPairMatrix] = [BoolPairMatrix(node_count) for _ in range(node_count)]

    # =========================================================================
    # Lookups
    # =========================================================================

    def cost(self, i: Node, j: Node) -> int:
        return self.costs[i, j]

    def contains(self, path: Tuple[Node, Node], node: Node) -> bool:
        """True if the recorded shortest path for ``path`` visits ``node``."""
        return bool(self.paths[node][path])

    def membership(self, node: Node) -> BoolPairMatrix:
        """Pairs routed through ``node``."""
        return self.paths[node]

    # =========================================================================
    # Computation
    # =========================================================================

    def update_paths(self, tracker: LivenessTracker, adjacency: BoolPairMatrix) -> bool:
        """
        Recompute paths for every alive source.

        Membership only accumulates: pairs recorded by an earlier call stay
        set even when the new shortest path no longer runs through a node.
        Costs between alive nodes are overwritten. Stops at the first source
        that cannot reach every alive node.
        """
        for src in tracker.iter_alive():
            if not self.find_shortest_path_for(tracker, adjacency, src):
                logger.debug(f"No path from {src!r}: alive subgraph is disconnected")
                return False
        return True

    def find_shortest_path_for(
        self,
        tracker: LivenessTracker,
        adjacency: BoolPairMatrix,
        src: Node,
    ) -> bool:
        """
        Single-source shortest paths from ``src`` over alive nodes.

        Args:
            tracker: Liveness of the current iteration
            adjacency: Symmetric adjacency matrix
            src: Alive source node

        Returns:
            False if some alive node is unreachable from ``src``.
        """
        visited = [False] * self.node_count
        dist = [math.inf] * self.node_count
        dist[src] = 0

        for _ in range(tracker.alive_count()):
            current = self._closest_unvisited(tracker, visited, dist)
            if not current.is_valid():
                return False

            visited[current] = True
            for j in tracker.iter_alive().exclude(current):
                if not visited[j] and adjacency[current, j] and dist[current] + CONNECTION_COST < dist[j]:
                    dist[j] = dist[current] + CONNECTION_COST

        for target in tracker.iter_alive().exclude(src):
            for node in self._reconstruct_path(tracker, adjacency, dist, src, target):
                self.paths[node].set(src, target)
                self.paths[node].set(target, src)

        for node in tracker.iter_alive().exclude(src):
            self.costs[src, node] = dist[node]

        return True

    @staticmethod
    def _closest_unvisited(tracker: LivenessTracker, visited: List[bool], dist: List[float]) -> Node:
        """First alive unvisited node with the smallest finite distance, or ``Node.INVALID``."""
        best = Node.INVALID
        best_dist = math.inf
        for node in tracker.iter_alive():
            if not visited[node] and dist[node] < best_dist:
                best_dist = dist[node]
                best = node
        return best

    @staticmethod
    def _reconstruct_path(
        tracker: LivenessTracker,
        adjacency: BoolPairMatrix,
        dist: List[float],
        src: Node,
        target: Node,
    ) -> List[Node]:
        """Walk back from ``target`` to ``src``, taking the lowest-index predecessor at each hop."""
        path = [target]
        current = target
        while current != src:
            wanted = dist[current] - CONNECTION_COST
            for node in tracker.iter_alive().exclude(current):
                if adjacency[node, current] and dist[node] == wanted:
                    current = node
                    break
            else:
                raise InvariantViolationError(
                    f"No predecessor for {current!r} on the path {src!r} -> {target!r}"
                )
            path.append(current)
        return path

    def __str__(self) -> str:
        parts = [f"costs:\n{self.costs}"]
        for i, matrix in enumerate(self.paths):
            parts.append(f"node {i}:\n{matrix}")
        return "\n".join(parts)
