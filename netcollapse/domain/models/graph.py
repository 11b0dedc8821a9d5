"""
Simulation Graph

Composes liveness, adjacency and the path finder. One Graph belongs to one
iteration of the simulation; successive iterations are deep clones.
"""

from __future__ import annotations
import copy
import logging
from typing import List

import networkx as nx

from .node import AliveNodes, LivenessTracker, Node
from .pair_matrix import BoolPairMatrix
from .path_finder import CONNECTION_COST, PathFinder
from .topology import TopologyDescription

logger = logging.getLogger(__name__)


class Graph:
    """
    Fixed-size network whose nodes can only be removed.

    Example:
        >>> graph = Graph.from_topology(TopologyDescription.example())
        >>> graph.update_paths()
        True
        >>> graph.delete(graph.tracker.node(1))
        >>> graph.alive_count()
        9
    """

    CONNECTION_COST = CONNECTION_COST

    def __init__(self, tracker: LivenessTracker, adjacency: BoolPairMatrix, path_finder: PathFinder):
        self.tracker = tracker
        self.adjacency = adjacency
        self.path_finder = path_finder

    @classmethod
    def from_topology(cls, desc: TopologyDescription) -> "Graph":
        """Validate ``desc`` and build a symmetric adjacency matrix from it."""
        desc.validate()
        count = desc.node_count()

        tracker = LivenessTracker(count)
        adjacency = BoolPairMatrix(count)
        for node_desc in desc.nodes:
            i = tracker.node(node_desc.node_id)
            for neighbor in node_desc.neighbors:
                j = tracker.node(neighbor)
                adjacency.set(i, j)
                adjacency.set(j, i)

        return cls(tracker, adjacency, PathFinder(count))

    # =========================================================================
    # Queries
    # =========================================================================

    def node_count(self) -> int:
        return self.tracker.node_count()

    def alive_count(self) -> int:
        return self.tracker.alive_count()

    def is_alive(self, node: Node) -> bool:
        return self.tracker.is_alive(node)

    def iter_alive(self) -> AliveNodes:
        return self.tracker.iter_alive()

    def is_adjacent(self, i: Node, j: Node) -> bool:
        return self.adjacency.is_set(i, j)

    def neighbors(self, node: Node) -> List[Node]:
        """Alive neighbours of ``node`` in ascending order."""
        return [j for j in self.iter_alive().exclude(node) if self.adjacency.is_set(node, j)]

    def to_networkx(self) -> nx.Graph:
        """Alive subgraph as an undirected networkx graph (integer labels)."""
        g = nx.Graph()
        alive = self.iter_alive().to_list()
        g.add_nodes_from(int(n) for n in alive)
        for idx, i in enumerate(alive):
            for j in alive[idx + 1:]:
                if self.adjacency.is_set(i, j):
                    g.add_edge(int(i), int(j))
        return g

    # =========================================================================
    # Mutation
    # =========================================================================

    def update_paths(self) -> bool:
        """Recompute all shortest paths; False if the alive subgraph is disconnected."""
        return self.path_finder.update_paths(self.tracker, self.adjacency)

    def delete(self, node: Node) -> None:
        """
        Remove ``node`` from the network.

        Path-finder data is left as it is. Costs must not be read before
        the next :meth:`update_paths`; membership bits are never cleared.
        """
        self.tracker.delete(node)
        self.adjacency.delete(self.tracker, node)
        self.adjacency.clear_row(node)
        logger.debug(f"Deleted {node!r}, {self.alive_count()} nodes alive")

    def clone(self) -> "Graph":
        return copy.deepcopy(self)

    def __str__(self) -> str:
        return (
            f"tracker: {self.tracker!r}\n"
            f"adjacency:\n{self.adjacency}\n"
            f"path_finder:\n{self.path_finder}"
        )
