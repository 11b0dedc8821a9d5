"""
Topology Description

Input format: a node count and, per node, a list of neighbour ids. Links
are undirected, so listing an edge on either endpoint is enough. Validation
rejects self references, out-of-range neighbours and duplicate or missing
node ids.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List

import networkx as nx

from .exceptions import TopologyError


@dataclass
class NodeDescription:
    """One node and the neighbours it declares."""
    node_id: int
    neighbors: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"node_id": self.node_id, "neighbors": list(self.neighbors)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NodeDescription":
        # "nodes" is accepted as an alias for "neighbors"
        neighbors = data.get("neighbors", data.get("nodes", []))
        return cls(node_id=int(data["node_id"]), neighbors=[int(n) for n in neighbors])


@dataclass
class TopologyDescription:
    """Node count plus per-node neighbour lists."""
    nodes: List[NodeDescription] = field(default_factory=list)

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges())

    def edges(self) -> List[tuple]:
        """Unique undirected edges as ``(low, high)`` tuples, sorted."""
        seen = set()
        for desc in self.nodes:
            for j in desc.neighbors:
                seen.add((min(desc.node_id, j), max(desc.node_id, j)))
        return sorted(seen)

    def validate(self) -> None:
        """Raise :class:`TopologyError` if the description is malformed."""
        count = self.node_count()
        ids = [desc.node_id for desc in self.nodes]

        if len(set(ids)) != len(ids):
            duplicates = sorted({i for i in ids if ids.count(i) > 1})
            raise TopologyError(f"Duplicate node ids in topology: {duplicates}")

        if sorted(ids) != list(range(count)):
            raise TopologyError(
                f"Node ids must cover 0..{count - 1} exactly, got {sorted(ids)}"
            )

        for desc in self.nodes:
            for j in desc.neighbors:
                if j == desc.node_id:
                    raise TopologyError(f"Node {desc.node_id} lists itself as a neighbor")
                if not (0 <= j < count):
                    raise TopologyError(
                        f"Node {desc.node_id} references neighbor {j} outside 0..{count - 1}"
                    )

    # =========================================================================
    # Conversion
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        return {"nodes": [desc.to_dict() for desc in self.nodes]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TopologyDescription":
        if "nodes" not in data:
            raise TopologyError("Topology description must contain a 'nodes' list")
        try:
            nodes = [NodeDescription.from_dict(n) for n in data["nodes"]]
        except (KeyError, TypeError, ValueError) as e:
            raise TopologyError(f"Malformed node entry: {e}") from e
        return cls(nodes=nodes)

    @classmethod
    def from_edges(cls, node_count: int, edges: List[tuple]) -> "TopologyDescription":
        """Build a description listing each edge on its lower endpoint."""
        nodes = [NodeDescription(node_id=i) for i in range(node_count)]
        for a, b in edges:
            low, high = (a, b) if a < b else (b, a)
            if not (0 <= low < node_count):
                raise TopologyError(f"Edge ({a}, {b}) references a node outside 0..{node_count - 1}")
            if high not in nodes[low].neighbors:
                nodes[low].neighbors.append(high)
        return cls(nodes=nodes)

    @classmethod
    def from_networkx(cls, graph: nx.Graph) -> "TopologyDescription":
        """
        Convert an undirected networkx graph.

        Nodes are relabelled ``0..n-1`` following sorted order of the
        original labels.
        """
        ordering = sorted(graph.nodes())
        index = {label: i for i, label in enumerate(ordering)}
        edges = [(index[u], index[v]) for u, v in graph.edges() if u != v]
        return cls.from_edges(len(ordering), edges)

    @classmethod
    def example(cls) -> "TopologyDescription":
        """Ten-node reference network: a cube missing one corner, plus three leaves."""
        return cls.from_dict({
            "nodes": [
                {"node_id": 0, "neighbors": [1, 2, 3]},
                {"node_id": 1, "neighbors": [4, 5]},
                {"node_id": 2, "neighbors": [4, 6]},
                {"node_id": 3, "neighbors": [5, 6]},
                {"node_id": 4, "neighbors": [9]},
                {"node_id": 5, "neighbors": [8]},
                {"node_id": 6, "neighbors": [7]},
                {"node_id": 7, "neighbors": []},
                {"node_id": 8, "neighbors": []},
                {"node_id": 9, "neighbors": []},
            ]
        })
