"""
Topology Generator

Builds standard topologies as TopologyDescriptions using networkx
generators. Node ids are ``0..count-1``; for ``star`` node 0 is the hub.
"""

from typing import Callable, Dict

import networkx as nx

from ..models.exceptions import TopologyError
from ..models.topology import TopologyDescription

_GENERATORS: Dict[str, Callable[[int], nx.Graph]] = {
    "net": nx.complete_graph,
    "ring": nx.cycle_graph,
    "line": nx.path_graph,
    "star": lambda count: nx.star_graph(count - 1),
}

TOPOLOGY_KINDS = tuple(_GENERATORS)


def generate_topology(kind: str, count: int) -> TopologyDescription:
    """
    Generate a topology of ``count`` nodes.

    Args:
        kind: One of ``net`` (fully connected), ``ring``, ``line`` or ``star``
        count: Number of nodes

    Returns:
        A validated TopologyDescription

    Raises:
        TopologyError: unknown kind or a non-positive count
    """
    if kind not in _GENERATORS:
        raise TopologyError(f"Unknown topology kind '{kind}'. Choose from: {', '.join(TOPOLOGY_KINDS)}")
    if count < 1:
        raise TopologyError(f"Node count must be positive, got {count}")

    desc = TopologyDescription.from_networkx(_GENERATORS[kind](count))
    desc.validate()
    return desc
