"""
Domain Models Package

Network state for the collapse simulation. Re-exports all models for
convenient imports.
"""

from .exceptions import (
    TopologyError, InvariantViolationError, DiagonalAccessError, DegenerateNetworkError
)
from .node import Node, AliveNodes, LivenessTracker
from .pair_matrix import PairMatrix, BoolPairMatrix, Row
from .path_finder import PathFinder, CONNECTION_COST
from .topology import NodeDescription, TopologyDescription
from .graph import Graph
from .metrics import GraphMetrics
from .history import Iteration, History, DEFAULT_ALPHA

__all__ = [
    # Errors
    "TopologyError", "InvariantViolationError", "DiagonalAccessError", "DegenerateNetworkError",
    # Nodes
    "Node", "AliveNodes", "LivenessTracker",
    # Matrices
    "PairMatrix", "BoolPairMatrix", "Row",
    # Paths
    "PathFinder", "CONNECTION_COST",
    # Topology
    "NodeDescription", "TopologyDescription",
    # Graph state
    "Graph", "GraphMetrics", "Iteration", "History", "DEFAULT_ALPHA",
]
