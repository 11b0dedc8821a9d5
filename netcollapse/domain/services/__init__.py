"""
Domain Services Package
"""

from .steps import ComputeStep, CANONICAL_ROUND
from .cascade_simulator import CascadeSimulator, SimulationState
from .topology_generator import generate_topology, TOPOLOGY_KINDS

__all__ = [
    "ComputeStep",
    "CANONICAL_ROUND",
    "CascadeSimulator",
    "SimulationState",
    "generate_topology",
    "TOPOLOGY_KINDS",
]
