"""
Collapse Simulation Service

Application service running cascading-collapse simulations and turning the
recorded history into a report.

Architecture:
    CLI (bin/simulate_collapse.py)
      └── CollapseSimulationService   ← this module
            ├── CascadeSimulator      (domain service)
            ├── generate_topology     (domain service)
            └── ITopologyRepository   (outbound port, file adapter)
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from netcollapse.application.ports import ISimulationUseCase, ITopologyRepository
from netcollapse.domain.models import DEFAULT_ALPHA, History, TopologyDescription
from netcollapse.domain.services import CascadeSimulator, generate_topology


@dataclass
class IterationSummary:
    """What one recorded iteration looked like."""
    index: int
    alive: List[int]
    removed: List[int]
    max_betweenness: Optional[int]
    max_capacity: Optional[int]
    zmax: float
    beta: float
    beta_delta: float
    betweenness: Dict[int, float] = field(default_factory=dict)
    capacity: Dict[int, float] = field(default_factory=dict)

    @property
    def alive_count(self) -> int:
        return len(self.alive)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "alive_count": self.alive_count,
            "alive": self.alive,
            "removed": self.removed,
            "max_betweenness": self.max_betweenness,
            "max_capacity": self.max_capacity,
            "zmax": self.zmax,
            "beta": self.beta,
            "beta_delta": self.beta_delta,
            "betweenness": {str(k): v for k, v in self.betweenness.items()},
            "capacity": {str(k): v for k, v in self.capacity.items()},
        }


@dataclass
class SimulationReport:
    """
    Outcome of one simulation run.

    ``removed`` of iteration ``k`` lists the nodes alive in iteration
    ``k - 1`` but dead in iteration ``k``.
    """
    timestamp: str
    state: str
    rounds: int
    alpha: float
    node_count: int
    iterations: List[IterationSummary]
    ks: List[float]
    beta_deltas: List[float]

    @classmethod
    def from_history(cls, history: History, state: str, rounds: int) -> "SimulationReport":
        iterations: List[IterationSummary] = []
        previous: Optional[List[int]] = None

        for idx, iteration in enumerate(history.iterations):
            alive = iteration.alive_nodes()
            removed = [] if previous is None else sorted(set(previous) - set(alive))
            m = iteration.metrics.to_dict(iteration.graph.tracker)
            iterations.append(IterationSummary(
                index=idx,
                alive=alive,
                removed=removed,
                max_betweenness=m["max_betweenness"],
                max_capacity=m["max_capacity"],
                zmax=m["zmax"],
                beta=m["beta"],
                beta_delta=m["beta_delta"],
                betweenness=m["betweenness"],
                capacity=m["capacity"],
            ))
            previous = alive

        return cls(
            timestamp=datetime.now().isoformat(),
            state=state,
            rounds=rounds,
            alpha=history.alpha,
            node_count=history.at(0).graph.node_count() if history.iter_count() else 0,
            iterations=iterations,
            ks=list(history.ks),
            beta_deltas=list(history.beta_deltas),
        )

    @property
    def final_alive(self) -> List[int]:
        return self.iterations[-1].alive if self.iterations else []

    def removal_order(self) -> List[List[int]]:
        """Nodes removed between consecutive iterations, in order."""
        return [it.removed for it in self.iterations[1:]]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "state": self.state,
            "rounds": self.rounds,
            "alpha": self.alpha,
            "node_count": self.node_count,
            "iteration_count": len(self.iterations),
            "final_alive": self.final_alive,
            "iterations": [it.to_dict() for it in self.iterations],
            "ks": self.ks,
            "beta_deltas": self.beta_deltas,
        }


class CollapseSimulationService(ISimulationUseCase):
    """
    Application service for collapse simulations.

    The simulator of the most recent run is kept on ``self.simulator`` so
    callers can scrub through its history afterwards.
    """

    def __init__(
        self,
        repository: Optional[ITopologyRepository] = None,
        alpha: float = DEFAULT_ALPHA,
        max_rounds: Optional[int] = None,
    ):
        self.repository = repository
        self.alpha = alpha
        self.max_rounds = max_rounds
        self.logger = logging.getLogger(__name__)
        self.simulator: Optional[CascadeSimulator] = None

    def run(
        self,
        topology: TopologyDescription,
        alpha: Optional[float] = None,
        max_rounds: Optional[int] = None,
    ) -> SimulationReport:
        alpha = self.alpha if alpha is None else alpha
        max_rounds = self.max_rounds if max_rounds is None else max_rounds

        self.logger.info(
            f"Starting collapse simulation: {topology.node_count()} nodes, "
            f"{topology.edge_count()} edges, alpha = {alpha}"
        )
        self.simulator = CascadeSimulator(topology, alpha=alpha)
        state = self.simulator.run(max_rounds=max_rounds)

        report = SimulationReport.from_history(
            self.simulator.history, state=state.value, rounds=self.simulator.rounds
        )
        self.logger.info(
            f"Simulation finished: {report.state}, {report.rounds} rounds, "
            f"{len(report.final_alive)} nodes alive at the last snapshot"
        )
        return report

    def run_from_file(
        self,
        path: Union[str, Path],
        alpha: Optional[float] = None,
        max_rounds: Optional[int] = None,
    ) -> SimulationReport:
        if self.repository is None:
            raise ValueError("No topology repository configured")
        self.logger.info(f"Loading topology from {path}")
        return self.run(self.repository.load(path), alpha=alpha, max_rounds=max_rounds)

    def run_generated(
        self,
        kind: str,
        count: int,
        alpha: Optional[float] = None,
        max_rounds: Optional[int] = None,
    ) -> SimulationReport:
        """Generate a ``kind`` topology of ``count`` nodes and run it."""
        return self.run(generate_topology(kind, count), alpha=alpha, max_rounds=max_rounds)
