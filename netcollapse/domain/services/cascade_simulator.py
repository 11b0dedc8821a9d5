"""
Cascade Simulator

Drives rounds of compute steps over an iteration History until the network
either disconnects or shrinks to two nodes or fewer.

States:
    RUNNING              rounds may still be executed
    HALTED_DISCONNECTED  path finding failed; the alive network split
    CONVERGED            two or fewer nodes remain

Both halted states are terminal. On termination the trailing,
partially processed iteration is discarded and the cursor is reset to
iteration 0.
"""

from __future__ import annotations
import logging
from enum import Enum
from typing import Optional, Sequence

from ..models.exceptions import TopologyError
from ..models.history import DEFAULT_ALPHA, History
from ..models.topology import TopologyDescription
from .steps import CANONICAL_ROUND, ComputeStep

logger = logging.getLogger(__name__)


class SimulationState(Enum):
    RUNNING = "running"
    HALTED_DISCONNECTED = "halted_disconnected"
    CONVERGED = "converged"

    @property
    def is_terminal(self) -> bool:
        return self is not SimulationState.RUNNING


class CascadeSimulator:
    """
    Round loop over a History seeded from a topology.

    Example:
        >>> sim = CascadeSimulator(TopologyDescription.example(), alpha=3.0)
        >>> sim.run().is_terminal
        True
        >>> sim.history.iter_count() >= 1
        True
    """

    def __init__(
        self,
        topology: TopologyDescription,
        alpha: float = DEFAULT_ALPHA,
        steps: Sequence[ComputeStep] = CANONICAL_ROUND,
    ):
        self.history = History.from_topology(topology, alpha=alpha)
        self.steps = tuple(steps)
        self.state = SimulationState.RUNNING
        self.rounds = 0

    @property
    def alpha(self) -> float:
        return self.history.alpha

    def run_round(self) -> SimulationState:
        """Execute one round and return the resulting state."""
        if self.state.is_terminal:
            return self.state

        alive = self.history.get().graph.alive_count()
        if alive <= 2:
            if self.history.iter_count() <= 1:
                raise TopologyError(
                    f"Topology needs at least 3 nodes to simulate, got {alive}"
                )
            self.history.pop()
            self._transition(SimulationState.CONVERGED)
            return self.state

        self.rounds += 1
        logger.debug(f"Round {self.rounds}: {alive} nodes alive")

        for step in self.steps:
            if not step.apply(self.history):
                logger.info(f"Round {self.rounds}: step {step.value} failed, network is disconnected")
                if self.history.iter_count() > 1:
                    self.history.pop()
                else:
                    self.history.set_current_iter(0)
                self._transition(SimulationState.HALTED_DISCONNECTED)
                break

        return self.state

    def run(self, max_rounds: Optional[int] = None) -> SimulationState:
        """
        Run rounds until a terminal state is reached.

        Args:
            max_rounds: Stop after this many executed rounds even if the
                simulation is still running. ``None`` means no limit.

        Returns:
            The state after the last round.
        """
        if max_rounds is not None and max_rounds < 0:
            raise ValueError(f"max_rounds must be non-negative, got {max_rounds}")

        while not self.state.is_terminal:
            if max_rounds is not None and self.rounds >= max_rounds:
                logger.info(f"Stopping after {self.rounds} rounds (limit reached)")
                break
            self.run_round()

        return self.state

    def _transition(self, state: SimulationState) -> None:
        logger.info(
            f"Simulation {state.value} after {self.rounds} rounds, "
            f"{self.history.iter_count()} iterations recorded"
        )
        self.state = state
