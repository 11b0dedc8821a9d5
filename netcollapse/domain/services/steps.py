"""
Compute Steps

The closed set of operations a simulation round is made of. Every step
reads and writes the active iteration of a History (the one under the
cursor) and the run-wide logs, and returns a success flag. ``False`` aborts
the rest of the round.

Canonical round (see ``CANONICAL_ROUND``):
    1. UPDATE_PATHS            measure the pre-removal network
    2. RESILIENCE
    3. BETWEENNESS
    4. CAPACITY                capacity baseline for this round
    5. COPY_ITERATION          freeze the measured snapshot
    6. DELETE_MAX_BETWEENNESS  remove the most loaded node
    7. UPDATE_PATHS            re-measure
    8. BETWEENNESS
    9. DELETE_OVERLOADED       cascade to nodes over their capacity
"""

from __future__ import annotations
import logging
import math
from enum import Enum
from typing import Callable, Dict, Tuple

import numpy as np

from ..models.exceptions import DegenerateNetworkError, InvariantViolationError
from ..models.history import History
from ..models.node import Node

logger = logging.getLogger(__name__)


class ComputeStep(Enum):
    """Step variants; dispatch goes through :meth:`apply`."""
    UPDATE_PATHS = "update_paths"
    RESILIENCE = "resilience"
    BETWEENNESS = "betweenness"
    CAPACITY = "capacity"
    COPY_ITERATION = "copy_iteration"
    DELETE_MAX_BETWEENNESS = "delete_max_betweenness"
    DELETE_OVERLOADED = "delete_overloaded"

    def apply(self, history: History) -> bool:
        """Run this step against ``history``'s active iteration."""
        logger.debug(f"Applying step {self.value} on iteration {history.current_iter()}")
        return _STEP_IMPLEMENTATIONS[self](history)


# =============================================================================
# Measurement Steps
# =============================================================================

def update_paths(history: History) -> bool:
    """Recompute shortest paths. False when the alive network is disconnected."""
    return history.get().graph.update_paths()


def betweenness(history: History) -> bool:
    """
    Count, for each alive node, the alive unordered pairs routed through it.

    Each node reads its own membership matrix and writes its own slot, so
    the per-node reductions are independent of each other.
    """
    iteration = history.get()
    graph, metrics = iteration.graph, iteration.metrics

    alive = graph.iter_alive().to_list()
    upper = np.triu(np.ones((len(alive), len(alive)), dtype=bool), k=1)

    metrics.betweenness.fill(0.0)
    max_value, max_node = -math.inf, Node.INVALID
    min_value, min_node = math.inf, Node.INVALID

    for i in alive:
        membership = graph.path_finder.membership(i).block(alive)
        value = float(np.count_nonzero(membership & upper))
        metrics.betweenness[i] = value

        if value > max_value:
            max_value, max_node = value, i
        if value < min_value:
            min_value, min_node = value, i

    metrics.max_betweenness = max_node
    metrics.min_betweenness = min_node
    return True


def capacity(history: History) -> bool:
    """``capacity = (1 + alpha) * betweenness`` for every alive node."""
    iteration = history.get()
    graph, metrics = iteration.graph, iteration.metrics

    max_value, max_node = -math.inf, Node.INVALID
    min_value, min_node = math.inf, Node.INVALID

    for i in graph.iter_alive():
        value = (1.0 + history.alpha) * metrics.betweenness[i]
        metrics.capacity[i] = value

        if value > max_value:
            max_value, max_node = value, i
        if value < min_value:
            min_value, min_node = value, i

    metrics.max_capacity = max_node
    metrics.min_capacity = min_node
    return True


def resilience(history: History) -> bool:
    """
    Structural resilience index (Zmax / beta).

    ``S`` sums the cost of every ordered alive pair, ``P_i`` the costs from
    node ``i``. ``z_i = S / (2 P_i)``, ``zmax = max z_i`` and
    ``beta = ((n - 1)(2 zmax - n)) / (zmax (n - 2))``. The deviation
    ``|beta - 1|`` is appended to the run log.

    Raises:
        DegenerateNetworkError: fewer than three alive nodes (beta divides
            by ``n - 2``)
    """
    iteration = history.get()
    graph, metrics = iteration.graph, iteration.metrics

    n = graph.alive_count()
    if n <= 2:
        raise DegenerateNetworkError(
            f"Resilience index needs at least 3 alive nodes, got {n}"
        )

    alive = graph.iter_alive().to_list()
    costs = graph.path_finder.costs.block(alive).astype(np.float64)
    np.fill_diagonal(costs, 0.0)

    total = costs.sum()
    per_node = costs.sum(axis=1)
    zs = total / (2.0 * per_node)

    metrics.zs.fill(0.0)
    metrics.zs[np.asarray(alive, dtype=np.intp)] = zs

    zmax = float(zs.max())
    n = float(n)
    beta = ((n - 1.0) * (2.0 * zmax - n)) / (zmax * (n - 2.0))

    metrics.zmax = zmax
    metrics.beta = beta
    metrics.beta_delta = abs(beta - 1.0)
    history.beta_deltas.append(metrics.beta_delta)

    logger.debug(f"zmax = {zmax:.4f}, beta = {beta:.4f}, beta_delta = {metrics.beta_delta:.4f}")
    return True


# =============================================================================
# Structural Steps
# =============================================================================

def copy_iteration(history: History) -> bool:
    """Freeze the active iteration and continue on a deep copy of it."""
    idx = history.push(history.get().clone())
    history.set_current_iter(idx)
    return True


def delete_max_betweenness(history: History) -> bool:
    """Remove the node with the highest betweenness recorded this round."""
    iteration = history.get()
    graph, metrics = iteration.graph, iteration.metrics

    node = metrics.max_betweenness
    if not node.is_valid():
        raise InvariantViolationError("No maximum betweenness recorded before deletion")

    logger.info(f"Deleting {node!r} with betweenness = {metrics.betweenness[node]:g}")
    graph.delete(node)
    return True


def delete_overloaded(history: History) -> bool:
    """
    Remove, in one batch, every node whose load now exceeds its capacity.

    Capacity is the value computed earlier in the round, before any
    removal. Paths are not recomputed between the removals of one batch.
    Appends ``1 / removed`` to ``history.ks`` (0.0 when nothing was removed).
    """
    iteration = history.get()
    graph, metrics = iteration.graph, iteration.metrics

    retired = [
        i for i in graph.iter_alive()
        if metrics.betweenness[i] > metrics.capacity[i]
    ]

    for i in retired:
        logger.info(
            f"Deleting {i!r}. Betweenness ({metrics.betweenness[i]:g}) "
            f"> Capacity ({metrics.capacity[i]:g})"
        )
    for i in retired:
        graph.delete(i)

    history.ks.append(1.0 / len(retired) if retired else 0.0)
    return True


_STEP_IMPLEMENTATIONS: Dict[ComputeStep, Callable[[History], bool]] = {
    ComputeStep.UPDATE_PATHS: update_paths,
    ComputeStep.RESILIENCE: resilience,
    ComputeStep.BETWEENNESS: betweenness,
    ComputeStep.CAPACITY: capacity,
    ComputeStep.COPY_ITERATION: copy_iteration,
    ComputeStep.DELETE_MAX_BETWEENNESS: delete_max_betweenness,
    ComputeStep.DELETE_OVERLOADED: delete_overloaded,
}

CANONICAL_ROUND: Tuple[ComputeStep, ...] = (
    ComputeStep.UPDATE_PATHS,
    ComputeStep.RESILIENCE,
    ComputeStep.BETWEENNESS,
    ComputeStep.CAPACITY,
    ComputeStep.COPY_ITERATION,
    ComputeStep.DELETE_MAX_BETWEENNESS,
    ComputeStep.UPDATE_PATHS,
    ComputeStep.BETWEENNESS,
    ComputeStep.DELETE_OVERLOADED,
)
