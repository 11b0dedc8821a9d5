"""
Inbound Ports (Primary/Driving Ports)

Use case interfaces the CLI drives.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, Union

from netcollapse.domain.models import TopologyDescription


class ISimulationUseCase(ABC):
    """
    Inbound port for collapse simulations.

    Defines the contract for running a cascade over a topology and
    reporting what was recorded.
    """

    @abstractmethod
    def run(
        self,
        topology: TopologyDescription,
        alpha: Optional[float] = None,
        max_rounds: Optional[int] = None,
    ) -> Any:
        """
        Run a cascade simulation.

        Args:
            topology: Network to collapse
            alpha: Capacity tolerance (service default when None)
            max_rounds: Round limit (no limit when None)

        Returns:
            Simulation report
        """
        pass

    @abstractmethod
    def run_from_file(
        self,
        path: Union[str, Path],
        alpha: Optional[float] = None,
        max_rounds: Optional[int] = None,
    ) -> Any:
        """Load a topology through the repository and run it."""
        pass
