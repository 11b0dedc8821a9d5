"""
Outbound Ports (Secondary/Driven Ports)

Interfaces for infrastructure that the application drives.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Union

from netcollapse.domain.models import TopologyDescription


class ITopologyRepository(ABC):
    """
    Outbound port for topology persistence.

    Loads and saves topology descriptions regardless of the storage
    format behind it.
    """

    @abstractmethod
    def load(self, path: Union[str, Path]) -> TopologyDescription:
        """
        Load a topology description.

        Args:
            path: Location of the description

        Returns:
            The parsed (not yet validated) TopologyDescription
        """
        pass

    @abstractmethod
    def save(self, topology: TopologyDescription, path: Union[str, Path]) -> Path:
        """Persist ``topology`` and return where it was written."""
        pass


class IReportExporter(ABC):
    """Outbound port for exporting simulation reports."""

    @abstractmethod
    def export_json(self, data: Any, output_path: Union[str, Path]) -> str:
        """
        Export data to JSON format.

        Args:
            data: Report (or any object with ``to_dict``) to export
            output_path: Path to output file

        Returns:
            Path to exported file
        """
        pass
