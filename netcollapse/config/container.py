"""
Dependency Injection Container

Wires ports to adapters and manages service lifecycle.
"""

from dataclasses import dataclass, field
from typing import Optional

from .settings import Settings

# Import ports
from netcollapse.application.ports import ISimulationUseCase, ITopologyRepository, IReportExporter

# Import adapters
from netcollapse.adapters.outbound.persistence import FileTopologyRepository
from netcollapse.adapters.outbound.export import JsonReportExporter
from netcollapse.adapters.inbound.cli import ConsoleDisplay

# Import application services
from netcollapse.application.services import CollapseSimulationService


@dataclass
class Container:
    """
    Dependency injection container.

    Wires hexagonal architecture components:
    - Ports define contracts
    - Adapters implement ports
    - Services orchestrate domain logic
    """
    settings: Settings = field(default_factory=Settings)

    _repository: Optional[ITopologyRepository] = field(default=None, repr=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Container":
        """Create container from settings."""
        return cls(settings=settings)

    def topology_repository(self) -> ITopologyRepository:
        """Get the topology repository singleton."""
        if not self._repository:
            self._repository = FileTopologyRepository()
        return self._repository

    def simulation_service(self) -> ISimulationUseCase:
        """Get simulation use case implementation."""
        return CollapseSimulationService(
            repository=self.topology_repository(),
            alpha=self.settings.alpha,
            max_rounds=self.settings.max_rounds,
        )

    def report_exporter(self) -> IReportExporter:
        """Get report exporter adapter."""
        return JsonReportExporter()

    def display_service(self) -> ConsoleDisplay:
        """Get console display adapter."""
        return ConsoleDisplay()
