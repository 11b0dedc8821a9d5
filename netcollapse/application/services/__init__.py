from .simulation_service import (
    CollapseSimulationService,
    SimulationReport,
    IterationSummary,
)

__all__ = [
    "CollapseSimulationService",
    "SimulationReport",
    "IterationSummary",
]
