"""
Application Ports Package

Interfaces defining boundaries between application and adapters layers.
"""

# Inbound ports (use case interfaces)
from .inbound_ports import ISimulationUseCase

# Outbound ports (adapter interfaces)
from .outbound_ports import ITopologyRepository, IReportExporter

__all__ = [
    # Inbound
    "ISimulationUseCase",
    # Outbound
    "ITopologyRepository",
    "IReportExporter",
]
