"""
Persistence Adapters Package

Topology repository implementations.
"""

from .file_repository import FileTopologyRepository

__all__ = [
    "FileTopologyRepository",
]
