"""
Export Adapters Package

Report export implementations.
"""

from .json_exporter import JsonReportExporter

__all__ = [
    "JsonReportExporter",
]
