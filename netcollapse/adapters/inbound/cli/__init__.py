"""
CLI Inbound Adapter Package

Terminal output for the collapse simulator.
"""

from .display import ConsoleDisplay, Colors

__all__ = [
    "ConsoleDisplay",
    "Colors",
]
