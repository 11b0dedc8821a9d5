"""
Application Settings

Environment configuration for the application.
"""

import os
from dataclasses import dataclass
from typing import Optional

from netcollapse.domain.models import DEFAULT_ALPHA


@dataclass
class Settings:
    """Application settings from environment."""

    # Simulation
    alpha: float = DEFAULT_ALPHA
    max_rounds: Optional[int] = None

    # Logging
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        max_rounds = os.getenv("NETCOLLAPSE_MAX_ROUNDS")
        return cls(
            alpha=float(os.getenv("NETCOLLAPSE_ALPHA", str(DEFAULT_ALPHA))),
            max_rounds=int(max_rounds) if max_rounds else None,
            log_level=os.getenv("NETCOLLAPSE_LOG_LEVEL", "WARNING").upper(),
        )
