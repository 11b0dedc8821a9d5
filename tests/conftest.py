"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for the netcollapse test suite.

Usage:
    pytest tests/                    # Run all tests
    pytest tests/ -v                 # Verbose output
    pytest tests/ -k "path"          # Run only path finder tests
    pytest tests/ --quick            # Quick subset
"""

import pytest
from pathlib import Path
from typing import Callable

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from netcollapse.domain.models import History, TopologyDescription
from netcollapse.domain.services import ComputeStep, generate_topology


# =============================================================================
# Custom Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


def pytest_addoption(parser):
    """Add custom command line options"""
    parser.addoption(
        "--quick",
        action="store_true",
        default=False,
        help="Skip slow tests",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests if --quick is specified"""
    if config.getoption("--quick"):
        skip_slow = pytest.mark.skip(reason="Skipped with --quick")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


# =============================================================================
# Topology Fixtures
# =============================================================================

@pytest.fixture
def example_topology() -> TopologyDescription:
    """Ten-node reference network"""
    return TopologyDescription.example()


@pytest.fixture
def line3() -> TopologyDescription:
    """0 - 1 - 2"""
    return TopologyDescription.from_edges(3, [(0, 1), (1, 2)])


@pytest.fixture
def square() -> TopologyDescription:
    """Four-cycle 0 - 1 - 2 - 3 - 0 (two shortest paths per opposite pair)"""
    return TopologyDescription.from_edges(4, [(0, 1), (1, 2), (2, 3), (3, 0)])


@pytest.fixture
def k4() -> TopologyDescription:
    """Fully connected four-node network"""
    return generate_topology("net", 4)


@pytest.fixture
def ring5() -> TopologyDescription:
    return generate_topology("ring", 5)


@pytest.fixture
def star5() -> TopologyDescription:
    """Hub 0 with leaves 1..4"""
    return generate_topology("star", 5)


@pytest.fixture
def fan5() -> TopologyDescription:
    """Hub 0 joined to every node of the line 1 - 2 - 3 - 4"""
    return TopologyDescription.from_edges(
        5, [(0, 1), (0, 2), (0, 3), (0, 4), (1, 2), (2, 3), (3, 4)]
    )


@pytest.fixture
def two_components() -> TopologyDescription:
    """0 - 1   2 - 3"""
    return TopologyDescription.from_edges(4, [(0, 1), (2, 3)])


# =============================================================================
# History Helpers
# =============================================================================

@pytest.fixture
def measured() -> Callable[..., History]:
    """Build a History and apply UPDATE_PATHS + BETWEENNESS (+ CAPACITY) to iteration 0."""
    def _measured(desc: TopologyDescription, alpha: float = 3.0, capacity: bool = True) -> History:
        history = History.from_topology(desc, alpha=alpha)
        assert ComputeStep.UPDATE_PATHS.apply(history)
        ComputeStep.BETWEENNESS.apply(history)
        if capacity:
            ComputeStep.CAPACITY.apply(history)
        return history
    return _measured
