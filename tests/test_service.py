"""
Tests for the simulation service, adapters and configuration.
"""

import json

import pytest

from netcollapse.adapters.inbound.cli import ConsoleDisplay
from netcollapse.adapters.outbound.export import JsonReportExporter
from netcollapse.adapters.outbound.persistence import FileTopologyRepository
from netcollapse.application.services import CollapseSimulationService, SimulationReport
from netcollapse.config import Container, Settings
from netcollapse.domain.models import TopologyDescription, TopologyError


# =============================================================================
# Application Service
# =============================================================================

class TestCollapseSimulationService:
    """Tests for CollapseSimulationService and SimulationReport."""

    def test_run_complete_graph(self, k4):
        report = CollapseSimulationService().run(k4)

        assert isinstance(report, SimulationReport)
        assert report.state == "converged"
        assert report.rounds == 2
        assert report.alpha == 3.0
        assert report.node_count == 4
        assert len(report.iterations) == 2
        assert report.final_alive == [1, 2, 3]
        assert report.removal_order() == [[0]]
        assert report.ks == [0.0, 0.0]

    def test_iteration_summary(self, line3):
        report = CollapseSimulationService().run(line3)
        first = report.iterations[0]

        assert report.state == "halted_disconnected"
        assert first.alive == [0, 1, 2]
        assert first.removed == []
        assert first.max_betweenness == 1
        assert first.betweenness == {0: 2.0, 1: 3.0, 2: 2.0}
        assert first.beta == pytest.approx(1.0)

    def test_keeps_simulator(self, line3):
        service = CollapseSimulationService()
        service.run(line3)
        assert service.simulator is not None
        assert service.simulator.history.iter_count() == 1

    def test_alpha_override(self, line3):
        service = CollapseSimulationService(alpha=1.0)
        assert service.run(line3).alpha == 1.0
        assert service.run(line3, alpha=0.25).alpha == 0.25

    def test_max_rounds(self, example_topology):
        report = CollapseSimulationService(max_rounds=1).run(example_topology)
        assert report.state == "running"
        assert report.rounds == 1

    def test_report_is_json_serializable(self, example_topology):
        report = CollapseSimulationService().run(example_topology)
        data = json.loads(json.dumps(report.to_dict()))

        assert data["state"] in ("converged", "halted_disconnected")
        assert data["iteration_count"] == len(report.iterations)
        assert data["iterations"][0]["betweenness"]["1"] == 21.0

    def test_run_generated(self):
        report = CollapseSimulationService().run_generated("star", 5)
        assert report.state == "halted_disconnected"
        assert report.node_count == 5

    def test_run_from_file_requires_repository(self, tmp_path):
        with pytest.raises(ValueError):
            CollapseSimulationService().run_from_file(tmp_path / "topology.json")

    def test_run_from_file(self, tmp_path, k4):
        repository = FileTopologyRepository()
        path = repository.save(k4, tmp_path / "k4.yaml")

        report = CollapseSimulationService(repository=repository).run_from_file(path)
        assert report.state == "converged"


# =============================================================================
# Persistence
# =============================================================================

class TestFileTopologyRepository:
    """Tests for FileTopologyRepository."""

    @pytest.mark.parametrize("name", ["topology.json", "topology.yaml", "nested/topology.yml"])
    def test_save_load(self, tmp_path, example_topology, name):
        repository = FileTopologyRepository()
        path = repository.save(example_topology, tmp_path / name)

        assert path.exists()
        assert repository.load(path) == example_topology

    def test_load_nodes_alias(self, tmp_path):
        path = tmp_path / "alias.yaml"
        path.write_text(
            "nodes:\n"
            "  - node_id: 0\n"
            "    nodes: [1, 2]\n"
            "  - node_id: 1\n"
            "    nodes: [2]\n"
            "  - node_id: 2\n"
            "    nodes: []\n"
        )
        desc = FileTopologyRepository().load(path)
        assert desc.edges() == [(0, 1), (0, 2), (1, 2)]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FileTopologyRepository().load(tmp_path / "missing.json")

    def test_unsupported_suffix(self, tmp_path, line3):
        with pytest.raises(TopologyError):
            FileTopologyRepository().save(line3, tmp_path / "topology.toml")

    def test_unsupported_suffix_on_load(self, tmp_path):
        path = tmp_path / "topology.toml"
        path.write_text("[[nodes]]\nnode_id = 0\nnodes = []\n")
        with pytest.raises(TopologyError):
            FileTopologyRepository().load(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("nodes: [\n")
        with pytest.raises(TopologyError):
            FileTopologyRepository().load(path)

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{nodes:")
        with pytest.raises(TopologyError):
            FileTopologyRepository().load(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(TopologyError):
            FileTopologyRepository().load(path)


# =============================================================================
# Export / Display
# =============================================================================

class TestJsonReportExporter:
    """Tests for JsonReportExporter."""

    def test_export_report(self, tmp_path, k4):
        report = CollapseSimulationService().run(k4)
        out = JsonReportExporter().export_json(report, tmp_path / "out" / "report.json")

        with open(out) as f:
            data = json.load(f)
        assert data["state"] == "converged"
        assert data["ks"] == [0.0, 0.0]

    def test_export_plain_dict(self, tmp_path):
        out = JsonReportExporter().export_json({"a": 1}, tmp_path / "plain.json")
        with open(out) as f:
            assert json.load(f) == {"a": 1}


class TestConsoleDisplay:
    """Smoke tests for ConsoleDisplay."""

    def test_display_report(self, capsys, example_topology):
        report = CollapseSimulationService().run(example_topology)
        ConsoleDisplay().display_report(report)

        out = capsys.readouterr().out
        assert "Cascading Collapse Simulation" in out
        assert report.state.upper() in out
        assert "Top 5 Loaded Nodes" in out

    def test_display_topology(self, capsys, example_topology):
        ConsoleDisplay().display_topology(example_topology)
        out = capsys.readouterr().out
        assert "Nodes:" in out
        assert "12" in out


# =============================================================================
# Configuration
# =============================================================================

class TestSettings:
    """Tests for Settings.from_env."""

    def test_defaults(self, monkeypatch):
        for var in ("NETCOLLAPSE_ALPHA", "NETCOLLAPSE_MAX_ROUNDS", "NETCOLLAPSE_LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)
        settings = Settings.from_env()
        assert settings.alpha == 3.0
        assert settings.max_rounds is None
        assert settings.log_level == "WARNING"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("NETCOLLAPSE_ALPHA", "0.5")
        monkeypatch.setenv("NETCOLLAPSE_MAX_ROUNDS", "3")
        monkeypatch.setenv("NETCOLLAPSE_LOG_LEVEL", "debug")
        settings = Settings.from_env()
        assert settings.alpha == 0.5
        assert settings.max_rounds == 3
        assert settings.log_level == "DEBUG"


class TestContainer:
    """Tests for Container wiring."""

    def test_wiring(self):
        container = Container.from_settings(Settings(alpha=1.5, max_rounds=4))
        service = container.simulation_service()

        assert isinstance(service, CollapseSimulationService)
        assert service.alpha == 1.5
        assert service.max_rounds == 4
        assert service.repository is container.topology_repository()
        assert isinstance(container.report_exporter(), JsonReportExporter)
        assert isinstance(container.display_service(), ConsoleDisplay)
