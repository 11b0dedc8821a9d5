"""
CLI tests for bin/simulate_collapse.py.
"""

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "bin"))

import simulate_collapse  # noqa: E402

from netcollapse.adapters.outbound.persistence import FileTopologyRepository  # noqa: E402
from netcollapse.domain.models import TopologyDescription  # noqa: E402


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("NETCOLLAPSE_ALPHA", "NETCOLLAPSE_MAX_ROUNDS", "NETCOLLAPSE_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


class TestRunCommand:
    """Tests for the 'run' subcommand."""

    def test_example_json(self, capsys):
        assert simulate_collapse.main(["run", "--example", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)

        assert data["node_count"] == 10
        assert data["alpha"] == 3.0
        assert data["iterations"][0]["max_betweenness"] == 1

    def test_generated_topology(self, capsys):
        assert simulate_collapse.main(["run", "--topology", "net", "--nodes", "4", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["state"] == "converged"
        assert data["ks"] == [0.0, 0.0]

    def test_alpha_and_max_rounds(self, capsys):
        assert simulate_collapse.main(
            ["run", "--example", "--alpha", "1.5", "--max-rounds", "1", "--json"]
        ) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["alpha"] == 1.5
        assert data["rounds"] == 1
        assert data["state"] == "running"

    def test_alpha_from_env(self, capsys, monkeypatch):
        monkeypatch.setenv("NETCOLLAPSE_ALPHA", "0.5")
        assert simulate_collapse.main(["run", "--example", "--json"]) == 0
        assert json.loads(capsys.readouterr().out)["alpha"] == 0.5

    def test_input_file(self, capsys, tmp_path):
        path = FileTopologyRepository().save(
            TopologyDescription.from_edges(3, [(0, 1), (1, 2)]), tmp_path / "line.json"
        )
        assert simulate_collapse.main(["run", "--input", str(path), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["state"] == "halted_disconnected"

    def test_console_output(self, capsys):
        assert simulate_collapse.main(["run", "--example"]) == 0
        assert "Cascading Collapse Simulation" in capsys.readouterr().out

    def test_output_file(self, tmp_path):
        out = tmp_path / "report.json"
        assert simulate_collapse.main(["run", "--example", "-q", "-o", str(out)]) == 0
        with open(out) as f:
            assert json.load(f)["node_count"] == 10

    def test_missing_input_file(self, tmp_path, capsys):
        assert simulate_collapse.main(["run", "--input", str(tmp_path / "missing.json"), "-q"]) == 1
        assert "Error" in capsys.readouterr().err

    def test_source_is_required(self):
        with pytest.raises(SystemExit):
            simulate_collapse.main(["run"])


class TestGenerateCommand:
    """Tests for the 'generate' subcommand."""

    def test_generate_yaml(self, tmp_path):
        target = tmp_path / "ring.yaml"
        assert simulate_collapse.main(["generate", "--topology", "ring", "--nodes", "6", str(target), "-q"]) == 0

        desc = FileTopologyRepository().load(target)
        assert desc.node_count() == 6
        assert desc.edge_count() == 6

    def test_bad_suffix(self, tmp_path):
        target = tmp_path / "ring.txt"
        assert simulate_collapse.main(["generate", "--topology", "ring", str(target), "-q"]) == 1
        assert not target.exists()


def test_no_command():
    assert simulate_collapse.main([]) == 1
