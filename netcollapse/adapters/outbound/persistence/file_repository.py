"""
File Topology Repository Adapter

Implements ITopologyRepository over JSON and YAML files.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from netcollapse.application.ports.outbound_ports import ITopologyRepository
from netcollapse.domain.models import TopologyDescription, TopologyError


class FileTopologyRepository(ITopologyRepository):
    """
    File adapter implementing ITopologyRepository.

    The format is chosen from the file suffix. Both formats carry the same
    document::

        nodes:
          - node_id: 0
            neighbors: [1, 2]
          - node_id: 1
            neighbors: []
    """

    JSON_SUFFIXES = (".json",)
    YAML_SUFFIXES = (".yaml", ".yml")

    def __init__(self) -> None:
        self.logger = logging.getLogger(__name__)

    def load(self, path: Union[str, Path]) -> TopologyDescription:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        self.logger.info(f"Loading topology from: {path}")
        with open(path, "r", encoding="utf-8") as f:
            data = self._parse(f.read(), path)

        if not isinstance(data, dict):
            raise TopologyError(f"{path}: expected a mapping at the top level, got {type(data).__name__}")
        return TopologyDescription.from_dict(data)

    def save(self, topology: TopologyDescription, path: Union[str, Path]) -> Path:
        path = Path(path)
        suffix = self._suffix(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = topology.to_dict()
        with open(path, "w", encoding="utf-8") as f:
            if suffix in self.JSON_SUFFIXES:
                json.dump(data, f, indent=2)
            else:
                yaml.safe_dump(data, f, default_flow_style=None, sort_keys=False)

        self.logger.info(f"Saved topology ({topology.node_count()} nodes) to: {path}")
        return path

    def _parse(self, text: str, path: Path) -> Dict[str, Any]:
        suffix = self._suffix(path)
        try:
            if suffix in self.JSON_SUFFIXES:
                return json.loads(text)
            return yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise TopologyError(f"Could not parse {path}: {e}") from e

    def _suffix(self, path: Path) -> str:
        suffix = path.suffix.lower()
        if suffix not in self.JSON_SUFFIXES + self.YAML_SUFFIXES:
            raise TopologyError(
                f"Unsupported topology file type '{suffix}' (use .json, .yaml or .yml)"
            )
        return suffix
