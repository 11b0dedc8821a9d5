"""
JSON Report Exporter Adapter

Implements IReportExporter for JSON export.
"""

import json
from pathlib import Path
from typing import Any, Union

from netcollapse.application.ports.outbound_ports import IReportExporter


class JsonReportExporter(IReportExporter):
    """
    JSON adapter implementing IReportExporter.
    """

    def export_json(self, data: Any, output_path: Union[str, Path]) -> str:
        """Export data to JSON format."""
        # Convert to dict if has to_dict method
        if hasattr(data, "to_dict"):
            data = data.to_dict()

        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(data, f, indent=2, default=str)

        return str(path)
