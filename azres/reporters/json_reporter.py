"""
JSON read report generator.
"""
import json
from datetime import datetime, timezone
from typing import List

from azres import __version__
from azres.models.state import DataSourceState
from azres.services.data_source import ReadFailure


def build_report(
    states: List[DataSourceState], failures: List[ReadFailure], source_path: str
) -> str:
    report = {
        "meta": {
            "generated": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "source": source_path,
            "tool": "azres",
            "version": __version__,
        },
        "summary": {"read": len(states), "failed": len(failures)},
        "data_sources": [s.to_dict() for s in states],
        "failures": [f.to_dict() for f in failures],
    }
    return json.dumps(report, indent=2)
