"""
Resource client boundary.

The network client that talks to the generic resource API lives outside this
package; anything with a matching ``get`` can be passed in a ReadContext.
SnapshotResourceClient serves recorded response bodies from a local file.
"""
import copy
import json
import os
from typing import Any, Dict, Optional, Protocol

import yaml
from rich.console import Console

from azres.errors import ResourceNotFound, ResourceReadError

console = Console(stderr=True)


class ResourceClient(Protocol):
    def get(self, resource_id: str, api_version: str, timeout: Optional[float] = None) -> Any:
        ...


def _key(resource_id: str) -> str:
    return resource_id.split("?", 1)[0].rstrip("/").lower()


class SnapshotResourceClient:
    """
    Serves bodies from a mapping of resource id -> response body.
    Lookups ignore case and any "?api-version=" suffix.
    """

    def __init__(self, bodies: Dict[str, Any]):
        self._bodies = {_key(k): v for k, v in bodies.items()}

    def __len__(self) -> int:
        return len(self._bodies)

    @classmethod
    def from_file(cls, filepath: str) -> "SnapshotResourceClient":
        _, ext = os.path.splitext(filepath.lower())
        try:
            with open(filepath, encoding="utf-8") as fh:
                data = json.load(fh) if ext == ".json" else yaml.safe_load(fh)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            raise ResourceReadError(f"failed to load snapshot {filepath}: {exc}") from exc

        if data is None:
            console.print(f"[yellow]Warning:[/yellow] snapshot {filepath} is empty")
            data = {}
        if not isinstance(data, dict):
            raise ResourceReadError(f"snapshot {filepath} must map resource ids to response bodies")
        return cls(data)

    def get(self, resource_id: str, api_version: str, timeout: Optional[float] = None) -> Any:
        key = _key(resource_id)
        if key not in self._bodies:
            raise ResourceNotFound(resource_id)
        return copy.deepcopy(self._bodies[key])
