from dataclasses import dataclass, field
from typing import Dict, List

from azres.models.identity import Identity


@dataclass
class DataSourceConfig:
    name: str
    parent_id: str
    type: str                  # "Namespace/Kind@apiVersion"
    response_export_values: List[str] = field(default_factory=list)
    label: str = ""            # declaration label, e.g. terraform block name
    source_file: str = ""

    @property
    def qualified_name(self) -> str:
        return f"azapi_resource.{self.label or self.name}"


@dataclass
class DataSourceState:
    id: str
    name: str
    parent_id: str
    type: str
    location: str = ""
    tags: Dict[str, str] = field(default_factory=dict)
    identity: List[Identity] = field(default_factory=list)
    output: str = "{}"         # serialized projection
    label: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "parent_id": self.parent_id,
            "type": self.type,
            "location": self.location,
            "tags": dict(self.tags),
            "identity": [i.to_dict() for i in self.identity],
            "output": self.output,
        }
