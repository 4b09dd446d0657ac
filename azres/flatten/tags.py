import json
from typing import Any, Dict


def flatten_tags(value: Any) -> Dict[str, str]:
    """
    Convert a response "tags" value into a plain str -> str mapping.
    Absent, null or non-object input gives an empty mapping.
    """
    if not isinstance(value, dict):
        return {}
    tags: Dict[str, str] = {}
    for k, v in value.items():
        if v is None:
            continue
        tags[str(k)] = v if isinstance(v, str) else json.dumps(v, sort_keys=True)
    return tags
