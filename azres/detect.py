import json
import os
from typing import Any

import yaml


def _looks_like_snapshot(doc: Any) -> bool:
    return (
        isinstance(doc, dict)
        and bool(doc)
        and all(isinstance(k, str) and k.startswith("/") for k in doc)
    )


def detect_format(filepath: str) -> str:
    """
    Return 'terraform', 'manifest', 'snapshot', or 'unknown'.
    """
    _, ext = os.path.splitext(filepath.lower())

    if ext == ".tf":
        return "terraform"

    if ext not in (".json", ".yaml", ".yml"):
        return "unknown"

    try:
        with open(filepath, encoding="utf-8") as fh:
            doc = json.load(fh) if ext == ".json" else yaml.safe_load(fh)
    except (OSError, ValueError, yaml.YAMLError):
        return "unknown"

    if isinstance(doc, dict) and isinstance(doc.get("data_sources"), list):
        return "manifest"
    if _looks_like_snapshot(doc):
        return "snapshot"
    return "unknown"
