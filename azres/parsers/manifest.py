"""
YAML/JSON manifest of data source declarations:

    data_sources:
      - label: vnet
        name: vnet1
        parent_id: /subscriptions/.../resourceGroups/rg1
        type: Microsoft.Network/virtualNetworks@2021-02-01
        response_export_values: [properties.addressSpace]
"""
import json
import os
from typing import Any, List

import yaml
from rich.console import Console

from azres.detect import detect_format
from azres.models.state import DataSourceConfig

console = Console(stderr=True)


def _str(val: Any) -> str:
    return "" if val is None else str(val)


def parse_file(filepath: str) -> List[DataSourceConfig]:
    configs: List[DataSourceConfig] = []

    try:
        _, ext = os.path.splitext(filepath.lower())
        with open(filepath, encoding="utf-8") as fh:
            doc = json.load(fh) if ext == ".json" else yaml.safe_load(fh)
    except Exception as exc:
        console.print(f"[yellow]Warning:[/yellow] failed to parse {filepath}: {exc}")
        return configs

    if not isinstance(doc, dict):
        return configs

    entries = doc.get("data_sources") or []
    if not isinstance(entries, list):
        return configs

    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            console.print(f"[dim]Debug:[/dim] skipping entry #{i} in {filepath}: not a mapping")
            continue
        paths = entry.get("response_export_values") or []
        if isinstance(paths, str):
            paths = [paths]
        name = _str(entry.get("name"))
        configs.append(DataSourceConfig(
            name=name,
            parent_id=_str(entry.get("parent_id")),
            type=_str(entry.get("type")),
            response_export_values=[_str(p) for p in paths if p is not None],
            label=_str(entry.get("label")) or name,
            source_file=filepath,
        ))

    return configs


def parse_directory(path: str) -> List[DataSourceConfig]:
    configs: List[DataSourceConfig] = []

    if os.path.isfile(path):
        if detect_format(path) == "manifest":
            configs.extend(parse_file(path))
        return configs

    for root, _, files in os.walk(path):
        for fname in files:
            fpath = os.path.join(root, fname)
            if detect_format(fpath) == "manifest":
                configs.extend(parse_file(fpath))

    return configs
