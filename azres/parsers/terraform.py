import os
from typing import Any, Iterator, List, Tuple

import hcl2
from rich.console import Console

from azres.detect import detect_format
from azres.models.state import DataSourceConfig

console = Console(stderr=True)

DATA_SOURCE_TYPE = "azapi_resource"


def _unquote(val: Any) -> Any:
    """Newer python-hcl2 releases keep the quotes around string literals."""
    if isinstance(val, str) and len(val) >= 2 and val[0] == val[-1] == '"':
        return val[1:-1]
    return val


def _unwrap(val: Any) -> Any:
    """
    python-hcl2 wraps single-element blocks in a list.
    Recursively unwrap single-element lists that contain dicts.
    """
    if isinstance(val, list):
        if len(val) == 1 and isinstance(val[0], dict):
            return _unwrap(val[0])
        return [_unwrap(v) for v in val]
    if isinstance(val, dict):
        return {k: _unwrap(v) for k, v in val.items() if not str(k).startswith("__")}
    return _unquote(val)


def _string_attr(props: dict, key: str) -> str:
    val = props.get(key, "")
    # older python-hcl2 releases wrap attribute values in a list
    if isinstance(val, list) and len(val) == 1:
        val = val[0]
    return str(_unquote(val)) if val is not None else ""


def _export_values(props: dict) -> List[str]:
    val = props.get("response_export_values", [])
    if isinstance(val, list) and len(val) == 1 and isinstance(val[0], list):
        val = val[0]
    if not isinstance(val, list):
        return []
    return [str(_unquote(v)) for v in val if isinstance(v, str)]


def _instances(instances: Any) -> Iterator[Tuple[str, dict]]:
    # hcl2 wraps the block in a list
    if isinstance(instances, list):
        for instance_map in instances:
            if isinstance(instance_map, dict):
                yield from _instances(instance_map)
    elif isinstance(instances, dict):
        for label, raw_props in instances.items():
            if str(label).startswith("__"):
                continue
            props = _unwrap(raw_props) if isinstance(raw_props, (dict, list)) else {}
            yield _unquote(label), props if isinstance(props, dict) else {}


def parse_file(filepath: str) -> List[DataSourceConfig]:
    configs: List[DataSourceConfig] = []
    try:
        with open(filepath) as fh:
            data = hcl2.load(fh)
    except Exception as exc:
        console.print(f"[yellow]Warning:[/yellow] failed to parse {filepath}: {exc}")
        return configs

    for data_block in data.get("data", []):
        if not isinstance(data_block, dict):
            continue
        for ds_type, instances in data_block.items():
            if _unquote(ds_type) != DATA_SOURCE_TYPE:
                continue
            for label, props in _instances(instances):
                config = DataSourceConfig(
                    name=_string_attr(props, "name"),
                    parent_id=_string_attr(props, "parent_id"),
                    type=_string_attr(props, "type"),
                    response_export_values=_export_values(props),
                    label=label,
                    source_file=filepath,
                )
                for attr in ("name", "parent_id", "type"):
                    if "${" in getattr(config, attr):
                        console.print(
                            f"[yellow]Warning:[/yellow] {config.qualified_name}: {attr} "
                            f"is an unresolved expression in {filepath}"
                        )
                configs.append(config)

    return configs


def parse_directory(path: str) -> List[DataSourceConfig]:
    configs: List[DataSourceConfig] = []

    if os.path.isfile(path):
        if detect_format(path) == "terraform":
            configs.extend(parse_file(path))
        return configs

    for root, _, files in os.walk(path):
        for fname in files:
            fpath = os.path.join(root, fname)
            if detect_format(fpath) == "terraform":
                configs.extend(parse_file(fpath))

    return configs
