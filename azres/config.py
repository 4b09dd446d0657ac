"""
Optional ``azres.yaml`` settings file:

    read_timeout: 5          # minutes
    snapshot: snapshot.json  # relative to the config file
    output_format: json      # or markdown
"""
import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

import yaml
from rich.console import Console

from azres.services.data_source import DEFAULT_READ_TIMEOUT

console = Console(stderr=True)

CONFIG_FILE = "azres.yaml"
OUTPUT_FORMATS = ("json", "markdown")


@dataclass
class Config:
    read_timeout: timedelta = DEFAULT_READ_TIMEOUT
    snapshot: Optional[str] = None
    output_format: str = "json"


def load_config(path: Optional[str] = None) -> Config:
    """Load settings; a missing file gives defaults, a broken one warns and gives defaults."""
    path = path or CONFIG_FILE
    if not os.path.exists(path):
        return Config()

    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        console.print(f"[yellow]Warning:[/yellow] failed to load {path}: {exc}")
        return Config()

    if not isinstance(raw, dict):
        console.print(f"[yellow]Warning:[/yellow] {path} must be a mapping, using defaults")
        return Config()

    config = Config()

    timeout = raw.get("read_timeout")
    if timeout is not None:
        try:
            minutes = float(timeout)
            if minutes <= 0:
                raise ValueError(timeout)
            config.read_timeout = timedelta(minutes=minutes)
        except (TypeError, ValueError):
            console.print(f"[yellow]Warning:[/yellow] invalid read_timeout {timeout!r} in {path}")

    snapshot = raw.get("snapshot")
    if snapshot:
        snapshot = str(snapshot)
        if not os.path.isabs(snapshot):
            snapshot = os.path.join(os.path.dirname(os.path.abspath(path)), snapshot)
        config.snapshot = snapshot

    fmt = str(raw.get("output_format", config.output_format)).lower()
    if fmt in OUTPUT_FORMATS:
        config.output_format = fmt
    else:
        console.print(f"[yellow]Warning:[/yellow] unknown output_format {fmt!r} in {path}")

    return config
