from typing import Any


def normalize(location: str) -> str:
    """"West Europe" -> "westeurope"."""
    return location.replace(" ", "").lower()


def flatten_location(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return normalize(value)
