"""
Path expressions over schema-less JSON values.

A path is a sequence of dot-separated field names with optional bracketed
array indices, e.g. ``properties.settings[0].value``. Lookups never raise:
anything that cannot be resolved yields ``ABSENT``.
"""
import copy
import re
from typing import Any, List, Optional, Union

Step = Union[str, int]

_PATH_RE = re.compile(r"(?:[^.\[\]]+|\[\d+\])(?:\.[^.\[\]]+|\[\d+\])*", re.ASCII)
_STEP_RE = re.compile(r"\.?([^.\[\]]+)|\[(\d+)\]", re.ASCII)


class _Absent:
    """Marker for a path that did not resolve. Distinct from JSON null."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()


def parse_path(path: str) -> Optional[List[Step]]:
    """
    Split a path expression into field-name (str) and index (int) steps.
    Returns None when the expression is malformed.
    """
    if not isinstance(path, str):
        return None
    if path == "":
        return []
    if not _PATH_RE.fullmatch(path):
        return None
    steps: List[Step] = []
    for m in _STEP_RE.finditer(path):
        key, index = m.group(1), m.group(2)
        steps.append(key if key is not None else int(index))
    return steps


def _step(current: Any, step: Step) -> Any:
    if isinstance(step, int):
        if isinstance(current, list) and step < len(current):
            return current[step]
        return ABSENT
    if isinstance(current, dict) and step in current:
        return current[step]
    return ABSENT


def _walk(document: Any, steps: List[Step]) -> Any:
    current = document
    for step in steps:
        current = _step(current, step)
        if current is ABSENT:
            return ABSENT
    # null leaves contribute nothing, same as a missing key
    if current is None:
        return ABSENT
    return current


def extract(document: Any, path: str) -> Any:
    """Return the sub-value addressed by ``path``, or ``ABSENT``."""
    steps = parse_path(path)
    if steps is None:
        return ABSENT
    return _walk(document, steps)


def extract_object(document: Any, path: str) -> Any:
    """
    Like extract(), but re-wrap the result in the nesting it was found at:

        extract_object({"a": {"b": 1, "c": 2}}, "a.b") == {"a": {"b": 1}}

    Index steps wrap the element in a single-element list. The returned value
    never shares containers with ``document``.
    """
    steps = parse_path(path)
    if steps is None:
        return ABSENT
    value = _walk(document, steps)
    if value is ABSENT:
        return ABSENT
    result = copy.deepcopy(value)
    for step in reversed(steps):
        result = [result] if isinstance(step, int) else {step: result}
    return result
