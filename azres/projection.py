"""
Project a response body through a list of export paths.

Each path contributes its value re-wrapped at its original nesting; the
partial results are folded together with merge() in path order. Paths that
do not resolve contribute nothing.
"""
import json
from typing import Any, Iterable

from azres.utils.json_merge import merge
from azres.utils.json_path import ABSENT, extract_object


def project(body: Any, paths: Iterable[str]) -> Any:
    output: Any = {}
    for path in paths or []:
        part = extract_object(body, path)
        if part is ABSENT:
            continue
        output = merge(output, part)
    return output


def serialize(output: Any) -> str:
    """Deterministic compact JSON text for the ``output`` state field."""
    if output is None:
        output = {}
    return json.dumps(output, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
