import copy
from typing import Any


def merge(a: Any, b: Any) -> Any:
    """
    Deep structural union of two JSON values.

    Objects merge key by key, recursing on shared keys. For any other
    combination (scalars, arrays, mismatched types) ``b`` replaces ``a``.
    Neither operand is mutated and the result shares no containers with them.
    """
    if not (isinstance(a, dict) and isinstance(b, dict)):
        return copy.deepcopy(b)

    merged = {}
    for key, value in a.items():
        if key in b:
            merged[key] = merge(value, b[key])
        else:
            merged[key] = copy.deepcopy(value)
    for key, value in b.items():
        if key not in a:
            merged[key] = copy.deepcopy(value)
    return merged
