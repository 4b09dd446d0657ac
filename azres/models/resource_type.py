import re
from dataclasses import dataclass
from typing import Tuple

from azres.errors import InvalidResourceType

# namespace, kind and api-version segments: no whitespace or separators
_SEGMENT_RE = re.compile(r"[^\s/?@&=]+")


@dataclass(frozen=True)
class ResourceType:
    namespace: str              # e.g. "Microsoft.Network"
    kinds: Tuple[str, ...]      # e.g. ("virtualNetworks", "subnets")

    @property
    def type(self) -> str:
        return "/".join((self.namespace,) + self.kinds)

    @property
    def is_child(self) -> bool:
        return len(self.kinds) > 1

    @property
    def parent_type(self) -> str:
        return "/".join((self.namespace,) + self.kinds[:-1])

    @property
    def last_kind(self) -> str:
        return self.kinds[-1]


def _valid_segment(value: str) -> bool:
    return bool(_SEGMENT_RE.fullmatch(value))


def parse_type(value: str) -> ResourceType:
    """Parse "Namespace/Kind[/SubKind...]" without an API version."""
    if not isinstance(value, str):
        raise InvalidResourceType(f"resource type must be a string, got {value!r}", str(value))
    parts = value.split("/")
    if len(parts) < 2 or not all(_valid_segment(p) for p in parts):
        raise InvalidResourceType(
            f"invalid resource type {value!r}: expected 'Namespace/Kind[/SubKind...]'", value
        )
    # child kinds are rendered as path keys, where "providers" starts a new provider scope
    if any(p.lower() == "providers" for p in parts[2:]):
        raise InvalidResourceType(
            f"invalid resource type {value!r}: 'providers' is not allowed as a child kind", value
        )
    return ResourceType(namespace=parts[0], kinds=tuple(parts[1:]))


def split_type_and_version(value: str) -> Tuple[ResourceType, str]:
    """
    Split "Namespace/Kind[/SubKind...]@apiVersion" into its type and version.
    """
    if not isinstance(value, str) or value.count("@") != 1:
        raise InvalidResourceType(
            f"invalid type {value!r}: expected 'Namespace/Kind@apiVersion'", str(value)
        )
    type_part, api_version = value.split("@")
    if not _valid_segment(api_version):
        raise InvalidResourceType(f"invalid type {value!r}: missing API version", value)
    try:
        resource_type = parse_type(type_part)
    except InvalidResourceType as exc:
        raise InvalidResourceType(
            f"invalid type {value!r}: expected 'Namespace/Kind@apiVersion'", value
        ) from exc
    return resource_type, api_version


def validate_api_version(value: str) -> bool:
    return isinstance(value, str) and _valid_segment(value)
