"""
Composite resource identifier built from name, parent id and type@version.

Canonical forms:

    /providers/Provider.Test/widgets/foo                      (root scope)
    <parent_id>/providers/Microsoft.Network/virtualNetworks/vnet
    <vnet id>/subnets/default                                  (child type)

The persisted ``id`` appends the API version: ``<azure_resource_id>?api-version=<v>``.
"""
from dataclasses import dataclass
from typing import List, Optional

from azres.errors import (
    InvalidParentId,
    InvalidResourceName,
    MalformedResourceId,
    ResourceIdError,
)
from azres.models.resource_type import parse_type, split_type_and_version, validate_api_version

API_VERSION_MARKER = "?api-version="
_PROVIDERS = "providers"


@dataclass(frozen=True)
class ResourceIdentifier:
    name: str
    parent_id: str          # "" for root scope
    resource_type: str      # "Namespace/Kind[/SubKind...]"
    api_version: str

    @property
    def azure_resource_id(self) -> str:
        rtype = parse_type(self.resource_type)
        if rtype.is_child:
            return f"{self.parent_id}/{rtype.last_kind}/{self.name}"
        return f"{self.parent_id}/{_PROVIDERS}/{rtype.type}/{self.name}"

    @property
    def id(self) -> str:
        return f"{self.azure_resource_id}{API_VERSION_MARKER}{self.api_version}"

    @property
    def type_and_version(self) -> str:
        return f"{self.resource_type}@{self.api_version}"

    def __str__(self) -> str:
        return self.id

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "azure_resource_id": self.azure_resource_id,
            "name": self.name,
            "parent_id": self.parent_id,
            "type": self.resource_type,
            "api_version": self.api_version,
        }


def _split_segments(path: str) -> Optional[List[str]]:
    if not isinstance(path, str) or not path.startswith("/") or "?" in path:
        return None
    parts = path[1:].split("/")
    if any(not p.strip() for p in parts):
        return None
    return parts


def _providers_keys(parts: List[str]) -> Optional[List[int]]:
    """
    Walk key/value pairs and return the index of every "providers" key,
    or None when the segments do not form a resource path.
    """
    keys: List[int] = []
    i = 0
    while i < len(parts):
        if parts[i].lower() == _PROVIDERS:
            # namespace, kind, name
            if i + 3 >= len(parts):
                return None
            keys.append(i)
            i += 4
        else:
            if i + 1 >= len(parts):
                return None
            i += 2
    return keys


def is_resource_path(path: str) -> bool:
    """
    True for paths made of key/value pairs, where a "providers" key is
    followed by a namespace and then further key/value pairs:

        /subscriptions/s1/resourceGroups/rg1
        /providers/Microsoft.Management/managementGroups/mg1
    """
    parts = _split_segments(path)
    return parts is not None and _providers_keys(parts) is not None


def resource_type_of(path: str) -> Optional[str]:
    """Return "Namespace/Kind[/SubKind...]" of a provider resource path, else None."""
    parts = _split_segments(path)
    keys = _providers_keys(parts) if parts is not None else None
    if not keys:
        return None
    p = keys[-1]
    rest = parts[p + 2:]
    return "/".join([parts[p + 1]] + rest[0::2])


def _normalize_parent(parent_id: str) -> str:
    if not isinstance(parent_id, str):
        raise InvalidParentId(f"parent_id must be a string, got {parent_id!r}", str(parent_id))
    return parent_id.strip().rstrip("/")


def build(name: str, parent_id: str, type_and_version: str) -> ResourceIdentifier:
    """
    Validate raw inputs and build an identifier.

    Raises InvalidResourceName, InvalidResourceType or InvalidParentId, each
    echoing the offending input.
    """
    if not isinstance(name, str) or not name.strip() or "/" in name or "?" in name:
        raise InvalidResourceName(f"invalid name {name!r}: must be non-empty without '/' or '?'", str(name))

    rtype, api_version = split_type_and_version(type_and_version)

    parent = _normalize_parent(parent_id)
    if parent and not is_resource_path(parent):
        raise InvalidParentId(f"invalid parent_id {parent_id!r}: not a resource path", parent_id)

    if rtype.is_child:
        parent_type = resource_type_of(parent) if parent else None
        if parent_type is None or parent_type.lower() != rtype.parent_type.lower():
            raise InvalidParentId(
                f"invalid parent_id {parent_id!r}: type {rtype.type!r} requires a "
                f"{rtype.parent_type!r} parent",
                parent_id,
            )

    return ResourceIdentifier(
        name=name,
        parent_id=parent,
        resource_type=rtype.type,
        api_version=api_version,
    )


def render(identifier: ResourceIdentifier) -> str:
    return identifier.id


def parse(id_string: str) -> ResourceIdentifier:
    """
    Inverse of render(): rebuild an identifier from "<azure id>?api-version=<v>".
    Raises MalformedResourceId for anything that does not follow the grammar.
    """
    if not isinstance(id_string, str) or API_VERSION_MARKER not in id_string:
        raise MalformedResourceId(
            f"malformed resource id {id_string!r}: expected '<resource id>{API_VERSION_MARKER}<version>'",
            str(id_string),
        )
    path, api_version = id_string.split(API_VERSION_MARKER, 1)
    if not validate_api_version(api_version):
        raise MalformedResourceId(f"malformed resource id {id_string!r}: invalid API version", id_string)

    parts = _split_segments(path)
    keys = _providers_keys(parts) if parts is not None else None
    if not keys:
        raise MalformedResourceId(f"malformed resource id {id_string!r}", id_string)

    p = keys[-1]
    namespace = parts[p + 1]
    pairs = parts[p + 2:]
    if len(pairs) < 2 or len(pairs) % 2:
        raise MalformedResourceId(f"malformed resource id {id_string!r}", id_string)
    kinds, names = pairs[0::2], pairs[1::2]
    if len(kinds) == 1:
        parent = "/" + "/".join(parts[:p]) if p > 0 else ""
    else:
        parent = "/" + "/".join(parts[:-2])
    type_and_version = "/".join([namespace] + kinds) + "@" + api_version

    try:
        identifier = build(names[-1], parent, type_and_version)
    except ResourceIdError as exc:
        raise MalformedResourceId(f"malformed resource id {id_string!r}: {exc}", id_string) from exc

    if identifier.azure_resource_id.lower() != path.lower():
        raise MalformedResourceId(f"malformed resource id {id_string!r}", id_string)
    return identifier
