"""
Managed identity flattening.

ARM returns user-assigned identities as an object keyed by identity resource
id; other APIs use a list of ids, a list of {"id": ...} references, or a
single id. All of them collapse into Identity.identity_ids.
"""
from typing import Any, List, Optional

from azres.models.identity import Identity, IdentityType

_TYPE_ALIASES = {
    "none": IdentityType.NONE,
    "systemassigned": IdentityType.SYSTEM_ASSIGNED,
    "userassigned": IdentityType.USER_ASSIGNED,
    "systemassigned,userassigned": IdentityType.SYSTEM_ASSIGNED_USER_ASSIGNED,
    "userassigned,systemassigned": IdentityType.SYSTEM_ASSIGNED_USER_ASSIGNED,
}


def normalize_identity_type(value: Any) -> Optional[str]:
    if not isinstance(value, str) or not value.strip():
        return None
    key = value.replace(" ", "").replace("_", "").lower()
    alias = _TYPE_ALIASES.get(key)
    return alias.value if alias else value.strip()


def _reference_id(ref: Any) -> Optional[str]:
    if isinstance(ref, str):
        return ref or None
    if isinstance(ref, dict):
        for key in ("id", "resourceId"):
            if isinstance(ref.get(key), str) and ref[key]:
                return ref[key]
    return None


def _identity_ids(value: Any) -> List[str]:
    if isinstance(value, dict):
        return [str(k) for k in value.keys()]
    if isinstance(value, list):
        ids = [_reference_id(ref) for ref in value]
        return [i for i in ids if i]
    ref = _reference_id(value)
    return [ref] if ref else []


def flatten_identity(value: Any) -> List[Identity]:
    """
    Return [] when the identity block is absent, null or of type "None",
    otherwise a single-element list with the normalized Identity.
    """
    # tolerate the block form [{...}]
    if isinstance(value, list) and len(value) == 1:
        value = value[0]
    if not isinstance(value, dict):
        return []

    identity_type = normalize_identity_type(value.get("type"))
    if identity_type is None or identity_type == IdentityType.NONE.value:
        return []

    refs = value.get("userAssignedIdentities")
    if refs is None:
        refs = value.get("identityIds")

    return [
        Identity(
            type=identity_type,
            identity_ids=_identity_ids(refs),
            principal_id=str(value.get("principalId") or ""),
            tenant_id=str(value.get("tenantId") or ""),
        )
    ]
