from dataclasses import dataclass, field
from enum import Enum
from typing import List


class IdentityType(str, Enum):
    NONE                          = "None"
    SYSTEM_ASSIGNED               = "SystemAssigned"
    USER_ASSIGNED                 = "UserAssigned"
    SYSTEM_ASSIGNED_USER_ASSIGNED = "SystemAssigned, UserAssigned"


@dataclass
class Identity:
    type: str                    # an IdentityType value, or the raw type when unrecognized
    identity_ids: List[str] = field(default_factory=list)
    principal_id: str = ""
    tenant_id: str = ""

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "identity_ids": list(self.identity_ids),
            "principal_id": self.principal_id,
            "tenant_id": self.tenant_id,
        }
