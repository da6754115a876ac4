from dataclasses import dataclass
from typing import FrozenSet, Optional

EMPLOYEE_CENTER_TYPE = "EMPLOYEE"


@dataclass(frozen=True)
class Entitlement:
    """
    A role held by a user.

    Attributes:
        role_id: The role internal id.
        is_administrator: True for the designated administrator role.
        center_type: The role's center type (``EMPLOYEE`` for Employee Center roles).
        sso_permission_level: Level of the SAML Single Sign-on permission, None if the
            role does not list the permission.
    """
    role_id: str
    is_administrator: bool = False
    center_type: str = ""
    sso_permission_level: Optional[int] = None

    @property
    def is_employee_center(self) -> bool:
        return (self.center_type or "").strip().upper() == EMPLOYEE_CENTER_TYPE


EntitlementSet = FrozenSet[Entitlement]
