from typing import Iterable

from ..models.entitlement import Entitlement
from ..models.verdicts import ComplianceNote, LicenseTier, PolicyVerdict

# Permission level NetSuite calls "Full".
FULL_SSO_LEVEL = 4


def is_sso_compliant(entitlement: Entitlement, full_sso_level: int = FULL_SSO_LEVEL) -> bool:
    """A role is SSO compliant only if it lists the SAML permission at full level."""
    return entitlement.sso_permission_level is not None and entitlement.sso_permission_level == full_sso_level


def evaluate(entitlements: Iterable[Entitlement], full_sso_level: int = FULL_SSO_LEVEL) -> PolicyVerdict:
    """
    Derive the license tier and compliance note from every role a user holds.

    The result does not depend on the order of the roles:

    - Any role outside the Employee Center makes the license Full. A user
      with no roles at all is reported as Employee Center.
    - Holding the administrator role gives the note ``Admin`` regardless of
      SSO settings, otherwise any non-compliant role gives ``Non-SAML``.

    Args:
        entitlements: The user's roles.
        full_sso_level: The permission level that counts as compliant.

    Returns:
        PolicyVerdict
    """
    roles = list(entitlements)

    if any(not role.is_employee_center for role in roles):
        license_tier = LicenseTier.FULL
    else:
        license_tier = LicenseTier.EMPLOYEE_CENTER

    if any(role.is_administrator for role in roles):
        compliance_note = ComplianceNote.ADMIN
    elif any(not is_sso_compliant(role, full_sso_level) for role in roles):
        compliance_note = ComplianceNote.NON_SAML
    else:
        compliance_note = ComplianceNote.NONE

    return PolicyVerdict(license_tier=license_tier, compliance_note=compliance_note)
