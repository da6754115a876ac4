from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class AuthoritativeSource(Enum):
    """Which timestamp decided how long an account has been inactive."""
    PROVISIONING = "provisioning"
    LOGIN = "login"
    NONE = "none"


class LicenseTier(Enum):
    FULL = "Full"
    EMPLOYEE_CENTER = "Employee Center"


class ComplianceNote(Enum):
    NONE = ""
    NON_SAML = "Non-SAML"
    ADMIN = "Admin"


@dataclass(frozen=True)
class StalenessVerdict:
    days_inactive: int
    authoritative_instant: Optional[datetime]
    source: AuthoritativeSource


@dataclass(frozen=True)
class PolicyVerdict:
    license_tier: LicenseTier
    compliance_note: ComplianceNote
