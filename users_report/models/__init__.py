from .user_candidate import UserCandidate
from .entitlement import Entitlement, EntitlementSet, EMPLOYEE_CENTER_TYPE
from .verdicts import (
    AuthoritativeSource,
    ComplianceNote,
    LicenseTier,
    PolicyVerdict,
    StalenessVerdict,
)
from .report import (
    AggregationResult,
    EnrichedUser,
    Report,
    ReportRow,
    RunResult,
    RunStatus,
    StoredArtifact,
)

__all__ = [
    'UserCandidate',
    'Entitlement',
    'EntitlementSet',
    'EMPLOYEE_CENTER_TYPE',
    'AuthoritativeSource',
    'ComplianceNote',
    'LicenseTier',
    'PolicyVerdict',
    'StalenessVerdict',
    'AggregationResult',
    'EnrichedUser',
    'Report',
    'ReportRow',
    'RunResult',
    'RunStatus',
    'StoredArtifact',
]
