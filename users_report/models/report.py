from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Tuple

from .user_candidate import UserCandidate
from .verdicts import ComplianceNote, LicenseTier, PolicyVerdict, StalenessVerdict

REMOVAL_NOTE = "Removing Access"
NOTES_SEPARATOR = " / "


@dataclass(frozen=True)
class EnrichedUser:
    """A candidate together with the verdicts computed from its lookups."""
    candidate: UserCandidate
    staleness: StalenessVerdict
    policy: PolicyVerdict
    lookup_failures: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ReportRow:
    user_id: str
    display_name: str
    email: str
    license_tier: LicenseTier
    authoritative_date_display: str
    days_inactive: int
    compliance_note: ComplianceNote = ComplianceNote.NONE
    removal_recommendation: bool = False

    @property
    def notes(self) -> str:
        """Text of the Notes column: the removal flag and the compliance note."""
        parts = []
        if self.removal_recommendation:
            parts.append(REMOVAL_NOTE)
        if self.compliance_note.value:
            parts.append(self.compliance_note.value)
        return NOTES_SEPARATOR.join(parts)


@dataclass(frozen=True)
class AggregationResult:
    rows: Tuple[ReportRow, ...]
    dropped_user_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Report:
    generated_date: date
    rows: Tuple[ReportRow, ...]
    csv_text: str
    html_fragment: str
    file_name: str


@dataclass(frozen=True)
class StoredArtifact:
    """A persisted report file; ``artifact_id`` is whatever the storage backend uses."""
    artifact_id: str
    file_name: str
    mime_type: str
    contents: str


class RunStatus(Enum):
    COMPLETED = "completed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class RunResult:
    status: RunStatus
    report: Optional[Report] = None
    artifact: Optional[StoredArtifact] = None
    notification_sent: bool = False
    dropped_count: int = 0
    lookup_failure_count: int = 0
