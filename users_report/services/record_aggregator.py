import logging
from typing import Dict, Iterable, List, Optional

from ..models.report import AggregationResult, EnrichedUser, ReportRow
from ..models.user_candidate import UserCandidate
from ..models.verdicts import PolicyVerdict, StalenessVerdict
from .timestamps import format_date

logger = logging.getLogger(__name__)

DEFAULT_INACTIVITY_THRESHOLD_DAYS = 90


def aggregate(
    candidate: UserCandidate,
    verdict: StalenessVerdict,
    policy: PolicyVerdict,
    inactivity_threshold_days: int = DEFAULT_INACTIVITY_THRESHOLD_DAYS,
) -> Optional[ReportRow]:
    """
    Combine a candidate and its verdicts into one report row.

    Returns:
        The ReportRow, or None when the candidate has no usable name.
    """
    display_name = candidate.display_name
    if display_name is None:
        return None

    return ReportRow(
        user_id=str(candidate.user_id),
        display_name=display_name,
        email=(candidate.email or "").strip(),
        license_tier=policy.license_tier,
        authoritative_date_display=format_date(verdict.authoritative_instant),
        days_inactive=verdict.days_inactive,
        compliance_note=policy.compliance_note,
        removal_recommendation=verdict.days_inactive > inactivity_threshold_days,
    )


def aggregate_all(
    enriched_users: Iterable[EnrichedUser],
    inactivity_threshold_days: int = DEFAULT_INACTIVITY_THRESHOLD_DAYS,
) -> AggregationResult:
    """
    Build one row per distinct user id. A repeated id replaces the earlier row.
    """
    rows_by_id: Dict[str, ReportRow] = {}
    dropped: List[str] = []

    for enriched in enriched_users:
        candidate = enriched.candidate
        row = aggregate(candidate, enriched.staleness, enriched.policy, inactivity_threshold_days)
        if row is None:
            logger.info(f"Skipping user {candidate.user_id}: first or last name is missing")
            dropped.append(str(candidate.user_id))
            continue

        if row.user_id in rows_by_id:
            logger.warning(f"User {row.user_id} was seen more than once; keeping the latest result")
        rows_by_id[row.user_id] = row

    if dropped:
        logger.info(f"Dropped {len(dropped)} users without a usable name")

    return AggregationResult(rows=tuple(rows_by_id.values()), dropped_user_ids=tuple(dropped))
