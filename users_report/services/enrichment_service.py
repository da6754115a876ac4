import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from typing import Any, Callable, List, Sequence, TypeVar, Union

from ..exceptions import LookupFailure
from ..models.report import EnrichedUser
from ..models.user_candidate import UserCandidate
from .policy_evaluator import FULL_SSO_LEVEL, evaluate
from .staleness_classifier import classify

logger = logging.getLogger(__name__)

T = TypeVar("T")

PROVISIONING_LOOKUP = "provisioning"
LOGIN_LOOKUP = "login"
ENTITLEMENT_LOOKUP = "entitlements"


class UserEnrichmentService:
    """
    Runs the per-user lookups and verdicts for every candidate.

    Candidates are processed on a bounded thread pool. Each task only reads
    its own candidate and the (thread-safe) directory, so no locking is needed.
    A failed lookup does not fail the batch: the signal it would have produced
    is treated as absent.

    Attributes:
        directory: Object providing ``most_recent_access_grant_date``,
            ``most_recent_login_date`` and ``entitlements_for``.
        max_workers: Maximum number of users enriched at the same time.
        full_sso_level: Permission level counted as SSO compliant.
    """

    def __init__(self, directory: Any, max_workers: int = 5, full_sso_level: int = FULL_SSO_LEVEL):
        self.directory = directory
        self.max_workers = max(1, max_workers)
        self.full_sso_level = full_sso_level

    def _lookup(self, name: str, lookup: Callable[[str], T], user_id: str, default: T, failures: List[str]) -> T:
        try:
            return lookup(user_id)
        except LookupFailure as e:
            logger.warning(f"{e}. Continuing without {name} data.")
            failures.append(name)
            return default

    def enrich_user(self, candidate: UserCandidate, today: Union[date, datetime]) -> EnrichedUser:
        """
        Look up one user and compute its staleness and policy verdicts.

        Args:
            candidate: The user to enrich.
            today: The date the report is generated for.

        Returns:
            EnrichedUser
        """
        failures: List[str] = []
        user_id = candidate.user_id

        provisioned_at = self._lookup(
            PROVISIONING_LOOKUP, self.directory.most_recent_access_grant_date, user_id, None, failures
        )
        logged_in_at = self._lookup(
            LOGIN_LOOKUP, self.directory.most_recent_login_date, user_id, None, failures
        )
        entitlements = self._lookup(
            ENTITLEMENT_LOOKUP, self.directory.entitlements_for, user_id, frozenset(), failures
        )

        staleness = classify(provisioned_at, logged_in_at, today)
        policy = evaluate(entitlements, self.full_sso_level)
        logger.debug(
            f"User {user_id}: {staleness.days_inactive} days inactive ({staleness.source.value}), "
            f"{policy.license_tier.value}, note '{policy.compliance_note.value}'"
        )

        return EnrichedUser(
            candidate=candidate,
            staleness=staleness,
            policy=policy,
            lookup_failures=tuple(failures),
        )

    def enrich_all(self, candidates: Sequence[UserCandidate], today: Union[date, datetime]) -> List[EnrichedUser]:
        """
        Enrich every candidate. Results are returned in candidate order.
        """
        logger.info(f"Enriching {len(candidates)} users with up to {self.max_workers} concurrent lookups")
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(lambda candidate: self.enrich_user(candidate, today), candidates))
