from datetime import date, datetime, timedelta
from typing import Any, Union

from ..models.verdicts import AuthoritativeSource, StalenessVerdict
from .timestamps import parse_timestamp


def days_between(instant: datetime, today: Union[date, datetime]) -> int:
    """
    Whole days elapsed between a timestamp and today, never negative.

    The elapsed time is floored, so 90 days and 2 hours counts as 90. A plain
    ``date`` for today is taken as midnight.
    """
    if not isinstance(today, datetime):
        today = datetime(today.year, today.month, today.day)
    return abs(today - instant) // timedelta(days=1)


def classify(provisioning: Any, login: Any, today: Union[date, datetime], dayfirst: bool = False) -> StalenessVerdict:
    """
    Decide how long an account has been inactive.

    The later of the access-granted date and the last login date is
    authoritative. On a tie the login wins. Missing or malformed values are
    treated as absent; with neither present the account counts as 0 days
    inactive.

    Args:
        provisioning: When access was last granted (raw value or datetime).
        login: When the user last logged in (raw value or datetime).
        today: The date the report is generated for.
        dayfirst: Passed to the timestamp parser for ambiguous string dates.

    Returns:
        StalenessVerdict
    """
    provisioned_at = parse_timestamp(provisioning, dayfirst=dayfirst)
    logged_in_at = parse_timestamp(login, dayfirst=dayfirst)

    if provisioned_at is None and logged_in_at is None:
        return StalenessVerdict(
            days_inactive=0,
            authoritative_instant=None,
            source=AuthoritativeSource.NONE,
        )

    if logged_in_at is not None and (provisioned_at is None or logged_in_at >= provisioned_at):
        instant, source = logged_in_at, AuthoritativeSource.LOGIN
    else:
        instant, source = provisioned_at, AuthoritativeSource.PROVISIONING

    return StalenessVerdict(
        days_inactive=days_between(instant, today),
        authoritative_instant=instant,
        source=source,
    )
