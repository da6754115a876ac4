from ..api.netsuite_api import create_headers, account_base_url
from ..api.employee_api import EmployeeAPI
from ..api.login_audit_api import LoginAuditAPI
from ..api.role_api import RoleAPI
from users_report.exceptions import DirectorySourceError, LookupFailure
from users_report.models import Entitlement, EntitlementSet, UserCandidate
from users_report.services.timestamps import parse_timestamp
import functools
import logging
from datetime import datetime
from typing import List, Optional

logger = logging.getLogger(__name__)

QUERY_SERVICE = "query/v1"
# Normally the "Administrator" role has an internal id of 3.
ADMINISTRATOR_ROLE_ID = "3"


def lookup(name):
    """Decorator that reports any error of a per-user lookup as LookupFailure."""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, user_id, *args, **kwargs):
            try:
                return func(self, user_id, *args, **kwargs)
            except LookupFailure:
                raise
            except Exception as e:
                raise LookupFailure(name, user_id, f"{name} lookup failed for user {user_id}: {str(e)}") from e
        return wrapper
    return decorator


class NetSuiteFacade:
    def __init__(self, account_id, access_token, base_url=None, admin_role_id=ADMINISTRATOR_ROLE_ID, timeout=60):
        headers = create_headers(access_token)
        self.account_id = str(account_id)
        self.base_url = base_url or account_base_url(self.account_id)
        self.admin_role_id = str(admin_role_id)
        self.employees = EmployeeAPI(self.base_url, QUERY_SERVICE, headers, timeout=timeout)
        self.login_audit = LoginAuditAPI(self.base_url, QUERY_SERVICE, headers, timeout=timeout)
        self.roles = RoleAPI(self.base_url, QUERY_SERVICE, headers, timeout=timeout)

    def is_production_account(self) -> bool:
        """
        Production account ids are plain numbers. Sandbox and release preview
        accounts carry a suffix such as ``1234567_SB1``.
        """
        return self.account_id.strip().isdigit()

    def list_eligible_users(self) -> List[UserCandidate]:
        """
        Gets every employee with NetSuite access as report candidates.

        Raises:
            DirectorySourceError: If the employee list could not be retrieved.
        """
        rows = self.employees.get_employees_with_access()
        if rows is None:
            raise DirectorySourceError("Could not retrieve employees with NetSuite access")

        candidates = [
            UserCandidate(
                user_id=str(row.get("id")),
                first_name=row.get("firstname") or "",
                last_name=row.get("lastname") or "",
                email=row.get("email") or "",
            )
            for row in rows
            if row.get("id") is not None
        ]
        logger.info(f"Found {len(candidates)} employees with NetSuite access")
        return candidates

    @lookup("provisioning")
    def most_recent_access_grant_date(self, user_id) -> Optional[datetime]:
        """
        Gets when the user's access was most recently granted.

        Returns:
            datetime: The date access was granted, or None if it is not recorded.

        Raises:
            LookupFailure: If the request failed or returned an unexpected result.
        """
        row = self.employees.get_access_granted_date(user_id)
        if row is None:
            raise LookupFailure("provisioning", user_id)
        return parse_timestamp(row.get("date"))

    @lookup("login")
    def most_recent_login_date(self, user_id) -> Optional[datetime]:
        """
        Gets when the user last logged in successfully.

        Returns:
            datetime: The date of the last login, or None if the user never logged in.

        Raises:
            LookupFailure: If the request failed or returned an unexpected result.
        """
        row = self.login_audit.get_last_login_date(user_id)
        if row is None:
            raise LookupFailure("login", user_id)
        return parse_timestamp(row.get("date"))

    @lookup("entitlements")
    def entitlements_for(self, user_id) -> EntitlementSet:
        """
        Gets the roles assigned to a user.

        Raises:
            LookupFailure: If the request failed or returned an unexpected result.
        """
        rows = self.roles.get_employee_roles(user_id)
        if rows is None:
            raise LookupFailure("entitlements", user_id)

        entitlements = set()
        for row in rows:
            role_id = str(row.get("roleid"))
            entitlements.add(Entitlement(
                role_id=role_id,
                is_administrator=role_id == self.admin_role_id,
                center_type=row.get("centertype") or "",
                sso_permission_level=self._permission_level(row.get("ssolevel")),
            ))
        return frozenset(entitlements)

    @staticmethod
    def _permission_level(value) -> Optional[int]:
        if value is None or value == "":
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning(f"Unexpected permission level {value!r}; treating the permission as missing")
            return None
