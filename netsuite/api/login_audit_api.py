from .suiteql_api import SuiteQLAPI, DATETIME_FORMAT
from typing import Dict, Any, Optional


class LoginAuditAPI(SuiteQLAPI):
    def get_last_login_date(self, employee_id: int, successful_only: bool = True) -> Optional[Dict[str, Any]]:
        """
        Gets the most recent login audit trail entry for a user.

        The login audit trail is not exposed as a record, so it is read through
        the ``loginaudit`` SuiteQL table.

        Args:
            employee_id: The employee internal id.
            successful_only: Ignore failed login attempts.

        Returns:
            A row with a ``date`` key, an empty dict when nothing matches, or
            None on failure.
        """
        sql = (
            f"SELECT TO_CHAR(MAX(la.date), '{DATETIME_FORMAT}') AS date "
            "FROM loginaudit la "
            f"WHERE la.user = {int(employee_id)}"
        )
        if successful_only:
            sql += " AND la.status = 'Success'"
        return self.query_one(sql)
