from .suiteql_api import SuiteQLAPI, DATETIME_FORMAT
from typing import Dict, List, Any, Optional

# System note field that records changes to an employee's "Give Access" box.
ACCESS_FIELD = "ENTITY.BHASACCESS"
# Record type id of the employee record in system notes.
EMPLOYEE_RECORD_TYPE_ID = -4


class EmployeeAPI(SuiteQLAPI):
    def get_employees_with_access(self) -> Optional[List[Dict[str, Any]]]:
        """
        Gets every active employee that has NetSuite login access.

        Returns:
            Rows with ``id``, ``firstname``, ``lastname`` and ``email``, sorted by id.
        """
        sql = (
            "SELECT e.id, e.firstname, e.lastname, e.email "
            "FROM employee e "
            "WHERE e.giveaccess = 'T' AND e.isinactive = 'F' "
            "ORDER BY e.id"
        )
        return self.query(sql)

    def get_access_granted_date(self, employee_id: int) -> Optional[Dict[str, Any]]:
        """
        Gets the most recent date the employee's access was switched on.

        Args:
            employee_id: The employee internal id.

        Returns:
            A row with a ``date`` key (None when access was never recorded as
            granted), an empty dict when nothing matches, or None on failure.
        """
        sql = (
            f"SELECT TO_CHAR(MAX(sn.date), '{DATETIME_FORMAT}') AS date "
            "FROM systemnote sn "
            f"WHERE sn.recordtypeid = {EMPLOYEE_RECORD_TYPE_ID} "
            f"AND sn.recordid = {int(employee_id)} "
            f"AND sn.field = '{ACCESS_FIELD}' "
            "AND sn.newvalue = 'T'"
        )
        return self.query_one(sql)
