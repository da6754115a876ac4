from .suiteql_api import SuiteQLAPI
from typing import Dict, List, Any, Optional

# Permission key of "SAML Single Sign-on".
SAML_SSO_PERMISSION = "ADMI_SAMLSSO"


class RoleAPI(SuiteQLAPI):
    def get_employee_roles(self, employee_id: int) -> Optional[List[Dict[str, Any]]]:
        """
        Gets every role assigned to an employee together with the role's
        center type and its SAML Single Sign-on permission level.

        Args:
            employee_id: The employee internal id.

        Returns:
            Rows with ``roleid``, ``centertype`` and ``ssolevel``. ``ssolevel``
            is None when the role does not list the permission at all.
        """
        sql = (
            "SELECT er.role AS roleid, r.centertype AS centertype, rp.permlevel AS ssolevel "
            "FROM employeerolesforsearch er "
            "JOIN role r ON r.id = er.role "
            "LEFT JOIN rolepermissions rp "
            f"ON rp.role = er.role AND rp.permkey = '{SAML_SSO_PERMISSION}' "
            f"WHERE er.entity = {int(employee_id)} "
            "ORDER BY er.role"
        )
        return self.query(sql)

