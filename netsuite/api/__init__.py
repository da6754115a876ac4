from .netsuite_api import NetSuiteAPI, create_headers, account_base_url
from .suiteql_api import SuiteQLAPI
from .employee_api import EmployeeAPI
from .login_audit_api import LoginAuditAPI
from .role_api import RoleAPI

__all__ = [
    'NetSuiteAPI',
    'create_headers',
    'account_base_url',
    'SuiteQLAPI',
    'EmployeeAPI',
    'LoginAuditAPI',
    'RoleAPI'
]
