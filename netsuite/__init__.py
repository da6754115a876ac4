from .api.netsuite_api import NetSuiteAPI, create_headers, account_base_url
from .facade.netsuite_facade import NetSuiteFacade

__all__ = [
        "NetSuiteAPI",
        "create_headers",
        "account_base_url",
        "NetSuiteFacade"
]
