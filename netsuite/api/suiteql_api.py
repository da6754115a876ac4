import logging
from typing import Any, Dict, List, Optional

from .netsuite_api import NetSuiteAPI

logger = logging.getLogger(__name__)

# SuiteQL returns at most 1000 rows per page.
MAX_PAGE_SIZE = 1000

# Date columns are requested in this layout so they parse without knowing the
# account's date format preference.
DATETIME_FORMAT = "YYYY-MM-DD HH24:MI:SS"


class SuiteQLAPI(NetSuiteAPI):
    def query(self, sql: str, limit: int = MAX_PAGE_SIZE) -> Optional[List[Dict[str, Any]]]:
        """
        Runs a SuiteQL query and returns every row, following the paging links.

        Args:
            sql: The SuiteQL statement.
            limit: Rows per page (1-1000).

        Returns:
            The list of result rows, or None if any page could not be retrieved.
        """
        limit = max(1, min(limit, MAX_PAGE_SIZE))
        items: List[Dict[str, Any]] = []
        offset = 0

        while True:
            page = self.post(f"suiteql?limit={limit}&offset={offset}", {"q": sql})
            if page is None:
                logger.error(f"SuiteQL query failed at offset {offset}: {sql[:80]}")
                return None

            page_items = page.get("items", [])
            items.extend(page_items)

            if not page.get("hasMore") or not page_items:
                break
            offset += len(page_items)

        logger.debug(f"SuiteQL returned {len(items)} rows")
        return items

    def query_one(self, sql: str) -> Optional[Dict[str, Any]]:
        """
        Runs a SuiteQL query that is expected to return a single row.

        Returns:
            The first row, an empty dict when no rows match, or None on failure.
        """
        page = self.post("suiteql?limit=1&offset=0", {"q": sql})
        if page is None:
            logger.error(f"SuiteQL query failed: {sql[:80]}")
            return None
        rows = page.get("items", [])
        return rows[0] if rows else {}
