import logging
import time
from typing import Any, Dict, List, Optional, Union

import requests
from requests.exceptions import ConnectionError, JSONDecodeError, Timeout

# Set up logging
logger = logging.getLogger(__name__)


def create_headers(access_token: str) -> Dict[str, str]:
    """
    Create HTTP headers for NetSuite REST web services requests.

    Args:
        access_token (str): The OAuth 2.0 access token for authentication.

    Returns:
        Dict[str, str]: A dictionary containing the required HTTP headers.
    """
    return {
        "Authorization": f"Bearer {access_token}",
        "Content-Type": "application/json",
        "Prefer": "transient",
    }


def account_base_url(account_id: str) -> str:
    """
    Build the REST web services base URL for a NetSuite account.

    Sandbox account ids such as ``1234567_SB1`` are written with a dash and in
    lower case in the host name (``1234567-sb1``).

    Args:
        account_id (str): The NetSuite account id.

    Returns:
        str: The base URL, e.g. ``https://1234567.suitetalk.api.netsuite.com/services/rest``.
    """
    host = account_id.strip().lower().replace("_", "-")
    return f"https://{host}.suitetalk.api.netsuite.com/services/rest"


class NetSuiteAPI:
    """
    Base class for interacting with the NetSuite REST web services.

    This class provides methods for making HTTP requests to a NetSuite REST
    service (for example ``query/v1``) and handling responses.

    Attributes:
        base_url (str): The REST base URL for the NetSuite account.
        service (str): The service path appended to the base URL.
        headers (Dict[str, str]): HTTP headers to use for API requests.
        timeout (int): Seconds to wait for the server before giving up.
    """

    def __init__(self, base_url: str, service: str, headers: Dict[str, str], timeout: int = 60):
        """
        Initialize the NetSuite API client.

        Args:
            base_url (str): The REST base URL for the NetSuite account.
            service (str): The service path, e.g. ``query/v1``.
            headers (Dict[str, str]): HTTP headers to use for API requests.
            timeout (int): Request timeout in seconds (default: 60).
        """
        self.base_url = base_url.rstrip("/")
        self.service = service
        self.headers = headers
        self.timeout = timeout

    def _url(self, url_suffix: str) -> str:
        return f"{self.base_url}/{self.service}/{url_suffix}"

    def get(
        self, url_suffix: str, max_retries: int = 3
    ) -> Optional[Union[Dict[str, Any], List[Dict[str, Any]]]]:
        """
        Perform a GET request to the specified NetSuite endpoint.

        Args:
            url_suffix (str): The endpoint path to append to the service URL.
            max_retries (int): Maximum number of attempts for transient errors (default: 3).

        Returns:
            Optional[Union[Dict[str, Any], List[Dict[str, Any]]]]: The JSON response
            if successful, None otherwise.
        """
        return self._request("get", url_suffix, max_retries=max_retries)

    def post(
        self, url_suffix: str, data: Optional[Any] = None, max_retries: int = 3
    ) -> Optional[Union[Dict[str, Any], List[Dict[str, Any]]]]:
        """
        Perform a POST request to the specified NetSuite endpoint.

        SuiteQL queries are read-only, so POSTs are retried like GETs.

        Args:
            url_suffix (str): The endpoint path to append to the service URL.
            data (Optional[Any]): Data to be sent in the request body as JSON.
            max_retries (int): Maximum number of attempts for transient errors (default: 3).

        Returns:
            Optional[Union[Dict[str, Any], List[Dict[str, Any]]]]: The JSON response
            if successful, None otherwise.
        """
        return self._request("post", url_suffix, data=data, max_retries=max_retries)

    def _request(
        self,
        method: str,
        url_suffix: str,
        data: Optional[Any] = None,
        max_retries: int = 3,
    ) -> Optional[Union[Dict[str, Any], List[Dict[str, Any]]]]:
        """
        Send a request, retrying connection resets, timeouts and rate limiting.

        Notes:
            Backoff is exponential (1s, 2s, 4s...) for connection problems and
            follows the ``Retry-After`` header for HTTP 429.
        """
        url = self._url(url_suffix)

        for attempt in range(max_retries):
            try:
                if method == "get":
                    response = requests.get(url, headers=self.headers, timeout=self.timeout)
                else:
                    response = requests.post(url, json=data, headers=self.headers, timeout=self.timeout)
            except (ConnectionError, ConnectionResetError, Timeout) as e:
                if attempt < max_retries - 1:
                    backoff_time = 2**attempt
                    logger.warning(
                        f"Connection problem on attempt {attempt + 1}/{max_retries}. "
                        f"Retrying in {backoff_time}s... (URL: {url_suffix[:50]}...)"
                    )
                    time.sleep(backoff_time)
                    continue
                logger.error(
                    f"Connection error after {attempt + 1} attempts: {str(e)} "
                    f"(URL: {url_suffix[:50]}...)"
                )
                return None
            except Exception as e:
                logger.exception(f"Exception occurred during {method.upper()} request: {str(e)}")
                return None

            if response.status_code == 429:
                if attempt < max_retries - 1:
                    sleep_time = self._retry_after(response)
                    logger.info(f"Rate limit exceeded. Sleeping for {sleep_time} seconds.")
                    time.sleep(sleep_time)
                    continue
                logger.error(f"Rate limit still exceeded after {max_retries} attempts (URL: {url_suffix[:50]}...)")
                return None

            return self._handle_response(response)

        return None

    @staticmethod
    def _retry_after(response: requests.Response) -> float:
        retry_after = response.headers.get("Retry-After")
        try:
            sleep_time = float(retry_after)
        except (TypeError, ValueError):
            logger.warning("Rate limit exceeded but no usable Retry-After header provided.")
            return 5
        if sleep_time < 0:
            logger.warning(f"Negative Retry-After ({sleep_time}s). Using 5s instead.")
            return 5
        return sleep_time

    def _handle_response(
        self, response: requests.Response
    ) -> Optional[Union[Dict[str, Any], List[Dict[str, Any]]]]:
        """
        Handle the HTTP response from NetSuite.

        Args:
            response (requests.Response): The HTTP response object.

        Returns:
            Optional[Union[Dict[str, Any], List[Dict[str, Any]]]]: The JSON response
            if successful, None otherwise.
        """
        if response.status_code in (200, 201):
            logger.debug(f"{response.status_code} | Successful Request!")
            try:
                return response.json()
            except JSONDecodeError:
                logger.error("Response body was not valid JSON")
                return None
        if response.status_code == 204:
            logger.debug(f"{response.status_code} | No Content")
            return {}

        logger.error(f"Request failed: {response.status_code}")
        logger.error(f"Response text: {response.text}")
        return None
