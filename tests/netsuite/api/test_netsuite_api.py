import unittest
from unittest.mock import patch, Mock, call

import requests

from netsuite.api.netsuite_api import NetSuiteAPI, create_headers, account_base_url


class TestNetSuiteAPI(unittest.TestCase):
    """Test cases for the NetSuiteAPI base class."""

    def setUp(self):
        """Set up test environment before each test."""
        self.base_url = 'https://1234567.suitetalk.api.netsuite.com/services/rest'
        self.service = 'query/v1'
        self.headers = {'Authorization': 'Bearer test_token', 'Content-Type': 'application/json', 'Prefer': 'transient'}

        # Setup logging capture and skip real sleeping
        self.logger_mock = patch('netsuite.api.netsuite_api.logger').start()
        self.sleep_mock = patch('netsuite.api.netsuite_api.time.sleep').start()

        self.api = NetSuiteAPI(self.base_url, self.service, self.headers, timeout=30)

    def tearDown(self):
        """Clean up after each test."""
        patch.stopall()

    def _response(self, status_code, json_data=None, headers=None):
        response = Mock()
        response.status_code = status_code
        response.json.return_value = json_data
        response.headers = headers or {}
        response.text = str(json_data)
        return response

    # ----- Helper Tests -----

    def test_create_headers(self):
        """Test the create_headers function creates bearer and transient headers."""
        headers = create_headers('abc')
        self.assertEqual(headers, {
            'Authorization': 'Bearer abc',
            'Content-Type': 'application/json',
            'Prefer': 'transient',
        })

    def test_account_base_url_production(self):
        """Test the REST base URL for a production account."""
        self.assertEqual(
            account_base_url('1234567'),
            'https://1234567.suitetalk.api.netsuite.com/services/rest'
        )

    def test_account_base_url_sandbox(self):
        """Test sandbox account ids are lower-cased and dashed in the host name."""
        self.assertEqual(
            account_base_url('1234567_SB1'),
            'https://1234567-sb1.suitetalk.api.netsuite.com/services/rest'
        )

    def test_initialization_strips_trailing_slash(self):
        """Test the base URL is stored without a trailing slash."""
        api = NetSuiteAPI(self.base_url + '/', self.service, self.headers)
        self.assertEqual(api.base_url, self.base_url)
        self.assertEqual(api.service, self.service)
        self.assertEqual(api.timeout, 60)

    # ----- Request Tests -----

    @patch('netsuite.api.netsuite_api.requests.get')
    def test_get_success(self, mock_get):
        """Test successful GET request."""
        mock_get.return_value = self._response(200, {'items': []})

        result = self.api.get('suiteql')

        mock_get.assert_called_once_with(
            f'{self.base_url}/query/v1/suiteql',
            headers=self.headers,
            timeout=30
        )
        self.assertEqual(result, {'items': []})

    @patch('netsuite.api.netsuite_api.requests.post')
    def test_post_success(self, mock_post):
        """Test successful POST request sends JSON."""
        mock_post.return_value = self._response(200, {'items': [{'id': 1}]})

        result = self.api.post('suiteql?limit=5&offset=0', {'q': 'SELECT 1'})

        mock_post.assert_called_once_with(
            f'{self.base_url}/query/v1/suiteql?limit=5&offset=0',
            json={'q': 'SELECT 1'},
            headers=self.headers,
            timeout=30
        )
        self.assertEqual(result, {'items': [{'id': 1}]})

    @patch('netsuite.api.netsuite_api.requests.post')
    def test_no_content_returns_empty_dict(self, mock_post):
        """Test a 204 response is a success with an empty body."""
        mock_post.return_value = self._response(204)

        self.assertEqual(self.api.post('suiteql', {}), {})

    @patch('netsuite.api.netsuite_api.requests.get')
    def test_error_status_returns_none(self, mock_get):
        """Test a failed request returns None and logs the error."""
        mock_get.return_value = self._response(401, {'title': 'Unauthorized'})

        result = self.api.get('suiteql')

        self.assertIsNone(result)
        self.logger_mock.error.assert_any_call('Request failed: 401')

    @patch('netsuite.api.netsuite_api.requests.get')
    def test_invalid_json_returns_none(self, mock_get):
        """Test a 200 response with an unparsable body returns None."""
        response = self._response(200)
        response.json.side_effect = requests.exceptions.JSONDecodeError('bad', 'doc', 0)
        mock_get.return_value = response

        self.assertIsNone(self.api.get('suiteql'))

    # ----- Retry Tests -----

    @patch('netsuite.api.netsuite_api.requests.get')
    def test_connection_error_is_retried(self, mock_get):
        """Test connection errors are retried with exponential backoff."""
        mock_get.side_effect = [
            requests.exceptions.ConnectionError('Connection reset by peer'),
            requests.exceptions.ConnectionError('Connection reset by peer'),
            self._response(200, {'ok': True}),
        ]

        result = self.api.get('suiteql')

        self.assertEqual(result, {'ok': True})
        self.assertEqual(mock_get.call_count, 3)
        self.sleep_mock.assert_has_calls([call(1), call(2)])

    @patch('netsuite.api.netsuite_api.requests.post')
    def test_timeout_gives_up_after_max_retries(self, mock_post):
        """Test a request that keeps timing out returns None after the last attempt."""
        mock_post.side_effect = requests.exceptions.Timeout('timed out')

        result = self.api.post('suiteql', {'q': 'SELECT 1'}, max_retries=2)

        self.assertIsNone(result)
        self.assertEqual(mock_post.call_count, 2)
        self.sleep_mock.assert_called_once_with(1)

    @patch('netsuite.api.netsuite_api.requests.post')
    def test_rate_limit_uses_retry_after(self, mock_post):
        """Test HTTP 429 sleeps for Retry-After seconds and retries."""
        mock_post.side_effect = [
            self._response(429, headers={'Retry-After': '7'}),
            self._response(200, {'items': []}),
        ]

        result = self.api.post('suiteql', {'q': 'SELECT 1'})

        self.assertEqual(result, {'items': []})
        self.sleep_mock.assert_called_once_with(7.0)

    @patch('netsuite.api.netsuite_api.requests.post')
    def test_rate_limit_without_header_uses_default(self, mock_post):
        """Test HTTP 429 without Retry-After falls back to 5 seconds."""
        mock_post.side_effect = [
            self._response(429),
            self._response(200, {'items': []}),
        ]

        self.api.post('suiteql', {'q': 'SELECT 1'})

        self.sleep_mock.assert_called_once_with(5)

    @patch('netsuite.api.netsuite_api.requests.post')
    def test_rate_limit_exhausted_returns_none(self, mock_post):
        """Test repeated HTTP 429 responses give up after max retries."""
        mock_post.return_value = self._response(429, headers={'Retry-After': '1'})

        result = self.api.post('suiteql', {'q': 'SELECT 1'}, max_retries=3)

        self.assertIsNone(result)
        self.assertEqual(mock_post.call_count, 3)

    @patch('netsuite.api.netsuite_api.requests.get')
    def test_unexpected_exception_returns_none(self, mock_get):
        """Test unexpected exceptions are logged and not retried."""
        mock_get.side_effect = ValueError('boom')

        self.assertIsNone(self.api.get('suiteql'))
        self.assertEqual(mock_get.call_count, 1)
        self.logger_mock.exception.assert_called_once()


if __name__ == '__main__':
    unittest.main()
