import unittest
from unittest.mock import patch, MagicMock, call

from netsuite.api.suiteql_api import SuiteQLAPI


class TestSuiteQLAPI(unittest.TestCase):
    """Test cases for SuiteQL paging."""

    def setUp(self):
        """Set up test fixtures before each test method."""
        self.api = SuiteQLAPI('https://example.com/services/rest', 'query/v1', {'Authorization': 'Bearer t'})
        patch('netsuite.api.suiteql_api.logger').start()

    def tearDown(self):
        """Tear down test fixtures after each test method."""
        patch.stopall()

    def test_query_single_page(self):
        """Test a query whose rows fit on one page."""
        self.api.post = MagicMock(return_value={'items': [{'id': 1}, {'id': 2}], 'hasMore': False})

        result = self.api.query('SELECT id FROM employee')

        self.api.post.assert_called_once_with('suiteql?limit=1000&offset=0', {'q': 'SELECT id FROM employee'})
        self.assertEqual(result, [{'id': 1}, {'id': 2}])

    def test_query_follows_pages(self):
        """Test the offset advances until hasMore is false."""
        self.api.post = MagicMock(side_effect=[
            {'items': [{'id': 1}, {'id': 2}], 'hasMore': True},
            {'items': [{'id': 3}], 'hasMore': False},
        ])

        result = self.api.query('SELECT id FROM employee', limit=2)

        self.api.post.assert_has_calls([
            call('suiteql?limit=2&offset=0', {'q': 'SELECT id FROM employee'}),
            call('suiteql?limit=2&offset=2', {'q': 'SELECT id FROM employee'}),
        ])
        self.assertEqual(result, [{'id': 1}, {'id': 2}, {'id': 3}])

    def test_query_limit_is_capped(self):
        """Test page sizes above 1000 are capped."""
        self.api.post = MagicMock(return_value={'items': [], 'hasMore': False})

        self.api.query('SELECT 1', limit=5000)

        self.api.post.assert_called_once_with('suiteql?limit=1000&offset=0', {'q': 'SELECT 1'})

    def test_query_failed_page_returns_none(self):
        """Test a failure on any page fails the whole query."""
        self.api.post = MagicMock(side_effect=[
            {'items': [{'id': 1}], 'hasMore': True},
            None,
        ])

        self.assertIsNone(self.api.query('SELECT id FROM employee', limit=1))

    def test_query_one_returns_first_row(self):
        """Test query_one returns the first row."""
        self.api.post = MagicMock(return_value={'items': [{'date': '2024-01-01 10:00:00'}], 'hasMore': False})

        self.assertEqual(self.api.query_one('SELECT MAX(date)'), {'date': '2024-01-01 10:00:00'})
        self.api.post.assert_called_once_with('suiteql?limit=1&offset=0', {'q': 'SELECT MAX(date)'})

    def test_query_one_no_rows(self):
        """Test query_one returns an empty dict when nothing matches."""
        self.api.post = MagicMock(return_value={'items': [], 'hasMore': False})

        self.assertEqual(self.api.query_one('SELECT 1'), {})

    def test_query_one_failure(self):
        """Test query_one returns None on failure."""
        self.api.post = MagicMock(return_value=None)

        self.assertIsNone(self.api.query_one('SELECT 1'))


if __name__ == '__main__':
    unittest.main()
