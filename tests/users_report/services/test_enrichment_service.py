import unittest
from unittest.mock import patch, MagicMock
from datetime import date, datetime

from netsuite.facade.netsuite_facade import NetSuiteFacade
from users_report.exceptions import LookupFailure
from users_report.models import (
    AuthoritativeSource,
    ComplianceNote,
    Entitlement,
    LicenseTier,
    UserCandidate,
)
from users_report.services.enrichment_service import UserEnrichmentService


class TestUserEnrichmentService(unittest.TestCase):
    """Test cases for per-user enrichment."""

    def setUp(self):
        """Set up test fixtures before each test method."""
        self.today = date(2024, 6, 30)
        self.directory = MagicMock()
        self.directory.most_recent_access_grant_date.return_value = datetime(2024, 1, 1)
        self.directory.most_recent_login_date.return_value = datetime(2024, 6, 20)
        self.directory.entitlements_for.return_value = frozenset({Entitlement('1001', False, 'BASIC', 4)})
        self.logger_mock = patch('users_report.services.enrichment_service.logger').start()

        self.service = UserEnrichmentService(self.directory, max_workers=3)
        self.candidate = UserCandidate('10', 'Ann', 'Lee', 'ann@example.com')

    def tearDown(self):
        """Tear down test fixtures after each test method."""
        patch.stopall()

    def test_enrich_user(self):
        """Test all three lookups feed the verdicts."""
        enriched = self.service.enrich_user(self.candidate, self.today)

        self.directory.most_recent_access_grant_date.assert_called_once_with('10')
        self.directory.most_recent_login_date.assert_called_once_with('10')
        self.directory.entitlements_for.assert_called_once_with('10')
        self.assertEqual(enriched.candidate, self.candidate)
        self.assertEqual(enriched.staleness.source, AuthoritativeSource.LOGIN)
        self.assertEqual(enriched.staleness.days_inactive, 10)
        self.assertEqual(enriched.policy.license_tier, LicenseTier.FULL)
        self.assertEqual(enriched.policy.compliance_note, ComplianceNote.NONE)
        self.assertEqual(enriched.lookup_failures, ())

    def test_login_lookup_failure_degrades(self):
        """Test a failed login lookup falls back to the provisioning date."""
        self.directory.most_recent_login_date.side_effect = LookupFailure('login', '10')

        enriched = self.service.enrich_user(self.candidate, self.today)

        self.assertEqual(enriched.staleness.source, AuthoritativeSource.PROVISIONING)
        self.assertEqual(enriched.lookup_failures, ('login',))
        self.logger_mock.warning.assert_called_once()

    def test_entitlement_lookup_failure_degrades(self):
        """Test a failed entitlement lookup evaluates an empty role set."""
        self.directory.entitlements_for.side_effect = LookupFailure('entitlements', '10')

        enriched = self.service.enrich_user(self.candidate, self.today)

        self.assertEqual(enriched.policy.license_tier, LicenseTier.EMPLOYEE_CENTER)
        self.assertEqual(enriched.policy.compliance_note, ComplianceNote.NONE)
        self.assertEqual(enriched.lookup_failures, ('entitlements',))

    def test_all_lookups_fail(self):
        """Test a user whose lookups all fail is still enriched."""
        self.directory.most_recent_access_grant_date.side_effect = LookupFailure('provisioning', '10')
        self.directory.most_recent_login_date.side_effect = LookupFailure('login', '10')
        self.directory.entitlements_for.side_effect = LookupFailure('entitlements', '10')

        enriched = self.service.enrich_user(self.candidate, self.today)

        self.assertEqual(enriched.staleness.days_inactive, 0)
        self.assertEqual(enriched.staleness.source, AuthoritativeSource.NONE)
        self.assertEqual(enriched.lookup_failures, ('provisioning', 'login', 'entitlements'))

    def test_unexpected_errors_propagate(self):
        """Test only LookupFailure is absorbed."""
        self.directory.entitlements_for.side_effect = RuntimeError('bug')

        with self.assertRaises(RuntimeError):
            self.service.enrich_user(self.candidate, self.today)

    def test_enrich_all_preserves_order(self):
        """Test results come back in candidate order."""
        candidates = [UserCandidate(str(i), 'User', str(i)) for i in range(20)]

        results = self.service.enrich_all(candidates, self.today)

        self.assertEqual([result.candidate for result in results], candidates)

    def test_max_workers_at_least_one(self):
        """Test a non-positive worker count is raised to one."""
        self.assertEqual(UserEnrichmentService(self.directory, max_workers=0).max_workers, 1)


class TestEnrichmentWithNetSuiteFacade(unittest.TestCase):
    """Test cases for enrichment over the NetSuite facade with mocked API clients."""

    def setUp(self):
        """Set up test fixtures before each test method."""
        self.mock_employee_api = patch('netsuite.facade.netsuite_facade.EmployeeAPI').start()
        self.mock_login_audit_api = patch('netsuite.facade.netsuite_facade.LoginAuditAPI').start()
        self.mock_role_api = patch('netsuite.facade.netsuite_facade.RoleAPI').start()
        patch('users_report.services.enrichment_service.logger').start()

        self.facade = NetSuiteFacade('1234567', 'test_token')
        self.facade.employees.get_access_granted_date.return_value = {'date': '2024-01-01 00:00:00'}
        self.facade.roles.get_employee_roles.return_value = [{'roleid': 1001, 'centertype': 'BASIC', 'ssolevel': '4'}]

    def tearDown(self):
        """Tear down test fixtures after each test method."""
        patch.stopall()

    def test_unexpected_result_for_one_user_does_not_abort_batch(self):
        """Test a malformed response for one user degrades only that user's signal."""
        def last_login(user_id):
            if user_id == '2':
                return [{'date': '2024-06-20 00:00:00'}]
            return {'date': '2024-06-20 00:00:00'}
        self.facade.login_audit.get_last_login_date.side_effect = last_login

        candidates = [UserCandidate('1', 'Ann', 'Lee'), UserCandidate('2', 'Bo', 'Chan')]
        results = UserEnrichmentService(self.facade, max_workers=2).enrich_all(candidates, date(2024, 6, 30))

        self.assertEqual([result.candidate.user_id for result in results], ['1', '2'])
        self.assertEqual(results[0].lookup_failures, ())
        self.assertEqual(results[0].staleness.days_inactive, 10)
        self.assertEqual(results[1].lookup_failures, ('login',))
        self.assertEqual(results[1].staleness.source, AuthoritativeSource.PROVISIONING)


if __name__ == '__main__':
    unittest.main()
