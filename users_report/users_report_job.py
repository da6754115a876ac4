"""
Users report job.

Finds every employee with NetSuite access, works out how long each account
has been inactive and whether its roles are Full or Employee Center licenses
and SSO compliant, stores the CSV report and emails an HTML summary. Accounts
inactive for more than the threshold are flagged for access removal; nothing
is changed in NetSuite.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, Optional, Union

from .config import validate_config
from .delivery.base_storage_adapter import BaseStorageAdapter, CSV_MIME_TYPE
from .delivery.drive_storage_adapter import GoogleDriveStorageAdapter
from .delivery.email_notifier import EmailNotifier
from .delivery.local_storage_adapter import LocalStorageAdapter
from .models.report import RunResult, RunStatus
from .services.enrichment_service import UserEnrichmentService
from .services.record_aggregator import aggregate_all
from .services.report_builder import build, build_email_body

logger = logging.getLogger(__name__)

JOB_NAME = "users-report"


class UsersReportJob:
    """
    Runs the report from start to finish.

    Attributes:
        config: A validated configuration dictionary.
        directory: The NetSuite facade (directory source and lookups).
        storage: Where the CSV report is stored.
        notifier: Sends the summary email.
        dry_run: Build the report but do not store or send it.
    """

    def __init__(self, config: Dict[str, Any], directory, storage: Optional[BaseStorageAdapter],
                 notifier: Optional[EmailNotifier], dry_run: bool = False):
        self.config = config
        self.directory = directory
        self.storage = storage
        self.notifier = notifier
        self.dry_run = dry_run

    def should_run(self) -> bool:
        """False when this is not the production account and running elsewhere is not allowed."""
        if self.directory.is_production_account():
            return True
        if self.config.get('run_in_sandbox'):
            logger.info("Running outside production because the sandbox option is set")
            return True
        logger.info("The option to run outside production is not set. Stopping process.")
        return False

    def run(self, today: Optional[Union[date, datetime]] = None) -> RunResult:
        """
        Generate, store and send the report.

        Args:
            today: When the report is generated (defaults to now). A date is taken as midnight.

        Returns:
            RunResult

        Raises:
            DirectorySourceError: If the employee list could not be retrieved.
            StorageError: If the report could not be stored.
        """
        today = today or datetime.now()

        if not self.should_run():
            return RunResult(status=RunStatus.SKIPPED)

        candidates = self.directory.list_eligible_users()

        enrichment = UserEnrichmentService(
            self.directory,
            max_workers=self.config.get('max_workers', 5),
            full_sso_level=self.config.get('sso_full_level', 4),
        )
        enriched_users = enrichment.enrich_all(candidates, today)
        lookup_failure_count = sum(len(user.lookup_failures) for user in enriched_users)
        if lookup_failure_count:
            logger.warning(f"{lookup_failure_count} lookups failed; affected users are reported with partial data")

        aggregation = aggregate_all(enriched_users, self.config.get('inactivity_days', 90))
        report = build(aggregation.rows, today)
        flagged = sum(1 for row in report.rows if row.removal_recommendation)
        logger.info(f"Report {report.file_name} built with {len(report.rows)} users, {flagged} flagged for removal")

        if self.dry_run:
            logger.info("*** DRY RUN: report not stored and no email sent ***")
            return RunResult(
                status=RunStatus.COMPLETED,
                report=report,
                dropped_count=len(aggregation.dropped_user_ids),
                lookup_failure_count=lookup_failure_count,
            )

        artifact = self.storage.store(report.file_name, CSV_MIME_TYPE, report.csv_text, self.config['destination'])
        logger.info(f"Report generated: artifact {artifact.artifact_id}")

        notification_sent = self.notifier.send_email(
            author=self.config['author'],
            recipients=self.config['recipients'],
            reply_to=self.config['reply_to'],
            subject=self.config['subject'],
            html_body=build_email_body(report, JOB_NAME),
            attachments=[artifact],
        )
        if not notification_sent:
            logger.warning("Report was stored but the email could not be sent")

        return RunResult(
            status=RunStatus.COMPLETED,
            report=report,
            artifact=artifact,
            notification_sent=notification_sent,
            dropped_count=len(aggregation.dropped_user_ids),
            lookup_failure_count=lookup_failure_count,
        )


def create_storage(config: Dict[str, Any]) -> BaseStorageAdapter:
    if config['storage'] == 'local':
        return LocalStorageAdapter()

    from google_drive import GoogleDriveAdapter
    return GoogleDriveStorageAdapter(GoogleDriveAdapter(config['service_account_file']))


def create_job(config: Dict[str, Any], dry_run: bool = False) -> UsersReportJob:
    """
    Validate the configuration and wire up the NetSuite, storage and email clients.

    Raises:
        ConfigurationError: If the configuration is missing or invalid.
    """
    from netsuite import NetSuiteFacade

    config = validate_config(config)
    directory = NetSuiteFacade(
        config['account_id'],
        config['access_token'],
        base_url=config.get('base_url'),
        admin_role_id=config['admin_role_id'],
    )
    storage = None if dry_run else create_storage(config)
    notifier = None if dry_run else EmailNotifier.from_config(config['smtp'])
    return UsersReportJob(config, directory, storage, notifier, dry_run=dry_run)
