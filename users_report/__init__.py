"""
NetSuite users report: inactive-account and SSO compliance reporting for access reviews.
"""

from .config import UsersReportConfig, validate_config
from .users_report_job import UsersReportJob, create_job
from .models.report import Report, ReportRow, RunResult, RunStatus

__all__ = [
    'UsersReportConfig',
    'validate_config',
    'UsersReportJob',
    'create_job',
    'Report',
    'ReportRow',
    'RunResult',
    'RunStatus',
]
