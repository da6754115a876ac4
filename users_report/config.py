import os
import re
from typing import Dict, Any, List, Optional
from dotenv import load_dotenv

from .exceptions import ConfigurationError

MAX_RECIPIENTS = 10
STORAGE_BACKENDS = ('google_drive', 'local')
EMAIL_PATTERN = re.compile(r"^[^@\s;,]+@[^@\s;,]+\.[^@\s;,]+$")

TRUE_VALUES = {'1', 't', 'true', 'y', 'yes', 'on'}


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == '':
        return default
    return value.strip().lower() in TRUE_VALUES


def split_recipients(value: Optional[str]) -> List[str]:
    """Split a semicolon separated recipient list, dropping blanks."""
    if not value:
        return []
    return [address.strip() for address in value.split(';') if address.strip()]


class UsersReportConfig:
    """Centralized users report configuration management."""

    @staticmethod
    def get_config() -> Dict[str, Any]:
        """Get users report configuration from environment variables."""
        load_dotenv()

        return {
            'account_id': os.getenv('NETSUITE_ACCOUNT_ID', ''),
            'base_url': os.getenv('NETSUITE_BASE_URL') or None,
            'access_token': os.getenv('NETSUITE_ACCESS_TOKEN', ''),
            'run_in_sandbox': _env_flag('USERS_REPORT_RUN_IN_SANDBOX'),
            'storage': os.getenv('USERS_REPORT_STORAGE', 'google_drive').strip().lower(),
            'destination': os.getenv('USERS_REPORT_DESTINATION', '').strip(),
            'service_account_file': os.getenv('GOOGLE_SERVICE_ACCOUNT_FILE'),
            'recipients': split_recipients(os.getenv('USERS_REPORT_RECIPIENTS')),
            'author': os.getenv('USERS_REPORT_AUTHOR', '').strip(),
            'reply_to': os.getenv('USERS_REPORT_REPLY_TO', 'donotreply@donotreply.com'),
            'subject': os.getenv('USERS_REPORT_SUBJECT', 'NetSuite Users Report'),
            'inactivity_days': os.getenv('USERS_REPORT_INACTIVITY_DAYS', '90'),
            'admin_role_id': os.getenv('USERS_REPORT_ADMIN_ROLE_ID', '3'),
            'sso_full_level': os.getenv('USERS_REPORT_SSO_FULL_LEVEL', '4'),
            'max_workers': os.getenv('USERS_REPORT_MAX_WORKERS', '5'),
            'smtp': {
                'host': os.getenv('SMTP_HOST', 'localhost'),
                'port': os.getenv('SMTP_PORT', '587'),
                'username': os.getenv('SMTP_USERNAME'),
                'password': os.getenv('SMTP_PASSWORD'),
                'use_tls': _env_flag('SMTP_USE_TLS', default=True),
            },
        }


def _as_int(config: Dict[str, Any], key: str, minimum: int) -> int:
    try:
        value = int(str(config[key]).strip())
    except (KeyError, TypeError, ValueError):
        raise ConfigurationError(f"'{key}' must be a whole number, got {config.get(key)!r}")
    if value < minimum:
        raise ConfigurationError(f"'{key}' must be at least {minimum}, got {value}")
    return value


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Check a configuration dictionary before any work is done.

    Args:
        config: As returned by ``UsersReportConfig.get_config()``.

    Returns:
        A copy with numeric settings converted to ``int``.

    Raises:
        ConfigurationError: If a required setting is missing or invalid.
    """
    validated = dict(config)

    if not validated.get('account_id'):
        raise ConfigurationError("NetSuite account id is not configured")
    if not validated.get('access_token'):
        raise ConfigurationError("NetSuite access token is not configured")

    if validated.get('storage') not in STORAGE_BACKENDS:
        raise ConfigurationError(
            f"Unknown storage backend {validated.get('storage')!r}; expected one of {', '.join(STORAGE_BACKENDS)}"
        )
    if not validated.get('destination'):
        raise ConfigurationError("Report destination folder is not configured")
    if validated['storage'] == 'google_drive' and not validated.get('service_account_file'):
        raise ConfigurationError("Google Drive storage needs a service account file")

    recipients = validated.get('recipients') or []
    if isinstance(recipients, str):
        recipients = split_recipients(recipients)
    if not recipients:
        raise ConfigurationError("No email recipients are configured")
    if len(recipients) > MAX_RECIPIENTS:
        raise ConfigurationError(f"At most {MAX_RECIPIENTS} email recipients are allowed, got {len(recipients)}")
    invalid = [address for address in recipients if not EMAIL_PATTERN.match(address)]
    if invalid:
        raise ConfigurationError(f"Invalid email recipient(s): {', '.join(invalid)}")
    validated['recipients'] = recipients

    if not validated.get('author'):
        raise ConfigurationError("Email author is not configured")

    validated['inactivity_days'] = _as_int(validated, 'inactivity_days', 0)
    validated['sso_full_level'] = _as_int(validated, 'sso_full_level', 0)
    validated['max_workers'] = _as_int(validated, 'max_workers', 1)
    validated['admin_role_id'] = str(validated.get('admin_role_id', '3')).strip()

    smtp = dict(validated.get('smtp') or {})
    smtp['port'] = _as_int({'smtp_port': smtp.get('port', 587)}, 'smtp_port', 1)
    validated['smtp'] = smtp

    return validated
