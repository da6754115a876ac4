from users_report import UsersReportConfig, RunStatus, create_job
from users_report.exceptions import ConfigurationError, DirectorySourceError, StorageError
import argparse
import functools
import logging
import os
import sys

EXIT_SUCCESS = 0
EXIT_RUN_FAILED = 1
EXIT_CONFIGURATION_ERROR = 2
EXIT_INTERRUPTED = 130


def handle_keyboard_interrupt(exit_message="Script interrupted by user"):
    """Decorator to handle KeyboardInterrupt and exit gracefully."""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except KeyboardInterrupt:
                logging.info(f"\n{exit_message}")
                sys.exit(EXIT_INTERRUPTED)
        return wrapper
    return decorator


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Generate the NetSuite users report of inactive and non-SSO accounts.')
    parser.add_argument('--dry-run', action='store_true', help='Build the report without storing or emailing it')
    parser.add_argument('--log', nargs='?', const='users_report.log',
                        help='Enable logging to a file. Optionally specify a file path (defaults to users_report.log in current directory)')
    parser.add_argument('--output-dir', help='Write the CSV report to this directory instead of the configured storage')
    return parser.parse_args(argv)


def setup_logging(log_path=None):
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_path:
        log_dir = os.path.dirname(log_path)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        handlers.insert(0, logging.FileHandler(log_path))

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers
    )
    if log_path:
        logging.info(f"Logging to file: {log_path}")


@handle_keyboard_interrupt("Script interrupted by user")
def main(argv=None):
    """Main function for the users report job."""
    args = parse_args(argv)
    setup_logging(args.log)

    if args.dry_run:
        logging.info("*** DRY RUN MODE ENABLED - the report will not be stored or emailed ***")

    config = UsersReportConfig.get_config()
    if args.output_dir:
        config['storage'] = 'local'
        config['destination'] = args.output_dir

    try:
        job = create_job(config, dry_run=args.dry_run)
    except ConfigurationError as e:
        logging.error(f"Configuration error: {str(e)}")
        return EXIT_CONFIGURATION_ERROR

    try:
        result = job.run()
    except (DirectorySourceError, StorageError) as e:
        logging.error(f"Users report failed: {str(e)}")
        return EXIT_RUN_FAILED

    if result.status == RunStatus.SKIPPED:
        logging.info("Users report skipped: not a production account")
        return EXIT_SUCCESS

    logging.info("Processing complete!")
    logging.info(
        f"Reported {len(result.report.rows)} users, dropped {result.dropped_count} without a name, "
        f"{result.lookup_failure_count} failed lookups"
    )
    if not args.dry_run:
        logging.info(f"Email sent: {result.notification_sent}")
    return EXIT_SUCCESS


if __name__ == '__main__':
    sys.exit(main())
