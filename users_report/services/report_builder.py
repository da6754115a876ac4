from datetime import date, datetime
from html import escape
from typing import Iterable, Sequence, Tuple, Union

import pandas as pd

from ..models.report import Report, ReportRow

CSV_COLUMNS = [
    "Internal ID",
    "Name",
    "User Name",
    "License Type",
    "Last Log-in Date",
    "Days Since Logged In",
    "Notes",
]
HTML_COLUMNS = ["Name", "Days Since Logged In", "Notes"]
FILE_NAME_SUFFIX = "-UsersReport.csv"

EMAIL_STYLE = (
    "body {font-family:Verdana,sans-serif;font-size:15px;line-height:1.5;background-color:#00467f;overflow-x:hidden}"
    "code {font-family:monospace;font-size:1em;color:#eeeeee;background-color:#111111;}"
    ".the-main {position:relative;top:45px;transition:margin-left 0.4s;color:#fff;background-color:#000000;padding-top:25px;}"
    ".the-section {max-width:800px;margin:auto;margin-bottom:25px;background-color:#222222;padding:60px 85px 60px 85px;}"
    ".users-report thead tr {color:#ffffff;background-color:#00467f;}"
)


def report_file_name(today: Union[date, datetime]) -> str:
    """e.g. ``2024-12-31-UsersReport.csv``"""
    return f"{today:%Y-%m-%d}{FILE_NAME_SUFFIX}"


def sort_rows(rows: Iterable[ReportRow]) -> Tuple[ReportRow, ...]:
    """Most inactive first. Equal rows keep their input order."""
    return tuple(sorted(rows, key=lambda row: row.days_inactive, reverse=True))


def rows_to_dataframe(rows: Sequence[ReportRow]) -> pd.DataFrame:
    records = [
        [
            row.user_id,
            row.display_name,
            row.email,
            row.license_tier.value,
            row.authoritative_date_display,
            row.days_inactive,
            row.notes,
        ]
        for row in rows
    ]
    return pd.DataFrame(records, columns=CSV_COLUMNS)


def render_csv(rows: Sequence[ReportRow]) -> str:
    """
    Render rows as CSV text with the report's fixed header line.

    Fields that still contain a delimiter are quoted (RFC 4180).
    """
    return rows_to_dataframe(rows).to_csv(index=False, lineterminator="\n")


def render_html(rows: Sequence[ReportRow]) -> str:
    """Render the email table (name, days inactive, notes) with HTML escaping."""
    df = rows_to_dataframe(rows)[HTML_COLUMNS]
    return df.to_html(index=False, escape=True, border=0, classes="users-report", justify="left")


def build(rows: Iterable[ReportRow], today: Union[date, datetime]) -> Report:
    """
    Sort the aggregated rows and render every representation of the report.

    Args:
        rows: One row per user.
        today: The date the report is generated for.

    Returns:
        Report
    """
    sorted_rows = sort_rows(rows)
    generated_date = today.date() if isinstance(today, datetime) else today

    return Report(
        generated_date=generated_date,
        rows=sorted_rows,
        csv_text=render_csv(sorted_rows),
        html_fragment=render_html(sorted_rows),
        file_name=report_file_name(generated_date),
    )


def build_email_body(report: Report, job_name: str = "users-report") -> str:
    """Wrap the report table in the HTML document sent as the email body."""
    return (
        "<html>"
        "<head>"
        f"<style>{EMAIL_STYLE}</style>"
        "</head>"
        "<body>"
        '<div class="the-main">'
        '<div class="the-section">'
        f"{report.html_fragment}"
        "<br/>"
        f"<i>This was generated by the job:</i> <code>{escape(job_name)}</code>"
        "</div>"
        "</div>"
        "</body>"
        "</html>"
    )
