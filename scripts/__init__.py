"""
Scripts package for the NetSuite Users Report.

This package contains command-line scripts organized by functionality.

Subpackages:
- reports: Scheduled report jobs
"""
