"""Puts the repository root on sys.path so the test suites can import the packages."""
