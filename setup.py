from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="netsuite-users-report",
    version="0.1.0",
    author="NetSuite Administration",
    description="Scheduled NetSuite user access review: inactive accounts, license tiers and SSO compliance",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Development Status :: 3 - Alpha",
        "Intended Audience :: System Administrators",
        "Topic :: System :: Systems Administration",
    ],
    python_requires=">=3.8",
    install_requires=[
        "requests>=2.27.0",
        "pandas>=1.5.0",
        "python-dotenv>=0.15.0",
        "python-dateutil>=2.8.0",
    ],
    extras_require={
        "google": [
            "google-api-python-client>=2.0.0",
            "google-auth>=2.38.0",
        ],
        "test": [
            "pytest>=7.0.0",
            "google-api-python-client>=2.0.0",
            "google-auth>=2.38.0",
        ],
        "all": [
            "requests>=2.27.0",
            "pandas>=1.5.0",
            "python-dotenv>=0.19.0",
            "python-dateutil>=2.8.0",
            "google-api-python-client>=2.0.0",
            "google-auth>=2.38.0",
        ],
    },
    entry_points={
        "console_scripts": [
            # Report jobs
            "users-report=scripts.reports.generate_users_report:main",
        ],
    },
)
