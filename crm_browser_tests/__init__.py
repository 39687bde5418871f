"""
CRM List-View Browser Tests
===========================
Playwright suite for the list-view pages of the CRM web application.

Structure:
- config.py: Centralized configuration
- selectors.py: Named Ant Design selectors
- options.py / scenarios.py: Reusable list-view verifiers and their options
- waits.py: Network wait handles
- views.py: List-view page adapter
- session.py: Cached login session
- base.py: Suite base class and result types
- pages/: Individual page suites
- runner.py: Test runner and reporting
"""

from .base import BrowserTest, TestResult, ViewSuite
from .config import Config, DEFAULT_CONFIG
from .errors import (
    AppUnreachableError,
    CrmTestError,
    LoginError,
    ScenarioConfigError,
    WaitTimeoutError,
)
from .runner import TestRunner

__all__ = [
    'Config',
    'DEFAULT_CONFIG',
    'BrowserTest',
    'TestResult',
    'ViewSuite',
    'TestRunner',
    'CrmTestError',
    'ScenarioConfigError',
    'WaitTimeoutError',
    'LoginError',
    'AppUnreachableError',
]
