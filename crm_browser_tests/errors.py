"""
Errors raised by the browser test helpers.

The helper layer never catches these; they end the current attempt and are
classified by the runner. ``WaitTimeoutError`` derives from ``AssertionError``
so a missing network completion is reported exactly like a failed DOM
assertion.
"""


class CrmTestError(Exception):
    """Base class for all suite errors."""


class ScenarioConfigError(CrmTestError, ValueError):
    """Scenario options are inconsistent (e.g. a network-awaiting mode without an intercept)."""


class WaitTimeoutError(CrmTestError, AssertionError):
    """No matching network response arrived before the wait timed out."""

    def __init__(self, name: str, pattern: str, timeout_ms: float):
        self.name = name
        self.pattern = pattern
        self.timeout_ms = timeout_ms
        super().__init__(
            f"Timed out after {timeout_ms:.0f}ms waiting for '{name}' ({pattern})"
        )


class LoginError(CrmTestError):
    """The login flow did not reach the dashboard."""


class AppUnreachableError(CrmTestError):
    """The application under test did not answer the preflight check."""
