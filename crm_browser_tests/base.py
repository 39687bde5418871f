"""
Base Suite Classes and Result Types
===================================
Shared functionality for all list-view page suites.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from playwright.async_api import Page

from .config import Config, DEFAULT_CONFIG
from .scenarios import ScenarioCase
from .views import ListView
from .waits import Intercept


class TestResult(Enum):
    """Test result status"""
    __test__ = False

    PASS = "pass"
    FAIL = "fail"
    ERROR = "error"
    SKIP = "skip"


@dataclass
class BrowserTest:
    """Individual test result"""
    __test__ = False

    name: str
    page: str
    result: TestResult = TestResult.PASS
    message: str = ""
    js_errors: List[str] = field(default_factory=list)
    attempts: int = 0
    duration_ms: float = 0


class ViewSuite(ABC):
    """
    Base class for list-view page suites.

    A suite names the page, the network calls it waits on, and the scenario
    cases it runs. Opening the view is the per-test setup: handles are
    registered, the page is visited and the ready calls are awaited.
    """

    name: str = ""
    intercepts: Tuple[Intercept, ...] = ()
    ready: Tuple[Intercept, ...] = ()
    ready_text: Optional[str] = None
    invoice_query: str = "AddClient Test"

    def __init__(self, config: Config = None):
        self.config = config or DEFAULT_CONFIG

    @property
    @abstractmethod
    def path(self) -> str:
        """Page path below the app URL (e.g., '/clients_module/View')"""
        pass

    @property
    def page_url(self) -> str:
        """Full URL to the page"""
        return self.config.page_url(self.path)

    @abstractmethod
    def cases(self) -> List[ScenarioCase]:
        """Scenario cases for this page. Override in subclasses."""
        pass

    async def open_view(self, page: Page) -> ListView:
        intercepts = tuple(dict.fromkeys(self.intercepts + self.ready))
        return await ListView.open(
            page,
            self.page_url,
            intercepts=intercepts,
            ready=self.ready,
            ready_text=self.ready_text,
            page_load_timeout=self.config.page_load_timeout,
            ready_timeout=self.config.ready_timeout,
            invoice_query=self.invoice_query,
        )
