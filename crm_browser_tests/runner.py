"""
Test Runner
============
Runs every page suite's scenario cases against one logged-in session,
retries failed cases on a fresh page, aggregates results.
"""

import json
import logging
import time
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type

from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright, expect

from .base import BrowserTest, TestResult, ViewSuite
from .config import Config, DEFAULT_CONFIG
from .errors import ScenarioConfigError
from .pages import (
    ClientsViewTests,
    ClientSearchTests,
    SalesViewTests,
    InvoicesViewTests,
    TrafficViewTests,
)
from .scenarios import ScenarioCase
from .session import SessionContext

logger = logging.getLogger(__name__)

MESSAGE_LIMIT = 200


def classify(error: BaseException) -> TestResult:
    """Failed expectations are FAIL; anything else is an ERROR in the suite itself."""
    if isinstance(error, (AssertionError, PlaywrightTimeoutError)):
        return TestResult.FAIL
    return TestResult.ERROR


def _summarize(error: BaseException) -> str:
    text = str(error).strip() or type(error).__name__
    return text.splitlines()[0][:MESSAGE_LIMIT]


def count_results(tests: Iterable[BrowserTest], *results: TestResult) -> int:
    """Number of tests that ended in one of ``results``."""
    return sum(1 for t in tests if t.result in results)


class TestRunner:
    """
    Main test runner that executes all page suites.
    """
    __test__ = False

    # All suites to run
    SUITE_CLASSES: List[Type[ViewSuite]] = [
        ClientsViewTests,
        ClientSearchTests,
        SalesViewTests,
        InvoicesViewTests,
        TrafficViewTests,
    ]

    def __init__(
        self,
        config: Config = None,
        suites: Optional[Iterable[Type[ViewSuite]]] = None,
        fresh_login: bool = False,
    ):
        self.config = config or DEFAULT_CONFIG
        self.suite_classes = list(suites) if suites is not None else list(self.SUITE_CLASSES)
        self.fresh_login = fresh_login
        self.results: List[BrowserTest] = []
        self.start_time: float = 0
        self.end_time: float = 0

    @classmethod
    def select_suites(cls, names: Iterable[str]) -> List[Type[ViewSuite]]:
        """Resolve suite names (display name or class name, any case)."""
        by_name = {}
        for suite_class in cls.SUITE_CLASSES:
            by_name[suite_class.name.lower()] = suite_class
            by_name[suite_class.__name__.lower()] = suite_class

        selected = []
        for name in names:
            suite_class = by_name.get(name.strip().lower())
            if suite_class is None:
                known = ", ".join(s.name for s in cls.SUITE_CLASSES)
                raise ScenarioConfigError(f"Unknown suite {name!r} (known: {known})")
            if suite_class not in selected:
                selected.append(suite_class)
        return selected

    async def run_all(self) -> List[BrowserTest]:
        """Launch the browser, log in once and run all suites"""
        self.results = []
        self.start_time = time.time()

        print("\n" + "=" * 70)
        print("🌐 CRM LIST-VIEW BROWSER TEST SUITE")
        print("=" * 70)
        print(f"📅 Started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        print(f"🔗 Base URL: {self.config.base_url}")
        print("=" * 70)

        expect.set_options(timeout=self.config.element_timeout)

        # Initialize Playwright
        playwright = await async_playwright().start()
        browser = await playwright.chromium.launch(
            headless=self.config.headless,
            slow_mo=self.config.slow_mo,
            downloads_path=str(self.config.downloads_dir),
        )
        session = SessionContext(browser, self.config)

        try:
            await session.acquire(fresh=self.fresh_login)
            await self.run_suites(session)
        finally:
            await session.release()
            await browser.close()
            await playwright.stop()

        self.end_time = time.time()
        return self.results

    async def run_suites(self, session: SessionContext) -> List[BrowserTest]:
        """Run every case of every suite, in order, on the given session"""
        # Track progress across all tests
        current_test_num = 0

        for suite_class in self.suite_classes:
            suite = suite_class(self.config)

            print(f"\n📄 {suite.name} Tests")
            print("-" * 50)

            for case in suite.cases():
                test = await self.run_case(suite, case, session)
                self.results.append(test)

                current_test_num += 1
                self._print_result(test, current_test_num)

        return self.results

    async def run_case(self, suite: ViewSuite, case: ScenarioCase, session: SessionContext) -> BrowserTest:
        """Run one case, re-running it on a fresh page until it passes or retries run out"""
        test = BrowserTest(name=case.title, page=suite.name)
        start = time.time()
        max_attempts = min(case.retries, self.config.max_retries) + 1

        for attempt in range(1, max_attempts + 1):
            test.attempts = attempt
            result, message, js_errors, retryable = await self._attempt(suite, case, session, attempt)
            test.result = result
            test.message = message
            test.js_errors = js_errors

            if result == TestResult.PASS or not retryable:
                break
            if attempt < max_attempts:
                logger.warning(
                    "Retrying %s / %s (%d of %d): %s",
                    suite.name, case.title, attempt + 1, max_attempts, message,
                    extra={"suite": suite.name, "case": case.title, "attempt": attempt},
                )

        test.duration_ms = (time.time() - start) * 1000
        return test

    async def _attempt(
        self,
        suite: ViewSuite,
        case: ScenarioCase,
        session: SessionContext,
        attempt: int,
    ) -> Tuple[TestResult, str, List[str], bool]:
        extra = {"suite": suite.name, "case": case.title, "attempt": attempt}
        errors: List[str] = []
        context = await session.new_context()
        view = None

        try:
            page = await context.new_page()
            page.set_default_timeout(self.config.element_timeout)
            page.on("pageerror", lambda e: errors.append(str(e)))

            view = await suite.open_view(page)
            await case.run(view)
            logger.debug("Passed", extra=extra)
            return TestResult.PASS, "", errors, False
        except ScenarioConfigError as e:
            # misconfigured options fail the same way on every attempt
            logger.error("Invalid scenario options: %s", e, extra=extra)
            return TestResult.ERROR, _summarize(e), errors, False
        except Exception as e:
            result = classify(e)
            if result == TestResult.FAIL:
                logger.info("Attempt failed: %s", _summarize(e), extra=extra)
            else:
                logger.exception("Attempt raised an unexpected error", extra=extra)
            return result, _summarize(e), errors, True
        finally:
            if view is not None:
                view.close()
            await session.close_context(context)

    def _print_result(self, test: BrowserTest, test_num: int):
        """Print a single test result with running progress"""
        icons = {
            "pass": "✅",
            "fail": "❌",
            "error": "💥",
            "skip": "⏭️",
        }
        icon = icons.get(test.result.value, "❓")
        status = test.result.value.upper()

        # Calculate running totals
        passed = count_results(self.results, TestResult.PASS)
        failed = count_results(self.results, TestResult.FAIL, TestResult.ERROR)

        # Print progress line
        tries = f", {test.attempts} attempts" if test.attempts > 1 else ""
        print(f"[{test_num}] {icon} {status:5} {test.name} ({test.duration_ms:.0f}ms{tries})")
        print(f"       └─ Running: {passed} passed, {failed} failed")
        if test.message and test.result != TestResult.PASS:
            print(f"       └─ Error: {test.message}")
        if test.js_errors:
            print(f"       └─ JS errors: {len(test.js_errors)}")

    def print_summary(self) -> bool:
        """Print final summary, return True if nothing failed or errored"""
        passed = count_results(self.results, TestResult.PASS)
        failed = count_results(self.results, TestResult.FAIL)
        errors = count_results(self.results, TestResult.ERROR)
        skipped = count_results(self.results, TestResult.SKIP)
        retried = sum(1 for t in self.results if t.attempts > 1)
        total = len(self.results)
        duration = self.end_time - self.start_time

        print("\n" + "=" * 70)
        print("📊 FINAL SUMMARY")
        print("=" * 70)
        print(f"  Total Tests:   {total}")
        if total > 0:
            print(f"  ✅ Passed:     {passed} ({passed/total*100:.0f}%)")
        print(f"  ❌ Failed:     {failed}")
        print(f"  💥 Errors:     {errors}")
        print(f"  ⏭️  Skipped:    {skipped}")
        print(f"  🔁 Retried:    {retried}")
        print(f"  ⏱️  Duration:   {duration:.1f}s")
        print("=" * 70)

        if failed == 0 and errors == 0:
            print("🎉 ALL TESTS PASSED!")
            return True
        else:
            print("⚠️  SOME TESTS FAILED")
            return False

    def generate_report(self, output_path: str = None) -> Dict[str, Any]:
        """Generate JSON report"""
        report = {
            "generated_at": datetime.now().isoformat(),
            "config": {
                "base_url": self.config.base_url,
                "headless": self.config.headless,
                "max_retries": self.config.max_retries,
                "suites": [s.name for s in self.suite_classes],
            },
            "summary": {
                "total": len(self.results),
                "passed": count_results(self.results, TestResult.PASS),
                "failed": count_results(self.results, TestResult.FAIL),
                "errors": count_results(self.results, TestResult.ERROR),
                "skipped": count_results(self.results, TestResult.SKIP),
                "duration_seconds": self.end_time - self.start_time,
            },
            "tests": [
                {
                    "name": t.name,
                    "page": t.page,
                    "result": t.result.value,
                    "message": t.message,
                    "attempts": t.attempts,
                    "duration_ms": t.duration_ms,
                    "js_errors": t.js_errors,
                }
                for t in self.results
            ]
        }

        if output_path:
            with open(output_path, "w") as f:
                json.dump(report, f, indent=2)
            print(f"\n📁 Report saved: {output_path}")

        return report
