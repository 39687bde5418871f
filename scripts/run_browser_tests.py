#!/usr/bin/env python3
"""
CRM Browser Test Runner
=======================
Entry point for running the list-view Playwright browser test suite.

Usage:
    pip install -e . && playwright install chromium
    python scripts/run_browser_tests.py --suite "Clients View"

Credentials and the target URL come from EMAIL, PASSWORD and TEST_URL in
the environment or a .env file.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from crm_browser_tests.config import Config
from crm_browser_tests.errors import CrmTestError
from crm_browser_tests.logging_setup import setup_logging
from crm_browser_tests.preflight import check_reachable
from crm_browser_tests.runner import TestRunner

logger = logging.getLogger("run_browser_tests")

DEFAULT_REPORT = Path(__file__).resolve().parent / "browser_test_report.json"


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the CRM list-view browser tests.")
    parser.add_argument("--visible", action="store_true", help="Run with a visible browser")
    parser.add_argument("--base-url", help="Override TEST_URL")
    parser.add_argument(
        "--suite",
        action="append",
        default=[],
        metavar="NAME",
        help="Run only this suite (repeatable), e.g. 'Sales' or 'InvoicesViewTests'",
    )
    parser.add_argument("--retries", type=int, help="Extra attempts per case (default: 3)")
    parser.add_argument("--report", default=str(DEFAULT_REPORT), help="JSON report path")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    parser.add_argument("--json-logs", action="store_true", help="Emit structured JSON logs")
    parser.add_argument("--fresh-login", action="store_true", help="Ignore the cached login session")
    parser.add_argument("--skip-preflight", action="store_true", help="Do not check the app is reachable first")
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    """Main entry point"""
    args = parse_args(argv)
    setup_logging(args.log_level, json_logs=args.json_logs)

    config = Config.from_env(
        base_url=args.base_url,
        max_retries=args.retries,
        headless=False if args.visible else None,
    )

    try:
        suites = TestRunner.select_suites(args.suite) if args.suite else None
        if not args.skip_preflight:
            await check_reachable(config.page_url("/signin"))

        runner = TestRunner(config, suites=suites, fresh_login=args.fresh_login)
        await runner.run_all()
    except CrmTestError as e:
        logger.error("%s", e)
        return 1

    success = runner.print_summary()
    runner.generate_report(args.report)
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
