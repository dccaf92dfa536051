#!/usr/bin/env python3
"""
Leanpub Login Workflow
Description:
Runs the login flow against one page: load the login page, wait for the
anti-bot token, inspect and submit the credentials form, verify the author
dashboard and collect the published books.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from playwright.async_api import Error as PlaywrightError

from base_exceptions import WorkflowAborted
from config_manager import LoginWorkflowConfig
from dom import DomDriver
from extraction import (
    BookLink,
    FormField,
    fetch_published_books,
    inspect_form,
    read_form_action,
    read_user_indicator,
)
from filling import FormFiller
from navigation import navigate
from performance_monitor import PerformanceMonitor, performance_monitor
from polling import poll
from verification import verify_login

logger = logging.getLogger(__name__)

STATUS_COMPLETED = "completed"
STATUS_NAVIGATION_FAILED = "navigation_failed"
STATUS_CREDENTIALS_MISSING = "credentials_missing"
STATUS_VERIFICATION_FAILED = "verification_failed"
STATUS_EXTRACTION_FAILED = "extraction_failed"


@dataclass
class WorkflowResult:
    """Outcome of one run of the login workflow"""
    status: str
    success: bool
    form_fields: List[FormField] = field(default_factory=list)
    submitted: bool = False
    verified: bool = False
    books: List[BookLink] = field(default_factory=list)


def _preview(value: str, limit: int = 40) -> str:
    return value if len(value) <= limit else value[:limit] + "..."


class LeanpubLoginFlow:
    """
    Sequential login workflow. Each step either completes, or raises
    WorkflowAborted which run() turns into a WorkflowResult.
    """

    def __init__(self, config: LoginWorkflowConfig, performance_monitor: Optional[PerformanceMonitor] = None):
        self.config = config
        self.site = config.site
        self.performance_monitor = performance_monitor or PerformanceMonitor(
            enable_monitoring=config.enable_performance_monitoring
        )
        self.form_filler = FormFiller(self.site)
        self.result = WorkflowResult(status="initialized", success=False)

    async def run(self, dom: DomDriver) -> WorkflowResult:
        self.result = WorkflowResult(status="processing", success=False)
        self.performance_monitor.reset_monitoring()

        try:
            await self.open_login_page(dom)
            await self.wait_for_token(dom)
            await self.inspect_login_form(dom)
            self.check_credentials()
            await self.submit_credentials(dom)
            await self.wait_for_dashboard(dom)
            await self.report_landing_page(dom)
            await self.verify(dom)
            await self.collect_books(dom)
            self.result.status = STATUS_COMPLETED
            self.result.success = True
        except WorkflowAborted as aborted:
            aborted.display_abort_message()
            self.result.status = aborted.status
            self.result.success = aborted.success
        finally:
            self.performance_monitor.log_performance_summary()

        return self.result

    @performance_monitor("navigate_login")
    async def open_login_page(self, dom: DomDriver):
        if not await navigate(dom, self.site.login_url):
            raise WorkflowAborted(STATUS_NAVIGATION_FAILED, f"Could not load {self.site.login_url}")

    async def _token_populated(self, dom: DomDriver) -> bool:
        try:
            element = await dom.query_one(self.site.token_selector)
            return element is not None and bool(await dom.read_value(element))
        except PlaywrightError as e:
            logger.debug(f"Token check failed: {e}")
            return False

    @performance_monitor("poll_token")
    async def wait_for_token(self, dom: DomDriver) -> bool:
        return await poll(
            lambda: self._token_populated(dom),
            self.config.token_poll.max_attempts,
            self.config.token_poll.interval_ms,
            description="reCAPTCHA field populated",
        )

    @performance_monitor("inspect_form")
    async def inspect_login_form(self, dom: DomDriver) -> List[FormField]:
        fields = await inspect_form(dom)
        logger.info(f"Found {len(fields)} input fields in login form:")
        for f in fields:
            logger.info(f"  name='{f.name}' type='{f.type}' value='{_preview(f.value)}'")
        self.result.form_fields = fields

        action = await read_form_action(dom)
        if action is not None:
            logger.info(f"Form action: {action}")
        return fields

    def check_credentials(self):
        credentials = self.config.credentials
        if not credentials.is_complete():
            raise WorkflowAborted(
                STATUS_CREDENTIALS_MISSING,
                f"{' and '.join(credentials.missing_variables())} missing in environment; skipping form submission.",
                success=True,
            )
        logger.info(credentials.get_summary())

    @performance_monitor("fill_and_submit")
    async def submit_credentials(self, dom: DomDriver) -> bool:
        filled = await self.form_filler.fill_and_submit(dom, self.config.credentials)
        if filled:
            logger.info("Filled credentials and submitted form.")
        else:
            logger.error("Failed to locate form fields to fill.")
        self.result.submitted = filled
        return filled

    async def _looks_authenticated(self, dom: DomDriver) -> bool:
        try:
            url = await dom.current_url()
        except PlaywrightError as e:
            logger.debug(f"URL check failed: {e}")
            return False
        if any(marker in url for marker in self.site.authenticated_url_markers):
            logger.info(f"Login likely successful. Current URL: {url}")
            return True
        return False

    @performance_monitor("poll_dashboard")
    async def wait_for_dashboard(self, dom: DomDriver) -> bool:
        return await poll(
            lambda: self._looks_authenticated(dom),
            self.config.auth_poll.max_attempts,
            self.config.auth_poll.interval_ms,
            description="Authenticated URL",
        )

    async def report_landing_page(self, dom: DomDriver):
        try:
            title = await dom.title()
            indicator = await read_user_indicator(dom, self.site.user_menu_selectors)
        except PlaywrightError as e:
            logger.warning(f"Could not read page after submit: {e}")
            return
        logger.info(f"Page title after submit: {title}")
        if indicator:
            logger.info(f"User indicator snippet: {indicator}")

    @performance_monitor("verify_login")
    async def verify(self, dom: DomDriver):
        self.result.verified = await verify_login(dom, self.site)
        if not self.result.verified:
            raise WorkflowAborted(STATUS_VERIFICATION_FAILED, "Login failed; exiting.")

    @performance_monitor("fetch_published_books")
    async def collect_books(self, dom: DomDriver) -> List[BookLink]:
        try:
            books = await fetch_published_books(dom, self.site.book_path_suffix)
        except PlaywrightError as e:
            raise WorkflowAborted(STATUS_EXTRACTION_FAILED, f"Failed to fetch published books: {e}")

        logger.info(f"Published books ({len(books)}):")
        for book in books:
            logger.info(f"  {book.identifier} => {book.title}")
        self.result.books = books
        return books
