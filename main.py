#!/usr/bin/env python3
"""
Leanpub Login Automation
Description:
Launches a headless Chromium, logs into Leanpub with LEANPUB_EMAIL and
LEANPUB_PASSWORD, verifies the author dashboard and lists the published books.
"""

import asyncio
import logging
from typing import Optional

from playwright.async_api import async_playwright

from config_manager import ConfigurationManager, LoginWorkflowConfig
from dom import PlaywrightDom
from flow import LeanpubLoginFlow, WorkflowResult

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO"):
    # basicConfig only installs the handler once; the level is applied every call
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )
    logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))


async def login(config: LoginWorkflowConfig) -> WorkflowResult:
    """
    Perform the entire login flow in a fresh browser session.

    Browser launch failures propagate; everything the workflow treats as
    recoverable is reported through the returned WorkflowResult.
    """
    async with async_playwright() as p:
        browser = await p.chromium.launch(
            headless=config.browser.headless,
            slow_mo=config.browser.slow_motion,
        )
        try:
            context = await browser.new_context()
            page = await context.new_page()
            page.set_default_timeout(config.browser.navigation_timeout)

            dom = PlaywrightDom(page, navigation_timeout=config.browser.navigation_timeout)
            return await LeanpubLoginFlow(config).run(dom)
        finally:
            await browser.close()
            logger.debug("Browser closed")


async def main(config: Optional[LoginWorkflowConfig] = None) -> WorkflowResult:
    configure_logging()
    if config is None:
        config = ConfigurationManager().load_configuration()
    configure_logging(config.log_level)

    logger.info("Starting Leanpub login workflow")
    result = await login(config)
    logger.info(f"Workflow finished with status: {result.status}")
    return result


def cli():
    asyncio.run(main())


if __name__ == "__main__":
    cli()
