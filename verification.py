import asyncio
import logging

from playwright.async_api import Error as PlaywrightError

from config_manager import LeanpubSiteConfig
from dom import DomDriver
from navigation import navigate

logger = logging.getLogger(__name__)


def is_verified(final_url: str, title: str, expected_url: str, expected_title: str) -> bool:
    """Exact URL match and exact match of the whitespace-trimmed title."""
    return final_url == expected_url and title.strip() == expected_title


async def verify_login(dom: DomDriver, site: LeanpubSiteConfig) -> bool:
    """
    Navigate to the published books page and check both the final URL and
    the page title. Any navigation error counts as a failed verification.
    """
    if not await navigate(dom, site.published_url):
        return False

    # dynamic content
    await asyncio.sleep(site.settle_delay_ms / 1000)

    try:
        final_url = await dom.current_url()
        title = await dom.title()
    except PlaywrightError as e:
        logger.error(f"Could not read published books page state: {e}")
        return False

    logger.info(f"Final URL: {final_url}")
    logger.info(f"Final Title: {title}")

    success = is_verified(final_url, title, site.published_url, site.published_title)
    if success:
        logger.info("Login success verified: reached published books page.")
    else:
        logger.error(
            f"Login verification failed: expected URL {site.published_url} "
            f"with title '{site.published_title}'."
        )
    return success
