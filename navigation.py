import logging

from playwright.async_api import Error as PlaywrightError

from dom import DomDriver

logger = logging.getLogger(__name__)


async def navigate(dom: DomDriver, url: str) -> bool:
    """Load ``url`` and wait for the load event. Returns False instead of raising on failure."""
    logger.info(f"Navigating to: {url}")
    try:
        await dom.goto(url)
    except PlaywrightError as e:
        logger.error(f"Navigation to {url} failed: {e}")
        return False
    return True
