"""
filling.py

Fills the Leanpub login form with the configured credentials and submits it.
Values reach the page as evaluation arguments, so quotes or other special
characters in a password need no escaping.
"""

import logging

from config_manager import Credentials, LeanpubSiteConfig
from dom import DomDriver

logger = logging.getLogger(__name__)


class FormFiller:
    """Handles filling and submitting the login form."""

    def __init__(self, site: LeanpubSiteConfig):
        self.site = site

    async def fill_and_submit(self, dom: DomDriver, credentials: Credentials) -> bool:
        """
        Fills whichever credential inputs exist and submits their form.

        Args:
            dom: driver for the current page.
            credentials: values to enter.

        Returns:
            True if both the email and password inputs were found.
        """
        email_input = await dom.query_one(self.site.email_selector)
        if email_input is not None:
            await dom.set_value(email_input, credentials.email)
        else:
            logger.warning(f"Email input not found: {self.site.email_selector}")

        password_input = await dom.query_one(self.site.password_selector)
        if password_input is not None:
            await dom.set_value(password_input, credentials.password)
        else:
            logger.warning(f"Password input not found: {self.site.password_selector}")

        form = None
        if email_input is not None:
            form = await dom.owning_form(email_input)
        if form is None:
            form = await dom.query_one("form")

        if form is not None:
            await self._submit(dom, form)
        else:
            logger.warning("No form found to submit")

        return email_input is not None and password_input is not None

    async def _submit(self, dom: DomDriver, form) -> None:
        button = await dom.query_one(self.site.submit_selector, root=form)
        if button is not None:
            logger.debug("Clicking submit control")
            await dom.click(button)
        else:
            logger.debug("No submit control found; submitting form directly")
            await dom.submit(form)
