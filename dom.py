"""
dom.py

The small set of page operations the login workflow needs, expressed as a
protocol so the workflow never embeds page-side script text. PlaywrightDom
implements it on top of a Playwright async Page.
"""

from typing import Any, List, Optional, Protocol

from playwright.async_api import ElementHandle, Page


class DomDriver(Protocol):
    """Page operations used by the workflow. Elements are opaque handles."""

    async def goto(self, url: str) -> None: ...

    async def current_url(self) -> str: ...

    async def title(self) -> str: ...

    async def query_all(self, selector: str, root: Any = None) -> List[Any]: ...

    async def query_one(self, selector: str, root: Any = None) -> Optional[Any]: ...

    async def read_attribute(self, element: Any, name: str) -> Optional[str]: ...

    async def read_text(self, element: Any) -> str: ...

    async def read_value(self, element: Any) -> str: ...

    async def set_value(self, element: Any, value: str) -> None: ...

    async def click(self, element: Any) -> None: ...

    async def submit(self, form: Any) -> None: ...

    async def owning_form(self, element: Any) -> Optional[Any]: ...


class PlaywrightDom:
    """DomDriver backed by a Playwright Page."""

    def __init__(self, page: Page, navigation_timeout: int = 30000):
        self.page = page
        self.navigation_timeout = navigation_timeout

    async def goto(self, url: str) -> None:
        await self.page.goto(url, wait_until="load", timeout=self.navigation_timeout)

    async def current_url(self) -> str:
        return await self.page.evaluate("() => location.href")

    async def title(self) -> str:
        return await self.page.title()

    async def query_all(self, selector: str, root: Optional[ElementHandle] = None) -> List[ElementHandle]:
        return await (self.page if root is None else root).query_selector_all(selector)

    async def query_one(self, selector: str, root: Optional[ElementHandle] = None) -> Optional[ElementHandle]:
        return await (self.page if root is None else root).query_selector(selector)

    async def read_attribute(self, element: ElementHandle, name: str) -> Optional[str]:
        return await element.get_attribute(name)

    async def read_text(self, element: ElementHandle) -> str:
        return await element.text_content() or ""

    async def read_value(self, element: ElementHandle) -> str:
        # Live property, not the value attribute
        return await element.evaluate("el => el.value || ''")

    async def set_value(self, element: ElementHandle, value: str) -> None:
        await element.evaluate("(el, value) => { el.value = value; }", value)

    async def click(self, element: ElementHandle) -> None:
        await element.click()

    async def submit(self, form: ElementHandle) -> None:
        await form.evaluate("f => f.submit()")

    async def owning_form(self, element: ElementHandle) -> Optional[ElementHandle]:
        handle = await element.evaluate_handle("el => el.form")
        return handle.as_element()
