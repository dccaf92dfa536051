from __future__ import annotations

from typing import Dict, List, Optional

import pytest
from playwright.async_api import Error as PlaywrightError

from config_manager import Credentials, LoginWorkflowConfig, PollConfig


class FakeElement:
    def __init__(self, attrs: Optional[Dict[str, str]] = None, text: str = "", value: str = "",
                 children: Optional[Dict[str, List["FakeElement"]]] = None,
                 form: Optional["FakeElement"] = None) -> None:
        self.attrs = attrs or {}
        self.text = text
        self.value = value
        self.children = children or {}
        self.form = form
        self.clicked = 0
        self.submitted = 0


class FakeDom:
    """DomDriver stand-in: selectors are looked up verbatim in a dict."""

    def __init__(self, url: str = "about:blank", title: str = "",
                 elements: Optional[Dict[str, List[FakeElement]]] = None) -> None:
        self.url = url
        self.page_title = title
        self.elements = elements or {}
        self.visited: List[str] = []
        self.routes: Dict[str, dict] = {}
        self.failing_urls: set = set()

    def route(self, url: str, final_url: Optional[str] = None, title: str = "",
              elements: Optional[Dict[str, List[FakeElement]]] = None) -> None:
        self.routes[url] = {"url": final_url or url, "title": title, "elements": elements or {}}

    async def goto(self, url: str) -> None:
        self.visited.append(url)
        if url in self.failing_urls:
            raise PlaywrightError(f"net::ERR_NAME_NOT_RESOLVED at {url}")
        page = self.routes.get(url)
        if page is None:
            self.url = url
            return
        self.url = page["url"]
        self.page_title = page["title"]
        self.elements = page["elements"]

    async def current_url(self) -> str:
        return self.url

    async def title(self) -> str:
        return self.page_title

    async def query_all(self, selector, root=None):
        scope = root.children if root is not None else self.elements
        return list(scope.get(selector, []))

    async def query_one(self, selector, root=None):
        found = await self.query_all(selector, root)
        return found[0] if found else None

    async def read_attribute(self, element, name):
        return element.attrs.get(name)

    async def read_text(self, element):
        return element.text

    async def read_value(self, element):
        return element.value

    async def set_value(self, element, value):
        element.value = value

    async def click(self, element):
        element.clicked += 1

    async def submit(self, form):
        form.submitted += 1

    async def owning_form(self, element):
        return element.form


@pytest.fixture
def fake_dom() -> FakeDom:
    return FakeDom()


@pytest.fixture
def fast_config() -> LoginWorkflowConfig:
    config = LoginWorkflowConfig(credentials=Credentials(email="author@example.com", password="s3cr'et\"pw"))
    config.token_poll = PollConfig(max_attempts=3, interval_ms=0)
    config.auth_poll = PollConfig(max_attempts=2, interval_ms=0)
    config.site.settle_delay_ms = 0
    config.enable_performance_monitoring = False
    return config
