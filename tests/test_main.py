from __future__ import annotations

import asyncio

import pytest

import main
from dom import PlaywrightDom
from flow import STATUS_COMPLETED, WorkflowResult


class FakePage:
    def __init__(self) -> None:
        self.default_timeout = None

    def set_default_timeout(self, timeout) -> None:
        self.default_timeout = timeout


class FakeContext:
    def __init__(self) -> None:
        self.pages = []

    async def new_page(self):
        page = FakePage()
        self.pages.append(page)
        return page


class FakeBrowser:
    def __init__(self) -> None:
        self.contexts = []
        self.closed = False

    async def new_context(self):
        context = FakeContext()
        self.contexts.append(context)
        return context

    async def close(self) -> None:
        self.closed = True


class FakeChromium:
    def __init__(self) -> None:
        self.launch_options = None
        self.browser = FakeBrowser()

    async def launch(self, **options):
        self.launch_options = options
        return self.browser


class FakePlaywright:
    def __init__(self) -> None:
        self.chromium = FakeChromium()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


@pytest.fixture
def playwright(monkeypatch):
    fake = FakePlaywright()
    monkeypatch.setattr(main, "async_playwright", lambda: fake)
    return fake


def install_flow(monkeypatch, outcome):
    seen = []

    class FakeFlow:
        def __init__(self, config):
            self.config = config

        async def run(self, dom):
            seen.append(dom)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

    monkeypatch.setattr(main, "LeanpubLoginFlow", FakeFlow)
    return seen


def test_login_opens_one_page_and_closes_browser(monkeypatch, playwright, fast_config):
    expected = WorkflowResult(status=STATUS_COMPLETED, success=True)
    seen = install_flow(monkeypatch, expected)

    assert asyncio.run(main.login(fast_config)) is expected

    browser = playwright.chromium.browser
    assert playwright.chromium.launch_options == {"headless": True, "slow_mo": 0}
    assert len(browser.contexts) == 1 and len(browser.contexts[0].pages) == 1
    page = browser.contexts[0].pages[0]
    assert page.default_timeout == fast_config.browser.navigation_timeout
    assert isinstance(seen[0], PlaywrightDom) and seen[0].page is page
    assert browser.closed


def test_login_closes_browser_when_workflow_raises(monkeypatch, playwright, fast_config):
    install_flow(monkeypatch, RuntimeError("evaluation failed"))

    with pytest.raises(RuntimeError):
        asyncio.run(main.login(fast_config))

    assert playwright.chromium.browser.closed


def test_logging_is_configured_before_configuration_loads(monkeypatch, fast_config):
    calls = []
    fast_config.log_level = "DEBUG"

    class FakeManager:
        def load_configuration(self):
            calls.append("load")
            return fast_config

    async def fake_login(config):
        return WorkflowResult(status=STATUS_COMPLETED, success=True)

    monkeypatch.setattr(main, "configure_logging", lambda level="INFO": calls.append(f"logging:{level}"))
    monkeypatch.setattr(main, "ConfigurationManager", FakeManager)
    monkeypatch.setattr(main, "login", fake_login)

    result = asyncio.run(main.main())

    assert result.status == STATUS_COMPLETED
    assert calls == ["logging:INFO", "load", "logging:DEBUG"]
