from __future__ import annotations

import asyncio

from config_manager import LeanpubSiteConfig
from conftest import FakeDom
from verification import is_verified, verify_login

PUBLISHED = "https://leanpub.com/author_dashboard/books/published"
TITLE = "Leanpub - Your Books"


def test_untrimmed_title_on_published_url_verifies():
    assert is_verified(PUBLISHED, " Leanpub - Your Books ", PUBLISHED, TITLE)


def test_any_mismatch_fails():
    assert not is_verified(PUBLISHED + "/", TITLE, PUBLISHED, TITLE)
    assert not is_verified("https://leanpub.com/login", TITLE, PUBLISHED, TITLE)
    assert not is_verified(PUBLISHED, "Leanpub - Your books", PUBLISHED, TITLE)
    assert not is_verified(PUBLISHED, "Leanpub - Log In", PUBLISHED, TITLE)


def site() -> LeanpubSiteConfig:
    config = LeanpubSiteConfig()
    config.settle_delay_ms = 0
    return config


def test_verify_login_success():
    dom = FakeDom()
    dom.route(PUBLISHED, title=" Leanpub - Your Books ")
    assert asyncio.run(verify_login(dom, site())) is True
    assert dom.visited == [PUBLISHED]


def test_verify_login_redirected_to_login_page():
    dom = FakeDom()
    dom.route(PUBLISHED, final_url="https://leanpub.com/login", title="Leanpub - Your Books")
    assert asyncio.run(verify_login(dom, site())) is False


def test_verify_login_navigation_error_is_failure():
    dom = FakeDom()
    dom.failing_urls.add(PUBLISHED)
    assert asyncio.run(verify_login(dom, site())) is False


def test_verify_login_goes_through_navigator(monkeypatch):
    calls = []

    async def fake_navigate(dom, url):
        calls.append(url)
        return False

    monkeypatch.setattr("verification.navigate", fake_navigate)
    dom = FakeDom()
    dom.route(PUBLISHED, title=TITLE)

    assert asyncio.run(verify_login(dom, site())) is False
    assert calls == [PUBLISHED]
    assert dom.visited == []
