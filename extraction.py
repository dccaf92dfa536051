"""
extraction.py

This module reads structured data out of Leanpub pages: a snapshot of the
login form's inputs, and the published-book links on the author dashboard.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple
from urllib.parse import urljoin, urlsplit

from dom import DomDriver

logger = logging.getLogger(__name__)

BOOK_PATH_SUFFIX = "/overview"

_C0_CONTROL_OR_SPACE = "".join(chr(c) for c in range(0x21))
_TAB_OR_NEWLINE = re.compile(r"[\t\r\n]")


@dataclass(frozen=True)
class FormField:
    """Snapshot of one input element at inspection time."""
    name: str
    value: str
    type: str


@dataclass(frozen=True)
class BookLink:
    """A published book: single path segment identifier plus visible title."""
    identifier: str
    title: str


def normalize_href(href: str) -> str:
    """Drop surrounding C0 controls/spaces and embedded tab, CR, LF, as browsers do."""
    return _TAB_OR_NEWLINE.sub("", href.strip(_C0_CONTROL_OR_SPACE))


def page_origin(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"


def book_identifier(path: str, suffix: str = BOOK_PATH_SUFFIX) -> Optional[str]:
    """Return the single-segment identifier of a ``/<identifier><suffix>`` path, or None."""
    if not path.endswith(suffix):
        return None
    identifier = path[1:] if path.startswith("/") else path
    if identifier.endswith(suffix):
        identifier = identifier[:len(identifier) - len(suffix)]
    if not identifier or "/" in identifier:
        return None
    return identifier


def extract_book_links(anchors: Iterable[Tuple[str, str]], origin: str,
                       suffix: str = BOOK_PATH_SUFFIX) -> List[BookLink]:
    """
    Turn (href, text) pairs into BookLinks.

    Hrefs are resolved against ``origin``; only paths ending in ``suffix``
    with a single-segment identifier and a non-blank text survive. The first
    anchor seen for an identifier wins.
    """
    books: Dict[str, BookLink] = {}
    for href, text in anchors:
        try:
            path = urlsplit(urljoin(origin + "/", normalize_href(href or ""))).path
        except ValueError:
            logger.debug(f"Skipping malformed href: {href!r}")
            continue

        identifier = book_identifier(path, suffix)
        if identifier is None:
            continue

        title = (text or "").strip()
        if not title:
            continue

        if identifier not in books:
            books[identifier] = BookLink(identifier=identifier, title=title)
    return list(books.values())


async def inspect_form(dom: DomDriver) -> List[FormField]:
    """Snapshot every input of the first form on the page; [] if there is no form."""
    form = await dom.query_one("form")
    if form is None:
        logger.warning("No form found on the page")
        return []

    fields = []
    for element in await dom.query_all("input", root=form):
        fields.append(FormField(
            name=await dom.read_attribute(element, "name") or "",
            value=await dom.read_value(element),
            type=await dom.read_attribute(element, "type") or "",
        ))
    return fields


async def read_form_action(dom: DomDriver) -> Optional[str]:
    form = await dom.query_one("form")
    if form is None:
        return None
    return await dom.read_attribute(form, "action")


async def read_user_indicator(dom: DomDriver, selectors: Iterable[str]) -> Optional[str]:
    """Text of the first user-menu element present, trimmed."""
    for selector in selectors:
        element = await dom.query_one(selector)
        if element is not None:
            return (await dom.read_text(element)).strip()
    return None


async def fetch_published_books(dom: DomDriver, suffix: str = BOOK_PATH_SUFFIX) -> List[BookLink]:
    """Collect identifier/title pairs from the current (published books) page."""
    anchors = []
    for element in await dom.query_all("a[href]"):
        anchors.append((
            await dom.read_attribute(element, "href") or "",
            await dom.read_text(element),
        ))
    origin = page_origin(await dom.current_url())
    return extract_book_links(anchors, origin, suffix)
