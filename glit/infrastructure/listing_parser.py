"""
Anti-corruption layer for the forge's repository listing markup.

Both selectors are brittle by nature. If the forge changes its layout,
fix it HERE only; the rest of the pipeline just sees a MarkupError or a
ParseError pointing at the page that broke.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from glit.domain.errors import MarkupError, ParseError

log = logging.getLogger(__name__)

REPOSITORY_COUNT_SELECTOR = "turbo-frame > div > div > div > div > strong"
REPOSITORY_LINK_SELECTOR  = "turbo-frame > div > div > ul > li > div > div > h3 > a"


def parse_repository_count(html: str, url: str, selector: str = REPOSITORY_COUNT_SELECTOR) -> int:
    """
    Read the total repository count from a listing index page.

    The forge renders it human-formatted ("1,234"), so whitespace and
    thousands separators are stripped before parsing.
    """
    element = BeautifulSoup(html, "html.parser").select_one(selector)
    if element is None:
        raise MarkupError(url, selector)

    text = element.get_text()
    cleaned = text.strip().replace(",", "")
    try:
        count = int(cleaned)
    except ValueError as exc:
        raise ParseError(url, text, "repository count is not an integer") from exc
    if count < 0:
        raise ParseError(url, text, "repository count is negative")
    return count


def repository_name_from_href(href: str, url: str) -> str:
    """Last path segment of a repository link: '/alice/project' → 'project'."""
    name = href.split("?", 1)[0].split("#", 1)[0].rstrip("/").rsplit("/", 1)[-1]
    if not name:
        raise ParseError(url, href, "repository link has no name segment")
    return name


def parse_repository_names(html: str, url: str, selector: str = REPOSITORY_LINK_SELECTOR) -> list[str]:
    """
    Return the repository names listed on one page, in document order.

    A page with no rows yields an empty list; only an anchor without an
    href is treated as broken markup.
    """
    names: list[str] = []
    for anchor in BeautifulSoup(html, "html.parser").select(selector):
        href = anchor.get("href")
        if not href:
            raise ParseError(url, str(anchor), "repository link has no href")
        names.append(repository_name_from_href(href, url))

    log.debug("Parsed %d repository links from %s", len(names), url)
    return names
