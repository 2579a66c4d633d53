from __future__ import annotations

from urllib.parse import quote, urlsplit, urlunsplit

import httpx

LISTING_PARAMS = {"tab": "repositories", "type": "source"}


def listing_url(account_url: str) -> str:
    """'https://forge/alice' → 'https://forge/alice?tab=repositories&type=source'"""
    return str(httpx.URL(account_url).copy_merge_params(LISTING_PARAMS))


def pages_count(repo_count: int, page_size: int) -> int:
    """
    Number of listing pages for `repo_count` repositories.

    An exact multiple of `page_size` does not get a trailing empty page.
    """
    if repo_count < 0:
        raise ValueError(f"repo_count must be >= 0, got {repo_count}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    return -(-repo_count // page_size)


def build_page_urls(listing: str, page_count: int) -> list[str]:
    """One URL per page, 1-based: `<listing>&page=1` … `&page=<page_count>`."""
    base = httpx.URL(listing)
    return [str(base.copy_add_param("page", page)) for page in range(1, page_count + 1)]


def repository_url(account_url: str, name: str) -> str:
    """
    Absolute repository URL with a trailing separator:
    ('https://forge/alice', 'project') → 'https://forge/alice/project/'

    Query and fragment of the account URL are dropped. The name is
    percent-quoted so distinct names always give distinct URLs.
    """
    parts = urlsplit(account_url)
    path = f"{parts.path.rstrip('/')}/{quote(name, safe='')}/"
    return urlunsplit((parts.scheme, parts.netloc, path, "", ""))
