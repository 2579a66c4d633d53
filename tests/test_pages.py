"""Tests for listing/page/repository URL building."""

import pytest

from glit.application.pages import build_page_urls, listing_url, pages_count, repository_url


@pytest.mark.parametrize(
    ("repo_count", "expected"),
    [(0, 0), (1, 1), (29, 1), (30, 1), (31, 2), (59, 2), (60, 2), (61, 3)],
)
def test_pages_count_with_forge_page_size(repo_count, expected):
    assert pages_count(repo_count, 30) == expected


def test_pages_count_rejects_bad_input():
    with pytest.raises(ValueError):
        pages_count(-1, 30)
    with pytest.raises(ValueError):
        pages_count(10, 0)


def test_listing_url_adds_source_tab():
    assert listing_url("https://forge.test/alice") == "https://forge.test/alice?tab=repositories&type=source"


def test_build_page_urls_is_one_based():
    urls = build_page_urls("https://forge.test/alice?tab=repositories&type=source", 3)

    assert urls == [
        "https://forge.test/alice?tab=repositories&type=source&page=1",
        "https://forge.test/alice?tab=repositories&type=source&page=2",
        "https://forge.test/alice?tab=repositories&type=source&page=3",
    ]


def test_build_page_urls_empty_account():
    assert build_page_urls("https://forge.test/alice?tab=repositories&type=source", 0) == []


@pytest.mark.parametrize("account_url", ["https://forge.test/alice", "https://forge.test/alice/"])
def test_repository_url_has_trailing_separator(account_url):
    assert repository_url(account_url, "project") == "https://forge.test/alice/project/"


def test_repository_url_is_injective():
    names = ["a", "b", "a-b", "a.b", "a_b", "A", "ab", "a%2Fb", "a/b"]

    urls = {repository_url("https://forge.test/alice", name) for name in names}

    assert len(urls) == len(names)
