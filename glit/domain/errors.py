"""
Domain Layer — Error Taxonomy
-----------------------------
Two families with two different policies:

  DiscoveryError   → the listing is unreliable, abort the whole account.
  RepositoryError  → one repository is broken, skip it and keep going.

Every error carries the context an operator needs to tell a forge layout
drift (MarkupError / ParseError) apart from a network hiccup (FetchError).
"""

from __future__ import annotations


class GlitError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(GlitError):
    """An account URL or a pipeline setting is not usable."""


# ---------------------------------------------------------------------------
# Discovery stage — fatal for the account
# ---------------------------------------------------------------------------

class DiscoveryError(GlitError):
    """Listing pages could not be turned into a repository set."""

    def __init__(self, message: str, url: str) -> None:
        self.url = url
        super().__init__(f"{message} [{url}]")


class FetchError(DiscoveryError):
    """Transport failure or non-success HTTP status."""

    def __init__(self, url: str, reason: str, status_code: int | None = None) -> None:
        self.reason = reason
        self.status_code = status_code
        status = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"GET failed{status}: {reason}", url)


class PageFetchError(FetchError):
    """A single listing page could not be fetched."""

    def __init__(self, url: str, page: int, reason: str, status_code: int | None = None) -> None:
        self.page = page
        super().__init__(url, f"page {page}: {reason}", status_code)


class MarkupError(DiscoveryError):
    """Expected structural element is missing — the forge markup changed."""

    def __init__(self, url: str, selector: str, page: int | None = None) -> None:
        self.selector = selector
        self.page = page
        where = f"page {page}: " if page is not None else ""
        super().__init__(f"{where}no element matches {selector!r}", url)


class ParseError(DiscoveryError):
    """Element was found but its text or href is unusable."""

    def __init__(self, url: str, text: str, detail: str) -> None:
        self.text = text
        super().__init__(f"{detail}: {text!r}", url)


# ---------------------------------------------------------------------------
# Per-repository — recorded, never aborts the run
# ---------------------------------------------------------------------------

class RepositoryError(GlitError):
    """Something went wrong for one specific repository."""

    def __init__(self, repository: str, cause: BaseException) -> None:
        self.repository = repository
        self.cause = cause
        super().__init__(f"{repository}: {type(cause).__name__}: {cause}")


class RepositoryFactoryError(RepositoryError):
    """Building the repository handle failed; `repository` is the URL."""


class ExtractionError(RepositoryError):
    """committed_data() raised; `repository` is the repository name."""
