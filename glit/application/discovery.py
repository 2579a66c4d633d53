from __future__ import annotations
import asyncio
import logging

from glit.config import PipelineSettings, UserConfig
from glit.domain.entities import Account, RepositoryFailure, RepositoryRequest
from glit.domain.errors import FetchError, MarkupError, PageFetchError, RepositoryFactoryError
from glit.domain.interfaces import IPageFetcher, IRepository, IRepositoryFactory
from glit.infrastructure.listing_parser import (
    REPOSITORY_LINK_SELECTOR,
    parse_repository_count,
    parse_repository_names,
)

from .pages import build_page_urls, listing_url, pages_count, repository_url

log = logging.getLogger(__name__)


class AccountFactory:
    """
    Discovery stage: account URL → Account with every repository handle.

    All dependencies are injected:
      - IPageFetcher        → how to GET forge pages
      - IRepositoryFactory  → how a URL becomes a repository handle
      - PipelineSettings    → page size and the page-fetch concurrency cap

    Count fetch and page fetches are fatal on error (the repository set would
    be unreliable); a factory failure only drops that one repository.
    """

    def __init__(self,config: UserConfig,fetcher: IPageFetcher,repository_factory: IRepositoryFactory,settings: PipelineSettings | None = None) -> None:
        self._config             = config
        self._fetcher            = fetcher
        self._repository_factory = repository_factory
        self._settings           = settings or PipelineSettings()

        self._name        = config.account_name
        self._url         = config.url
        self._listing_url = listing_url(config.url)

    async def repositories_count(self) -> int:
        """Total repository count, read from the listing index page."""
        html = await self._fetcher.fetch_text(self._listing_url)
        return parse_repository_count(html, self._listing_url)

    async def _fetch_page(self, semaphore: asyncio.Semaphore, page: int, url: str) -> list[str]:
        """
        GET one listing page and return the repository URLs found on it.
        The semaphore is held only for the network call. Every page in the
        computed range must list at least one repository.
        """
        async with semaphore:
            try:
                html = await self._fetcher.fetch_text(url)
            except FetchError as exc:
                raise PageFetchError(url, page, exc.reason, exc.status_code) from exc

        names = parse_repository_names(html, url)
        if not names:
            # page is inside the advertised count, so an empty one means the rows moved
            raise MarkupError(url, REPOSITORY_LINK_SELECTOR, page)

        urls = [repository_url(self._url, name) for name in names]
        log.debug("Page %d | %d repositories | %s", page, len(urls), url)
        return urls

    async def fetch_repository_urls(self, page_urls: list[str]) -> list[str]:
        """
        Fetch every listing page with at most `max_concurrent_pages` in flight.

        Every page is scheduled up front; the semaphore replenishes slots as
        requests finish. The result is flattened in page order, so the same
        listing always gives the same sequence. No deduplication.

        The first failing page aborts the lot: its siblings are cancelled and
        awaited before the error is re-raised.
        """
        semaphore = asyncio.Semaphore(self._settings.max_concurrent_pages)
        tasks = [asyncio.ensure_future(self._fetch_page(semaphore, page, url)) for page, url in enumerate(page_urls, start=1)]
        try:
            pages = await asyncio.gather(*tasks)
        except Exception:
            # the account is abandoned; stop the remaining page requests
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return [url for page in pages for url in page]

    async def _create_repository(self, url: str) -> IRepository | RepositoryFailure:
        request = RepositoryRequest(url=url, all_branches=self._config.all_branches)
        try:
            return await self._repository_factory.create(request)
        except Exception as exc:
            error = RepositoryFactoryError(url, exc)
            log.error("Repository factory failed, skipping: %s", error, exc_info=True)
            return RepositoryFailure(url=url, error=error)

    async def fetch_repository_list(self, page_urls: list[str]) -> tuple[list[IRepository], list[RepositoryFailure]]:
        """
        Page fetch, then one factory call per discovered URL, all at once.
        Returns (handles, failures).
        """
        urls = await self.fetch_repository_urls(page_urls)
        results = await asyncio.gather(*[self._create_repository(url) for url in urls])

        repositories = [r for r in results if not isinstance(r, RepositoryFailure)]
        failures     = [r for r in results if isinstance(r, RepositoryFailure)]
        return repositories, failures

    async def create(self) -> Account:
        """
        Run the whole discovery stage and return the finished Account.

        Raises:
            DiscoveryError — count or page fetch failed; nothing is returned
        """
        repo_count = await self.repositories_count()
        page_urls  = build_page_urls(self._listing_url, pages_count(repo_count, self._settings.page_size))

        log.info(
            "Discovery | %s | %d repositories | %d pages | concurrency=%d",
            self._name,
            repo_count,
            len(page_urls),
            self._settings.max_concurrent_pages,
        )

        repositories, failures = await self.fetch_repository_list(page_urls)

        if failures:
            log.warning("Discovery | %s | %d repositories skipped by the factory", self._name, len(failures))
        log.info("Discovery | %s | %d repository handles ready", self._name, len(repositories))

        return Account(
            name          = self._name,
            canonical_url = self._url,
            repositories  = tuple(repositories),
            skipped       = tuple(failures),
        )
