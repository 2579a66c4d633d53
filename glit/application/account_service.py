from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

import httpx

from glit.config import PipelineSettings, UserConfig
from glit.domain.entities import AccountCommitResult
from glit.domain.interfaces import IRepositoryFactory
from glit.infrastructure.forge_client import ForgeClient

from .collector import CommitDataCollector
from .discovery import AccountFactory

log = logging.getLogger(__name__)


class AccountCommitService:
    """
    The top-level use case: discover an account's repositories and collect
    their commit data.

    Receives both stages via constructor injection. Discovery errors are not
    caught here; a broken listing means there is no trustworthy result to
    return.
    """

    def __init__(self, discovery: AccountFactory, collector: CommitDataCollector) -> None:
        self._discovery = discovery
        self._collector = collector

    async def execute(self) -> AccountCommitResult:
        started_at = datetime.now(tz=timezone.utc)

        account = await self._discovery.create()
        # the collector blocks on its worker threads; keep the event loop free
        collection = await asyncio.to_thread(self._collector.collect, account)

        elapsed = (datetime.now(tz=timezone.utc) - started_at).total_seconds()
        partial = bool(account.skipped) or not collection.is_complete
        status  = "partial" if partial else "success"

        log.info(
            "AccountCommitService | %s | %s | %d repositories | %d skipped | %d failed | %.1fs",
            account.name,
            status,
            len(collection.data),
            len(account.skipped),
            len(collection.failures),
            elapsed,
        )
        return AccountCommitResult(
            account_name = account.name,
            collection   = collection,
            discovered   = account.repository_count + len(account.skipped),
            skipped      = len(account.skipped),
            status       = status,
            elapsed_secs = elapsed,
        )


async def run_account(config: UserConfig,repository_factory: IRepositoryFactory,settings: PipelineSettings | None = None,client: httpx.AsyncClient | None = None) -> AccountCommitResult:
    """
    Wire the pipeline for one account and run it.

    When no client is injected one is created for this run and closed
    afterwards; an injected client is left open for its owner.
    """
    settings    = settings or PipelineSettings()
    owns_client = client is None
    client      = client or httpx.AsyncClient(follow_redirects=True)

    try:
        discovery = AccountFactory(
            config             = config,
            fetcher            = ForgeClient(client, timeout=settings.request_timeout),
            repository_factory = repository_factory,
            settings           = settings,
        )
        service = AccountCommitService(discovery=discovery, collector=CommitDataCollector())
        return await service.execute()
    finally:
        if owns_client:
            await client.aclose()
