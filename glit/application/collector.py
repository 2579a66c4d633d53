from __future__ import annotations
import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Any

from glit.domain.entities import Account, CommitCollection, CommitDataEntry
from glit.domain.errors import ExtractionError
from glit.domain.interfaces import IRepository

log = logging.getLogger(__name__)


def _extract(repository: IRepository) -> tuple[str, CommitDataEntry]:
    """Worker body: one repository, one report."""
    return repository.name, CommitDataEntry(repositories_data=repository.committed_data())


class CommitDataCollector:
    """
    Extraction stage: one worker thread per repository, fanned into one dict.

    No worker cap: the repository count is the parallelism bound. Discovery
    is the stage that throttles, to spare the forge.

    Only this object writes to the CommitCollection; workers just return
    their (name, entry) pair and the collector inserts as they complete.
    """

    def collect(self, account: Account) -> CommitCollection:
        """
        Block until every repository has reported, then return the result.

        A repository whose extraction raises ends up in `failures`, keyed by
        name; the others are unaffected. Duplicate names: last one to finish
        wins, whether it succeeded or failed, so a name is never in both dicts.
        """
        collection = CommitCollection()
        repositories = account.repositories
        if not repositories:
            log.info("Extraction | %s | nothing to extract", account.name)
            return collection

        log.info("Extraction | %s | starting %d workers", account.name, len(repositories))

        with ThreadPoolExecutor(max_workers=len(repositories), thread_name_prefix=f"glit-{account.name}") as pool:
            futures: dict[Future[tuple[str, CommitDataEntry]], Any] = {
                pool.submit(_extract, repository): repository for repository in repositories
            }

            for future in as_completed(futures):
                repository = futures[future]
                try:
                    name, entry = future.result()
                except Exception as exc:
                    error = ExtractionError(repository.name, exc)
                    log.error("Extraction failed, skipping: %s", error, exc_info=exc)
                    collection.data.pop(repository.name, None)
                    collection.failures[repository.name] = error
                    continue

                if name in collection.data:
                    log.warning("Extraction | duplicate repository name %r, keeping the latest result", name)
                collection.failures.pop(name, None)
                collection.data[name] = entry
                log.debug("Extraction | %s | %s done (%d/%d)", account.name, name, len(collection.data) + len(collection.failures), len(repositories))

        log.info(
            "Extraction | %s | %d collected | %d failed",
            account.name,
            len(collection.data),
            len(collection.failures),
        )
        return collection
