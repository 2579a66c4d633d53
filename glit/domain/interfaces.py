"""
Domain Layer — Interfaces (Abstract Contracts)
-----------------------------------------------
The application layer only ever talks to these. Concrete forge clients and
repository analyzers live elsewhere and are injected, so the pipeline can
be driven entirely by fakes in tests.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any

from .entities import RepositoryRequest


class IPageFetcher(ABC):
    """
    Contract for anything that can GET a forge page and return its body.
    """

    @abstractmethod
    async def fetch_text(self, url: str) -> str:
        """
        Return the response body for `url`.

        Raises:
            FetchError — transport failure or non-success status
        """
        ...


class IRepository(ABC):
    """
    A repository handle as produced by the external analyzer.

    `committed_data` is blocking and potentially slow (clone, walk the
    history); it is always called from a worker thread.
    """

    name: str

    @abstractmethod
    def committed_data(self) -> Any:
        """Return the analyzer's commit statistics for this repository."""
        ...


class IRepositoryFactory(ABC):
    """
    Contract for turning a discovered repository URL into a handle.
    """

    @abstractmethod
    async def create(self, request: RepositoryRequest) -> IRepository:
        ...
