from __future__ import annotations

import logging

import httpx

from glit.domain.errors import FetchError
from glit.domain.interfaces import IPageFetcher

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class ForgeClient(IPageFetcher):
    """
    Concrete implementation of IPageFetcher over plain HTTP GETs.

    The constructor receives an httpx.AsyncClient (injected) rather than
    creating one internally. Auth headers, proxies and retry transports are
    the caller's business — configure them on the client.
    """

    def __init__(self, client: httpx.AsyncClient, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._client  = client
        self._timeout = timeout

    async def fetch_text(self, url: str) -> str:
        """
        GET `url` once and return the decoded body.

        No retry here: a failed GET becomes a FetchError and the caller
        decides whether that is fatal.
        """
        try:
            response = await self._client.get(url, timeout=self._timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            log.warning("GET %s → HTTP %d", url, exc.response.status_code)
            raise FetchError(url, str(exc), exc.response.status_code) from exc
        except httpx.RequestError as exc:
            log.warning("GET %s failed: %s", url, exc)
            raise FetchError(url, f"{type(exc).__name__}: {exc}") from exc

        log.debug("GET %s → %d (%d bytes)", url, response.status_code, len(response.content))
        return response.text
