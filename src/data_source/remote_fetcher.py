from __future__ import annotations

import asyncio
import logging
from typing import Optional

import aiohttp

from data_source.errors import NetworkError, SizeLimitExceededError
from data_source.models import RemoteSpec

logger = logging.getLogger(__name__)


class RemoteFetcher:
    """
    Fetch one URL into memory.

    A direct connection is tried first. When sending it fails and a proxy is configured
    but was not used yet, the request is sent exactly once more through the proxy. Error
    statuses and failures while reading the body are not retried. The size limit
    is only enforced when the server declares a Content-Length.
    """

    def __init__(self, spec: RemoteSpec) -> None:
        self._spec = spec

    @property
    def spec(self) -> RemoteSpec:
        return self._spec

    async def fetch(self) -> bytes:
        spec = self._spec
        initial_proxy = spec.proxy if spec.use_proxy_by_default and spec.proxy else None
        timeout = aiohttp.ClientTimeout(total=spec.timeout_seconds)

        logger.debug("Remote fetch start. url=%s proxy=%s", spec.url, initial_proxy)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            try:
                return await self._request(session, proxy=initial_proxy)
            except aiohttp.ClientResponseError as e:
                raise NetworkError(f"Remote fetch returned an error status. url={spec.url} status={e.status}") from e
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                if initial_proxy is not None or not spec.proxy:
                    raise NetworkError(f"Remote fetch failed. url={spec.url} error={e!r}") from e
                logger.warning("Direct fetch failed, retrying through proxy. url=%s error=%r", spec.url, e)

            try:
                return await self._request(session, proxy=spec.proxy)
            except aiohttp.ClientResponseError as e:
                raise NetworkError(f"Remote fetch returned an error status. url={spec.url} status={e.status}") from e
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                raise NetworkError(f"Remote fetch through proxy failed. url={spec.url} error={e!r}") from e

    async def _request(self, session: aiohttp.ClientSession, *, proxy: Optional[str]) -> bytes:
        spec = self._spec
        async with session.get(spec.url, headers=list(spec.headers), proxy=proxy) as response:
            response.raise_for_status()

            content_length = response.content_length
            if spec.size_limit is not None and content_length is not None and content_length > spec.size_limit:
                logger.warning(
                    "Remote content too large. url=%s content_length=%d size_limit=%d",
                    spec.url,
                    content_length,
                    spec.size_limit,
                )
                raise SizeLimitExceededError(content_length=content_length, size_limit=spec.size_limit)

            # Headers arrived, so the send succeeded: body failures are terminal.
            try:
                data = await response.read()
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                raise NetworkError(f"Failed to read response body. url={spec.url} error={e!r}") from e
            logger.debug("Remote fetch success. url=%s size=%d", spec.url, len(data))
            return data
