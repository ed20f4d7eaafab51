"""Mirror node REST reader for consensus topic messages.

Walks ``/api/v1/topics/{topic_id}/messages`` page by page, following
``links.next`` until the mirror stops returning one.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from hedera_tools.config.schema import TESTNET_MIRROR_URL

logger = logging.getLogger(__name__)


class MirrorClient:
    """Async client for the Hedera mirror node REST API.

    Usage::

        async with MirrorClient("https://testnet.mirrornode.hedera.com") as mirror:
            messages = await mirror.fetch_topic_messages("0.0.1234")
    """

    def __init__(
        self,
        base_url: str = TESTNET_MIRROR_URL,
        *,
        timeout: float = 30.0,
        max_pages: int | None = 100,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._max_pages = max_pages
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> MirrorClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    def topic_messages_url(self, topic_id: str, limit: int) -> str:
        return f"{self._base_url}/api/v1/topics/{topic_id}/messages?limit={limit}"

    def _resolve_next(self, link: str) -> str:
        """Resolve a ``links.next`` value against the base URL."""
        if link.startswith(("http://", "https://")):
            return link
        if not link.startswith("/"):
            link = "/" + link
        return self._base_url + link

    def _parse_page(self, data: Any) -> tuple[list[dict[str, Any]], str | None]:
        """Split one mirror page into its messages and the next page URL.

        A malformed ``links`` section keeps the page's messages but ends
        the walk.

        Raises:
            ValueError: If the page or its ``messages`` list is malformed.
        """
        if not isinstance(data, dict):
            msg = "mirror page is not a JSON object"
            raise ValueError(msg)
        page = data.get("messages") or []
        if not isinstance(page, list) or not all(isinstance(m, dict) for m in page):
            msg = "mirror page 'messages' is not a list of objects"
            raise ValueError(msg)
        links = data.get("links") or {}
        next_link = links.get("next") if isinstance(links, dict) else links
        if not next_link:
            return page, None
        if not isinstance(links, dict) or not isinstance(next_link, str):
            logger.error("Malformed mirror next link %r; stopping", next_link)
            return page, None
        return page, self._resolve_next(next_link)

    async def fetch_topic_messages(
        self,
        topic_id: str,
        *,
        wait_ms: int = 5000,
        limit: int = 10,
    ) -> list[dict[str, Any]]:
        """Collect every message the mirror has for ``topic_id``.

        Sleeps ``wait_ms`` first so freshly submitted messages have a
        chance to be indexed. A failed request ends the walk and the
        messages gathered so far are returned; a failed first request
        therefore yields an empty list.

        The walk also stops when ``links.next`` points at a page already
        fetched, or after ``max_pages`` pages when a budget is set.
        """
        if wait_ms > 0:
            await asyncio.sleep(wait_ms / 1000)

        messages: list[dict[str, Any]] = []
        visited: set[str] = set()
        url: str | None = self.topic_messages_url(topic_id, limit)

        while url:
            if url in visited:
                logger.warning("Mirror pagination cycle at %s; stopping", url)
                break
            if self._max_pages is not None and len(visited) >= self._max_pages:
                logger.warning(
                    "Mirror pagination budget of %d pages reached for topic %s",
                    self._max_pages,
                    topic_id,
                )
                break
            visited.add(url)

            try:
                response = await self._http.get(url)
                response.raise_for_status()
                page, next_url = self._parse_page(response.json())
            except (httpx.HTTPError, ValueError) as e:
                logger.error("Error querying topic %s messages via REST: %s", topic_id, e)
                break

            messages.extend(page)
            url = next_url

        logger.debug(
            "Fetched %d messages for topic %s over %d pages",
            len(messages),
            topic_id,
            len(visited),
        )
        return messages
