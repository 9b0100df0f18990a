"""
Link sources: where a search gets the neighbours of an article.

`LinkSource.fetch_links` is the only call the search core makes. It never raises for
a provider failure; the article is treated as having no links so one bad page cannot
abort a search direction.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx

from wiki_path.exceptions import LinkSourceError
from wiki_path.models import Direction
from wiki_path.wikipedia.link_cache import LinkCache

logger = logging.getLogger(__name__)


class LinkSource(ABC):
    """
    Abstract article-link source with caching and in-flight de-duplication.

    Subclasses implement `_query_links`, raising `LinkSourceError` when the
    provider cannot answer.
    """

    def __init__(self, cache: Optional[LinkCache] = None):
        self.cache = cache
        self.query_count = 0
        # article -> future resolving to the links of a query already under way
        self._pending: Dict[str, asyncio.Future] = {}

    @abstractmethod
    async def _query_links(self, article: str) -> List[str]:
        """Ask the provider for the links of `article`."""
        pass

    async def fetch_links(self, article: str) -> List[str]:
        """
        Return the link titles of `article`.

        Consults the cache first. On a miss the provider is queried once, even if
        several searches ask at the same time, and a successful answer is cached
        even when it is empty. Provider failures are logged and yield [].
        """
        if self.cache is not None:
            cached = self.cache.get(article)
            if cached is not None:
                logger.debug(f"Cache hit for links of '{article}': {len(cached)} links")
                return cached

        pending = self._pending.get(article)
        if pending is not None:
            try:
                return list(await asyncio.shield(pending))
            except asyncio.CancelledError:
                if not pending.cancelled():
                    raise
                # The owning search was cancelled mid-query; query ourselves
                logger.debug(f"Shared query for '{article}' was abandoned, retrying")

        loop = asyncio.get_running_loop()
        fut = loop.create_future()
        self._pending[article] = fut
        try:
            links = await self._query_and_store(article)
            fut.set_result(links)
            return list(links)
        finally:
            if not fut.done():
                fut.cancel()
            if self._pending.get(article) is fut:
                del self._pending[article]

    async def _query_and_store(self, article: str) -> List[str]:
        self.query_count += 1
        try:
            links = await self._query_links(article)
        except LinkSourceError as e:
            logger.warning(f"Failed to fetch links for '{article}': {e.message}")
            return []

        if self.cache is not None:
            self.cache.set(article, links)
        logger.debug(f"Fetched {len(links)} links for '{article}'")
        return links

    async def aclose(self) -> None:
        """Release any resources held by the source."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()


class WikipediaLinkSource(LinkSource):
    """
    Link source backed by the live MediaWiki Action API.

    FORWARD returns the articles a page links to (prop=links); BACKWARD returns the
    articles that link to the page (list=backlinks). At most `link_limit` titles are
    requested per article; continuation is not followed.
    """

    def __init__(
        self,
        cache: Optional[LinkCache] = None,
        direction: Direction = Direction.FORWARD,
        language: str = "en",
        link_limit: int = 500,
        namespace: Optional[int] = 0,
        timeout: float = 10.0,
        user_agent: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(cache)
        self.direction = direction
        self.language = language
        self.base_url = f"https://{language}.wikipedia.org/w/api.php"
        self.link_limit = link_limit
        self.namespace = namespace
        self.timeout = timeout
        self.headers = {"Accept-Encoding": "gzip"}
        if user_agent:
            self.headers["User-Agent"] = user_agent
        self._client = client

    def _build_params(self, article: str) -> Dict[str, str]:
        params = {"action": "query", "format": "json", "formatversion": "2"}
        if self.direction == Direction.FORWARD:
            params.update({
                "prop": "links", "titles": article,
                "pllimit": str(self.link_limit), "redirects": "1",
            })
            if self.namespace is not None:
                params["plnamespace"] = str(self.namespace)
        else:
            params.update({
                "list": "backlinks", "bltitle": article,
                "bllimit": str(self.link_limit),
            })
            if self.namespace is not None:
                params["blnamespace"] = str(self.namespace)
        return params

    async def _get_json(self, params: Dict[str, str]) -> Dict[str, Any]:
        try:
            if self._client is not None:
                response = await self._client.get(self.base_url, params=params, headers=self.headers)
            else:
                async with httpx.AsyncClient(timeout=self.timeout, headers=self.headers) as client:
                    response = await client.get(self.base_url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            raise LinkSourceError(f"Wikipedia API request failed: {e}") from e
        except ValueError as e:
            raise LinkSourceError(f"Wikipedia API returned invalid JSON: {e}") from e

    async def _query_links(self, article: str) -> List[str]:
        data = await self._get_json(self._build_params(article))
        try:
            return self._parse_links(article, data)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise LinkSourceError(f"Unexpected Wikipedia API response: {e!r}") from e

    def _parse_links(self, article: str, data: Any) -> List[str]:
        if "error" in data:
            error = data["error"]
            info = error.get("info", error) if isinstance(error, dict) else error
            raise LinkSourceError(f"Wikipedia API error: {info}")

        query = data.get("query")
        if not query:
            return []

        if self.direction == Direction.BACKWARD:
            entries = query.get("backlinks", [])
        else:
            pages = query.get("pages", [])
            if not pages:
                return []
            page = pages[0]
            if page.get("missing") or page.get("invalid"):
                logger.debug(f"Article '{article}' does not exist")
                return []
            entries = page.get("links", [])

        titles = [entry["title"] for entry in entries]
        if not all(isinstance(title, str) for title in titles):
            raise TypeError(f"non-string link title in {titles!r}")
        return titles[:self.link_limit]

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
