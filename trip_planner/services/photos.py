"""
Photo Resolver.
Finds a representative image URL for a place using Wikipedia, Wikimedia
Commons and Openverse, falling back to a seeded placeholder that never 404s.
"""
import asyncio
import logging
from typing import Any, Optional

import httpx

from .deeplinks import encode
from ..config import settings
from ..errors import UpstreamServiceError

logger = logging.getLogger(__name__)

DEFAULT_QUERY = "travel"
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
MIN_WIDTH = 200
MIN_HEIGHT = 150

CACHE_RESOLVED = "public, max-age=86400, stale-while-revalidate=604800"
CACHE_FALLBACK = "no-store"


def placeholder_url(width: int, height: int, seed: str) -> str:
    """Seeded placeholder image."""
    return f"https://picsum.photos/seed/{encode(seed)}/{width}/{height}"


def short_query(query: str) -> str:
    """Drop anything after a comma or ' - ' (e.g. 'Hadimba Temple, Manali')."""
    return query.split(",")[0].split(" - ")[0].strip()


def parse_dimension(value: Optional[str], default: int, minimum: int) -> int:
    """Parse a width/height query param, falling back to the default on junk."""
    try:
        number = int(float(value)) if value else default
    except (ValueError, OverflowError):
        number = default
    return max(minimum, number)


class PhotoResolver:
    """Resolves a search query to an image URL."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        self._client = client
        self.timeout = settings.photo_timeout_seconds if timeout is None else timeout
        self.headers = {"User-Agent": settings.photo_user_agent}

    async def _get_json(self, client: httpx.AsyncClient, url: str, params: dict = None) -> Any:
        response = await client.get(url, params=params, headers=self.headers)
        if response.status_code >= 400:
            raise UpstreamServiceError(f"{response.status_code} from {url}")
        return response.json()

    async def _step(self, name: str, coro) -> Optional[str]:
        """Run one lookup step; a failing step is logged and skipped."""
        try:
            return await coro
        except (httpx.HTTPError, UpstreamServiceError, ValueError, AttributeError, TypeError) as e:
            logger.warning(f"Photo lookup step '{name}' failed: {e}")
            return None

    # ---------- Wikipedia / Wikimedia ----------

    async def wiki_find_title(self, client: httpx.AsyncClient, query: str, lang: str = "en") -> Optional[str]:
        data = await self._get_json(
            client,
            f"https://{lang}.wikipedia.org/w/rest.php/v1/search/title",
            params={"q": query, "limit": 1},
        )
        pages = (data or {}).get("pages") or []
        return pages[0].get("title") if pages else None

    async def wiki_image(self, client: httpx.AsyncClient, query: str, lang: str = "en") -> Optional[str]:
        """Thumbnail (or original image) of the best-matching Wikipedia page."""
        title = await self.wiki_find_title(client, query, lang)
        if not title:
            return None
        summary = await self._get_json(
            client,
            f"https://{lang}.wikipedia.org/api/rest_v1/page/summary/{encode(title)}",
        )
        summary = summary or {}
        for key in ("thumbnail", "originalimage"):
            source = (summary.get(key) or {}).get("source")
            if source:
                return source
        return None

    async def commons_thumb(self, client: httpx.AsyncClient, query: str, width: int) -> Optional[str]:
        data = await self._get_json(
            client,
            "https://commons.wikimedia.org/w/api.php",
            params={
                "action": "query",
                "format": "json",
                "origin": "*",
                "prop": "imageinfo",
                "generator": "search",
                "gsrsearch": query,
                "gsrnamespace": 6,
                "gsrlimit": 1,
                "iiprop": "url",
                "iiurlwidth": width,
            },
        )
        pages = ((data or {}).get("query") or {}).get("pages")
        if not pages:
            return None
        first = next(iter(pages.values()))
        info = (first.get("imageinfo") or [{}])[0]
        return info.get("thumburl")

    # ---------- Openverse (no key) ----------

    async def openverse_image(self, client: httpx.AsyncClient, query: str) -> Optional[str]:
        # flickr sometimes 403s thumbnails
        data = await self._get_json(
            client,
            "https://api.openverse.engineering/v1/images/",
            params={"q": query, "page_size": 1, "excluded_source": "flickr"},
        )
        results = (data or {}).get("results") or []
        if not results:
            return None
        return results[0].get("thumbnail") or results[0].get("url")

    # ---------- Resolver ----------

    async def _resolve_chain(self, client: httpx.AsyncClient, query: str, width: int, height: int) -> str:
        steps = [
            ("wikipedia-en", lambda: self.wiki_image(client, query, "en")),
            # Hindi Wikipedia helps with Indian places
            ("wikipedia-hi", lambda: self.wiki_image(client, query, "hi")),
            ("commons", lambda: self.commons_thumb(client, query, width)),
        ]
        short = short_query(query)
        if short and short != query:
            steps += [
                ("wikipedia-en-short", lambda: self.wiki_image(client, short, "en")),
                ("commons-short", lambda: self.commons_thumb(client, short, width)),
            ]
        steps.append(("openverse", lambda: self.openverse_image(client, query)))

        for name, make in steps:
            url = await self._step(name, make())
            if url:
                logger.debug(f"Photo for '{query}' resolved via {name}")
                return url

        return placeholder_url(width, height, query)

    async def resolve(self, query: str, width: int, height: int) -> str:
        """
        Resolve an image URL for ``query``.

        Raises asyncio.TimeoutError when the whole chain exceeds the timeout.
        """
        query = query.strip() or DEFAULT_QUERY
        if self._client is not None:
            return await asyncio.wait_for(
                self._resolve_chain(self._client, query, width, height), self.timeout
            )
        async with httpx.AsyncClient(follow_redirects=True) as client:
            return await asyncio.wait_for(
                self._resolve_chain(client, query, width, height), self.timeout
            )


# Global instance
photo_resolver = PhotoResolver()
