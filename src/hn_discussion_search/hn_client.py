import asyncio
import time
from typing import Any, Dict, List, Optional, Tuple

import httpx

from .categories import StoryCategory, list_endpoint_url
from .config import (
    HN_API_BASE,
    HTTP_RETRIES,
    HTTP_TIMEOUT,
    MIN_REQUEST_INTERVAL,
    RETRY_BACKOFF_SECONDS,
)
from .errors import DecodeError, TransportError
from .models import Comment, Story


USER_AGENT = "hn-discussion-search/0.1 (+https://github.com/HackerNews/API)"

_MISSING = object()


def _field(data: Dict[str, Any], key: str, types, *, required: bool, url: str = ""):
    # null and absent are the same thing upstream
    value = data.get(key, _MISSING)
    if value is _MISSING or value is None:
        if required:
            raise DecodeError(f"missing required field {key!r}", url=url)
        return None
    if isinstance(value, bool) or not isinstance(value, types):
        raise DecodeError(
            f"field {key!r} has type {type(value).__name__}", url=url
        )
    return value


def _kids(data: Dict[str, Any], url: str) -> Tuple[int, ...]:
    kids = _field(data, "kids", list, required=False, url=url) or []
    if not all(isinstance(k, int) and not isinstance(k, bool) for k in kids):
        raise DecodeError("field 'kids' must be a list of integers", url=url)
    return tuple(kids)


def _expect_object(data: Any, url: str) -> Dict[str, Any]:
    if data is None:
        raise DecodeError("item not found (null body)", url=url)
    if not isinstance(data, dict):
        raise DecodeError(f"expected JSON object, got {type(data).__name__}", url=url)
    return data


def parse_story(data: Any, url: str = "") -> Story:
    data = _expect_object(data, url)
    return Story(
        id=_field(data, "id", int, required=True, url=url),
        title=_field(data, "title", str, required=True, url=url),
        by=_field(data, "by", str, required=True, url=url),
        time=_field(data, "time", int, required=True, url=url),
        type=_field(data, "type", str, required=True, url=url),
        url=_field(data, "url", str, required=False, url=url),
        text=_field(data, "text", str, required=False, url=url),
        score=_field(data, "score", int, required=False, url=url),
        descendants=_field(data, "descendants", int, required=False, url=url),
        kids=_kids(data, url),
    )


def parse_comment(data: Any, url: str = "") -> Comment:
    data = _expect_object(data, url)
    return Comment(
        id=_field(data, "id", int, required=True, url=url),
        by=_field(data, "by", str, required=True, url=url),
        time=_field(data, "time", int, required=True, url=url),
        parent=_field(data, "parent", int, required=True, url=url),
        type=_field(data, "type", str, required=True, url=url),
        text=_field(data, "text", str, required=False, url=url),
        kids=_kids(data, url),
    )


class HNClient:
    """
    Fetch Hacker News items via the public Firebase JSON API:
    - Lists: /<category>stories.json
    - Items: /item/<id>.json

    Each call is one request plus decoding. Failures raise TransportError or
    DecodeError; the only retry is on HTTP 429 when `retries` > 1.
    """

    def __init__(
        self,
        log_callback=None,
        *,
        base_url: str = HN_API_BASE,
        timeout: float = HTTP_TIMEOUT,
        retries: int = HTTP_RETRIES,
        retry_backoff: float = RETRY_BACKOFF_SECONDS,
        min_request_interval: float = MIN_REQUEST_INTERVAL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._log = log_callback or (lambda msg, lvl="info": None)
        self.base_url = base_url.rstrip("/")
        self._retries = max(1, int(retries))
        self._retry_backoff = float(retry_backoff)
        self.client = httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            timeout=timeout,
            follow_redirects=True,
            limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
            transport=transport,
        )

        self._rate_lock = asyncio.Lock()
        self._last_request_time = 0.0
        self._min_interval = float(min_request_interval)

    async def close(self):
        await self.client.aclose()

    async def __aenter__(self) -> "HNClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def _rate_limit(self):
        if self._min_interval <= 0:
            return
        async with self._rate_lock:
            now = time.time()
            elapsed = now - self._last_request_time
            if elapsed < self._min_interval:
                await asyncio.sleep(self._min_interval - elapsed)
            self._last_request_time = time.time()

    async def _fetch_json(self, url: str) -> Any:
        resp = None
        for attempt in range(self._retries):
            await self._rate_limit()
            try:
                resp = await self.client.get(url)
            except httpx.HTTPError as e:
                raise TransportError(f"request failed: {e!r}", url=url) from e

            if resp.status_code == 429 and attempt < self._retries - 1:
                wait = self._retry_backoff * (attempt + 1)
                self._log(f"rate limited, sleep {wait:g}s then retry", "warning")
                await asyncio.sleep(wait)
                continue
            break

        if resp.status_code >= 400:
            raise TransportError(
                f"http {resp.status_code}: {url[:120]}",
                url=url,
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise DecodeError(f"invalid JSON body: {e}", url=url) from e

    def item_url(self, item_id: int) -> str:
        return f"{self.base_url}/item/{item_id}.json"

    # ---------------------------
    # Lists
    # ---------------------------

    async def fetch_story_ids(self, category: StoryCategory) -> List[int]:
        url = list_endpoint_url(category, self.base_url)
        data = await self._fetch_json(url)
        if data is None:
            return []
        if not isinstance(data, list) or not all(
            isinstance(x, int) and not isinstance(x, bool) for x in data
        ):
            raise DecodeError("expected a JSON array of story ids", url=url)
        self._log(f"{category.value}stories: {len(data)} ids")
        return data

    # ---------------------------
    # Items
    # ---------------------------

    async def fetch_story(self, story_id: int) -> Story:
        url = self.item_url(story_id)
        return parse_story(await self._fetch_json(url), url)

    async def fetch_comment(self, comment_id: int) -> Comment:
        url = self.item_url(comment_id)
        return parse_comment(await self._fetch_json(url), url)
