import asyncio
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple, TypeVar

from .categories import StoryCategory, resolve
from .config import (
    MAX_COMMENTS_PER_STORY,
    MAX_STORIES_TO_SEARCH,
    SEARCH_CONCURRENCY,
    SEARCH_TIMEOUT_SECONDS,
)
from .errors import DecodeError, NoResults, SearchTimeout, TransportError
from .hn_client import HNClient
from .matcher import matches, tokenize
from .models import Comment, SearchRequest, SearchResult, Story, StoryHit

T = TypeVar("T")


class DiscussionAggregator:
    """
    Scan a category's story list for stories matching a query and attach a
    small sample of top-level comments to each match.

    Work is bounded twice: at most `max_stories_to_search` stories are fetched
    per call, and the scan stops as soon as `max_results` matches are found.
    A story or comment that fails to fetch or decode is logged and skipped.
    Failures of the id-list request propagate.

    With `concurrency` > 1 stories are fetched in id-ordered windows of that
    size and a match's comments are fetched together; matches are still
    consumed in list order so the result is the same as a sequential scan.
    """

    def __init__(
        self,
        client: HNClient,
        log_callback=None,
        *,
        max_stories_to_search: int = MAX_STORIES_TO_SEARCH,
        max_comments_per_story: int = MAX_COMMENTS_PER_STORY,
        concurrency: int = SEARCH_CONCURRENCY,
        timeout: Optional[float] = SEARCH_TIMEOUT_SECONDS,
    ):
        self.client = client
        self._log = log_callback or (lambda msg, lvl="info": None)
        self.max_stories_to_search = max(0, int(max_stories_to_search))
        self.max_comments_per_story = max(0, int(max_comments_per_story))
        self.concurrency = max(1, int(concurrency))
        self.timeout = timeout
        self._sem = asyncio.Semaphore(self.concurrency)

    async def search(self, request: SearchRequest) -> SearchResult:
        category = resolve(request.story_type)
        if not self.timeout or self.timeout <= 0:
            return await self._search(request, category)
        try:
            return await asyncio.wait_for(self._search(request, category), self.timeout)
        except asyncio.TimeoutError:
            self._log(f"search '{request.query}' timed out after {self.timeout:g}s", "error")
            raise SearchTimeout(self.timeout) from None

    async def _search(self, request: SearchRequest, category: StoryCategory) -> SearchResult:
        story_ids = await self.client.fetch_story_ids(category)
        if not story_ids:
            self._log(f"{category.value}stories returned no ids", "warning")
            raise NoResults()

        terms = tokenize(request.query)
        result = SearchResult(query=request.query, category=category.value)
        candidates = story_ids[: self.max_stories_to_search]
        self._log(
            f"search '{request.query}' in {category.value}: "
            f"scanning {len(candidates)}/{len(story_ids)} stories"
        )

        pos = 0
        while pos < len(candidates) and len(result.hits) < request.max_results:
            window = candidates[pos : pos + self.concurrency]
            pos += len(window)
            result.stories_examined += len(window)

            stories = await self._gather(self._fetch_story_or_none, window)
            for story in stories:
                if story is None or not matches(story, terms):
                    continue
                comments = await self._fetch_comments(story)
                result.hits.append(StoryHit(story=story, comments=comments))
                self._log(f"match {story.id}: {story.title[:80]} (comments={len(comments)})")
                if len(result.hits) >= request.max_results:
                    break

        if not result.hits:
            self._log(f"no matches in {result.stories_examined} stories", "warning")
            raise NoResults()

        self._log(
            f"found {len(result.hits)} stories after examining {result.stories_examined}",
            "success",
        )
        return result

    async def _gather(
        self, fetch: Callable[[int], Awaitable[T]], ids: Sequence[int]
    ) -> List[T]:
        if len(ids) == 1 or self.concurrency == 1:
            return [await fetch(i) for i in ids]

        async def bounded(item_id: int) -> T:
            async with self._sem:
                return await fetch(item_id)

        return list(await asyncio.gather(*(bounded(i) for i in ids)))

    async def _fetch_story_or_none(self, story_id: int) -> Optional[Story]:
        try:
            return await self.client.fetch_story(story_id)
        except (TransportError, DecodeError) as e:
            self._log(f"failed to fetch story {story_id}: {e}", "warning")
            return None

    async def _fetch_comment_or_none(self, comment_id: int) -> Optional[Comment]:
        try:
            return await self.client.fetch_comment(comment_id)
        except (TransportError, DecodeError) as e:
            self._log(f"failed to fetch comment {comment_id}: {e}", "warning")
            return None

    async def _fetch_comments(self, story: Story) -> Tuple[Comment, ...]:
        kid_ids = list(story.kids[: self.max_comments_per_story])
        if not kid_ids:
            return ()
        fetched = await self._gather(self._fetch_comment_or_none, kid_ids)
        return tuple(c for c in fetched if c is not None)
