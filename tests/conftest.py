"""Shared fixtures: an in-memory HN API served through httpx.MockTransport."""

import json
import os

import httpx
import pytest
import pytest_asyncio

# Keep tests independent of a developer's .env
os.environ.setdefault("OPENAI_API_KEY", "sk-test-fake-key")
os.environ["MIN_REQUEST_INTERVAL"] = "0"

from hn_discussion_search.hn_client import HNClient  # noqa: E402

BASE = "https://hn.test/v0"


def make_story(story_id: int, title: str = "Untitled", by: str = "pg", **extra) -> dict:
    data = {"id": story_id, "title": title, "by": by, "time": 1700000000, "type": "story"}
    data.update(extra)
    return data


def make_comment(comment_id: int, parent: int, text: str = "nice", by: str = "dang", **extra) -> dict:
    data = {
        "id": comment_id,
        "parent": parent,
        "text": text,
        "by": by,
        "time": 1700000100,
        "type": "comment",
    }
    data.update(extra)
    return data


class FakeHN:
    """
    Route table for the fake API.

    `lists` maps category token -> id list, `items` maps id -> JSON payload,
    `failures` maps id -> httpx.Response (or exception) returned instead.
    Every requested path is recorded in `requests`.
    """

    def __init__(self):
        self.lists = {}
        self.items = {}
        self.failures = {}
        self.requests = []

    def add_story(self, story_id: int, title: str = "Untitled", **kw) -> dict:
        self.items[story_id] = make_story(story_id, title, **kw)
        return self.items[story_id]

    def add_comment(self, comment_id: int, parent: int, **kw) -> dict:
        self.items[comment_id] = make_comment(comment_id, parent, **kw)
        return self.items[comment_id]

    def item_requests(self):
        return [int(p.split("/")[-1][: -len(".json")]) for p in self.requests if "/item/" in p]

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append(path)
        name = path.rsplit("/", 1)[-1]
        if "/item/" in path:
            item_id = int(name[: -len(".json")])
            failure = self.failures.get(item_id)
            if isinstance(failure, Exception):
                raise failure
            if failure is not None:
                return failure
            return httpx.Response(200, content=json.dumps(self.items.get(item_id)))
        if name.endswith("stories.json"):
            token = name[: -len("stories.json")]
            if token in self.failures:
                failure = self.failures[token]
                if isinstance(failure, Exception):
                    raise failure
                return failure
            return httpx.Response(200, json=self.lists.get(token, []))
        return httpx.Response(404)


@pytest.fixture
def fake_hn():
    return FakeHN()


@pytest_asyncio.fixture
async def hn_client(fake_hn):
    client = HNClient(base_url=BASE, transport=httpx.MockTransport(fake_hn.handler))
    yield client
    await client.close()
