"""Category token resolution and list endpoint URLs."""

import pytest

from hn_discussion_search.categories import StoryCategory, list_endpoint_url, resolve
from hn_discussion_search.errors import InvalidCategory


@pytest.mark.parametrize("token", [None, "", "top"])
def test_absent_or_top_resolves_to_top(token):
    assert resolve(token) is StoryCategory.TOP


@pytest.mark.parametrize(
    "token,expected",
    [
        ("best", StoryCategory.BEST),
        ("new", StoryCategory.NEW),
        ("ask", StoryCategory.ASK),
        ("show", StoryCategory.SHOW),
        ("job", StoryCategory.JOB),
    ],
)
def test_known_tokens(token, expected):
    assert resolve(token) is expected


@pytest.mark.parametrize("token", ["jobs", "TOP", "polls", " top"])
def test_unknown_token_raises(token):
    with pytest.raises(InvalidCategory) as exc:
        resolve(token)
    assert exc.value.token == token
    assert exc.value.code == "invalid_category"


def test_endpoint_url():
    assert list_endpoint_url(StoryCategory.ASK, "https://x/v0/") == "https://x/v0/askstories.json"
    assert StoryCategory.JOB.endpoint == "jobstories.json"
