from enum import Enum
from typing import Optional

from .config import HN_API_BASE
from .errors import InvalidCategory


class StoryCategory(str, Enum):
    TOP = "top"
    BEST = "best"
    NEW = "new"
    ASK = "ask"
    SHOW = "show"
    JOB = "job"

    @property
    def endpoint(self) -> str:
        return f"{self.value}stories.json"


_BY_TOKEN = {c.value: c for c in StoryCategory}


def resolve(token: Optional[str]) -> StoryCategory:
    """Map a story-type token to its category; absent/empty means top."""
    if token is None or token == "":
        return StoryCategory.TOP
    try:
        return _BY_TOKEN[token]
    except (KeyError, TypeError):
        raise InvalidCategory(str(token)) from None


def list_endpoint_url(category: StoryCategory, base_url: str = HN_API_BASE) -> str:
    return f"{base_url.rstrip('/')}/{category.endpoint}"
