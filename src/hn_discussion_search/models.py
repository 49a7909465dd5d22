from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .config import DEFAULT_MAX_RESULTS
from .errors import InvalidRequest


@dataclass(frozen=True)
class Story:
    id: int
    title: str
    by: str
    time: int
    type: str = "story"
    url: Optional[str] = None
    text: Optional[str] = None
    score: Optional[int] = None
    descendants: Optional[int] = None  # number of comments
    kids: Tuple[int, ...] = ()


@dataclass(frozen=True)
class Comment:
    id: int
    by: str
    time: int
    parent: int
    type: str = "comment"
    text: Optional[str] = None  # absent for deleted/dead comments
    kids: Tuple[int, ...] = ()


@dataclass(frozen=True)
class StoryHit:
    story: Story
    comments: Tuple[Comment, ...] = ()


@dataclass
class SearchRequest:
    query: str
    story_type: Optional[str] = None
    max_results: int = DEFAULT_MAX_RESULTS

    def __post_init__(self):
        if not isinstance(self.query, str) or not self.query.strip():
            raise InvalidRequest("query must be a non-empty string")
        if self.story_type is not None and not isinstance(self.story_type, str):
            raise InvalidRequest("story_type must be a string")
        if isinstance(self.max_results, bool) or not isinstance(self.max_results, int):
            raise InvalidRequest("max_results must be an integer")
        if self.max_results < 1:
            raise InvalidRequest("max_results must be >= 1")

    @classmethod
    def from_tool_args(cls, args: Dict[str, Any]) -> "SearchRequest":
        """Build a request from the `search_hn` tool-call arguments."""
        if not isinstance(args, dict):
            raise InvalidRequest("tool arguments must be a JSON object")
        max_results = args.get("max_results")
        return cls(
            query=args.get("query") or "",
            story_type=args.get("story_type") or None,
            max_results=DEFAULT_MAX_RESULTS if max_results is None else max_results,
        )


@dataclass
class SearchResult:
    query: str
    category: str
    hits: List[StoryHit] = field(default_factory=list)
    stories_examined: int = 0

    def __len__(self) -> int:
        return len(self.hits)

    def __iter__(self) -> Iterator[Tuple[Story, Tuple[Comment, ...]]]:
        for hit in self.hits:
            yield hit.story, hit.comments

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "category": self.category,
            "stories_examined": self.stories_examined,
            "results": [
                {
                    "story": asdict(hit.story),
                    "comments": [asdict(c) for c in hit.comments],
                }
                for hit in self.hits
            ],
        }
