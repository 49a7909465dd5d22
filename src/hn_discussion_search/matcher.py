from typing import List, Sequence

from .models import Story


def tokenize(query: str) -> List[str]:
    return [t for t in (query or "").lower().split() if t]


def story_haystack(story: Story) -> str:
    return " ".join([story.title or "", story.text or "", story.by or ""]).lower()


def matches(story: Story, terms: Sequence[str]) -> bool:
    """
    True when ANY term is a substring of the story's title/text/author.

    OR across terms, case-insensitive, no tokenization: "rust" also matches
    "trust" and "Rustacean".
    """
    if not terms:
        return False
    haystack = story_haystack(story)
    return any(term.lower() in haystack for term in terms)
