from typing import Iterable, List, Sequence, Tuple

from .models import Comment, Story


WIDTH = 120
TITLE_MAX = 47


def truncate_title(title: str, limit: int = TITLE_MAX) -> str:
    if len(title) > limit:
        return f"{title[:limit]}..."
    return title


def _row(title, author, points, comments) -> str:
    return f"{title:<50} | {author:<15} | {points:<10} | {comments:<20}"


def render_report(results: Iterable[Tuple[Story, Sequence[Comment]]]) -> str:
    """
    Render search results as a summary table followed by a detailed view.

    Accepts a SearchResult or any iterable of (story, comments) pairs. The
    caller reports NoResults and other errors before rendering.
    """
    results = list(results)
    lines: List[str] = []

    lines.append("")
    lines.append(f"{' Hacker News Discussions ':-^{WIDTH}}")
    lines.append(_row("Title", "Author", "Points", "Comments"))
    lines.append("-" * WIDTH)
    for story, _comments in results:
        lines.append(
            _row(
                truncate_title(story.title),
                story.by,
                story.score if story.score is not None else 0,
                story.descendants if story.descendants is not None else 0,
            )
        )

    lines.append("")
    lines.append(f"{' Detailed Discussion View ':-^{WIDTH}}")

    for i, (story, comments) in enumerate(results, start=1):
        score = story.score if story.score is not None else 0
        lines.append("")
        lines.append(f"{i}. {story.title}")
        lines.append(f"By: {story.by} | Points: {score} | ID: {story.id}")
        if story.url is not None:
            lines.append(f"URL: {story.url}")
        if story.text is not None:
            lines.extend(["", "Text:", story.text, ""])

        if comments:
            lines.extend(["", "Top Comments:"])
            for j, comment in enumerate(comments, start=1):
                lines.extend(["", f"{i}.{j} by {comment.by}:"])
                body = comment.text if comment.text is not None else "[Comment text not available]"
                lines.extend([body, ""])
        lines.append("-" * WIDTH)

    return "\n".join(lines) + "\n"
