#!/usr/bin/env python3
import argparse
import asyncio
import json
import sys
from pathlib import Path

# Allow running without installing the package
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from hn_discussion_search.aggregator import DiscussionAggregator  # noqa: E402
from hn_discussion_search.config import (  # noqa: E402
    DEFAULT_MAX_RESULTS,
    SEARCH_CONCURRENCY,
    SEARCH_TIMEOUT_SECONDS,
)
from hn_discussion_search.errors import HNSearchError, NoResults  # noqa: E402
from hn_discussion_search.hn_agent import ask_hn_agent  # noqa: E402
from hn_discussion_search.hn_client import HNClient  # noqa: E402
from hn_discussion_search.models import SearchRequest  # noqa: E402
from hn_discussion_search.report import render_report  # noqa: E402


def parse_args():
    p = argparse.ArgumentParser(
        description="Search Hacker News stories by keyword and show their top comments."
    )
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--query", type=str, help="Search terms (a story matches if ANY term appears).")
    g.add_argument("--ask", type=str, help="Free-form question answered by the LLM agent using search_hn.")

    p.add_argument(
        "--story-type",
        type=str,
        default=None,
        choices=["top", "best", "new", "ask", "show", "job"],
        help="Story list to scan (default: top).",
    )
    p.add_argument("--max-results", type=int, default=DEFAULT_MAX_RESULTS, help="Max matching stories to return.")
    p.add_argument("--concurrency", type=int, default=SEARCH_CONCURRENCY, help="Parallel item fetches (1 = sequential).")
    p.add_argument("--timeout", type=float, default=SEARCH_TIMEOUT_SECONDS, help="Overall deadline in seconds (0 = none).")
    p.add_argument("--json", action="store_true", help="Print results as JSON instead of the text report.")
    p.add_argument("--quiet", action="store_true", help="Only print warnings and errors.")
    return p.parse_args()


async def main() -> int:
    args = parse_args()

    def log(msg: str, level: str = "info"):
        if args.quiet and level in ("info", "success"):
            return
        prefix = {"info": "[*]", "success": "[+]", "warning": "[!]", "error": "[x]"}.get(level, "[*]")
        print(f"{prefix} {msg}", file=sys.stderr)

    client = HNClient(log_callback=log)
    aggregator = DiscussionAggregator(
        client,
        log_callback=log,
        concurrency=args.concurrency,
        timeout=args.timeout,
    )

    try:
        if args.ask:
            reply = await ask_hn_agent(args.ask, aggregator=aggregator)
            for result in reply.searches:
                print(render_report(result))
            print(reply.answer)
            return 0

        request = SearchRequest(
            query=args.query,
            story_type=args.story_type,
            max_results=args.max_results,
        )
        result = await aggregator.search(request)
        if args.json:
            print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        else:
            print(render_report(result))
        return 0
    except NoResults as e:
        log(e.message, "warning")
        return 1
    except HNSearchError as e:
        log(f"{e.code}: {e.message}", "error")
        return 2
    finally:
        await client.close()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
