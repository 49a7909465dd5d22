import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from .aggregator import DiscussionAggregator
from .config import OPENAI_API_KEY, OPENAI_BASE_URL, OPENAI_MODEL
from .errors import HNSearchError
from .models import SearchRequest, SearchResult


TOOL_NAME = "search_hn"

SYSTEM_PROMPT = """You are a helpful Hacker News discussion assistant that can search and analyze HN discussions.
When asked about a topic, use the search_hn tool to find relevant discussions.
You can search different types of stories (top, best, new, ask, show, job).
When searching, consider using broader search terms and specify the story type when relevant.
For example, for Rust programming discussions you might search for "rust lang programming" in the "top" stories.
If a search finds nothing, try different terms or another story type before giving up.
Summarize what you found, citing story titles and ids.
"""

SEARCH_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": TOOL_NAME,
        "description": "Search for discussions on Hacker News",
        "parameters": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search query for HN stories",
                },
                "story_type": {
                    "type": "string",
                    "description": "Type of stories to search (top, best, new, ask, show, job)",
                    "enum": ["top", "best", "new", "ask", "show", "job"],
                },
                "max_results": {
                    "type": "integer",
                    "description": "Maximum number of stories to return (default: 5)",
                },
            },
            "required": ["query"],
        },
    },
}


@dataclass
class AgentReply:
    answer: str
    searches: List[SearchResult] = field(default_factory=list)


async def run_search_tool(
    aggregator: DiscussionAggregator,
    arguments: Union[str, Dict[str, Any], None],
) -> Tuple[str, Optional[SearchResult]]:
    """
    Execute one `search_hn` tool call.

    Returns the tool output string for the model and the SearchResult when
    the search succeeded. Search errors become an "error: ..." string so the
    model can retry with different terms.
    """
    if isinstance(arguments, str):
        try:
            arguments = json.loads(arguments or "{}")
        except json.JSONDecodeError as e:
            return f"error: invalid tool arguments ({e.msg})", None

    try:
        request = SearchRequest.from_tool_args(arguments or {})
        result = await aggregator.search(request)
    except HNSearchError as e:
        return f"error: {e.message}", None

    return json.dumps(result.to_dict(), ensure_ascii=False), result


def _assistant_message(message) -> Dict[str, Any]:
    return {
        "role": "assistant",
        "content": message.content,
        "tool_calls": [
            {
                "id": tc.id,
                "type": "function",
                "function": {"name": tc.function.name, "arguments": tc.function.arguments},
            }
            for tc in message.tool_calls
        ],
    }


async def ask_hn_agent(
    prompt: str,
    *,
    aggregator: DiscussionAggregator,
    client=None,
    model: str = OPENAI_MODEL,
    max_rounds: int = 4,
) -> AgentReply:
    """
    Let an OpenAI chat model answer `prompt`, calling search_hn as needed.
    `client` defaults to an AsyncOpenAI built from the OPENAI_* settings.
    """
    if client is None:
        try:
            from openai import AsyncOpenAI  # type: ignore
        except ModuleNotFoundError as e:
            raise ModuleNotFoundError(
                "Missing dependency 'openai'. Install requirements, or run with --query to skip the agent."
            ) from e

        if not OPENAI_API_KEY:
            raise RuntimeError("OPENAI_API_KEY is empty. Set env var or run with --query.")
        client = AsyncOpenAI(api_key=OPENAI_API_KEY, base_url=OPENAI_BASE_URL)

    reply = AgentReply(answer="")
    messages: List[Dict[str, Any]] = [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]

    for _ in range(max_rounds):
        resp = await client.chat.completions.create(
            model=model,
            messages=messages,
            tools=[SEARCH_TOOL],
            temperature=0.2,
        )
        message = resp.choices[0].message
        if not message.tool_calls:
            reply.answer = message.content or ""
            return reply

        messages.append(_assistant_message(message))
        for tc in message.tool_calls:
            if tc.function.name != TOOL_NAME:
                output = f"error: unknown tool {tc.function.name!r}"
            else:
                output, result = await run_search_tool(aggregator, tc.function.arguments)
                if result is not None:
                    reply.searches.append(result)
            messages.append({"role": "tool", "tool_call_id": tc.id, "content": output})

    raise RuntimeError(f"agent did not answer within {max_rounds} rounds")
