import os

try:
    from dotenv import load_dotenv  # type: ignore

    load_dotenv()
except ModuleNotFoundError:
    pass


# OpenAI / LLM configuration (optional; only used by the agent mode)
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")


# Hacker News Firebase API (public, no auth)
HN_API_BASE = os.getenv("HN_API_BASE", "https://hacker-news.firebaseio.com/v0").rstrip("/")

# HTTP behaviour
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10.0"))
HTTP_RETRIES = max(1, int(os.getenv("HTTP_RETRIES", "1")))  # attempts per request; 1 = no retry
RETRY_BACKOFF_SECONDS = float(os.getenv("RETRY_BACKOFF_SECONDS", "2.0"))

# Rate limiting (dispatch interval seconds, 0 disables)
MIN_REQUEST_INTERVAL = float(os.getenv("MIN_REQUEST_INTERVAL", "0.0"))

# Search bounds
MAX_STORIES_TO_SEARCH = int(os.getenv("MAX_STORIES_TO_SEARCH", "100"))
MAX_COMMENTS_PER_STORY = int(os.getenv("MAX_COMMENTS_PER_STORY", "3"))
DEFAULT_MAX_RESULTS = int(os.getenv("DEFAULT_MAX_RESULTS", "5"))

# Concurrency / deadline
SEARCH_CONCURRENCY = max(1, int(os.getenv("SEARCH_CONCURRENCY", "1")))
SEARCH_TIMEOUT_SECONDS = float(os.getenv("SEARCH_TIMEOUT_SECONDS", "120.0"))
